"""
Parsed UVL model, as handed over by a UVL parser.

These classes mirror the structure of a ``.uvl`` file: features with
optional namespace, type, cardinality bounds and attributes, and groups of
child features. Bounds are kept as the strings found in the source.
"""

MANDATORY = "mandatory"
OPTIONAL = "optional"
ALTERNATIVE = "alternative"
OR = "or"
CARDINALITY = "cardinality"

GROUP_KINDS = (MANDATORY, OPTIONAL, ALTERNATIVE, OR, CARDINALITY)


class UVLGroup:
    def __init__(self, kind, lower_bound=None, upper_bound=None):
        self.kind = kind
        self.lower_bound = lower_bound
        self.upper_bound = upper_bound
        self.features = []
        self.parent_feature = None

    def add_feature(self, feature):
        feature.parent_group = self
        self.features.append(feature)
        return feature

    def __repr__(self):
        return f"UVLGroup({self.kind!r}, {[f.name for f in self.features]})"


class UVLFeature:
    def __init__(
        self,
        name,
        namespace=None,
        feature_type=None,
        lower_bound=None,
        upper_bound=None,
        attributes=None,
    ):
        self.name = name
        self.namespace = namespace
        self.feature_type = feature_type
        self.lower_bound = lower_bound
        self.upper_bound = upper_bound
        self.attributes = dict(attributes) if attributes else {}
        self.groups = []
        self.parent_group = None

    def add_group(self, kind, lower_bound=None, upper_bound=None):
        group = UVLGroup(kind, lower_bound, upper_bound)
        group.parent_feature = self
        self.groups.append(group)
        return group

    def __repr__(self):
        return f"UVLFeature({self.name!r})"


class UVLFeatureModel:
    def __init__(self, root_feature, constraints=()):
        self.root_feature = root_feature
        self.constraints = list(constraints)
