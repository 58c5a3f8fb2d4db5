"""
Features, attributes and the feature model that owns the feature tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from uvltree.exceptions import AttributeTypeError
from uvltree.tree import FeatureTree


class FeatureType(Enum):
    BOOLEAN = "Boolean"
    INTEGER = "Integer"
    REAL = "Real"
    STRING = "String"

    @property
    def python_type(self):
        return _PYTHON_TYPES[self]


_PYTHON_TYPES = {
    FeatureType.BOOLEAN: bool,
    FeatureType.INTEGER: int,
    FeatureType.REAL: float,
    FeatureType.STRING: str,
}

FEATURE_MODEL_NAMESPACE = "feature_model"


@dataclass(frozen=True)
class Attribute:
    """An attribute key with the type of the values it accepts."""

    namespace: Optional[str]
    name: str
    value_type: type

    @property
    def key(self):
        return self.name if self.namespace is None else f"{self.namespace}:{self.name}"

    def cast(self, value):
        """Return ``value`` if it has exactly the declared type."""
        if type(value) is not self.value_type:
            raise AttributeTypeError(
                f"attribute {self.key} expects {self.value_type.__name__}, "
                f"got {type(value).__name__}: {value!r}"
            )
        return value


ABSTRACT = Attribute(FEATURE_MODEL_NAMESPACE, "abstract", bool)
HIDDEN = Attribute(FEATURE_MODEL_NAMESPACE, "hidden", bool)


class AttributeRegistry:
    """Hands out one attribute per (namespace, name) within a feature model."""

    def __init__(self):
        self._attributes = {}
        for attribute in (ABSTRACT, HIDDEN):
            self._attributes[(attribute.namespace, attribute.name)] = attribute

    def get(self, namespace, name, value_type):
        attribute = self._attributes.get((namespace, name))
        if attribute is None:
            attribute = Attribute(namespace, name, value_type)
            self._attributes[(namespace, name)] = attribute
        elif attribute.value_type is not value_type:
            raise AttributeTypeError(
                f"attribute {attribute.key} is already declared as "
                f"{attribute.value_type.__name__}, not {value_type.__name__}"
            )
        return attribute

    def __contains__(self, key):
        return key in self._attributes

    def __len__(self):
        return len(self._attributes)


class Feature:
    """A named configuration option."""

    def __init__(self, name, feature_type=FeatureType.BOOLEAN):
        self.name = name
        self.type = feature_type
        self.attributes = {}

    @property
    def abstract(self):
        return self.attributes.get(ABSTRACT, False)

    @property
    def hidden(self):
        return self.attributes.get(HIDDEN, False)

    def set_abstract(self, abstract=True):
        self.set_attribute_value(ABSTRACT, abstract)

    def set_hidden(self, hidden=True):
        self.set_attribute_value(HIDDEN, hidden)

    def set_type(self, feature_type):
        self.type = feature_type

    def set_attribute_value(self, attribute, value):
        self.attributes[attribute] = attribute.cast(value)

    def get_attribute_value(self, attribute, default=None):
        return self.attributes.get(attribute, default)

    def __repr__(self):
        return f"Feature({self.name!r}, {self.type.name})"


class FeatureModel:
    """Owns the features, the node arena of the feature tree and the constraints."""

    def __init__(self):
        self.root = None
        self.nodes = []
        self.features = {}
        self.attributes = AttributeRegistry()
        self.constraints = []
        self.problems = []

    @property
    def size(self):
        return len(self.nodes)

    def add_feature(self, name, feature_type=FeatureType.BOOLEAN):
        if name in self.features:
            raise ValueError(f"feature {name} already exists")
        feature = Feature(name, feature_type)
        self.features[name] = feature
        return feature

    def add_root(self, feature):
        if self.root is not None:
            raise ValueError("feature model already has a root")
        self.root = self._new_node(feature)
        return self.root

    def add_constraint(self, formula):
        self.constraints.append(formula)

    def get_node(self, index):
        return self.nodes[index]

    def _new_node(self, feature):
        node = FeatureTree(feature, len(self.nodes), self)
        self.nodes.append(node)
        return node
