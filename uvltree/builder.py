"""
Conversion of a parsed UVL model into a feature model and feature tree.
"""

import logging
import re

from uvltree import source
from uvltree.constraints import constraints_to_formulas, resolve_references
from uvltree.exceptions import ParseError
from uvltree.model import ABSTRACT, HIDDEN, FeatureModel, FeatureType
from uvltree.tree import Range

logger = logging.getLogger(__name__)

# a colon that is neither preceded nor followed by another colon
_SEPARATOR = re.compile(r"(?<!:):(?!:)")
_ESCAPED_SEPARATOR = re.compile(r":(:+)")

_BUILTIN_ATTRIBUTES = {
    ABSTRACT.name: ABSTRACT,
    HIDDEN.name: HIDDEN,
}


def create_feature_model(uvl_model):
    """Convert a parsed UVL model into a feature model.

    The feature tree is built from the model's root feature. Boolean
    constraints are converted to formulas, with dotted references resolved
    to namespaced features; constraints that cannot be converted are
    logged and left out.

    Raises:
        ParseError: if the feature hierarchy is malformed
    """
    feature_model = FeatureModel()
    create_feature_tree(feature_model, uvl_model.root_feature)

    formulas, problems = constraints_to_formulas(uvl_model.constraints)
    for formula in formulas:
        feature_model.add_constraint(resolve_references(formula, feature_model.features))
    feature_model.problems = problems

    return feature_model


def create_feature_tree(feature_model, root_uvl_feature):
    """Build the feature tree of ``feature_model`` below ``root_uvl_feature``.

    Returns the root node. If a ParseError is raised, ``feature_model`` is
    left half built and must be discarded; ``create_feature_model`` never
    hands such a model out.

    Raises:
        ParseError: on an unknown group kind, an unknown feature type, a
            malformed attribute key, a malformed cardinality bound or a
            duplicate feature name
    """
    root_feature = create_feature(feature_model, root_uvl_feature)
    root = feature_model.add_root(root_feature)

    feature_stack = [root_uvl_feature]
    tree_stack = [root]

    while feature_stack:
        uvl_feature = feature_stack.pop()
        tree = tree_stack.pop()

        tree.set_feature_cardinality(_feature_cardinality(uvl_feature))

        for group in uvl_feature.groups:
            group_id = tree.add_group(_group_range(group)).id
            for child_uvl_feature in group.features:
                child = create_feature(feature_model, child_uvl_feature)
                feature_stack.append(child_uvl_feature)
                tree_stack.append(tree.add_feature_below(child, group_id))

    return root


def _feature_cardinality(uvl_feature):
    parent_group = uvl_feature.parent_group
    if parent_group is not None and parent_group.kind == source.MANDATORY:
        return Range.exactly(1)
    if parent_group is not None and parent_group.kind == source.OPTIONAL:
        return Range.of(0, 1)
    if uvl_feature.lower_bound is not None:
        lower = _parse_bound(uvl_feature.lower_bound, uvl_feature.name, unbounded=False)
        if uvl_feature.upper_bound is not None:
            upper = _parse_bound(uvl_feature.upper_bound, uvl_feature.name)
            return _bounded_range(lower, upper, uvl_feature.name)
        return Range.at_least(lower)
    if uvl_feature.upper_bound is not None:
        return Range.at_most(_parse_bound(uvl_feature.upper_bound, uvl_feature.name))
    return Range.at_most(1)


def _group_range(group):
    if group.kind in (source.MANDATORY, source.OPTIONAL):
        return Range.at_least(0)
    if group.kind == source.ALTERNATIVE:
        return Range.exactly(1)
    if group.kind == source.OR:
        return Range.at_least(1)
    if group.kind == source.CARDINALITY:
        context = f"group cardinality of {group.parent_feature.name if group.parent_feature else '?'}"
        lower = _parse_bound(group.lower_bound, context, unbounded=False)
        upper = None if group.upper_bound is None else _parse_bound(group.upper_bound, context)
        return _bounded_range(lower, upper, context)
    raise ParseError(f"unrecognized group kind: {group.kind}")


def _bounded_range(lower, upper, context):
    if upper is not None and upper < lower:
        raise ParseError(f"invalid bounds [{lower}..{upper}] in {context}")
    return Range.of(lower, upper)


def _parse_bound(bound, context, unbounded=True):
    if bound == "*" and unbounded:
        return None
    try:
        value = int(bound)
    except (TypeError, ValueError):
        raise ParseError(f"invalid bound {bound!r} in {context}") from None
    if value < 0:
        raise ParseError(f"negative bound {bound!r} in {context}")
    return value


def create_feature(feature_model, uvl_feature):
    """Create the feature for ``uvl_feature`` in ``feature_model``."""
    name = get_name(uvl_feature)
    if name in feature_model.features:
        raise ParseError(f"duplicate feature name: {name}")
    feature = feature_model.add_feature(name)
    feature.set_abstract(get_attribute_value(uvl_feature, "abstract", False))

    for key, value in uvl_feature.attributes.items():
        if value is None:
            raise ParseError(f"attribute {key} of {feature.name} has no value")

        attribute = _BUILTIN_ATTRIBUTES.get(key)
        if attribute is None:
            namespace, name = split_attribute_key(key)
            attribute = feature_model.attributes.get(namespace, name, type(value))
        feature.set_attribute_value(attribute, value)

    feature.set_type(get_feature_type(uvl_feature))
    logger.debug("Created feature %s (%s)", feature.name, feature.type.name)
    return feature


def split_attribute_key(key):
    """Split an attribute key into namespace and name.

    ``ns:name`` has the namespace ``ns``; ``a::b`` is the plain name
    ``a:b``. Returns ``(None, name)`` for keys without namespace.

    Raises:
        ParseError: if the key has more than one separator
    """
    parts = _SEPARATOR.split(key)
    if len(parts) > 2:
        raise ParseError(f"invalid attribute key: {key}")
    if len(parts) == 2:
        return _unescape_separator(parts[0]), _unescape_separator(parts[1])
    return None, _unescape_separator(key)


def _unescape_separator(name):
    return _ESCAPED_SEPARATOR.sub(r"\1", name)


def get_feature_type(uvl_feature):
    if uvl_feature.feature_type is None:
        return FeatureType.BOOLEAN
    try:
        return FeatureType(uvl_feature.feature_type)
    except ValueError:
        raise ParseError(f"unrecognized feature type: {uvl_feature.feature_type}") from None


def get_name(uvl_feature):
    """Return ``namespace::name``, or just the name if there is no namespace."""
    namespace = uvl_feature.namespace
    if namespace is not None and namespace.strip():
        return f"{namespace}::{uvl_feature.name}"
    return uvl_feature.name


def get_attribute_value(uvl_feature, key, default):
    value = uvl_feature.attributes.get(key)
    return default if value is None else value
