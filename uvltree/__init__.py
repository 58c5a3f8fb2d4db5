from uvltree.builder import create_feature_model, create_feature_tree
from uvltree.exceptions import AttributeTypeError, ParseError
from uvltree.formula import (
    And,
    Contradiction,
    Formula,
    Implies,
    Literal,
    Not,
    Or,
    Tautology,
    literals,
    map_literals,
)
from uvltree.main import UVL
from uvltree.model import Feature, FeatureModel, FeatureType
from uvltree.nchoosek import nchoosek
from uvltree.result import Problem, Result
from uvltree.source import UVLFeature, UVLFeatureModel, UVLGroup
from uvltree.tree import FeatureTree, Group, GroupType, Range
from uvltree.visitor import FeatureTreeToFormulaVisitor, tree_to_formula

__all__ = [
    "UVL",
    "create_feature_model",
    "create_feature_tree",
    "ParseError",
    "AttributeTypeError",
    "Formula",
    "Literal",
    "Not",
    "And",
    "Or",
    "Implies",
    "Tautology",
    "Contradiction",
    "literals",
    "map_literals",
    "Feature",
    "FeatureModel",
    "FeatureType",
    "FeatureTree",
    "Group",
    "GroupType",
    "Range",
    "nchoosek",
    "Problem",
    "Result",
    "UVLFeature",
    "UVLFeatureModel",
    "UVLGroup",
    "FeatureTreeToFormulaVisitor",
    "tree_to_formula",
]
