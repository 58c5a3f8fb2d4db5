"""
Tests for converting feature trees into formulas.
"""

from uvltree.builder import create_feature_tree
from uvltree.formula import And, Implies, Literal, Or, Tautology
from uvltree.model import Feature, FeatureModel
from uvltree.result import Problem
from uvltree.source import UVLFeature
from uvltree.traversal import traverse
from uvltree.tree import Range
from uvltree.visitor import FeatureTreeToFormulaVisitor, tree_to_formula

A, B, C = Literal("A"), Literal("B"), Literal("C")


def make_root(name="Root"):
    model = FeatureModel()
    return model, model.add_root(model.add_feature(name))


def add(model, parent, name, group_id=0, mandatory=False):
    child = parent.add_feature_below(model.add_feature(name), group_id)
    if mandatory:
        child.make_mandatory()
    return child


def lower(uvl_root):
    model = FeatureModel()
    return tree_to_formula(create_feature_tree(model, uvl_root))


class TestGroups:
    def test_alternative_group(self):
        """Root with an alternative group of three leaves."""
        root = UVLFeature("Root")
        group = root.add_group("alternative")
        for name in "ABC":
            group.add_feature(UVLFeature(name))
        result = lower(root)
        assert result.is_present()
        assert result.get() == And(Or(A), Or(B), Or(C))
        assert result.problems == []

    def test_or_group(self):
        root = UVLFeature("Root")
        group = root.add_group("or")
        group.add_feature(UVLFeature("A"))
        group.add_feature(UVLFeature("B"))
        assert lower(root).get() == Or(A, B)

    def test_and_group_keeps_only_mandatory_children(self):
        model, root = make_root()
        parent = add(model, root, "P", mandatory=True)
        add(model, parent, "A", mandatory=True)
        add(model, parent, "B")
        assert tree_to_formula(root).get() == And(And(Literal("P"), And(A)))

    def test_mandatory_and_optional_groups(self):
        root = UVLFeature("Root")
        root.add_group("mandatory").add_feature(UVLFeature("A"))
        root.add_group("optional").add_feature(UVLFeature("B"))
        assert lower(root).get() == And(A)

    def test_last_group_decides(self):
        """All children are combined by the type of the last group."""
        model, root = make_root()
        alternative = root.add_group(Range.exactly(1))
        or_group = root.add_group(Range.at_least(1))
        add(model, root, "A", alternative.id)
        add(model, root, "B", or_group.id)
        assert tree_to_formula(root).get() == Or(A, B)


class TestNodes:
    def test_mandatory_inner_node(self):
        model, root = make_root()
        parent = add(model, root, "P", mandatory=True)
        group = parent.add_group(Range.at_least(1))
        add(model, parent, "X", group.id)
        add(model, parent, "Y", group.id)
        expected = And(Literal("P"), Or(Literal("X"), Literal("Y")))
        assert tree_to_formula(root).get() == And(expected)

    def test_optional_inner_node(self):
        model, root = make_root()
        root_group = root.add_group(Range.at_least(1))
        parent = add(model, root, "P", root_group.id)
        group = parent.add_group(Range.at_least(1))
        add(model, parent, "X", group.id)
        add(model, parent, "Y", group.id)
        expected = Implies(Literal("P"), Or(Literal("X"), Literal("Y")))
        assert tree_to_formula(root).get() == Or(expected)

    def test_inner_node_with_only_optional_children(self):
        model, root = make_root()
        parent = add(model, root, "P", mandatory=True)
        add(model, parent, "X")
        assert tree_to_formula(root).get() == And(Literal("P"))

    def test_single_leaf_root(self):
        _, root = make_root()
        assert tree_to_formula(root).get() == Literal("Root")


class TestRoot:
    def test_root_is_not_wrapped(self):
        """The root formula is the children formula, without the root literal."""
        root = UVLFeature("Root")
        root.add_group("mandatory").add_feature(UVLFeature("A"))
        assert lower(root).get() == And(A)

    def test_root_with_only_optional_children(self):
        root = UVLFeature("Root")
        root.add_group("optional").add_feature(UVLFeature("B"))
        assert lower(root).get() == Tautology()


class TestProblems:
    def test_leaf_neither_optional_nor_mandatory(self):
        model, root = make_root()
        child = add(model, root, "C")
        child.set_feature_cardinality(Range.of(0, 5))
        result = tree_to_formula(root)
        assert result.is_empty()
        assert result.problems == [Problem("C is neither an optional nor a mandatory feature.")]

    def test_inner_node_neither_optional_nor_mandatory(self):
        model, root = make_root()
        parent = add(model, root, "P")
        parent.set_feature_cardinality(Range.of(2, 3))
        add(model, parent, "X", mandatory=True)
        result = tree_to_formula(root)
        assert result.is_empty()
        assert "P is neither" in result.problems[0].message

    def test_feature_without_name(self):
        model = FeatureModel()
        root = model.add_root(Feature(None))
        result = tree_to_formula(root)
        assert result.is_empty()
        assert result.problems == [Problem("Feature has no name")]

    def test_node_without_group(self):
        model, root = make_root()
        child = add(model, root, "X", mandatory=True)
        child.remove_group(0)
        result = tree_to_formula(root)
        assert result.is_empty()
        assert result.problems == [Problem("X has no group.")]

    def test_cardinality_group(self):
        model, root = make_root()
        group = root.add_group(Range.of(2, 3))
        add(model, root, "A", group.id)
        result = tree_to_formula(root)
        assert result.is_empty()
        assert result.problems == [Problem("Root has no group.")]

    def test_failure_discards_finished_siblings(self):
        root = UVLFeature("Root")
        group = root.add_group("or")
        group.add_feature(UVLFeature("A"))
        group.add_feature(UVLFeature("B", lower_bound="2", upper_bound="3"))
        result = lower(root)
        assert result.is_empty()
        assert len(result.problems) == 1

    def test_builder_cardinality_leaf(self):
        root = UVLFeature("Root")
        root.add_group("alternative").add_feature(UVLFeature("A", lower_bound="1"))
        result = lower(root)
        assert result.is_empty()
        assert result.problems == [Problem("A is neither an optional nor a mandatory feature.")]


class TestVisitor:
    def test_reuse_after_reset(self):
        model, root = make_root()
        add(model, root, "A", mandatory=True)
        visitor = FeatureTreeToFormulaVisitor()
        first = traverse(root, visitor)
        second = traverse(root, visitor)
        assert first.get() == second.get() == And(A)

    def test_reuse_after_failure(self):
        bad_model, bad_root = make_root()
        add(bad_model, bad_root, "C").set_feature_cardinality(Range.of(3, 4))
        model, root = make_root()
        add(model, root, "A", mandatory=True)
        visitor = FeatureTreeToFormulaVisitor()
        assert traverse(bad_root, visitor).is_empty()
        result = traverse(root, visitor)
        assert result.get() == And(A)
        assert result.problems == []

    def test_deep_tree(self):
        """Lowering does not recurse, deep trees are fine."""
        model, root = make_root("F0")
        node = root
        for i in range(1, 5000):
            node = add(model, node, f"F{i}", mandatory=True)
        result = tree_to_formula(root)
        assert result.is_present()
        formula = result.get()
        # root: And(F1 formula); F1: And(Literal F1, And(F2 formula)) ...
        assert formula.children[0].children[0] == Literal("F1")
