from uvltree.builder import create_feature_model
from uvltree.cnf import formula_to_cnf
from uvltree.constraints import is_arithmetic_constraint
from uvltree.formula import And
from uvltree.result import Result
from uvltree.traversal import traverse
from uvltree.visitor import FeatureTreeToFormulaVisitor


class UVL:
    """UVL feature model converter: feature tree, formula and CNF."""

    def __init__(self, from_model=None):
        if from_model is None:
            raise ValueError("from_model parameter is required")

        self._source = from_model
        self._feature_model = create_feature_model(from_model)

    @property
    def feature_model(self):
        return self._feature_model

    @property
    def root(self):
        return self._feature_model.root

    @property
    def features(self):
        """Feature names in the order their nodes were created."""
        return [node.feature.name for node in self._feature_model.nodes]

    @property
    def constraints(self):
        return self.boolean_constraints + self.arithmetic_constraints

    @property
    def boolean_constraints(self):
        """Boolean constraints convertible to formulas."""
        return [c for c in self._source.constraints if not is_arithmetic_constraint(c)]

    @property
    def arithmetic_constraints(self):
        """Arithmetic constraints not convertible to formulas."""
        return [c for c in self._source.constraints if is_arithmetic_constraint(c)]

    @property
    def constraint_problems(self):
        return self._feature_model.problems

    def to_formula(self):
        """Formula of the feature tree and the boolean constraints."""
        result = traverse(self.root, FeatureTreeToFormulaVisitor())
        if result.is_empty() or not self._feature_model.constraints:
            return result
        return Result.of(And(result.get(), *self._feature_model.constraints), result.problems)

    def to_cnf(self, verbose_info=True):
        """Convert feature model to CNF.

        Raises:
            ValueError: if the feature tree cannot be converted to a formula
        """
        formula = self.to_formula().get()
        feature_to_id = {feature: i + 1 for i, feature in enumerate(self.features)}

        if verbose_info and self.arithmetic_constraints:
            print(
                f"Info: Ignored {len(self.arithmetic_constraints)} arithmetic constraints"
            )

        return formula_to_cnf(formula, feature_to_id)
