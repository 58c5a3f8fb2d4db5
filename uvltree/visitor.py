"""
Conversion of a feature tree into a propositional formula.
"""

import logging

from uvltree.formula import And, Implies, Literal, Or, Tautology
from uvltree.nchoosek import nchoosek
from uvltree.result import Problem, Result
from uvltree.traversal import TraversalAction, TreeVisitor, traverse

logger = logging.getLogger(__name__)


class FeatureTreeToFormulaVisitor(TreeVisitor):
    """Builds the formula of a feature tree bottom-up.

    The formula of each node is computed once all of its children are
    done; the formula of the root is the result. Problems are collected
    and returned with the result, which is empty if any node fails.

    A visitor keeps state for one traversal; ``traverse`` resets it first.
    """

    def __init__(self):
        self.reset()

    def reset(self):
        # formulas by node index
        self._formulas = []
        self._root_formula = None
        self._problems = []

    def get_result(self):
        if self._root_formula is None:
            return Result.empty(self._problems)
        return Result.of(self._root_formula, self._problems)

    def first_visit(self, path):
        if len(path) == 1:
            self._formulas = [None] * path[0].model.size
        return TraversalAction.CONTINUE

    def last_visit(self, path):
        node = path[-1]
        name = node.feature.name
        if not name:
            return self._fail("Feature has no name")

        if not node.groups:
            return self._fail(f"{name} has no group.")

        group = node.groups[-1]
        children = node.children

        if not children:
            if node.is_optional() or node.is_mandatory():
                formula = Literal(name)
            else:
                return self._fail(f"{name} is neither an optional nor a mandatory feature.")
        else:
            if group.is_alternative():
                children_formula = nchoosek(self._formulas_of(children), 1, False)
            elif group.is_or():
                children_formula = Or(*self._formulas_of(children))
            elif group.is_and():
                children_formula = And(
                    *self._formulas_of(child for child in children if child.is_mandatory())
                )
            else:
                return self._fail(f"{name} has no group.")

            if len(path) == 1:
                formula = children_formula if children_formula.children else Tautology()
            elif not children_formula.children:
                formula = Literal(name)
            elif node.is_optional():
                formula = Implies(Literal(name), children_formula)
            elif node.is_mandatory():
                formula = And(Literal(name), children_formula)
            else:
                return self._fail(f"{name} is neither an optional nor a mandatory feature.")

        self._formulas[node.index] = formula
        self._root_formula = formula
        return TraversalAction.CONTINUE

    def _formulas_of(self, nodes):
        return [self._formulas[node.index] for node in nodes]

    def _fail(self, message):
        logger.debug("Cannot convert feature tree: %s", message)
        self._problems.append(Problem(message))
        self._root_formula = None
        return TraversalAction.FAIL


def tree_to_formula(root):
    """Return the formula of the tree below ``root`` as a ``Result``."""
    return traverse(root, FeatureTreeToFormulaVisitor())
