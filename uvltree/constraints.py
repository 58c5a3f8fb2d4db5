"""
Cross-tree constraints.

Boolean UVL constraints are parsed with Lark into formulas. Arithmetic
constraints (comparisons over attributes) are recognized and left as text.
"""

import logging

from lark import Lark, Transformer
from lark.exceptions import LarkError

from uvltree.formula import And, Contradiction, Implies, Literal, Not, Or, Tautology, map_literals
from uvltree.result import Problem, Result, Severity

logger = logging.getLogger(__name__)

CONSTRAINT_GRAMMAR = r"""
?start: equivalence

?equivalence: implication
            | equivalence "<=>" implication -> equiv

?implication: disjunction
            | disjunction "=>" implication -> implies

?disjunction: conjunction
            | disjunction "|" conjunction -> or_

?conjunction: negation
            | conjunction "&" negation -> and_

?negation: "!" negation -> not_
         | atom

?atom: "true" -> true
     | "false" -> false
     | REFERENCE -> reference
     | QUOTED_REFERENCE -> quoted_reference
     | "(" equivalence ")"

REFERENCE: /[A-Za-z_][A-Za-z0-9_]*((\.|::)[A-Za-z_][A-Za-z0-9_]*)*/
QUOTED_REFERENCE: /"[^"]+"/

%import common.WS
%ignore WS
"""

BOOLEAN_OPERATORS = ("=>", "<=>")
ARITHMETIC_OPERATORS = ("==", "!=", "<=", ">=", "<", ">")


class ConstraintTransformer(Transformer):
    """Turns the constraint parse tree into a formula."""

    def equiv(self, items):
        left, right = items
        return And(Implies(left, right), Implies(right, left))

    def implies(self, items):
        left, right = items
        return Implies(left, right)

    def or_(self, items):
        left, right = items
        # flatten left-nested chains a | b | c
        if isinstance(left, Or):
            return Or(*left.children, right)
        return Or(left, right)

    def and_(self, items):
        left, right = items
        if isinstance(left, And):
            return And(*left.children, right)
        return And(left, right)

    def not_(self, items):
        return Not(items[0])

    def true(self, items):
        return Tautology()

    def false(self, items):
        return Contradiction()

    def reference(self, items):
        return Literal(str(items[0]))

    def quoted_reference(self, items):
        return Literal(str(items[0])[1:-1])


_parser = Lark(
    CONSTRAINT_GRAMMAR,
    parser="lalr",
    start="start",
    transformer=ConstraintTransformer(),
)


def is_arithmetic_constraint(constraint_text):
    """Return True for comparisons such as ``A.Price + B.Price < 10``."""
    has_boolean_op = any(op in constraint_text for op in BOOLEAN_OPERATORS)
    has_arithmetic_op = any(op in constraint_text for op in ARITHMETIC_OPERATORS)
    return has_arithmetic_op and not has_boolean_op


def parse_constraint(constraint_text):
    """Parse a boolean constraint into a formula.

    Returns an empty ``Result`` with a problem if the text cannot be parsed.
    """
    try:
        return Result.of(_parser.parse(constraint_text))
    except LarkError as e:
        return Result.empty([Problem(f"Could not parse constraint '{constraint_text}': {e}")])


def constraints_to_formulas(constraints):
    """Convert constraint texts to formulas, in order.

    Arithmetic constraints are skipped. Returns the formulas and the
    problems found on the way.
    """
    formulas = []
    problems = []
    for constraint_text in constraints:
        if is_arithmetic_constraint(constraint_text):
            logger.info("Ignoring arithmetic constraint: %s", constraint_text.strip())
            problems.append(
                Problem(f"Ignored arithmetic constraint '{constraint_text.strip()}'", Severity.INFO)
            )
            continue

        result = parse_constraint(constraint_text)
        if result.is_empty():
            for problem in result.problems:
                logger.warning("%s", problem.message)
            problems.extend(result.problems)
        else:
            logger.debug("Parsed constraint: %s", result.get())
            formulas.append(result.get())
    return formulas, problems


def resolve_references(formula, feature_names):
    """Point dotted references such as ``ns.A`` at the feature ``ns::A``.

    References that already name a feature, or that match no namespaced
    feature, are left as they are.
    """

    def resolve(literal):
        if literal.name in feature_names or "." not in literal.name:
            return literal
        namespace, _, name = literal.name.rpartition(".")
        qualified = f"{namespace}::{name}"
        return Literal(qualified) if qualified in feature_names else literal

    return map_literals(formula, resolve)
