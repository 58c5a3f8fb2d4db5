"""
Tests for the CNF export.
"""

import pytest

from uvltree.cnf import formula_to_clauses, formula_to_cnf
from uvltree.formula import And, Contradiction, Implies, Literal, Not, Or, Tautology
from uvltree.nchoosek import nchoosek

A, B, C = Literal("A"), Literal("B"), Literal("C")


def normalized(clauses):
    return sorted(sorted(clause) for clause in clauses)


class TestClauses:
    def test_implication(self):
        clauses = formula_to_clauses(And(A, Implies(B, C)), {"A": 1, "B": 2, "C": 3})
        assert normalized(clauses) == [[-2, 3], [1]]

    def test_singleton_disjunctions(self):
        clauses = formula_to_clauses(nchoosek([A, B, C], 1), {"A": 1, "B": 2, "C": 3})
        assert normalized(clauses) == [[1], [2], [3]]

    def test_negated_pairs(self):
        clauses = formula_to_clauses(nchoosek([A, B, C], 2, negated=True), {"A": 1, "B": 2, "C": 3})
        assert normalized(clauses) == [[-3, -2], [-3, -1], [-2, -1]]

    def test_single_literal(self):
        assert formula_to_clauses(Not(A), {"A": 1}) == [[-1]]

    def test_disjunction(self):
        assert normalized(formula_to_clauses(Or(A, B), {"A": 1, "B": 2})) == [[1, 2]]

    def test_constants(self):
        assert formula_to_clauses(Tautology(), {}) == []
        assert formula_to_clauses(Contradiction(), {}) == [[]]

    def test_missing_variable(self):
        with pytest.raises(ValueError, match="B"):
            formula_to_clauses(And(A, B), {"A": 1})

    def test_namespaced_names(self):
        clauses = formula_to_clauses(Implies(Literal("ns::A"), Literal("B")), {"ns::A": 1, "B": 2})
        assert normalized(clauses) == [[-1, 2]]


class TestCNF:
    def test_default_numbering(self):
        cnf = formula_to_cnf(And(B, Implies(A, C)))
        assert normalized(cnf.clauses) == [[-2, 3], [1]]
        assert cnf.comments == ["c 1 B", "c 2 A", "c 3 C"]
        assert cnf.nv == 3

    def test_given_numbering_keeps_unused_variables(self):
        cnf = formula_to_cnf(A, {"Root": 1, "A": 2, "B": 3})
        assert cnf.clauses == [[2]]
        assert cnf.nv == 3
        assert "c 3 B" in cnf.comments

    def test_nested_operands(self):
        formula = And(A, And(B, And(C)), Or(A, Or(B, Or())))
        clauses = formula_to_clauses(formula, {"A": 1, "B": 2, "C": 3})
        assert normalized(clauses) == [[1], [1, 2], [2], [3]]

    def test_deep_formula(self):
        chain = C
        for name in reversed(["A", "B"] * 1000):
            chain = And(Literal(name), chain)
        negations = A
        for _ in range(5000):
            negations = Not(negations)
        clauses = formula_to_clauses(And(chain, negations), {"A": 1, "B": 2, "C": 3})
        assert normalized(clauses) == [[1], [2], [3]]
