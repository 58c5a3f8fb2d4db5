"""
Propositional formula AST.

Nodes are immutable and hashable, two formulas are equal when they have the
same structure. Sub-formulas may be shared between several parents.

Node types:
    Literal: a named boolean variable (one per feature)
    Not, And, Or, Implies: connectives
    Tautology, Contradiction: constants
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Formula:
    """Base class of all formula nodes."""

    @property
    def children(self):
        return ()

    def _precedence(self):
        return 5


@dataclass(frozen=True)
class Literal(Formula):
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Tautology(Formula):
    def __str__(self):
        return "true"


@dataclass(frozen=True)
class Contradiction(Formula):
    def __str__(self):
        return "false"


@dataclass(frozen=True)
class Not(Formula):
    child: Formula

    @property
    def children(self):
        return (self.child,)

    def _precedence(self):
        return 4

    def __str__(self):
        return "!" + _wrap(self.child, self._precedence())


@dataclass(frozen=True, init=False)
class And(Formula):
    operands: Tuple[Formula, ...]

    def __init__(self, *operands):
        object.__setattr__(self, "operands", tuple(operands))

    @property
    def children(self):
        return self.operands

    def _precedence(self):
        return 3

    def __str__(self):
        if not self.operands:
            return "true"
        return " & ".join(_wrap(child, self._precedence() + 1) for child in self.operands)

    def __repr__(self):
        return f"And({', '.join(repr(child) for child in self.operands)})"


@dataclass(frozen=True, init=False)
class Or(Formula):
    operands: Tuple[Formula, ...]

    def __init__(self, *operands):
        object.__setattr__(self, "operands", tuple(operands))

    @property
    def children(self):
        return self.operands

    def _precedence(self):
        return 2

    def __str__(self):
        if not self.operands:
            return "false"
        return " | ".join(_wrap(child, self._precedence() + 1) for child in self.operands)

    def __repr__(self):
        return f"Or({', '.join(repr(child) for child in self.operands)})"


@dataclass(frozen=True)
class Implies(Formula):
    left: Formula
    right: Formula

    @property
    def children(self):
        return (self.left, self.right)

    def _precedence(self):
        return 1

    def __str__(self):
        # right associative
        return f"{_wrap(self.left, 2)} => {_wrap(self.right, 1)}"


def _wrap(formula, precedence):
    text = str(formula)
    if formula.children and formula._precedence() < precedence:
        return f"({text})"
    return text


def literals(formula):
    """Return the names of all literals in ``formula``, in order of first appearance."""
    names = {}
    stack = [formula]
    while stack:
        node = stack.pop()
        if isinstance(node, Literal):
            names.setdefault(node.name, None)
        else:
            stack.extend(reversed(node.children))
    return list(names)


def map_literals(formula, function):
    """Return ``formula`` with every literal replaced by ``function(literal)``."""
    rebuilt = []
    stack = [(formula, False)]
    while stack:
        node, expanded = stack.pop()
        if node.children and not expanded:
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(node.children))
            continue

        if isinstance(node, Literal):
            rebuilt.append(function(node))
        elif not node.children:
            rebuilt.append(node)
        else:
            start = len(rebuilt) - len(node.children)
            args = rebuilt[start:]
            del rebuilt[start:]
            rebuilt.append(type(node)(*args))
    return rebuilt[0]
