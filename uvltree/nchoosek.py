"""
Combinatorial clause generator.

``nchoosek`` builds the conjunction, over all size-k combinations of the
given formulas, of the disjunction of each combination. The result holds
exactly when every k-subset contains a satisfied formula, that is when
fewer than k of the formulas are unsatisfied.
"""

from math import comb

from uvltree.formula import And, Contradiction, Not, Or, Tautology


def nchoosek(elements, k, negated=False):
    """Return the conjunction of all k-element disjunctions over ``elements``.

    Combinations are enumerated in ascending index order, so the clause
    order is reproducible. With ``negated`` every element is wrapped in a
    ``Not`` first. ``k == 0`` and ``k == n + 1`` give a tautology, ``k < 0``
    and ``k > n + 1`` a contradiction.
    """
    n = len(elements)

    if k == 0 or k == n + 1:
        return Tautology()

    if k < 0 or k > n + 1:
        return Contradiction()

    if negated:
        elements = [Not(element) for element in elements]
    else:
        elements = list(elements)

    expected = comb(n, k)
    clauses = []

    clause = [None] * k
    index = [0] * k

    # position of the clause that is currently filled
    level = 0
    index[level] = -1

    while level >= 0:
        index[level] += 1
        # no element left for this level, backtrack
        if index[level] >= n - (k - 1 - level):
            level -= 1
        else:
            clause[level] = elements[index[level]]
            if level == k - 1:
                clauses.append(Or(*clause))
            else:
                level += 1
                # ascending indices only, no duplicate sets
                index[level] = index[level - 1]

    if len(clauses) != expected:
        raise RuntimeError(
            f"generated {len(clauses)} clauses, expected C({n}, {k}) = {expected}"
        )
    return And(*clauses)
