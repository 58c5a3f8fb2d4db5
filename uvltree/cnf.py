"""
CNF export of formulas.

Formulas are mapped onto sympy's boolean algebra, transformed with
``sympy.to_cnf`` and written into a ``pysat.formula.CNF``.
"""

import sympy
from pysat.formula import CNF

from uvltree.formula import And, Contradiction, Implies, Literal, Not, Or, Tautology, literals


def formula_to_sympy(formula, feature_symbols):
    """Convert ``formula`` into a sympy expression.

    ``feature_symbols`` maps literal names to sympy symbols; missing
    symbols are added to it. Nodes are converted children first with an
    explicit stack, and nested ``And``/``Or`` operands are spliced into
    their parent, so deeply nested formulas are fine.
    """
    converted = []
    stack = [(formula, None)]
    while stack:
        node, operands = stack.pop()
        if operands is None:
            operands = _operands(node)
            if operands:
                stack.append((node, operands))
                stack.extend((child, None) for child in reversed(operands))
                continue

        start = len(converted) - len(operands)
        args = converted[start:]
        del converted[start:]
        converted.append(_sympy_node(node, args, feature_symbols))
    return converted[0]


def _operands(node):
    if not isinstance(node, (And, Or)):
        return list(node.children)
    operands = []
    pending = list(reversed(node.children))
    while pending:
        child = pending.pop()
        if type(child) is type(node):
            pending.extend(reversed(child.children))
        else:
            operands.append(child)
    return operands


def _sympy_node(node, args, feature_symbols):
    if isinstance(node, Literal):
        if node.name not in feature_symbols:
            feature_symbols[node.name] = sympy.Symbol(node.name)
        return feature_symbols[node.name]
    if isinstance(node, Tautology):
        return sympy.true
    if isinstance(node, Contradiction):
        return sympy.false
    if isinstance(node, Not):
        return sympy.Not(*args)
    if isinstance(node, And):
        return sympy.And(*args)
    if isinstance(node, Or):
        return sympy.Or(*args)
    if isinstance(node, Implies):
        return sympy.Implies(*args)
    raise TypeError(f"unsupported formula node: {node!r}")


def formula_to_clauses(formula, feature_to_id):
    """Convert ``formula`` into a list of integer clauses.

    Raises:
        ValueError: if a literal has no id in ``feature_to_id``
    """
    missing = [name for name in literals(formula) if name not in feature_to_id]
    if missing:
        raise ValueError(f"no variable id for: {', '.join(missing)}")

    feature_symbols = {name: sympy.Symbol(name) for name in feature_to_id}
    expr = formula_to_sympy(formula, feature_symbols)
    cnf_expr = sympy.to_cnf(expr, simplify=False)
    symbol_to_id = {sym: feature_to_id[name] for name, sym in feature_symbols.items()}
    return _sympy_to_clauses(cnf_expr, symbol_to_id)


def formula_to_cnf(formula, feature_to_id=None):
    """Convert ``formula`` into a ``pysat.formula.CNF``.

    Variables are numbered by ``feature_to_id`` if given, otherwise in the
    order their literals first appear in the formula. Each variable gets a
    ``c <id> <name>`` comment.
    """
    if feature_to_id is None:
        feature_to_id = {name: i + 1 for i, name in enumerate(literals(formula))}

    cnf = CNF(from_clauses=formula_to_clauses(formula, feature_to_id))
    cnf.nv = max(cnf.nv, max(feature_to_id.values(), default=0))
    cnf.comments = [
        f"c {feature_id} {feature_name}"
        for feature_name, feature_id in feature_to_id.items()
    ]
    return cnf


def _sympy_to_clauses(expr, symbol_to_id):
    """Convert a sympy CNF expression to clauses."""
    if expr == sympy.true:
        return []
    if expr == sympy.false:
        return [[]]
    if expr.func == sympy.And:
        return [_parse_clause(clause, symbol_to_id) for clause in expr.args]
    return [_parse_clause(expr, symbol_to_id)]


def _parse_clause(clause, symbol_to_id):
    """Parse a sympy clause into literals."""
    if clause.func == sympy.Or:
        return [_parse_literal(lit, symbol_to_id) for lit in clause.args]
    return [_parse_literal(clause, symbol_to_id)]


def _parse_literal(lit, symbol_to_id):
    if lit.func == sympy.Not:
        return -symbol_to_id[lit.args[0]]
    return symbol_to_id[lit]
