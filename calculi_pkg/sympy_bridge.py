"""Conversion of expression trees to SymPy for rendering and cross-checking."""

from __future__ import annotations

import sympy as sp

from .expression import Expression, Function, Number, Variable
from .operators import Operator

_UNARY = {
    Operator.SIN: sp.sin,
    Operator.COS: sp.cos,
    Operator.TAN: sp.tan,
    Operator.SEC: sp.sec,
    Operator.CSC: sp.csc,
    Operator.COT: sp.cot,
    Operator.ABS: sp.Abs,
    Operator.FLOOR: sp.floor,
    Operator.CEIL: sp.ceiling,
    Operator.ROUND: sp.Function("round"),
    Operator.EXP: sp.exp,
    Operator.LN: sp.log,
    Operator.SQRT: sp.sqrt,
}


def _fmod(a: sp.Expr, b: sp.Expr) -> sp.Expr:
    # sp.Mod takes the sign of the divisor; the evaluator's % takes the dividend's
    return sp.sign(a) * sp.Mod(sp.Abs(a), sp.Abs(b))


_BINARY = {
    Operator.ADD: lambda a, b: sp.Add(a, b),
    Operator.SUBTRACT: lambda a, b: sp.Add(a, -b),
    Operator.MULTIPLY: lambda a, b: sp.Mul(a, b),
    Operator.DIVIDE: lambda a, b: sp.Mul(a, sp.Pow(b, -1)),
    Operator.MODULO: _fmod,
    Operator.EXPONENT: sp.Pow,
    Operator.POW: sp.Pow,
    Operator.LOG: sp.log,
    Operator.ROOT: sp.root,
}


def _number(value) -> sp.Expr:
    as_float = float(value)
    if as_float.is_integer():
        return sp.Integer(int(as_float))
    return sp.Float(as_float)


def to_sympy(expr: Expression) -> sp.Expr:
    """Convert ``expr`` to an equivalent SymPy expression.

    Raises:
        ValueError: If the tree contains ``End``, ``error(...)`` or an operator
            with the wrong number of operands.
    """
    if isinstance(expr, Variable):
        return sp.Symbol(expr.name)
    if isinstance(expr, Number):
        return _number(expr.value)
    if isinstance(expr, Function):
        args = [to_sympy(operand) for operand in expr.operands]
        operator = expr.operator
        if operator is Operator.MAX:
            return sp.Max(*args)
        if operator is Operator.MIN:
            return sp.Min(*args)
        if len(args) == 1 and operator in _UNARY:
            return _UNARY[operator](args[0])
        if len(args) == 2 and operator in _BINARY:
            return _BINARY[operator](*args)
        raise ValueError(
            f"Cannot convert {operator.symbol}() with {len(args)} operand(s) to SymPy"
        )
    raise ValueError("Cannot convert an empty expression to SymPy")


def to_latex(expr: Expression) -> str:
    return sp.latex(to_sympy(expr))
