"""Variable substitution and constant folding.

Evaluation never fails: subtrees that cannot be folded (unbound variables,
unknown operators, wrong operand counts) are rebuilt with their evaluated
operands and returned as they are.
"""

from __future__ import annotations

from typing import Callable, Iterable, Mapping, Union

import numpy as np

from .expression import End, Expression, Function, Number, Variable
from .operators import Operator

Bindings = Union[Mapping[str, float], Iterable[tuple[str, float]], None]


def _round_half_away(value: np.float64) -> np.float64:
    return np.copysign(np.floor(np.abs(value) + 0.5), value)


UNARY_RULES: Mapping[Operator, Callable[[np.float64], np.float64]] = {
    Operator.SIN: np.sin,
    Operator.COS: np.cos,
    Operator.TAN: np.tan,
    Operator.SEC: lambda x: 1.0 / np.cos(x),
    Operator.CSC: lambda x: 1.0 / np.sin(x),
    Operator.COT: lambda x: 1.0 / np.tan(x),
    Operator.ABS: np.abs,
    Operator.FLOOR: np.floor,
    Operator.ROUND: _round_half_away,
    Operator.CEIL: np.ceil,
    Operator.EXP: np.exp,
    Operator.LN: np.log,
    Operator.SQRT: np.sqrt,
}

BINARY_RULES: Mapping[Operator, Callable[[np.float64, np.float64], np.float64]] = {
    Operator.ADD: np.add,
    Operator.SUBTRACT: np.subtract,
    Operator.MULTIPLY: np.multiply,
    Operator.DIVIDE: np.divide,
    Operator.MODULO: np.fmod,
    Operator.EXPONENT: np.power,
    Operator.POW: np.power,
    Operator.LOG: lambda x, base: np.log(x) / np.log(base),
    Operator.ROOT: lambda x, degree: np.power(x, 1.0 / degree),
}


def normalize_bindings(bindings: Bindings) -> dict[str, np.float32]:
    """Accept a mapping or ``(name, value)`` pairs; values become float32."""
    if bindings is None:
        return {}
    items = bindings.items() if isinstance(bindings, Mapping) else bindings
    return {name: np.float32(value) for name, value in items}


def fold_extreme(operator: Operator, values: list[np.float32]) -> np.float32:
    """Running max/min; an operand replaces the current one only when strictly better."""
    best = values[0]
    for value in values[1:]:
        if operator is Operator.MAX and value > best:
            best = value
        elif operator is Operator.MIN and value < best:
            best = value
    return best


def apply_function(operator: Operator, operands: tuple[Expression, ...]) -> Number | None:
    """Fold ``operator`` over all-numeric operands, or ``None`` when it cannot."""
    values = [operand.to_float() for operand in operands]
    if not values or any(value is None for value in values):
        return None

    if operator is Operator.MAX or operator is Operator.MIN:
        return Number(fold_extreme(operator, values))

    with np.errstate(all="ignore"):
        if len(values) == 1 and operator in UNARY_RULES:
            return Number(UNARY_RULES[operator](np.float64(values[0])))
        if len(values) == 2 and operator in BINARY_RULES:
            left, right = (np.float64(value) for value in values)
            return Number(BINARY_RULES[operator](left, right))
    return None


def _evaluate(expr: Expression, bindings: Mapping[str, np.float32]) -> Expression:
    if isinstance(expr, Variable):
        if expr.name in bindings:
            return Number(bindings[expr.name])
        return expr
    if isinstance(expr, Number):
        return expr
    if isinstance(expr, Function):
        operands = tuple(_evaluate(operand, bindings) for operand in expr.operands)
        folded = apply_function(expr.operator, operands)
        if folded is not None:
            return folded
        return Function(expr.operator, operands)
    return End()


def evaluate(expr: Expression, bindings: Bindings = None) -> Expression:
    """Substitute ``bindings`` into ``expr`` and fold every constant subtree."""
    return _evaluate(expr, normalize_bindings(bindings))
