"""Identity-based algebraic simplification.

The same rule table runs inline while parsing and as a standalone pass over
finished trees (the raw output of differentiation is full of ``* 1`` and
``+ 0`` terms).
"""

from __future__ import annotations

from enum import Enum

from .expression import Expression, Function, Number, create_binary
from .operators import Operator


class Simplified(Enum):
    LEFT = "left"
    RIGHT = "right"
    NONE = "none"


_TABLE_OPERATORS = frozenset(
    {
        Operator.ADD,
        Operator.SUBTRACT,
        Operator.MULTIPLY,
        Operator.EXPONENT,
        Operator.DIVIDE,
    }
)


def _is(expr: Expression, value: float) -> bool:
    number = expr.to_float()
    return number is not None and number == value


def simplify_binary(
    operator: Operator, left: Expression, right: Expression
) -> Simplified | Expression:
    """Check one binary node against the identity table.

    Only literal numbers take part; a symbolic side is never assumed to be
    0 or 1.

    Returns:
        ``Simplified.LEFT`` / ``Simplified.RIGHT`` to keep one operand, a
        replacement expression, or ``Simplified.NONE``.
    """
    if operator is Operator.MULTIPLY or operator is Operator.EXPONENT:
        if _is(left, 0):
            # 0 * x, 0 ^ x
            return Number(0)
        if _is(right, 0):
            # x * 0 -> 0, x ^ 0 -> 1
            return Number(0) if operator is Operator.MULTIPLY else Number(1)
        if _is(left, 1):
            # 1 * x -> x, 1 ^ x -> 1
            return Simplified.RIGHT if operator is Operator.MULTIPLY else Number(1)
        if _is(right, 1):
            return Simplified.LEFT
    elif operator is Operator.ADD or operator is Operator.SUBTRACT:
        if operator is Operator.ADD and _is(left, 0):
            return Simplified.RIGHT
        if _is(right, 0):
            return Simplified.LEFT
    elif operator is Operator.DIVIDE and _is(right, 1):
        return Simplified.LEFT
    return Simplified.NONE


def combine(operator: Operator, left: Expression, right: Expression) -> Expression:
    """Build ``left <operator> right``, collapsing it through the identity table."""
    outcome = simplify_binary(operator, left, right)
    if outcome is Simplified.LEFT:
        return left
    if outcome is Simplified.RIGHT:
        return right
    if isinstance(outcome, Expression):
        return outcome
    return create_binary(operator, left, right)


def simplify(expr: Expression) -> Expression:
    """Apply the identity table bottom-up over the whole tree."""
    if not isinstance(expr, Function):
        return expr
    operands = tuple(simplify(operand) for operand in expr.operands)
    if expr.operator in _TABLE_OPERATORS and len(operands) == 2:
        return combine(expr.operator, *operands)
    return Function(expr.operator, operands)
