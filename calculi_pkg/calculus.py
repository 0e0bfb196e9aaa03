"""Symbolic differentiation.

``derive`` differentiates with respect to every variable in the tree at once
(a total derivative); substitute the other variables first to get a partial
derivative. Operators without a rule produce ``End``, which spreads to the
whole result. The raw output is verbose and meant to be passed through
``simplifier.simplify``.
"""

from __future__ import annotations

from .expression import (
    End,
    Expression,
    Function,
    Number,
    Variable,
    create_binary,
    create_unary,
)
from .logging_config import get_logger
from .operators import Operator

logger = get_logger("calculus")

ADD = Operator.ADD
SUB = Operator.SUBTRACT
MUL = Operator.MULTIPLY
DIV = Operator.DIVIDE
EXP = Operator.EXPONENT


def chain(outer: Expression, inner: Expression) -> Expression:
    """Chain rule: ``outer * derive(inner)``."""
    return create_binary(MUL, outer, derive(inner))


def _negate(expr: Expression) -> Expression:
    return create_binary(MUL, Number(-1), expr)


def _derive_power(expr: Function) -> Expression:
    base, exponent = expr.operands
    power = exponent.to_float()
    if power is not None:
        # x ^ n
        return chain(
            create_binary(MUL, Number(power), create_binary(EXP, base, Number(power - 1))),
            base,
        )
    if base.to_float() is not None:
        # c ^ x
        return create_binary(
            MUL, create_binary(MUL, expr, create_unary(Operator.LN, base)), derive(exponent)
        )
    # x ^ x, logarithmic differentiation
    return create_binary(
        MUL,
        expr,
        create_binary(
            ADD,
            create_binary(MUL, derive(exponent), create_unary(Operator.LN, base)),
            create_binary(MUL, exponent, create_binary(DIV, derive(base), base)),
        ),
    )


def _derive_function(expr: Function) -> Expression:
    operator = expr.operator
    values = expr.operands

    if len(values) == 2:
        left, right = values
        if operator is ADD or operator is SUB:
            return create_binary(operator, derive(left), derive(right))
        if operator is MUL:
            return create_binary(ADD, chain(left, right), chain(right, left))
        if operator is DIV:
            return create_binary(
                DIV,
                create_binary(
                    SUB,
                    create_binary(MUL, derive(left), right),
                    create_binary(MUL, left, derive(right)),
                ),
                create_binary(EXP, right, Number(2)),
            )
        if operator is EXP or operator is Operator.POW:
            return _derive_power(expr)
        if operator is Operator.LOG:
            return create_binary(
                DIV,
                derive(left),
                create_binary(MUL, create_unary(Operator.LN, right), left),
            )

    if len(values) == 1:
        x = values[0]
        if operator is Operator.LN:
            return create_binary(DIV, derive(x), x)
        if operator is Operator.EXP:
            return chain(expr, x)
        if operator is Operator.SQRT:
            return chain(create_binary(DIV, Number(1), create_binary(MUL, Number(2), expr)), x)
        if operator is Operator.SIN:
            return chain(create_unary(Operator.COS, x), x)
        if operator is Operator.COS:
            return chain(_negate(create_unary(Operator.SIN, x)), x)
        if operator is Operator.TAN:
            return chain(create_binary(EXP, create_unary(Operator.SEC, x), Number(2)), x)
        if operator is Operator.SEC:
            return chain(
                create_binary(MUL, create_unary(Operator.SEC, x), create_unary(Operator.TAN, x)),
                x,
            )
        if operator is Operator.CSC:
            return chain(
                _negate(
                    create_binary(
                        MUL, create_unary(Operator.CSC, x), create_unary(Operator.COT, x)
                    )
                ),
                x,
            )
        if operator is Operator.COT:
            return chain(
                _negate(create_binary(EXP, create_unary(Operator.CSC, x), Number(2))), x
            )

    logger.debug("No derivative rule for %s with %d operand(s)", operator.name, len(values))
    return End()


def derive(expr: Expression) -> Expression:
    """Derivative of ``expr``, or ``End`` when some part has no rule."""
    if isinstance(expr, Number):
        return Number(0)
    if isinstance(expr, Variable):
        return Number(1)
    if isinstance(expr, Function):
        return _derive_function(expr)
    return End()
