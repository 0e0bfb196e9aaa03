"""Outcome inversion for a single unknown.

After the known variables are substituted, the remaining tree is peeled one
operator at a time, applying the inverse operation to the outcome, until only
the unknown (or a node that cannot be inverted) is left:

    5 * x - 3 = 7        unsolved
    5 * x = 7 + 3 = 10   step 1
    x = 10 / 5 = 2       step 2

Solving never fails. A residual ``Function`` node together with the
outcome it must still produce signals a partial solution.
"""

from __future__ import annotations

from typing import Callable, Mapping

import numpy as np

from . import config
from .evaluator import Bindings, evaluate
from .expression import End, Expression, Function, Number, Variable
from .logging_config import get_logger
from .operators import Operator

logger = get_logger("solver")

UNARY_INVERSES: Mapping[Operator, Callable[[np.float64], np.float64]] = {
    Operator.SIN: np.arcsin,
    Operator.COS: np.arccos,
    Operator.TAN: np.arctan,
    Operator.SEC: lambda o: np.arccos(1.0 / o),
    Operator.CSC: lambda o: np.arcsin(1.0 / o),
    Operator.COT: lambda o: np.arctan(1.0 / o),
    Operator.EXP: np.log,
    Operator.LN: np.exp,
    Operator.SQRT: np.square,
}


def invert_binary(
    operator: Operator, outcome: np.float64, f: np.float64, number_on_left: bool
) -> np.float64 | None:
    """Value the non-numeric operand must take so that the node yields ``outcome``.

    ``f`` is the numeric operand, ``number_on_left`` its position. Returns
    ``None`` for operators that cannot be inverted.
    """
    if operator is Operator.ADD:
        return outcome - f
    if operator is Operator.SUBTRACT:
        return f - outcome if number_on_left else outcome + f
    if operator is Operator.MULTIPLY:
        return outcome / f
    if operator is Operator.DIVIDE:
        return f / outcome if number_on_left else outcome * f
    if operator is Operator.EXPONENT or operator is Operator.POW:
        return np.log(outcome) / np.log(f) if number_on_left else np.power(outcome, 1.0 / f)
    if operator is Operator.LOG:
        # log(x, base): a known x leaves the base, a known base leaves x
        return np.power(f, 1.0 / outcome) if number_on_left else np.power(f, outcome)
    if operator is Operator.ROOT:
        # root(x, n) = x ^ (1 / n)
        return np.log(f) / np.log(outcome) if number_on_left else np.power(outcome, f)
    return None


def _invert_extreme(expr: Function, outcome: np.float32) -> Expression:
    """Collapse ``max``/``min`` onto the only operand that can produce ``outcome``."""
    symbolic = []
    for operand in expr.operands:
        value = operand.to_float()
        if value is None:
            symbolic.append(operand)
            continue
        if abs(float(value) - float(outcome)) <= config.SOLVE_TOLERANCE:
            # Outcome is already reached; the unknown is not determined
            return expr
        if expr.operator is Operator.MAX and value > outcome:
            return expr
        if expr.operator is Operator.MIN and value < outcome:
            return expr
    if len(symbolic) == 1:
        return symbolic[0]
    return expr


def invert_step(expr: Expression, outcome: np.float32) -> tuple[Expression, np.float32]:
    """Peel one operator off ``expr``.

    Returns ``expr`` itself (the same object) with the outcome unchanged when
    no inversion applies.
    """
    if not isinstance(expr, Function):
        return expr, outcome

    operator = expr.operator
    values = expr.operands

    if operator is Operator.MAX or operator is Operator.MIN:
        return _invert_extreme(expr, outcome), outcome

    with np.errstate(all="ignore"):
        if len(values) == 1:
            inverse = UNARY_INVERSES.get(operator)
            if inverse is None:
                return expr, outcome
            return values[0], np.float32(inverse(np.float64(outcome)))

        if len(values) == 2:
            left, right = values
            number_on_left = left.to_float() is not None
            f = left.to_float() if number_on_left else right.to_float()
            if f is None:
                return expr, outcome
            result = invert_binary(
                operator, np.float64(outcome), np.float64(f), number_on_left
            )
            if result is None:
                return expr, outcome
            return (right if number_on_left else left), np.float32(result)

    return expr, outcome


def solve_expression(
    expr: Expression, outcome: float, max_iterations: int | None = None
) -> tuple[Expression, np.float32]:
    """Invert an already evaluated expression until it stops changing."""
    if max_iterations is None:
        max_iterations = config.MAX_SOLVE_ITERATIONS
    outcome = np.float32(outcome)
    if isinstance(expr, End):
        return End(), outcome

    for _ in range(max_iterations):
        if not isinstance(expr, Function):
            return expr, outcome
        step, step_outcome = invert_step(expr, outcome)
        if step is expr or step == expr:
            logger.debug("Inversion stuck at %s = %s", expr, outcome)
            return expr, outcome
        logger.debug("Inverted %s = %s into %s = %s", expr, outcome, step, step_outcome)
        expr, outcome = step, step_outcome

    if isinstance(expr, Function):
        logger.warning(
            "Inversion stopped after %d iterations at %s = %s",
            max_iterations,
            expr,
            outcome,
        )
    return expr, outcome


def solve_for(
    expr: Expression,
    outcome: float,
    bindings: Bindings = None,
    max_iterations: int | None = None,
) -> tuple[Expression, np.float32]:
    """Solve ``expr = outcome`` for the one variable left after ``bindings``.

    Returns:
        ``(Variable, value)`` when solved, ``(Number, outcome)`` when nothing was
        unknown, otherwise the residual node and the outcome it must produce.
    """
    return solve_expression(evaluate(expr, bindings), outcome, max_iterations)


def is_solved(residual: Expression) -> bool:
    return isinstance(residual, Variable)
