"""The ``Equation`` value type: source text paired with its parsed tree."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from . import calculus, solver
from .evaluator import Bindings, evaluate
from .expression import Expression, free_variables
from .parser import parse
from .simplifier import simplify


@dataclass(frozen=True)
class Equation:
    """An expression in text and tree form.

    Examples:
        >>> eq = Equation.new("a * sqrt(x + 1)")
        >>> float(eq.solve_with({"a": 2, "x": 8}).to_float())
        6.0
        >>> residual, value = eq.solve_for(9, {"x": 8})
        >>> str(residual), float(value)
        ('a', 3.0)
        >>> Equation.new("x ^ 3").derive().text
        '3 * x ^ 2'
    """

    text: str
    expression: Expression

    @classmethod
    def new(cls, text: str) -> Equation:
        """Parse ``text`` and fold its constant subexpressions.

        Raises:
            ValidationError: If the text exceeds the configured input limits.
        """
        return cls(text, evaluate(parse(text)))

    @classmethod
    def from_expression(cls, expression: Expression) -> Equation:
        return cls(str(expression), expression)

    def solve_with(self, bindings: Bindings = None) -> Expression:
        """Substitute ``bindings`` and fold; ``.to_float()`` on the result gives the value."""
        return evaluate(self.expression, bindings)

    def solve_for(
        self, outcome: float, bindings: Bindings = None
    ) -> tuple[Expression, np.float32]:
        """Solve for the single unknown left after ``bindings``.

        Returns the isolated variable and its value, or the residual expression
        and outcome when the unknown could not be isolated.
        """
        return solver.solve_for(self.expression, outcome, bindings)

    def derive(self) -> Equation:
        """Derivative as a new equation with canonical text."""
        raw = calculus.derive(self.expression)
        return Equation.from_expression(simplify(evaluate(simplify(raw))))

    def simplify(self) -> Equation:
        return Equation.from_expression(simplify(self.expression))

    def free_variables(self) -> set[str]:
        return free_variables(self.expression)

    def __str__(self) -> str:
        return self.text
