"""Public API for Calculi - returns structured objects without side effects."""

from __future__ import annotations

from . import config
from .config import FUNCTION_CALL_RE, VAR_NAME_RE
from .equation import Equation
from .evaluator import Bindings
from .expression import free_variables
from .logging_config import get_logger
from .operators import Operator, operator_from_token
from .parser import is_balanced
from .plotting import plot_equation
from .solver import is_solved
from .sympy_bridge import to_latex
from .types import EvalResult, SolveResult, ValidationError

logger = get_logger("api")


def _value(expr) -> float | None:
    number = expr.to_float()
    return None if number is None else float(number)


def evaluate(expression: str, bindings: Bindings = None) -> EvalResult:
    """Evaluate a mathematical expression.

    Args:
        expression: Expression string (e.g., "2+2", "x - 2 * a")
        bindings: Optional variable values ({"x": 10} or [("x", 10)])

    Returns:
        EvalResult with the folded expression text, its numeric value when
        fully evaluated, and the variables left unbound

    Example:
        >>> from calculi_pkg.api import evaluate
        >>> evaluate("x - 2 * a + 4 ^ b", {"x": 10, "a": 4.5, "b": 1}).value
        5.0
        >>> evaluate("x * 0").result
        '0'
    """
    try:
        equation = Equation.new(expression)
        result = equation.solve_with(bindings)
    except ValidationError as e:
        return EvalResult(ok=False, error=str(e))
    except (ValueError, TypeError) as e:
        return EvalResult(ok=False, error=f"Invalid bindings: {e}")
    except Exception as e:
        logger.error(f"Unexpected evaluation error: {e}", exc_info=True)
        return EvalResult(ok=False, error="Evaluation failed unexpectedly")
    return EvalResult(
        ok=True,
        result=str(result),
        value=_value(result),
        free_variables=sorted(free_variables(result)),
    )


def solve(expression: str, outcome: float, bindings: Bindings = None) -> SolveResult:
    """Solve ``expression = outcome`` for its one unknown variable.

    Args:
        expression: Expression string (e.g., "(16 + x) / 4")
        outcome: Value the expression must take
        bindings: Values of the other variables

    Returns:
        SolveResult; ``solved`` is False when only part of the expression
        could be inverted, with ``residual`` holding what is left

    Example:
        >>> from calculi_pkg.api import solve
        >>> result = solve("x - 2 * a + 4 ^ b", 10, {"a": 4.5, "b": 1})
        >>> result.variable, result.value
        ('x', 15.0)
    """
    try:
        residual, value = Equation.new(expression).solve_for(outcome, bindings)
    except ValidationError as e:
        return SolveResult(ok=False, error=str(e))
    except (ValueError, TypeError) as e:
        return SolveResult(ok=False, error=f"Invalid bindings: {e}")
    except Exception as e:
        logger.error(f"Unexpected solver error: {e}", exc_info=True)
        return SolveResult(ok=False, error="Solving failed unexpectedly")

    if is_solved(residual):
        return SolveResult(ok=True, solved=True, variable=residual.name, value=float(value))
    return SolveResult(ok=True, solved=False, value=float(value), residual=str(residual))


def diff(expression: str, bindings: Bindings = None) -> EvalResult:
    """Differentiate an expression.

    Bound variables are substituted first, so binding all but one variable
    gives the partial derivative with respect to the remaining one.

    Example:
        >>> from calculi_pkg.api import diff
        >>> diff("x ^ 3").result
        '3 * x ^ 2'
    """
    try:
        equation = Equation.new(expression)
        if bindings:
            equation = Equation.from_expression(equation.solve_with(bindings))
        derived = equation.derive()
    except ValidationError as e:
        return EvalResult(ok=False, error=str(e))
    except (ValueError, TypeError) as e:
        return EvalResult(ok=False, error=f"Invalid bindings: {e}")
    except Exception as e:
        logger.error(f"Unexpected differentiation error: {e}", exc_info=True)
        return EvalResult(ok=False, error="Differentiation failed unexpectedly")
    if not derived.text:
        return EvalResult(
            ok=False, error=f"Derivative of '{expression}' is undefined"
        )
    return EvalResult(
        ok=True,
        result=derived.text,
        value=_value(derived.expression),
        free_variables=sorted(derived.free_variables()),
    )


def simplify_expression(expression: str) -> EvalResult:
    """Parse, fold and simplify an expression, returning its canonical text."""
    try:
        simplified = Equation.new(expression).simplify()
    except ValidationError as e:
        return EvalResult(ok=False, error=str(e))
    return EvalResult(
        ok=True,
        result=simplified.text,
        value=_value(simplified.expression),
        free_variables=sorted(simplified.free_variables()),
    )


def latex(expression: str) -> EvalResult:
    """Render an expression as LaTeX (via SymPy)."""
    try:
        equation = Equation.new(expression)
        rendered = to_latex(equation.expression)
    except ValidationError as e:
        return EvalResult(ok=False, error=str(e))
    except ValueError as e:
        return EvalResult(ok=False, error=f"Cannot render: {e}")
    except Exception as e:
        logger.error(f"Unexpected rendering error: {e}", exc_info=True)
        return EvalResult(ok=False, error="Rendering failed unexpectedly")
    return EvalResult(ok=True, result=rendered)


def validate_expression(expression: str) -> tuple[bool, str | None]:
    """Validate an expression without evaluating it.

    Parsing itself never rejects text; this reports the problems that parsing
    would silently degrade.

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> from calculi_pkg.api import validate_expression
        >>> validate_expression("2 + sin(x)")
        (True, None)
        >>> validate_expression("foo(x)")
        (False, "Unknown function 'foo'")
    """
    if not expression or not expression.strip():
        return False, "Input cannot be empty"
    if len(expression) > config.MAX_INPUT_LENGTH:
        return False, f"Input too long (>{config.MAX_INPUT_LENGTH} characters)"
    balanced, position = is_balanced(expression)
    if not balanced:
        return False, f"Unbalanced parenthesis at position {position}"
    for match in FUNCTION_CALL_RE.finditer(expression):
        name = match.group(1)
        if operator_from_token(name) is Operator.ERROR:
            return False, f"Unknown function '{name}'"
    try:
        equation = Equation.new(expression)
    except ValidationError as e:
        return False, str(e)
    if not equation.text.strip() or not str(equation.expression):
        return False, "Expression is incomplete"
    return True, None


def plot(
    expression: str,
    variable: str = "x",
    x_min: float | None = None,
    x_max: float | None = None,
    ascii: bool = False,
    derivative: bool = False,
    output: str | None = None,
) -> EvalResult:
    """Plot a single-variable expression (and optionally its derivative).

    Example:
        >>> from calculi_pkg.api import plot
        >>> plot("x ^ 2", x_min=-5, x_max=5, ascii=True).ok
        True
    """
    if not VAR_NAME_RE.match(variable):
        return EvalResult(ok=False, error=f"Invalid variable name '{variable}'")
    try:
        equation = Equation.new(expression)
    except ValidationError as e:
        return EvalResult(ok=False, error=str(e))
    return plot_equation(
        equation,
        variable=variable,
        x_min=x_min,
        x_max=x_max,
        ascii=ascii,
        derivative=derivative,
        output=output,
    )
