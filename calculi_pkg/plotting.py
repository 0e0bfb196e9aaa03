"""Optional plotting functionality for single-variable expressions."""

from __future__ import annotations

import os
import tempfile

import numpy as np

try:
    # Set non-GUI backend before importing pyplot to avoid Tkinter issues
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False

from . import config
from .equation import Equation
from .logging_config import get_logger
from .types import EvalResult

logger = get_logger("plotting")

# Dimensions of the ASCII plot in characters
ASCII_ROWS = 20
ASCII_COLS = 60


def sample(equation: Equation, variable: str, x_vals: np.ndarray) -> np.ndarray:
    """Evaluate ``equation`` at each x; points that do not fold become NaN."""
    y_vals = np.full(len(x_vals), np.nan, dtype=np.float32)
    for i, x in enumerate(x_vals):
        value = equation.solve_with({variable: x}).to_float()
        if value is not None:
            y_vals[i] = value
    return y_vals


def ascii_plot(x_vals: np.ndarray, y_vals: np.ndarray) -> str | None:
    """Render sampled points as text, or ``None`` when nothing is plottable."""
    rows, cols = ASCII_ROWS, ASCII_COLS
    x_min, x_max = float(x_vals[0]), float(x_vals[-1])
    plot_chars = [[" " for _ in range(cols)] for _ in range(rows)]

    valid_y = [float(y) for y in y_vals if np.isfinite(y) and -1e10 < y < 1e10]
    if not valid_y:
        return None

    y_min, y_max = min(valid_y), max(valid_y)
    y_range = y_max - y_min if y_max != y_min else 1.0
    x_range = x_max - x_min if x_max != x_min else 1.0

    for x, y in zip(x_vals, y_vals):
        if not np.isfinite(y) or not (-1e10 < y < 1e10):
            continue
        col = int((float(x) - x_min) / x_range * (cols - 1))
        row = int((float(y) - y_min) / y_range * (rows - 1))
        col = max(0, min(cols - 1, col))
        row = max(0, min(rows - 1, row))
        plot_chars[row][col] = "*"

    x_axis_row = int((0 - y_min) / y_range * (rows - 1)) if y_min <= 0 <= y_max else -1
    y_axis_col = int((0 - x_min) / x_range * (cols - 1)) if x_min <= 0 <= x_max else -1

    lines = []
    for r in reversed(range(rows)):
        line = []
        for c in range(cols):
            if plot_chars[r][c] == "*":
                line.append("*")
            elif r == x_axis_row and c == y_axis_col:
                line.append("+")
            elif r == x_axis_row:
                line.append("-")
            elif c == y_axis_col:
                line.append("|")
            else:
                line.append(" ")
        lines.append("".join(line))
    return "\n".join(lines)


def plot_equation(
    equation: Equation,
    variable: str = "x",
    x_min: float | None = None,
    x_max: float | None = None,
    points: int | None = None,
    ascii: bool = False,
    derivative: bool = False,
    output: str | None = None,
) -> EvalResult:
    """Plot an equation against one variable.

    Args:
        equation: Equation to plot; every variable other than ``variable``
            must already be folded away
        variable: Variable on the horizontal axis (default: "x")
        x_min: Minimum x value (default: config.PLOT_X_MIN)
        x_max: Maximum x value (default: config.PLOT_X_MAX)
        points: Number of samples (default: config.PLOT_POINTS)
        ascii: If True, return an ASCII plot in ``result``
        derivative: If True, also plot the derivative
        output: PNG path for the matplotlib plot (default: a temporary file)

    Returns:
        EvalResult whose ``result`` is the ASCII plot or the saved file path
    """
    x_min = config.PLOT_X_MIN if x_min is None else x_min
    x_max = config.PLOT_X_MAX if x_max is None else x_max
    points = config.PLOT_POINTS if points is None else points
    if x_min >= x_max:
        return EvalResult(ok=False, error="Plot range must satisfy x_min < x_max")

    others = sorted(equation.free_variables() - {variable})
    if others:
        return EvalResult(
            ok=False,
            error=f"Cannot plot: unbound variable(s) {', '.join(others)}",
        )

    x_vals = np.linspace(x_min, x_max, points, dtype=np.float32)
    curves = [(f"f({variable}) = {equation.text}", sample(equation, variable, x_vals))]
    if derivative:
        derived = equation.derive()
        curves.append(
            (f"f'({variable}) = {derived.text}", sample(derived, variable, x_vals))
        )

    if ascii:
        sections = []
        for label, y_vals in curves:
            plot_text = ascii_plot(x_vals, y_vals)
            if plot_text is None:
                return EvalResult(
                    ok=False, error="Cannot plot: function values out of range"
                )
            sections.append(f"{label}\n{plot_text}")
        return EvalResult(ok=True, result="\n\n".join(sections))

    if not HAS_MATPLOTLIB:
        return EvalResult(
            ok=False, error="matplotlib not installed. Use ascii=True for ASCII plot."
        )

    fig, ax = plt.subplots(figsize=(10, 6))
    try:
        for label, y_vals in curves:
            ax.plot(x_vals, y_vals, linewidth=2, label=label)
        ax.set_xlabel(variable, fontsize=12, fontweight="bold")
        ax.set_ylabel(f"f({variable})", fontsize=12, fontweight="bold")
        ax.set_title(f"Plot of {equation.text}", fontsize=14, fontweight="bold")
        ax.grid(True, alpha=0.3, linestyle="--")
        ax.axhline(y=0, color="k", linewidth=0.8, linestyle="-", alpha=0.3)
        ax.axvline(x=0, color="k", linewidth=0.8, linestyle="-", alpha=0.3)
        ax.legend(loc="best", fontsize=10)
        fig.tight_layout()

        if output is None:
            handle, output = tempfile.mkstemp(suffix=".png", prefix="calculi_")
            os.close(handle)
        fig.savefig(output, dpi=150, bbox_inches="tight")
    except (OSError, ValueError) as e:
        logger.error(f"Failed to save plot: {e}", exc_info=True)
        return EvalResult(ok=False, error=f"Failed to save plot: {e}")
    finally:
        plt.close(fig)

    logger.info("Plot of %s saved to %s", equation.text, output)
    return EvalResult(ok=True, result=output)
