"""Number and result formatting helpers."""

from __future__ import annotations

import re
from typing import Any

import numpy as np

from . import config


def format_float32(value: Any) -> str:
    """Shortest decimal text that reads back as the same float32.

    Integral values drop the trailing ``.0`` (``3.0`` -> ``"3"``).
    """
    value = np.float32(value)
    if np.isnan(value):
        return "nan"
    if np.isinf(value):
        return "-inf" if value < 0 else "inf"
    return np.format_float_positional(value, unique=True, trim="-")


def format_number(val: Any, precision: int | None = None) -> str:
    """Format a numeric value with specified precision.

    Args:
        val: Numeric value to format
        precision: Number of significant digits (default: config.OUTPUT_PRECISION)

    Returns:
        Formatted string representation of the number
    """
    if precision is None:
        precision = config.OUTPUT_PRECISION
    try:
        fmt = "{:." + str(int(precision)) + "g}"
        return fmt.format(float(val))
    except (ValueError, TypeError, OverflowError):
        # Fallback for non-numeric or invalid values
        return str(val)


def superscriptify(input_str: str) -> str:
    """Convert numeric string to Unicode superscript characters.

    Args:
        input_str: Input string with digits and '-' (e.g., "123", "-5")

    Returns:
        String with superscript Unicode characters (e.g., "¹²³", "⁻⁵")
    """
    mapping = {
        "0": "⁰",
        "1": "¹",
        "2": "²",
        "3": "³",
        "4": "⁴",
        "5": "⁵",
        "6": "⁶",
        "7": "⁷",
        "8": "⁸",
        "9": "⁹",
        "-": "⁻",
    }
    return "".join(mapping.get(char, char) for char in input_str)


def format_superscript(expr_str: str) -> str:
    """Replace integer powers written as `` ^ n`` with Unicode superscripts.

    Args:
        expr_str: Expression string (e.g., "3 * x ^ 2", "x ^ -3")

    Returns:
        String with superscripts (e.g., "3 * x²", "x⁻³")
    """
    return re.sub(
        r"\s*\^\s*(\-?\d+)(?![\d.])", lambda m: superscriptify(m.group(1)), expr_str
    )


def prettify_expr(expr_str: str) -> str:
    """Convert expression text to a more readable form.

    Replaces ``sqrt(`` with ``√(``, `` * `` with `` × `` and integer powers
    with superscripts.
    """
    result = expr_str.replace("sqrt(", "√(")
    result = result.replace(" * ", " × ")
    return format_superscript(result)
