"""Operator catalog.

Maps token text to operator tags and carries the per-operator display text,
arity class and infix precedence. All tables are read-only and built once at
import time.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType


class Arity(Enum):
    UNARY = 1
    BINARY = 2
    VARIADIC = 3


class Operator(Enum):
    """All operators usable in an expression.

    The value is the display text: single characters are infix symbols, the
    rest are written as ``name(arg1, arg2, ...)``.
    """

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    MODULO = "%"
    EXPONENT = "^"
    POW = "pow"  # pow(n, power)
    LOG = "log"  # log(n, base)
    LN = "ln"
    EXP = "exp"
    SQRT = "sqrt"
    ROOT = "root"  # root(n, degree)
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    SEC = "sec"
    CSC = "csc"
    COT = "cot"
    ABS = "abs"
    FLOOR = "floor"
    ROUND = "round"
    CEIL = "ceil"
    MAX = "max"
    MIN = "min"
    ERROR = "error"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def arity(self) -> Arity:
        return ARITY[self]

    @property
    def precedence(self) -> int:
        return precedence(self.value)

    @property
    def is_infix(self) -> bool:
        return self.value in INFIX_PRECEDENCE

    def __str__(self) -> str:
        return self.value


INFIX_PRECEDENCE = MappingProxyType(
    {
        "+": 1,
        "-": 1,
        "*": 3,
        "/": 3,
        "%": 3,
        "^": 5,
    }
)

INFIX_SYMBOLS = frozenset(INFIX_PRECEDENCE)

_UNARY = (
    Operator.LN,
    Operator.EXP,
    Operator.SQRT,
    Operator.SIN,
    Operator.COS,
    Operator.TAN,
    Operator.SEC,
    Operator.CSC,
    Operator.COT,
    Operator.ABS,
    Operator.FLOOR,
    Operator.ROUND,
    Operator.CEIL,
)
_VARIADIC = (Operator.MAX, Operator.MIN, Operator.ERROR)

ARITY = MappingProxyType(
    {
        op: (
            Arity.UNARY
            if op in _UNARY
            else Arity.VARIADIC if op in _VARIADIC else Arity.BINARY
        )
        for op in Operator
    }
)

# Token text -> operator. ERROR is deliberately absent so "error(...)" is
# treated like any other unknown name.
TOKEN_MAP = MappingProxyType(
    {op.value: op for op in Operator if op is not Operator.ERROR}
)

# Operators whose two operands may be swapped without changing the value
COMMUTATIVE = frozenset({Operator.ADD, Operator.MULTIPLY})


def operator_from_token(text: str) -> Operator:
    """Resolve token text to an operator.

    Infix symbols match exactly, function names case-insensitively. Unknown
    tokens resolve to ``Operator.ERROR``.
    """
    if text in INFIX_SYMBOLS:
        return TOKEN_MAP[text]
    return TOKEN_MAP.get(text.lower(), Operator.ERROR)


def precedence(symbol: str | None) -> int:
    """Infix precedence of ``symbol``, or -1 for anything else."""
    if symbol is None:
        return -1
    return INFIX_PRECEDENCE.get(symbol, -1)


def display(operator: Operator) -> str:
    """Text used to write ``operator`` back out."""
    return operator.value
