"""Expression parsing module.

This module handles:
- Input validation (length, nesting depth, node count)
- Recursive-descent parsing with precedence climbing
- Inline identity simplification while the tree is built
- Balancing checks for parentheses
- Parsing of ``name=value`` binding lists
"""

from __future__ import annotations

from functools import lru_cache

import numpy as np

from . import config
from .expression import (
    End,
    Expression,
    Function,
    Number,
    Variable,
    create_binary,
    node_count,
    tree_depth,
)
from .logging_config import get_logger
from .operators import INFIX_SYMBOLS, Operator, operator_from_token, precedence
from .simplifier import combine
from .types import ValidationError

logger = get_logger("parser")

_TERMINATORS = frozenset("(),") | INFIX_SYMBOLS


def _is_digit(char: str) -> bool:
    return char.isdigit() or char == "."


class _Cursor:
    """Character cursor with one character of look-ahead."""

    def __init__(self, text: str):
        self._text = text
        self._pos = 0
        self._depth = 0

    @property
    def position(self) -> int:
        return self._pos

    def peek(self) -> str | None:
        if self._pos < len(self._text):
            return self._text[self._pos]
        return None

    def advance(self) -> None:
        self._pos += 1

    def exhausted(self) -> bool:
        return self._pos >= len(self._text)

    def enter(self) -> None:
        self._depth += 1
        if self._depth > config.MAX_EXPRESSION_DEPTH:
            raise ValidationError(
                f"Expression too deeply nested (>{config.MAX_EXPRESSION_DEPTH} levels)",
                "TOO_DEEP",
            )

    def leave(self) -> None:
        self._depth -= 1


def _peek_operator(cursor: _Cursor) -> tuple[str | None, bool]:
    """Next infix operator and whether it is written out.

    An identifier or ``(`` right after a complete operand is an implicit
    multiplication.
    """
    char = cursor.peek()
    if char is None:
        return None, False
    if char in INFIX_SYMBOLS:
        return char, True
    if char == "(" or (char not in _TERMINATORS and not _is_digit(char)):
        return "*", False
    return None, False


def _finish_number(buffer: str) -> Expression:
    try:
        return Number(np.float32(buffer))
    except ValueError:
        logger.debug("Invalid numeric literal %r", buffer)
        return End()


def _parse_call(cursor: _Cursor, name: str) -> Expression:
    """Parse after ``(``: a grouping when ``name`` is empty, else a call."""
    cursor.enter()
    first = _parse_binary(cursor, 0, _parse_atom(cursor))

    if not name:
        if cursor.peek() == ")":
            cursor.advance()
        cursor.leave()
        return first

    operands = [first]
    while True:
        char = cursor.peek()
        if char is None:
            break
        if char == ")":
            cursor.advance()
            break
        start = cursor.position
        if char == ",":
            cursor.advance()
        operands.append(_parse_binary(cursor, 0, _parse_atom(cursor)))
        if cursor.position == start:
            # Stray character inside the argument list
            cursor.advance()
    cursor.leave()
    return Function(operator_from_token(name), tuple(operands))


def _parse_negation(cursor: _Cursor) -> Expression:
    """Parse the operand of a leading ``-``; it binds looser than ``^``."""
    cursor.enter()
    operand = _parse_atom(cursor)
    operand = _parse_binary(cursor, Operator.EXPONENT.precedence, operand)
    cursor.leave()
    if isinstance(operand, Number):
        return Number(-operand.value)
    return create_binary(Operator.MULTIPLY, Number(-1), operand)


def _parse_atom(cursor: _Cursor) -> Expression:
    number: list[str] = []
    identifier: list[str] = []

    while True:
        char = cursor.peek()
        if char is None:
            break
        if not identifier and _is_digit(char):
            number.append(char)
        elif number:
            break
        elif char == "(":
            cursor.advance()
            return _parse_call(cursor, "".join(identifier))
        elif not identifier and char == "-":
            cursor.advance()
            return _parse_negation(cursor)
        elif not identifier and char == "+":
            pass
        elif char in _TERMINATORS:
            break
        else:
            identifier.append(char)
        cursor.advance()

    if number:
        return _finish_number("".join(number))
    if identifier:
        return Variable("".join(identifier))
    return End()


def _parse_binary(cursor: _Cursor, min_precedence: int, left: Expression) -> Expression:
    """Precedence climbing over the infix operators following ``left``."""
    while True:
        symbol, explicit = _peek_operator(cursor)
        current = precedence(symbol)
        if current < min_precedence:
            return left
        if explicit:
            cursor.advance()

        right = _parse_atom(cursor)
        following, _ = _peek_operator(cursor)
        if precedence(following) > current:
            right = _parse_binary(cursor, current + 1, right)

        if isinstance(left, End) or isinstance(right, End):
            left = End()
        else:
            left = combine(operator_from_token(symbol), left, right)


def _validate_tree(expr: Expression) -> None:
    if tree_depth(expr) > config.MAX_TREE_DEPTH:
        raise ValidationError(
            f"Expression tree too deep (>{config.MAX_TREE_DEPTH} levels)",
            "TOO_DEEP",
        )
    if node_count(expr) > config.MAX_EXPRESSION_NODES:
        raise ValidationError(
            f"Expression too complex (>{config.MAX_EXPRESSION_NODES} nodes)",
            "TOO_COMPLEX",
        )


@lru_cache(maxsize=config.CACHE_SIZE_PARSE)
def _parse_cached(text: str) -> Expression:
    cursor = _Cursor(text)
    expr = _parse_binary(cursor, 0, _parse_atom(cursor))
    while not cursor.exhausted():
        cursor.advance()
        expr = _parse_binary(cursor, 0, expr)
    _validate_tree(expr)
    return expr


def parse(text: str) -> Expression:
    """Parse ``text`` into an expression tree.

    Parsing is total: malformed input degrades to ``End`` nodes or ``error(...)``
    functions instead of failing.

    Raises:
        ValidationError: If the input exceeds the configured length, nesting
            depth or node-count limits.
    """
    if len(text) > config.MAX_INPUT_LENGTH:
        raise ValidationError(
            f"Input too long (>{config.MAX_INPUT_LENGTH} characters)", "TOO_LONG"
        )
    stripped = "".join(char for char in text if not char.isspace())
    return _parse_cached(stripped)


def clear_cache() -> None:
    _parse_cached.cache_clear()


def is_balanced(input_str: str) -> tuple[bool, int | None]:
    """Check if parentheses are balanced. Returns (is_balanced, error_position)."""
    stack: list[int] = []
    for i, char in enumerate(input_str):
        if char == "(":
            stack.append(i)
        elif char == ")":
            if not stack:
                return False, i
            stack.pop()
    if stack:
        return False, stack[0]  # Return position of first unmatched
    return True, None


def parse_bindings(text: str) -> dict[str, np.float32]:
    """Parse ``"x=10, a=4.5"`` into a binding mapping.

    Raises:
        ValidationError: If an entry is not ``name=number``.
    """
    bindings: dict[str, np.float32] = {}
    for part in text.split(","):
        if not part.strip():
            continue
        match = config.BINDING_RE.match(part)
        if match is None:
            raise ValidationError(
                f"Invalid binding '{part.strip()}' (expected name=number)",
                "BAD_BINDING",
            )
        bindings[match.group(1)] = np.float32(match.group(2))
    return bindings
