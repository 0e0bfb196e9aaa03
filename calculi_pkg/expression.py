"""Expression tree.

Four immutable node types make up every tree: ``Variable``, ``Number``,
``Function`` and the ``End`` sentinel. Nodes are frozen dataclasses, so trees
compare structurally and every transformation builds a new tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from .formatting import format_float32
from .operators import COMMUTATIVE, Operator


@dataclass(frozen=True)
class Expression:
    """Base class of all tree nodes."""

    def to_float(self) -> np.float32 | None:
        """Value of a ``Number`` node, ``None`` for anything else."""
        return None

    def __str__(self) -> str:
        return to_text(self)


@dataclass(frozen=True)
class Variable(Expression):
    name: str


@dataclass(frozen=True)
class Number(Expression):
    value: np.float32

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", np.float32(self.value))

    def to_float(self) -> np.float32 | None:
        return self.value


@dataclass(frozen=True)
class Function(Expression):
    operator: Operator
    operands: tuple[Expression, ...]

    def __post_init__(self) -> None:
        operands = tuple(self.operands)
        if not operands:
            raise ValueError(f"{self.operator.name} node requires at least one operand")
        object.__setattr__(self, "operands", operands)


@dataclass(frozen=True)
class End(Expression):
    """No value: empty input, a failed branch or an undefined result."""


def create_unary(operator: Operator, operand: Expression) -> Expression:
    if isinstance(operand, End):
        return End()
    return Function(operator, (operand,))


def create_binary(operator: Operator, left: Expression, right: Expression) -> Expression:
    if isinstance(left, End) or isinstance(right, End):
        return End()
    return Function(operator, (left, right))


def iter_nodes(expr: Expression) -> Iterator[Expression]:
    """Yield every node of ``expr`` in pre-order."""
    stack = [expr]
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, Function):
            stack.extend(reversed(node.operands))


def free_variables(expr: Expression) -> set[str]:
    return {node.name for node in iter_nodes(expr) if isinstance(node, Variable)}


def node_count(expr: Expression) -> int:
    return sum(1 for _ in iter_nodes(expr))


def tree_depth(expr: Expression) -> int:
    """Number of nodes on the longest root-to-leaf path."""
    deepest = 0
    stack = [(expr, 1)]
    while stack:
        node, depth = stack.pop()
        deepest = max(deepest, depth)
        if isinstance(node, Function):
            stack.extend((child, depth + 1) for child in node.operands)
    return deepest


def _needs_parens(child: Expression, parent: Operator, right_side: bool) -> bool:
    if not isinstance(child, Function) or not child.operator.is_infix:
        return False
    child_prec = child.operator.precedence
    parent_prec = parent.precedence
    if child_prec < parent_prec:
        return True
    # Parsing is left-associative, so an equal-precedence right operand keeps
    # its grouping only when regrouping cannot change the value.
    if right_side and child_prec == parent_prec:
        return not (parent in COMMUTATIVE and child.operator is parent)
    return False


def to_text(expr: Expression, parent_prec: int = 0) -> str:
    """Render ``expr`` as infix text that parses back to the same tree."""
    if isinstance(expr, Variable):
        return expr.name
    if isinstance(expr, Number):
        text = format_float32(expr.value)
        if expr.value < 0 and parent_prec >= Operator.EXPONENT.precedence:
            return f"({text})"
        return text
    if isinstance(expr, Function):
        operator = expr.operator
        if operator.is_infix and len(expr.operands) == 2:
            left, right = expr.operands
            prec = operator.precedence
            left_text = to_text(left, prec)
            right_text = to_text(right, prec)
            if _needs_parens(left, operator, right_side=False):
                left_text = f"({left_text})"
            if _needs_parens(right, operator, right_side=True):
                right_text = f"({right_text})"
            return f"{left_text} {operator.symbol} {right_text}"
        parameters = ", ".join(to_text(operand) for operand in expr.operands)
        return f"{operator.symbol}({parameters})"
    return ""
