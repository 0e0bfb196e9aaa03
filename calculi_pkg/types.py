"""Type definitions and result dataclasses for consistent API responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class EvalResult:
    """Result of evaluating, differentiating or rendering an expression."""

    ok: bool
    result: str | None = None
    value: float | None = None
    free_variables: list[str] | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.result is not None:
            result_dict["result"] = self.result
        if self.value is not None:
            result_dict["value"] = self.value
        if self.free_variables is not None:
            result_dict["free_variables"] = self.free_variables
        if self.error is not None:
            result_dict["error"] = self.error
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"EvalResult(ok=False, error={self.error!r})"
        parts = [f"ok={self.ok}"]
        if self.result is not None:
            parts.append(f"result={self.result!r}")
        if self.value is not None:
            parts.append(f"value={self.value!r}")
        if self.free_variables is not None:
            parts.append(f"free_variables={self.free_variables!r}")
        return f"EvalResult({', '.join(parts)})"


@dataclass
class SolveResult:
    """Result of solving an expression for its single unknown.

    ``solved`` is True only when the residual is a bare variable; otherwise
    ``residual`` holds the part that could not be inverted and ``value`` the
    outcome it must still produce.
    """

    ok: bool
    solved: bool = False
    variable: str | None = None
    value: float | None = None
    residual: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok, "solved": self.solved}
        if self.error is not None:
            result_dict["error"] = self.error
        if self.variable is not None:
            result_dict["variable"] = self.variable
        if self.value is not None:
            result_dict["value"] = self.value
        if self.residual is not None:
            result_dict["residual"] = self.residual
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"SolveResult(ok=False, error={self.error!r})"
        parts = [f"ok={self.ok}", f"solved={self.solved}"]
        if self.variable is not None:
            parts.append(f"variable={self.variable!r}")
        if self.value is not None:
            parts.append(f"value={self.value!r}")
        if self.residual is not None:
            parts.append(f"residual={self.residual!r}")
        return f"SolveResult({', '.join(parts)})"


class ValidationError(Exception):
    """Raised when input exceeds a resource bound or is malformed."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message
