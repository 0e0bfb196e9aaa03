"""Calculi package: expression trees with parsing, folding, differentiation and solving."""

__all__ = [
    "config",
    "operators",
    "expression",
    "parser",
    "simplifier",
    "evaluator",
    "calculus",
    "solver",
    "equation",
    "formatting",
    "sympy_bridge",
    "plotting",
    "cli",
    "types",
    "api",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "evaluate",
    "solve",
    "diff",
    "simplify_expression",
    "latex",
    "validate_expression",
    "plot",
]
