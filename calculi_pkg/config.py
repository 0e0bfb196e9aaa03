"""Centralized configuration for Calculi.

This module defines:
- Input validation limits (length, depth, node count)
- Cache sizes for parsing
- Solver configuration (iteration cap, comparison tolerance)
- Output and plotting defaults
- Regex patterns for bindings and function-call detection

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with CALCULI_)

Consumers read these values through the module (``config.MAX_SOLVE_ITERATIONS``)
at call time so that CLI overrides take effect.
"""

import importlib.metadata
import os
import re

import numpy as np

# Version is defined in pyproject.toml [project] section
try:
    VERSION = importlib.metadata.version("calculi")
except importlib.metadata.PackageNotFoundError:
    # Running from a source checkout without installation
    VERSION = "1.0.0"

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("CALCULI_MAX_INPUT_LENGTH", "10000"))  # characters
MAX_EXPRESSION_DEPTH = int(
    os.getenv("CALCULI_MAX_EXPRESSION_DEPTH", "100")
)  # parenthesis and call nesting in the source text
MAX_TREE_DEPTH = int(
    os.getenv("CALCULI_MAX_TREE_DEPTH", "250")
)  # depth of the built tree; traversals are recursive
MAX_EXPRESSION_NODES = int(
    os.getenv("CALCULI_MAX_EXPRESSION_NODES", "5000")
)  # total nodes

# Cache configuration
CACHE_SIZE_PARSE = int(os.getenv("CALCULI_CACHE_SIZE_PARSE", "1024"))

# Solver configuration
MAX_SOLVE_ITERATIONS = int(
    os.getenv("CALCULI_MAX_SOLVE_ITERATIONS", "1000")
)  # inversion steps before giving up
SOLVE_TOLERANCE = float(
    os.getenv("CALCULI_SOLVE_TOLERANCE", str(float(np.finfo(np.float32).eps)))
)  # max/min operand comparison against the outcome

# Output configuration
OUTPUT_PRECISION = int(os.getenv("CALCULI_OUTPUT_PRECISION", "7"))

# Plotting configuration
PLOT_POINTS = int(os.getenv("CALCULI_PLOT_POINTS", "200"))
PLOT_X_MIN = float(os.getenv("CALCULI_PLOT_X_MIN", "-10"))
PLOT_X_MAX = float(os.getenv("CALCULI_PLOT_X_MAX", "10"))

VAR_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

BINDING_RE = re.compile(
    r"^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*$"
)
FUNCTION_CALL_RE = re.compile(r"([A-Za-z_][A-Za-z0-9_]*)\s*\(")
WITH_CLAUSE_RE = re.compile(r"\s+with\s+", re.IGNORECASE)
