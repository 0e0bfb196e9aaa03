"""Main entry point for running calculi_pkg as a module.

This allows running Calculi with:
    python -m calculi_pkg
    python -m calculi_pkg -e "x ^ 3" --derive
    python -m calculi_pkg -e "(16 + x) / 4" --solve-for 8

This is equivalent to running the ``calculi`` console script.
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
