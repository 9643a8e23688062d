"""Main entry point for running ratmath_pkg as a module.

This allows running ratmath with:
    python -m ratmath_pkg
    python -m ratmath_pkg --health-check
    python -m ratmath_pkg -e "1/2 + 1/3"

This is equivalent to running:
    python -m ratmath_pkg.cli
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
