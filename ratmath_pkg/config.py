"""Centralized configuration for ratmath.

This module defines:
- Rendering limits for decimal expansions
- Search bounds for shortest-decimal and random-rational helpers
- Input validation limits used by the API and CLI layers
- Sentinel characters inserted by the parser's preprocessing step
- Regex patterns for literal parsing

Configuration can be overridden via environment variables (prefixed with RATMATH_).
"""

import os
import re

try:
    import importlib.metadata

    VERSION = importlib.metadata.version("ratmath")
except importlib.metadata.PackageNotFoundError:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Rendering limits
DECIMAL_MAX_DIGITS = int(os.getenv("RATMATH_DECIMAL_MAX_DIGITS", "20"))
DEFAULT_PERIOD_DIGITS = int(os.getenv("RATMATH_DEFAULT_PERIOD_DIGITS", "20"))
SCIENTIFIC_PRECISION = int(os.getenv("RATMATH_SCIENTIFIC_PRECISION", "11"))  # significant digits

# Search bounds
MAX_PERIOD_CHECK = int(
    os.getenv("RATMATH_MAX_PERIOD_CHECK", "10000000")
)  # largest period length measured before reporting it as unknown
RANDOM_MAX_DENOMINATOR = int(os.getenv("RATMATH_RANDOM_MAX_DENOMINATOR", "1000"))
POINT_DECIMAL_SEARCH_LIMIT = int(
    os.getenv("RATMATH_POINT_DECIMAL_SEARCH_LIMIT", "50")
)  # powers of the base tried for point intervals
RELATIVE_DECIMAL_SEARCH_LIMIT = int(
    os.getenv("RATMATH_RELATIVE_DECIMAL_SEARCH_LIMIT", "20")
)  # decimal places tried by relative_decimal_interval

# Input validation limits (enforced by api/cli, not by parse itself)
MAX_INPUT_LENGTH = int(os.getenv("RATMATH_MAX_INPUT_LENGTH", "10000"))  # characters

# Preprocessing sentinels: whitespace before E marks the E operator,
# whitespace after / marks the division operator.
SPACED_E = "\x01"
DIVISION_SENTINEL = "\x02"

# Strict constructor patterns (full-string)
INTEGER_RE = re.compile(r"^-?\d+$")
FRACTION_RE = re.compile(r"^(-?\d+)/(-?\d+)$")
DECIMAL_RE = re.compile(r"^(-?)(\d*)\.(\d*)$")
MIXED_RE = re.compile(r"^(-?)(\d+)\.\.(\d+)/(\d+)$")
INTERVAL_RE = re.compile(r"^([^:]+):([^:]+)$")

# Parser patterns (anchored at the cursor via Pattern.match(text, pos))
UNCERTAINTY_RE = re.compile(r"(-?(?:\d+\.?\d*|\.\d+))\[([^\]]*)\]")
REPEATING_RE = re.compile(r"-?(?:\d+\.?\d*|\.\d+)#\d*")
DECIMAL_LITERAL_RE = re.compile(r"-?(?:\d+\.\d+|\.\d+)")
INTEGER_LITERAL_RE = re.compile(r"-?\d+")
DIGITS_RE = re.compile(r"\d+")
EXPONENT_RE = re.compile(r"-?\d+")
E_SUFFIX_RE = re.compile(r"E(-?\d+)")
WHITESPACE_RE = re.compile(r"\s+")
SPACED_E_RE = re.compile(r"\s+E")
SPACED_DIVISION_RE = re.compile(r"/\s+")
