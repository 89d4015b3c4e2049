"""
Central constants for bigunit.

Numeric limits and defaults shared by the value type, the conversion helpers
and the portfolio tool.
"""

from bigunit.types import RoundingMethod

# =============================================================================
# NATIVE NUMBER LIMITS
# =============================================================================

# Largest integer a float (IEEE 754 double) represents exactly
MAX_SAFE_INTEGER = 2**53 - 1

# Leading digits kept when narrowing an out-of-range magnitude to a float.
# Any 15-digit integer is below MAX_SAFE_INTEGER.
SAFE_DIGITS = len(str(MAX_SAFE_INTEGER)) - 1


# =============================================================================
# ARITHMETIC DEFAULTS
# =============================================================================

DEFAULT_ROUNDING = RoundingMethod.TRUNCATE

# Extra digits used for the (1 + p/100) divisor in percent_backout
PERCENT_BACKOUT_EXTRA_DIGITS = 2


# =============================================================================
# PORTFOLIO DISPLAY
# =============================================================================

DEFAULT_DISPLAY_PLACES = 2
