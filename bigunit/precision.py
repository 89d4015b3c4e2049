from typing import Any, Tuple

from bigunit.constants import DEFAULT_ROUNDING
from bigunit.errors import InvalidPrecision
from bigunit.types import RoundingMethod


def validate_precision(precision: Any) -> int:
    """
    Returns the precision as an int, or raises InvalidPrecision.
    Integral floats (e.g. 2.0) are accepted; bools, fractions and negatives are not.
    """
    if isinstance(precision, bool):
        raise InvalidPrecision(precision)
    if isinstance(precision, float) and precision.is_integer():
        precision = int(precision)
    if not isinstance(precision, int) or precision < 0:
        raise InvalidPrecision(precision)
    return precision


def truncated_divmod(numerator: int, denominator: int) -> Tuple[int, int]:
    """
    Integer division rounding toward zero.
    The remainder takes the sign of the numerator (Python's divmod floors instead).
    """
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        quotient = -quotient
    return quotient, numerator - quotient * denominator


def divide(numerator: int, denominator: int, rounding: RoundingMethod = DEFAULT_ROUNDING) -> int:
    quotient, remainder = truncated_divmod(numerator, denominator)
    if remainder == 0:
        return quotient

    negative = (numerator < 0) != (denominator < 0)
    if rounding == RoundingMethod.TRUNCATE:
        return quotient
    if rounding == RoundingMethod.FLOOR:
        return quotient - 1 if negative else quotient
    if rounding == RoundingMethod.CEILING:
        return quotient if negative else quotient + 1
    if rounding == RoundingMethod.NEAREST:
        # Half-up on the absolute value, then re-sign: ties move away from zero
        if 2 * abs(remainder) >= abs(denominator):
            return quotient - 1 if negative else quotient + 1
        return quotient
    raise ValueError(f"Unknown rounding method: {rounding}")


class Precision:
    """
    Handles precision logic for a specific number of decimal places.
    Used for rescaling integer representations (atoms) between precisions.
    """

    def __init__(self, decimals: Any):
        self.decimals = validate_precision(decimals)
        self.multiplier = 10**self.decimals

    def rescale(
        self,
        magnitude: int,
        source_decimals: int,
        rounding: RoundingMethod = DEFAULT_ROUNDING,
    ) -> int:
        """
        Converts a magnitude expressed at source_decimals into this precision.
        e.g. magnitude=12345, source_decimals=2, decimals=4 -> 1234500

        Scaling up is exact. Scaling down applies the rounding method.
        """
        if self.decimals == source_decimals:
            return magnitude
        if self.decimals > source_decimals:
            return magnitude * 10 ** (self.decimals - source_decimals)
        return divide(magnitude, 10 ** (source_decimals - self.decimals), RoundingMethod(rounding))

    def __repr__(self) -> str:
        return f"Precision({self.decimals})"
