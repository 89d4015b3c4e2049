"""
String and native-number conversion helpers for scaled integers.

Everything here works on (magnitude, precision) pairs with integer and string
operations only; floats are produced at the very end of to_safe_float and are
never used as an intermediate step.
"""

import math
import re
from decimal import Decimal
from typing import Tuple

from bigunit.constants import MAX_SAFE_INTEGER, SAFE_DIGITS
from bigunit.errors import InvalidDecimalString, InvalidValueType

_DECIMAL_RE = re.compile(r"^([+-]?\d*)(?:\.(\d*))?$", re.ASCII)
_MANTISSA_RE = re.compile(r"^[+-]?(\d*)(?:\.(\d*))?$", re.ASCII)


def expand_exponent(text: str) -> str:
    """
    Rewrites scientific notation as a plain decimal string.
    e.g. "1.5e-7" -> "0.00000015", "-2E+3" -> "-2000". Other text is returned as-is.
    """
    if "e" not in text and "E" not in text:
        return text

    mantissa, _, exponent_text = text.replace("E", "e").partition("e")
    match = _MANTISSA_RE.match(mantissa)
    if not match or not (match.group(1) or match.group(2)):
        raise InvalidDecimalString(text)
    try:
        exponent = int(exponent_text)
    except ValueError:
        raise InvalidDecimalString(text) from None

    sign = "-" if mantissa.startswith("-") else ""
    integer_digits = match.group(1)
    fraction_digits = match.group(2) or ""
    digits = integer_digits + fraction_digits
    point = len(integer_digits) + exponent

    if point <= 0:
        return f"{sign}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return f"{sign}{digits}{'0' * (point - len(digits))}"
    return f"{sign}{digits[:point]}.{digits[point:]}"


def number_to_decimal_string(value: float) -> str:
    """Convert a float to a decimal string without binary rounding artifacts."""
    if isinstance(value, int):
        return str(value)
    if not math.isfinite(value):
        raise InvalidValueType(value, "number must be finite")
    # repr() is the shortest string that round-trips to the same float
    return expand_exponent(repr(float(value)))


def decimal_to_string(value: Decimal) -> str:
    if not value.is_finite():
        raise InvalidValueType(value, "decimal must be finite")
    return format(value, "f")


def parse_decimal_string(text: str, precision: int) -> Tuple[int, str]:
    """
    Parses a decimal string into a magnitude at the given precision.

    Returns (magnitude, dropped) where dropped holds the fractional digits
    beyond precision that were truncated away.
    """
    cleaned = expand_exponent(text.strip())
    match = _DECIMAL_RE.match(cleaned)
    if not match:
        raise InvalidDecimalString(text)

    integer_text = match.group(1)
    fraction_text = match.group(2) or ""
    integer_digits = integer_text.lstrip("+-")
    if not integer_digits and not fraction_text:
        raise InvalidDecimalString(text)

    # "-0.5" has an integer part of -0 == 0, so the sign comes from the text
    negative = "-" in integer_text

    kept = fraction_text[:precision].ljust(precision, "0")
    dropped = fraction_text[precision:]

    magnitude = int(integer_digits or "0") * 10**precision + int(kept or "0")
    return (-magnitude if negative else magnitude), dropped


def format_exact(magnitude: int, precision: int) -> str:
    """
    Fixed-point rendering with no rounding.
    e.g. (12345, 2) -> "123.45", (-1234, 8) -> "-0.00001234"
    """
    digits = str(abs(magnitude))
    sign = "-" if magnitude < 0 else ""
    if precision == 0:
        return f"{sign}{digits}"

    digits = digits.rjust(precision, "0")
    integer_part = digits[:-precision] or "0"
    fraction_part = digits[-precision:]
    return f"{sign}{integer_part}.{fraction_part}"


def format_rounded(magnitude: int, precision: int, places: int) -> str:
    """
    Fixed-point rendering with exactly `places` fractional digits, rounding
    half-up on the absolute value. Carries into the integer part naturally
    since rounding happens on the whole scaled integer.
    """
    if places >= precision:
        return format_exact(magnitude * 10 ** (places - precision), places)

    divisor = 10 ** (precision - places)
    quotient, remainder = divmod(abs(magnitude), divisor)
    if 2 * remainder >= divisor:
        quotient += 1

    if magnitude < 0 and quotient:
        quotient = -quotient
    return format_exact(quotient, places)


def to_safe_float(magnitude: int, precision: int) -> float:
    """
    Narrow a scaled integer to a float.

    Magnitudes beyond MAX_SAFE_INTEGER keep only their leading SAFE_DIGITS
    digits; the dropped digits are folded back in by lowering the effective
    precision. Lossy by nature.
    """
    if abs(magnitude) <= MAX_SAFE_INTEGER:
        return magnitude / 10**precision

    digits = str(abs(magnitude))
    dropped = len(digits) - SAFE_DIGITS
    truncated = int(digits[:SAFE_DIGITS])
    if magnitude < 0:
        truncated = -truncated

    effective_precision = precision - dropped
    if effective_precision >= 0:
        return truncated / 10**effective_precision
    return float(truncated * 10**-effective_precision)
