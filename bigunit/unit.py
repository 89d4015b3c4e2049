import json
import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Any, Dict, Optional, Tuple, Union

from bigunit.constants import DEFAULT_ROUNDING, MAX_SAFE_INTEGER, PERCENT_BACKOUT_EXTRA_DIGITS
from bigunit.convert import (
    decimal_to_string,
    format_exact,
    format_rounded,
    number_to_decimal_string,
    parse_decimal_string,
    to_safe_float,
)
from bigunit.errors import (
    DivisionByZero,
    InvalidFraction,
    InvalidValueType,
    MissingPrecision,
)
from bigunit.precision import Precision, truncated_divmod, validate_precision
from bigunit.schema import validate_unit_object
from bigunit.types import RoundingMethod

logger = logging.getLogger(__name__)

BigUnitish = Union["BigUnit", int, float, str, Decimal]


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, Decimal):
        return value.is_finite()
    return False


def _number_text(value: Union[int, float, Decimal]) -> str:
    if isinstance(value, Decimal):
        return decimal_to_string(value)
    return number_to_decimal_string(value)


@dataclass(frozen=True, eq=False)
class BigUnit:
    """
    An exact decimal quantity stored as a scaled integer.

    `magnitude` is the decimal value multiplied by 10**precision, e.g.
    BigUnit(12345, 2) is 123.45. Equality and ordering are numeric: operands
    are aligned to the larger precision before their magnitudes are compared,
    so BigUnit(100, 2) == BigUnit(1, 0). The label is carried through but never
    compared.
    """

    magnitude: int
    precision: int
    label: str = ""

    def __post_init__(self):
        if isinstance(self.magnitude, bool) or not isinstance(self.magnitude, int):
            raise InvalidValueType(self.magnitude, "magnitude must be an int")
        object.__setattr__(self, "precision", validate_precision(self.precision))
        if self.label is None:
            object.__setattr__(self, "label", "")

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_int(cls, value: int, precision: int, label: str = "") -> "BigUnit":
        """Wrap an integer that is already scaled to `precision`."""
        return cls(value, precision, label)

    @classmethod
    def from_decimal_string(cls, text: str, precision: int, label: str = "") -> "BigUnit":
        """
        Parse a decimal string, e.g. "1.23456".

        Fractional digits beyond `precision` are truncated, not rounded.
        """
        if not isinstance(text, str):
            raise InvalidValueType(text, "expected a decimal string")
        precision = validate_precision(precision)
        magnitude, dropped = parse_decimal_string(text, precision)
        if dropped.strip("0"):
            logger.warning("Truncating fractional part of %s to %d digits", text, precision)
        return cls(magnitude, precision, label)

    @classmethod
    def from_number(cls, value: float, precision: int, label: str = "") -> "BigUnit":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidValueType(value, "expected a number")
        return cls.from_decimal_string(number_to_decimal_string(value), precision, label)

    @classmethod
    def from_value(
        cls,
        value: BigUnitish,
        precision: Optional[int] = None,
        label: str = "",
    ) -> "BigUnit":
        """
        Build a unit from any supported input.

        An existing unit is returned as-is, or rescaled if a different
        precision is requested. Every other input needs an explicit precision.
        """
        if isinstance(value, BigUnit):
            if precision is None or precision == value.precision:
                return value
            return value.as_precision(precision)

        if precision is None:
            raise MissingPrecision(value)

        if isinstance(value, bool):
            raise InvalidValueType(value)
        if isinstance(value, int):
            return cls.from_int(value, precision, label)
        if isinstance(value, float):
            return cls.from_number(value, precision, label)
        if isinstance(value, str):
            return cls.from_decimal_string(value, precision, label)
        if isinstance(value, Decimal):
            return cls.from_decimal_string(decimal_to_string(value), precision, label)
        raise InvalidValueType(value)

    @classmethod
    def from_object(cls, data: Dict[str, Any]) -> "BigUnit":
        validate_unit_object(data)
        magnitude = data["magnitude"]
        if isinstance(magnitude, str):
            magnitude = int(magnitude)
        return cls(magnitude, data["precision"], data.get("label") or "")

    @classmethod
    def from_json(cls, text: str) -> "BigUnit":
        return cls.from_object(json.loads(text))

    # ------------------------------------------------------------------
    # Precision
    # ------------------------------------------------------------------

    def as_precision(
        self,
        precision: int,
        rounding: RoundingMethod = DEFAULT_ROUNDING,
    ) -> "BigUnit":
        scale = Precision(precision)
        if scale.decimals == self.precision:
            return self
        magnitude = scale.rescale(self.magnitude, self.precision, rounding)
        return BigUnit(magnitude, scale.decimals, self.label)

    def as_other_precision(self, other: "BigUnit") -> "BigUnit":
        return self.as_precision(other.precision)

    def _coerce(self, other: BigUnitish, other_precision: Optional[int] = None) -> "BigUnit":
        if isinstance(other, BigUnit):
            return other
        if isinstance(other, int) and not isinstance(other, bool) and other_precision is None:
            raise MissingPrecision(other)
        return BigUnit.from_value(other, self.precision if other_precision is None else other_precision)

    def _align(
        self,
        other: BigUnitish,
        precision: Optional[int] = None,
        other_precision: Optional[int] = None,
    ) -> Tuple[int, int, int]:
        """
        Rescale both operands to a common precision.

        The target is the larger of the two precisions unless an explicit
        override is given. Returns (self magnitude, other magnitude, target).
        """
        other = self._coerce(other, other_precision)
        if precision is None:
            scale = Precision(max(self.precision, other.precision))
        else:
            scale = Precision(precision)
        return (
            scale.rescale(self.magnitude, self.precision),
            scale.rescale(other.magnitude, other.precision),
            scale.decimals,
        )

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, other: BigUnitish, precision: Optional[int] = None, other_precision: Optional[int] = None) -> "BigUnit":
        a, b, target = self._align(other, precision, other_precision)
        return BigUnit(a + b, target, self.label)

    def sub(self, other: BigUnitish, precision: Optional[int] = None, other_precision: Optional[int] = None) -> "BigUnit":
        a, b, target = self._align(other, precision, other_precision)
        return BigUnit(a - b, target, self.label)

    def mul(self, other: BigUnitish, precision: Optional[int] = None, other_precision: Optional[int] = None) -> "BigUnit":
        a, b, target = self._align(other, precision, other_precision)
        # The product carries the scale twice
        product, _ = truncated_divmod(a * b, 10**target)
        return BigUnit(product, target, self.label)

    def div(self, other: BigUnitish, precision: Optional[int] = None, other_precision: Optional[int] = None) -> "BigUnit":
        a, b, target = self._align(other, precision, other_precision)
        if b == 0:
            raise DivisionByZero("div")
        quotient, _ = truncated_divmod(a * 10**target, b)
        return BigUnit(quotient, target, self.label)

    def mod(self, other: BigUnitish, precision: Optional[int] = None, other_precision: Optional[int] = None) -> "BigUnit":
        a, b, target = self._align(other, precision, other_precision)
        if b == 0:
            raise DivisionByZero("mod")
        _, remainder = truncated_divmod(a, b)
        return BigUnit(remainder, target, self.label)

    def fraction(self, numerator: Union[int, float, Decimal], denominator: Union[int, float, Decimal]) -> "BigUnit":
        """
        Returns numerator/denominator of this value at this precision.
        e.g. BigUnit(10000, 2).fraction(1, 4) -> BigUnit(2500, 2)
        """
        if not (_is_finite_number(numerator) and _is_finite_number(denominator)):
            raise InvalidFraction(numerator, denominator)
        if denominator == 0:
            raise DivisionByZero("fraction")

        numerator_unit = BigUnit.from_decimal_string(_number_text(numerator), self.precision)
        denominator_unit = BigUnit.from_decimal_string(_number_text(denominator), self.precision)
        return self.mul(numerator_unit).div(denominator_unit)

    def percent(self, percent: Union[int, float, Decimal]) -> "BigUnit":
        return self.fraction(percent, 100)

    def percent_backout(self, percent: Union[int, float, Decimal]) -> "BigUnit":
        """
        Removes a percentage that was previously added on top of a base value.
        e.g. 110.00 with 10 backed out -> 100.00

        The divisor 1 + percent/100 is built at precision + 2 digits, so the
        percent itself keeps only `precision` fractional digits and the rest is
        truncated (7.125 backed out of a precision-0 value behaves as 7).
        """
        work = self.precision + PERCENT_BACKOUT_EXTRA_DIGITS
        one = BigUnit(10**work, work)
        return self.div(one.add(one.percent(percent))).as_precision(self.precision)

    def abs(self) -> "BigUnit":
        return BigUnit(abs(self.magnitude), self.precision, self.label)

    def neg(self) -> "BigUnit":
        return BigUnit(-self.magnitude, self.precision, self.label)

    @staticmethod
    def _pick(a: "BigUnit", b: "BigUnit", largest: bool) -> "BigUnit":
        if not isinstance(a, BigUnit) or not isinstance(b, BigUnit):
            raise InvalidValueType(b if isinstance(a, BigUnit) else a, "expected BigUnit operands")
        if a.gt(b):
            return a if largest else b
        if a.lt(b):
            return b if largest else a
        # Equal value: higher precision wins, then the label that sorts first
        if a.precision != b.precision:
            return a if a.precision > b.precision else b
        return a if a.label <= b.label else b

    @staticmethod
    def max(a: "BigUnit", b: "BigUnit") -> "BigUnit":
        return BigUnit._pick(a, b, largest=True)

    @staticmethod
    def min(a: "BigUnit", b: "BigUnit") -> "BigUnit":
        return BigUnit._pick(a, b, largest=False)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def eq(self, other: BigUnitish, precision: Optional[int] = None, other_precision: Optional[int] = None) -> bool:
        a, b, _ = self._align(other, precision, other_precision)
        return a == b

    def gt(self, other: BigUnitish, precision: Optional[int] = None, other_precision: Optional[int] = None) -> bool:
        a, b, _ = self._align(other, precision, other_precision)
        return a > b

    def lt(self, other: BigUnitish, precision: Optional[int] = None, other_precision: Optional[int] = None) -> bool:
        a, b, _ = self._align(other, precision, other_precision)
        return a < b

    def gte(self, other: BigUnitish, precision: Optional[int] = None, other_precision: Optional[int] = None) -> bool:
        a, b, _ = self._align(other, precision, other_precision)
        return a >= b

    def lte(self, other: BigUnitish, precision: Optional[int] = None, other_precision: Optional[int] = None) -> bool:
        a, b, _ = self._align(other, precision, other_precision)
        return a <= b

    def is_zero(self) -> bool:
        return self.magnitude == 0

    def is_positive(self) -> bool:
        return self.magnitude > 0

    def is_negative(self) -> bool:
        return self.magnitude < 0

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def to_number(self) -> float:
        if abs(self.magnitude) > MAX_SAFE_INTEGER:
            logger.debug("Narrowing %s beyond the safe float range", self.to_value_string())
        return to_safe_float(self.magnitude, self.precision)

    def to_exact_string(self) -> str:
        return format_exact(self.magnitude, self.precision)

    def format(self, places: int) -> str:
        """Fixed-point string with exactly `places` fractional digits, rounded half-up."""
        return format_rounded(self.magnitude, self.precision, validate_precision(places))

    def to_value_string(self) -> str:
        return str(self.magnitude)

    def to_decimal(self) -> Decimal:
        return Decimal(self.to_exact_string())

    def to_object(self) -> Dict[str, Any]:
        return {
            "magnitude": self.to_value_string(),
            "precision": self.precision,
            "label": self.label,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_object())

    # ------------------------------------------------------------------
    # Python protocol
    # ------------------------------------------------------------------

    def _operand(self, other: Any) -> Optional["BigUnit"]:
        """Operator operands: plain ints count as whole numbers, strings are not accepted."""
        if isinstance(other, BigUnit):
            return other
        if not _is_finite_number(other):
            return None
        if isinstance(other, int):
            return BigUnit.from_decimal_string(str(other), self.precision)
        return BigUnit.from_value(other, self.precision)

    def __str__(self) -> str:
        return self.to_exact_string()

    def __float__(self) -> float:
        return self.to_number()

    def __bool__(self) -> bool:
        return self.magnitude != 0

    def _exact(self) -> Fraction:
        return Fraction(self.magnitude, 10**self.precision)

    @staticmethod
    def _exact_operand(other: Any) -> Optional[Fraction]:
        # Comparisons use the operand's exact value, never a rescaled copy
        if isinstance(other, BigUnit):
            return other._exact()
        if not _is_finite_number(other):
            return None
        return Fraction(other)

    def __hash__(self):
        return hash(self._exact())

    def __eq__(self, other):
        operand = self._exact_operand(other)
        if operand is None:
            return NotImplemented
        return self._exact() == operand

    def __lt__(self, other):
        operand = self._exact_operand(other)
        if operand is None:
            return NotImplemented
        return self._exact() < operand

    def __le__(self, other):
        operand = self._exact_operand(other)
        if operand is None:
            return NotImplemented
        return self._exact() <= operand

    def __gt__(self, other):
        operand = self._exact_operand(other)
        if operand is None:
            return NotImplemented
        return self._exact() > operand

    def __ge__(self, other):
        operand = self._exact_operand(other)
        if operand is None:
            return NotImplemented
        return self._exact() >= operand

    def __add__(self, other):
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.add(operand)

    def __radd__(self, other):
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return operand.add(self)

    def __sub__(self, other):
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.sub(operand)

    def __rsub__(self, other):
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return operand.sub(self)

    def __mul__(self, other):
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.mul(operand)

    def __rmul__(self, other):
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return operand.mul(self)

    def __truediv__(self, other):
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.div(operand)

    def __rtruediv__(self, other):
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return operand.div(self)

    def __mod__(self, other):
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.mod(operand)

    def __rmod__(self, other):
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return operand.mod(self)

    def __neg__(self):
        return self.neg()

    def __abs__(self):
        return self.abs()


class BigUnitEncoder(json.JSONEncoder):
    """JSON encoder that writes BigUnit values in their structured object form."""

    def default(self, obj):
        if isinstance(obj, BigUnit):
            return obj.to_object()
        if isinstance(obj, Decimal):
            return format(obj, "f")
        return super(BigUnitEncoder, self).default(obj)
