from decimal import Decimal
from typing import Union

from bigunit.precision import validate_precision
from bigunit.unit import BigUnit, BigUnitish


class BigUnitFactory:
    """
    Creates BigUnit values that share one precision and label.
    e.g. BTC = BigUnitFactory(8, "BTC"); BTC.from_value("0.5")
    """

    def __init__(self, precision: int, label: str = ""):
        self.precision = validate_precision(precision)
        self.label = label or ""

    def from_value(self, value: BigUnitish) -> BigUnit:
        return BigUnit.from_value(value, self.precision, self.label)

    def from_int(self, value: int) -> BigUnit:
        return BigUnit.from_int(value, self.precision, self.label)

    def from_number(self, value: Union[int, float]) -> BigUnit:
        return BigUnit.from_number(value, self.precision, self.label)

    def from_decimal_string(self, text: str) -> BigUnit:
        return BigUnit.from_decimal_string(text, self.precision, self.label)

    def from_decimal(self, value: Decimal) -> BigUnit:
        return BigUnit.from_value(value, self.precision, self.label)

    def zero(self) -> BigUnit:
        return BigUnit(0, self.precision, self.label)

    def __repr__(self) -> str:
        return f"BigUnitFactory({self.precision}, {self.label!r})"
