from decimal import Decimal

import pytest

from bigunit.errors import InvalidPrecision
from bigunit.factory import BigUnitFactory


def test_properties():
    btc = BigUnitFactory(8, "BTC")
    assert btc.precision == 8
    assert btc.label == "BTC"


def test_rejects_invalid_precision():
    with pytest.raises(InvalidPrecision):
        BigUnitFactory(8.5)
    with pytest.raises(InvalidPrecision):
        BigUnitFactory(-8)


def test_from_number():
    unit = BigUnitFactory(8).from_value(1.5)
    assert unit.magnitude == 150000000
    assert unit.precision == 8
    assert BigUnitFactory(8).from_number(1.5).magnitude == 150000000


def test_from_string_number():
    unit = BigUnitFactory(8).from_value("15.1")
    assert unit.magnitude == 1510000000
    assert BigUnitFactory(8).from_decimal_string("15.1").magnitude == 1510000000


def test_from_int():
    unit = BigUnitFactory(8).from_value(15)
    assert unit.magnitude == 15
    assert unit.to_exact_string() == "0.00000015"
    assert BigUnitFactory(8).from_int(15).magnitude == 15


def test_from_decimal():
    assert BigUnitFactory(8).from_decimal(Decimal("0.1")).magnitude == 10000000


def test_label_is_applied():
    btc = BigUnitFactory(8, "BTC")
    assert btc.from_value("1").label == "BTC"
    assert btc.from_int(1).label == "BTC"
    assert btc.zero().label == "BTC"


def test_zero():
    zero = BigUnitFactory(4, "USD").zero()
    assert zero.is_zero()
    assert zero.precision == 4


def test_units_from_one_factory_combine():
    btc = BigUnitFactory(8, "BTC")
    total = btc.from_value(123.456).add(btc.from_value("0.00000012")).add(btc.from_int(1234567))
    assert total.to_exact_string() == "123.46834579"
    fee = total.percent(20)
    assert fee.to_exact_string() == "24.69366915"
