import pytest
from pydantic import ValidationError

from bigunit.config import HoldingSpec, PortfolioConfig, UnitSpec, config_path_from_env, load_config
from bigunit.types import RoundingMethod


def _config(**overrides):
    data = {
        "quote": {"label": "USD", "precision": 4},
        "units": [{"label": "BTC", "precision": 8}],
        "holdings": [{"unit": "BTC", "amount": "0.5", "rate": "60000"}],
    }
    data.update(overrides)
    return PortfolioConfig(**data)


def test_defaults():
    config = _config()
    assert config.display_places == 2
    assert config.rounding == RoundingMethod.TRUNCATE


def test_rounding_from_text():
    assert _config(rounding="Nearest").rounding == RoundingMethod.NEAREST


def test_rejects_unknown_rounding():
    with pytest.raises(ValidationError):
        _config(rounding="Banker")


def test_rejects_negative_precision():
    with pytest.raises(ValidationError):
        UnitSpec(label="BTC", precision=-1)


def test_rejects_empty_label():
    with pytest.raises(ValidationError) as exc:
        UnitSpec(label="  ", precision=2)
    assert "Unit label must not be empty." in str(exc.value)


def test_numeric_amounts_become_decimal_text():
    holding = HoldingSpec(unit="BTC", amount=0.1, rate=60000)
    assert holding.amount == "0.1"
    assert holding.rate == "60000"


def test_rejects_boolean_amount():
    with pytest.raises(ValidationError):
        HoldingSpec(unit="BTC", amount=True, rate="1")


def test_rejects_malformed_amount():
    with pytest.raises(ValidationError):
        HoldingSpec(unit="BTC", amount="1.2.3", rate="1")


def test_rejects_duplicate_units():
    with pytest.raises(ValidationError) as exc:
        _config(units=[{"label": "BTC", "precision": 8}, {"label": "BTC", "precision": 6}])
    assert "Duplicate unit labels: BTC." in str(exc.value)


def test_rejects_unknown_holding_unit():
    with pytest.raises(ValidationError) as exc:
        _config(holdings=[{"unit": "ETH", "amount": "1", "rate": "1"}])
    assert "Holding refers to unknown unit ETH." in str(exc.value)


def test_load_config(tmp_path):
    path = tmp_path / "portfolio.yaml"
    path.write_text(
        "quote: {label: USD, precision: 2}\n"
        "rounding: Ceiling\n"
        "units:\n"
        "  - {label: DOT, precision: 10}\n"
        "holdings:\n"
        "  - {unit: DOT, amount: 1.25, rate: '35'}\n"
    )
    config = load_config(str(path))
    assert config.quote.label == "USD"
    assert config.rounding == RoundingMethod.CEILING
    assert config.holdings[0].amount == "1.25"


def test_load_config_rejects_non_mapping(tmp_path):
    path = tmp_path / "portfolio.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ValueError, match="must be a mapping"):
        load_config(str(path))


def test_config_path_from_env(monkeypatch):
    monkeypatch.setenv("BIGUNIT_PORTFOLIO_FILE", "/tmp/portfolio.yaml")
    assert config_path_from_env() == "/tmp/portfolio.yaml"
    monkeypatch.delenv("BIGUNIT_PORTFOLIO_FILE")
    assert config_path_from_env() is None
