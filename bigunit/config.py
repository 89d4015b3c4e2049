import os
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from bigunit.constants import DEFAULT_DISPLAY_PLACES, DEFAULT_ROUNDING
from bigunit.convert import number_to_decimal_string, parse_decimal_string
from bigunit.types import RoundingMethod


class UnitSpec(BaseModel):
    label: str
    precision: int = Field(ge=0)

    @field_validator("label")
    @classmethod
    def validate_label(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Unit label must not be empty.")
        return v.strip()


class HoldingSpec(BaseModel):
    unit: str
    amount: str
    rate: str

    @field_validator("amount", "rate", mode="before")
    @classmethod
    def coerce_decimal_text(cls, v):
        # YAML hands back floats/ints for unquoted numbers
        if isinstance(v, bool):
            raise ValueError(f"Expected a decimal number, got {v!r}.")
        if isinstance(v, (int, float)):
            return number_to_decimal_string(v)
        return v

    @field_validator("amount", "rate")
    @classmethod
    def validate_decimal_text(cls, v: str) -> str:
        parse_decimal_string(v, 0)
        return v.strip()


class PortfolioConfig(BaseModel):
    quote: UnitSpec
    units: List[UnitSpec]
    holdings: List[HoldingSpec]
    display_places: int = Field(default=DEFAULT_DISPLAY_PLACES, ge=0)
    rounding: RoundingMethod = DEFAULT_ROUNDING

    @model_validator(mode="after")
    def validate_holdings(self):
        labels = [u.label for u in self.units]
        duplicates = sorted({label for label in labels if labels.count(label) > 1})
        if duplicates:
            raise ValueError(f"Duplicate unit labels: {', '.join(duplicates)}.")
        for holding in self.holdings:
            if holding.unit not in labels:
                raise ValueError(f"Holding refers to unknown unit {holding.unit}.")
        return self


def config_path_from_env() -> Optional[str]:
    return os.getenv("BIGUNIT_PORTFOLIO_FILE")


def load_config(path: str) -> PortfolioConfig:
    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Portfolio config {path} must be a mapping.")

    return PortfolioConfig(**data)
