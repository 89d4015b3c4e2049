import logging
from dataclasses import dataclass
from typing import Dict, List

from bigunit.config import PortfolioConfig
from bigunit.factory import BigUnitFactory
from bigunit.unit import BigUnit

logger = logging.getLogger(__name__)


@dataclass
class HoldingValue:
    amount: BigUnit
    rate: BigUnit
    value: BigUnit


@dataclass
class PortfolioSummary:
    quote_label: str
    holdings: List[HoldingValue]
    total: BigUnit

    def to_dict(self) -> Dict:
        return {
            "quote": self.quote_label,
            "holdings": [
                {"amount": h.amount, "rate": h.rate, "value": h.value}
                for h in self.holdings
            ],
            "total": self.total,
        }


def value_portfolio(config: PortfolioConfig) -> PortfolioSummary:
    """
    Values every holding in the quote unit and sums them.
    Each holding's value is amount * rate, rescaled to the quote precision.
    """
    quote = BigUnitFactory(config.quote.precision, config.quote.label)
    factories = {spec.label: BigUnitFactory(spec.precision, spec.label) for spec in config.units}

    total = quote.zero()
    holdings: List[HoldingValue] = []
    for holding in config.holdings:
        amount = factories[holding.unit].from_decimal_string(holding.amount)
        rate = quote.from_decimal_string(holding.rate)
        product = amount.mul(rate).as_precision(quote.precision, config.rounding)
        value = quote.from_int(product.magnitude)
        logger.debug("Valued %s %s at %s %s", amount, amount.label, value, value.label)

        holdings.append(HoldingValue(amount=amount, rate=rate, value=value))
        total = total.add(value)

    logger.info("Valued %d holdings, total %s %s", len(holdings), total, total.label)
    return PortfolioSummary(quote_label=quote.label, holdings=holdings, total=total)


def format_summary(summary: PortfolioSummary, places: int) -> List[str]:
    lines = []
    for h in summary.holdings:
        lines.append(
            f"{h.amount.label} {h.amount} @ {h.rate.format(places)} = "
            f"{h.value.format(places)} {summary.quote_label}"
        )
    lines.append(f"Total: {summary.total.format(places)} {summary.quote_label}")
    return lines
