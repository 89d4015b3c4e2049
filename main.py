import argparse
import json
import logging
import os
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

from bigunit.config import config_path_from_env, load_config
from bigunit.errors import BigUnitError
from bigunit.logging_utils import configure_logging
from bigunit.portfolio import format_summary, value_portfolio
from bigunit.unit import BigUnitEncoder

logger = logging.getLogger("main")


def main(argv=None) -> int:
    load_dotenv()
    configure_logging(command="portfolio")

    # Parse Args
    parser = argparse.ArgumentParser(description="Value a portfolio of exact decimal balances")
    parser.add_argument("portfolio_file", nargs="?", help="Path to the portfolio file (YAML)")
    parser.add_argument("--config", help="Path to the portfolio file (YAML)")
    parser.add_argument("--places", type=int, help="Fractional digits to display (overrides the file)")
    parser.add_argument("--json", action="store_true", help="Print the valuation as JSON")
    args = parser.parse_args(argv)

    portfolio_file = args.config or args.portfolio_file or config_path_from_env()

    if not portfolio_file:
        parser.print_help()
        return 2

    if not os.path.exists(portfolio_file):
        logger.error(f"Portfolio file not found at {portfolio_file}")
        return 1

    try:
        config = load_config(portfolio_file)
        logger.info(f"Loaded portfolio with {len(config.holdings)} holdings quoted in {config.quote.label}")
    except (ValidationError, ValueError, OSError) as e:
        logger.error(f"Failed to load portfolio: {e}")
        return 1

    places = args.places if args.places is not None else config.display_places
    try:
        summary = value_portfolio(config)
        if args.json:
            output = [json.dumps(summary.to_dict(), cls=BigUnitEncoder, indent=2)]
        else:
            output = format_summary(summary, places)
    except BigUnitError as e:
        logger.error(f"Valuation failed: {e}")
        return 1

    for line in output:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
