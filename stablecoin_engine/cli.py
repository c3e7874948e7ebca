"""Command-line interface for the collateral engine."""
from __future__ import annotations

import argparse
import asyncio
import sys
from decimal import Decimal, InvalidOperation

from .config import PRECISION, load_config
from .deploy import Deployment, deploy
from .logging_setup import configure_logging
from .oracles.pyth import PythPriceFeed, refresh_feeds


def _amount(text: str) -> Decimal:
    try:
        return Decimal(text)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {text!r}") from None


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="stablecoin-engine",
        description="Over-collateralized stable token engine",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("prices", help="USD value of one whole unit of each collateral")

    value_parser = sub.add_parser("value", help="USD value of a collateral amount")
    value_parser.add_argument("asset", help="Collateral symbol, e.g. WETH")
    value_parser.add_argument("amount", type=_amount, help="Amount in whole units")

    return parser


def _to_units(amount: Decimal) -> int:
    return int(amount * PRECISION)


def _format_usd(value: int) -> str:
    return f"${Decimal(value) / PRECISION:,.2f}"


async def _load(args: argparse.Namespace) -> Deployment:
    configure_logging(args.log_level)
    deployment = deploy(load_config(args.config))
    if deployment.oracle is not None:
        pyth_feeds = {
            name: feed
            for name, feed in deployment.price_feeds.items()
            if isinstance(feed, PythPriceFeed)
        }
        await refresh_feeds(deployment.oracle, pyth_feeds)
    return deployment


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected command."""
    deployment = await _load(args)
    engine = deployment.engine

    if args.command == "prices":
        for symbol, token in deployment.collateral.items():
            value = engine.get_usd_value(token.address, PRECISION)
            print(f"{symbol}: {_format_usd(value)}")
    elif args.command == "value":
        token = deployment.collateral.get(args.asset)
        if token is None:
            print(f"Unknown collateral: {args.asset}", file=sys.stderr)
            sys.exit(1)
        value = engine.get_usd_value(token.address, _to_units(args.amount))
        print(f"{args.amount} {args.asset} = {_format_usd(value)}")
    else:
        build_parser().print_help()
        sys.exit(1)


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    asyncio.run(_run(args))


if __name__ == "__main__":
    main()
