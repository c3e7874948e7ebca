"""Wire collateral tokens, price feeds, the stable token and the engine together."""
from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass

from .config import AppConfig
from .engine import CollateralEngine
from .interfaces.price_feed import PriceFeed
from .oracles.mock import MockV3Aggregator
from .oracles.pyth import PythOracle, PythPriceFeed
from .tokens.erc20 import ERC20Token
from .tokens.stable_token import StableToken

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Deployment:
    engine: CollateralEngine
    stable_token: StableToken
    collateral: dict[str, ERC20Token]
    price_feeds: dict[str, PriceFeed]
    oracle: PythOracle | None = None


def _address(label: str) -> str:
    """Deterministic pseudo-address for an in-process contract."""
    return "0x" + hashlib.sha256(label.encode()).hexdigest()[:40]


def _build_feeds(config: AppConfig) -> tuple[dict[str, PriceFeed], PythOracle | None]:
    oracle_cfg = config.price_oracle
    names = dict.fromkeys(config.collateral.price_feeds)

    if oracle_cfg.provider == "pyth":
        oracle = PythOracle(oracle_cfg.pyth)
        return {name: PythPriceFeed(name) for name in names}, oracle

    feeds: dict[str, PriceFeed] = {
        name: MockV3Aggregator(oracle_cfg.mock.decimals, oracle_cfg.mock.answers[name])
        for name in names
    }
    return feeds, None


def deploy(config: AppConfig) -> Deployment:
    """Deploy everything described by ``config`` and hand the stable token to the engine.

    Raises ``LengthMismatch`` when the configured asset and price feed lists
    differ in length.
    """
    deployer = config.deployer
    feeds, oracle = _build_feeds(config)

    collateral = {
        symbol: ERC20Token(_address(f"collateral:{symbol}"), symbol, symbol)
        for symbol in config.collateral.assets
    }

    stable_token = StableToken(_address("stable"), owner=deployer)
    engine = CollateralEngine(
        _address("engine"),
        list(collateral.values()),
        [feeds[name] for name in config.collateral.price_feeds],
        stable_token,
        config.engine,
    )
    stable_token.transfer_ownership(deployer, engine.address)

    logger.info(
        "Deployed engine %s with collateral %s (%s feeds)",
        engine.address,
        ", ".join(collateral),
        config.price_oracle.provider,
    )
    return Deployment(
        engine=engine,
        stable_token=stable_token,
        collateral=collateral,
        price_feeds=feeds,
        oracle=oracle,
    )
