"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from stablecoin_engine.config import EngineParams
from stablecoin_engine.engine import CollateralEngine
from stablecoin_engine.oracles.mock import MockV3Aggregator
from stablecoin_engine.tokens.erc20 import ERC20Token
from stablecoin_engine.tokens.stable_token import StableToken

from tests.constants import (
    AMOUNT_COLLATERAL,
    BTC_USD_PRICE,
    DEPLOYER,
    ENGINE,
    ETH_USD_PRICE,
    STARTING_BALANCE,
    USER,
)


# ---------------------------------------------------------------------------
# Contract fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def weth() -> ERC20Token:
    return ERC20Token("0xweth", "Wrapped Ether", "WETH")


@pytest.fixture()
def wbtc() -> ERC20Token:
    return ERC20Token("0xwbtc", "Wrapped Bitcoin", "WBTC")


@pytest.fixture()
def eth_feed() -> MockV3Aggregator:
    return MockV3Aggregator(8, ETH_USD_PRICE)


@pytest.fixture()
def btc_feed() -> MockV3Aggregator:
    return MockV3Aggregator(8, BTC_USD_PRICE)


@pytest.fixture()
def stable() -> StableToken:
    return StableToken("0xdsc", owner=DEPLOYER)


@pytest.fixture()
def engine(
    weth: ERC20Token,
    wbtc: ERC20Token,
    eth_feed: MockV3Aggregator,
    btc_feed: MockV3Aggregator,
    stable: StableToken,
) -> CollateralEngine:
    engine = CollateralEngine(
        ENGINE, [weth, wbtc], [eth_feed, btc_feed], stable, EngineParams()
    )
    stable.transfer_ownership(DEPLOYER, engine.address)
    return engine


@pytest.fixture()
def funded_user(weth: ERC20Token, wbtc: ERC20Token) -> str:
    """USER holds STARTING_BALANCE of both collaterals and approved the engine."""
    for token in (weth, wbtc):
        token.faucet(USER, STARTING_BALANCE)
        token.approve(USER, ENGINE, STARTING_BALANCE)
    return USER


@pytest.fixture()
def deposited(engine: CollateralEngine, weth: ERC20Token, funded_user: str) -> str:
    """USER deposited AMOUNT_COLLATERAL of WETH ($20,000)."""
    engine.deposit_collateral(funded_user, weth.address, AMOUNT_COLLATERAL)
    return funded_user


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    deployer: "0xdeployer"
    engine:
      liquidation_threshold: 50
      liquidation_precision: 100
    collateral:
      assets: [WETH, WBTC]
      price_feeds: [ETH/USD, BTC/USD]
    price_oracle:
      provider: mock
      mock:
        decimals: 8
        answers:
          ETH/USD: 200000000000
          BTC/USD: 100000000000
      pyth:
        hermes_url: "https://hermes.example.com"
        feeds: {ETH/USD: "aaa", BTC/USD: "bbb"}
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
