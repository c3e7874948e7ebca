"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

PRECISION = 10**18
FEED_DECIMALS = 8
LIQUIDATION_THRESHOLD = 50  # 200% overcollateralized
LIQUIDATION_PRECISION = 100
MIN_HEALTH_FACTOR = 10**18

PROVIDERS = ("mock", "pyth")

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EngineParams:
    liquidation_threshold: int = LIQUIDATION_THRESHOLD
    liquidation_precision: int = LIQUIDATION_PRECISION
    precision: int = PRECISION
    min_health_factor: int = MIN_HEALTH_FACTOR


@dataclass(frozen=True)
class CollateralConfig:
    """Approved collateral symbols and the feed name backing each, index-aligned."""

    assets: tuple[str, ...] = ()
    price_feeds: tuple[str, ...] = ()


@dataclass(frozen=True)
class PythConfig:
    hermes_url: str = "https://hermes.pyth.network/v2/updates/price/latest"
    feeds: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class MockFeedConfig:
    decimals: int = FEED_DECIMALS
    answers: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class PriceOracleConfig:
    provider: str = "mock"
    pyth: PythConfig = field(default_factory=PythConfig)
    mock: MockFeedConfig = field(default_factory=MockFeedConfig)


@dataclass(frozen=True)
class AppConfig:
    deployer: str = "0x0000000000000000000000000000000000000001"
    engine: EngineParams = field(default_factory=EngineParams)
    collateral: CollateralConfig = field(default_factory=CollateralConfig)
    price_oracle: PriceOracleConfig = field(default_factory=PriceOracleConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_engine(raw: dict[str, Any]) -> EngineParams:
    return EngineParams(
        liquidation_threshold=int(raw.get("liquidation_threshold", LIQUIDATION_THRESHOLD)),
        liquidation_precision=int(raw.get("liquidation_precision", LIQUIDATION_PRECISION)),
        precision=int(raw.get("precision", PRECISION)),
        min_health_factor=int(raw.get("min_health_factor", MIN_HEALTH_FACTOR)),
    )


def _build_collateral(raw: dict[str, Any]) -> CollateralConfig:
    return CollateralConfig(
        assets=tuple(raw.get("assets", [])),
        price_feeds=tuple(raw.get("price_feeds", [])),
    )


def _build_price_oracle(raw: dict[str, Any]) -> PriceOracleConfig:
    pyth_raw = raw.get("pyth", {})
    mock_raw = raw.get("mock", {})
    return PriceOracleConfig(
        provider=raw.get("provider", "mock"),
        pyth=PythConfig(
            hermes_url=pyth_raw.get("hermes_url", PythConfig.hermes_url),
            feeds=dict(pyth_raw.get("feeds", {})),
        ),
        mock=MockFeedConfig(
            decimals=int(mock_raw.get("decimals", FEED_DECIMALS)),
            answers={k: int(v) for k, v in mock_raw.get("answers", {}).items()},
        ),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (two levels up from this file).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        deployer=raw.get("deployer", AppConfig.deployer),
        engine=_build_engine(raw.get("engine", {})),
        collateral=_build_collateral(raw.get("collateral", {})),
        price_oracle=_build_price_oracle(raw.get("price_oracle", {})),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration.

    The ``assets`` / ``price_feeds`` lengths are left to the engine
    constructor, which rejects a mismatch with ``LengthMismatch``.
    """
    engine = cfg.engine
    if engine.liquidation_precision <= 0 or engine.precision <= 0:
        raise ValueError("Precision values must be positive")
    if not 0 < engine.liquidation_threshold <= engine.liquidation_precision:
        raise ValueError(
            "Liquidation threshold must be within (0, liquidation_precision]"
        )
    if engine.min_health_factor <= 0:
        raise ValueError("Minimum health factor must be positive")

    if not cfg.collateral.assets:
        raise ValueError("At least one collateral asset must be configured")

    oracle = cfg.price_oracle
    if oracle.provider not in PROVIDERS:
        raise ValueError(f"Unknown price oracle provider '{oracle.provider}'")

    for feed in cfg.collateral.price_feeds:
        if oracle.provider == "pyth" and not oracle.pyth.feeds.get(feed):
            raise ValueError(f"Price feed '{feed}' has no Pyth feed id")
        if oracle.provider == "mock" and feed not in oracle.mock.answers:
            raise ValueError(f"Price feed '{feed}' has no mock answer")
