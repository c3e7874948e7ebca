"""Unit tests for config loading, env interpolation, and validation."""
from __future__ import annotations

from pathlib import Path

import pytest

from stablecoin_engine.config import (
    AppConfig,
    CollateralConfig,
    EngineParams,
    _interpolate_env,
    load_config,
)

BASE_YAML = """\
collateral:
  assets: [WETH]
  price_feeds: [ETH/USD]
price_oracle:
  provider: mock
  mock:
    answers: {ETH/USD: 200000000000}
"""


def _write(tmp_path: Path, content: str) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(content)
    return cfg_file


class TestInterpolateEnv:
    def test_simple_substitution(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_VAR", "hello")
        assert _interpolate_env("${MY_VAR}") == "hello"

    def test_missing_var_becomes_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NONEXISTENT_VAR_XYZ", raising=False)
        assert _interpolate_env("${NONEXISTENT_VAR_XYZ}") == ""

    def test_nested_dict(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FEED", "0xfeed")
        result = _interpolate_env({"key": "${FEED}", "plain": "text"})
        assert result == {"key": "0xfeed", "plain": "text"}

    def test_nested_list(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("A", "x")
        assert _interpolate_env(["${A}", "y"]) == ["x", "y"]

    def test_non_string_passthrough(self) -> None:
        assert _interpolate_env(42) == 42
        assert _interpolate_env(True) is True


class TestLoadConfig:
    def test_loads_valid_yaml(self, sample_yaml_path: Path) -> None:
        cfg = load_config(sample_yaml_path)
        assert isinstance(cfg, AppConfig)
        assert cfg.deployer == "0xdeployer"
        assert cfg.collateral.assets == ("WETH", "WBTC")
        assert cfg.collateral.price_feeds == ("ETH/USD", "BTC/USD")
        assert cfg.price_oracle.mock.answers["ETH/USD"] == 2000 * 10**8
        assert cfg.price_oracle.pyth.feeds["BTC/USD"] == "bbb"

    def test_engine_defaults(self, tmp_path: Path) -> None:
        cfg = load_config(_write(tmp_path, BASE_YAML))
        assert cfg.engine == EngineParams()
        assert cfg.engine.liquidation_threshold == 50
        assert cfg.engine.liquidation_precision == 100
        assert cfg.engine.min_health_factor == 10**18

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nonexistent.yaml")

    def test_env_interpolation_in_yaml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ETH_FEED_ID", "0xabc")
        content = """\
collateral:
  assets: [WETH]
  price_feeds: [ETH/USD]
price_oracle:
  provider: pyth
  pyth:
    feeds: {ETH/USD: "${ETH_FEED_ID}"}
"""
        cfg = load_config(_write(tmp_path, content))
        assert cfg.price_oracle.pyth.feeds["ETH/USD"] == "0xabc"

    def test_length_mismatch_left_to_engine(self, tmp_path: Path) -> None:
        content = BASE_YAML.replace("assets: [WETH]", "assets: [WETH, WBTC]")
        cfg = load_config(_write(tmp_path, content))
        assert len(cfg.collateral.assets) != len(cfg.collateral.price_feeds)


class TestValidation:
    def test_no_collateral_raises(self, tmp_path: Path) -> None:
        content = "collateral:\n  assets: []\n  price_feeds: []\n"
        with pytest.raises(ValueError, match="At least one collateral"):
            load_config(_write(tmp_path, content))

    def test_unknown_provider_raises(self, tmp_path: Path) -> None:
        content = BASE_YAML.replace("provider: mock", "provider: chainlink")
        with pytest.raises(ValueError, match="Unknown price oracle provider"):
            load_config(_write(tmp_path, content))

    def test_missing_mock_answer_raises(self, tmp_path: Path) -> None:
        content = BASE_YAML.replace("{ETH/USD: 200000000000}", "{}")
        with pytest.raises(ValueError, match="no mock answer"):
            load_config(_write(tmp_path, content))

    def test_empty_pyth_feed_id_raises(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("UNSET_FEED_ID", raising=False)
        content = """\
collateral:
  assets: [WETH]
  price_feeds: [ETH/USD]
price_oracle:
  provider: pyth
  pyth:
    feeds: {ETH/USD: "${UNSET_FEED_ID}"}
"""
        with pytest.raises(ValueError, match="no Pyth feed id"):
            load_config(_write(tmp_path, content))

    def test_threshold_out_of_range_raises(self, tmp_path: Path) -> None:
        content = BASE_YAML + "engine:\n  liquidation_threshold: 150\n"
        with pytest.raises(ValueError, match="Liquidation threshold"):
            load_config(_write(tmp_path, content))

    def test_zero_precision_raises(self, tmp_path: Path) -> None:
        content = BASE_YAML + "engine:\n  liquidation_precision: 0\n"
        with pytest.raises(ValueError, match="Precision"):
            load_config(_write(tmp_path, content))


class TestFrozenConfigs:
    def test_engine_params_immutable(self) -> None:
        p = EngineParams()
        with pytest.raises(AttributeError):
            p.liquidation_threshold = 80  # type: ignore[misc]

    def test_collateral_config_immutable(self) -> None:
        c = CollateralConfig(assets=("WETH",), price_feeds=("ETH/USD",))
        with pytest.raises(AttributeError):
            c.assets = ()  # type: ignore[misc]
