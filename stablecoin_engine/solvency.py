"""Health factor computation and the minimum-solvency check."""
from __future__ import annotations

import logging
from collections.abc import Mapping

from .config import EngineParams
from .errors import InvalidHealthFactor
from .ledgers import CollateralLedger, DebtLedger
from .models import AccountInformation
from .oracles.adapter import PriceOracleAdapter

logger = logging.getLogger(__name__)

# Largest uint256; reported for accounts with no debt.
MAX_HEALTH_FACTOR = 2**256 - 1


class SolvencyEngine:
    """Values an account's collateral and derives its health factor.

    Only ``liquidation_threshold / liquidation_precision`` of the collateral
    value counts toward solvency, so with the defaults an account needs 200%
    collateral to hold a health factor of 1.
    """

    def __init__(
        self,
        collateral: CollateralLedger,
        debt: DebtLedger,
        adapters: Mapping[str, PriceOracleAdapter],
        params: EngineParams,
    ) -> None:
        self._collateral = collateral
        self._debt = debt
        self._adapters = adapters
        self._params = params

    def account_collateral_value(self, account: str) -> int:
        total = 0
        for asset, adapter in self._adapters.items():
            total += adapter.value_in_quote_units(self._collateral.balance(account, asset))
        return total

    def account_information(self, account: str) -> AccountInformation:
        return AccountInformation(
            total_minted=self._debt.get(account),
            collateral_value_usd=self.account_collateral_value(account),
        )

    def health_factor(self, account: str) -> int:
        info = self.account_information(account)
        if info.total_minted == 0:
            return MAX_HEALTH_FACTOR
        p = self._params
        adjusted = info.collateral_value_usd * p.liquidation_threshold // p.liquidation_precision
        health_factor = adjusted * p.precision // info.total_minted
        logger.debug(
            "Health factor for %s: %d (collateral %d, debt %d)",
            account,
            health_factor,
            info.collateral_value_usd,
            info.total_minted,
        )
        return health_factor

    def assert_solvent(self, account: str) -> None:
        health_factor = self.health_factor(account)
        if health_factor < self._params.min_health_factor:
            raise InvalidHealthFactor(health_factor)
