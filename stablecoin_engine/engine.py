"""Collateral engine — deposits, redemptions, and stable-token mint/burn.

Every public mutating operation is non-reentrant and runs inside a
journal-backed transaction: if any step raises, ledger changes, emitted
events and tokens already pulled into custody are all put back before the
error propagates.

Within an operation every ledger mutation comes first, then the solvency
check, then the token effects (pull in, then burn, mint or send out). The
health factor only depends on the ledgers and the price feeds, so checking
before any token moves gives the same verdict as checking after, and a
rejected position never spends an allowance.
"""
from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import Any, TypeVar

from .config import EngineParams
from .errors import LengthMismatch, ReentrantCall, TokenNotAllowed, TransferFailed, ZeroAmount
from .interfaces.price_feed import PriceFeed
from .interfaces.token import FungibleToken, StableToken
from .ledgers import CollateralLedger, DebtLedger, Journal
from .models import AccountInformation, CollateralDeposited, CollateralRedeemed
from .oracles.adapter import PriceOracleAdapter
from .solvency import SolvencyEngine
from .tokens.controller import StableTokenController

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def non_reentrant(method: F) -> F:
    """Reject entry while another guarded operation on the engine is running."""

    @functools.wraps(method)
    def wrapper(self: CollateralEngine, *args: Any, **kwargs: Any) -> Any:
        if self._entered:
            raise ReentrantCall()
        self._entered = True
        try:
            return method(self, *args, **kwargs)
        finally:
            self._entered = False

    return wrapper  # type: ignore[return-value]


def _require_positive(amount: int) -> None:
    if amount <= 0:
        raise ZeroAmount()


class CollateralEngine:
    """Over-collateralized issuance of a pegged token against approved collateral."""

    def __init__(
        self,
        address: str,
        collateral_tokens: Sequence[FungibleToken],
        price_feeds: Sequence[PriceFeed],
        stable_token: StableToken,
        params: EngineParams | None = None,
    ) -> None:
        if len(collateral_tokens) != len(price_feeds):
            raise LengthMismatch(len(collateral_tokens), len(price_feeds))

        self.address = address
        self.params = params or EngineParams()

        self._tokens: dict[str, FungibleToken] = {}
        self._adapters: dict[str, PriceOracleAdapter] = {}
        for token, feed in zip(collateral_tokens, price_feeds):
            self._tokens[token.address] = token
            self._adapters[token.address] = PriceOracleAdapter(
                token.address, feed, self.params.precision
            )

        self._collateral = CollateralLedger()
        self._debt = DebtLedger()
        self._solvency = SolvencyEngine(
            self._collateral, self._debt, self._adapters, self.params
        )
        self._stable = StableTokenController(stable_token, address)

        self.events: list[CollateralDeposited | CollateralRedeemed] = []
        self._entered = False

    # ------------------------------------------------------------------
    # Transaction plumbing
    # ------------------------------------------------------------------

    @contextmanager
    def _transaction(self, name: str) -> Iterator[Journal]:
        journal = Journal()
        try:
            yield journal
        except Exception as e:
            logger.warning("%s rolled back (%d steps): %r", name, len(journal), e)
            journal.rollback()
            raise
        journal.commit()

    def _emit(self, event: CollateralDeposited | CollateralRedeemed, journal: Journal) -> None:
        self.events.append(event)
        journal.record(f"drop {event}", self.events.pop)

    # ------------------------------------------------------------------
    # Ledger steps (no guard, always inside a transaction)
    # ------------------------------------------------------------------

    def _record_deposit(
        self, journal: Journal, account: str, asset: str, amount: int
    ) -> FungibleToken:
        _require_positive(amount)
        token = self._tokens.get(asset)
        if token is None:
            raise TokenNotAllowed(asset)
        self._collateral.increase((account, asset), amount, journal)
        self._emit(CollateralDeposited(account, asset, amount), journal)
        return token

    def _record_redeem(self, journal: Journal, account: str, asset: str, amount: int) -> None:
        _require_positive(amount)
        self._collateral.decrease((account, asset), amount, journal)
        self._emit(CollateralRedeemed(account, asset, amount), journal)

    def _record_mint(self, journal: Journal, account: str, amount: int) -> None:
        _require_positive(amount)
        self._debt.increase(account, amount, journal)

    def _record_burn(self, journal: Journal, account: str, amount: int) -> None:
        _require_positive(amount)
        self._debt.decrease(account, amount, journal)

    # ------------------------------------------------------------------
    # Token effects (only after the solvency check has passed)
    # ------------------------------------------------------------------

    def _pull_collateral(
        self, journal: Journal, token: FungibleToken, account: str, amount: int
    ) -> None:
        if not token.transfer_from(self.address, account, self.address, amount):
            raise TransferFailed(f"Could not pull {amount} of {token.address} from {account}")
        journal.record(
            f"return {amount} of {token.address} to {account}",
            lambda: token.transfer(self.address, account, amount),
        )
        logger.info("%s deposited %d of %s", account, amount, token.address)

    def _send_collateral(self, account: str, asset: str, amount: int) -> None:
        if not self._tokens[asset].transfer(self.address, account, amount):
            raise TransferFailed(f"Could not send {amount} of {asset} to {account}")
        logger.info("%s redeemed %d of %s", account, amount, asset)

    def _mint_to(self, account: str, amount: int) -> None:
        self._stable.mint(account, amount)
        logger.info("%s minted %d", account, amount)

    def _burn_from(self, journal: Journal, account: str, amount: int) -> None:
        self._stable.burn_from(account, amount, journal)
        logger.info("%s burned %d", account, amount)

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    @non_reentrant
    def deposit_collateral(self, account: str, asset: str, amount: int) -> None:
        with self._transaction("deposit_collateral") as journal:
            token = self._record_deposit(journal, account, asset, amount)
            self._pull_collateral(journal, token, account, amount)

    @non_reentrant
    def mint_stable(self, account: str, amount: int) -> None:
        with self._transaction("mint_stable") as journal:
            self._record_mint(journal, account, amount)
            self._solvency.assert_solvent(account)
            self._mint_to(account, amount)

    @non_reentrant
    def redeem_collateral(self, account: str, asset: str, amount: int) -> None:
        with self._transaction("redeem_collateral") as journal:
            self._record_redeem(journal, account, asset, amount)
            self._solvency.assert_solvent(account)
            self._send_collateral(account, asset, amount)

    @non_reentrant
    def burn_stable(self, account: str, amount: int) -> None:
        with self._transaction("burn_stable") as journal:
            self._record_burn(journal, account, amount)
            # can only improve the health factor; kept as a guard
            self._solvency.assert_solvent(account)
            self._burn_from(journal, account, amount)

    @non_reentrant
    def deposit_collateral_and_mint(
        self, account: str, asset: str, amount_collateral: int, amount_debt: int
    ) -> None:
        _require_positive(amount_collateral)
        _require_positive(amount_debt)
        with self._transaction("deposit_collateral_and_mint") as journal:
            token = self._record_deposit(journal, account, asset, amount_collateral)
            self._record_mint(journal, account, amount_debt)
            self._solvency.assert_solvent(account)
            self._pull_collateral(journal, token, account, amount_collateral)
            self._mint_to(account, amount_debt)

    @non_reentrant
    def redeem_collateral_for_burn(
        self, account: str, asset: str, amount_collateral: int, amount_debt: int
    ) -> None:
        _require_positive(amount_collateral)
        _require_positive(amount_debt)
        with self._transaction("redeem_collateral_for_burn") as journal:
            self._record_burn(journal, account, amount_debt)
            self._record_redeem(journal, account, asset, amount_collateral)
            self._solvency.assert_solvent(account)
            self._burn_from(journal, account, amount_debt)
            self._send_collateral(account, asset, amount_collateral)


    def liquidate(self, *args: Any, **kwargs: Any) -> None:
        """Not implemented: no state change."""

    def get_health_factor(self, account: str) -> None:
        """Not implemented: returns no value."""

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def collateral_tokens(self) -> tuple[str, ...]:
        return tuple(self._tokens)

    def get_collateral_balance(self, account: str, asset: str) -> int:
        return self._collateral.balance(account, asset)

    def get_minted(self, account: str) -> int:
        return self._debt.get(account)

    def get_usd_value(self, asset: str, amount: int) -> int:
        adapter = self._adapters.get(asset)
        if adapter is None:
            raise TokenNotAllowed(asset)
        return adapter.value_in_quote_units(amount)

    def get_account_collateral_value(self, account: str) -> int:
        return self._solvency.account_collateral_value(account)

    def get_account_information(self, account: str) -> AccountInformation:
        return self._solvency.account_information(account)
