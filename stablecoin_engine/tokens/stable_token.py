"""The pegged stable token: an ERC20 whose supply only its owner controls."""
from __future__ import annotations

import logging

from .erc20 import ZERO_ADDRESS, ERC20Token
from .errors import (
    AmountMustBeMoreThanZero,
    BurnAmountExceedsBalance,
    NotOwner,
    NotZeroAddress,
)

logger = logging.getLogger(__name__)


class StableToken(ERC20Token):
    """Owner-gated mint and burn; the owner is meant to be the collateral engine."""

    def __init__(
        self,
        address: str,
        owner: str,
        name: str = "DecentralizedStableCoin",
        symbol: str = "DSC",
    ) -> None:
        super().__init__(address, name, symbol)
        self.owner = owner

    def _only_owner(self, caller: str) -> None:
        if caller != self.owner:
            raise NotOwner(f"{caller} is not the owner of {self.symbol}")

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        self._only_owner(caller)
        if new_owner == ZERO_ADDRESS:
            raise NotZeroAddress("New owner is the zero address")
        logger.info("%s ownership transferred from %s to %s", self.symbol, self.owner, new_owner)
        self.owner = new_owner

    def mint(self, caller: str, to: str, amount: int) -> bool:
        self._only_owner(caller)
        if to == ZERO_ADDRESS:
            raise NotZeroAddress("Cannot mint to the zero address")
        if amount <= 0:
            raise AmountMustBeMoreThanZero("Mint amount must be more than zero")
        self._mint(to, amount)
        return True

    def burn(self, caller: str, amount: int) -> None:
        """Burn ``amount`` from the caller's (the owner's) own balance."""
        self._only_owner(caller)
        if amount <= 0:
            raise AmountMustBeMoreThanZero("Burn amount must be more than zero")
        if self.balance_of(caller) < amount:
            raise BurnAmountExceedsBalance(
                f"Burn amount {amount} exceeds balance {self.balance_of(caller)}"
            )
        self._burn(caller, amount)
