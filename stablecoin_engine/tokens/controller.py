"""Delegate through which the engine mints and burns the stable token."""
from __future__ import annotations

import logging

from ..errors import BurnFailed, MintFailed, TransferFailed
from ..interfaces.token import StableToken
from ..ledgers import Journal
from .errors import TokenError

logger = logging.getLogger(__name__)


class StableTokenController:
    """Mints and burns on behalf of accounts, acting as the token's owner."""

    def __init__(self, token: StableToken, engine_address: str) -> None:
        self.token = token
        self.engine_address = engine_address

    def mint(self, to: str, amount: int) -> None:
        try:
            minted = self.token.mint(self.engine_address, to, amount)
        except TokenError as e:
            raise MintFailed(str(e)) from e
        if not minted:
            raise MintFailed(f"Mint of {amount} to {to} refused")

    def burn_from(self, account: str, amount: int, journal: Journal) -> None:
        """Pull ``amount`` from ``account`` into custody and destroy it."""
        if not self.token.transfer_from(self.engine_address, account, self.engine_address, amount):
            raise TransferFailed(f"Could not pull {amount} stable tokens from {account}")
        journal.record(
            f"return {amount} stable tokens to {account}",
            lambda: self.token.transfer(self.engine_address, account, amount),
        )

        try:
            self.token.burn(self.engine_address, amount)
        except TokenError as e:
            raise BurnFailed(str(e)) from e
        journal.record(
            f"restore {amount} burned stable tokens",
            lambda: self.token.mint(self.engine_address, self.engine_address, amount),
        )
