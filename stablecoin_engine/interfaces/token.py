"""Token protocols — fungible asset and pegged token abstractions."""
from typing import Protocol


class FungibleToken(Protocol):
    """Abstract interface for a fungible asset; failures are signalled by ``False``."""

    @property
    def address(self) -> str: ...

    def balance_of(self, account: str) -> int: ...

    def transfer(self, sender: str, recipient: str, amount: int) -> bool: ...

    def transfer_from(
        self, spender: str, sender: str, recipient: str, amount: int
    ) -> bool: ...


class StableToken(FungibleToken, Protocol):
    """Pegged token whose mint and burn are gated to its owner."""

    def mint(self, caller: str, to: str, amount: int) -> bool: ...

    def burn(self, caller: str, amount: int) -> None: ...
