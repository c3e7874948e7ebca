"""In-memory fungible token with balances and allowances."""
from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class ERC20Token:
    """Fungible token keyed by account address.

    ``transfer`` and ``transfer_from`` return ``False`` instead of raising
    when the balance or allowance is short.
    """

    def __init__(self, address: str, name: str, symbol: str, decimals: int = 18) -> None:
        self._address = address
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self.total_supply = 0
        self._balances: dict[str, int] = {}
        self._allowances: dict[tuple[str, str], int] = {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.symbol!r}, {self._address!r})"

    @property
    def address(self) -> str:
        return self._address

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    def approve(self, owner: str, spender: str, amount: int) -> bool:
        self._allowances[(owner, spender)] = amount
        return True

    def transfer(self, sender: str, recipient: str, amount: int) -> bool:
        return self._move(sender, recipient, amount)

    def transfer_from(self, spender: str, sender: str, recipient: str, amount: int) -> bool:
        allowed = self.allowance(sender, spender)
        if allowed < amount:
            logger.debug(
                "%s: allowance %d of %s for %s below %d",
                self.symbol, allowed, sender, spender, amount,
            )
            return False
        if not self._move(sender, recipient, amount):
            return False
        self._allowances[(sender, spender)] = allowed - amount
        return True

    def faucet(self, to: str, amount: int) -> None:
        """Create ``amount`` tokens for ``to`` out of thin air (local use only)."""
        self._mint(to, amount)

    def _move(self, sender: str, recipient: str, amount: int) -> bool:
        if amount < 0 or recipient == ZERO_ADDRESS:
            return False
        balance = self.balance_of(sender)
        if balance < amount:
            return False
        self._balances[sender] = balance - amount
        self._balances[recipient] = self.balance_of(recipient) + amount
        return True

    def _mint(self, to: str, amount: int) -> None:
        self._balances[to] = self.balance_of(to) + amount
        self.total_supply += amount

    def _burn(self, holder: str, amount: int) -> None:
        self._balances[holder] = self.balance_of(holder) - amount
        self.total_supply -= amount
