"""Collateral and debt ledgers, plus the undo journal that makes them transactional."""
from __future__ import annotations

import logging
from collections.abc import Callable, Hashable
from typing import Generic, TypeVar

from .errors import InsufficientBalance, ZeroAmount

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)


class Journal:
    """Undo log for one operation.

    Every recorded action reverses one effect. ``rollback`` runs them
    newest first; ``commit`` discards them.
    """

    def __init__(self) -> None:
        self._undo: list[tuple[str, Callable[[], object]]] = []

    def __len__(self) -> int:
        return len(self._undo)

    def record(self, description: str, undo: Callable[[], object]) -> None:
        self._undo.append((description, undo))

    def rollback(self) -> None:
        """Run every undo action, newest first, even if some of them fail.

        The first failure is re-raised once all actions have run.
        """
        errors: list[Exception] = []
        while self._undo:
            description, undo = self._undo.pop()
            logger.debug("Undo: %s", description)
            try:
                undo()
            except Exception as e:
                logger.error("Undo failed (%s): %r", description, e)
                errors.append(e)
        if errors:
            raise errors[0]

    def commit(self) -> None:
        self._undo.clear()


class _AmountStore(Generic[K]):
    """Non-negative integer amounts keyed by ``K``; missing keys read as zero."""

    def __init__(self) -> None:
        self._amounts: dict[K, int] = {}

    def get(self, key: K) -> int:
        return self._amounts.get(key, 0)

    def _set(self, key: K, amount: int) -> None:
        self._amounts[key] = amount

    def increase(self, key: K, amount: int, journal: Journal | None = None) -> None:
        if amount <= 0:
            raise ZeroAmount()
        previous = self.get(key)
        self._set(key, previous + amount)
        if journal is not None:
            journal.record(f"increase {key} by {amount}", lambda: self._set(key, previous))

    def decrease(self, key: K, amount: int, journal: Journal | None = None) -> None:
        if amount <= 0:
            raise ZeroAmount()
        previous = self.get(key)
        if previous < amount:
            raise InsufficientBalance(previous, amount)
        self._set(key, previous - amount)
        if journal is not None:
            journal.record(f"decrease {key} by {amount}", lambda: self._set(key, previous))


class CollateralLedger(_AmountStore[tuple[str, str]]):
    """Deposited amount per ``(account, asset)``."""

    def balance(self, account: str, asset: str) -> int:
        return self.get((account, asset))


class DebtLedger(_AmountStore[str]):
    """Minted stable-token debt per account."""
