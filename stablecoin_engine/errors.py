"""Engine error kinds. Every one aborts the enclosing operation."""
from __future__ import annotations


class EngineError(Exception):
    """Base exception for all collateral engine errors."""


class ZeroAmount(EngineError):
    """Raised when an amount is zero or negative."""

    def __init__(self) -> None:
        super().__init__("Amount must be more than zero")


class LengthMismatch(EngineError):
    """Raised at construction when token and price feed lists differ in length."""

    def __init__(self, tokens: int, price_feeds: int) -> None:
        super().__init__(
            f"Token addresses and price feed addresses must be the same length "
            f"({tokens} != {price_feeds})"
        )
        self.tokens = tokens
        self.price_feeds = price_feeds


class TokenNotAllowed(EngineError):
    """Raised when an asset is not in the approved collateral set."""

    def __init__(self, asset: str) -> None:
        super().__init__(f"Token not allowed as collateral: {asset}")
        self.asset = asset


class TransferFailed(EngineError):
    """Raised when a token collaborator reports a failed transfer."""


class MintFailed(EngineError):
    """Raised when the stable token refuses to mint."""


class BurnFailed(EngineError):
    """Raised when the stable token refuses to burn."""


class InvalidHealthFactor(EngineError):
    """Raised when an operation would leave an account below the minimum health factor."""

    def __init__(self, health_factor: int) -> None:
        super().__init__(f"Health factor below minimum: {health_factor}")
        self.health_factor = health_factor


class InsufficientBalance(EngineError):
    """Raised when a ledger decrease exceeds the recorded amount."""

    def __init__(self, available: int, requested: int) -> None:
        super().__init__(
            f"Insufficient balance: requested {requested}, available {available}"
        )
        self.available = available
        self.requested = requested


class ReentrantCall(EngineError):
    """Raised when a public operation is entered while another is in progress."""

    def __init__(self) -> None:
        super().__init__("Reentrant call")
