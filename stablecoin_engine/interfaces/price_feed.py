"""Price feed protocol — external oracle abstraction."""
from typing import Protocol

from ..models import PriceRound


class PriceFeed(Protocol):
    """Abstract interface for a single-asset USD price feed."""

    @property
    def decimals(self) -> int: ...

    def latest_round_data(self) -> PriceRound: ...
