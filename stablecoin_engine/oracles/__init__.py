"""Price feeds and the adapter that turns them into USD values."""
from .adapter import PriceOracleAdapter
from .mock import MockV3Aggregator
from .pyth import PriceUnavailable, PythOracle, PythPriceFeed, refresh_feeds

__all__ = [
    "MockV3Aggregator",
    "PriceOracleAdapter",
    "PriceUnavailable",
    "PythOracle",
    "PythPriceFeed",
    "refresh_feeds",
]
