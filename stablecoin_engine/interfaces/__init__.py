"""Protocol interfaces for the engine's external collaborators."""
from .price_feed import PriceFeed
from .token import FungibleToken, StableToken

__all__ = ["FungibleToken", "PriceFeed", "StableToken"]
