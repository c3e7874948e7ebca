"""USD valuation of a collateral amount from a price feed."""
from __future__ import annotations

import logging

from ..config import PRECISION
from ..interfaces.price_feed import PriceFeed

logger = logging.getLogger(__name__)


class PriceOracleAdapter:
    """Convert an amount of one collateral asset into 18-decimal USD.

    The feed is re-read on every call and its answer is trusted as-is:
    no staleness or bounds check is applied. A wrapper feed that validates
    ``updated_at`` can be slotted in without touching the engine.
    """

    def __init__(self, asset: str, feed: PriceFeed, precision: int = PRECISION) -> None:
        if 10**feed.decimals > precision:
            raise ValueError(
                f"Price feed for {asset} has {feed.decimals} decimals, "
                f"more than the engine precision allows"
            )
        self.asset = asset
        self.feed = feed
        self.precision = precision
        # 8-decimal feeds need 1e10 to reach 18 decimals
        self.additional_feed_precision = precision // 10**feed.decimals

    def value_in_quote_units(self, amount: int) -> int:
        price = self.feed.latest_round_data().answer
        value = price * self.additional_feed_precision * amount // self.precision
        logger.debug("USD value of %d %s at %d: %d", amount, self.asset, price, value)
        return value
