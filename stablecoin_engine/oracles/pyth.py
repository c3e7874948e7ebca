"""Pyth Network price feeds."""
from __future__ import annotations

import logging
import ssl

import aiohttp
import certifi

from ..config import FEED_DECIMALS, PythConfig
from ..models import PriceRound

logger = logging.getLogger(__name__)


class PriceUnavailable(RuntimeError):
    """Raised when a feed is read before it has received any price."""


def _rescale(price_raw: int, expo: int, decimals: int) -> int:
    """Express ``price_raw * 10**expo`` as an integer with ``decimals`` places."""
    shift = decimals + expo
    if shift >= 0:
        return price_raw * 10**shift
    return price_raw // 10 ** (-shift)


class PythOracle:
    """Fetch latest prices from the Pyth Hermes API."""

    def __init__(self, config: PythConfig, decimals: int = FEED_DECIMALS) -> None:
        self.hermes_url = config.hermes_url
        self.price_feeds = dict(config.feeds)
        self.decimals = decimals

    async def fetch_rounds(self, symbols: list[str] | None = None) -> dict[str, PriceRound]:
        """Fetch current prices from Pyth Network.

        Args:
            symbols: Optional list of feed names to fetch. If None, fetches all
                     configured feeds.

        Feeds that fail to fetch are missing from the result.
        """
        rounds: dict[str, PriceRound] = {}

        feeds = self.price_feeds
        if symbols is not None:
            feeds = {k: v for k, v in self.price_feeds.items() if k in symbols}

        feed_ids = list(set(feeds.values()))
        if not feed_ids:
            return rounds

        query_params = "&".join([f"ids[]={fid}" for fid in feed_ids])
        url = f"{self.hermes_url}?{query_params}"

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.get(url) as response:
                    if response.status != 200:
                        logger.error(
                            "Error fetching prices from Pyth: HTTP %s", response.status
                        )
                        return rounds

                    data = await response.json()
                    parsed = data.get("parsed", [])

                    id_to_names: dict[str, list[str]] = {}
                    for name, feed_id in feeds.items():
                        id_to_names.setdefault(feed_id, []).append(name)

                    for item in parsed:
                        feed_id = item.get("id")
                        price_data = item.get("price", {})
                        price_raw = int(price_data.get("price", 0))
                        expo = int(price_data.get("expo", 0))
                        publish_time = int(price_data.get("publish_time", 0))

                        price_round = PriceRound(
                            round_id=publish_time,
                            answer=_rescale(price_raw, expo, self.decimals),
                            started_at=publish_time,
                            updated_at=publish_time,
                            answered_in_round=publish_time,
                        )

                        for name in id_to_names.get(feed_id, []):
                            rounds[name] = price_round

                    logger.info("Fetched prices from Pyth Network:")
                    for name, price_round in sorted(rounds.items()):
                        logger.info(
                            "  %s: %s (1e-%d)", name, price_round.answer, self.decimals
                        )

        except Exception as e:
            logger.error("Error fetching prices from Pyth: %s", e)

        return rounds


class PythPriceFeed:
    """Holds the last Pyth price pushed into it and serves it synchronously."""

    def __init__(self, name: str, decimals: int = FEED_DECIMALS) -> None:
        self.name = name
        self._decimals = decimals
        self._round: PriceRound | None = None

    @property
    def decimals(self) -> int:
        return self._decimals

    def update(self, price_round: PriceRound) -> None:
        self._round = price_round

    def latest_round_data(self) -> PriceRound:
        if self._round is None:
            raise PriceUnavailable(f"No price received yet for {self.name}")
        return self._round


async def refresh_feeds(oracle: PythOracle, feeds: dict[str, PythPriceFeed]) -> int:
    """Push freshly fetched prices into ``feeds``; returns how many were updated."""
    rounds = await oracle.fetch_rounds(list(feeds))
    for name, feed in feeds.items():
        price_round = rounds.get(name)
        if price_round is None:
            logger.warning("No Pyth price returned for %s", name)
            continue
        feed.update(price_round)
    return sum(1 for name in feeds if name in rounds)
