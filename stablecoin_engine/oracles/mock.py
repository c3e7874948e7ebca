"""In-process price feed for local deployments and tests."""
from __future__ import annotations

import time

from ..models import PriceRound


class MockV3Aggregator:
    """Aggregator-style feed whose answer is set by hand."""

    def __init__(self, decimals: int, initial_answer: int) -> None:
        self._decimals = decimals
        self.latest_round = 0
        self.latest_answer = 0
        self.latest_timestamp = 0
        self.update_answer(initial_answer)

    @property
    def decimals(self) -> int:
        return self._decimals

    def update_answer(self, answer: int) -> None:
        self.latest_round += 1
        self.latest_answer = answer
        self.latest_timestamp = int(time.time())

    def latest_round_data(self) -> PriceRound:
        return PriceRound(
            round_id=self.latest_round,
            answer=self.latest_answer,
            started_at=self.latest_timestamp,
            updated_at=self.latest_timestamp,
            answered_in_round=self.latest_round,
        )
