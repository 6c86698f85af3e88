"""Market feeds: where the stock's next price comes from.

The simulation only needs one float per simulated day. Generating realistic
prices is left to whoever implements ``MarketFeed``; ``ReplayFeed`` replays
a fixed series, which is what tests and recorded runs use.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from models.instruments import Stock


class FeedExhausted(RuntimeError):
    """The feed has no price left for the requested day."""


class MarketFeed(Protocol):
    """Produces the stock's price for the next simulated day."""

    def next_price(self, stock: Stock) -> float: ...


class ReplayFeed:
    """Replays ``prices`` in order, one per call, ignoring the stock's state."""

    def __init__(self, prices: Iterable[float]) -> None:
        self._prices = [float(p) for p in prices]
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._prices)

    @property
    def remaining(self) -> int:
        return len(self._prices) - self._cursor

    def next_price(self, stock: Stock) -> float:
        if self._cursor >= len(self._prices):
            raise FeedExhausted(
                f"Replay feed for {stock.name} ran out after {len(self._prices)} price(s)."
            )
        price = self._prices[self._cursor]
        self._cursor += 1
        return price
