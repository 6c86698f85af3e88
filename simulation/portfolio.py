"""In-process portfolio: holdings bookkeeping and mark-to-market valuation.

Holdings are kept as an ordered list of independent instrument copies, one
entry per unit, in purchase order. ``initial_value`` is a running sum of
purchase prices and ``current_value`` is rebuilt from the holdings on every
``update_portfolio`` call.

A portfolio is single-writer: ``update_portfolio`` reads and rewrites every
holding and the aggregate value, so callers sharing one across threads must
serialize access to it.
"""

from __future__ import annotations

import logging
import math
import uuid
from collections import Counter
from typing import Literal

from models.instruments import Holding
from models.portfolio import PortfolioSnapshot
from models.trade import ExecutedTrade

logger = logging.getLogger(__name__)

# Units bought by ``buy_value`` when the instrument is (nearly) free.
NEAR_ZERO_PRICE = 0.001
NEAR_ZERO_PRICE_QUANTITY = 100_000


class Portfolio:
    """Holds stocks and options and tracks invested and current value."""

    def __init__(self, initial_value: float = 0.0) -> None:
        self._initial_value = initial_value
        self._current_value = initial_value
        self._items: list[Holding] = []
        self._trade_history: list[ExecutedTrade] = []

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    @property
    def initial_value(self) -> float:
        return self._initial_value

    @property
    def current_value(self) -> float:
        return self._current_value

    @property
    def items(self) -> list[Holding]:
        """Holdings in purchase order.

        The list is a copy but its entries are the live holdings; change
        their prices through ``update_portfolio`` so ``current_value`` follows.
        """
        return list(self._items)

    def get_trade_history(self) -> list[ExecutedTrade]:
        """Return the full list of executed trades so far."""
        return list(self._trade_history)

    def change_percentage(self) -> float | None:
        """Percent change of current over invested value, or ``None`` if nothing is invested."""
        if self._initial_value == 0:
            return None
        return (self._current_value - self._initial_value) / self._initial_value * 100.0

    def snapshot(self) -> PortfolioSnapshot:
        """Return a snapshot of the current portfolio state."""
        positions = Counter(f"{h.instrument_type}:{h.name}" for h in self._items)
        return PortfolioSnapshot(
            initial_value=self._initial_value,
            current_value=self._current_value,
            positions=dict(positions),
            change_percentage=self.change_percentage(),
        )

    def buy(self, item: Holding, quantity: int) -> None:
        """Buy ``quantity`` units of ``item`` at its current price.

        Each unit adds the price to both running totals and appends its own
        copy of ``item`` to the holdings.
        """
        _check_quantity(quantity)
        for _ in range(quantity):
            price = item.get_price()
            self._initial_value += price
            self._current_value += price
            self._items.append(item.model_copy(deep=True))

        if quantity:
            self._record_trade(item, "buy", quantity)
        logger.debug("Bought %d x %s %s.", quantity, item.instrument_type, item.name)

    def sell(self, item: Holding, quantity: int) -> None:
        """Sell up to ``quantity`` holdings matching ``item``, oldest first.

        Every unit sold debits ``item.get_price()`` (the caller's price, not
        the holding's stored one). Asking for more than is held sells what
        there is.
        """
        _check_quantity(quantity)
        remaining = quantity
        remove_indices: list[int] = []

        for i, holding in enumerate(self._items):
            if remaining < 1:
                break
            if holding.matches(item):
                price = item.get_price()
                self._initial_value -= price
                self._current_value -= price
                remaining -= 1
                remove_indices.append(i)

        for index in reversed(remove_indices):
            del self._items[index]

        sold = len(remove_indices)
        if sold:
            self._record_trade(item, "sell", sold)
        if sold < quantity:
            logger.info(
                "Requested to sell %d x %s but only %d held.", quantity, item.name, sold
            )

    def buy_value(self, item: Holding, value: float) -> int:
        """Spend up to ``value`` on whole units of ``item``; return the units bought."""
        price = item.get_price()
        if price > NEAR_ZERO_PRICE:
            quantity = math.floor(value / price)
        else:
            quantity = NEAR_ZERO_PRICE_QUANTITY
            logger.warning(
                "Price of %s is %.6f; buying the fixed fallback of %d units.",
                item.name,
                price,
                quantity,
            )

        self.buy(item, quantity)
        return quantity

    def update_portfolio(self, item: Holding) -> None:
        """Mark every holding matching ``item`` to its price and revalue."""
        price = item.get_price()
        for holding in self._items:
            if holding.matches(item):
                holding.set_price(price)

        self._current_value = sum((holding.get_price() for holding in self._items), 0.0)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _record_trade(
        self, item: Holding, side: Literal["buy", "sell"], quantity: int
    ) -> None:
        self._trade_history.append(
            ExecutedTrade(
                trade_id=uuid.uuid4().hex[:12],
                instrument_type=item.instrument_type,
                name=item.name,
                side=side,
                quantity=quantity,
                price=item.get_price(),
            )
        )


def _check_quantity(quantity: int) -> None:
    if quantity < 0:
        raise ValueError(f"Quantity must be non-negative, got {quantity}.")
