"""Realized volatility of a price history.

The estimate is the sample standard deviation of simple per-step returns,
written as ``sqrt(sum of squared deviations) * sqrt(n / (n - 1))``. It is not
annualized.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from pricing.errors import ZeroPriceError


def simple_returns(price_history: Sequence[float]) -> list[float]:
    """Per-step returns ``(p[i] - p[i-1]) / p[i-1]`` for consecutive prices."""
    returns: list[float] = []
    for i in range(1, len(price_history)):
        prev_price = price_history[i - 1]
        if prev_price == 0:
            raise ZeroPriceError(
                f"Cannot compute a return from a zero price at index {i - 1}."
            )
        returns.append((price_history[i] - prev_price) / prev_price)
    return returns


def estimate_volatility(price_history: Sequence[float]) -> float:
    """Volatility of ``price_history``; 0.0 with fewer than two observations."""
    if len(price_history) < 2:
        return 0.0

    returns = simple_returns(price_history)
    n = len(returns)
    mean = sum(returns) / n
    squared_diff_sum = sum((r - mean) ** 2 for r in returns)

    # One return has no spread; n - 1 would be zero below.
    if n == 1:
        return 0.0

    return math.sqrt(squared_diff_sum) * math.sqrt(n / (n - 1))
