"""Logging and experiment storage models.

- ``DayLog`` — state of the market and portfolio after one simulated day.
- ``SimulationLog`` — run-level log with embedded config for reproducibility.
"""

from __future__ import annotations

from pydantic import BaseModel

from models.config import SimulationConfig
from models.portfolio import PortfolioSnapshot
from models.trade import ExecutedTrade


class DayLog(BaseModel):
    """Prices, option inputs and portfolio valuation at the close of one day."""

    day: int
    stock_price: float
    option_price: float
    option_volatility: float
    time_to_expiration: float
    portfolio: PortfolioSnapshot


class SimulationLog(BaseModel):
    """Run-level log with embedded configuration for reproducibility.

    ``stock_price_history`` and ``option_price_history`` are the finite
    ordered series a chart renderer consumes.
    """

    run_name: str
    config: SimulationConfig
    option_quantity: int = 0
    stock_quantity: int = 0
    initial_portfolio: PortfolioSnapshot | None = None
    day_logs: list[DayLog] = []
    stock_price_history: list[float] = []
    option_price_history: list[float] = []
    trades: list[ExecutedTrade] = []
    final_portfolio: PortfolioSnapshot | None = None
    errors: list[str] = []

    @property
    def completed_days(self) -> int:
        return len(self.day_logs)
