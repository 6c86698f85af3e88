"""Data models for the option market simulation.

The pricing engine, portfolio and runner all import from models.
"""

from models.config import OptionConfig, PortfolioConfig, SimulationConfig, StockConfig
from models.instruments import DAYS_PER_YEAR, Holding, Option, Priceable, Stock
from models.log import DayLog, SimulationLog
from models.portfolio import PortfolioSnapshot
from models.trade import ExecutedTrade

__all__ = [
    # config
    "OptionConfig",
    "PortfolioConfig",
    "SimulationConfig",
    "StockConfig",
    # instruments
    "DAYS_PER_YEAR",
    "Holding",
    "Option",
    "Priceable",
    "Stock",
    # log
    "DayLog",
    "SimulationLog",
    # portfolio
    "PortfolioSnapshot",
    # trade
    "ExecutedTrade",
]
