"""Simulation runner: the daily step loop.

Lifecycle:
    1. Build the stock, the option written on it and the portfolio from config.
    2. Spend the configured budgets on whole option units (and shares).
    3. For each day:
        - Take the stock's next price from the market feed.
        - Reprice the option from the stock's price and its history so far.
        - Record both prices in their histories.
        - Mark the portfolio to market for the stock, then for the option.
        - Log the day.
    4. Finalise and, when an output directory is given, write the run to disk.

A pricing failure or an exhausted feed stops the run at the failing day; the
days already simulated are kept and the error is recorded in the log.
"""

from __future__ import annotations

import logging
from typing import Any

from models.config import SimulationConfig
from models.instruments import Option, Stock
from models.log import DayLog, SimulationLog
from pricing.errors import PricingError
from simulation.feed import FeedExhausted, MarketFeed
from simulation.portfolio import Portfolio
from simulation.sim_logging import SimulationLogger, run_name_from_config_path

logger = logging.getLogger(__name__)


class SimulationRunner:
    """Drives one simulation run over ``config.num_days`` days."""

    def __init__(
        self,
        config: SimulationConfig,
        feed: MarketFeed,
        config_yaml_path: str | None = None,
        output_dir: str | None = None,
        run_name: str | None = None,
    ) -> None:
        self._config = config
        self._feed = feed
        self._config_yaml_path = config_yaml_path
        if run_name is None:
            run_name = (
                run_name_from_config_path(config_yaml_path)
                if config_yaml_path is not None
                else "simulation"
            )
        self._sim_logger = (
            SimulationLogger(output_dir, run_name) if output_dir is not None else None
        )
        if self._sim_logger is not None:
            # A repeated run name gets a numeric suffix on disk.
            run_name = self._sim_logger.run_dir.name
        self._run_name = run_name

        self._stock = _build_stock(config)
        self._option = Option.on_stock(
            self._stock,
            config.option.option_type,
            config.option.strike_price,
            config.option.time_to_expiration,
            config.option.risk_free_rate,
            config.option.initial_volatility,
        )
        self._portfolio = Portfolio(config.portfolio.initial_value)
        self._log = SimulationLog(run_name=run_name, config=config)

    @property
    def stock(self) -> Stock:
        return self._stock

    @property
    def option(self) -> Option:
        return self._option

    @property
    def portfolio(self) -> Portfolio:
        return self._portfolio

    def run(self) -> SimulationLog:
        """Execute the full simulation and return its log."""
        if self._sim_logger is not None:
            self._sim_logger.init_run(self._config_yaml_path)

        logger.info(
            "Starting simulation '%s': %d day(s), %s option on %s, strike %.4f, T=%.4f.",
            self._run_name,
            self._config.num_days,
            self._option.option_type.value,
            self._stock.name,
            self._option.strike_price,
            self._option.time_to_expiration,
        )

        self._open_positions()

        for day in range(1, self._config.num_days + 1):
            try:
                self._log.day_logs.append(self._run_day(day))
            except (PricingError, FeedExhausted) as exc:
                msg = f"Day {day} failed: {exc}"
                logger.exception(msg)
                self._log.errors.append(msg)
                break

        self._log.stock_price_history = list(self._stock.price_history)
        self._log.option_price_history = list(self._option.price_history)
        self._log.trades = self._portfolio.get_trade_history()
        self._log.final_portfolio = self._portfolio.snapshot()

        if self._sim_logger is not None:
            self._sim_logger.finalize(self._log, self._build_summary())

        logger.info(
            "Simulation '%s' complete after %d day(s). Invested: %.2f, now: %.2f.",
            self._run_name,
            self._log.completed_days,
            self._portfolio.initial_value,
            self._portfolio.current_value,
        )
        return self._log

    # ------------------------------------------------------------------
    # Day execution
    # ------------------------------------------------------------------

    def _open_positions(self) -> None:
        """Spend the configured budgets before the first day."""
        budgets = self._config.portfolio
        if budgets.option_budget > 0:
            self._log.option_quantity = self._portfolio.buy_value(
                self._option, budgets.option_budget
            )
        if budgets.stock_budget > 0:
            self._log.stock_quantity = self._portfolio.buy_value(
                self._stock, budgets.stock_budget
            )
        self._log.initial_portfolio = self._portfolio.snapshot()
        logger.info(
            "Opened %d option unit(s) at %.4f and %d share(s) at %.4f.",
            self._log.option_quantity,
            self._option.price,
            self._log.stock_quantity,
            self._stock.price,
        )

    def _run_day(self, day: int) -> DayLog:
        price = self._feed.next_price(self._stock)
        self._stock.update_price(price)
        self._option.update_option_price(self._stock, self._config.days_per_step)

        self._stock.record_price()
        self._option.record_price()

        self._portfolio.update_portfolio(self._stock)
        self._portfolio.update_portfolio(self._option)

        logger.debug(
            "Day %d: stock %.4f, option %.4f (vol %.6f, T %.4f), portfolio %.2f.",
            day,
            self._stock.price,
            self._option.price,
            self._option.volatility,
            self._option.time_to_expiration,
            self._portfolio.current_value,
        )
        return DayLog(
            day=day,
            stock_price=self._stock.price,
            option_price=self._option.price,
            option_volatility=self._option.volatility,
            time_to_expiration=self._option.time_to_expiration,
            portfolio=self._portfolio.snapshot(),
        )

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    def _build_summary(self) -> dict[str, Any]:
        """Build a lightweight summary dict for the run."""
        final = self._log.final_portfolio
        return {
            "run_name": self._run_name,
            "completed_days": self._log.completed_days,
            "requested_days": self._config.num_days,
            "option_type": self._option.option_type.value,
            "option_quantity": self._log.option_quantity,
            "stock_quantity": self._log.stock_quantity,
            "final_stock_price": self._stock.price,
            "final_option_price": self._option.price,
            "invested_value": final.initial_value if final else None,
            "current_value": final.current_value if final else None,
            "change_pct": final.change_percentage if final else None,
            "total_trades": len(self._log.trades),
            "errors": list(self._log.errors),
        }


def _build_stock(config: SimulationConfig) -> Stock:
    stock_cfg = config.stock
    if stock_cfg.market_cap is not None:
        return Stock(
            name=stock_cfg.name,
            total_stocks=stock_cfg.total_stocks,
            market_cap=stock_cfg.market_cap,
        )
    return Stock(
        name=stock_cfg.name,
        total_stocks=stock_cfg.total_stocks,
        price=stock_cfg.price,
    )
