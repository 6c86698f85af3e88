"""Simulation configuration models, loaded from YAML.

These live in ``models/`` because they are shared data contracts used by the
simulation runner and the run logger.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, model_validator

from pricing.black_scholes import OptionType


class StockConfig(BaseModel):
    """The simulated underlying at day zero."""

    name: str = Field(description="Ticker-like identifier, e.g. 'XYZ'.")
    total_stocks: int = Field(gt=0, description="Shares outstanding.")
    price: float | None = Field(
        default=None,
        gt=0,
        description="Starting price per share. Give this or market_cap.",
    )
    market_cap: float | None = Field(
        default=None,
        gt=0,
        description="Starting market capitalisation. Give this or price.",
    )

    @model_validator(mode="after")
    def _price_or_market_cap(self) -> StockConfig:
        if (self.price is None) == (self.market_cap is None):
            raise ValueError("Exactly one of 'price' or 'market_cap' must be set.")
        return self


class OptionConfig(BaseModel):
    """Contract terms of the option written on the stock."""

    option_type: OptionType = Field(default=OptionType.CALL)
    strike_price: float = Field(gt=0, description="Fixed exercise price.")
    time_to_expiration: float = Field(
        gt=0,
        description="Contract life in years at day zero.",
    )
    risk_free_rate: float = Field(
        default=0.03315,
        description="Annualised riskless rate used for discounting.",
    )
    initial_volatility: float = Field(
        default=0.11,
        gt=0,
        description="Volatility used until the stock has enough history to estimate one.",
    )


class PortfolioConfig(BaseModel):
    """Starting portfolio and the day-zero purchase."""

    initial_value: float = Field(
        default=0.0,
        description="Starting invested/current value before any purchase.",
    )
    option_budget: float = Field(
        default=10_000.0,
        ge=0,
        description="Amount spent on whole option units before day one.",
    )
    stock_budget: float = Field(
        default=0.0,
        ge=0,
        description="Amount spent on whole shares before day one.",
    )


class SimulationConfig(BaseModel):
    """Top-level configuration for a simulation run, loaded from YAML.

    The run name is derived from the config file path at load time rather
    than being specified inside the YAML itself.
    """

    stock: StockConfig = Field(description="Underlying stock setup.")
    option: OptionConfig = Field(description="Option contract setup.")
    portfolio: PortfolioConfig = Field(
        default_factory=PortfolioConfig,
        description="Portfolio setup.",
    )
    num_days: int = Field(
        default=100,
        ge=1,
        description="Number of simulated trading days.",
    )
    days_per_step: float = Field(
        default=1.0,
        gt=0,
        description="Calendar days that pass between two steps.",
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load and validate a ``SimulationConfig`` from a YAML file.

        Raises ``FileNotFoundError`` if the file does not exist and
        ``ValueError`` if the content is not a valid YAML mapping.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with path.open(encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)

        if not isinstance(raw, dict):
            raise ValueError(
                f"Expected a YAML mapping in {path}, got {type(raw).__name__}."
            )

        return cls(**raw)
