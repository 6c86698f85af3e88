"""Tradable instruments: the underlying stock and an option written on it.

Both implement the ``Priceable`` capability that the portfolio relies on.
Identity for portfolio purposes is instrument type plus name, never object
identity: holdings are independent copies of the instrument that was bought.
"""

from __future__ import annotations

import logging
from typing import Annotated, Literal, Protocol, Union, runtime_checkable

from pydantic import BaseModel, Field, model_validator

from pricing.black_scholes import OptionType, intrinsic_value, price_option
from pricing.errors import ZeroPriceError
from pricing.volatility import estimate_volatility

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365.0


@runtime_checkable
class Priceable(Protocol):
    """Capability shared by everything a portfolio can hold."""

    name: str

    def get_price(self) -> float: ...

    def set_price(self, price: float) -> None: ...

    def matches(self, other: object) -> bool: ...


class _Instrument(BaseModel):
    """Price bookkeeping common to stocks and options."""

    name: str = Field(description="Identifier; an option carries its underlying's name.")
    price: float = Field(default=0.0, description="Current fair value.")
    price_history: list[float] = Field(
        default_factory=list,
        description="Recorded prices, oldest first. Append-only.",
    )

    def get_price(self) -> float:
        return self.price

    def set_price(self, price: float) -> None:
        """Overwrite the price directly, bypassing any pricing model."""
        self.price = price

    def matches(self, other: object) -> bool:
        """Same instrument type with the same name."""
        return type(other) is type(self) and other.name == self.name

    def record_price(self) -> None:
        """Append the current price to the history."""
        self.price_history.append(self.price)


class Stock(_Instrument):
    """A listed share whose price is market cap over shares outstanding.

    Either ``market_cap`` or ``price`` may be given at construction; the
    missing one is derived from the other and ``total_stocks``.
    """

    instrument_type: Literal["stock"] = "stock"
    market_cap: float | None = Field(default=None, ge=0)
    total_stocks: int = Field(gt=0, description="Shares outstanding.")

    @model_validator(mode="after")
    def _sync_market_cap(self) -> Stock:
        if self.market_cap is None:
            self.market_cap = self.price * self.total_stocks
        else:
            self.price = _price_per_share(self.market_cap, self.total_stocks)
        return self

    def update_market_cap(self, market_cap: float) -> None:
        price = _price_per_share(market_cap, self.total_stocks)
        self.market_cap = market_cap
        self.price = price

    def update_total_stocks(self, total_stocks: int) -> None:
        price = _price_per_share(self.market_cap, total_stocks)
        self.total_stocks = total_stocks
        self.price = price

    def update_price(self, price: float) -> None:
        """Move the price through the market cap, keeping both consistent."""
        self.update_market_cap(price * self.total_stocks)

    def apply_buy_pressure(self, shares_bought: int) -> None:
        """Raise the price in proportion to the share of the float bought."""
        increase = (shares_bought / self.total_stocks) * self.price
        self.update_price(self.price + increase)

    def apply_sell_pressure(self, shares_sold: int) -> None:
        """Lower the price in proportion to the share of the float sold."""
        drop = (shares_sold / self.total_stocks) * self.price
        self.update_price(self.price - drop)


class Option(_Instrument):
    """A European option whose price is always derived from its live inputs.

    Build one with ``Option.priced`` or ``Option.on_stock`` so that ``price``
    starts out consistent with the pricing model.
    """

    instrument_type: Literal["option"] = "option"
    option_type: OptionType
    spot_price: float = Field(gt=0)
    strike_price: float = Field(gt=0)
    time_to_expiration: float = Field(ge=0, description="Remaining life in years.")
    risk_free_rate: float
    volatility: float = Field(ge=0)

    @classmethod
    def priced(
        cls,
        name: str,
        option_type: OptionType,
        spot_price: float,
        strike_price: float,
        time_to_expiration: float,
        risk_free_rate: float,
        volatility: float,
    ) -> Option:
        price = price_option(
            spot_price,
            strike_price,
            time_to_expiration,
            risk_free_rate,
            volatility,
            option_type,
        )
        return cls(
            name=name,
            option_type=option_type,
            spot_price=spot_price,
            strike_price=strike_price,
            time_to_expiration=time_to_expiration,
            risk_free_rate=risk_free_rate,
            volatility=volatility,
            price=price,
        )

    @classmethod
    def on_stock(
        cls,
        stock: Stock,
        option_type: OptionType,
        strike_price: float,
        time_to_expiration: float,
        risk_free_rate: float,
        volatility: float,
    ) -> Option:
        """Write an option on ``stock`` at its current price."""
        return cls.priced(
            stock.name,
            option_type,
            stock.price,
            strike_price,
            time_to_expiration,
            risk_free_rate,
            volatility,
        )

    @property
    def is_expired(self) -> bool:
        return self.time_to_expiration <= 0

    def update_option_price(self, stock: Stock, days_elapsed: float = 1.0) -> None:
        """Reprice after ``days_elapsed`` days using the stock's current state.

        Volatility is re-estimated from ``stock.price_history``. While the
        history is too short (or too flat) to give a positive estimate, the
        previous volatility is kept. Once time runs out the option is priced
        at intrinsic value from then on. If pricing raises, the option is
        left unchanged.
        """
        volatility = self.volatility
        estimated = estimate_volatility(stock.price_history)
        if estimated > 0:
            volatility = estimated
        else:
            logger.debug(
                "Volatility estimate for %s is %.6f; keeping %.6f.",
                self.name,
                estimated,
                self.volatility,
            )

        spot_price = stock.price
        time_to_expiration = max(
            self.time_to_expiration - days_elapsed / DAYS_PER_YEAR, 0.0
        )

        if time_to_expiration <= 0:
            price = intrinsic_value(spot_price, self.strike_price, self.option_type)
            logger.debug("Option %s expired; priced at intrinsic %.6f.", self.name, price)
        else:
            price = price_option(
                spot_price,
                self.strike_price,
                time_to_expiration,
                self.risk_free_rate,
                volatility,
                self.option_type,
            )

        self.volatility = volatility
        self.spot_price = spot_price
        self.time_to_expiration = time_to_expiration
        self.price = price


Holding = Annotated[Union[Stock, Option], Field(discriminator="instrument_type")]


def _price_per_share(market_cap: float, total_stocks: int) -> float:
    if total_stocks == 0:
        raise ZeroPriceError("Cannot price a stock with zero shares outstanding.")
    return market_cap / total_stocks
