"""Executed trade records produced by the portfolio."""

from typing import Literal

from pydantic import BaseModel


class ExecutedTrade(BaseModel):
    """One buy or sell call that moved at least one unit."""

    trade_id: str
    instrument_type: Literal["stock", "option"]
    name: str
    side: Literal["buy", "sell"]
    quantity: int  # Units actually moved; a sell may fill fewer than requested
    price: float  # Per-unit price debited or credited
