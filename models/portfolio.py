"""Portfolio state models."""

from pydantic import BaseModel


class PortfolioSnapshot(BaseModel):
    """Invested total, mark-to-market value and holding counts at one instant.

    ``positions`` maps ``"<instrument_type>:<name>"`` to the number of units
    held, so a stock and an option on it are counted separately.
    """

    initial_value: float
    current_value: float
    positions: dict[str, int]
    change_percentage: float | None = None  # None while nothing is invested
