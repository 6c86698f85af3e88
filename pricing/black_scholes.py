"""Black-Scholes fair value of a European option.

The put is priced from the call through put-call parity rather than with the
independent put formula, so ``put == call - spot + strike * exp(-r * T)``
holds exactly for the floats this module returns.
"""

from __future__ import annotations

import math
from enum import Enum

from scipy.stats import norm

from pricing.errors import InvalidPricingInput


class OptionType(str, Enum):
    """Exercise right carried by an option contract."""

    CALL = "call"
    PUT = "put"


def _validate_inputs(
    spot: float,
    strike: float,
    time_to_expiration: float,
    risk_free_rate: float,
    volatility: float,
) -> None:
    """Raise ``InvalidPricingInput`` for inputs where d1/d2 are undefined."""
    values = {
        "spot": spot,
        "strike": strike,
        "time_to_expiration": time_to_expiration,
        "risk_free_rate": risk_free_rate,
        "volatility": volatility,
    }
    non_finite = [name for name, value in values.items() if not math.isfinite(value)]
    if non_finite:
        raise InvalidPricingInput(f"Non-finite pricing input(s): {', '.join(non_finite)}.")

    if time_to_expiration <= 0:
        raise InvalidPricingInput(
            f"Time to expiration must be positive, got {time_to_expiration}."
        )
    if volatility <= 0:
        raise InvalidPricingInput(f"Volatility must be positive, got {volatility}.")
    if spot <= 0 or strike <= 0:
        raise InvalidPricingInput(
            f"Spot and strike must be positive, got spot={spot}, strike={strike}."
        )


def d1_d2(
    spot: float,
    strike: float,
    time_to_expiration: float,
    risk_free_rate: float,
    volatility: float,
) -> tuple[float, float]:
    """Return the ``(d1, d2)`` terms for the given market/contract inputs."""
    _validate_inputs(spot, strike, time_to_expiration, risk_free_rate, volatility)

    vol_sqrt_t = volatility * math.sqrt(time_to_expiration)
    d1 = (
        math.log(spot)
        - math.log(strike)
        + (risk_free_rate + 0.5 * volatility * volatility) * time_to_expiration
    ) / vol_sqrt_t
    d2 = d1 - vol_sqrt_t
    return d1, d2


def price_option(
    spot: float,
    strike: float,
    time_to_expiration: float,
    risk_free_rate: float,
    volatility: float,
    option_type: OptionType,
) -> float:
    """Fair value of a European call or put.

    Raises ``InvalidPricingInput`` when ``time_to_expiration`` or
    ``volatility`` is not positive (or spot/strike is not positive); the
    formula would otherwise divide by zero and yield NaN.
    """
    d1, d2 = d1_d2(spot, strike, time_to_expiration, risk_free_rate, volatility)

    discounted_strike = strike * math.exp(-risk_free_rate * time_to_expiration)
    call_price = spot * float(norm.cdf(d1)) - discounted_strike * float(norm.cdf(d2))

    if OptionType(option_type) is OptionType.CALL:
        return call_price
    return call_price - spot + discounted_strike


def intrinsic_value(spot: float, strike: float, option_type: OptionType) -> float:
    """Payoff of the option if exercised at ``spot`` right now."""
    if OptionType(option_type) is OptionType.CALL:
        return max(spot - strike, 0.0)
    return max(strike - spot, 0.0)
