"""Option pricing and realized-volatility estimation.

Both entry points are pure functions of their arguments, so they can be
called for independent instruments from any number of threads.
"""

from pricing.black_scholes import OptionType, d1_d2, intrinsic_value, price_option
from pricing.errors import InvalidPricingInput, PricingError, ZeroPriceError
from pricing.volatility import estimate_volatility, simple_returns

__all__ = [
    "InvalidPricingInput",
    "OptionType",
    "PricingError",
    "ZeroPriceError",
    "d1_d2",
    "estimate_volatility",
    "intrinsic_value",
    "price_option",
    "simple_returns",
]
