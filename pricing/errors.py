"""Error kinds raised by the pricing engine."""


class PricingError(Exception):
    """Base class for pricing and valuation failures."""


class InvalidPricingInput(PricingError, ValueError):
    """Pricing inputs for which d1/d2 are undefined.

    Raised for a non-positive time to expiration, volatility, spot or strike,
    or any non-finite input.
    """


class ZeroPriceError(PricingError, ZeroDivisionError):
    """A price that must divide something is exactly zero."""
