"""
Tests for the Black-Scholes pricing model.

Covers:
  1. The d1/d2 terms and call price for a known contract
  2. Put-call parity, exactly as the floats are computed
  3. Rejection of inputs for which d1/d2 are undefined
  4. Intrinsic value at expiry
"""

import math

import pytest
from scipy.stats import norm

from pricing import InvalidPricingInput, OptionType, PricingError, d1_d2, intrinsic_value, price_option

SPOT = 100.0
STRIKE = 100.0
T = 1.0
RATE = 0.03315
VOL = 0.11


# =============================================================================
# 1. CALL PRICE
# =============================================================================


class TestCallPrice:
    """Call price follows S*N(d1) - K*exp(-rT)*N(d2)."""

    def test_d1_d2_at_the_money(self):
        d1, d2 = d1_d2(SPOT, STRIKE, T, RATE, VOL)
        assert d1 == pytest.approx((RATE + 0.5 * VOL * VOL) / VOL)
        assert d1 == pytest.approx(0.356364, abs=1e-6)
        assert d2 == pytest.approx(d1 - VOL)

    def test_call_matches_formula_exactly(self):
        d1, d2 = d1_d2(SPOT, STRIKE, T, RATE, VOL)
        expected = SPOT * float(norm.cdf(d1)) - STRIKE * math.exp(-RATE * T) * float(norm.cdf(d2))
        assert price_option(SPOT, STRIKE, T, RATE, VOL, OptionType.CALL) == expected

    def test_call_reference_value(self):
        price = price_option(SPOT, STRIKE, T, RATE, VOL, OptionType.CALL)
        assert price == pytest.approx(6.1392, abs=1e-3)

    def test_string_option_type_accepted(self):
        assert price_option(SPOT, STRIKE, T, RATE, VOL, "call") == price_option(
            SPOT, STRIKE, T, RATE, VOL, OptionType.CALL
        )

    def test_call_increases_with_spot(self):
        low = price_option(90.0, STRIKE, T, RATE, VOL, OptionType.CALL)
        high = price_option(110.0, STRIKE, T, RATE, VOL, OptionType.CALL)
        assert high > low

    def test_deep_in_the_money_call_near_forward_intrinsic(self):
        price = price_option(300.0, STRIKE, T, RATE, VOL, OptionType.CALL)
        assert price == pytest.approx(300.0 - STRIKE * math.exp(-RATE * T), rel=1e-9)

    def test_pure_function(self):
        first = price_option(SPOT, 120.0, 0.5, RATE, 0.2, OptionType.PUT)
        second = price_option(SPOT, 120.0, 0.5, RATE, 0.2, OptionType.PUT)
        assert first == second


# =============================================================================
# 2. PUT-CALL PARITY
# =============================================================================


class TestPutCallParity:
    """Put is derived from the call, so parity holds bit-for-bit."""

    @pytest.mark.parametrize(
        "spot, strike, t, r, vol",
        [
            (100.0, 100.0, 1.0, 0.03315, 0.11),
            (50.0, 75.0, 0.25, 0.05, 0.4),
            (250.0, 125.0, 2.0, 0.0, 0.02),
            (10.0, 12.5, 0.01, -0.01, 0.9),
        ],
    )
    def test_parity_exact(self, spot, strike, t, r, vol):
        call = price_option(spot, strike, t, r, vol, OptionType.CALL)
        put = price_option(spot, strike, t, r, vol, OptionType.PUT)
        assert put == call - spot + strike * math.exp(-r * t)

    def test_out_of_the_money_put_is_cheaper_than_call(self):
        call = price_option(120.0, STRIKE, T, RATE, VOL, OptionType.CALL)
        put = price_option(120.0, STRIKE, T, RATE, VOL, OptionType.PUT)
        assert put < call


# =============================================================================
# 3. DEGENERATE INPUTS
# =============================================================================


class TestInvalidInputs:
    """Inputs that would divide by zero or take log of a non-positive value."""

    @pytest.mark.parametrize("t", [0.0, -0.1])
    def test_non_positive_time_rejected(self, t):
        with pytest.raises(InvalidPricingInput, match="Time to expiration"):
            price_option(SPOT, STRIKE, t, RATE, VOL, OptionType.CALL)

    @pytest.mark.parametrize("vol", [0.0, -0.2])
    def test_non_positive_volatility_rejected(self, vol):
        with pytest.raises(InvalidPricingInput, match="Volatility"):
            price_option(SPOT, STRIKE, T, RATE, vol, OptionType.PUT)

    @pytest.mark.parametrize("spot, strike", [(0.0, 100.0), (100.0, 0.0), (-5.0, 100.0)])
    def test_non_positive_spot_or_strike_rejected(self, spot, strike):
        with pytest.raises(InvalidPricingInput, match="Spot and strike"):
            price_option(spot, strike, T, RATE, VOL, OptionType.CALL)

    def test_nan_rejected(self):
        with pytest.raises(InvalidPricingInput, match="Non-finite"):
            d1_d2(SPOT, STRIKE, T, RATE, float("nan"))

    def test_error_hierarchy(self):
        with pytest.raises(ValueError):
            price_option(SPOT, STRIKE, 0.0, RATE, VOL, OptionType.CALL)
        assert issubclass(InvalidPricingInput, PricingError)


# =============================================================================
# 4. INTRINSIC VALUE
# =============================================================================


class TestIntrinsicValue:
    def test_call(self):
        assert intrinsic_value(110.0, 100.0, OptionType.CALL) == 10.0
        assert intrinsic_value(90.0, 100.0, OptionType.CALL) == 0.0

    def test_put(self):
        assert intrinsic_value(90.0, 100.0, OptionType.PUT) == 10.0
        assert intrinsic_value(110.0, 100.0, OptionType.PUT) == 0.0
