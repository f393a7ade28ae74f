"""
Real options valuation.

Option-pricing models applied to non-financial investments, such as the
option to delay or expand a project: ``present_value`` plays the role of
the spot price and ``investment_cost`` that of the strike.

Both entry points validate their inputs and report a failure as a
PricingResult instead of raising, so batch callers can collect reasons
without exception handling.
"""

import math

from finance_equations.core.binomial import binomial_price
from finance_equations.core.distributions import normal_cdf_erf
from finance_equations.utils.errors import InvalidArgumentError
from finance_equations.utils.types import PricingResult
from finance_equations.utils.validation import validate_real_option_inputs


def black_scholes(
    present_value: float,
    investment_cost: float,
    time_to_expiry: float,
    risk_free_rate: float,
    volatility: float,
) -> PricingResult:
    """
    Value a real option with the Black-Scholes call formula.

    The normal CDF is evaluated through the erf approximation.

    Returns:
        PricingResult.ok(value), or PricingResult.fail(InvalidArgumentError)

    Examples:
        >>> black_scholes(100, 90, -1.0, 0.05, 0.2).message
        'Time to expiry must be positive'
    """
    try:
        validate_real_option_inputs(
            present_value, investment_cost, time_to_expiry, risk_free_rate, volatility
        )
    except InvalidArgumentError as exc:
        return PricingResult.fail(exc)

    diffusion = volatility * math.sqrt(time_to_expiry)
    d1 = (
        math.log(present_value / investment_cost)
        + (risk_free_rate + volatility * volatility / 2.0) * time_to_expiry
    ) / diffusion
    d2 = d1 - diffusion

    value = present_value * normal_cdf_erf(d1) - investment_cost * math.exp(
        -risk_free_rate * time_to_expiry
    ) * normal_cdf_erf(d2)

    return PricingResult.ok(value)


def binomial_model(
    present_value: float,
    investment_cost: float,
    time_to_expiry: float,
    risk_free_rate: float,
    volatility: float,
    steps: int,
) -> PricingResult:
    """
    Value a real option on an American-exercise binomial lattice.

    Returns:
        PricingResult.ok(value), or PricingResult.fail(InvalidArgumentError)

    Examples:
        >>> binomial_model(100, 90, 1.0, 0.05, 0.2, 0).message
        'Number of steps must be a positive integer'
    """
    try:
        value = binomial_price(
            present_value,
            investment_cost,
            time_to_expiry,
            risk_free_rate,
            volatility,
            steps,
        )
    except InvalidArgumentError as exc:
        return PricingResult.fail(exc)

    return PricingResult.ok(value)
