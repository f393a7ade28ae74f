"""
Black-Scholes option pricing model.

This module implements the classical Black-Scholes formula for European
options on a non-dividend-paying asset, put-call parity, and the Greeks
delta, gamma, theta and vega. Every entry point validates its inputs and
raises rather than returning Infinity or NaN for a degenerate contract.

Mathematical Background:
    The Black-Scholes formula prices European options under assumptions:
    - Log-normal asset price distribution
    - Constant volatility and interest rate
    - No transaction costs or taxes
    - Continuous trading possible

References:
    Black, F., & Scholes, M. (1973). The Pricing of Options and Corporate Liabilities.
    Journal of Political Economy, 81(3), 637-654.
"""

import math
from typing import Optional

from finance_equations.core.distributions import normal_cdf, normal_pdf
from finance_equations.utils.errors import DomainError, InvalidArgumentError
from finance_equations.utils.types import Greeks, OptionType


def validate_contract(S: float, K: float, T: float) -> None:
    """
    Validate spot, strike and expiry of a contract.

    Written as ``not x > 0`` so that NaN is rejected too.

    Raises:
        DomainError: If S, K or T is not strictly positive
    """
    if not S > 0:
        raise DomainError(f"Spot price must be positive, got S={S}")
    if not K > 0:
        raise DomainError(f"Strike price must be positive, got K={K}")
    if not T > 0:
        raise DomainError(f"Time to expiration must be positive, got T={T}")


def _validate_inputs(S: float, K: float, T: float, sigma: float) -> None:
    """
    Validate the contract fields that enter d1 and d2.

    Raises:
        DomainError: If a logarithm or a division would leave its domain
    """
    validate_contract(S, K, T)
    if not sigma > 0:
        raise DomainError(f"Volatility must be positive, got sigma={sigma}")


def _validate_option_type(option_type: str) -> None:
    if option_type not in ("call", "put"):
        raise InvalidArgumentError(f"option_type must be 'call' or 'put', got '{option_type}'")


def d1_d2(S: float, K: float, T: float, r: float, sigma: float) -> tuple[float, float]:
    """
    Calculate the d1 and d2 parameters of the Black-Scholes formula.

    Args:
        S: Current spot price
        K: Strike price
        T: Time to expiration in years
        r: Risk-free interest rate (annualized, continuous)
        sigma: Volatility (annualized standard deviation)

    Returns:
        Tuple (d1, d2)

    Formula:
        d1 = [ln(S/K) + (r + σ²/2)T] / (σ√T)
        d2 = d1 - σ√T

    Raises:
        DomainError: If S, K, T or sigma is not strictly positive
    """
    _validate_inputs(S, K, T, sigma)

    # Use log-space to prevent overflow: log(S/K) = log(S) - log(K)
    log_moneyness = math.log(S) - math.log(K)
    diffusion = sigma * math.sqrt(T)

    d1 = (log_moneyness + (r + 0.5 * sigma * sigma) * T) / diffusion
    return d1, d1 - diffusion


def black_scholes_call(S: float, K: float, T: float, r: float, sigma: float) -> float:
    """
    Calculate European call option price using Black-Scholes formula.

    Formula:
        C = S·N(d1) - K·e^(-rT)·N(d2)

    Examples:
        >>> price = black_scholes_call(100, 100, 1.0, 0.05, 0.20)
        >>> abs(price - 10.450583) < 0.001
        True
    """
    d1, d2 = d1_d2(S, K, T, r, sigma)
    return S * normal_cdf(d1) - K * math.exp(-r * T) * normal_cdf(d2)


def black_scholes_put(S: float, K: float, T: float, r: float, sigma: float) -> float:
    """
    Calculate European put option price using Black-Scholes formula.

    Formula:
        P = K·e^(-rT)·N(-d2) - S·N(-d1)

    Examples:
        >>> price = black_scholes_put(100, 100, 1.0, 0.05, 0.20)
        >>> abs(price - 5.573526) < 0.001
        True
    """
    d1, d2 = d1_d2(S, K, T, r, sigma)
    return K * math.exp(-r * T) * normal_cdf(-d2) - S * normal_cdf(-d1)


def black_scholes_price(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    option_type: OptionType = "call",
) -> float:
    """
    Calculate European option price (call or put).

    Raises:
        InvalidArgumentError: If option_type is not "call" or "put"
    """
    _validate_option_type(option_type)
    if option_type == "call":
        return black_scholes_call(S, K, T, r, sigma)
    return black_scholes_put(S, K, T, r, sigma)


def put_call_parity(
    call_price: Optional[float],
    put_price: Optional[float],
    S: float,
    K: float,
    T: float,
    r: float,
) -> float:
    """
    Recover the missing leg of a call/put pair from put-call parity.

    Exactly one of ``call_price`` and ``put_price`` must be None; the
    function returns the price of that leg.

    Formula:
        C - P = S - K·e^(-rT)

    Examples:
        >>> abs(put_call_parity(None, 5.573526, 100, 100, 1.0, 0.05) - 10.450583) < 0.001
        True

    Raises:
        InvalidArgumentError: If both or neither price is supplied
    """
    if (call_price is None) == (put_price is None):
        raise InvalidArgumentError("Exactly one of call_price or put_price must be None")

    present_value_strike = K * math.exp(-r * T)

    if call_price is None:
        return put_price + S - present_value_strike
    return call_price - S + present_value_strike


# ===========================
# Greeks Calculations
# ===========================


def delta(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    option_type: OptionType = "call",
) -> float:
    """
    Calculate option delta (∂V/∂S).

    For a call, delta ∈ [0, 1]; for a put, delta ∈ [-1, 0].

    Formulas:
        Call delta: Δ_c = N(d1)
        Put delta:  Δ_p = N(d1) - 1

    Raises:
        InvalidArgumentError: If option_type is not "call" or "put"
    """
    _validate_option_type(option_type)
    d1, _ = d1_d2(S, K, T, r, sigma)

    if option_type == "call":
        return normal_cdf(d1)
    return normal_cdf(d1) - 1.0


def gamma(S: float, K: float, T: float, r: float, sigma: float) -> float:
    """
    Calculate option gamma (∂²V/∂S²), identical for calls and puts.

    Formula:
        Γ = φ(d1) / (S · σ · √T)
    """
    d1, _ = d1_d2(S, K, T, r, sigma)
    return normal_pdf(d1) / (S * sigma * math.sqrt(T))


def theta(S: float, K: float, T: float, r: float, sigma: float) -> float:
    """
    Calculate call option theta (∂V/∂t), annualised.

    Only the call side is provided.

    Formula:
        Θ_c = -[S·σ·φ(d1)/(2√T)] - r·K·e^(-rT)·N(d2)
    """
    d1, d2 = d1_d2(S, K, T, r, sigma)

    diffusion_term = -(S * sigma * normal_pdf(d1)) / (2.0 * math.sqrt(T))
    discount_term = -r * K * math.exp(-r * T) * normal_cdf(d2)

    return diffusion_term + discount_term


def vega(S: float, K: float, T: float, r: float, sigma: float) -> float:
    """
    Calculate option vega (∂V/∂σ) per unit of volatility, identical for calls and puts.

    Formula:
        ν = S · √T · φ(d1)
    """
    d1, _ = d1_d2(S, K, T, r, sigma)
    return S * math.sqrt(T) * normal_pdf(d1)


def calculate_greeks(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    option_type: OptionType = "call",
) -> Greeks:
    """
    Calculate all Greeks for an option.

    Theta is only defined for calls; it is None for puts.

    Example:
        >>> greeks = calculate_greeks(100, 100, 1.0, 0.05, 0.20)
        >>> print(f"Delta: {greeks.delta:.4f}")
        Delta: 0.6368
    """
    _validate_option_type(option_type)
    return Greeks(
        delta=delta(S, K, T, r, sigma, option_type),
        gamma=gamma(S, K, T, r, sigma),
        theta=theta(S, K, T, r, sigma) if option_type == "call" else None,
        vega=vega(S, K, T, r, sigma),
    )
