"""
Implied volatility solver with method selection.

This module provides the high-level interface for solving call implied
volatility. Newton-Raphson is the default; Brent's method is available
directly or as an automatic fallback.
"""

import logging
import math
from typing import Optional

from finance_equations.core.black_scholes import validate_contract
from finance_equations.solvers.brent import brent_iv
from finance_equations.solvers.newton_raphson import newton_raphson_iv
from finance_equations.utils.constants import (
    IV_INITIAL_GUESS,
    IV_MAX_ITERATIONS,
    IV_PRICE_TOLERANCE,
)
from finance_equations.utils.errors import InvalidArgumentError, NumericalError
from finance_equations.utils.types import ImpliedVolResult

logger = logging.getLogger(__name__)

_METHODS = ("newton", "brent", "auto")

# Moneyness band S/K inside which the ATM approximation is trusted
_ATM_BAND = (0.9, 1.1)
_GUESS_FLOOR = 0.01
_GUESS_CAP = 5.0


def brenner_subrahmanyam_approximation(market_price: float, S: float, K: float, T: float) -> float:
    """
    At-the-money volatility estimate σ ≈ √(2π/T) · C/S.

    Brenner & Subrahmanyam (1988), Financial Analysts Journal 44(5). The
    estimate is kept within [1%, 500%]; for a non-positive price, spot or
    expiry the fixed default guess is returned instead.
    """
    if min(market_price, S, T) <= 0:
        return IV_INITIAL_GUESS

    estimate = market_price / S * math.sqrt(2.0 * math.pi / T)
    return min(max(estimate, _GUESS_FLOOR), _GUESS_CAP)


def get_initial_guess(market_price: float, S: float, K: float, T: float) -> float:
    """Starting σ for Newton: the ATM estimate near the money, 25% elsewhere."""
    lower, upper = _ATM_BAND
    if lower <= S / K <= upper:
        return brenner_subrahmanyam_approximation(market_price, S, K, T)
    return IV_INITIAL_GUESS


def implied_volatility(
    market_price: float,
    S: float,
    K: float,
    T: float,
    r: float,
    initial_guess: Optional[float] = None,
    max_iterations: int = IV_MAX_ITERATIONS,
    tolerance: float = IV_PRICE_TOLERANCE,
    method: str = "newton",
) -> ImpliedVolResult:
    """
    Solve BS_call(σ) = market_price for σ.

    Args:
        market_price: Observed call price
        S: Spot price
        K: Strike price
        T: Time to expiration in years
        r: Risk-free rate (annualized, continuous)
        initial_guess: Starting volatility σ₀ > 0 (auto-generated if None)
        max_iterations: Iteration limit of the primary solver. With
            method="brent" it bounds brentq; the "auto" fallback keeps
            the Brent defaults
        tolerance: Newton only. Stop once |BS_call(σ) - market_price| < tolerance.
            Brent works to IV_VOL_TOLERANCE on σ instead
        method: "newton" (default), "brent", or "auto" (Newton, then Brent)

    Returns:
        ImpliedVolResult. With method="newton" the last iterate is returned
        even if the iteration limit was reached; check ``success``.

    Raises:
        DomainError: If S, K or T is not strictly positive
        InvalidArgumentError: For a non-positive guess, iteration count or
            tolerance, or an unknown method
        NumericalError: With method="newton", if vega vanishes or the
            iteration diverges

    Examples:
        >>> result = implied_volatility(10.450583, 100, 100, 1.0, 0.05, 0.1)
        >>> abs(result.volatility - 0.2) < 0.001
        True
    """
    if method not in _METHODS:
        raise InvalidArgumentError(f"method must be one of {_METHODS}, got '{method}'")
    if initial_guess is not None and not initial_guess > 0:
        raise InvalidArgumentError(f"initial_guess must be positive, got {initial_guess}")
    if max_iterations <= 0:
        raise InvalidArgumentError(f"max_iterations must be positive, got {max_iterations}")
    if not tolerance > 0:
        raise InvalidArgumentError(f"tolerance must be positive, got {tolerance}")
    validate_contract(S, K, T)

    if method == "brent":
        return brent_iv(market_price, S, K, T, r, max_iterations=max_iterations)

    if initial_guess is None:
        initial_guess = get_initial_guess(market_price, S, K, T)

    try:
        nr_result = newton_raphson_iv(
            market_price, S, K, T, r, initial_guess, max_iterations, tolerance
        )
    except NumericalError as exc:
        if method == "newton":
            raise
        logger.debug("Newton-Raphson failed (%s), falling back to Brent", exc)
        return brent_iv(market_price, S, K, T, r)

    if nr_result.success or method == "newton":
        return nr_result

    logger.debug("Newton-Raphson did not converge, falling back to Brent")
    return brent_iv(market_price, S, K, T, r)


def implied_volatility_vectorized(
    market_prices: list[float],
    S: float,
    strikes: list[float],
    T: float,
    r: float,
    method: str = "newton",
) -> list[ImpliedVolResult]:
    """
    Solve for implied volatilities across multiple strikes (volatility smile).

    Raises:
        InvalidArgumentError: If market_prices and strikes have different lengths
    """
    if len(market_prices) != len(strikes):
        raise InvalidArgumentError(
            f"market_prices ({len(market_prices)}) and strikes ({len(strikes)}) "
            f"must have same length"
        )

    return [
        implied_volatility(price, S, strike, T, r, method=method)
        for price, strike in zip(market_prices, strikes)
    ]
