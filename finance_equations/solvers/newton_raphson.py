"""
Newton-Raphson method for implied volatility calculation.

This module implements a generic Newton-Raphson root finder and its
specialisation to the Black-Scholes call price, using vega (∂C/∂σ) as the
analytic derivative.
"""

import logging
import math
from typing import Callable, Optional

from finance_equations.core.black_scholes import black_scholes_call, vega
from finance_equations.utils.constants import (
    IV_MAX_ITERATIONS,
    IV_MIN_VEGA,
    IV_PRICE_TOLERANCE,
)
from finance_equations.utils.errors import NumericalError
from finance_equations.utils.types import ImpliedVolResult, RootResult

logger = logging.getLogger(__name__)


def newton_raphson(
    f: Callable[[float], float],
    f_prime: Callable[[float], float],
    initial_guess: float,
    max_iterations: int,
    tolerance: float,
    min_derivative: float,
    lower_bound: Optional[float] = None,
) -> RootResult:
    """
    Find a root of f by Newton-Raphson iteration.

    The update is:
        x_{n+1} = x_n - f(x_n) / f'(x_n)

    Iteration stops at the first x_n with |f(x_n)| < tolerance, or once
    max_iterations updates have been made. In the latter case the last
    iterate is returned with converged=False.

    Args:
        f: Objective function
        f_prime: Derivative of f
        initial_guess: Starting point x_0
        max_iterations: Maximum number of updates
        tolerance: Absolute tolerance on |f(x)|
        min_derivative: Smallest |f'(x)| accepted as a divisor
        lower_bound: If given, iterates must stay strictly above it

    Returns:
        RootResult with the last iterate and convergence flag

    Raises:
        NumericalError: If |f'(x_n)| < min_derivative, or the next iterate is
            not finite or falls to or below lower_bound
    """
    x = initial_guess
    fx = f(x)

    for iteration in range(max_iterations):
        if abs(fx) < tolerance:
            return RootResult(root=x, iterations=iteration, converged=True, residual=abs(fx))

        fpx = f_prime(x)
        if not abs(fpx) >= min_derivative:
            raise NumericalError(
                f"Derivative too small ({fpx:.2e}) at x={x:.6g}, iteration {iteration}"
            )

        x_new = x - fx / fpx
        if not math.isfinite(x_new):
            raise NumericalError(f"Newton step diverged at iteration {iteration} (x={x:.6g})")
        if lower_bound is not None and x_new <= lower_bound:
            raise NumericalError(
                f"Newton step left the domain (x={x_new:.6g} <= {lower_bound}) "
                f"at iteration {iteration}"
            )

        logger.debug("newton iteration %d: x=%.10g f(x)=%.3e", iteration, x_new, fx)
        x = x_new
        fx = f(x)

    converged = abs(fx) < tolerance
    return RootResult(root=x, iterations=max_iterations, converged=converged, residual=abs(fx))


def newton_raphson_iv(
    market_price: float,
    S: float,
    K: float,
    T: float,
    r: float,
    initial_guess: float,
    max_iterations: int = IV_MAX_ITERATIONS,
    tolerance: float = IV_PRICE_TOLERANCE,
) -> ImpliedVolResult:
    """
    Solve for implied volatility of a call using Newton-Raphson.

    Solves BS_call(σ) = market_price with f(σ) = BS_call(σ) - market_price
    and f'(σ) = vega(σ).

    Returns:
        ImpliedVolResult; when the iteration limit is reached without meeting
        the tolerance the last iterate is returned with success=False

    Raises:
        NumericalError: If vega vanishes or the iteration leaves σ > 0
    """

    def objective(sigma: float) -> float:
        return black_scholes_call(S, K, T, r, sigma) - market_price

    def derivative(sigma: float) -> float:
        return vega(S, K, T, r, sigma)

    root = newton_raphson(
        objective,
        derivative,
        initial_guess,
        max_iterations=max_iterations,
        tolerance=tolerance,
        min_derivative=IV_MIN_VEGA,
        lower_bound=0.0,
    )

    if root.converged:
        message = f"Converged in {root.iterations} iterations"
    else:
        message = (
            f"Max iterations ({max_iterations}) reached without convergence "
            f"(residual {root.residual:.2e})"
        )

    return ImpliedVolResult(
        volatility=root.root,
        iterations=root.iterations,
        method="newton-raphson",
        success=root.converged,
        message=message,
        residual=root.residual,
    )
