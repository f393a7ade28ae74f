"""
Brent's method for implied volatility calculation.

This module implements Brent's method (a hybrid bisection/inverse quadratic
interpolation algorithm) as a robust fallback when Newton-Raphson fails.
Brent's method is guaranteed to converge if a solution exists within the
specified bounds, though it's slower than Newton-Raphson.
"""

import logging

from scipy.optimize import brentq

from finance_equations.core.black_scholes import black_scholes_call
from finance_equations.utils.constants import IV_MAX_VOL, IV_MIN_VOL, IV_VOL_TOLERANCE
from finance_equations.utils.types import ImpliedVolResult

logger = logging.getLogger(__name__)


def brent_iv(
    market_price: float,
    S: float,
    K: float,
    T: float,
    r: float,
    vol_lower: float = IV_MIN_VOL,
    vol_upper: float = IV_MAX_VOL,
    tolerance: float = IV_VOL_TOLERANCE,
    max_iterations: int = 100,
) -> ImpliedVolResult:
    """
    Solve for call implied volatility using Brent's method.

    Args:
        market_price: Observed market price of the call
        S, K, T, r: Standard Black-Scholes parameters
        vol_lower: Lower bound for volatility search
        vol_upper: Upper bound for volatility search
        tolerance: Convergence tolerance on sigma passed to brentq
        max_iterations: Maximum brentq iterations

    Returns:
        ImpliedVolResult; success=False when the bounds do not bracket a root
    """

    def objective(sigma: float) -> float:
        return black_scholes_call(S, K, T, r, sigma) - market_price

    gap_lower = objective(vol_lower)
    gap_upper = objective(vol_upper)

    # Call price is increasing in sigma, so a root needs a sign change
    if gap_lower * gap_upper > 0:
        logger.debug("brent: no sign change on [%g, %g]", vol_lower, vol_upper)
        return ImpliedVolResult(
            volatility=0.0,
            iterations=0,
            method="brent",
            success=False,
            message=(
                f"No volatility in [{vol_lower:g}, {vol_upper:g}] reproduces the call price "
                f"{market_price}: model prices span "
                f"[{gap_lower + market_price:.4f}, {gap_upper + market_price:.4f}]"
            ),
        )

    implied_vol, info = brentq(
        objective,
        vol_lower,
        vol_upper,
        xtol=tolerance,
        rtol=1e-8,
        maxiter=max_iterations,
        full_output=True,
        disp=False,
    )

    residual = abs(objective(implied_vol))
    logger.debug("brent: sigma=%.10g iterations=%d residual=%.3e", implied_vol, info.iterations, residual)

    return ImpliedVolResult(
        volatility=implied_vol,
        iterations=info.iterations,
        method="brent",
        success=bool(info.converged),
        message=f"{info.flag} with price error {residual:.2e}",
        residual=residual,
    )
