"""
Cox-Ross-Rubinstein binomial lattice for vanilla call options.

The lattice is priced by backward induction over a single buffer of
``steps + 1`` option values. Each layer is updated with vectorised numpy
operations, and asset prices for a layer are obtained from the layer
above by one multiplication with the down factor, so no node recomputes
a power of u or d.

With American exercise every node takes the larger of its continuation
value and its immediate exercise value; with European exercise only the
continuation value is kept.
"""

import logging
import math
from dataclasses import dataclass

import numpy as np

from finance_equations.utils.constants import MAX_RECOMMENDED_STEPS
from finance_equations.utils.errors import InvalidArgumentError
from finance_equations.utils.types import ExerciseStyle
from finance_equations.utils.validation import validate_real_option_inputs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LatticeParameters:
    """
    Per-step parameters of a recombining CRR lattice.

    Attributes:
        dt: Length of one time step in years
        u: Up factor e^(σ√dt)
        d: Down factor 1/u
        p: Risk-neutral up probability (e^(r·dt) - d) / (u - d)
        discount: One-step discount factor e^(-r·dt)
    """
    dt: float
    u: float
    d: float
    p: float
    discount: float

    @classmethod
    def from_crr(cls, T: float, r: float, sigma: float, steps: int) -> "LatticeParameters":
        dt = T / steps
        u = math.exp(sigma * math.sqrt(dt))
        d = 1.0 / u
        p = (math.exp(r * dt) - d) / (u - d)
        return cls(dt=dt, u=u, d=d, p=p, discount=math.exp(-r * dt))


def binomial_price(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    steps: int,
    exercise: ExerciseStyle = "american",
) -> float:
    """
    Price a call option on a binomial lattice.

    Args:
        S: Present value of the underlying
        K: Strike (investment cost)
        T: Time to expiry in years
        r: Risk-free rate (continuous)
        sigma: Volatility
        steps: Number of time steps n
        exercise: "american" (early exercise at every node) or "european"

    Returns:
        Option value at the root node

    Raises:
        InvalidArgumentError: On the first invalid input, or an unknown exercise style

    Example:
        >>> price = binomial_price(100, 90, 1.0, 0.05, 0.2, 2)
        >>> abs(price - 17.1598) < 1e-3
        True
    """
    validate_real_option_inputs(S, K, T, r, sigma, steps, check_steps=True)
    if exercise not in ("american", "european"):
        raise InvalidArgumentError(
            f"exercise must be 'american' or 'european', got '{exercise}'"
        )

    if steps > MAX_RECOMMENDED_STEPS:
        logger.warning(
            "Binomial lattice with %d steps exceeds the recommended maximum of %d",
            steps,
            MAX_RECOMMENDED_STEPS,
        )

    params = LatticeParameters.from_crr(T, r, sigma, steps)
    if not 0.0 <= params.p <= 1.0:
        logger.warning("Risk-neutral probability %.6g lies outside [0, 1]", params.p)

    logger.debug(
        "Lattice: steps=%d dt=%.6g u=%.6g d=%.6g p=%.6g", steps, params.dt, params.u, params.d, params.p
    )

    # Terminal layer: node i has had i down moves, asset = S·u^(n-i)·d^i
    exponents = steps - 2 * np.arange(steps + 1)
    assets = S * np.power(params.u, exponents.astype(float))
    values = np.maximum(assets - K, 0.0)

    early_exercise = exercise == "american"
    q = 1.0 - params.p

    for step in range(steps - 1, -1, -1):
        continuation = params.discount * (
            params.p * values[: step + 1] + q * values[1 : step + 2]
        )
        # S·u^(s-i)·d^i equals the next layer's node i times d
        assets = assets[: step + 1] * params.d
        if early_exercise:
            values[: step + 1] = np.maximum(continuation, np.maximum(assets - K, 0.0))
        else:
            values[: step + 1] = continuation

    return float(values[0])
