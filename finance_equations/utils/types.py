"""
Data types and structures for options pricing.

This module defines dataclasses and types used throughout the toolkit
for representing Greeks, solver results and validated pricing results.
"""

from dataclasses import dataclass
from typing import Literal, Optional

from finance_equations.utils.errors import PricingError

OptionType = Literal["call", "put"]
ExerciseStyle = Literal["american", "european"]


@dataclass
class Greeks:
    """
    Container for option Greeks.

    Attributes:
        delta: Rate of change of option price with respect to spot price (∂V/∂S)
        gamma: Rate of change of delta with respect to spot price (∂²V/∂S²)
        theta: Call time decay (annualised); None for puts
        vega: Rate of change of option price with respect to volatility (∂V/∂σ)
    """
    delta: float
    gamma: float
    theta: Optional[float]
    vega: float


@dataclass(frozen=True)
class RootResult:
    """
    State of a root finder at exit.

    Attributes:
        root: Last iterate
        iterations: Number of update steps performed
        converged: Whether |f(root)| fell below the tolerance
        residual: |f(root)|
    """
    root: float
    iterations: int
    converged: bool
    residual: float


@dataclass
class ImpliedVolResult:
    """
    Result from implied volatility solver.

    Attributes:
        volatility: Solved (or last-iterate) implied volatility
        iterations: Number of iterations performed
        method: Method used ('newton-raphson' or 'brent')
        success: Whether the solver converged within tolerance
        message: Additional information about convergence
        residual: |BS(volatility) - market_price|
    """
    volatility: float
    iterations: int
    method: Literal["newton-raphson", "brent"]
    success: bool
    message: str = ""
    residual: float = float("nan")


@dataclass(frozen=True)
class PricingResult:
    """
    Tagged success/failure value returned by the validated entry points.

    Exactly one of ``value`` and ``error`` is set.
    """
    value: Optional[float] = None
    error: Optional[PricingError] = None

    @classmethod
    def ok(cls, value: float) -> "PricingResult":
        return cls(value=value)

    @classmethod
    def fail(cls, error: PricingError) -> "PricingResult":
        return cls(error=error)

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        return "" if self.error is None else str(self.error)

    def unwrap(self) -> float:
        """Return the value, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value
