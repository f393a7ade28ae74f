"""
Input validation for the lattice and real-option entry points.

Checks run in a fixed order and the first failing one is reported, so a
caller always gets exactly one reason per call.
"""

import numbers
from typing import Any, Optional

from finance_equations.utils.errors import InvalidArgumentError


def _is_real(value: Any) -> bool:
    # bool is an Integral subclass; it is not a price
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_positive_real(value: Any) -> bool:
    return _is_real(value) and value > 0


def validate_real_option_inputs(
    present_value: Any,
    investment_cost: Any,
    time_to_expiry: Any,
    risk_free_rate: Any,
    volatility: Any,
    steps: Optional[Any] = None,
    check_steps: bool = False,
) -> None:
    """
    Validate real-option / lattice inputs.

    Args:
        present_value: Underlying value S, must be > 0
        investment_cost: Exercise cost K, must be > 0
        time_to_expiry: T in years, must be > 0
        risk_free_rate: r, any real number
        volatility: σ, must be > 0
        steps: Lattice step count, a positive integer (only if check_steps)
        check_steps: Whether ``steps`` is part of the call

    Raises:
        InvalidArgumentError: On the first failing condition
    """
    if not _is_positive_real(present_value):
        raise InvalidArgumentError("Present value must be a positive number")
    if not _is_positive_real(investment_cost):
        raise InvalidArgumentError("Investment cost must be a positive number")
    if not _is_positive_real(time_to_expiry):
        raise InvalidArgumentError("Time to expiry must be positive")
    if not _is_real(risk_free_rate):
        raise InvalidArgumentError("Risk-free rate must be a number")
    if not _is_positive_real(volatility):
        raise InvalidArgumentError("Volatility must be a positive number")
    if check_steps:
        if not isinstance(steps, numbers.Integral) or isinstance(steps, bool) or steps <= 0:
            raise InvalidArgumentError("Number of steps must be a positive integer")
