"""
Exception hierarchy for the pricing library.

All errors derive from PricingError. DomainError and InvalidArgumentError
are also ValueErrors, so callers that only know about ValueError keep
working.
"""


class PricingError(Exception):
    """Base class for every error raised by the library."""


class DomainError(PricingError, ValueError):
    """A mathematical precondition is violated (e.g. σ ≤ 0 or T ≤ 0)."""


class InvalidArgumentError(PricingError, ValueError):
    """An argument is structurally invalid (wrong type, missing leg, bad count)."""


class NumericalError(PricingError, ArithmeticError):
    """An iterative method degenerated: vanishing derivative or divergence."""
