"""
Unit tests for implied volatility solvers.

This module validates:
1. Round-trip accuracy (solve IV from synthetic prices)
2. Iteration-limit behaviour and the convergence flag
3. Degenerate vega handling and the Brent fallback
4. Argument validation
5. Initial guess generation
"""

import pytest

from finance_equations.core.black_scholes import black_scholes_call
from finance_equations.solvers.brent import brent_iv
from finance_equations.solvers.implied_vol import (
    brenner_subrahmanyam_approximation,
    get_initial_guess,
    implied_volatility,
    implied_volatility_vectorized,
)
from finance_equations.solvers.newton_raphson import newton_raphson, newton_raphson_iv
from finance_equations.utils.errors import DomainError, InvalidArgumentError, NumericalError


# ===========================
# Round-Trip Tests
# ===========================


def test_known_market_price():
    """Call quoted at 10.450583 with S=K=100, T=1, r=5% implies σ = 20%."""
    result = implied_volatility(10.450583, 100, 100, 1, 0.05, 0.1)

    assert result.success, result.message
    assert abs(result.volatility - 0.2) < 0.001
    assert result.method == "newton-raphson"


@pytest.mark.parametrize(
    "true_sigma,guess",
    [
        (0.10, 0.30),
        (0.20, 0.10),
        (0.30, 0.50),
        (0.50, 0.30),
        (1.00, 1.30),
        (2.00, 1.60),
        (3.00, 2.50),
        (4.00, 3.50),
        (5.00, 4.50),
    ],
)
def test_roundtrip_various_volatilities(true_sigma, guess):
    S, K, T, r = 100.0, 100.0, 1.0, 0.05

    market_price = black_scholes_call(S, K, T, r, true_sigma)
    result = implied_volatility(market_price, S, K, T, r, guess)

    assert result.success, f"Failed for sigma={true_sigma}: {result.message}"
    assert abs(result.volatility - true_sigma) < 1e-4
    assert result.residual < 1e-4


@pytest.mark.parametrize("K", [80.0, 90.0, 100.0, 110.0, 120.0])
def test_roundtrip_various_strikes(K):
    true_sigma = 0.25
    S, T, r = 100.0, 1.0, 0.05

    market_price = black_scholes_call(S, K, T, r, true_sigma)
    result = implied_volatility(market_price, S, K, T, r, 0.4)

    assert result.success, f"Failed for K={K}: {result.message}"
    assert abs(result.volatility - true_sigma) < 1e-4


def test_roundtrip_tight_tolerance():
    true_sigma = 0.35
    market_price = black_scholes_call(100, 105, 0.5, 0.03, true_sigma)

    result = implied_volatility(market_price, 100, 105, 0.5, 0.03, 0.2, tolerance=1e-10)

    assert result.success
    assert abs(result.volatility - true_sigma) < 1e-8


def test_automatic_initial_guess():
    market_price = black_scholes_call(100, 100, 1.0, 0.05, 0.3)
    result = implied_volatility(market_price, 100, 100, 1.0, 0.05)

    assert result.success
    assert abs(result.volatility - 0.3) < 1e-4


# ===========================
# Iteration Limit Tests
# ===========================


def test_iteration_limit_returns_last_guess():
    """Hitting max_iterations returns the last iterate, flagged as unconverged."""
    market_price = black_scholes_call(100, 100, 1.0, 0.05, 0.2)
    result = implied_volatility(market_price, 100, 100, 1.0, 0.05, 0.8, max_iterations=1)

    assert not result.success
    assert result.iterations == 1
    assert result.residual >= 1e-4
    assert 0.0 < result.volatility < 0.8
    assert "Max iterations" in result.message


def test_converged_guess_needs_no_iterations():
    market_price = black_scholes_call(100, 100, 1.0, 0.05, 0.2)
    result = newton_raphson_iv(market_price, 100, 100, 1.0, 0.05, initial_guess=0.2)

    assert result.success
    assert result.iterations == 0
    assert result.volatility == 0.2


def test_newton_raphson_converges_fast():
    market_price = black_scholes_call(100, 100, 1.0, 0.05, 0.25)
    result = newton_raphson_iv(market_price, 100, 100, 1.0, 0.05, initial_guess=0.30)

    assert result.success
    assert result.iterations < 10


# ===========================
# Degenerate Vega / Fallback Tests
# ===========================


def test_vanishing_vega_raises_numerical_error():
    """Deep OTM, a few days to expiry: vega underflows to zero."""
    with pytest.raises(NumericalError, match="Derivative too small"):
        implied_volatility(1.0, 100, 300, 0.01, 0.05, 0.05)


def test_auto_method_falls_back_to_brent():
    result = implied_volatility(1.0, 100, 300, 0.01, 0.05, 0.05, method="auto")

    assert result.method == "brent"
    assert result.success
    assert abs(black_scholes_call(100, 300, 0.01, 0.05, result.volatility) - 1.0) < 1e-4


def test_auto_method_tries_newton_first():
    market_price = black_scholes_call(100, 100, 1.0, 0.05, 0.25)
    result = implied_volatility(market_price, 100, 100, 1.0, 0.05, method="auto")

    assert result.success
    assert result.method == "newton-raphson"


def test_method_brent_only():
    market_price = black_scholes_call(100, 100, 1.0, 0.05, 0.25)
    result = implied_volatility(market_price, 100, 100, 1.0, 0.05, method="brent")

    assert result.success
    assert result.method == "brent"
    assert abs(result.volatility - 0.25) < 1e-6


def test_brent_converges():
    market_price = black_scholes_call(100, 100, 1.0, 0.05, 0.40)
    result = brent_iv(market_price, 100, 100, 1.0, 0.05)

    assert result.success
    assert abs(result.volatility - 0.40) < 1e-6


def test_brent_reports_missing_bracket():
    """A call cannot be worth more than the underlying."""
    result = brent_iv(150.0, 100, 100, 1.0, 0.05)

    assert not result.success
    assert result.volatility == 0.0
    assert "No volatility in [0.001, 10]" in result.message


# ===========================
# Generic Newton-Raphson Tests
# ===========================


def test_newton_raphson_square_root():
    result = newton_raphson(
        lambda x: x * x - 2.0,
        lambda x: 2.0 * x,
        1.0,
        max_iterations=50,
        tolerance=1e-12,
        min_derivative=1e-12,
    )

    assert result.converged
    assert abs(result.root - 2.0 ** 0.5) < 1e-10


def test_newton_raphson_zero_derivative():
    with pytest.raises(NumericalError):
        newton_raphson(
            lambda x: x * x + 1.0,
            lambda x: 2.0 * x,
            0.0,
            max_iterations=50,
            tolerance=1e-12,
            min_derivative=1e-12,
        )


def test_newton_raphson_leaving_domain():
    with pytest.raises(NumericalError, match="left the domain"):
        newton_raphson(
            lambda x: x + 1.0,
            lambda x: 1.0,
            1.0,
            max_iterations=50,
            tolerance=1e-12,
            min_derivative=1e-12,
            lower_bound=0.0,
        )


# ===========================
# Argument Validation Tests
# ===========================


@pytest.mark.parametrize(
    "kwargs",
    [
        {"initial_guess": 0.0},
        {"initial_guess": -0.2},
        {"max_iterations": 0},
        {"tolerance": 0.0},
        {"method": "bisection"},
    ],
)
def test_invalid_solver_arguments(kwargs):
    with pytest.raises(InvalidArgumentError):
        implied_volatility(10.45, 100, 100, 1.0, 0.05, **kwargs)


@pytest.mark.parametrize(
    "S,K,T",
    [
        (100.0, 0.0, 1.0),
        (0.0, 100.0, 1.0),
        (100.0, -50.0, 1.0),
        (100.0, 100.0, 0.0),
        (100.0, float("nan"), 1.0),
    ],
)
@pytest.mark.parametrize("method", ["newton", "brent", "auto"])
def test_invalid_contract_raises_domain_error(S, K, T, method):
    """Contract checks run before an initial guess is derived from S/K."""
    with pytest.raises(DomainError):
        implied_volatility(10.0, S, K, T, 0.05, method=method)


def test_brent_method_honours_iteration_limit():
    market_price = black_scholes_call(100, 100, 1.0, 0.05, 0.25)
    result = implied_volatility(market_price, 100, 100, 1.0, 0.05, method="brent", max_iterations=2)

    assert result.method == "brent"
    assert result.iterations <= 2
    assert not result.success


# ===========================
# Initial Guess Tests
# ===========================


def test_brenner_subrahmanyam_atm():
    market_price = black_scholes_call(100.0, 100.0, 1.0, 0.05, 0.20)
    guess = brenner_subrahmanyam_approximation(market_price, 100.0, 100.0, 1.0)

    assert 0.10 < guess < 0.40


def test_brenner_subrahmanyam_degenerate_inputs():
    assert brenner_subrahmanyam_approximation(0.0, 100.0, 100.0, 1.0) == 0.25


def test_get_initial_guess_otm():
    """Deep OTM falls back to the fixed 25% guess."""
    assert get_initial_guess(1.0, S=100, K=130, T=1.0) == 0.25


# ===========================
# Vectorized Solver Tests
# ===========================


def test_implied_volatility_vectorized():
    S, T, r = 100.0, 1.0, 0.05
    true_sigma = 0.25

    strikes = [90.0, 95.0, 100.0, 105.0, 110.0]
    market_prices = [black_scholes_call(S, K, T, r, true_sigma) for K in strikes]

    results = implied_volatility_vectorized(market_prices, S, strikes, T, r)

    assert len(results) == len(strikes)
    for result in results:
        assert result.success
        assert abs(result.volatility - true_sigma) < 1e-4


def test_vectorized_mismatched_lengths():
    with pytest.raises(InvalidArgumentError, match="must have same length"):
        implied_volatility_vectorized(
            market_prices=[10.0, 5.0],
            S=100,
            strikes=[100.0],
            T=1.0,
            r=0.05,
        )
