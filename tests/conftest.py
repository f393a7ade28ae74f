"""
Pytest configuration and shared fixtures.
"""

import pytest


@pytest.fixture
def standard_params():
    """Standard at-the-money option parameters."""
    return {
        "S": 100.0,
        "K": 100.0,
        "T": 1.0,
        "r": 0.05,
        "sigma": 0.20,
    }


@pytest.fixture
def itm_call_params():
    """In-the-money call parameters."""
    return {
        "S": 110.0,
        "K": 100.0,
        "T": 1.0,
        "r": 0.05,
        "sigma": 0.20,
    }


@pytest.fixture
def real_option_params():
    """Real-option project: PV 100, investment cost 90, one year."""
    return {
        "present_value": 100.0,
        "investment_cost": 90.0,
        "time_to_expiry": 1.0,
        "risk_free_rate": 0.05,
        "volatility": 0.20,
    }
