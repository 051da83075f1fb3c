"""Pytest fixtures for housecalc tests."""

import os
import sys
from datetime import date

import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from housecalc.core.settings import AppSettings  # noqa: E402
from housecalc.domain.models import SimulationParameters, SpainRegion, SpainTax  # noqa: E402

START_DATE = date(2025, 1, 1)


@pytest.fixture
def settings():
    """Settings with the default search budget."""
    return AppSettings(max_search_months=2400)


@pytest.fixture
def base_params_data():
    """Madrid resale buyer, 35 years old, saving 1500/month."""
    return {
        "birth_date": date(1990, 1, 1),
        "retirement_age": 67,
        "start_date": START_DATE,
        "house_price": 300_000.0,
        "house_price_growth_pct": 2.0,
        "tax": SpainTax(region=SpainRegion.MADRID),
        "starting_savings": 20_000.0,
        "monthly_savings": 1_500.0,
        "monthly_savings_growth_pct": 0.0,
        "savings_rate_pct": 1.0,
        "rent": 1_000.0,
        "rent_growth_pct": 2.0,
        "mortgage_rate_pct": 3.5,
        "min_deposit_pct": 20.0,
        "max_mortgage_years": 30,
        "max_simulation_years": 100,
    }


@pytest.fixture
def make_params(base_params_data):
    """Factory building SimulationParameters with overrides."""

    def _make(**overrides):
        return SimulationParameters(**{**base_params_data, **overrides})

    return _make
