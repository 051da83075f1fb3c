"""Simulation input parameters.

The parameter bundle a caller hands to the scenario search. Validated on
construction and never mutated by the engine.
"""

from __future__ import annotations

from datetime import date

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, Field, model_validator

from housecalc.core.financial import growth_factor, monthly_rate
from housecalc.domain.models.jurisdiction import TaxConfiguration


class SimulationParameters(BaseModel):
    """Inputs for one scenario search.

    Rates are annual percentages (3.5 for 3.5%). Interest and inflation
    rates become monthly decimals via ``/1200``; annual growth steps become
    multipliers via ``1 + x/100``.
    """

    # Person
    birth_date: date = Field(..., description="Date of birth, before start_date")
    retirement_age: int = Field(default=67, gt=0, le=120, description="Age at which mortgages must end")
    start_date: date = Field(default_factory=date.today, description="Month 0 of the projection")

    # House
    house_price: float = Field(..., gt=0, description="Current house price")
    house_price_growth_pct: float = Field(default=2.0, gt=-1200, description="Annual house price inflation %")
    tax: TaxConfiguration = Field(..., description="Purchase tax jurisdiction or fixed amount")

    # Savings
    starting_savings: float = Field(default=0.0, ge=0, description="Savings at month 0")
    monthly_savings: float = Field(default=0.0, ge=0, description="Amount saved per month")
    monthly_savings_growth_pct: float = Field(default=0.0, ge=-100, description="Yearly raise of the monthly savings %")
    savings_rate_pct: float = Field(default=0.0, gt=-1200, description="Annual interest on savings %")

    # Rent
    rent: float = Field(default=0.0, ge=0, description="Monthly rent paid until buying")
    rent_growth_pct: float = Field(default=0.0, ge=-100, description="Yearly rent increase %")

    # Mortgage
    mortgage_rate_pct: float = Field(default=3.5, gt=-1200, description="Annual mortgage interest %")
    min_deposit_pct: float = Field(default=20.0, ge=0, description="Minimum deposit required by lenders %")
    max_mortgage_years: int = Field(default=30, ge=0, description="Longest mortgage term offered")

    # Horizon
    max_simulation_years: int = Field(default=100, description="Age at which the search gives up")

    # Display only, never used in arithmetic
    currency: str = Field(default="€", description="Currency label")

    model_config = {
        "frozen": True,
    }

    @model_validator(mode="after")
    def _check_dates(self) -> SimulationParameters:
        if self.birth_date >= self.start_date:
            raise ValueError(f"birth_date {self.birth_date} must be before {self.start_date}")
        if self.retirement_date <= self.start_date:
            raise ValueError(f"retirement date {self.retirement_date} must be after {self.start_date}")
        return self

    @property
    def retirement_date(self) -> date:
        return self.birth_date + relativedelta(years=self.retirement_age)

    @property
    def age_limit_date(self) -> date:
        """Date at which the search stops looking."""
        return self.birth_date + relativedelta(years=self.max_simulation_years)

    @property
    def max_mortgage_months(self) -> int:
        return self.max_mortgage_years * 12

    @property
    def savings_monthly_rate(self) -> float:
        return monthly_rate(self.savings_rate_pct)

    @property
    def mortgage_monthly_rate(self) -> float:
        return monthly_rate(self.mortgage_rate_pct)

    @property
    def house_price_monthly_factor(self) -> float:
        return 1.0 + monthly_rate(self.house_price_growth_pct)

    @property
    def rent_growth_factor(self) -> float:
        return growth_factor(self.rent_growth_pct)

    @property
    def savings_growth_factor(self) -> float:
        return growth_factor(self.monthly_savings_growth_pct)
