"""Scenario search result models."""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Any

import pandas as pd
from pydantic import BaseModel, Field, computed_field

from housecalc.domain.models.point import MonthlySimulationPoint


class SearchOutcome(str, Enum):
    """How the search loop terminated."""

    FOUND_AFFORDABLE = "found_affordable"
    AGE_LIMIT_REACHED = "age_limit_reached"


class CostPoint(BaseModel):
    """Total cost of buying in a given month."""

    date: datetime.date
    total_cost: float

    model_config = {
        "frozen": True,
    }


class ScenarioSearchResult(BaseModel):
    """The three purchase strategies plus the cost-over-time series.

    An absent point means its condition was never met before the search
    stopped.
    """

    min_deposit_point: MonthlySimulationPoint | None = Field(
        None, description="First month the deposit reaches the lender minimum"
    )
    min_cost_point: MonthlySimulationPoint | None = Field(
        None, description="Cheapest month on or after the min-deposit month"
    )
    buy_outright_point: MonthlySimulationPoint | None = Field(
        None, description="First month savings cover price plus tax"
    )
    cost_series: list[CostPoint] = Field(default_factory=list, description="Total cost per month")
    outcome: SearchOutcome = Field(..., description="Terminal state of the search")

    @computed_field
    @property
    def months_simulated(self) -> int:
        return len(self.cost_series)

    def to_dataframe(self) -> pd.DataFrame:
        """Cost series as a DataFrame indexed by date, for charting."""
        df = pd.DataFrame(
            [(c.date, c.total_cost) for c in self.cost_series],
            columns=["date", "total_cost"],
        )
        return df.set_index("date")

    def summary(self) -> dict[str, Any]:
        """Plain-dict view of the three strategies with ISO dates."""

        def _describe(point: MonthlySimulationPoint | None) -> dict[str, Any] | None:
            if point is None:
                return None
            return {
                "date": point.date.isoformat(),
                "house_price": point.house_price,
                "tax_amount": point.tax_amount,
                "savings": point.savings,
                "deposit": point.deposit,
                "deposit_percentage": point.deposit_percentage,
                "mortgage_principal": point.mortgage_principal,
                "mortgage_duration_months": point.mortgage_duration_months,
                "monthly_payment": point.monthly_payment,
                "total_mortgage_interest": point.total_mortgage_interest,
                "mortgage_end_date": (
                    point.mortgage_end_date.isoformat() if point.mortgage_end_date else None
                ),
            }

        return {
            "outcome": self.outcome.value,
            "months_simulated": self.months_simulated,
            "min_deposit": _describe(self.min_deposit_point),
            "min_cost": _describe(self.min_cost_point),
            "buy_outright": _describe(self.buy_outright_point),
        }
