"""Monthly simulation snapshot."""

from __future__ import annotations

import datetime

from pydantic import BaseModel, Field, computed_field

# deposit_percentage when no mortgage applies
NOT_APPLICABLE = -1.0


class MonthlySimulationPoint(BaseModel):
    """What buying would look like in a given month.

    ``deposit_percentage`` is ``NOT_APPLICABLE`` (-1) when savings already
    cover price plus tax, or when retirement leaves no time for a mortgage.
    """

    month_index: int = Field(..., ge=0, description="Months after start_date")
    date: datetime.date = Field(..., description="Calendar month of the snapshot")

    house_price: float = Field(..., ge=0, description="House price this month")
    tax_amount: float = Field(..., ge=0, description="Purchase taxes and fees")
    savings: float = Field(..., description="Accumulated savings")
    deposit: float = Field(..., description="Savings left after taxes")
    deposit_percentage: float = Field(..., description="Deposit as % of price, -1 if not applicable")

    mortgage_principal: float = Field(default=0.0, ge=0, description="Loan amount")
    mortgage_duration_months: int = Field(default=0, ge=0, description="Loan term")
    monthly_payment: float = Field(default=0.0, ge=0, description="Level monthly payment")
    total_mortgage_interest: float = Field(default=0.0, description="Interest over the whole term")
    mortgage_end_date: datetime.date | None = Field(None, description="Month of the last payment")

    model_config = {
        "frozen": True,
    }

    @computed_field
    @property
    def needs_mortgage(self) -> bool:
        return self.mortgage_duration_months > 0

    @property
    def total_price(self) -> float:
        """House price plus taxes and fees."""
        return self.house_price + self.tax_amount
