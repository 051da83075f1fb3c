"""Monthly simulation point construction.

Turns the running state of a search (house price, tax, savings anchor,
contribution level) into the snapshot of buying in a given month.
"""

from __future__ import annotations

from dateutil.relativedelta import relativedelta

from housecalc.core.financial import (
    compound_interest,
    months_between,
    payment,
    total_mortgage_interest,
)
from housecalc.domain.models.parameters import SimulationParameters
from housecalc.domain.models.point import NOT_APPLICABLE, MonthlySimulationPoint


def build_simulation_point(
    month_index: int,
    params: SimulationParameters,
    house_price: float,
    tax_amount: float,
    anchor_savings: float,
    months_since_anchor: int,
    monthly_contribution: float,
) -> MonthlySimulationPoint:
    """Build the snapshot for ``month_index`` months after the start date.

    Savings are compounded in closed form from the anchor, the balance at
    the last change of contribution level.

    Args:
        month_index: Months after ``params.start_date`` (1 = next month)
        params: Search parameters
        house_price: House price this month
        tax_amount: Purchase taxes and fees this month
        anchor_savings: Savings balance at the anchor month
        months_since_anchor: Months compounded since the anchor
        monthly_contribution: Current monthly savings

    Returns:
        MonthlySimulationPoint with the mortgage terms, or the no-mortgage
        state when savings cover the purchase or retirement is too close.
    """
    when = params.start_date + relativedelta(months=month_index)
    savings = compound_interest(
        anchor_savings,
        params.savings_monthly_rate,
        months_since_anchor,
        monthly_contribution,
    )
    deposit = savings - tax_amount
    duration = min(params.max_mortgage_months, months_between(when, params.retirement_date))

    if duration <= 0 or savings >= house_price + tax_amount:
        return MonthlySimulationPoint(
            month_index=month_index,
            date=when,
            house_price=house_price,
            tax_amount=tax_amount,
            savings=savings,
            deposit=deposit,
            deposit_percentage=NOT_APPLICABLE,
        )

    principal = house_price - deposit
    rate = params.mortgage_monthly_rate
    pmt = payment(rate, duration, principal)

    return MonthlySimulationPoint(
        month_index=month_index,
        date=when,
        house_price=house_price,
        tax_amount=tax_amount,
        savings=savings,
        deposit=deposit,
        deposit_percentage=deposit / house_price * 100.0,
        mortgage_principal=principal,
        mortgage_duration_months=duration,
        monthly_payment=pmt,
        total_mortgage_interest=total_mortgage_interest(rate, duration, principal, pmt),
        mortgage_end_date=when + relativedelta(months=duration),
    )
