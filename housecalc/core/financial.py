"""Financial calculation functions.

Level-payment amortization, cumulative mortgage interest and compound
savings growth. All rates are monthly decimals; every function falls back
to its zero-rate form when ``|rate| <= RATE_EPSILON``.
"""

from __future__ import annotations

from datetime import date

import numpy as np
import numpy_financial as npf
from dateutil.relativedelta import relativedelta

# Rates this close to zero blow up the annuity denominators.
RATE_EPSILON = 1e-6


def monthly_rate(annual_rate_pct: float) -> float:
    """Convert an annual percentage (e.g. 3.5) to a monthly decimal rate."""
    return annual_rate_pct / 1200.0


def growth_factor(growth_pct: float) -> float:
    """Convert a percentage growth (e.g. 2.0) to a multiplier (1.02)."""
    return 1.0 + growth_pct / 100.0


def months_between(start: date, end: date) -> int:
    """Whole months from ``start`` to ``end``, clamped at zero.

    Day of month counts: a mortgage starting on the 1st can run right up to a
    retirement date on the 1st, while one starting on the 15th loses the
    final partial month.
    """
    delta = relativedelta(end, start)
    return max(0, delta.years * 12 + delta.months)


def payment(monthly_rate: float, n_months: int, principal: float) -> float:
    """Calculate the level monthly payment of a loan.

    Args:
        monthly_rate: Monthly interest rate as a decimal (0.003 for 3.6%/year)
        n_months: Loan term in months
        principal: Loan amount

    Returns:
        Monthly payment amount
    """
    if principal <= 0 or n_months <= 0:
        return 0.0

    if abs(monthly_rate) <= RATE_EPSILON:
        return principal / n_months

    return float(-npf.pmt(monthly_rate, n_months, principal))


def total_mortgage_interest(
    monthly_rate: float,
    n_months: int,
    principal: float,
    monthly_payment: float,
) -> float:
    """Total interest paid over the life of a loan.

    Sums the balance outstanding at the start of each month,
    ``P*(1+r)^(m-1) - pmt*((1+r)^(m-1) - 1)/r``, and multiplies by the rate.
    The first month contributes the principal itself.

    Returns:
        Total interest, or 0 for a near-zero rate or an empty term.
    """
    if n_months <= 0 or abs(monthly_rate) <= RATE_EPSILON:
        return 0.0

    # Months 1..n, so the total equals n*pmt - P.
    elapsed = np.arange(n_months, dtype=float)
    compounded = (1.0 + monthly_rate) ** elapsed
    balances = principal * compounded - monthly_payment * (compounded - 1.0) / monthly_rate

    return float(balances.sum() * monthly_rate)


def compound_interest(
    starting_value: float,
    monthly_rate: float,
    n_months: int,
    monthly_contribution: float,
) -> float:
    """Future value of a lump sum plus level monthly contributions.

    Args:
        starting_value: Amount invested at month 0
        monthly_rate: Monthly interest rate as a decimal
        n_months: Number of months to compound
        monthly_contribution: Amount added at the end of every month

    Returns:
        Balance after ``n_months``
    """
    if abs(monthly_rate) <= RATE_EPSILON:
        return starting_value + n_months * monthly_contribution

    return float(npf.fv(monthly_rate, n_months, -monthly_contribution, -starting_value))
