"""Scenario search engine.

Steps month by month from the start date, growing the house price, rent,
tax and savings, and records three purchase strategies:

- min deposit: first month the deposit reaches the lender minimum
- min cost: cheapest month to buy, from the min-deposit month onwards
- buy outright: first month savings cover price plus tax

The search stops when the house can be bought outright or when the age
ceiling is reached.
"""

from __future__ import annotations

from dataclasses import dataclass

from housecalc.application.services.simulation import build_simulation_point
from housecalc.core.exceptions import ConfigurationError, SearchBudgetExceededError
from housecalc.core.logging import get_logger
from housecalc.core.settings import AppSettings, get_settings
from housecalc.domain.calculator.taxes import resolve_purchase_tax, tax_for_configuration
from housecalc.domain.models.jurisdiction import CustomTax
from housecalc.domain.models.parameters import SimulationParameters
from housecalc.domain.models.point import MonthlySimulationPoint
from housecalc.domain.models.result import CostPoint, ScenarioSearchResult, SearchOutcome

log = get_logger(__name__)


@dataclass
class SearchState:
    """Running state carried from one month to the next."""

    month_index: int
    house_price: float
    tax_amount: float
    rent: float
    monthly_contribution: float
    anchor_savings: float
    anchor_month: int
    cumulative_rent: float = 0.0


class ScenarioSearch:
    """Month-stepped search for the three purchase strategies.

    House price grows by compounding the monthly factor onto the previous
    month's price, not by recomputing ``price0 * factor**m``.
    """

    def __init__(
        self,
        params: SimulationParameters,
        settings: AppSettings | None = None,
    ):
        self.params = params
        self.settings = settings or get_settings()
        self._validate()

    def _validate(self) -> None:
        """Reject configurations the loop could not finish on."""
        p = self.params
        if p.max_simulation_years <= 0:
            log.error("invalid_search_horizon", max_simulation_years=p.max_simulation_years)
            raise ConfigurationError(
                f"max_simulation_years must be > 0, got {p.max_simulation_years}"
            )
        if p.age_limit_date <= p.start_date:
            log.error("age_limit_already_reached", age_limit_date=p.age_limit_date.isoformat())
            raise ConfigurationError(
                f"Age limit {p.age_limit_date} is not after the start date {p.start_date}"
            )
        if not 0 <= p.min_deposit_pct < 100:
            log.error("unreachable_deposit_target", min_deposit_pct=p.min_deposit_pct)
            raise ConfigurationError(
                f"min_deposit_pct must be in [0, 100), got {p.min_deposit_pct}: "
                "a mortgage month always has a deposit below the house price"
            )

    def _initial_state(self) -> SearchState:
        p = self.params
        return SearchState(
            month_index=1,
            house_price=p.house_price,
            tax_amount=resolve_purchase_tax(p.tax, p.house_price, p.starting_savings),
            rent=p.rent,
            monthly_contribution=p.monthly_savings,
            anchor_savings=p.starting_savings,
            anchor_month=0,
        )

    def _build_point(self, state: SearchState) -> MonthlySimulationPoint:
        return build_simulation_point(
            month_index=state.month_index,
            params=self.params,
            house_price=state.house_price,
            tax_amount=state.tax_amount,
            anchor_savings=state.anchor_savings,
            months_since_anchor=state.month_index - state.anchor_month,
            monthly_contribution=state.monthly_contribution,
        )

    def _advance(self, state: SearchState, point: MonthlySimulationPoint) -> None:
        """Move the running state on to the next month."""
        p = self.params
        state.house_price *= p.house_price_monthly_factor
        if not isinstance(p.tax, CustomTax):
            # Last month's principal stands in for this month's.
            state.tax_amount = tax_for_configuration(
                p.tax, state.house_price, point.mortgage_principal
            )

        if state.month_index % 12 == 0:
            state.rent *= p.rent_growth_factor
            # Re-anchor before the contribution changes so the closed form stays exact.
            state.anchor_savings = point.savings
            state.anchor_month = state.month_index
            state.monthly_contribution *= p.savings_growth_factor

        state.month_index += 1

    def run(self) -> ScenarioSearchResult:
        """Run the search to a terminal state.

        Returns:
            ScenarioSearchResult with the strategies that were reached and
            the total cost of buying in each simulated month.

        Raises:
            SearchBudgetExceededError: the loop ran past ``max_search_months``
        """
        p = self.params
        budget = self.settings.max_search_months
        state = self._initial_state()

        log.info(
            "scenario_search_started",
            house_price=p.house_price,
            tax_kind=p.tax.kind,
            start_date=p.start_date.isoformat(),
            age_limit_date=p.age_limit_date.isoformat(),
        )

        min_deposit_point: MonthlySimulationPoint | None = None
        min_cost_point: MonthlySimulationPoint | None = None
        min_cost = float("inf")
        buy_outright_point: MonthlySimulationPoint | None = None
        cost_series: list[CostPoint] = []

        while True:
            if state.month_index > budget:
                log.error("scenario_search_budget_exceeded", budget=budget)
                raise SearchBudgetExceededError(budget)

            point = self._build_point(state)

            if min_deposit_point is None and point.deposit_percentage >= p.min_deposit_pct:
                min_deposit_point = point
                log.debug("min_deposit_reached", date=point.date.isoformat(), deposit_pct=point.deposit_percentage)

            total_cost = (
                point.total_mortgage_interest
                + state.cumulative_rent
                + point.tax_amount
                + point.house_price
            )
            cost_series.append(CostPoint(date=point.date, total_cost=total_cost))
            if min_deposit_point is not None and total_cost < min_cost:
                min_cost = total_cost
                min_cost_point = point

            if point.savings >= point.total_price:
                buy_outright_point = point
                outcome = SearchOutcome.FOUND_AFFORDABLE
                log.debug("buy_outright_reached", date=point.date.isoformat())
                break

            state.cumulative_rent += state.rent
            if point.date >= p.age_limit_date:
                outcome = SearchOutcome.AGE_LIMIT_REACHED
                break

            self._advance(state, point)

        result = ScenarioSearchResult(
            min_deposit_point=min_deposit_point,
            min_cost_point=min_cost_point,
            buy_outright_point=buy_outright_point,
            cost_series=cost_series,
            outcome=outcome,
        )
        log.info(
            "scenario_search_finished",
            outcome=outcome.value,
            months=result.months_simulated,
            min_deposit_found=min_deposit_point is not None,
            buy_outright_found=buy_outright_point is not None,
        )
        return result


def run_scenario_search(
    params: SimulationParameters,
    settings: AppSettings | None = None,
) -> ScenarioSearchResult:
    """Run a scenario search.

    Convenience wrapper around ScenarioSearch.
    """
    return ScenarioSearch(params, settings).run()
