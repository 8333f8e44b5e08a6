"""Projection service for deterministic corpus projections.

This module contains the projection engine:
- Year-by-year corpus fold from current age to life expectancy
- Recurring expenses with their own growth and active windows
- One-time planned events inflated from the current age
- Effective return after the expense ratio, with an optional bear-market stress

Key features:
- Pure and deterministic: identical inputs give identical records
- Start-of-year contributions until freedom age
- Safety buffer applied to spend, then offset by retirement income
- Negative corpus is reported, never clamped (it signals depletion)
"""

from typing import List

from freedom_number.schemas import Scenario, YearRecord
from freedom_number.utils import (
    grow,
    in_age_window,
    nominal_to_real,
    real_to_nominal,
)

# Bear-market stress: real return cut for the first decade after freedom age
STRESS_WINDOW_YEARS = 10
STRESS_REAL_HAIRCUT = 0.02


class ProjectionService:
    """Service for projecting a corpus across a scenario's lifespan.

    The service holds no state; every call to ``project`` re-runs the whole
    horizon from scratch.
    """

    def __init__(self):
        pass

    # ------------------------- Helpers ------------------------- #
    def effective_rate(self, scenario: Scenario, age: int) -> float:
        """Nominal growth rate applied to the corpus at a given age.

        Base rate is the nominal return less the expense ratio and may be
        negative. With stress enabled, ages in
        [freedom_age, freedom_age + 10) lose 2 points of *real* return;
        inflation itself is assumed unaffected by the stress.
        """
        rate = scenario.nominal_return - scenario.expense_ratio
        if scenario.stress_enabled and in_age_window(
            age, scenario.freedom_age, STRESS_WINDOW_YEARS
        ):
            real_stressed = nominal_to_real(rate, scenario.inflation) - STRESS_REAL_HAIRCUT
            rate = real_to_nominal(real_stressed, scenario.inflation)
        return rate

    def annual_contribution(self, scenario: Scenario, age: int) -> float:
        """Annualized contribution, paid only before freedom age."""
        if age < scenario.freedom_age:
            return scenario.monthly_contribution * 12
        return 0.0

    def recurring_spend_at(self, scenario: Scenario, age: int) -> float:
        """Sum of recurring expenses active at age, grown from their start age."""
        total = 0.0
        for expense in scenario.recurring_expenses:
            if not in_age_window(age, expense.start_age, expense.active_years):
                continue
            total += grow(
                expense.amount_today, expense.annual_growth, age - expense.start_age
            )
        return total

    def event_spend_at(self, scenario: Scenario, age: int) -> float:
        """Sum of one-time events firing at age.

        Events are inflated from the scenario's current age, not from the
        event's own age.
        """
        total = 0.0
        for event in scenario.one_time_events:
            if event.trigger_age != age:
                continue
            total += grow(
                event.amount_today, event.inflation_rate, age - scenario.current_age
            )
        return total

    def buffered_spend(self, scenario: Scenario, age: int, total_spend: float) -> float:
        """Apply the safety buffer, then offset retirement income from freedom age."""
        spend = total_spend * (1 + scenario.safety_buffer)
        if age >= scenario.freedom_age and scenario.annual_retirement_income > 0:
            spend = max(0.0, spend - scenario.annual_retirement_income)
        return spend

    # ------------------------- Engine ------------------------- #
    def project(self, scenario: Scenario, extra_lump_sum: float = 0.0) -> List[YearRecord]:
        """Project the corpus from current age to life age, inclusive.

        Args:
            scenario: Assumptions, expenses and events
            extra_lump_sum: Extra amount invested today, on top of the current corpus

        Returns:
            One YearRecord per age, in ascending age order. Each record's
            start_corpus equals the previous record's end_corpus.
        """
        records: List[YearRecord] = []
        corpus = extra_lump_sum + scenario.current_corpus

        for age in range(scenario.current_age, scenario.life_age + 1):
            contribution = self.annual_contribution(scenario, age)
            invested = corpus + contribution

            recurring = self.recurring_spend_at(scenario, age)
            events = self.event_spend_at(scenario, age)
            total = recurring + events
            spend = self.buffered_spend(scenario, age, total)

            rate = self.effective_rate(scenario, age)
            investment_return = invested * rate
            end_corpus = invested + investment_return - spend

            records.append(
                YearRecord(
                    age=age,
                    recurring_spend=recurring,
                    event_spend=events,
                    total_spend=total,
                    buffered_spend=spend,
                    start_corpus=corpus,
                    contribution=contribution,
                    investment_return=investment_return,
                    end_corpus=end_corpus,
                    effective_rate=rate,
                )
            )
            corpus = end_corpus

        return records

    def terminal_corpus(self, scenario: Scenario, extra_lump_sum: float = 0.0) -> float:
        """End corpus at life age for a given extra lump sum."""
        return self.project(scenario, extra_lump_sum)[-1].end_corpus
