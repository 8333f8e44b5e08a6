"""Headline metrics derived from a finished projection."""

from typing import List, Optional

import numpy as np

from freedom_number.config import get_config
from freedom_number.schemas import (
    GoalSeekResult,
    ProjectionMetrics,
    Scenario,
    YearRecord,
)
from freedom_number.utils import in_age_window


class MetricsService:
    """Service for summary figures shown above the projection table."""

    def __init__(self):
        self.capital_multiple = get_config().capital_multiple

    def annual_spend_today(self, scenario: Scenario) -> float:
        """Recurring spend active at the current age, at today's prices."""
        return sum(
            expense.amount_today
            for expense in scenario.recurring_expenses
            if in_age_window(scenario.current_age, expense.start_age, expense.active_years)
        )

    def peak_corpus(self, records: List[YearRecord]) -> Optional[float]:
        """Highest end-of-year corpus across the horizon."""
        if not records:
            return None
        return float(np.max([r.end_corpus for r in records]))

    def implied_withdrawal_rate(
        self, scenario: Scenario, records: List[YearRecord]
    ) -> Optional[float]:
        """Spend over starting corpus in the first freedom year, after income offset."""
        for record in records:
            if record.age == scenario.freedom_age:
                if record.start_corpus > 0:
                    return record.buffered_spend / record.start_corpus
                return None
        return None

    def compute(
        self,
        scenario: Scenario,
        records: List[YearRecord],
        goal_seek: Optional[GoalSeekResult] = None,
    ) -> ProjectionMetrics:
        """Compute all headline metrics for a projection.

        Args:
            scenario: Scenario the records were projected from
            records: Projection output
            goal_seek: Solver result used for the projection, if any

        Returns:
            ProjectionMetrics
        """
        spend_today = self.annual_spend_today(scenario)
        peak = self.peak_corpus(records)
        return ProjectionMetrics(
            annual_spend_today=spend_today,
            capital_rule_of_thumb=spend_today * self.capital_multiple,
            peak_corpus=peak if peak is not None else float("nan"),
            implied_withdrawal_rate=self.implied_withdrawal_rate(scenario, records),
            required_lump_sum=goal_seek.lump_sum if goal_seek is not None else None,
        )
