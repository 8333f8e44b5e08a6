"""Audit service explaining how a single projection year was computed."""

from typing import List, Optional

from freedom_number.schemas import AuditLine, Scenario, YearAudit, YearRecord
from freedom_number.utils import grow, in_age_window


class AuditService:
    """Service for per-year breakdowns of a projection."""

    def __init__(self):
        pass

    def recurring_lines(self, scenario: Scenario, age: int) -> List[AuditLine]:
        """Line items for recurring expenses active at age."""
        lines = []
        for expense in scenario.recurring_expenses:
            if not in_age_window(age, expense.start_age, expense.active_years):
                continue
            years = age - expense.start_age
            lines.append(
                AuditLine(
                    label=expense.label,
                    amount_today=expense.amount_today,
                    rate=expense.annual_growth,
                    years=years,
                    value=grow(expense.amount_today, expense.annual_growth, years),
                )
            )
        return lines

    def event_lines(self, scenario: Scenario, age: int) -> List[AuditLine]:
        """Line items for one-time events firing at age."""
        lines = []
        for event in scenario.one_time_events:
            if event.trigger_age != age:
                continue
            years = age - scenario.current_age
            lines.append(
                AuditLine(
                    label=event.label,
                    amount_today=event.amount_today,
                    rate=event.inflation_rate,
                    years=years,
                    value=grow(event.amount_today, event.inflation_rate, years),
                )
            )
        return lines

    def build_audit(
        self, scenario: Scenario, records: List[YearRecord], age: int
    ) -> Optional[YearAudit]:
        """Build the audit for one age.

        Args:
            scenario: Scenario the records were projected from
            records: Projection output
            age: Age to explain

        Returns:
            YearAudit, or None when the projection has no record for age
        """
        record = next((r for r in records if r.age == age), None)
        if record is None:
            return None

        return YearAudit(
            record=record,
            recurring_lines=tuple(self.recurring_lines(scenario, age)),
            event_lines=tuple(self.event_lines(scenario, age)),
            income_offset_applied=(
                age >= scenario.freedom_age and scenario.annual_retirement_income > 0
            ),
            annual_retirement_income=scenario.annual_retirement_income,
            safety_buffer=scenario.safety_buffer,
        )
