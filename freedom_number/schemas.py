"""Data models and type definitions for the Freedom Number planner.

This module defines all data structures used throughout the application:
- Scenario inputs (recurring expenses, one-time events, assumptions)
- Per-age projection records
- Goal-seek results
- Custom exception classes

Key features:
- Immutable value objects, safe to share between reruns and threads
- Distinguishable "not found" solver outcome instead of NaN
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class RecurringExpense:
    """Recurring annual expense, valued at today's prices."""

    label: str
    amount_today: float
    annual_growth: float
    start_age: int
    active_years: int  # active while start_age <= age < start_age + active_years


@dataclass(frozen=True)
class OneTimeEvent:
    """Planned expense that fires once, at trigger_age."""

    label: str
    trigger_age: int
    amount_today: float
    inflation_rate: float  # compounded from the scenario's current age


@dataclass(frozen=True)
class Scenario:
    """Immutable input to a single projection run.

    Callers are responsible for sanitizing form input before construction;
    the projection engine does not re-validate.
    """

    current_age: int
    freedom_age: int
    life_age: int
    inflation: float
    nominal_return: float  # post-tax, before the expense ratio haircut
    expense_ratio: float
    safety_buffer: float
    current_corpus: float = 0.0
    monthly_contribution: float = 0.0
    annual_retirement_income: float = 0.0
    stress_enabled: bool = False
    recurring_expenses: Tuple[RecurringExpense, ...] = field(default_factory=tuple)
    one_time_events: Tuple[OneTimeEvent, ...] = field(default_factory=tuple)

    @property
    def horizon_years(self) -> int:
        """Number of simulated ages, both ends inclusive."""
        return self.life_age - self.current_age + 1


@dataclass(frozen=True)
class YearRecord:
    """Projection output for a single age."""

    age: int
    recurring_spend: float
    event_spend: float
    total_spend: float
    buffered_spend: float  # after buffer and retirement income offset
    start_corpus: float  # carried in from the previous year, before contribution
    contribution: float
    investment_return: float
    end_corpus: float
    effective_rate: float


class SolveStatus(Enum):
    """Outcome of a goal-seek run."""

    CONVERGED = "converged"
    BEST_EFFORT = "best_effort"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class GoalSeekResult:
    """Result of solving for the extra lump sum."""

    status: SolveStatus
    lump_sum: Optional[float] = None
    end_corpus: Optional[float] = None
    iterations: int = 0

    @property
    def found(self) -> bool:
        return self.status is not SolveStatus.NOT_FOUND


@dataclass(frozen=True)
class AuditLine:
    """One compounded amount in a year audit."""

    label: str
    amount_today: float
    rate: float
    years: int
    value: float


@dataclass(frozen=True)
class YearAudit:
    """Breakdown of how a single year's record was computed."""

    record: YearRecord
    recurring_lines: Tuple[AuditLine, ...]
    event_lines: Tuple[AuditLine, ...]
    income_offset_applied: bool
    annual_retirement_income: float
    safety_buffer: float


@dataclass(frozen=True)
class ProjectionMetrics:
    """Headline figures derived from a projection."""

    annual_spend_today: float
    capital_rule_of_thumb: float
    peak_corpus: float
    implied_withdrawal_rate: Optional[float]
    required_lump_sum: Optional[float]


@dataclass(frozen=True)
class PlanResult:
    """Everything the UI shows for one set of inputs."""

    scenario: Scenario
    goal_seek: GoalSeekResult
    records: Tuple[YearRecord, ...]
    metrics: ProjectionMetrics


class ValidationError(Exception):
    """Custom exception for validation errors."""

    pass


class SimulationError(Exception):
    """Custom exception for simulation errors."""

    pass


class StateError(Exception):
    """Custom exception for undecodable planner state."""

    pass
