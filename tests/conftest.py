import pytest

from freedom_number.schemas import OneTimeEvent, RecurringExpense, Scenario
from freedom_number.services import (
    AuditService,
    ExportService,
    GoalSeekService,
    MetricsService,
    ProjectionService,
    StateService,
)


@pytest.fixture
def projection_service():
    return ProjectionService()


@pytest.fixture
def goal_seek_service(projection_service):
    return GoalSeekService(projection_service)


@pytest.fixture
def metrics_service():
    return MetricsService()


@pytest.fixture
def audit_service():
    return AuditService()


@pytest.fixture
def export_service():
    return ExportService()


@pytest.fixture
def state_service():
    return StateService()


@pytest.fixture
def simple_scenario():
    """Zero corpus, one lifelong expense starting exactly at freedom age."""
    return Scenario(
        current_age=40,
        freedom_age=55,
        life_age=85,
        inflation=0.06,
        nominal_return=0.08,
        expense_ratio=0.0,
        safety_buffer=0.0,
        current_corpus=0.0,
        monthly_contribution=0.0,
        annual_retirement_income=0.0,
        stress_enabled=False,
        recurring_expenses=(
            RecurringExpense(
                label="Living costs",
                amount_today=100_000.0,
                annual_growth=0.0,
                start_age=55,
                active_years=999,
            ),
        ),
        one_time_events=(),
    )


@pytest.fixture
def indicative_scenario(state_service):
    """The indicative defaults shipped with the planner."""
    return state_service.build_scenario(state_service.default_state())


@pytest.fixture
def event_scenario():
    """Small scenario with contributions, income and a planned event."""
    return Scenario(
        current_age=40,
        freedom_age=45,
        life_age=60,
        inflation=0.05,
        nominal_return=0.09,
        expense_ratio=0.01,
        safety_buffer=0.1,
        current_corpus=1_000_000.0,
        monthly_contribution=10_000.0,
        annual_retirement_income=50_000.0,
        stress_enabled=True,
        recurring_expenses=(
            RecurringExpense("Rent", 200_000.0, 0.05, 40, 999),
            RecurringExpense("School", 80_000.0, 0.08, 42, 5),
        ),
        one_time_events=(OneTimeEvent("Car", 50, 500_000.0, 0.06),),
    )
