import pytest

from freedom_number.schemas import GoalSeekResult, SimulationError, SolveStatus, ValidationError
from freedom_number.services import SimulationController


@pytest.fixture
def controller():
    return SimulationController()


def test_compute_indicative_plan(controller, state_service, projection_service):
    state = state_service.default_state()

    result = controller.compute(state)

    assert result.goal_seek.status is SolveStatus.CONVERGED
    assert len(result.records) == 85 - 40 + 1
    assert abs(result.records[-1].end_corpus) <= 1.0
    assert result.metrics.required_lump_sum == result.goal_seek.lump_sum
    assert list(result.records) == projection_service.project(
        result.scenario, result.goal_seek.lump_sum
    )


def test_compute_without_feasible_lump_sum_projects_with_zero(controller, state_service):
    state = state_service.default_state()
    state["inputs"].update({"nominal_return": 0.0, "expense_ratio": 1.0})

    result = controller.compute(state)

    assert result.goal_seek.status is SolveStatus.NOT_FOUND
    assert result.metrics.required_lump_sum is None
    assert result.records[0].start_corpus == state["inputs"]["current_corpus"]


def test_compute_rejects_invalid_ages(controller, state_service):
    state = state_service.default_state()
    state["inputs"]["freedom_age"] = 30

    with pytest.raises(ValidationError):
        controller.compute(state)


def test_compute_rejects_negative_rows(controller, state_service):
    state = state_service.default_state()
    state["regular"][0]["amount_today"] = -5.0

    with pytest.raises(ValidationError, match="Housing"):
        controller.compute(state)


def test_compute_raises_when_nothing_projected(controller, state_service, monkeypatch):
    monkeypatch.setattr(
        controller.goal_seek_service,
        "solve",
        lambda scenario, **kwargs: GoalSeekResult(status=SolveStatus.NOT_FOUND),
    )
    monkeypatch.setattr(controller.projection_service, "project", lambda scenario, lump=0.0: [])

    with pytest.raises(SimulationError):
        controller.compute(state_service.default_state())


def test_input_hash_is_stable_and_sensitive(controller, state_service):
    state = state_service.default_state()
    same = state_service.default_state()
    changed = state_service.default_state()
    changed["inputs"]["life_age"] = 90

    assert controller.calculate_input_hash(state) == controller.calculate_input_hash(same)
    assert controller.calculate_input_hash(state) != controller.calculate_input_hash(changed)
