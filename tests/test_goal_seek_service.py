import dataclasses
import logging

import pytest

from freedom_number.config import get_config, update_config
from freedom_number.schemas import RecurringExpense, Scenario, SolveStatus
from freedom_number.services import GoalSeekService


def test_solved_lump_sum_exhausts_corpus(goal_seek_service, projection_service, indicative_scenario):
    result = goal_seek_service.solve(indicative_scenario, target_end_corpus=0.0, tolerance=1.0)

    assert result.status is SolveStatus.CONVERGED
    assert result.found
    assert result.lump_sum > 0
    end = projection_service.terminal_corpus(indicative_scenario, result.lump_sum)
    assert abs(end) <= 1.0
    assert result.end_corpus == end


def test_simple_scenario_matches_closed_form(goal_seek_service, simple_scenario):
    # Corpus must fund 31 withdrawals of 100,000 from age 55 to 85 at 8%,
    # each year's return earned before the withdrawal.
    growth = 1.08
    pv_at_55 = sum(100_000.0 / growth ** (k + 1) for k in range(31))
    expected = pv_at_55 / growth ** 15

    result = goal_seek_service.solve(simple_scenario)

    assert result.found
    assert result.lump_sum == pytest.approx(expected, abs=1.0)


def test_bracket_expands_beyond_initial_guess(goal_seek_service, projection_service, simple_scenario):
    scenario = dataclasses.replace(
        simple_scenario,
        recurring_expenses=(RecurringExpense("Large", 5_000_000.0, 0.05, 55, 999),),
    )
    assert projection_service.terminal_corpus(scenario, goal_seek_service.initial_bracket) < 0

    result = goal_seek_service.solve(scenario)

    assert result.status is SolveStatus.CONVERGED
    assert result.lump_sum > goal_seek_service.initial_bracket


def test_nonzero_target(goal_seek_service, projection_service, simple_scenario):
    result = goal_seek_service.solve(simple_scenario, target_end_corpus=1_000_000.0, tolerance=1.0)

    assert result.found
    end = projection_service.terminal_corpus(simple_scenario, result.lump_sum)
    assert end == pytest.approx(1_000_000.0, abs=1.0)


def test_not_found_when_returns_wipe_out_corpus(goal_seek_service, caplog):
    # A -100% effective return erases any lump sum every year
    scenario = Scenario(
        current_age=60,
        freedom_age=60,
        life_age=70,
        inflation=0.05,
        nominal_return=0.0,
        expense_ratio=1.0,
        safety_buffer=0.0,
        recurring_expenses=(RecurringExpense("Living", 100_000.0, 0.0, 60, 999),),
    )

    with caplog.at_level(logging.WARNING, logger="freedom_number.services.goal_seek_service"):
        result = goal_seek_service.solve(scenario)

    assert result.status is SolveStatus.NOT_FOUND
    assert not result.found
    assert result.lump_sum is None
    assert result.iterations == goal_seek_service.max_expansions
    assert "No lump sum" in caplog.text


def test_best_effort_when_iterations_run_out(projection_service, indicative_scenario):
    service = GoalSeekService(projection_service)
    service.max_iterations = 3

    result = service.solve(indicative_scenario, tolerance=1e-9)

    assert result.status is SolveStatus.BEST_EFFORT
    assert result.found
    assert result.lump_sum is not None
    assert result.end_corpus == projection_service.terminal_corpus(indicative_scenario, result.lump_sum)


def test_overfunded_scenario_settles_near_zero(goal_seek_service, simple_scenario):
    # Already more than enough: the search cannot go below zero and ends best effort
    scenario = dataclasses.replace(simple_scenario, current_corpus=1e9)

    result = goal_seek_service.solve(scenario)

    assert result.status is SolveStatus.BEST_EFFORT
    assert result.lump_sum == pytest.approx(0.0, abs=1e-6)
    assert result.end_corpus > 0


def test_solve_does_not_change_inputs(goal_seek_service, event_scenario):
    before = dataclasses.replace(event_scenario)
    first = goal_seek_service.solve(event_scenario)
    second = goal_seek_service.solve(event_scenario)

    assert event_scenario == before
    assert first == second


def test_default_tolerance_comes_from_config(projection_service, indicative_scenario):
    tight = GoalSeekService(projection_service).solve(indicative_scenario, tolerance=1.0)

    original = get_config().solver_tolerance
    try:
        update_config(solver_tolerance=1e12)
        service = GoalSeekService(projection_service)
        loose = service.solve(indicative_scenario)
    finally:
        update_config(solver_tolerance=original)

    assert service.tolerance == 1e12
    assert loose.status is SolveStatus.CONVERGED
    assert loose.iterations < tight.iterations
