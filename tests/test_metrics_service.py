import dataclasses

import pytest

from freedom_number.schemas import GoalSeekResult, RecurringExpense, SolveStatus


def test_annual_spend_today_counts_rows_active_now(metrics_service, event_scenario):
    # Rent starts at 40 (active), School starts at 42 (not yet)
    assert metrics_service.annual_spend_today(event_scenario) == 200_000.0


def test_annual_spend_today_indicative(metrics_service, indicative_scenario):
    # Every default row except Discretionary (from 55) is active at 40
    expected = 360_000 + 240_000 + 120_000 + 150_000 + 120_000 + 200_000
    assert metrics_service.annual_spend_today(indicative_scenario) == expected


def test_compute_headline_metrics(metrics_service, projection_service, event_scenario):
    records = projection_service.project(event_scenario, 0.0)
    goal_seek = GoalSeekResult(status=SolveStatus.CONVERGED, lump_sum=123.0, end_corpus=0.5)

    metrics = metrics_service.compute(event_scenario, records, goal_seek)

    assert metrics.annual_spend_today == 200_000.0
    assert metrics.capital_rule_of_thumb == 8_000_000.0
    assert metrics.peak_corpus == max(r.end_corpus for r in records)
    assert metrics.required_lump_sum == 123.0

    freedom = next(r for r in records if r.age == event_scenario.freedom_age)
    assert metrics.implied_withdrawal_rate == pytest.approx(
        freedom.buffered_spend / freedom.start_corpus
    )


def test_required_lump_sum_missing_when_not_found(metrics_service, projection_service, event_scenario):
    records = projection_service.project(event_scenario, 0.0)
    metrics = metrics_service.compute(
        event_scenario, records, GoalSeekResult(status=SolveStatus.NOT_FOUND)
    )
    assert metrics.required_lump_sum is None


def test_withdrawal_rate_none_without_positive_corpus(metrics_service, projection_service, simple_scenario):
    # Corpus is zero at freedom age
    records = projection_service.project(simple_scenario, 0.0)
    assert metrics_service.implied_withdrawal_rate(simple_scenario, records) is None


def test_withdrawal_rate_none_when_freedom_age_not_projected(metrics_service, projection_service, simple_scenario):
    scenario = dataclasses.replace(simple_scenario, current_corpus=1e6)
    records = [r for r in projection_service.project(scenario, 0.0) if r.age < 55]
    assert metrics_service.implied_withdrawal_rate(scenario, records) is None


def test_peak_corpus_empty(metrics_service):
    assert metrics_service.peak_corpus([]) is None


def test_spend_today_ignores_finished_rows(metrics_service, simple_scenario):
    scenario = dataclasses.replace(
        simple_scenario,
        recurring_expenses=(RecurringExpense("Old loan", 50_000.0, 0.0, 30, 10),),
    )
    assert metrics_service.annual_spend_today(scenario) == 0
