"""Summary component for displaying headline metrics and input details."""

from typing import Optional, Tuple

import streamlit as st

from freedom_number.config import get_config
from freedom_number.schemas import GoalSeekResult, PlanResult, SolveStatus
from freedom_number.utils import format_currency, format_percentage


class SummaryComponent:
    """Component for displaying the headline KPI cards and input summary."""

    def __init__(self):
        self.config = get_config()

    def render_summary_cards(self, result: PlanResult) -> None:
        """Display headline metric cards.

        Args:
            result: Plan result for the current inputs
        """
        metrics = result.metrics
        symbol = self.config.currency_symbol

        st.markdown("---")
        st.subheader("📊 Freedom Number")

        col1, col2, col3, col4, col5 = st.columns(5)

        with col1:
            st.metric(
                "Annual Spend Today",
                format_currency(metrics.annual_spend_today, symbol),
                help="Recurring expenses active at your current age, at today's prices",
            )

        with col2:
            st.metric(
                f"{self.config.capital_multiple:.0f}× Spend",
                format_currency(metrics.capital_rule_of_thumb, symbol),
                help="Rule-of-thumb capital for today's spend",
            )

        with col3:
            st.metric(
                "Extra Lump Sum Needed",
                format_currency(metrics.required_lump_sum, symbol),
                help="Invested today on top of your corpus and SIP so the corpus lasts to life expectancy",
            )

        with col4:
            st.metric(
                "Peak Corpus",
                format_currency(metrics.peak_corpus, symbol),
                help="Highest end-of-year corpus across the projection",
            )

        with col5:
            st.metric(
                "Implied Withdrawal Rate",
                format_percentage(metrics.implied_withdrawal_rate),
                help="Spend (after buffer and retirement income) over starting corpus in the first freedom year",
            )

        notice = self.goal_seek_notice(result.goal_seek)
        if notice is not None:
            level, message = notice
            getattr(st, level)(message)

    def goal_seek_notice(self, goal_seek: GoalSeekResult) -> Optional[Tuple[str, str]]:
        """Streamlit message level and text describing the solve outcome, if any."""
        symbol = self.config.currency_symbol
        tolerance = self.config.solver_tolerance

        if goal_seek.status is SolveStatus.NOT_FOUND:
            return (
                "error",
                "No feasible lump sum: even a very large investment today does not carry "
                "the corpus to life expectancy under these assumptions. The table below "
                "shows the projection without any extra lump sum.",
            )

        overfunded = (
            goal_seek.lump_sum is not None
            and goal_seek.lump_sum <= tolerance
            and (goal_seek.end_corpus or 0.0) > tolerance
        )
        if overfunded:
            return (
                "info",
                "Plan already over-funded: no extra lump sum is needed and the corpus "
                f"still holds {format_currency(goal_seek.end_corpus, symbol)} at life expectancy.",
            )
        if goal_seek.status is SolveStatus.BEST_EFFORT:
            return (
                "warning",
                f"Goal seek stopped before reaching ±{format_currency(tolerance, symbol)}; "
                "the lump sum shown is a close estimate.",
            )
        return None

    def render_input_summary(self, result: PlanResult) -> None:
        """Display expandable input summary.

        Args:
            result: Plan result for the current inputs
        """
        scenario = result.scenario
        symbol = self.config.currency_symbol

        with st.expander("📋 View Input Summary", expanded=False):
            summary_col1, summary_col2 = st.columns(2)

            with summary_col1:
                st.markdown("**Timeline**")
                st.write(f"- Current Age: {scenario.current_age}")
                st.write(f"- Freedom Age: {scenario.freedom_age}")
                st.write(f"- Life Expectancy: {scenario.life_age}")
                st.write(f"- Years Projected: {scenario.horizon_years}")

                st.markdown("**Financial**")
                st.write(f"- Current Corpus: {format_currency(scenario.current_corpus, symbol)}")
                st.write(f"- Monthly SIP: {format_currency(scenario.monthly_contribution, symbol)}")
                st.write(
                    f"- Retirement Income: {format_currency(scenario.annual_retirement_income, symbol)} / year"
                )

            with summary_col2:
                st.markdown("**Assumptions**")
                st.write(f"- Inflation: {format_percentage(scenario.inflation, 2)}")
                st.write(f"- Nominal Return: {format_percentage(scenario.nominal_return, 2)}")
                st.write(f"- Expense Ratio: {format_percentage(scenario.expense_ratio, 2)}")
                st.write(f"- Safety Buffer: {format_percentage(scenario.safety_buffer, 0)}")
                st.write(f"- Stress Test: {'Bear decade' if scenario.stress_enabled else 'Off'}")

                st.markdown("**Plan**")
                st.write(f"- Recurring Expenses: {len(scenario.recurring_expenses)}")
                st.write(f"- Planned Events: {len(scenario.one_time_events)}")
