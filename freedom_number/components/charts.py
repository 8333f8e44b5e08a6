"""Chart components for visualization.

This module handles all charting for the planner:
- Corpus path across the projection, with freedom age and stress window marked
- Spending breakdown by year (recurring, planned, buffer and income offset)

Key features:
- Interactive Plotly charts with hover information
- Depletion shown below the zero line rather than clipped
"""

import numpy as np
import plotly.graph_objs as go
import streamlit as st

from freedom_number.config import get_config
from freedom_number.schemas import PlanResult
from freedom_number.services import ExportService


class ChartComponent:
    """Charts for the planner."""

    def __init__(self):
        self.config = get_config()
        self.export_service = ExportService()

    def _dtick(self, age_range: int) -> int:
        # Adaptive tick interval: 10 years for long ranges, 2-5 for shorter
        if age_range > 30:
            return 10
        elif age_range > 15:
            return 5
        return 2

    def plot_corpus_path(self, result: PlanResult) -> None:
        """Plot end-of-year corpus by age.

        Args:
            result: Plan result for the current inputs
        """
        scenario = result.scenario
        df = self.export_service.to_dataframe(list(result.records))
        symbol = self.config.currency_symbol

        fig = go.Figure()

        if scenario.stress_enabled:
            fig.add_vrect(
                x0=scenario.freedom_age,
                x1=min(scenario.freedom_age + self.config.stress_window_years, scenario.life_age + 1),
                fillcolor="rgba(231, 76, 60, 0.12)",
                line_width=0,
                annotation_text="Bear decade",
                annotation_position="top left",
            )

        end_corpus = df["end_corpus"].to_numpy()
        fig.add_trace(
            go.Scatter(
                x=df["age"],
                y=np.where(end_corpus >= 0, end_corpus, np.nan),
                name="Corpus",
                line=dict(color="#08519c", width=3),
                fill="tozeroy",
                fillcolor="rgba(158, 202, 225, 0.3)",
                hovertemplate=f"Age: %{{x}}<br>Corpus: {symbol}%{{y:,.0f}}<extra></extra>",
            )
        )
        if (end_corpus < 0).any():
            fig.add_trace(
                go.Scatter(
                    x=df["age"],
                    y=np.where(end_corpus < 0, end_corpus, np.nan),
                    name="Shortfall",
                    line=dict(color="#e74c3c", width=3),
                    hovertemplate=f"Age: %{{x}}<br>Shortfall: {symbol}%{{y:,.0f}}<extra></extra>",
                )
            )

        fig.add_vline(
            x=scenario.freedom_age,
            line_dash="dash",
            line_color="#636363",
            annotation_text="Freedom age",
            annotation_position="top right",
        )
        fig.add_hline(y=0, line_color="#969696", line_width=1)

        fig.update_layout(
            title="Corpus by Age",
            xaxis_title="Age",
            yaxis_title=f"Corpus ({symbol})",
            hovermode="x unified",
            showlegend=True,
        )
        fig.update_xaxes(tickmode="linear", dtick=self._dtick(scenario.horizon_years))

        st.plotly_chart(fig, use_container_width=True)

    def plot_spending_breakdown(self, result: PlanResult) -> None:
        """Plot yearly spend split into recurring and planned, with the net withdrawal line.

        Args:
            result: Plan result for the current inputs
        """
        scenario = result.scenario
        df = self.export_service.to_dataframe(list(result.records))
        symbol = self.config.currency_symbol

        fig = go.Figure()
        fig.add_trace(
            go.Bar(
                x=df["age"],
                y=df["recurring_spend"],
                name="Recurring",
                marker_color="#3182bd",
                hovertemplate=f"Age: %{{x}}<br>Recurring: {symbol}%{{y:,.0f}}<extra></extra>",
            )
        )
        fig.add_trace(
            go.Bar(
                x=df["age"],
                y=df["event_spend"],
                name="Planned events",
                marker_color="#fd8d3c",
                hovertemplate=f"Age: %{{x}}<br>Planned: {symbol}%{{y:,.0f}}<extra></extra>",
            )
        )
        fig.add_trace(
            go.Scatter(
                x=df["age"],
                y=df["buffered_spend"],
                name="Spend + buffer − income",
                line=dict(color="#2c3e50", width=2, dash="dot"),
                hovertemplate=f"Age: %{{x}}<br>Net spend: {symbol}%{{y:,.0f}}<extra></extra>",
            )
        )

        fig.update_layout(
            title="Annual Spending",
            xaxis_title="Age",
            yaxis_title=f"Spend ({symbol})",
            barmode="stack",
            hovermode="x unified",
            showlegend=True,
        )
        fig.update_xaxes(tickmode="linear", dtick=self._dtick(scenario.horizon_years))

        st.plotly_chart(fig, use_container_width=True)
