"""Sidebar component for user inputs."""

import math
from typing import Dict, List, Optional

import pandas as pd
import streamlit as st

from freedom_number.config import get_config
from freedom_number.services import StateService

# Session key holding the current planner state
STATE_KEY = "planner_state"

REGULAR_COLUMNS = ["label", "amount_today", "annual_growth", "active_years", "start_age"]
PLANNED_COLUMNS = ["label", "trigger_age", "amount_today", "inflation_rate"]


class SidebarComponent:
    """Component for handling scenario inputs and the editable tables."""

    # Widget definitions: state key -> (label, step, format, help)
    AGE_FIELDS = {
        "current_age": ("Current age", 1, None, None),
        "freedom_age": ("Freedom age", 1, None, "Contributions stop and withdrawals begin"),
        "life_age": ("Life expectancy", 1, None, "Last age simulated"),
    }

    MONEY_FIELDS = {
        "current_corpus": ("Current corpus (₹)", 100_000.0, "%.0f", "Investable assets today"),
        "monthly_contribution": ("Monthly SIP (₹)", 1_000.0, "%.0f", "Invested every month until freedom age"),
        "annual_retirement_income": (
            "Annual retirement income (₹)",
            10_000.0,
            "%.0f",
            "Pension, rent or other income from freedom age, offsets spend",
        ),
    }

    RATE_FIELDS = {
        "inflation": ("Inflation", 0.005, "%.4f", "0.06 = 6%; also the default growth for new rows"),
        "nominal_return": ("Nominal return (post-tax)", 0.005, "%.4f", "Before the expense ratio"),
        "expense_ratio": ("Expense ratio (TER)", 0.0005, "%.4f", "Annual fee subtracted from the return"),
        "safety_buffer": ("Safety buffer", 0.01, "%.2f", "0.15 = spend marked up by 15%"),
    }

    def __init__(self):
        self.config = get_config()
        self.state_service = StateService()

    # ------------------------- State ------------------------- #
    def load_state(self) -> Dict:
        """Return planner state, seeding it from a shared link or defaults once."""
        if STATE_KEY not in st.session_state:
            token = st.query_params.get(self.config.share_query_param)
            shared = self.state_service.decode_state(token)
            st.session_state[STATE_KEY] = self.state_service.merge_with_defaults(shared)
        return st.session_state[STATE_KEY]

    def _reset_widgets(self) -> None:
        widget_keys = [
            k
            for k in list(st.session_state.keys())
            if str(k).startswith("input_") or str(k).endswith("_editor")
        ]
        for key in widget_keys:
            del st.session_state[key]

    def _load_defaults(self) -> None:
        st.session_state[STATE_KEY] = self.state_service.default_state()
        self._reset_widgets()

    def _clear_shared(self) -> None:
        st.query_params.clear()
        self._load_defaults()

    def _set_life_age(self, age: int) -> None:
        st.session_state["input_life_age"] = age

    # ------------------------- Inputs ------------------------- #
    def _number_input(self, key: str, field_def: tuple, inputs: Dict, cast=float):
        label, step, fmt, help_text = field_def
        widget_key = f"input_{key}"
        if widget_key not in st.session_state:
            st.session_state[widget_key] = cast(inputs[key])
        kwargs = {"step": cast(step), "key": widget_key, "help": help_text}
        if fmt:
            kwargs["format"] = fmt
        return cast(st.sidebar.number_input(label, **kwargs))

    def render(self, state: Dict) -> Dict:
        """Render sidebar and return the scenario inputs."""
        inputs = dict(state["inputs"])
        st.sidebar.header("Inputs")

        st.sidebar.subheader("Age & Timeline")
        for key, field_def in self.AGE_FIELDS.items():
            inputs[key] = self._number_input(key, field_def, inputs, cast=int)

        st.sidebar.caption("Longevity presets")
        preset_cols = st.sidebar.columns(len(self.config.longevity_presets))
        for col, preset in zip(preset_cols, self.config.longevity_presets):
            col.button(
                f"{preset}",
                key=f"life_preset_{preset}",
                on_click=self._set_life_age,
                args=(preset,),
                type="primary" if inputs["life_age"] == preset else "secondary",
                use_container_width=True,
            )

        st.sidebar.subheader("Corpus & Income")
        for key, field_def in self.MONEY_FIELDS.items():
            inputs[key] = self._number_input(key, field_def, inputs)

        st.sidebar.subheader("Returns & Spending")
        for key, field_def in self.RATE_FIELDS.items():
            inputs[key] = self._number_input(key, field_def, inputs)

        st.sidebar.markdown("---")
        st.sidebar.subheader("Stress Test")
        if "input_stress" not in st.session_state:
            st.session_state["input_stress"] = inputs.get("stress", "off")
        inputs["stress"] = st.sidebar.radio(
            "Market regime",
            options=["off", "bear"],
            format_func=lambda v: "Normal" if v == "off" else "Bear decade",
            key="input_stress",
            horizontal=True,
            help=(
                f"Bear decade cuts the real return by {self.config.stress_real_haircut:.0%} "
                f"for the first {self.config.stress_window_years} years from freedom age"
            ),
        )

        st.sidebar.markdown("---")
        col1, col2 = st.sidebar.columns(2)
        col1.button("Load indicative", on_click=self._load_defaults, use_container_width=True)
        col2.button("Reset", on_click=self._clear_shared, use_container_width=True)

        return inputs

    # ------------------------- Tables ------------------------- #
    def _rows_from_editor(self, df: pd.DataFrame, columns: List[str], defaults: Dict) -> List[Dict]:
        """Convert edited table rows to plain dicts, filling blank cells."""
        rows = []
        for record in df.reindex(columns=columns).to_dict("records"):
            if all(self._is_blank(record.get(c)) for c in columns):
                continue
            row = {}
            for column in columns:
                value = record.get(column)
                row[column] = defaults[column] if self._is_blank(value) else value
            rows.append(row)
        return rows

    def _is_blank(self, value: Optional[object]) -> bool:
        if value is None:
            return True
        if isinstance(value, float) and math.isnan(value):
            return True
        return isinstance(value, str) and not value.strip()

    def render_tables(self, state: Dict, inputs: Dict) -> Dict:
        """Render the editable expense and event tables.

        Args:
            state: Planner state holding the table rows the editors start from
            inputs: Current scenario inputs, used for new-row defaults

        Returns:
            Dict with "regular" and "planned" row lists
        """
        with st.expander("🧾 Recurring Expenses & Planned Events", expanded=False):
            st.markdown("**Recurring expenses** (amounts at today's prices)")
            regular_df = st.data_editor(
                pd.DataFrame(state["regular"], columns=REGULAR_COLUMNS),
                key="regular_editor",
                num_rows="dynamic",
                use_container_width=True,
                column_config={
                    "label": st.column_config.TextColumn("Category"),
                    "amount_today": st.column_config.NumberColumn("Amount today (₹)", min_value=0.0, format="%.0f"),
                    "annual_growth": st.column_config.NumberColumn("Growth", format="%.3f", help="0.06 = 6%"),
                    "active_years": st.column_config.NumberColumn("Tenure (years)", min_value=0, step=1, help="999 = rest of life"),
                    "start_age": st.column_config.NumberColumn("Start age", min_value=0, step=1),
                },
            )

            st.markdown("**Planned one-time events**")
            planned_df = st.data_editor(
                pd.DataFrame(state["planned"], columns=PLANNED_COLUMNS),
                key="planned_editor",
                num_rows="dynamic",
                use_container_width=True,
                column_config={
                    "label": st.column_config.TextColumn("Event"),
                    "trigger_age": st.column_config.NumberColumn("Event age", min_value=0, step=1),
                    "amount_today": st.column_config.NumberColumn("Amount today (₹)", min_value=0.0, format="%.0f"),
                    "inflation_rate": st.column_config.NumberColumn("Inflation", format="%.3f", help="0.06 = 6%"),
                },
            )

        regular = self._rows_from_editor(
            regular_df,
            REGULAR_COLUMNS,
            {
                "label": "New Item",
                "amount_today": 0.0,
                "annual_growth": inputs["inflation"],
                "active_years": 10,
                "start_age": inputs["current_age"],
            },
        )
        planned = self._rows_from_editor(
            planned_df,
            PLANNED_COLUMNS,
            {
                "label": "New Event",
                "trigger_age": inputs["current_age"] + 1,
                "amount_today": 0.0,
                "inflation_rate": inputs["inflation"],
            },
        )
        return {"regular": regular, "planned": planned}
