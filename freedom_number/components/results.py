"""Results display component."""

import math
from typing import Dict

import streamlit as st

from freedom_number.config import get_config
from freedom_number.schemas import PlanResult, YearAudit
from freedom_number.services import AuditService, ExportService, StateService
from freedom_number.utils import format_currency

# Column headers for the on-screen projection table
TABLE_COLUMNS = {
    "age": "Age",
    "recurring_spend": "Regular",
    "event_spend": "Planned",
    "total_spend": "Total",
    "buffered_spend": "Spend + Buffer",
    "start_corpus": "Start Corpus",
    "contribution": "Contribution",
    "investment_return": "Return",
    "end_corpus": "End Corpus",
}


class ResultsComponent:
    """Component for displaying the projection table, audit and exports."""

    def __init__(self):
        self.config = get_config()
        self.audit_service = AuditService()
        self.export_service = ExportService()
        self.state_service = StateService()

    def _first_page(self) -> None:
        st.session_state["projection_page"] = 1

    def display_projection_table(self, result: PlanResult) -> None:
        """Display the year-by-year projection, one page at a time."""
        st.subheader("Projection")

        df = self.export_service.to_dataframe(list(result.records))
        df = df[list(TABLE_COLUMNS)].rename(columns=TABLE_COLUMNS)

        page_size = self.config.table_page_size
        total_pages = max(1, math.ceil(len(df) / page_size))
        if "projection_page" not in st.session_state:
            st.session_state["projection_page"] = 1

        sort_col, order_col, page_col = st.columns([2, 1, 1])
        with sort_col:
            sort_by = st.selectbox(
                "Sort by", list(df.columns), key="projection_sort", on_change=self._first_page
            )
        with order_col:
            descending = st.toggle("Descending", key="projection_sort_desc", on_change=self._first_page)
        with page_col:
            page = st.number_input(
                f"Page (of {total_pages})",
                min_value=1,
                max_value=total_pages,
                step=1,
                key="projection_page",
            )
        page_df = self.export_service.sorted_page(
            df, sort_by, not descending, int(page), page_size
        )

        money_columns = [c for c in page_df.columns if c != "Age"]
        st.dataframe(
            page_df.style.format({c: "{:,.0f}" for c in money_columns}),
            use_container_width=True,
            hide_index=True,
        )
        st.caption(f"{len(df)} rows")

    def display_downloads(self, result: PlanResult, state: Dict) -> None:
        """Display CSV download and shareable link."""
        col1, col2 = st.columns(2)

        with col1:
            st.download_button(
                "⬇️ Export CSV",
                data=self.export_service.to_csv(list(result.records)),
                file_name="projection.csv",
                mime="text/csv",
                use_container_width=True,
            )

        with col2:
            if st.button("🔗 Create shareable link", use_container_width=True):
                token = self.state_service.encode_state(state)
                st.query_params[self.config.share_query_param] = token
                st.success("Shareable link ready in the address bar.")

    def _render_lines(self, title: str, lines, symbol: str) -> None:
        st.markdown(f"**{title}**")
        if not lines:
            st.caption("— none —")
            return
        for line in lines:
            st.write(
                f"- {line.label}: {format_currency(line.amount_today, symbol)} × "
                f"(1+{line.rate*100:.1f}%)^{line.years} = **{format_currency(line.value, symbol)}**"
            )

    def render_audit(self, audit: YearAudit) -> None:
        """Render a single year audit."""
        symbol = self.config.currency_symbol
        record = audit.record
        R = lambda v: format_currency(v, symbol)

        st.write(
            f"Age **{record.age}** | Start: **{R(record.start_corpus)}** | "
            f"Contribution: **{R(record.contribution)}** | Return: **{R(record.investment_return)}** | "
            f"Spend+Buffer: **{R(record.buffered_spend)}** | End: **{R(record.end_corpus)}**"
        )

        self._render_lines("Recurring expenses", audit.recurring_lines, symbol)
        self._render_lines("Planned events", audit.event_lines, symbol)

        income_note = (
            f" − retirement income {R(audit.annual_retirement_income)}"
            if audit.income_offset_applied
            else ""
        )
        st.markdown("**Aggregation**")
        st.write(
            f"- total = regular + planned = {R(record.recurring_spend)} + "
            f"{R(record.event_spend)} = **{R(record.total_spend)}**"
        )
        st.write(
            f"- spend = total × (1 + {audit.safety_buffer:.0%}){income_note}, floored at 0 = "
            f"**{R(record.buffered_spend)}**"
        )
        st.write(
            f"- return = (start corpus + contribution) × {record.effective_rate*100:.2f}% = "
            f"**{R(record.investment_return)}**"
        )
        st.write(
            f"- end corpus = start corpus + contribution + return − spend = "
            f"{R(record.start_corpus)} + {R(record.contribution)} + "
            f"{R(record.investment_return)} − {R(record.buffered_spend)} = **{R(record.end_corpus)}**"
        )

    def display_audit(self, result: PlanResult) -> None:
        """Display the year audit expander."""
        scenario = result.scenario
        if "audit_age" not in st.session_state:
            st.session_state["audit_age"] = scenario.freedom_age
        with st.expander("🔍 Audit a year", expanded=False):
            age = st.number_input(
                "Age",
                min_value=scenario.current_age,
                max_value=scenario.life_age,
                step=1,
                key="audit_age",
            )
            audit = self.audit_service.build_audit(scenario, list(result.records), int(age))
            if audit is None:
                st.info("No data for the selected age.")
                return
            self.render_audit(audit)

    def display_all_results(self, result: PlanResult, state: Dict, charts) -> None:
        """Orchestrate all result displays including tabs and charts.

        Args:
            result: Plan result for the current inputs
            state: Planner state the result was computed from (for sharing)
            charts: ChartComponent instance
        """
        tab1, tab2 = st.tabs(["Corpus", "Spending"])

        with tab1:
            charts.plot_corpus_path(result)

        with tab2:
            charts.plot_spending_breakdown(result)

        self.display_projection_table(result)
        self.display_downloads(result, state)
        self.display_audit(result)

