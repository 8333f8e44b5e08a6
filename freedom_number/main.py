"""Main application for the Freedom Number planner.

This module orchestrates the planner, including:
- UI components (sidebar, editable tables, charts, results, summary)
- Planner state (defaults, shareable links)
- Projection and goal seek for the extra lump sum needed today
- Input validation and error handling
"""

import os
import sys

# Add project root to Python path before imports
# This ensures 'freedom_number' package can be found when Streamlit Cloud runs this file directly
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st

from freedom_number.components import (
    ChartComponent,
    ResultsComponent,
    SidebarComponent,
    SummaryComponent,
)
from freedom_number.config import get_config
from freedom_number.logging_config import setup_logging
from freedom_number.services import SimulationController


def main():
    """Main application entry point.

    Sets up the Streamlit interface and recomputes the plan on every rerun:
    1. Load planner state (shared link, session, or defaults)
    2. Render sidebar inputs and the editable expense tables
    3. Validate, solve for the extra lump sum and project with it
    4. Display headline metrics, charts, table, audit and exports
    """
    setup_logging(get_config().log_level)

    st.set_page_config(page_title="Freedom Number", layout="wide", initial_sidebar_state="expanded")
    st.title("Freedom Number")
    st.caption("How much extra do you need invested today so your corpus lasts exactly to life expectancy?")

    # Initialize UI components
    sidebar = SidebarComponent()  # Handles scenario inputs and editable tables
    charts = ChartComponent()  # Handles all visualizations
    results = ResultsComponent()  # Handles table, audit and exports
    summary = SummaryComponent()  # Handles headline metrics

    simulation_controller = SimulationController()  # Validates, solves and projects

    # Render inputs; tables start from the stored rows and keep their own edits
    stored_state = sidebar.load_state()
    inputs = sidebar.render(stored_state)
    tables = sidebar.render_tables(stored_state, inputs)
    stored_state["inputs"] = inputs

    state = {"inputs": inputs, **tables}

    # Reset per-result view state (table page, audit age) when inputs change
    simulation_controller.detect_input_changes(simulation_controller.calculate_input_hash(state))

    result = simulation_controller.run(state)
    if result is None:
        st.stop()

    summary.render_summary_cards(result)
    summary.render_input_summary(result)
    results.display_all_results(result, state, charts)


if __name__ == "__main__":
    main()
