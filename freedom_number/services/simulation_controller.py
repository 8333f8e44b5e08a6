"""Simulation controller for orchestrating validation, goal seek and projection."""

import hashlib
import json
import logging
from typing import Dict, Optional

import streamlit as st

from freedom_number.schemas import PlanResult, SimulationError, ValidationError
from freedom_number.utils import (
    validate_age_inputs,
    validate_event_rows,
    validate_expense_rows,
    validate_financial_inputs,
)

from .goal_seek_service import GoalSeekService
from .metrics_service import MetricsService
from .projection_service import ProjectionService
from .state_service import StateService

logger = logging.getLogger(__name__)

# Session keys tied to a particular set of inputs
VIEW_STATE_KEYS = ["projection_page", "audit_age"]


class SimulationController:
    """Controller for turning planner state into a projection result."""

    def __init__(
        self,
        projection_service: Optional[ProjectionService] = None,
        state_service: Optional[StateService] = None,
    ):
        self.projection_service = projection_service or ProjectionService()
        self.goal_seek_service = GoalSeekService(self.projection_service)
        self.metrics_service = MetricsService()
        self.state_service = state_service or StateService()

    def calculate_input_hash(self, state: Dict) -> str:
        """Calculate hash of planner state for change detection.

        Args:
            state: Planner state dict

        Returns:
            MD5 hash string of the state
        """
        return hashlib.md5(
            json.dumps(state, sort_keys=True, default=str).encode()
        ).hexdigest()

    def detect_input_changes(self, inputs_hash: str) -> bool:
        """Detect if inputs have changed and reset view state if needed.

        Args:
            inputs_hash: Current inputs hash

        Returns:
            True if inputs changed, False otherwise
        """
        inputs_changed = False
        if "last_inputs_hash" in st.session_state:
            if st.session_state["last_inputs_hash"] != inputs_hash:
                inputs_changed = True
                for key in VIEW_STATE_KEYS:
                    if key in st.session_state:
                        del st.session_state[key]

        st.session_state["last_inputs_hash"] = inputs_hash
        return inputs_changed

    def validate(self, state: Dict) -> None:
        """Validate planner state before it reaches the engine.

        Raises:
            ValidationError: if any input is out of range
        """
        inputs = state["inputs"]
        validate_age_inputs(inputs["current_age"], inputs["freedom_age"], inputs["life_age"])
        validate_financial_inputs(
            inputs["current_corpus"],
            inputs["monthly_contribution"],
            inputs["annual_retirement_income"],
            inputs["safety_buffer"],
        )
        validate_expense_rows(state.get("regular") or [])
        validate_event_rows(state.get("planned") or [])

    def compute(self, state: Dict) -> PlanResult:
        """Validate, solve for the extra lump sum and project with it.

        When no lump sum is found the projection runs with no extra lump sum.

        Raises:
            ValidationError: if the state is out of range
            SimulationError: if the projection produced no records
        """
        self.validate(state)
        scenario = self.state_service.build_scenario(state)

        goal_seek = self.goal_seek_service.solve(scenario, target_end_corpus=0.0)
        lump_sum = goal_seek.lump_sum if goal_seek.found else 0.0
        records = self.projection_service.project(scenario, lump_sum)
        if not records:
            raise SimulationError("Projection produced no years")

        metrics = self.metrics_service.compute(scenario, records, goal_seek)
        logger.info(
            "Projected ages %d-%d, goal seek %s, extra lump sum %s",
            scenario.current_age,
            scenario.life_age,
            goal_seek.status.value,
            f"{goal_seek.lump_sum:.2f}" if goal_seek.found else "n/a",
        )
        return PlanResult(
            scenario=scenario,
            goal_seek=goal_seek,
            records=tuple(records),
            metrics=metrics,
        )

    def run(self, state: Dict) -> Optional[PlanResult]:
        """Execute the full workflow, reporting problems in the page.

        Args:
            state: Planner state dict

        Returns:
            PlanResult, or None on error
        """
        try:
            return self.compute(state)
        except ValidationError as e:
            st.error(f"Input validation error: {str(e)}")
            return None
        except Exception as e:
            logger.exception("Projection failed")
            st.error(f"Projection failed: {str(e)}")
            st.exception(e)
            return None
