"""State service for planner state, defaults and shareable links.

This module handles the editable planner state:
- Seeding inputs and tables from the indicative defaults
- Encoding state into a URL-safe token and decoding it back
- Building an immutable Scenario from form values

The planner state is a plain dict:
``{"inputs": {...}, "regular": [...], "planned": [...]}``.
"""

import base64
import binascii
import copy
import json
import logging
import math
from typing import Dict, List, Optional

from freedom_number.config import get_config
from freedom_number.schemas import OneTimeEvent, RecurringExpense, Scenario, StateError

logger = logging.getLogger(__name__)

STRESS_MODES = ("off", "bear")

# Numeric cells of each table row
REGULAR_NUMERIC_FIELDS = ("amount_today", "annual_growth", "active_years", "start_age")
PLANNED_NUMERIC_FIELDS = ("trigger_age", "amount_today", "inflation_rate")


class StateService:
    """Service for planner state management."""

    def __init__(self):
        self.config = get_config()

    def default_state(self) -> Dict:
        """Fresh copy of the indicative defaults."""
        return {
            "inputs": dict(self.config.default_inputs),
            "regular": copy.deepcopy(self.config.default_regular),
            "planned": copy.deepcopy(self.config.default_planned),
        }

    def _coerce_number(self, value):
        """Finite float for a numeric cell, or None when it cannot be read."""
        if isinstance(value, bool):
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        return number if math.isfinite(number) else None

    def _coerce_input(self, value, default):
        """Coerce a shared input to its default's type, keeping the default on failure."""
        if isinstance(default, str):
            return value if value in STRESS_MODES else default
        number = self._coerce_number(value)
        if number is None:
            return default
        if isinstance(default, int):
            return int(number) if number.is_integer() else default
        return number

    def _clean_rows(self, rows, numeric_fields) -> List[Dict]:
        """Keep dict rows only, with numeric cells coerced or blanked."""
        if not isinstance(rows, list):
            return []
        cleaned = []
        for row in rows:
            if not isinstance(row, dict):
                continue
            label = row.get("label")
            clean = {"label": None if label is None else str(label)}
            for field in numeric_fields:
                clean[field] = self._coerce_number(row.get(field))
            cleaned.append(clean)
        return cleaned

    def merge_with_defaults(self, state: Optional[Dict]) -> Dict:
        """Fill missing or unreadable inputs from defaults and reseed empty tables."""
        merged = self.default_state()
        if not isinstance(state, dict):
            return merged

        shared_inputs = state.get("inputs")
        if isinstance(shared_inputs, dict):
            for key, default in merged["inputs"].items():
                if key in shared_inputs:
                    merged["inputs"][key] = self._coerce_input(shared_inputs[key], default)

        regular = self._clean_rows(state.get("regular"), REGULAR_NUMERIC_FIELDS)
        if regular:
            merged["regular"] = regular
        planned = self._clean_rows(state.get("planned"), PLANNED_NUMERIC_FIELDS)
        if planned:
            merged["planned"] = planned
        return merged

    def encode_state(self, state: Dict) -> str:
        """Encode planner state as a URL-safe base64 token."""
        payload = json.dumps(state, sort_keys=True, ensure_ascii=False).encode("utf-8")
        return base64.urlsafe_b64encode(payload).decode("ascii")

    def _decode(self, token: str) -> Dict:
        try:
            raw = base64.urlsafe_b64decode(token.encode("ascii"))
            state = json.loads(raw.decode("utf-8"))
        except (binascii.Error, ValueError) as e:
            raise StateError(f"Could not decode shared state: {e}") from e
        if not isinstance(state, dict):
            raise StateError("Shared state must be a JSON object")
        return state

    def decode_state(self, token: Optional[str]) -> Optional[Dict]:
        """Decode a shared token, returning None when it is missing or malformed."""
        if not token:
            return None
        try:
            return self._decode(token)
        except StateError as e:
            logger.warning("Ignoring shared state: %s", e)
            return None

    def _recurring_from_rows(self, rows: List[Dict]) -> tuple:
        return tuple(
            RecurringExpense(
                label=str(row.get("label") or ""),
                amount_today=float(row.get("amount_today") or 0.0),
                annual_growth=float(row.get("annual_growth") or 0.0),
                start_age=int(row.get("start_age") or 0),
                active_years=int(row.get("active_years") or 0),
            )
            for row in rows
        )

    def _events_from_rows(self, rows: List[Dict]) -> tuple:
        return tuple(
            OneTimeEvent(
                label=str(row.get("label") or ""),
                trigger_age=int(row.get("trigger_age") or 0),
                amount_today=float(row.get("amount_today") or 0.0),
                inflation_rate=float(row.get("inflation_rate") or 0.0),
            )
            for row in rows
        )

    def build_scenario(self, state: Dict) -> Scenario:
        """Build an immutable Scenario from planner state.

        Values are coerced to numbers but not range-checked; validate first.
        """
        inputs = state["inputs"]
        return Scenario(
            current_age=int(inputs["current_age"]),
            freedom_age=int(inputs["freedom_age"]),
            life_age=int(inputs["life_age"]),
            inflation=float(inputs["inflation"]),
            nominal_return=float(inputs["nominal_return"]),
            expense_ratio=float(inputs["expense_ratio"]),
            safety_buffer=float(inputs["safety_buffer"]),
            current_corpus=float(inputs.get("current_corpus", 0.0)),
            monthly_contribution=float(inputs.get("monthly_contribution", 0.0)),
            annual_retirement_income=float(inputs.get("annual_retirement_income", 0.0)),
            stress_enabled=inputs.get("stress", "off") == "bear",
            recurring_expenses=self._recurring_from_rows(state.get("regular") or []),
            one_time_events=self._events_from_rows(state.get("planned") or []),
        )
