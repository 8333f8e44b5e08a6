"""Utility functions for the Freedom Number planner.

This module provides helper functions used throughout the application:
- Age-window membership and compounding
- Nominal/real rate conversions
- Input validation for form values (caller side, never inside the engine)
- Display formatting

Key features:
- Pure numeric helpers shared by the projection engine and the audit view
- Validation with custom exceptions
- Indian-style currency formatting (lakh / crore)
"""

import math
from typing import Dict, Iterable, Optional

from .schemas import ValidationError


def in_age_window(age: int, start_age: int, years: int) -> bool:
    """Check whether age falls in [start_age, start_age + years)."""
    return start_age <= age < start_age + years


def grow(amount: float, rate: float, years: int) -> float:
    """Compound amount at rate for a number of years (negative years clamp to 0)."""
    return amount * math.pow(1 + rate, max(0, years))


def nominal_to_real(rate: float, inflation: float) -> float:
    """Convert a nominal rate to a real rate using the exact Fisher relation."""
    return (1 + rate) / (1 + inflation) - 1


def real_to_nominal(rate: float, inflation: float) -> float:
    """Convert a real rate back to a nominal rate using the exact Fisher relation."""
    return (1 + rate) * (1 + inflation) - 1


def validate_age_inputs(current_age: int, freedom_age: int, life_age: int) -> None:
    """Validate age inputs.

    Ages must satisfy 0 <= current_age <= freedom_age <= life_age. Being
    already at freedom age (current_age == freedom_age) is allowed, and so is
    a single-year horizon.
    """
    if current_age < 0 or freedom_age < 0 or life_age < 0:
        raise ValidationError("Ages must be non-negative")

    if freedom_age < current_age:
        raise ValidationError("Freedom age must not be before current age")

    if life_age < freedom_age:
        raise ValidationError("Life expectancy must not be before freedom age")


def validate_financial_inputs(
    current_corpus: float,
    monthly_contribution: float,
    annual_retirement_income: float,
    safety_buffer: float,
) -> None:
    """Validate financial inputs."""
    if current_corpus < 0:
        raise ValidationError("Current corpus must be non-negative")

    if monthly_contribution < 0:
        raise ValidationError("Monthly contribution must be non-negative")

    if annual_retirement_income < 0:
        raise ValidationError("Retirement income must be non-negative")

    if safety_buffer < 0:
        raise ValidationError("Safety buffer must be non-negative")


def validate_expense_rows(rows: Iterable[Dict]) -> None:
    """Validate recurring expense rows coming from the editable table."""
    for row in rows:
        label = row.get("label") or "Unnamed row"
        if row.get("amount_today", 0) < 0:
            raise ValidationError(f"'{label}': amount must be non-negative")
        if row.get("active_years", 0) < 0:
            raise ValidationError(f"'{label}': tenure must be non-negative")
        if row.get("start_age", 0) < 0:
            raise ValidationError(f"'{label}': start age must be non-negative")


def validate_event_rows(rows: Iterable[Dict]) -> None:
    """Validate planned one-time event rows coming from the editable table."""
    for row in rows:
        label = row.get("label") or "Unnamed event"
        if row.get("amount_today", 0) < 0:
            raise ValidationError(f"'{label}': amount must be non-negative")
        if row.get("trigger_age", 0) < 0:
            raise ValidationError(f"'{label}': event age must be non-negative")


def format_currency(amount: Optional[float], symbol: str = "₹") -> str:
    """Format currency amount for display, using lakh and crore units."""
    if amount is None or not math.isfinite(amount):
        return "—"

    abs_amount = abs(amount)
    sign = "-" if amount < 0 else ""

    if abs_amount >= 1e7:
        return f"{sign}{symbol}{abs_amount/1e7:.2f} Cr"
    elif abs_amount >= 1e5:
        return f"{sign}{symbol}{abs_amount/1e5:.2f} L"
    else:
        return f"{sign}{symbol}{abs_amount:,.0f}"


def format_percentage(value: Optional[float], decimals: int = 1) -> str:
    """Format percentage for display."""
    if value is None or not math.isfinite(value):
        return "—"
    return f"{value*100:.{decimals}f}%"
