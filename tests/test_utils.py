import math

import pytest

from freedom_number.schemas import ValidationError
from freedom_number.utils import (
    format_currency,
    format_percentage,
    grow,
    in_age_window,
    nominal_to_real,
    real_to_nominal,
    validate_age_inputs,
    validate_event_rows,
    validate_expense_rows,
    validate_financial_inputs,
)


class TestAgeWindow:
    def test_inclusive_start_exclusive_end(self):
        assert not in_age_window(44, 45, 3)
        assert in_age_window(45, 45, 3)
        assert in_age_window(47, 45, 3)
        assert not in_age_window(48, 45, 3)

    def test_zero_years_never_active(self):
        assert not in_age_window(45, 45, 0)

    def test_sentinel_tenure_runs_for_life(self):
        assert in_age_window(120, 40, 999)


class TestRates:
    def test_grow_clamps_negative_years(self):
        assert grow(100.0, 0.1, -3) == 100.0

    def test_grow_compounds(self):
        assert grow(100.0, 0.1, 2) == pytest.approx(121.0)

    def test_real_nominal_inverse(self):
        real = nominal_to_real(0.0725, 0.06)
        assert real_to_nominal(real, 0.06) == pytest.approx(0.0725)

    def test_exact_fisher_not_additive(self):
        assert real_to_nominal(0.02, 0.06) == pytest.approx(0.0812)
        assert nominal_to_real(0.06, 0.06) == 0.0


class TestValidation:
    def test_valid_ages(self):
        validate_age_inputs(40, 55, 85)
        validate_age_inputs(60, 60, 60)

    @pytest.mark.parametrize(
        "ages",
        [(-1, 55, 85), (56, 55, 85), (40, 55, 54)],
    )
    def test_invalid_ages(self, ages):
        with pytest.raises(ValidationError):
            validate_age_inputs(*ages)

    def test_negative_money_rejected(self):
        validate_financial_inputs(0.0, 0.0, 0.0, 0.0)
        with pytest.raises(ValidationError, match="corpus"):
            validate_financial_inputs(-1.0, 0.0, 0.0, 0.0)
        with pytest.raises(ValidationError, match="contribution"):
            validate_financial_inputs(0.0, -1.0, 0.0, 0.0)
        with pytest.raises(ValidationError, match="income"):
            validate_financial_inputs(0.0, 0.0, -1.0, 0.0)
        with pytest.raises(ValidationError, match="buffer"):
            validate_financial_inputs(0.0, 0.0, 0.0, -0.1)

    def test_expense_rows(self):
        validate_expense_rows([{"label": "Rent", "amount_today": 1.0, "active_years": 999, "start_age": 40}])
        with pytest.raises(ValidationError, match="Rent"):
            validate_expense_rows([{"label": "Rent", "amount_today": -1.0}])
        with pytest.raises(ValidationError, match="tenure"):
            validate_expense_rows([{"label": "Rent", "active_years": -2}])

    def test_event_rows(self):
        validate_event_rows([{"label": "Car", "amount_today": 1.0, "trigger_age": 50}])
        with pytest.raises(ValidationError, match="Car"):
            validate_event_rows([{"label": "Car", "trigger_age": -5}])


class TestFormatting:
    def test_currency_units(self):
        assert format_currency(950.0) == "₹950"
        assert format_currency(250_000.0) == "₹2.50 L"
        assert format_currency(34_500_000.0) == "₹3.45 Cr"
        assert format_currency(-250_000.0) == "-₹2.50 L"

    def test_currency_missing(self):
        assert format_currency(None) == "—"
        assert format_currency(math.nan) == "—"

    def test_percentage(self):
        assert format_percentage(0.0725, 2) == "7.25%"
        assert format_percentage(None) == "—"

