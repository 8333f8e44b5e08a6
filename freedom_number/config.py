"""Configuration management for the Freedom Number planner."""

from dataclasses import dataclass
from typing import Dict, List


@dataclass
class AppConfig:
    """Application configuration."""

    # Scenario defaults (indicative Indian figures, all amounts in rupees)
    default_inputs: Dict = None
    default_regular: List[Dict] = None
    default_planned: List[Dict] = None

    # Goal-seek settings
    solver_initial_bracket: float = 10_000_000.0  # 1 crore
    solver_max_expansions: int = 40
    solver_max_iterations: int = 100
    solver_tolerance: float = 1.0

    # Stress rule (shown in the UI, the engine holds its own constants)
    stress_window_years: int = 10
    stress_real_haircut: float = 0.02

    # Rule-of-thumb multiple for capital adequacy
    capital_multiple: float = 40.0

    # UI settings
    longevity_presets: List[int] = None
    currency_symbol: str = "₹"
    table_page_size: int = 12
    share_query_param: str = "s"

    # Logging
    log_level: str = "INFO"

    def __post_init__(self):
        """Set default values after initialization."""
        if self.default_inputs is None:
            self.default_inputs = {
                "current_age": 40,
                "freedom_age": 55,
                "life_age": 85,
                "inflation": 0.06,  # also the default growth for new rows
                "nominal_return": 0.08,  # post-tax, before expense ratio
                "safety_buffer": 0.15,
                "current_corpus": 2_000_000.0,
                "monthly_contribution": 30_000.0,  # until freedom age
                "annual_retirement_income": 240_000.0,  # from freedom age
                "expense_ratio": 0.0075,
                "stress": "off",  # "off" | "bear"
            }
        if self.default_regular is None:
            self.default_regular = [
                {"label": "Housing & Utilities", "amount_today": 360_000.0, "annual_growth": 0.05, "active_years": 45, "start_age": 40},
                {"label": "Groceries & Essentials", "amount_today": 240_000.0, "annual_growth": 0.06, "active_years": 999, "start_age": 40},
                {"label": "Transport", "amount_today": 120_000.0, "annual_growth": 0.05, "active_years": 999, "start_age": 40},
                {"label": "Healthcare & Insurance", "amount_today": 150_000.0, "annual_growth": 0.10, "active_years": 999, "start_age": 40},
                {"label": "Discretionary (Dining/Travel)", "amount_today": 180_000.0, "annual_growth": 0.07, "active_years": 30, "start_age": 55},
                {"label": "Parents Support", "amount_today": 120_000.0, "annual_growth": 0.06, "active_years": 10, "start_age": 40},
                {"label": "Children Schooling", "amount_today": 200_000.0, "annual_growth": 0.08, "active_years": 10, "start_age": 40},
            ]
        if self.default_planned is None:
            self.default_planned = [
                {"label": "Child Higher Education", "trigger_age": 45, "amount_today": 10_000_000.0, "inflation_rate": 0.06},
                {"label": "Home Renovation", "trigger_age": 50, "amount_today": 2_500_000.0, "inflation_rate": 0.06},
                {"label": "Car Replacement", "trigger_age": 60, "amount_today": 2_000_000.0, "inflation_rate": 0.05},
                {"label": "Medical Contingency", "trigger_age": 70, "amount_today": 3_000_000.0, "inflation_rate": 0.10},
            ]
        if self.longevity_presets is None:
            self.longevity_presets = [85, 90, 95]


# Global configuration instance
config = AppConfig()


def get_config() -> AppConfig:
    """Get the application configuration."""
    return config


def update_config(**kwargs) -> None:
    """Update configuration with new values."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
        else:
            raise ValueError(f"Unknown configuration key: {key}")
