"""UI components for the Freedom Number planner."""

from .charts import ChartComponent
from .results import ResultsComponent
from .sidebar import SidebarComponent
from .summary import SummaryComponent

__all__ = [
    "SidebarComponent",
    "ChartComponent",
    "ResultsComponent",
    "SummaryComponent",
]
