"""Services package for the Freedom Number planner."""

from .audit_service import AuditService
from .export_service import ExportService
from .goal_seek_service import GoalSeekService
from .metrics_service import MetricsService
from .projection_service import ProjectionService
from .simulation_controller import SimulationController
from .state_service import StateService

__all__ = [
    "AuditService",
    "ExportService",
    "GoalSeekService",
    "MetricsService",
    "ProjectionService",
    "SimulationController",
    "StateService",
]
