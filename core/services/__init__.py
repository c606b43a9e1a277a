# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .task_service import TaskService
from .position_service import PositionService
from .graph_service import GraphService, GraphRefresh, ViewParams

__all__ = [
    "TaskService",
    "PositionService",
    "GraphService",
    "GraphRefresh",
    "ViewParams",
]
