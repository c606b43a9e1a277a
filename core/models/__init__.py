# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for the dependency graph:
# - task.py: Task input boundary (what the task store provides)
# - graph.py: Graph output boundary (what the renderer consumes)
#
# These models define the "contract" between the store, the graph core and
# API clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Task Models - Input from the task store
# -----------------------------------------------------------------------------
from .task import (
    DependencyEdge,
    Task,
    TaskStatus,
)

# -----------------------------------------------------------------------------
# Graph Models - Derived, renderable graph
# -----------------------------------------------------------------------------
from .graph import (
    EdgeSpec,
    EdgeStyle,
    GraphDiff,
    GraphState,
    NodeSpec,
    NodeStyle,
    Position,
    RenderEdge,
    RenderNode,
)

__all__ = [
    # Task
    "DependencyEdge",
    "Task",
    "TaskStatus",
    # Graph
    "EdgeSpec",
    "EdgeStyle",
    "GraphDiff",
    "GraphState",
    "NodeSpec",
    "NodeStyle",
    "Position",
    "RenderEdge",
    "RenderNode",
]
