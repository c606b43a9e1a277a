# =============================================================================
# core/graph/ - Task Dependency Graph
# =============================================================================
# Framework-free pipeline from a task collection to a renderable graph:
#
#   tasks -> builder.build -> layout.place -> reconciler.reconcile -> GraphState
#
# - builder.py: nodes and edges from task records
# - layout.py: stable grid positions
# - reconciler.py: next GraphState from the previous one
# - registry.py: per-view state holder with last-snapshot-wins updates
# - styles.py: status colours for nodes and the edge connector style
# =============================================================================

from core.graph.builder import (
    MalformedInputError,
    build,
    coerce_tasks,
    format_label,
    linked_only,
    synthesize_edge_id,
)
from core.graph.layout import GridLayout, place
from core.graph.reconciler import (
    GraphNodeNotFoundError,
    diff_states,
    move_node,
    reconcile,
)
from core.graph.registry import GraphViewRegistry, ViewUpdate
from core.graph.styles import STATUS_STYLES, style_for_status

__all__ = [
    # Builder
    "MalformedInputError",
    "build",
    "coerce_tasks",
    "format_label",
    "linked_only",
    "synthesize_edge_id",
    # Layout
    "GridLayout",
    "place",
    # Reconciler
    "GraphNodeNotFoundError",
    "diff_states",
    "move_node",
    "reconcile",
    # Registry
    "GraphViewRegistry",
    "ViewUpdate",
    # Styles
    "STATUS_STYLES",
    "style_for_status",
]
