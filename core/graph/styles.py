# =============================================================================
# core/graph/styles.py - Status Styling
# =============================================================================
# Badge and border colours per task status, as drawn on the dependency board.
# Unknown or missing statuses use the backlog style.
# =============================================================================

from core.models.graph import EdgeStyle, NodeStyle
from core.models.task import TaskStatus


STATUS_STYLES: dict[str, NodeStyle] = {
    TaskStatus.BACKLOG.value: NodeStyle(
        status_label="Backlog",
        badge_background="rgba(79, 70, 229, 0.12)",
        badge_color="#4f46e5",
        border_color="rgba(79, 70, 229, 0.35)",
    ),
    TaskStatus.TODO.value: NodeStyle(
        status_label="Todo",
        badge_background="rgba(14, 116, 144, 0.12)",
        badge_color="#0e7490",
        border_color="rgba(14, 116, 144, 0.35)",
    ),
    TaskStatus.IN_PROGRESS.value: NodeStyle(
        status_label="In Progress",
        badge_background="rgba(234, 179, 8, 0.16)",
        badge_color="#b45309",
        border_color="rgba(234, 179, 8, 0.35)",
    ),
    TaskStatus.REVIEW.value: NodeStyle(
        status_label="Review",
        badge_background="rgba(219, 39, 119, 0.12)",
        badge_color="#be123c",
        border_color="rgba(219, 39, 119, 0.35)",
    ),
    TaskStatus.DONE.value: NodeStyle(
        status_label="Done",
        badge_background="rgba(34, 197, 94, 0.12)",
        badge_color="#15803d",
        border_color="rgba(34, 197, 94, 0.35)",
    ),
}

DEPENDENCY_EDGE_STYLE = EdgeStyle()


def style_for_status(status: str | None) -> NodeStyle:
    """Return the node style for a status label."""
    if status is None:
        return STATUS_STYLES[TaskStatus.BACKLOG.value]
    return STATUS_STYLES.get(status.strip().lower(), STATUS_STYLES[TaskStatus.BACKLOG.value])
