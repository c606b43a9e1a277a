# =============================================================================
# core/graph/layout.py - Layout Engine
# =============================================================================
# Assigns canvas positions to graph nodes.
#
# Nodes that already have a position keep it verbatim. New nodes are laid
# out on a grid in the order they appear among the *new* nodes of the
# current input:
#
#   column = i mod W      x = column * column_spacing
#   row    = i div W      y = row * row_spacing
#
# Edges play no part, so adding or removing dependencies never moves a node.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from core.models.graph import NodeSpec, Position

DEFAULT_GRID_WIDTH = 5
DEFAULT_COLUMN_SPACING = 220.0
DEFAULT_ROW_SPACING = 160.0


@dataclass(frozen=True)
class GridLayout:
    """
    Grid placement constants.

    Attributes:
        width: Nodes per row
        column_spacing: Horizontal distance between columns
        row_spacing: Vertical distance between rows
    """
    width: int = DEFAULT_GRID_WIDTH
    column_spacing: float = DEFAULT_COLUMN_SPACING
    row_spacing: float = DEFAULT_ROW_SPACING

    def __post_init__(self):
        if self.width < 1:
            raise ValueError(f"Grid width must be at least 1, got {self.width}")

    def position(self, index: int) -> Position:
        """Grid slot for the index-th new node."""
        column, row = index % self.width, index // self.width
        return Position(x=column * self.column_spacing, y=row * self.row_spacing)


def place(
    nodes: Iterable[NodeSpec],
    previous_positions: Mapping[str, Position],
    layout: GridLayout | None = None,
) -> dict[str, Position]:
    """
    Position every node.

    Args:
        nodes: Nodes in display order
        previous_positions: Position memory from the previous render
        layout: Grid constants (defaults to a 5-wide, 220 x 160 grid)

    Returns:
        Mapping of node id to position, covering exactly the given nodes
    """
    layout = layout or GridLayout()
    positions: dict[str, Position] = {}
    new_index = 0

    for node in nodes:
        if node.node_id in positions:
            continue

        existing = previous_positions.get(node.node_id)
        if existing is not None:
            positions[node.node_id] = existing
            continue

        positions[node.node_id] = layout.position(new_index)
        new_index += 1

    return positions
