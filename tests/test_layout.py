# =============================================================================
# tests/test_layout.py - Layout Engine Tests
# =============================================================================
# Grid placement of new nodes and reuse of remembered positions.
# =============================================================================

import pytest

from core.graph import GridLayout, build, place
from core.models import NodeSpec, Position


def _nodes(*ids):
    return [NodeSpec(node_id=node_id, label=node_id) for node_id in ids]


class TestGridLayout:
    """Tests for GridLayout."""

    def test_default_constants(self, layout):
        assert layout.width == 5
        assert layout.column_spacing == 220.0
        assert layout.row_spacing == 160.0

    def test_first_row(self, layout):
        assert layout.position(0) == Position(x=0, y=0)
        assert layout.position(4) == Position(x=880, y=0)

    def test_wraps_after_width(self, layout):
        assert layout.position(5) == Position(x=0, y=160)
        assert layout.position(12) == Position(x=440, y=320)

    def test_invalid_width(self):
        with pytest.raises(ValueError):
            GridLayout(width=0)


class TestPlace:
    """Tests for place()."""

    def test_fresh_chain(self, three_tasks):
        nodes, _ = build(three_tasks)
        positions = place(nodes, {})

        assert positions == {
            "A": Position(x=0, y=0),
            "B": Position(x=220, y=0),
            "C": Position(x=440, y=0),
        }

    def test_sixth_node_starts_second_row(self):
        positions = place(_nodes("a", "b", "c", "d", "e", "f"), {})

        assert positions["e"] == Position(x=880, y=0)
        assert positions["f"] == Position(x=0, y=160)

    def test_existing_positions_reused(self):
        previous = {"A": Position(x=500, y=700)}
        positions = place(_nodes("A", "B"), previous)

        assert positions["A"] == Position(x=500, y=700)
        # B is the first new node
        assert positions["B"] == Position(x=0, y=0)

    def test_only_given_nodes_returned(self):
        previous = {"gone": Position(x=1, y=2)}
        positions = place(_nodes("A"), previous)

        assert list(positions) == ["A"]

    def test_custom_grid(self):
        layout = GridLayout(width=2, column_spacing=100, row_spacing=50)
        positions = place(_nodes("a", "b", "c"), {}, layout)

        assert positions["c"] == Position(x=0, y=50)

    def test_deterministic(self):
        nodes = _nodes("a", "b", "c", "d", "e", "f", "g")
        assert place(nodes, {}) == place(nodes, {})
