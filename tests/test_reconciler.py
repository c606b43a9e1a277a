# =============================================================================
# tests/test_reconciler.py - Incremental Reconciler Tests
# =============================================================================
# Tests for reconcile(), move_node() and diff_states():
# - Position stability across task and dependency changes
# - Determinism
# - Malformed input leaves the previous state untouched
# - Position memory for removed nodes
# =============================================================================

import pytest

from core.graph import (
    GraphNodeNotFoundError,
    MalformedInputError,
    diff_states,
    move_node,
    reconcile,
)
from core.graph.styles import STATUS_STYLES
from core.models import GraphState, Position


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def chain_state(three_tasks):
    return reconcile(GraphState.empty(), three_tasks)


# =============================================================================
# reconcile()
# =============================================================================

class TestReconcile:
    """Tests for reconcile()."""

    def test_fresh_render(self, chain_state):
        assert chain_state.node_ids == ["A", "B", "C"]
        assert chain_state.edge_ids == ["e1", "e2"]
        assert chain_state.node("A").position == Position(x=0, y=0)
        assert chain_state.node("B").position == Position(x=220, y=0)
        assert chain_state.node("C").position == Position(x=440, y=0)

    def test_empty_collection(self):
        state = reconcile(GraphState.empty(), [])

        assert state.nodes == ()
        assert state.edges == ()

    def test_idempotent(self, three_tasks):
        previous = GraphState(positions={"B": Position(x=10, y=20)})

        assert reconcile(previous, three_tasks) == reconcile(previous, three_tasks)

    def test_reconcile_with_own_output_is_stable(self, chain_state, three_tasks):
        assert reconcile(chain_state, three_tasks) == chain_state

    def test_new_task_appended(self, chain_state, three_tasks):
        tasks = three_tasks + [{"id": "D", "title": "Celebrate"}]
        state = reconcile(chain_state, tasks)

        assert state.node("A").position == chain_state.node("A").position
        assert state.node("C").position == chain_state.node("C").position
        # D is the first new node in this input
        assert state.node("D").position == Position(x=0, y=0)

    def test_dependency_change_never_moves_nodes(self, chain_state):
        tasks = [
            {"id": "A", "title": "Design", "dependencies_out": [{"id": "e3", "to_id": "C"}]},
            {"id": "B", "title": "Build"},
            {"id": "C", "title": "Ship", "dependencies_out": [{"id": "e4", "to_id": "A"}]},
        ]
        state = reconcile(chain_state, tasks)

        assert state.edge_ids == ["e3", "e4"]
        for node_id in ("A", "B", "C"):
            assert state.node(node_id).position == chain_state.node(node_id).position

    def test_removed_task_drops_node_and_edges(self, chain_state):
        tasks = [
            {"id": "A", "title": "Design", "dependencies_out": [{"id": "e1", "to_id": "B"}]},
            {"id": "C", "title": "Ship"},
        ]
        state = reconcile(chain_state, tasks)

        assert state.node_ids == ["A", "C"]
        assert state.edge_ids == ["e1"]
        assert state.edge("e1").dangling is True

    def test_removed_task_keeps_position_memory(self, chain_state, three_tasks):
        without_b = [task for task in three_tasks if task["id"] != "B"]
        state = reconcile(chain_state, without_b)

        assert "B" in state.positions
        restored = reconcile(state, three_tasks)
        assert restored.node("B").position == Position(x=220, y=0)

    def test_title_change_keeps_position(self, chain_state, three_tasks):
        tasks = [dict(task) for task in three_tasks]
        tasks[0]["title"] = "Redesign"
        tasks[0]["status"] = "review"
        state = reconcile(chain_state, tasks)

        node = state.node("A")
        assert node.label == "Redesign\n(review)"
        assert node.position == Position(x=0, y=0)
        assert node.style == STATUS_STYLES["review"]

    def test_self_loop_renders(self):
        state = reconcile(GraphState.empty(), [{"id": "X", "dependencies_out": [{"to_id": "X"}]}])

        assert state.node_ids == ["X"]
        assert state.edge("X->X").dangling is False

    def test_edges_carry_dependency_style(self, chain_state):
        edge = chain_state.edge("e1")

        assert edge.style.connector == "smoothstep"
        assert edge.style.marker_end == "arrowclosed"

    def test_unknown_status_uses_backlog_style(self):
        state = reconcile(GraphState.empty(), [{"id": "A", "status": "blocked"}])
        assert state.node("A").style == STATUS_STYLES["backlog"]

    def test_assignee_profile_reaches_node(self):
        rows = [
            {"id": "A", "title": "Design", "assignee": {"full_name": "Dana Ortiz", "email": "dana@example.com"}},
            {"id": "B", "title": "Build", "assignee": {"full_name": None, "email": "sam@example.com"}},
            {"id": "C", "title": "Ship", "assignee": None},
        ]
        state = reconcile(GraphState.empty(), rows)

        assert state.node("A").assignee_name == "Dana Ortiz"
        assert state.node("B").assignee_name == "sam@example.com"
        assert state.node("C").assignee_name is None

    def test_previous_state_not_mutated(self, chain_state):
        before = chain_state.model_dump()
        reconcile(chain_state, [{"id": "Z"}])

        assert chain_state.model_dump() == before


# =============================================================================
# Malformed Input
# =============================================================================

class TestReconcileMalformed:
    """Malformed task collections."""

    def test_error_carries_previous_state(self, chain_state):
        with pytest.raises(MalformedInputError) as exc_info:
            reconcile(chain_state, [{"id": "A"}, {"title": "No id"}])

        assert exc_info.value.previous_state is chain_state

    def test_previous_state_unchanged(self, chain_state, three_tasks):
        with pytest.raises(MalformedInputError):
            reconcile(chain_state, three_tasks + [{"id": " "}])

        assert chain_state.node_ids == ["A", "B", "C"]


# =============================================================================
# move_node()
# =============================================================================

class TestMoveNode:
    """Tests for move_node()."""

    def test_moves_node_and_memory(self, chain_state):
        state = move_node(chain_state, "B", Position(x=600, y=300))

        assert state.node("B").position == Position(x=600, y=300)
        assert state.positions["B"] == Position(x=600, y=300)
        assert chain_state.node("B").position == Position(x=220, y=0)

    def test_moved_position_survives_reconcile(self, chain_state, three_tasks):
        moved = move_node(chain_state, "B", Position(x=600, y=300))
        state = reconcile(moved, three_tasks)

        assert state.node("B").position == Position(x=600, y=300)

    def test_unknown_node(self, chain_state):
        with pytest.raises(GraphNodeNotFoundError) as exc_info:
            move_node(chain_state, "Z", Position(x=0, y=0))

        assert exc_info.value.node_id == "Z"


# =============================================================================
# diff_states()
# =============================================================================

class TestDiffStates:
    """Tests for diff_states()."""

    def test_initial_render_adds_everything(self, chain_state):
        diff = diff_states(GraphState.empty(), chain_state)

        assert diff.added_nodes == ("A", "B", "C")
        assert diff.added_edges == ("e1", "e2")
        assert not diff.removed_nodes

    def test_no_change_is_empty(self, chain_state):
        assert diff_states(chain_state, chain_state).is_empty

    def test_changes(self, chain_state):
        tasks = [
            {"id": "A", "title": "Design", "status": "done"},
            {"id": "C", "title": "Ship"},
            {"id": "D", "title": "New"},
        ]
        diff = diff_states(chain_state, reconcile(chain_state, tasks))

        assert diff.added_nodes == ("D",)
        assert diff.updated_nodes == ("A",)
        assert diff.removed_nodes == ("B",)
        assert diff.removed_edges == ("e1", "e2")

    def test_move_is_an_update(self, chain_state):
        moved = move_node(chain_state, "C", Position(x=1, y=1))
        assert diff_states(chain_state, moved).updated_nodes == ("C",)
