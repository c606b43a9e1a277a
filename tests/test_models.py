# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the task and graph models to ensure:
# - Supabase rows are accepted and normalized
# - Records without a usable id raise ValidationError
# - Graph models are immutable and serialize to JSON
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

from uuid import UUID

import pytest
from pydantic import ValidationError

from core.models import (
    DependencyEdge,
    EdgeStyle,
    GraphDiff,
    GraphState,
    Position,
    RenderEdge,
    Task,
    TaskStatus,
)
from lib.utils import normalize_id


# =============================================================================
# Identifier Normalization
# =============================================================================

class TestNormalizeId:
    """Tests for normalize_id."""

    def test_strips_strings(self):
        assert normalize_id("  task-1 ") == "task-1"

    def test_blank_is_none(self):
        assert normalize_id("") is None
        assert normalize_id("   ") is None
        assert normalize_id(None) is None

    def test_uuid_and_int_become_strings(self):
        uuid = UUID("550e8400-e29b-41d4-a716-446655440000")
        assert normalize_id(uuid) == "550e8400-e29b-41d4-a716-446655440000"
        assert normalize_id(42) == "42"

    def test_bool_is_not_an_id(self):
        assert normalize_id(True) is None


# =============================================================================
# Task Model Tests
# =============================================================================

class TestTask:
    """Tests for Task model."""

    def test_valid_task(self):
        """Test creating a task from a full Supabase row."""
        task = Task.model_validate({
            "id": "A",
            "title": "Design",
            "status": "todo",
            "project_id": "P",
            "dependencies_out": [{"id": "e1", "to_id": "B"}],
        })

        assert task.id == "A"
        assert task.title == "Design"
        assert task.status == "todo"
        assert task.dependencies_out == (DependencyEdge(id="e1", to_id="B"),)
        assert task.target_ids == ["B"]

    def test_defaults(self):
        """Only id is required."""
        task = Task(id="A")

        assert task.title == ""
        assert task.status is None
        assert task.dependencies_out == ()
        assert task.project_id is None

    def test_null_columns_use_defaults(self):
        task = Task.model_validate({"id": "A", "title": None, "dependencies_out": None})

        assert task.title == ""
        assert task.dependencies_out == ()

    def test_unknown_status_is_kept(self):
        task = Task(id="A", status="blocked")
        assert task.status == "blocked"

    def test_id_is_stripped(self):
        assert Task(id="  A  ").id == "A"

    def test_missing_id_rejected(self):
        with pytest.raises(ValidationError):
            Task.model_validate({"title": "No id"})

    def test_blank_id_rejected(self):
        with pytest.raises(ValidationError):
            Task.model_validate({"id": "   "})

    def test_none_id_rejected(self):
        with pytest.raises(ValidationError):
            Task.model_validate({"id": None})

    def test_dependency_without_target_rejected(self):
        with pytest.raises(ValidationError):
            Task.model_validate({"id": "A", "dependencies_out": [{"id": "e1"}]})

    def test_dependency_id_optional(self):
        task = Task.model_validate({"id": "A", "dependencies_out": [{"to_id": "B"}]})
        assert task.dependencies_out[0].id is None

    def test_blank_dependency_id_is_absent(self):
        task = Task.model_validate({"id": "A", "dependencies_out": [{"id": " ", "to_id": "B"}]})
        assert task.dependencies_out[0].id is None

    def test_assignee_from_embedded_profile(self):
        task = Task.model_validate({
            "id": "A",
            "assignee": {"full_name": "Dana Ortiz", "email": "dana@example.com"},
        })

        assert task.assignee_name == "Dana Ortiz"

    def test_assignee_falls_back_to_email(self):
        row = {"id": "A", "assignee": {"full_name": "  ", "email": "dana@example.com"}}

        assert Task.model_validate(row).assignee_name == "dana@example.com"

    def test_unassigned_task(self):
        assert Task.model_validate({"id": "A", "assignee": None}).assignee_name is None
        assert Task.model_validate({"id": "A", "assignee": {"full_name": None, "email": None}}).assignee_name is None

    def test_explicit_assignee_name_wins(self):
        row = {"id": "A", "assignee_name": "Sam", "assignee": {"full_name": "Dana Ortiz"}}

        assert Task.model_validate(row).assignee_name == "Sam"

    def test_task_is_frozen(self):
        task = Task(id="A")
        with pytest.raises(ValidationError):
            task.title = "Changed"

    def test_status_values(self):
        assert [status.value for status in TaskStatus] == [
            "backlog", "todo", "in_progress", "review", "done",
        ]


# =============================================================================
# Graph Model Tests
# =============================================================================

class TestGraphState:
    """Tests for GraphState and friends."""

    def test_empty_state(self):
        state = GraphState.empty()

        assert state.nodes == ()
        assert state.edges == ()
        assert state.positions == {}

    def test_lookup_helpers(self):
        edge = RenderEdge(edge_id="e1", source_id="A", target_id="B")
        state = GraphState(edges=(edge,))

        assert state.edge("e1") == edge
        assert state.edge("missing") is None
        assert state.node("A") is None
        assert state.edge_ids == ["e1"]

    def test_json_serialization(self):
        state = GraphState(positions={"A": Position(x=0, y=160)})
        data = state.model_dump(mode="json")

        assert data["positions"] == {"A": {"x": 0.0, "y": 160.0}}
        assert data["nodes"] == []

    def test_edge_style_defaults(self):
        style = EdgeStyle()

        assert style.connector == "smoothstep"
        assert style.marker_end == "arrowclosed"
        assert style.stroke == "#6366f1"
        assert style.stroke_width == 2.0

    def test_positions_are_read_only(self):
        state = GraphState(positions={"A": Position(x=0, y=0)})

        with pytest.raises(TypeError):
            state.positions["B"] = Position(x=1, y=1)

    def test_positions_are_copied(self):
        source = {"A": Position(x=0, y=0)}
        state = GraphState(positions=source)
        source["B"] = Position(x=1, y=1)

        assert state.positions == {"A": Position(x=0, y=0)}

    def test_later_state_does_not_change_earlier_one(self):
        first = GraphState(positions={"A": Position(x=0, y=0)})
        second = GraphState(positions=first.positions)

        assert second == first
        assert second.positions is not first.positions

    def test_state_is_hashable(self):
        state = GraphState(positions={"A": Position(x=0, y=0)})

        assert hash(state) == hash(GraphState(positions={"A": Position(x=0, y=0)}))
        assert len({state, GraphState.empty()}) == 2

    def test_positions_compare_by_value(self):
        assert Position(x=220, y=0) == Position(x=220.0, y=0.0)


class TestGraphDiff:
    """Tests for GraphDiff."""

    def test_default_is_empty(self):
        assert GraphDiff().is_empty

    def test_any_change_is_not_empty(self):
        assert not GraphDiff(removed_edges=("e1",)).is_empty
