# =============================================================================
# tests/test_builder.py - Graph Builder Tests
# =============================================================================
# Tests for building nodes and edges from a task collection:
# - One node per task, one edge per dependency
# - Cycles, self-loops and dangling targets
# - Edge id synthesis and duplicate handling
# - Malformed records
# =============================================================================

import pytest

from core.graph import (
    MalformedInputError,
    build,
    format_label,
    linked_only,
    synthesize_edge_id,
)
from core.models import Task


# =============================================================================
# Nodes and Edges
# =============================================================================

class TestBuild:
    """Tests for build()."""

    def test_empty_collection(self):
        assert build([]) == ([], [])

    def test_chain(self, three_tasks):
        nodes, edges = build(three_tasks)

        assert [node.node_id for node in nodes] == ["A", "B", "C"]
        assert [(e.edge_id, e.source_id, e.target_id) for e in edges] == [
            ("e1", "A", "B"),
            ("e2", "B", "C"),
        ]

    def test_accepts_task_models(self):
        nodes, edges = build([Task(id="A"), Task(id="B")])
        assert [node.node_id for node in nodes] == ["A", "B"]
        assert edges == []

    def test_self_loop(self):
        """A task depending on itself yields one edge and no error."""
        nodes, edges = build([{"id": "X", "dependencies_out": [{"to_id": "X"}]}])

        assert [node.node_id for node in nodes] == ["X"]
        assert len(edges) == 1
        assert edges[0].source_id == "X"
        assert edges[0].target_id == "X"
        assert edges[0].edge_id == "X->X"

    def test_cycle(self):
        """Cycles are ordinary edges."""
        nodes, edges = build([
            {"id": "A", "dependencies_out": [{"to_id": "B"}]},
            {"id": "B", "dependencies_out": [{"to_id": "A"}]},
        ])

        assert len(nodes) == 2
        assert [(e.source_id, e.target_id) for e in edges] == [("A", "B"), ("B", "A")]

    def test_dangling_target_kept_without_node(self):
        nodes, edges = build([{"id": "A", "dependencies_out": [{"id": "e9", "to_id": "Z"}]}])

        assert [node.node_id for node in nodes] == ["A"]
        assert edges[0].target_id == "Z"

    def test_synthesized_edge_id(self):
        _, edges = build([{"id": "A", "dependencies_out": [{"to_id": "B"}]}, {"id": "B"}])
        assert edges[0].edge_id == synthesize_edge_id("A", "B") == "A->B"

    def test_duplicate_dependency_collapses(self):
        """The same pair without ids produces one edge."""
        _, edges = build([
            {"id": "A", "dependencies_out": [{"to_id": "B"}, {"to_id": "B"}]},
            {"id": "B"},
        ])
        assert [edge.edge_id for edge in edges] == ["A->B"]

    def test_duplicate_edge_id_last_wins(self):
        _, edges = build([
            {"id": "A", "dependencies_out": [{"id": "e1", "to_id": "B"}]},
            {"id": "B", "dependencies_out": [{"id": "e2", "to_id": "C"}]},
            {"id": "C", "dependencies_out": [{"id": "e1", "to_id": "A"}]},
        ])

        assert [edge.edge_id for edge in edges] == ["e2", "e1"]
        assert edges[1].source_id == "C"
        assert edges[1].target_id == "A"

    def test_duplicate_task_last_record_wins(self):
        nodes, edges = build([
            {"id": "A", "title": "Old", "dependencies_out": [{"id": "e1", "to_id": "B"}]},
            {"id": "B", "title": "Other"},
            {"id": "A", "title": "New", "dependencies_out": []},
        ])

        assert [node.node_id for node in nodes] == ["B", "A"]
        assert nodes[1].title == "New"
        assert edges == []

    def test_deterministic(self, three_tasks):
        assert build(three_tasks) == build(three_tasks)


# =============================================================================
# Labels
# =============================================================================

class TestLabels:
    """Tests for node labels."""

    def test_title_only(self):
        assert format_label("Design", None) == "Design"

    def test_title_and_status(self):
        assert format_label("Design", "todo") == "Design\n(todo)"

    def test_blank_status_ignored(self):
        assert format_label("Design", "  ") == "Design"

    def test_label_from_record(self):
        nodes, _ = build([{"id": "A", "title": "Design", "status": "in_progress"}])

        assert nodes[0].label == "Design\n(in_progress)"
        assert nodes[0].status == "in_progress"

    def test_missing_title_is_empty(self):
        nodes, _ = build([{"id": "A"}])
        assert nodes[0].label == ""


# =============================================================================
# Malformed Input
# =============================================================================

class TestMalformedInput:
    """Tests for MalformedInputError."""

    def test_missing_id(self):
        with pytest.raises(MalformedInputError) as exc_info:
            build([{"id": "A"}, {"title": "No id"}])

        assert exc_info.value.index == 1
        assert exc_info.value.code == "MALFORMED_INPUT"
        assert "index 1" in exc_info.value.message
        assert exc_info.value.details["errors"][0]["field"] == "id"

    def test_empty_id(self):
        with pytest.raises(MalformedInputError):
            build([{"id": ""}])

    def test_dependency_without_target(self):
        with pytest.raises(MalformedInputError) as exc_info:
            build([{"id": "A", "dependencies_out": [{"id": "e1"}]}])

        assert exc_info.value.index == 0
        assert "dependencies_out.0.to_id" in exc_info.value.message

    def test_not_a_mapping(self):
        with pytest.raises(MalformedInputError):
            build(["A"])


# =============================================================================
# Linked-only Filter
# =============================================================================

class TestLinkedOnly:
    """Tests for linked_only()."""

    def test_keeps_sources_and_targets(self, task_rows):
        kept = linked_only(task_rows)

        assert [task.id for task in kept] == [
            "11111111-1111-1111-1111-111111111111",
            "22222222-2222-2222-2222-222222222222",
        ]

    def test_isolated_tasks_dropped(self):
        assert linked_only([{"id": "A"}, {"id": "B"}]) == []

    def test_self_loop_is_linked(self):
        kept = linked_only([{"id": "X", "dependencies_out": [{"to_id": "X"}]}])
        assert [task.id for task in kept] == ["X"]
