# =============================================================================
# core/graph/builder.py - Graph Builder
# =============================================================================
# Pure transformation from a task collection into graph nodes and edges.
#
# Rules:
# - One node per task. Duplicate task ids: the last record in input order
#   wins, together with its edges; earlier records are dropped.
# - One edge per `dependencies_out` entry. The edge id is the entry's id,
#   or "<source>-><target>" when the entry has none.
# - Duplicate edge ids: the last occurrence in global input order wins.
# - Dangling targets are kept. No node is invented for them.
# - Self-loops and cycles are ordinary edges; nothing here walks the graph.
#
# The only error is MalformedInputError, raised for a record that is not a
# valid task (most commonly a missing or empty `id`).
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Union

from pydantic import ValidationError

from core.models.graph import EdgeSpec, NodeSpec
from core.models.task import Task
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

TaskRecord = Union[Task, Mapping[str, Any]]

EDGE_ID_SEPARATOR = "->"


class MalformedInputError(ApplicationError):
    """
    Raised when a task record cannot be turned into a graph node.

    When raised from `reconcile`, `previous_state` holds the state that was
    passed in, which remains the last known-good graph.
    """

    def __init__(
        self,
        message: str,
        index: int | None = None,
        errors: list[dict[str, Any]] | None = None,
    ):
        details: dict[str, Any] = {}
        if index is not None:
            details["index"] = index
        if errors:
            details["errors"] = errors
        super().__init__(
            message=message,
            code="MALFORMED_INPUT",
            suggestion="Fix or filter task records without an id before building the graph",
            details=details,
        )
        self.index = index
        self.previous_state = None


def _describe_errors(exc: ValidationError) -> list[dict[str, Any]]:
    return [
        {"field": ".".join(str(part) for part in error["loc"]), "error": error["msg"]}
        for error in exc.errors()
    ]


def coerce_task(record: TaskRecord, index: int | None = None) -> Task:
    """
    Validate one task record.

    Raises:
        MalformedInputError: If the record is not a valid task
    """
    if isinstance(record, Task):
        return record

    try:
        return Task.model_validate(record)
    except ValidationError as e:
        errors = _describe_errors(e)
        fields = sorted({error["field"] for error in errors})
        position = f" at index {index}" if index is not None else ""
        raise MalformedInputError(
            f"Malformed task record{position}: invalid {', '.join(fields)}",
            index=index,
            errors=errors,
        ) from e


def coerce_tasks(records: Iterable[TaskRecord]) -> list[Task]:
    """Validate a whole task collection, failing on the first bad record."""
    return [coerce_task(record, index) for index, record in enumerate(records)]


def synthesize_edge_id(source_id: str, target_id: str) -> str:
    """Deterministic id for a dependency that has none of its own."""
    return f"{source_id}{EDGE_ID_SEPARATOR}{target_id}"


def format_label(title: str, status: str | None) -> str:
    """Node label: title, plus "(status)" on a second line when present."""
    if status and status.strip():
        return f"{title}\n({status.strip()})"
    return title


def linked_only(records: Iterable[TaskRecord]) -> list[Task]:
    """
    Keep tasks that take part in at least one dependency.

    A task is linked when it has outgoing edges or another task in the
    collection points at it.
    """
    tasks = coerce_tasks(records)
    targeted = {target for task in tasks for target in task.target_ids}
    return [task for task in tasks if task.dependencies_out or task.id in targeted]


def build(records: Iterable[TaskRecord]) -> tuple[list[NodeSpec], list[EdgeSpec]]:
    """
    Build graph nodes and edges from a task collection.

    Args:
        records: Task models or raw task rows, in display order

    Returns:
        (nodes, edges), both in input order of their surviving definitions

    Raises:
        MalformedInputError: If any record is not a valid task
    """
    tasks = coerce_tasks(records)

    last_index = {task.id: index for index, task in enumerate(tasks)}
    if len(last_index) != len(tasks):
        logger.debug(f"Collapsed {len(tasks) - len(last_index)} duplicate task records")

    nodes: list[NodeSpec] = []
    edges: dict[str, EdgeSpec] = {}

    for index, task in enumerate(tasks):
        if last_index[task.id] != index:
            continue

        nodes.append(NodeSpec(
            node_id=task.id,
            label=format_label(task.title, task.status),
            title=task.title,
            status=task.status,
            assignee_name=task.assignee_name,
        ))

        for dependency in task.dependencies_out:
            edge_id = dependency.id or synthesize_edge_id(task.id, dependency.to_id)
            # Re-insert so the surviving edge sits at its own position
            edges.pop(edge_id, None)
            edges[edge_id] = EdgeSpec(
                edge_id=edge_id,
                source_id=task.id,
                target_id=dependency.to_id,
            )

    return nodes, list(edges.values())
