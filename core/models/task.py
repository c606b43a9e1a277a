# =============================================================================
# core/models/task.py - Task Input Schemas
# =============================================================================
# The shape the graph core reads from the task store:
# - Task: one unit of work with its outgoing dependency edges
# - DependencyEdge: one `task -> task` relation ({id, to_id})
# - TaskStatus: the known status labels
#
# Tasks are owned by the remote store; the core only reads them. Records
# arrive as Supabase rows (dicts) and are validated here, at the boundary.
# =============================================================================

from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from lib.utils import normalize_id


class TaskStatus(str, Enum):
    """
    Known task statuses, in board order.

    `Task.status` stays a free string so an unknown label coming from the
    store does not make a record malformed.
    """
    BACKLOG = "backlog"
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    DONE = "done"


class DependencyEdge(BaseModel):
    """
    One outgoing dependency of a task.

    `id` is the dependency row's own identifier. It may be absent, in which
    case the graph synthesizes one from the endpoints.

    Example:
        {"id": "dep-1", "to_id": "task-b"}
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str | None = Field(
        default=None,
        description="Dependency identifier (optional)"
    )

    to_id: str = Field(
        ...,
        min_length=1,
        description="Identifier of the task this edge points to"
    )

    @field_validator("id", mode="before")
    @classmethod
    def _normalize_edge_id(cls, value: Any) -> str | None:
        return normalize_id(value)

    @field_validator("to_id", mode="before")
    @classmethod
    def _normalize_target(cls, value: Any) -> Any:
        normalized = normalize_id(value)
        if normalized is None and isinstance(value, str):
            return ""
        return value if normalized is None else normalized


class Task(BaseModel):
    """
    A task as seen by the dependency graph.

    Only `id` is required. Everything else has a neutral default so that
    partially-populated rows (e.g. from a narrow select) still build.
    The embedded `assignee` profile becomes `assignee_name`: full name
    first, email otherwise.

    Example:
        {
            "id": "550e8400-...",
            "title": "Prepare invoice",
            "status": "in_progress",
            "assignee": {"full_name": "Dana Ortiz", "email": "dana@example.com"},
            "dependencies_out": [{"id": "dep-1", "to_id": "660e8400-..."}]
        }
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(
        ...,
        min_length=1,
        description="Stable task identifier"
    )

    title: str = Field(
        default="",
        description="Display text"
    )

    status: str | None = Field(
        default=None,
        description="Status label (see TaskStatus for known values)"
    )

    dependencies_out: tuple[DependencyEdge, ...] = Field(
        default=(),
        description="Outgoing dependency edges, in store order"
    )

    project_id: str | None = Field(
        default=None,
        description="Owning project, if any"
    )

    assignee_name: str | None = Field(
        default=None,
        description="Assignee display name, shown under the title"
    )

    @model_validator(mode="before")
    @classmethod
    def _assignee_from_profile(cls, data: Any) -> Any:
        # Rows embed the assignee profile as {"full_name", "email"}
        if not isinstance(data, Mapping) or data.get("assignee_name"):
            return data

        profile = data.get("assignee")
        if not isinstance(profile, Mapping):
            return data

        name = (profile.get("full_name") or "").strip() or (profile.get("email") or "").strip()
        return {**data, "assignee_name": name or None}

    @field_validator("id", mode="before")
    @classmethod
    def _normalize_task_id(cls, value: Any) -> Any:
        normalized = normalize_id(value)
        # Blank strings collapse to "" so min_length rejects them; other
        # invalid values are left for the type check
        if normalized is None and isinstance(value, str):
            return ""
        return value if normalized is None else normalized

    @field_validator("title", mode="before")
    @classmethod
    def _title_or_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("dependencies_out", mode="before")
    @classmethod
    def _dependencies_or_empty(cls, value: Any) -> Any:
        return () if value is None else value

    @field_validator("project_id", mode="before")
    @classmethod
    def _normalize_project_id(cls, value: Any) -> str | None:
        return normalize_id(value)

    @property
    def target_ids(self) -> list[str]:
        """Targets of this task's outgoing edges, in order."""
        return [edge.to_id for edge in self.dependencies_out]
