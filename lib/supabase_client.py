# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for the Supabase queries the graph
# service needs. It implements the singleton pattern to reuse a single
# client connection and provides specialized methods for:
# - Tasks with their outgoing dependencies embedded
# - Dependency rows (create / look up / delete)
# - Per-user stored graph positions
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   rows = SupabaseClient.fetch_tasks(project_id="...")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings
from lib.utils import ApplicationError, normalize_uuid

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST code for "no rows" on .single()
NO_ROWS_CODE = "PGRST116"

# Tasks with their assignee profile and outgoing dependency edges, in the
# shape the graph expects
TASK_GRAPH_COLUMNS = (
    "id, title, status, project_id, "
    "assignee:profiles!assignee_id(full_name, email), "
    "dependencies_out:task_dependencies!from_id(id, to_id)"
)


class SupabaseClientError(ApplicationError):
    """
    Error during Supabase operations.

    Carries a code, a suggestion and query details for the API error body.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        rows = SupabaseClient.fetch_tasks()
        dep = SupabaseClient.insert_dependency(from_id, to_id)
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def _normalize_uuid(cls, uuid_value: str | UUID) -> str:
        """Convert UUID to string for queries."""
        return normalize_uuid(uuid_value)

    # -------------------------------------------------------------------------
    # Tasks
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_tasks(cls, project_id: str | UUID | None = None) -> list[dict[str, Any]]:
        """
        Fetch tasks with their outgoing dependencies.

        Rows are returned raw; the graph core validates them.

        Args:
            project_id: Restrict to one project (all tasks when None)

        Returns:
            List of task dicts ordered by created_at, each with a
            `dependencies_out` list of {id, to_id}

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            query = client.table(settings.TASKS_TABLE).select(TASK_GRAPH_COLUMNS)
            if project_id:
                query = query.eq("project_id", cls._normalize_uuid(project_id))

            response = query.order("created_at", desc=False).execute()
            rows = response.data or []

            logger.debug(f"Fetched {len(rows)} tasks (project={project_id})")
            return rows

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch tasks: {e}",
                code="FETCH_TASKS_FAILED",
                suggestion="Check that the tasks and task_dependencies tables are accessible",
                details={"project_id": str(project_id) if project_id else None}
            )

    @classmethod
    def fetch_task(cls, task_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a single task (without dependencies).

        Returns:
            Task dict, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        task_id_str = cls._normalize_uuid(task_id)

        try:
            response = (
                client.table(settings.TASKS_TABLE)
                .select("id, title, status, project_id")
                .eq("id", task_id_str)
                .single()
                .execute()
            )

            return response.data

        except Exception as e:
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch task: {e}",
                code="FETCH_TASK_FAILED",
                suggestion="Check that the task_id exists",
                details={"task_id": task_id_str}
            )

    # -------------------------------------------------------------------------
    # Dependencies
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_dependency(cls, dependency_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a dependency row by ID.

        Returns:
            Dependency dict {id, from_id, to_id, created_at}, or None

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        dependency_id_str = cls._normalize_uuid(dependency_id)

        try:
            response = (
                client.table(settings.DEPENDENCIES_TABLE)
                .select("id, from_id, to_id, created_at")
                .eq("id", dependency_id_str)
                .single()
                .execute()
            )

            return response.data

        except Exception as e:
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch dependency: {e}",
                code="FETCH_DEPENDENCY_FAILED",
                details={"dependency_id": dependency_id_str}
            )

    @classmethod
    def find_dependency(cls, from_id: str | UUID, to_id: str | UUID) -> dict[str, Any] | None:
        """
        Find the dependency linking two tasks, if any.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        from_id_str = cls._normalize_uuid(from_id)
        to_id_str = cls._normalize_uuid(to_id)

        try:
            response = (
                client.table(settings.DEPENDENCIES_TABLE)
                .select("id, from_id, to_id")
                .eq("from_id", from_id_str)
                .eq("to_id", to_id_str)
                .limit(1)
                .execute()
            )

            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to look up dependency: {e}",
                code="FIND_DEPENDENCY_FAILED",
                details={"from_id": from_id_str, "to_id": to_id_str}
            )

    @classmethod
    def insert_dependency(cls, from_id: str | UUID, to_id: str | UUID) -> dict[str, Any]:
        """
        Insert a dependency `from_id -> to_id`.

        Returns:
            Inserted dependency dict with generated id

        Raises:
            SupabaseClientError: If insert fails
        """
        client = cls.get_client()

        data = {
            "from_id": cls._normalize_uuid(from_id),
            "to_id": cls._normalize_uuid(to_id),
        }

        try:
            response = (
                client.table(settings.DEPENDENCIES_TABLE)
                .insert(data)
                .execute()
            )

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA"
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert dependency: {e}",
                code="INSERT_DEPENDENCY_FAILED",
                details=data
            )

    @classmethod
    def delete_dependency(cls, dependency_id: str | UUID) -> None:
        """
        Delete a dependency row.

        Raises:
            SupabaseClientError: If delete fails
        """
        client = cls.get_client()
        dependency_id_str = cls._normalize_uuid(dependency_id)

        try:
            client.table(settings.DEPENDENCIES_TABLE).delete().eq("id", dependency_id_str).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete dependency: {e}",
                code="DELETE_DEPENDENCY_FAILED",
                details={"dependency_id": dependency_id_str}
            )

    # -------------------------------------------------------------------------
    # Graph Positions
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_positions(cls, user_id: str | UUID) -> list[dict[str, Any]]:
        """
        Fetch a user's stored node positions.

        Returns:
            List of {task_id, x, y} dicts

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        user_id_str = cls._normalize_uuid(user_id)

        try:
            response = (
                client.table(settings.POSITIONS_TABLE)
                .select("task_id, x, y")
                .eq("user_id", user_id_str)
                .execute()
            )

            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch graph positions: {e}",
                code="FETCH_POSITIONS_FAILED",
                details={"user_id": user_id_str}
            )

    @classmethod
    def upsert_position(
        cls,
        user_id: str | UUID,
        task_id: str | UUID,
        x: float,
        y: float,
    ) -> None:
        """
        Store a node position for a user, replacing any previous one.

        Raises:
            SupabaseClientError: If upsert fails
        """
        client = cls.get_client()

        data = {
            "user_id": cls._normalize_uuid(user_id),
            "task_id": cls._normalize_uuid(task_id),
            "x": x,
            "y": y,
        }

        try:
            (
                client.table(settings.POSITIONS_TABLE)
                .upsert(data, on_conflict="user_id,task_id")
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to store graph position: {e}",
                code="UPSERT_POSITION_FAILED",
                details={"user_id": data["user_id"], "task_id": data["task_id"]}
            )
