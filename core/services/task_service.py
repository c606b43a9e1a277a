# =============================================================================
# core/services/task_service.py - Task & Dependency Operations
# =============================================================================
# Reads tasks for the dependency graph and edits dependency rows.
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid
from app.exceptions import (
    DependencyExistsError,
    DependencyNotFoundError,
    InvalidDependencyError,
    TaskNotFoundError,
)

logger = logging.getLogger(__name__)


class TaskService:
    """
    Service for task reads and dependency edits.

    A dependency `from_id -> to_id` appears in the graph as an outgoing
    edge of `from_id`.
    """

    @staticmethod
    def list_tasks(project_id: str | UUID | None = None) -> list[dict[str, Any]]:
        """
        Get tasks with their outgoing dependencies.

        Args:
            project_id: Restrict to one project (all tasks when None)

        Returns:
            Raw task rows; validation happens in the graph core
        """
        return SupabaseClient.fetch_tasks(project_id)

    @staticmethod
    def get_task(task_id: str | UUID) -> dict[str, Any]:
        """
        Get a task by ID.

        Raises:
            TaskNotFoundError: If task doesn't exist
        """
        task = SupabaseClient.fetch_task(task_id)

        if not task:
            raise TaskNotFoundError(normalize_uuid(task_id))

        return task

    @staticmethod
    def create_dependency(from_id: str | UUID, to_id: str | UUID) -> dict[str, Any]:
        """
        Link two tasks: `from_id` depends on `to_id`.

        Args:
            from_id: Source task UUID
            to_id: Target task UUID

        Returns:
            Created dependency dict

        Raises:
            InvalidDependencyError: If both ids are the same task
            TaskNotFoundError: If either task doesn't exist
            DependencyExistsError: If the two tasks are already linked
        """
        from_id_str = normalize_uuid(from_id)
        to_id_str = normalize_uuid(to_id)

        if from_id_str == to_id_str:
            raise InvalidDependencyError(
                "A task cannot depend on itself",
                from_id=from_id_str,
                to_id=to_id_str,
            )

        TaskService.get_task(from_id_str)
        TaskService.get_task(to_id_str)

        existing = SupabaseClient.find_dependency(from_id_str, to_id_str)
        if existing:
            raise DependencyExistsError(from_id_str, to_id_str, existing.get("id"))

        dependency = SupabaseClient.insert_dependency(from_id_str, to_id_str)
        logger.info(f"Created dependency {dependency['id']}: {from_id_str} -> {to_id_str}")
        return dependency

    @staticmethod
    def delete_dependency(dependency_id: str | UUID) -> dict[str, Any]:
        """
        Remove a dependency.

        Returns:
            The deleted dependency dict

        Raises:
            DependencyNotFoundError: If the dependency doesn't exist
        """
        dependency_id_str = normalize_uuid(dependency_id)

        dependency = SupabaseClient.fetch_dependency(dependency_id_str)
        if not dependency:
            raise DependencyNotFoundError(dependency_id_str)

        SupabaseClient.delete_dependency(dependency_id_str)
        logger.info(
            f"Deleted dependency {dependency_id_str}: "
            f"{dependency.get('from_id')} -> {dependency.get('to_id')}"
        )
        return dependency
