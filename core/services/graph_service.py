# =============================================================================
# core/services/graph_service.py - Graph View Orchestration
# =============================================================================
# Connects the task store to the graph core:
#
#   TaskService.list_tasks -> (linked_only filter) -> GraphViewRegistry.reconcile
#
# A view is identified by (user, project). Its options (linked-only) are
# remembered so that a dependency edit can re-reconcile every open view.
# =============================================================================

import logging
import threading
from dataclasses import dataclass, field
from uuid import UUID

from app.exceptions import GraphNodeMissingError, MalformedTaskDataError
from core.graph import (
    GraphNodeNotFoundError,
    GraphViewRegistry,
    MalformedInputError,
    linked_only as filter_linked,
)
from core.models.graph import GraphDiff, GraphState, Position
from core.services.position_service import PositionService
from core.services.task_service import TaskService
from lib.supabase_client import SupabaseClientError
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

ALL_PROJECTS = "all"


@dataclass(frozen=True)
class ViewParams:
    """Options a view was last rendered with."""
    user_id: str
    project_id: str | None = None
    linked_only: bool = False


@dataclass(frozen=True)
class GraphRefresh:
    """
    Result of rendering a view.

    `stale` is True when the task store returned malformed data and
    `state` is the last valid graph rather than a fresh one.
    """
    view_id: str
    state: GraphState
    diff: GraphDiff = field(default_factory=GraphDiff)
    applied: bool = True
    stale: bool = False
    warnings: tuple[str, ...] = ()


class GraphService:
    """
    Service for graph views.

    Holds no graph state itself; states live in the registry.
    """

    def __init__(self, registry: GraphViewRegistry):
        self.registry = registry
        self._params: dict[str, ViewParams] = {}
        self._lock = threading.Lock()

    @staticmethod
    def view_id_for(user_id: str | UUID, project_id: str | UUID | None = None) -> str:
        """Stable view id for a user's graph of one project (or all tasks)."""
        project = normalize_uuid(project_id) if project_id else ALL_PROJECTS
        return f"{normalize_uuid(user_id)}:{project}"

    def refresh(
        self,
        user_id: str | UUID,
        project_id: str | UUID | None = None,
        linked_only: bool | None = None,
        strict: bool = False,
    ) -> GraphRefresh:
        """
        Re-render a user's view from a fresh task snapshot.

        Args:
            user_id: Viewing user
            project_id: Project filter (None for all tasks)
            linked_only: Hide tasks without dependencies. None keeps the
                view's previous setting.
            strict: Raise on malformed task data instead of returning the
                last valid graph

        Raises:
            MalformedTaskDataError: If strict and the task data is malformed
            SupabaseClientError: If the task store is unreachable
        """
        view_id = self.view_id_for(user_id, project_id)

        with self._lock:
            known = self._params.get(view_id)
            if linked_only is None:
                linked_only = known.linked_only if known else False
            params = ViewParams(
                user_id=normalize_uuid(user_id),
                project_id=normalize_uuid(project_id) if project_id else None,
                linked_only=linked_only,
            )
            self._params[view_id] = params

        return self._refresh(view_id, params, strict)

    def _refresh(self, view_id: str, params: ViewParams, strict: bool) -> GraphRefresh:
        if not self.registry.is_open(view_id):
            self.registry.open(view_id, PositionService.load_positions(params.user_id))

        # Ticket first, then fetch: a slower, older fetch cannot overwrite a newer one
        ticket = self.registry.begin(view_id)
        rows = TaskService.list_tasks(params.project_id)

        try:
            tasks = filter_linked(rows) if params.linked_only else rows
            update = self.registry.reconcile(view_id, tasks, ticket)
        except MalformedInputError as e:
            if strict:
                raise MalformedTaskDataError(e.message, details=e.details) from e

            logger.warning(f"Serving last valid graph for view {view_id}: {e.message}")
            state = self.registry.current(view_id) or GraphState.empty()
            return GraphRefresh(
                view_id=view_id,
                state=state,
                applied=False,
                stale=True,
                warnings=(e.message,),
            )

        return GraphRefresh(
            view_id=view_id,
            state=update.state,
            diff=update.diff,
            applied=update.applied,
        )

    def refresh_all(self) -> list[GraphRefresh]:
        """
        Re-render every open view after the task collection changed.

        A view whose refresh fails is logged and skipped; the others are
        still refreshed.
        """
        with self._lock:
            views = [
                (view_id, params) for view_id, params in self._params.items()
                if self.registry.is_open(view_id)
            ]

        results = []
        for view_id, params in views:
            try:
                results.append(self._refresh(view_id, params, strict=False))
            except SupabaseClientError as e:
                logger.error(f"Failed to refresh graph view {view_id}: {e}")

        logger.info(f"Refreshed {len(results)} of {len(views)} open graph views")
        return results

    def move_node(
        self,
        user_id: str | UUID,
        task_id: str,
        position: Position,
        project_id: str | UUID | None = None,
    ) -> GraphRefresh:
        """
        Drag a node to a new position and remember it.

        Raises:
            GraphNodeMissingError: If the view is not open or lacks the node
        """
        view_id = self.view_id_for(user_id, project_id)

        try:
            update = self.registry.move_node(view_id, task_id, position)
        except (KeyError, GraphNodeNotFoundError):
            raise GraphNodeMissingError(task_id)

        try:
            PositionService.save_position(user_id, task_id, position)
        except SupabaseClientError as e:
            # The view keeps the position; only persistence failed
            logger.warning(f"Failed to persist position of {task_id}: {e}")

        return GraphRefresh(view_id=view_id, state=update.state, diff=update.diff)

    def close(self, user_id: str | UUID, project_id: str | UUID | None = None) -> bool:
        """Tear down a view and forget its position memory."""
        view_id = self.view_id_for(user_id, project_id)
        with self._lock:
            self._params.pop(view_id, None)
        return self.registry.close(view_id)
