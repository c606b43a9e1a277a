# =============================================================================
# app/routers/graph.py - Dependency Graph Endpoints
# =============================================================================
# Serves the caller's task dependency graph view.
#
# Endpoints:
# - GET /graph: Reconcile and return the current graph
# - PUT /graph/nodes/{task_id}/position: Drag a node
# - DELETE /graph: Tear the view down (forgets unsaved layout memory)
# =============================================================================

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query
from pydantic import BaseModel, Field

from app.auth import get_current_user, AuthUser
from app.dependencies import GraphServiceDep
from app.websocket import publish_graph_update
from core.models.graph import GraphDiff, GraphState, Position
from core.services.graph_service import GraphRefresh

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Request/Response Models
# =============================================================================

class GraphResponse(BaseModel):
    """A rendered graph view."""
    view_id: str = Field(..., example="550e8400-e29b-41d4-a716-446655440000:all")
    stale: bool = Field(
        default=False,
        description="True when the task data was malformed and this is the last valid graph"
    )
    warnings: list[str] = Field(default_factory=list)
    diff: GraphDiff = Field(default_factory=GraphDiff)
    state: GraphState

    @classmethod
    def from_refresh(cls, refresh: GraphRefresh) -> "GraphResponse":
        return cls(
            view_id=refresh.view_id,
            stale=refresh.stale,
            warnings=list(refresh.warnings),
            diff=refresh.diff,
            state=refresh.state,
        )


class PositionRequest(BaseModel):
    """New top-left position of a dragged node."""
    x: float = Field(..., example=440.0)
    y: float = Field(..., example=160.0)


class CloseViewResponse(BaseModel):
    """Response when tearing a view down."""
    view_id: str
    closed: bool


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=GraphResponse)
async def get_graph(
    graph_service: GraphServiceDep,
    user: AuthUser = Depends(get_current_user),
    project_id: Annotated[UUID | None, Query(description="Only tasks of this project")] = None,
    linked_only: Annotated[
        bool | None,
        Query(description="Hide tasks without dependencies (default: keep the view's setting)")
    ] = None,
    strict: Annotated[
        bool,
        Query(description="Fail with 422 on malformed task data instead of serving the last valid graph")
    ] = False,
):
    """
    Get the dependency graph.

    Node positions are stable: a node keeps its position across calls until
    the view is torn down. New tasks are placed on a grid.
    """
    refresh = graph_service.refresh(
        user.id,
        project_id=project_id,
        linked_only=linked_only,
        strict=strict,
    )
    await publish_graph_update(refresh)

    return GraphResponse.from_refresh(refresh)


@router.put("/nodes/{task_id}/position", response_model=GraphResponse)
async def move_node(
    task_id: Annotated[str, Path(min_length=1, description="Task (node) ID")],
    request: PositionRequest,
    graph_service: GraphServiceDep,
    user: AuthUser = Depends(get_current_user),
    project_id: Annotated[UUID | None, Query(description="Project the view is filtered to")] = None,
):
    """
    Move a node.

    The position is kept by the view and stored for the user, so it
    survives view teardown and server restarts.
    """
    refresh = graph_service.move_node(
        user.id,
        task_id,
        Position(x=request.x, y=request.y),
        project_id=project_id,
    )
    await publish_graph_update(refresh)

    return GraphResponse.from_refresh(refresh)


@router.delete("", response_model=CloseViewResponse)
async def close_graph(
    graph_service: GraphServiceDep,
    user: AuthUser = Depends(get_current_user),
    project_id: Annotated[UUID | None, Query(description="Project the view is filtered to")] = None,
):
    """
    Tear the view down.

    The next GET starts from stored positions and the grid layout.
    """
    closed = graph_service.close(user.id, project_id)

    return CloseViewResponse(
        view_id=graph_service.view_id_for(user.id, project_id),
        closed=closed,
    )
