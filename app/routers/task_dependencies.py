# =============================================================================
# app/routers/task_dependencies.py - Dependency Edit Endpoints
# =============================================================================
# Creates and removes task dependencies. Every edit re-renders all open
# graph views and pushes the result to their WebSocket watchers.
#
# Endpoints:
# - POST /dependencies: Link two tasks
# - DELETE /dependencies/{dependency_id}: Remove a link
# =============================================================================

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path
from pydantic import BaseModel, Field

from app.auth import get_current_user, AuthUser
from app.dependencies import GraphServiceDep
from app.websocket import publish_graph_updates
from core.services.task_service import TaskService

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Request/Response Models
# =============================================================================

class DependencyCreateRequest(BaseModel):
    """Link `from_id -> to_id`: the first task depends on the second."""
    from_id: UUID = Field(..., description="Task that depends on another")
    to_id: UUID = Field(..., description="Task it depends on")


class DependencyResponse(BaseModel):
    """A dependency row plus how many graph views were re-rendered."""
    id: str
    from_id: str
    to_id: str
    refreshed_views: int = Field(default=0, description="Open graph views re-rendered")
    message: str


# =============================================================================
# Endpoints
# =============================================================================

@router.post("", response_model=DependencyResponse, status_code=201)
async def create_dependency(
    request: DependencyCreateRequest,
    graph_service: GraphServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a dependency.

    Fails with 409 if the tasks are already linked in this direction and
    with 404 if either task does not exist.
    """
    dependency = TaskService.create_dependency(request.from_id, request.to_id)
    logger.info(f"User {user.id} linked {request.from_id} -> {request.to_id}")

    refreshes = graph_service.refresh_all()
    await publish_graph_updates(refreshes)

    return DependencyResponse(
        id=str(dependency["id"]),
        from_id=str(dependency["from_id"]),
        to_id=str(dependency["to_id"]),
        refreshed_views=len(refreshes),
        message="Dependency created",
    )


@router.delete("/{dependency_id}", response_model=DependencyResponse)
async def delete_dependency(
    dependency_id: Annotated[UUID, Path(description="Dependency UUID")],
    graph_service: GraphServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Delete a dependency.

    Fails with 404 if the dependency does not exist.
    """
    dependency = TaskService.delete_dependency(dependency_id)
    logger.info(f"User {user.id} removed dependency {dependency_id}")

    refreshes = graph_service.refresh_all()
    await publish_graph_updates(refreshes)

    return DependencyResponse(
        id=str(dependency["id"]),
        from_id=str(dependency["from_id"]),
        to_id=str(dependency["to_id"]),
        refreshed_views=len(refreshes),
        message="Dependency deleted",
    )
