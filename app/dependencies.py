# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from app.config import settings
from core.graph import GridLayout, GraphViewRegistry
from core.services.graph_service import GraphService


@lru_cache
def get_graph_service() -> GraphService:
    """
    Get the process-wide graph service.

    The registry behind it holds every open view's state and position
    memory for the lifetime of the process.
    """
    layout = GridLayout(
        width=settings.GRAPH_GRID_WIDTH,
        column_spacing=settings.GRAPH_COLUMN_SPACING,
        row_spacing=settings.GRAPH_ROW_SPACING,
    )
    return GraphService(GraphViewRegistry(layout=layout))


# Type alias for dependency injection
GraphServiceDep = Annotated[GraphService, Depends(get_graph_service)]
