# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the OpsBoard Graph API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.dependencies import get_graph_service
from app.exceptions import (
    OpsBoardException,
    application_error_handler,
    opsboard_exception_handler,
)
from app.routers import health, graph, task_dependencies
from app.websocket import routes as websocket_routes
from lib.utils import ApplicationError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Log configuration
    - Shutdown: Tear down every open graph view
    """
    # Startup
    logger.info(f"Starting OpsBoard Graph API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(
        f"Grid layout: {settings.GRAPH_GRID_WIDTH} columns, "
        f"{settings.GRAPH_COLUMN_SPACING}x{settings.GRAPH_ROW_SPACING}"
    )

    yield

    # Shutdown
    registry = get_graph_service().registry
    view_ids = registry.view_ids()
    for view_id in view_ids:
        registry.close(view_id)
    logger.info(f"Shutting down OpsBoard Graph API ({len(view_ids)} views closed)")


# Create FastAPI application
app = FastAPI(
    title="OpsBoard Graph API",
    description="""
## Task Dependency Graph API

Renders a project's tasks and their dependencies as a directed graph.

### How It Works

1. **Load the graph** - `GET /api/v1/graph` reconciles the latest tasks into a view
2. **Arrange nodes** - Drag nodes; positions are remembered per user
3. **Edit dependencies** - Link or unlink tasks; every open view re-renders
4. **Watch live** - Connect to `/ws/graph` for pushed updates

### Layout

New tasks are placed on a grid (5 columns, 220 x 160 spacing). A task keeps
its position for as long as the view is open, including across dependency
edits and filter changes.

### Quick Start

```bash
# 1. Load the graph
curl http://localhost:8000/api/v1/graph -H "Authorization: Bearer $TOKEN"

# 2. Link two tasks
curl -X POST http://localhost:8000/api/v1/dependencies \\
  -H "Authorization: Bearer $TOKEN" \\
  -H "Content-Type: application/json" \\
  -d '{"from_id": "...", "to_id": "..."}'
```
""",
    version=health.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Graph",
            "description": "Task dependency graph views",
        },
        {
            "name": "Dependencies",
            "description": "Create and delete task dependencies",
        },
        {
            "name": "WebSocket",
            "description": "Real-time graph updates",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(OpsBoardException)
async def handle_opsboard_exception(request: Request, exc: OpsBoardException):
    """Handle custom OpsBoard exceptions."""
    return await opsboard_exception_handler(request, exc)


@app.exception_handler(ApplicationError)
async def handle_application_error(request: Request, exc: ApplicationError):
    """Handle errors raised below the app layer (task store, graph core)."""
    logger.error(f"{exc.code}: {exc.message}")
    return await application_error_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Graph view endpoints
app.include_router(
    graph.router,
    prefix="/api/v1/graph",
    tags=["Graph"]
)

# Dependency edit endpoints
app.include_router(
    task_dependencies.router,
    prefix="/api/v1/dependencies",
    tags=["Dependencies"]
)

# WebSocket endpoints (Real-time updates)
app.include_router(
    websocket_routes.router,
    tags=["WebSocket"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "OpsBoard Graph API",
        "version": health.VERSION,
        "docs": "/docs",
        "health": "/api/v1/health",
    }
