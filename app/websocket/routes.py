# =============================================================================
# app/websocket/routes.py - WebSocket Routes
# =============================================================================
# Live updates of a user's dependency graph view.
#
# Connect: ws://host/ws/graph?token={jwt}&project_id={uuid}
#
# Events:
#   - {"type": "connected", "view_id": "..."}
#   - {"type": "graph_updated", "view_id": "...", "state": {...}, "diff": {...}}
# =============================================================================

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, WebSocket, WebSocketDisconnect

from app.auth import decode_token
from app.dependencies import GraphServiceDep
from app.websocket.broadcast import build_graph_event
from app.websocket.manager import websocket_manager
from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws/graph")
async def graph_websocket(
    websocket: WebSocket,
    graph_service: GraphServiceDep,
    token: str = Query(..., description="JWT token for authentication"),
    project_id: UUID | None = Query(None, description="Project filter"),
):
    """
    WebSocket endpoint for live graph updates.

    Authentication is required via the `token` query parameter. On connect
    the current graph is sent as a `graph_updated` event; afterwards every
    change to the task collection pushes a new one.
    """
    # 1. Verify JWT token
    try:
        user = decode_token(token)
    except HTTPException as e:
        logger.warning(f"WebSocket auth failed: {e.detail}")
        await websocket.close(code=4001, reason="Invalid token")
        return

    # 2. Render the view before accepting so a store outage closes cleanly
    try:
        refresh = graph_service.refresh(user.id, project_id)
    except SupabaseClientError as e:
        logger.error(f"WebSocket: failed to load graph: {e}")
        await websocket.close(code=4000, reason="Server error")
        return

    view_id = refresh.view_id

    # 3. Accept connection and add to manager
    await websocket_manager.connect(view_id, websocket)

    try:
        await websocket.send_json({"type": "connected", "view_id": view_id})
        await websocket.send_json(build_graph_event(refresh))

        # Keep connection alive and handle incoming messages
        while True:
            try:
                data = await websocket.receive_text()

                if data == "ping":
                    await websocket.send_text("pong")
                else:
                    logger.debug(f"WebSocket received: {data[:100]}")

            except WebSocketDisconnect:
                raise
            except Exception as e:
                logger.warning(f"WebSocket receive error: {e}")
                break

    except WebSocketDisconnect:
        logger.info(f"WebSocket client disconnected from view {view_id}")
    finally:
        websocket_manager.disconnect(view_id, websocket)


@router.get("/ws/status")
async def websocket_status():
    """
    Get WebSocket connection statistics.

    Returns:
        dict: Connection counts and watched views
    """
    views = websocket_manager.get_active_views()
    return {
        "total_connections": websocket_manager.get_connection_count(),
        "active_views": views,
        "view_count": len(views),
    }
