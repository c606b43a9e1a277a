# =============================================================================
# app/websocket/__init__.py - WebSocket Module
# =============================================================================
# Provides real-time graph updates.
#
# Usage:
#   from app.websocket import publish_graph_update
#
#   refresh = graph_service.refresh(user.id)
#   await publish_graph_update(refresh)
# =============================================================================

from app.websocket.manager import websocket_manager
from app.websocket.broadcast import (
    GRAPH_UPDATED,
    build_graph_event,
    publish_graph_update,
    publish_graph_updates,
)

__all__ = [
    "websocket_manager",
    "GRAPH_UPDATED",
    "build_graph_event",
    "publish_graph_update",
    "publish_graph_updates",
]
