# =============================================================================
# app/websocket/manager.py - WebSocket Connection Manager
# =============================================================================
# Manages WebSocket connections per graph view and handles broadcasting.
#
# Usage:
#   from app.websocket import websocket_manager
#
#   await websocket_manager.connect(view_id, websocket)
#   await websocket_manager.broadcast(view_id, {"type": "graph_updated", ...})
#   websocket_manager.disconnect(view_id, websocket)
# =============================================================================

import logging
from typing import Dict, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    Manages WebSocket connections organized by graph view ID.

    A view can be watched by several clients (e.g. multiple browser tabs);
    every update of the view is sent to all of them.
    """

    def __init__(self):
        # view_id -> set of WebSocket connections
        self.connections: Dict[str, Set[WebSocket]] = {}

    async def connect(self, view_id: str, websocket: WebSocket) -> None:
        """Accept a new WebSocket connection and track it."""
        await websocket.accept()
        self.connections.setdefault(view_id, set()).add(websocket)

        logger.info(
            f"WebSocket connected to view {view_id}. "
            f"Total connections: {self.get_connection_count()}"
        )

    def disconnect(self, view_id: str, websocket: WebSocket) -> None:
        """Remove a WebSocket connection from tracking."""
        watchers = self.connections.get(view_id)
        if watchers is not None:
            watchers.discard(websocket)
            if not watchers:
                del self.connections[view_id]

        logger.info(
            f"WebSocket disconnected from view {view_id}. "
            f"Total connections: {self.get_connection_count()}"
        )

    async def broadcast(self, view_id: str, message: dict) -> int:
        """
        Send a message to every connection watching a view.

        Connections that fail to receive are dropped.

        Returns:
            int: Number of clients the message was sent to
        """
        watchers = self.connections.get(view_id)
        if not watchers:
            logger.debug(f"No connections for view {view_id}, skipping broadcast")
            return 0

        dead_connections: Set[WebSocket] = set()
        sent_count = 0

        for websocket in list(watchers):
            try:
                await websocket.send_json(message)
                sent_count += 1
            except Exception as e:
                logger.warning(f"Failed to send to WebSocket: {e}")
                dead_connections.add(websocket)

        for ws in dead_connections:
            self.disconnect(view_id, ws)

        logger.debug(
            f"Broadcast to view {view_id}: "
            f"type={message.get('type')}, sent to {sent_count} clients"
        )
        return sent_count

    def get_connection_count(self, view_id: str | None = None) -> int:
        """Number of active connections, for one view or overall."""
        if view_id:
            return len(self.connections.get(view_id, set()))
        return sum(len(watchers) for watchers in self.connections.values())

    def get_active_views(self) -> list[str]:
        """View IDs with at least one connection."""
        return list(self.connections.keys())


# Global singleton instance
websocket_manager = ConnectionManager()
