# =============================================================================
# app/websocket/broadcast.py - Graph Update Events
# =============================================================================
# Builds and sends the `graph_updated` event for a refreshed view.
#
# Event format:
#   {
#       "type": "graph_updated",
#       "view_id": "...",
#       "stale": false,
#       "warnings": [],
#       "diff": {"added_nodes": [...], ...},
#       "state": {"nodes": [...], "edges": [...], "positions": {...}},
#       "timestamp": "2026-01-15T10:30:00"
#   }
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any, Iterable

from app.websocket.manager import websocket_manager
from core.services.graph_service import GraphRefresh

logger = logging.getLogger(__name__)

GRAPH_UPDATED = "graph_updated"


def build_graph_event(refresh: GraphRefresh) -> dict[str, Any]:
    """JSON-ready `graph_updated` event for one view refresh."""
    return {
        "type": GRAPH_UPDATED,
        "view_id": refresh.view_id,
        "stale": refresh.stale,
        "warnings": list(refresh.warnings),
        "diff": refresh.diff.model_dump(mode="json"),
        "state": refresh.state.model_dump(mode="json"),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def publish_graph_update(refresh: GraphRefresh) -> int:
    """
    Push a refreshed view to its watchers.

    Discarded (stale-ticket) refreshes and refreshes that changed nothing
    are not sent.

    Returns:
        Number of clients notified
    """
    if not refresh.applied and not refresh.stale:
        return 0
    if refresh.applied and refresh.diff.is_empty:
        return 0

    return await websocket_manager.broadcast(refresh.view_id, build_graph_event(refresh))


async def publish_graph_updates(refreshes: Iterable[GraphRefresh]) -> int:
    """Push several refreshed views; returns the total clients notified."""
    total = 0
    for refresh in refreshes:
        total += await publish_graph_update(refresh)
    return total
