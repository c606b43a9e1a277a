# =============================================================================
# core/services/position_service.py - Stored Node Positions
# =============================================================================
# Positions a user dragged nodes to, kept across server restarts.
# They seed a graph view's position memory when the view opens.
# =============================================================================

import logging
from uuid import UUID

from core.models.graph import Position
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)


class PositionService:
    """Service for per-user stored graph positions."""

    @staticmethod
    def load_positions(user_id: str | UUID) -> dict[str, Position]:
        """
        Load a user's stored positions.

        Rows with non-numeric coordinates are skipped. A store failure is
        logged and yields no positions: the graph then falls back to the
        grid layout.

        Returns:
            Mapping of task id to Position
        """
        try:
            rows = SupabaseClient.fetch_positions(user_id)
        except SupabaseClientError as e:
            logger.warning(f"Failed to load stored positions for {user_id}: {e}")
            return {}

        positions: dict[str, Position] = {}
        for row in rows:
            task_id, x, y = row.get("task_id"), row.get("x"), row.get("y")
            if not task_id or isinstance(x, bool) or isinstance(y, bool):
                continue
            if not isinstance(x, (int, float)) or not isinstance(y, (int, float)):
                continue
            positions[str(task_id)] = Position(x=x, y=y)

        logger.debug(f"Loaded {len(positions)} stored positions for {user_id}")
        return positions

    @staticmethod
    def save_position(user_id: str | UUID, task_id: str, position: Position) -> None:
        """
        Persist one dragged position.

        Raises:
            SupabaseClientError: If the store rejects the write
        """
        SupabaseClient.upsert_position(user_id, task_id, position.x, position.y)
        logger.debug(f"Stored position of {task_id} for {user_id}: ({position.x}, {position.y})")
