# =============================================================================
# core/graph/registry.py - Graph View Registry
# =============================================================================
# Holds the current GraphState of every open graph view.
#
# A view's position memory lives here for as long as the view is open and
# is dropped by close(). Each update is ticketed: a caller takes a ticket
# with begin() before fetching its task snapshot, and an update whose
# ticket is older than one already applied is discarded, so the latest
# snapshot always wins.
#
# Tickets are ordered across the whole registry. A view remembers the last
# ticket issued before it was opened, so a snapshot fetched for a view that
# has since been closed (and possibly reopened) is discarded. A ticketed
# update never reopens a closed view.
#
# Usage:
#   registry = GraphViewRegistry()
#   registry.open(view_id, stored_positions)
#   ticket = registry.begin(view_id)
#   tasks = fetch_tasks()
#   update = registry.reconcile(view_id, tasks, ticket)
#   render(update.state)
# =============================================================================

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Iterable, Mapping

from core.graph.builder import MalformedInputError, TaskRecord
from core.graph.layout import GridLayout
from core.graph.reconciler import diff_states, move_node, reconcile
from core.models.graph import GraphDiff, GraphState, Position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewUpdate:
    """Outcome of one update of a view."""
    view_id: str
    previous: GraphState
    state: GraphState
    applied: bool
    ticket: int

    @property
    def diff(self) -> GraphDiff:
        return diff_states(self.previous, self.state)


@dataclass
class _ViewEntry:
    state: GraphState
    # Highest ticket applied; starts at the last ticket issued before opening
    applied: int = 0


class GraphViewRegistry:
    """
    Session-scoped store of graph views.

    All operations are guarded by one lock; reconciling is linear in the
    size of the task collection, so holding the lock for it is fine.
    """

    def __init__(self, layout: GridLayout | None = None):
        self.layout = layout or GridLayout()
        self._views: dict[str, _ViewEntry] = {}
        self._tickets = 0
        self._lock = threading.Lock()

    def _create(self, view_id: str, state: GraphState) -> _ViewEntry:
        entry = _ViewEntry(state=state, applied=self._tickets)
        self._views[view_id] = entry
        return entry

    def is_open(self, view_id: str) -> bool:
        with self._lock:
            return view_id in self._views

    def open(
        self,
        view_id: str,
        seed_positions: Mapping[str, Position] | None = None,
    ) -> GraphState:
        """
        Open a view, seeding its position memory.

        Opening a view that is already open returns its current state and
        ignores the seed.
        """
        with self._lock:
            if view_id in self._views:
                return self._views[view_id].state

            state = GraphState(positions=dict(seed_positions or {}))
            self._create(view_id, state)
            logger.info(f"Opened graph view {view_id} with {len(state.positions)} stored positions")
            return state

    def current(self, view_id: str) -> GraphState | None:
        """Current state of a view, or None if it is not open."""
        with self._lock:
            entry = self._views.get(view_id)
            return entry.state if entry else None

    def begin(self, view_id: str) -> int:
        """
        Issue the next update ticket for a view.

        Does not open the view; an update carrying the ticket only applies
        if the view is still open when it arrives.
        """
        with self._lock:
            self._tickets += 1
            return self._tickets

    def reconcile(
        self,
        view_id: str,
        tasks: Iterable[TaskRecord],
        ticket: int | None = None,
    ) -> ViewUpdate:
        """
        Reconcile a view against a task snapshot.

        Args:
            view_id: View to update
            tasks: Task snapshot taken after `ticket` was issued
            ticket: Ticket from begin(). None takes a fresh one and opens
                the view if needed.

        Returns:
            ViewUpdate. `applied` is False when a newer snapshot has already
            been applied (`state` is then that newer state) or when the view
            was closed after the ticket was issued (`state` is empty).

        Raises:
            MalformedInputError: If the snapshot is malformed. The view keeps
                its last known-good state.
        """
        with self._lock:
            entry = self._views.get(view_id)

            if ticket is None:
                if entry is None:
                    entry = self._create(view_id, GraphState.empty())
                self._tickets += 1
                ticket = self._tickets
            elif entry is None:
                logger.debug(f"Discarding snapshot for closed view {view_id} (ticket {ticket})")
                empty = GraphState.empty()
                return ViewUpdate(view_id, empty, empty, applied=False, ticket=ticket)

            previous = entry.state
            if ticket <= entry.applied:
                logger.debug(
                    f"Discarding stale snapshot for view {view_id}: "
                    f"ticket {ticket} <= applied {entry.applied}"
                )
                return ViewUpdate(view_id, previous, previous, applied=False, ticket=ticket)

            try:
                state = reconcile(previous, tasks, self.layout)
            except MalformedInputError:
                logger.warning(f"View {view_id} keeps its last valid graph (ticket {ticket})")
                raise

            entry.state = state
            entry.applied = ticket
            return ViewUpdate(view_id, previous, state, applied=True, ticket=ticket)

    def move_node(self, view_id: str, node_id: str, position: Position) -> ViewUpdate:
        """
        Move a node of an open view.

        Raises:
            KeyError: If the view is not open
            GraphNodeNotFoundError: If the node is not in the view
        """
        with self._lock:
            entry = self._views.get(view_id)
            if entry is None:
                raise KeyError(view_id)

            previous = entry.state
            entry.state = move_node(previous, node_id, position)
            return ViewUpdate(view_id, previous, entry.state, applied=True, ticket=entry.applied)

    def close(self, view_id: str) -> bool:
        """Tear a view down, forgetting its position memory."""
        with self._lock:
            removed = self._views.pop(view_id, None) is not None

        if removed:
            logger.info(f"Closed graph view {view_id}")
        return removed

    def view_ids(self) -> list[str]:
        with self._lock:
            return list(self._views)
