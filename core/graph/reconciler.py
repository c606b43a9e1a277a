# =============================================================================
# core/graph/reconciler.py - Incremental Reconciler
# =============================================================================
# Turns (previous GraphState, current tasks) into the next GraphState.
#
# The result is a full replacement, but identities and positions carry over
# wherever the underlying task or dependency persists. Calling reconcile
# twice with the same arguments yields equal states.
#
# If the task collection is malformed nothing is produced: the error
# propagates with the untouched previous state attached.
# =============================================================================

from __future__ import annotations

import logging
from typing import Iterable

from core.graph.builder import MalformedInputError, TaskRecord, build
from core.graph.layout import GridLayout, place
from core.graph.styles import DEPENDENCY_EDGE_STYLE, style_for_status
from core.models.graph import (
    GraphDiff,
    GraphState,
    Position,
    RenderEdge,
    RenderNode,
)
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)


class GraphNodeNotFoundError(ApplicationError):
    """Raised when an operation names a node that is not in the graph."""

    def __init__(self, node_id: str):
        super().__init__(
            message=f"Node not in graph: {node_id}",
            code="GRAPH_NODE_NOT_FOUND",
            suggestion="Reload the graph; the task may have been deleted or filtered out",
            details={"node_id": node_id},
        )
        self.node_id = node_id


def reconcile(
    previous: GraphState,
    tasks: Iterable[TaskRecord],
    layout: GridLayout | None = None,
) -> GraphState:
    """
    Compute the graph state for a new task collection.

    Args:
        previous: Last rendered state (GraphState.empty() for a new view)
        tasks: Current task collection, in display order
        layout: Grid constants for newly placed nodes

    Returns:
        The new GraphState

    Raises:
        MalformedInputError: If a task record is malformed. `previous_state`
            on the error is `previous`, unchanged.
    """
    try:
        node_specs, edge_specs = build(tasks)
    except MalformedInputError as e:
        e.previous_state = previous
        logger.warning(f"Keeping previous graph, task collection is malformed: {e.message}")
        raise

    placed = place(node_specs, previous.positions, layout)

    nodes = tuple(
        RenderNode(
            node_id=spec.node_id,
            label=spec.label,
            title=spec.title,
            status=spec.status,
            assignee_name=spec.assignee_name,
            position=placed[spec.node_id],
            style=style_for_status(spec.status),
        )
        for spec in node_specs
    )

    edges = tuple(
        RenderEdge(
            edge_id=spec.edge_id,
            source_id=spec.source_id,
            target_id=spec.target_id,
            dangling=spec.target_id not in placed,
            style=DEPENDENCY_EDGE_STYLE,
        )
        for spec in edge_specs
    )

    # Positions of nodes that left the view stay remembered
    positions = dict(previous.positions)
    positions.update(placed)

    newly_placed = sum(1 for node_id in placed if node_id not in previous.positions)
    logger.debug(
        f"Reconciled graph: {len(nodes)} nodes, {len(edges)} edges, {newly_placed} newly placed"
    )

    return GraphState(nodes=nodes, edges=edges, positions=positions)


def move_node(state: GraphState, node_id: str, position: Position) -> GraphState:
    """
    Return a copy of `state` with one node moved.

    Raises:
        GraphNodeNotFoundError: If the node is not part of the state
    """
    if state.node(node_id) is None:
        raise GraphNodeNotFoundError(node_id)

    nodes = tuple(
        node.model_copy(update={"position": position}) if node.node_id == node_id else node
        for node in state.nodes
    )
    positions = dict(state.positions)
    positions[node_id] = position

    return GraphState(nodes=nodes, edges=state.edges, positions=positions)


def diff_states(previous: GraphState, current: GraphState) -> GraphDiff:
    """
    Summarize which node and edge ids changed between two states.

    A node or edge counts as updated when it exists in both states but any
    of its fields differ (label, status, position, endpoints, ...).
    """
    old_nodes = {node.node_id: node for node in previous.nodes}
    new_nodes = {node.node_id: node for node in current.nodes}
    old_edges = {edge.edge_id: edge for edge in previous.edges}
    new_edges = {edge.edge_id: edge for edge in current.edges}

    return GraphDiff(
        added_nodes=tuple(nid for nid in new_nodes if nid not in old_nodes),
        updated_nodes=tuple(
            nid for nid, node in new_nodes.items()
            if nid in old_nodes and old_nodes[nid] != node
        ),
        removed_nodes=tuple(nid for nid in old_nodes if nid not in new_nodes),
        added_edges=tuple(eid for eid in new_edges if eid not in old_edges),
        updated_edges=tuple(
            eid for eid, edge in new_edges.items()
            if eid in old_edges and old_edges[eid] != edge
        ),
        removed_edges=tuple(eid for eid in old_edges if eid not in new_edges),
    )
