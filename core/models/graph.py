# =============================================================================
# core/models/graph.py - Dependency Graph Schemas
# =============================================================================
# Derived, rendering-oriented view of the task collection:
# - NodeSpec / EdgeSpec: what the Graph Builder produces
# - Position: 2-D coordinate assigned by the Layout Engine
# - RenderNode / RenderEdge: node/edge with position and styling
# - GraphState: complete snapshot handed to the renderer
# - GraphDiff: which ids changed between two snapshots
#
# All models are frozen. A GraphState is replaced, never mutated; its
# position memory is a read-only copy of whatever mapping it was built from.
# =============================================================================

from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class Position(BaseModel):
    """Top-left coordinate of a node box on the canvas."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(..., description="Horizontal offset in canvas units")
    y: float = Field(..., description="Vertical offset in canvas units")


class NodeSpec(BaseModel):
    """
    A graph node as derived from one task.

    `label` is the title, followed by "(status)" on a second line when the
    task has a status.
    """

    model_config = ConfigDict(frozen=True)

    node_id: str
    label: str
    title: str = ""
    status: str | None = None
    assignee_name: str | None = None


class EdgeSpec(BaseModel):
    """
    A directed dependency edge `source_id -> target_id`.

    `target_id` may name a task that is not part of the same build.
    """

    model_config = ConfigDict(frozen=True)

    edge_id: str
    source_id: str
    target_id: str


class NodeStyle(BaseModel):
    """Status badge and border colours of a node."""

    model_config = ConfigDict(frozen=True)

    status_label: str
    badge_background: str
    badge_color: str
    border_color: str


class EdgeStyle(BaseModel):
    """Connector appearance of a dependency edge."""

    model_config = ConfigDict(frozen=True)

    connector: str = "smoothstep"
    marker_end: str = "arrowclosed"
    stroke: str = "#6366f1"
    stroke_width: float = 2.0
    animated: bool = False


class RenderNode(BaseModel):
    """A node ready to draw: identity, text, position and style."""

    model_config = ConfigDict(frozen=True)

    node_id: str
    label: str
    title: str
    status: str | None = None
    assignee_name: str | None = None
    position: Position
    style: NodeStyle


class RenderEdge(BaseModel):
    """
    An edge ready to draw.

    `dangling` is True when the target node is not part of the snapshot;
    the renderer decides whether to draw a stub or skip it.
    """

    model_config = ConfigDict(frozen=True)

    edge_id: str
    source_id: str
    target_id: str
    dangling: bool = False
    style: EdgeStyle = Field(default_factory=EdgeStyle)


class GraphState(BaseModel):
    """
    Complete, self-sufficient graph snapshot.

    `positions` is the view's position memory. It covers every node in
    `nodes` and also keeps positions of nodes that have dropped out of the
    view (deleted or filtered tasks) until the view is torn down.
    It is a read-only copy, so a state handed out earlier cannot change
    when a later state is built from it.
    """

    model_config = ConfigDict(frozen=True)

    nodes: tuple[RenderNode, ...] = ()
    edges: tuple[RenderEdge, ...] = ()
    positions: Mapping[str, Position] = Field(default_factory=dict, validate_default=True)

    @field_validator("positions", mode="after")
    @classmethod
    def _freeze_positions(cls, value: Mapping[str, Position]) -> Mapping[str, Position]:
        return MappingProxyType(dict(value))

    @field_serializer("positions")
    def _dump_positions(self, positions: Mapping[str, Position]) -> dict[str, Position]:
        return dict(positions)

    def __hash__(self) -> int:
        return hash((self.nodes, self.edges, frozenset(self.positions.items())))

    @classmethod
    def empty(cls) -> "GraphState":
        """State of a view that has not rendered anything yet."""
        return cls()

    def node(self, node_id: str) -> RenderNode | None:
        """Look up a node by id."""
        for node in self.nodes:
            if node.node_id == node_id:
                return node
        return None

    def edge(self, edge_id: str) -> RenderEdge | None:
        """Look up an edge by id."""
        for edge in self.edges:
            if edge.edge_id == edge_id:
                return edge
        return None

    @property
    def node_ids(self) -> list[str]:
        return [node.node_id for node in self.nodes]

    @property
    def edge_ids(self) -> list[str]:
        return [edge.edge_id for edge in self.edges]


class GraphDiff(BaseModel):
    """Ids added, updated and removed between two snapshots."""

    model_config = ConfigDict(frozen=True)

    added_nodes: tuple[str, ...] = ()
    updated_nodes: tuple[str, ...] = ()
    removed_nodes: tuple[str, ...] = ()
    added_edges: tuple[str, ...] = ()
    updated_edges: tuple[str, ...] = ()
    removed_edges: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (
            self.added_nodes or self.updated_nodes or self.removed_nodes
            or self.added_edges or self.updated_edges or self.removed_edges
        )
