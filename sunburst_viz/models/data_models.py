"""
Data models for the sunburst engine.

This module defines the **schema layer** of the chart.  It provides typed
dataclasses describing every entity that flows from the input table to the
drawing layer, plus the validation error raised during ingestion.

Role in the render pass
-----------------------
::

    Row                 one input record: dimension tuple, measure, links
        |
        v
    Node / LeafData     one vertex of the hierarchy; terminal vertices
                        carry the row that ended there
        |
        v
    HierarchyTree       arena owning every Node of one render pass
        |
        v
    Wedge               drawable primitive for one Node
    BreadcrumbSegment   drawable primitive for one trail entry
    DrillRequest        event emitted when a wedge is clicked

Ownership
---------
The ``HierarchyTree`` owns its nodes through the ``nodes`` arena list.
``Node.children`` holds the ordered child list and ``Node.parent`` is a
plain back-reference used for ancestor walks; nodes never outlive the tree
that created them, and a tree never outlives its render pass.
"""

import math
import numbers
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..core.config import (
    NULL_LABEL,
    WEDGE_STROKE,
    WEDGE_STROKE_WIDTH,
    WEDGE_TRANSITION,
)


class RowValidationError(ValueError):
    """Raised when an input row cannot be turned into part of the hierarchy."""


# ============================================================================
# INPUT ROW
# ============================================================================

@dataclass
class Row:
    """One input record.

    Attributes:
        dimensions: Ordered dimension values; ``None`` marks a null value.
        measure: The numeric measure aggregated into the hierarchy.
        links: Opaque drill links (``{'label': ..., 'url': ...}``), passed
            through untouched to drill requests.
    """
    dimensions: Tuple[Any, ...]
    measure: float
    links: List[Dict[str, Any]] = field(default_factory=list)

    def __post_init__(self):
        self.dimensions = tuple(self.dimensions)

    def validate(self, position: Optional[int] = None) -> None:
        """Reject measures that would poison the aggregation.

        Non-numeric, NaN, infinite and negative measures raise
        ``RowValidationError``; negative values cannot be laid out as
        angular spans.
        """
        where = f"Row {position}" if position is not None else "Row"
        if isinstance(self.measure, bool) or not isinstance(self.measure, numbers.Real):
            raise RowValidationError(f"{where}: measure {self.measure!r} is not numeric")
        if not math.isfinite(self.measure):
            raise RowValidationError(f"{where}: measure {self.measure!r} is not finite")
        if self.measure < 0:
            raise RowValidationError(f"{where}: measure {self.measure!r} is negative")


@dataclass
class LeafData:
    """The row that terminated at a node, plus its links."""
    row: Row
    links: List[Dict[str, Any]] = field(default_factory=list)


# ============================================================================
# HIERARCHY NODE
# ============================================================================

@dataclass(eq=False)
class Node:
    """One vertex of the hierarchy, i.e. one unique dimension-value path prefix.

    Layout fields (``angle_*`` in radians, ``radius_*`` in pixels) are zero
    until ``partition_layout`` runs; ``value`` is zero until
    ``aggregate_values`` runs.
    """
    name: Any
    depth: int
    index: int
    parent: Optional['Node'] = field(default=None, repr=False)
    children: List['Node'] = field(default_factory=list, repr=False)
    leaf_data: Optional[LeafData] = field(default=None, repr=False)
    value: float = 0.0
    angle_start: float = 0.0
    angle_end: float = 0.0
    radius_inner: float = 0.0
    radius_outer: float = 0.0
    # find-or-create lookup: (type, value) -> child
    _child_lookup: Dict[Tuple[type, Any], 'Node'] = field(
        default_factory=dict, repr=False
    )

    @property
    def label(self) -> str:
        """Display text for the node."""
        return NULL_LABEL if self.name is None else str(self.name)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def links(self) -> List[Dict[str, Any]]:
        """Drill links of the row that ended here; empty for interior nodes."""
        if self.leaf_data is None:
            return []
        return list(self.leaf_data.links)

    def find_child(self, name: Any) -> Optional['Node']:
        return self._child_lookup.get((type(name), name))

    def ancestors(self) -> List['Node']:
        """This node followed by every ancestor up to and including the root."""
        chain = []
        current = self
        while current is not None:
            chain.append(current)
            current = current.parent
        return chain

    def ancestor_chain(self) -> List['Node']:
        """Root-to-node path excluding the synthetic root."""
        return [n for n in reversed(self.ancestors()) if not n.is_root]

    def top_level_ancestor(self) -> Optional['Node']:
        """The depth-1 ancestor (top-level branch); None for the root."""
        chain = self.ancestor_chain()
        return chain[0] if chain else None


class HierarchyTree:
    """Arena owning every node of one render pass.

    Nodes are stored in creation order, so a parent always precedes its
    children in ``nodes``.  ``root`` is ``nodes[0]``.
    """

    ROOT_NAME = 'root'

    def __init__(self):
        self.nodes: List[Node] = []
        self.root = self._new_node(self.ROOT_NAME, depth=0, parent=None)

    def _new_node(self, name, depth, parent):
        node = Node(name=name, depth=depth, index=len(self.nodes), parent=parent)
        self.nodes.append(node)
        return node

    def child(self, parent: Node, name: Any) -> Node:
        """Find or create the child of ``parent`` keyed by ``name``.

        Keys are type-aware so ``1``, ``True`` and ``'1'`` stay distinct.
        New children are appended, preserving first-seen order.
        """
        existing = parent.find_child(name)
        if existing is not None:
            return existing
        node = self._new_node(name, depth=parent.depth + 1, parent=parent)
        parent.children.append(node)
        parent._child_lookup[(type(name), name)] = node
        return node

    @property
    def max_depth(self) -> int:
        return max(n.depth for n in self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]

    def breadth_first(self) -> List[Node]:
        """Nodes level by level, siblings in order."""
        ordered = []
        queue = deque([self.root])
        while queue:
            node = queue.popleft()
            ordered.append(node)
            queue.extend(node.children)
        return ordered

    def find(self, *path: Any) -> Optional[Node]:
        """Look up a node by its dimension-value path (empty path = root)."""
        node = self.root
        for name in path:
            node = node.find_child(name)
            if node is None:
                return None
        return node

    def find_by_label(self, *labels: str) -> Optional[Node]:
        """Look up a node by display labels, e.g. from a ``/``-separated path.

        Matches ``Node.label`` so that numeric values (``2024``) and nulls
        (``"null"``) can be addressed as text.  The first matching sibling
        wins.
        """
        node = self.root
        for label in labels:
            node = next((c for c in node.children if c.label == label), None)
            if node is None:
                return None
        return node


# ============================================================================
# RENDER PRIMITIVES
# ============================================================================

@dataclass
class Wedge:
    """Drawable primitive for one node (consumed by the drawing layer)."""
    node_index: int
    name: Any
    depth: int
    angle_start: float
    angle_end: float
    radius_inner: float
    radius_outer: float
    fill_color: str
    fill_opacity: float
    path: str = ''
    stroke: str = WEDGE_STROKE
    stroke_width: str = WEDGE_STROKE_WIDTH
    transition: str = WEDGE_TRANSITION

    def to_dict(self) -> Dict[str, Any]:
        return {
            'angleStart': self.angle_start,
            'angleEnd': self.angle_end,
            'radiusInner': self.radius_inner,
            'radiusOuter': self.radius_outer,
            'fillColor': self.fill_color,
            'fillOpacity': self.fill_opacity,
        }


@dataclass
class BreadcrumbSegment:
    """One rendered entry of the breadcrumb trail, keyed by (name, depth)."""
    name: Any
    depth: int
    label: str
    width: float
    fill_color: str
    x_offset: float = 0.0
    points: str = ''

    @property
    def key(self) -> Tuple[Tuple[type, Any], int]:
        return (type(self.name), self.name), self.depth

    def to_dict(self) -> Dict[str, Any]:
        return {
            'label': self.label,
            'xOffset': self.x_offset,
            'width': self.width,
            'fillColor': self.fill_color,
        }


@dataclass
class DrillRequest:
    """Event emitted on click: the node's links and the pointer position."""
    links: List[Dict[str, Any]]
    position: Tuple[float, float]
