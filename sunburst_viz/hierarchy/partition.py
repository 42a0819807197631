"""
Partition Layout - angular and radial intervals for every node.

Two independent allocations are made:

1. **Angular (value-proportional)**
   The root spans ``[0, 2*pi)``.  Each parent's span is split among its
   children in sibling order, every child receiving
   ``child.value / parent.value`` of it.  Children are contiguous, start at
   the parent's ``angle_start`` and the last one ends exactly at the
   parent's ``angle_end``.  A parent whose value is zero splits its span
   equally.

2. **Radial (depth-based, equal-area)**
   With ``max_depth`` the deepest level and ``R`` the outer radius, band
   boundaries are ``y(d) = d / (max_depth + 1) * R**2``.  A node at depth
   ``d`` gets ``radius_inner = sqrt(y(d))`` and
   ``radius_outer = sqrt(y(d + 1))``.  Every ring therefore encloses the
   same area, which keeps outer rings from looking heavier than inner ones.
   The root band is the central disc; it is never drawn.
"""

import math
import logging
from typing import List

import numpy as np

from ..models.data_models import HierarchyTree, Node

logger = logging.getLogger(__name__)

FULL_CIRCLE = 2 * math.pi


def radial_bands(max_depth: int, radius: float) -> np.ndarray:
    """Return ``(max_depth + 1, 2)`` inner/outer radii, one row per depth."""
    levels = max_depth + 1
    boundaries = np.sqrt(np.arange(levels + 1) / levels * radius * radius)
    return np.column_stack([boundaries[:-1], boundaries[1:]])


def split_span(start: float, end: float, values: List[float]) -> np.ndarray:
    """Split ``[start, end)`` proportionally to ``values``.

    Returns the ``len(values) + 1`` boundaries.  The first boundary is
    ``start`` and the last is exactly ``end``.
    """
    weights = np.asarray(values, dtype=float)
    total = weights.sum()
    if total > 0:
        fractions = np.cumsum(weights) / total
    else:
        fractions = np.arange(1, len(weights) + 1) / len(weights)

    boundaries = np.empty(len(weights) + 1)
    boundaries[0] = start
    boundaries[1:] = start + (end - start) * fractions
    boundaries[-1] = end
    return boundaries


def partition_layout(tree: HierarchyTree, radius: float) -> HierarchyTree:
    """
    Assign ``angle_start``/``angle_end`` and ``radius_inner``/``radius_outer``.

    Args:
        tree: Hierarchy with aggregated values.
        radius: Available outer radius of the chart.

    Returns:
        The same tree, laid out in place.
    """
    if radius <= 0:
        raise ValueError(f"Chart radius must be positive, got {radius}")

    bands = radial_bands(tree.max_depth, radius)

    root = tree.root
    root.angle_start, root.angle_end = 0.0, FULL_CIRCLE

    # Arena order visits every parent before its children
    for node in tree.nodes:
        node.radius_inner, node.radius_outer = (float(r) for r in bands[node.depth])
        if node.children:
            _layout_children(node)

    logger.debug(
        f"[Layout] Partitioned {len(tree)} nodes into {tree.max_depth + 1} rings, R={radius:.1f}"
    )
    return tree


def _layout_children(parent: Node) -> None:
    boundaries = split_span(
        parent.angle_start,
        parent.angle_end,
        [child.value for child in parent.children],
    )
    for i, child in enumerate(parent.children):
        child.angle_start = float(boundaries[i])
        child.angle_end = float(boundaries[i + 1])
