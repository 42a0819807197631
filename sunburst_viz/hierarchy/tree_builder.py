"""
Tree Builder - turns flat rows into a hierarchy keyed by dimension-value path.

Each row's dimension tuple is walked left to right from the synthetic root.
Every step finds (or creates) the child keyed by that exact value, so rows
sharing a prefix share the nodes of that prefix.  The node reached after the
last dimension receives the row as its leaf data; a later row ending at the
same path replaces the earlier one.

Null handling
-------------
With ``include_null_branches=True`` a ``None`` value is an ordinary key
(displayed as ``"null"``).  With ``include_null_branches=False`` a row
containing a ``None`` anywhere in its tuple is dropped before any node is
created for it.

All rows must have the same number of dimensions, which guarantees that
nodes carrying leaf data never have children.
"""

import logging
from typing import Iterable

from ..models.data_models import HierarchyTree, LeafData, Row, RowValidationError

logger = logging.getLogger(__name__)


def build_tree(rows: Iterable[Row], include_null_branches: bool = True) -> HierarchyTree:
    """
    Build the hierarchy for one render pass.

    Args:
        rows: Input rows, in table order.  Sibling order in the tree follows
            the first row in which each value appears.
        include_null_branches: Keep rows with null dimension values.

    Returns:
        A new ``HierarchyTree`` whose ``value`` fields are still zero; run
        ``aggregate_values`` next.

    Raises:
        RowValidationError: If rows disagree on the number of dimensions or a
            measure is not a finite, non-negative number.
    """
    tree = HierarchyTree()
    dimension_count = None
    dropped = 0
    overwritten = 0

    for position, row in enumerate(rows):
        if dimension_count is None:
            dimension_count = len(row.dimensions)
        elif len(row.dimensions) != dimension_count:
            raise RowValidationError(
                f"Row {position}: expected {dimension_count} dimension values, "
                f"got {len(row.dimensions)}"
            )
        row.validate(position)

        if not include_null_branches and any(v is None for v in row.dimensions):
            dropped += 1
            continue

        node = tree.root
        for value in row.dimensions:
            node = tree.child(node, value)

        if node.is_root:
            # A row without dimensions has no path to attach to
            continue
        if node.leaf_data is not None:
            overwritten += 1
        node.leaf_data = LeafData(row=row, links=list(row.links))

    if dropped:
        logger.debug(f"[Tree] Dropped {dropped} row(s) with null dimension values")
    if overwritten:
        logger.debug(f"[Tree] {overwritten} row(s) replaced an earlier row at the same path")
    logger.debug(f"[Tree] Built {len(tree)} nodes, max depth {tree.max_depth}")

    return tree
