"""
Bottom-up value aggregation.
"""

import logging

from ..models.data_models import HierarchyTree

logger = logging.getLogger(__name__)


def aggregate_values(tree: HierarchyTree) -> float:
    """Compute every node's ``value`` and return the root value.

    Leaves take their row's measure; interior nodes take the sum of their
    children.  Walking the arena backwards visits every child before its
    parent, so no recursion is needed.
    """
    for node in reversed(tree.nodes):
        if node.leaf_data is not None:
            node.value = float(node.leaf_data.row.measure)
        else:
            node.value = float(sum(child.value for child in node.children))

    logger.debug(f"[Tree] Root value {tree.root.value}")
    return tree.root.value
