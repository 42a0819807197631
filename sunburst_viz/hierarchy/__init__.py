"""
Hierarchy module for Sunburst Viz.

Tree building, value aggregation and the partition layout.
"""

from .tree_builder import build_tree
from .aggregation import aggregate_values
from .partition import partition_layout, radial_bands, split_span

__all__ = [
    'build_tree',
    'aggregate_values',
    'partition_layout',
    'radial_bands',
    'split_span',
]
