"""
Models module for Sunburst Viz.

Contains the row, hierarchy and render-primitive data models.
"""

from .data_models import (
    Row,
    LeafData,
    Node,
    HierarchyTree,
    Wedge,
    BreadcrumbSegment,
    DrillRequest,
    RowValidationError,
)

__all__ = [
    'Row',
    'LeafData',
    'Node',
    'HierarchyTree',
    'Wedge',
    'BreadcrumbSegment',
    'DrillRequest',
    'RowValidationError',
]
