"""
Sunburst Viz - radial hierarchy charts from tabular rows.

This package provides the core of an interactive sunburst chart:
- Tree building and bottom-up aggregation of a measure
- Value-proportional, equal-area partition layout
- Deterministic colour assignment by node or top-level branch
- Breadcrumb trail reconciliation for the hovered wedge
- Pointer interaction state (highlighting, drill requests)
- A plotly drawing layer for HTML output
"""

__version__ = "1.0.0"
__author__ = "Sunburst Viz Team"

# Core imports
from .core.config import SunburstConfig
from .core.utils import format_value, format_percent

# Models
from .models import Row, Node, HierarchyTree, Wedge, BreadcrumbSegment, DrillRequest, RowValidationError

# Hierarchy
from .hierarchy import build_tree, aggregate_values, partition_layout

# Visualization
from .visualization import (
    ColorMode,
    ColorAssigner,
    BreadcrumbTrail,
    SunburstChart,
    RenderContext,
    InteractionController,
    InteractionSink,
    HoverState,
    build_sunburst_figure,
)

# Pipeline
from .pipeline import (
    QueryShapeError,
    validate_query_shape,
    rows_from_dataframe,
    rows_from_cell_records,
    load_table,
)

__all__ = [
    # Core
    'SunburstConfig',
    'format_value',
    'format_percent',

    # Models
    'Row',
    'Node',
    'HierarchyTree',
    'Wedge',
    'BreadcrumbSegment',
    'DrillRequest',
    'RowValidationError',

    # Hierarchy
    'build_tree',
    'aggregate_values',
    'partition_layout',

    # Visualization
    'ColorMode',
    'ColorAssigner',
    'BreadcrumbTrail',
    'SunburstChart',
    'RenderContext',
    'InteractionController',
    'InteractionSink',
    'HoverState',
    'build_sunburst_figure',

    # Pipeline
    'QueryShapeError',
    'validate_query_shape',
    'rows_from_dataframe',
    'rows_from_cell_records',
    'load_table',

    # Metadata
    '__version__',
]
