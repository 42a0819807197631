"""
Pipeline module for Sunburst Viz.

Ingestion of tables and query records into validated rows.
"""

from .ingestion import (
    QueryShapeError,
    validate_query_shape,
    rows_from_dataframe,
    rows_from_cell_records,
    collect_links,
    parse_links,
    load_table,
)

__all__ = [
    'QueryShapeError',
    'validate_query_shape',
    'rows_from_dataframe',
    'rows_from_cell_records',
    'collect_links',
    'parse_links',
    'load_table',
]
