"""
Ingestion - turns tabular input into validated ``Row`` objects.

Three entry points feed the render pass:

* ``rows_from_dataframe`` for a ``pandas.DataFrame`` (CSV / Excel loads).
* ``rows_from_cell_records`` for query results shaped as
  ``{field_name: {'value': v, 'links': [...]}}`` per record; drill links
  are collected from every cell of the record.
* ``load_table`` to read a CSV or Excel file from disk.

Every measure is validated here so NaN never reaches the aggregation or
the percent label.  Null dimension values (``None``, ``NaN``, ``NaT``) are
normalised to ``None``.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

import pandas as pd

from ..core.utils import validate_columns
from ..models.data_models import Row, RowValidationError

logger = logging.getLogger(__name__)


class QueryShapeError(ValueError):
    """Raised when the query does not have the fields the chart needs."""


def validate_query_shape(dimension_count: int, measure_count: int, pivot_count: int = 0) -> None:
    """The chart needs at least one dimension, exactly one measure and no pivots."""
    if pivot_count:
        raise QueryShapeError(f"Sunburst charts do not support pivots (got {pivot_count})")
    if dimension_count < 1:
        raise QueryShapeError("Sunburst charts need at least one dimension")
    if measure_count != 1:
        raise QueryShapeError(f"Sunburst charts need exactly one measure (got {measure_count})")


def normalize_dimension(value: Any) -> Any:
    """Map pandas/numpy nulls to None and numpy scalars to Python scalars."""
    if value is None:
        return None
    if not isinstance(value, (list, tuple, dict)) and pd.isna(value):
        return None
    if hasattr(value, 'item'):
        return value.item()
    return value


def coerce_measure(value: Any, position: int) -> float:
    """Convert a measure cell to float, rejecting anything non-numeric."""
    if isinstance(value, bool):
        raise RowValidationError(f"Row {position}: measure {value!r} is not numeric")
    try:
        return float(pd.to_numeric(value, errors='raise'))
    except (ValueError, TypeError) as e:
        raise RowValidationError(f"Row {position}: measure {value!r} is not numeric") from e


def parse_links(value: Any) -> List[Dict[str, Any]]:
    """Links cell -> list of link dicts.  JSON strings (CSV input) are decoded."""
    if isinstance(value, str):
        value = json.loads(value) if value.strip() else []
    if isinstance(value, dict):
        return [value]
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _validated(rows: List[Row]) -> List[Row]:
    for position, row in enumerate(rows):
        row.validate(position)
    return rows


def rows_from_dataframe(
    df: pd.DataFrame,
    dimension_columns: Sequence[str],
    measure_column: str,
    links_column: Optional[str] = None,
) -> List[Row]:
    """
    Build rows from a DataFrame.

    Args:
        df: Input table, one row per record.
        dimension_columns: Hierarchy levels, outermost first.
        measure_column: Numeric column aggregated into the tree.
        links_column: Optional column holding a list of link dicts per row.

    Returns:
        Validated rows in table order.

    Raises:
        QueryShapeError: If no dimension column is given.
        RowValidationError: If a column is missing or a measure is invalid.
    """
    validate_query_shape(len(dimension_columns), 1)

    required = list(dimension_columns) + [measure_column]
    if links_column:
        required.append(links_column)
    if not validate_columns(df, required):
        missing = [c for c in required if c not in df.columns]
        raise RowValidationError(f"Missing columns: {missing}")

    rows = []
    for position, record in enumerate(df[required].to_dict('records')):
        dimensions = tuple(normalize_dimension(record[c]) for c in dimension_columns)
        measure = coerce_measure(record[measure_column], position)
        links = parse_links(record[links_column]) if links_column else []
        rows.append(Row(dimensions=dimensions, measure=measure, links=links))

    logger.info(f"[Ingest] {len(rows)} rows from DataFrame, {len(dimension_columns)} dimension(s)")
    return _validated(rows)


def collect_links(record: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Concatenate the links of every cell of a record, in field order."""
    links: List[Dict[str, Any]] = []
    for cell in record.values():
        if isinstance(cell, dict) and cell.get('links'):
            links.extend(cell['links'])
    return links


def rows_from_cell_records(
    records: Iterable[Dict[str, Dict[str, Any]]],
    dimension_names: Sequence[str],
    measure_name: str,
) -> List[Row]:
    """
    Build rows from cell-shaped query records.

    Each record maps a field name to a cell ``{'value': ..., 'links': [...]}``.
    The row's links are the links of all its cells.
    """
    validate_query_shape(len(dimension_names), 1)

    rows = []
    for position, record in enumerate(records):
        try:
            dimensions = tuple(normalize_dimension(record[name]['value']) for name in dimension_names)
            raw_measure = record[measure_name]['value']
        except KeyError as e:
            raise RowValidationError(f"Row {position}: missing field {e}") from e
        rows.append(Row(
            dimensions=dimensions,
            measure=coerce_measure(raw_measure, position),
            links=collect_links(record),
        ))

    logger.info(f"[Ingest] {len(rows)} rows from cell records")
    return _validated(rows)


def load_table(file_path) -> pd.DataFrame:
    """Read a CSV or Excel file into a DataFrame."""
    path = Path(file_path)
    suffix = path.suffix.lower()
    if suffix == '.xlsx':
        df = pd.read_excel(path, engine='openpyxl')
    elif suffix == '.csv':
        df = pd.read_csv(path)
    else:
        raise ValueError(f"Unsupported file type: {path.suffix} (expected .csv or .xlsx)")
    logger.info(f"[Ingest] Loaded {len(df)} rows x {len(df.columns)} columns from {path.name}")
    return df
