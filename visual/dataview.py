"""Adapter from the host's table data view to KPI columns and one row.

The host payload mirrors a table data view:

    {
        "columns": [
            {"roles": {"value": true}, "format": "0", "displayName": "Actual"},
            {"roles": {"target": true, "tooltips": true}, "displayName": "Goal"}
        ],
        "rows": [[45, 60]]
    }

Only the first row is used.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from kpi.extraction import ColumnRoles, DataColumn

_ROLE_KEYS = ("value", "target", "max", "tooltips")


class DataViewError(ValueError):
    """Raised when a host payload does not look like a table data view."""


@dataclass(frozen=True, slots=True)
class DataView:
    """Columns plus the single data row used by the visual."""

    columns: tuple[DataColumn, ...]
    row: tuple[object, ...]


def parse_data_view(payload: Mapping[str, Any]) -> DataView:
    """Parse a host payload into a DataView.

    Args:
        payload: Mapping with `columns` and `rows` entries.

    Returns:
        DataView holding the parsed columns and the first row (empty when the
        payload has no rows).

    Raises:
        DataViewError: When the payload shape is invalid.
    """

    if not isinstance(payload, Mapping):
        raise DataViewError("Data view payload must be an object.")

    raw_columns = payload.get("columns")
    if not isinstance(raw_columns, list):
        raise DataViewError("Data view payload requires a 'columns' list.")
    columns = tuple(_parse_column(index, raw) for index, raw in enumerate(raw_columns))

    rows = payload.get("rows", [])
    if not isinstance(rows, list):
        raise DataViewError("Data view 'rows' must be a list of rows.")
    if not rows:
        return DataView(columns=columns, row=())

    first = rows[0]
    if not isinstance(first, list):
        raise DataViewError("Data view rows must be lists of cell values.")
    return DataView(columns=columns, row=tuple(first))


def _parse_column(index: int, raw: object) -> DataColumn:
    if not isinstance(raw, Mapping):
        raise DataViewError(f"Column {index} must be an object.")

    roles = raw.get("roles") or {}
    if not isinstance(roles, Mapping):
        raise DataViewError(f"Column {index} 'roles' must be an object.")

    display_name = raw.get("displayName", "")
    if not isinstance(display_name, str):
        raise DataViewError(f"Column {index} 'displayName' must be a string.")

    column_format = raw.get("format")
    if column_format is not None and not isinstance(column_format, str):
        raise DataViewError(f"Column {index} 'format' must be a string.")

    return DataColumn(
        roles=ColumnRoles(**{key: roles.get(key) is True for key in _ROLE_KEYS}),
        format=column_format,
        display_name=display_name,
    )
