"""Map an annotated data row into a `BarModel`.

Extraction is the only validation step of the core. Its two failure modes
(missing mandatory roles, target above max) are returned as values so the
renderer can show them as a status message; nothing is raised.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from .coercion import coerce_number, number_to_string
from .fields import Field
from .model import BarModel, synthesize_max

logger = logging.getLogger(__name__)

MISSING_ROLES_MESSAGE = (
    "value and target not both supplied. It is a mandatory to provide at least these two values."
)


@dataclass(frozen=True, slots=True)
class ColumnRoles:
    """Role flags attached to a column by the host (non-exclusive)."""

    value: bool = False
    target: bool = False
    max: bool = False
    tooltips: bool = False


@dataclass(frozen=True, slots=True)
class DataColumn:
    """Column metadata supplied alongside the data row.

    Attributes:
        roles: Role flags for the column.
        format: Host format pattern for the column values.
        display_name: Human-friendly column label.
    """

    roles: ColumnRoles
    format: str | None
    display_name: str


@dataclass(frozen=True, slots=True)
class RoleIndex:
    """Column indices resolved for each role."""

    value_index: int | None = None
    target_index: int | None = None
    max_index: int | None = None
    tooltip_indices: tuple[int, ...] = ()


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Outcome of an extraction: a model or a status message, never both."""

    model: BarModel | None = None
    status_message: str | None = None

    def __post_init__(self) -> None:
        if (self.model is None) == (self.status_message is None):
            raise ValueError("ExtractionResult requires exactly one of model or status_message.")

    @property
    def ok(self) -> bool:
        """Whether extraction produced a model."""

        return self.model is not None

    @classmethod
    def success(cls, model: BarModel) -> ExtractionResult:
        return cls(model=model)

    @classmethod
    def failure(cls, message: str) -> ExtractionResult:
        return cls(status_message=message)


def index_roles(columns: Sequence[DataColumn]) -> RoleIndex:
    """Resolve role indices in a single pass over the columns.

    Each column maps to at most one primary role (value, then target, then
    max); the tooltip flag is tracked independently. When several columns
    share a primary role the last one wins.

    Args:
        columns: Column metadata in row order.

    Returns:
        RoleIndex for the columns.
    """

    value_index: int | None = None
    target_index: int | None = None
    max_index: int | None = None
    tooltip_indices: list[int] = []
    for index, column in enumerate(columns):
        roles = column.roles
        if roles.value:
            value_index = index
        elif roles.target:
            target_index = index
        elif roles.max:
            max_index = index
        if roles.tooltips:
            tooltip_indices.append(index)
    return RoleIndex(
        value_index=value_index,
        target_index=target_index,
        max_index=max_index,
        tooltip_indices=tuple(tooltip_indices),
    )


def extract_bar_model(
    columns: Sequence[DataColumn],
    row: Sequence[object],
    *,
    default_display_units: float = 0,
) -> ExtractionResult:
    """Build a BarModel from column metadata and one data row.

    Args:
        columns: Column metadata in row order.
        row: Raw cell values aligned to `columns`.
        default_display_units: Display units assigned to tooltip fields.

    Returns:
        ExtractionResult holding either the model or a status message.
    """

    roles = index_roles(columns)
    if roles.value_index is None or roles.target_index is None:
        logger.info("Data bar extraction failed: value/target roles missing.")
        return ExtractionResult.failure(MISSING_ROLES_MESSAGE)

    value = _field_at(columns, row, roles.value_index)
    target = _field_at(columns, row, roles.target_index)
    if roles.max_index is not None:
        maximum = _field_at(columns, row, roles.max_index)
    else:
        maximum = synthesize_max(target)

    if target.value > maximum.value:
        message = (
            f"Target ({number_to_string(target.value)}) is greater than "
            f"max ({number_to_string(maximum.value)}). This is not allowed"
        )
        logger.info("Data bar extraction failed: %s", message)
        return ExtractionResult.failure(message)

    tooltip_fields = tuple(
        _field_at(columns, row, index, display_units=default_display_units)
        for index in roles.tooltip_indices
    )
    return ExtractionResult.success(
        BarModel(value=value, target=target, max=maximum, tooltip_fields=tooltip_fields)
    )


def _field_at(
    columns: Sequence[DataColumn],
    row: Sequence[object],
    index: int,
    *,
    display_units: float = 0,
) -> Field:
    """Build the Field for a column index, coercing the cell to a number."""

    column = columns[index]
    raw = row[index] if index < len(row) else None
    value = coerce_number(raw)
    if math.isnan(value) and raw is not None:
        logger.debug("Non-numeric cell %r in column %r coerced to NaN.", raw, column.display_name)
    return Field(
        value=value,
        format=column.format,
        display_name=column.display_name,
        display_units=display_units,
    )
