"""Formatted numeric quantities used by the data-bar model.

A `Field` pairs a computed value with the presentation hints the host
attached to its column. Formatting is delegated to an injected
`FormattingService` so this module stays free of locale handling.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Protocol

from .coercion import number_to_string


class ValueFormatter(Protocol):
    """A formatter bound to one format string and display unit."""

    def format(self, value: float) -> str:
        """Return `value` rendered as display text."""


class FormattingService(Protocol):
    """Factory for value formatters (the host's number formatting engine)."""

    def create(
        self,
        format_string: str | None,
        display_units: float = 0,
        *,
        allow_beautification: bool = False,
    ) -> ValueFormatter:
        """Return a formatter for a format string and display-unit hint."""


@dataclass(frozen=True, slots=True)
class Field:
    """A named, formatted numeric quantity.

    Attributes:
        value: Computed numeric value (NaN when the source cell was not numeric).
        format: Host format pattern, passed to the formatter verbatim.
        display_name: Human-friendly label of the source column.
        display_units: Unit scaling hint (0/1 = none, 1000 = thousands, ...).
    """

    value: float
    format: str | None
    display_name: str
    display_units: float = 0

    def with_display_units(self, display_units: float) -> Field:
        """Return a copy carrying a presentation-time display-unit hint."""

        return replace(self, display_units=display_units)

    def with_value(self, value: float) -> Field:
        """Return a copy with a different value and the same presentation."""

        return replace(self, value=value)

    def to_string(self, formatting: FormattingService | None = None) -> str:
        """Render the field value.

        Args:
            formatting: Formatting service; when omitted the raw numeric string
                is returned.

        Returns:
            Display text for the value.
        """

        if formatting is None:
            return number_to_string(self.value)
        return formatting.create(self.format, self.display_units).format(self.value)

    def __str__(self) -> str:
        return number_to_string(self.value)
