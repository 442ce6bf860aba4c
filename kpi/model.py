"""The validated data-bar domain object.

`BarModel` is a transient projection of the current data row: it is rebuilt
on every update cycle and carries no identity. Gap fields are derived on
demand and never cached.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .fields import Field


@dataclass(frozen=True, slots=True)
class BarModel:
    """Value, target and max fields plus extra tooltip fields.

    Attributes:
        value: Actual KPI value.
        target: Goal value; never greater than `max` once constructed.
        max: Upper bound of the bar, explicit or synthesized from `target`.
        tooltip_fields: Extra fields shown on hover, in column order.
    """

    value: Field
    target: Field
    max: Field
    tooltip_fields: tuple[Field, ...] = ()

    def gap_between_value_and_target(self) -> Field:
        """Return `target - value` as a Field formatted like the value."""

        return self._gap_to(self.target)

    def gap_between_value_and_max(self) -> Field:
        """Return `max - value` as a Field formatted like the value."""

        return self._gap_to(self.max)

    def with_display_units(
        self,
        *,
        value: float | None = None,
        target: float | None = None,
        max: float | None = None,
    ) -> BarModel:
        """Return a copy with display-unit hints overlaid on the primary fields.

        Args:
            value: Display units for the value field, or None to keep it.
            target: Display units for the target field, or None to keep it.
            max: Display units for the max field, or None to keep it.

        Returns:
            A new BarModel; computed values are unchanged.
        """

        return replace(
            self,
            value=self.value if value is None else self.value.with_display_units(value),
            target=self.target if target is None else self.target.with_display_units(target),
            max=self.max if max is None else self.max.with_display_units(max),
        )

    def _gap_to(self, other: Field) -> Field:
        return Field(
            value=other.value - self.value.value,
            format=self.value.format,
            display_name=f"Gap - {self.value.display_name} & {other.display_name}",
        )


def synthesize_max(target: Field) -> Field:
    """Build the implicit max field used when no max column is mapped.

    Args:
        target: The target field.

    Returns:
        A Field worth twice the target, formatted like the target.
    """

    return Field(
        value=target.value * 2,
        format=target.format,
        display_name=f"({target.display_name} * 2)",
    )
