"""Tooltip rows for the data bar.

Rows are emitted in a fixed order: value, target, max, the two gaps, then the
extra tooltip fields in column order. Gap rows are always present; their text
is empty unless percentages on gaps are enabled.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .coercion import divide
from .fields import Field, FormattingService, ValueFormatter
from .model import BarModel
from .options import TextSettings

GAP_PERCENT_FORMAT: Final[str] = "0.00 %;-0.00 %;0.00 %"


@dataclass(frozen=True, slots=True)
class TooltipItem:
    """A single label/value row shown on hover."""

    display_name: str
    value: str


def assemble_tooltip(
    model: BarModel,
    text: TextSettings,
    *,
    formatting: FormattingService,
) -> tuple[TooltipItem, ...]:
    """Build the ordered tooltip rows for a model.

    Args:
        model: BarModel with display units already applied.
        text: Text settings (gap display units, sign flip, gap percentages).
        formatting: Formatting service used for every value.

    Returns:
        Tooltip rows in display order.
    """

    items = [_item(field, formatting) for field in (model.value, model.target, model.max)]

    gap_target = model.gap_between_value_and_target().with_display_units(text.display_units)
    gap_max = model.gap_between_value_and_max().with_display_units(text.display_units)
    if text.rep_positive_gap_as_negative_number:
        gap_target = gap_target.with_value(gap_target.value * -1)
        gap_max = gap_max.with_value(gap_max.value * -1)

    gap_target_text = ""
    gap_max_text = ""
    if text.show_percentages_on_gaps:
        percent = formatting.create(GAP_PERCENT_FORMAT, 1, allow_beautification=True)
        gap_target_text = _gap_text(gap_target, model.target.value, percent=percent, formatting=formatting)
        gap_max_text = _gap_text(gap_max, model.max.value, percent=percent, formatting=formatting)

    items.append(TooltipItem(display_name=gap_target.display_name, value=gap_target_text))
    items.append(TooltipItem(display_name=gap_max.display_name, value=gap_max_text))
    items.extend(_item(field, formatting) for field in model.tooltip_fields)
    return tuple(items)


def _item(field: Field, formatting: FormattingService) -> TooltipItem:
    return TooltipItem(display_name=field.display_name, value=field.to_string(formatting))


def _gap_text(gap: Field, reference: float, *, percent: ValueFormatter, formatting: FormattingService) -> str:
    """Format a gap followed by its share of the reference in parentheses."""

    share = percent.format(divide(abs(gap.value), reference))
    return f"{gap.to_string(formatting)}({share})"
