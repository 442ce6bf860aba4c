"""Proportional bar geometry.

The calculator works purely on numbers: label heights are measured (or
estimated) by the renderer and passed in. Percentages are intentionally left
unclamped, and zero denominators produce NaN/Infinity rather than errors.
"""

from __future__ import annotations

from dataclasses import dataclass

from .coercion import divide
from .model import BarModel

BAR_MARGIN_FRACTION = 0.15


@dataclass(frozen=True, slots=True)
class BarLayout:
    """Geometry for one rendering of the data bar.

    Attributes:
        container_width: Canvas width in pixels.
        container_height: Canvas height in pixels.
        percent_done: Fill bar width as a percentage of the canvas width.
        percent_target_of_max: Target marker x position as a percentage.
        remaining_room: Vertical room left for the bar after labels.
        margin: Gap above and below the bar.
        bar_y: Top of the outer and fill bars.
        bar_height: Height of the outer and fill bars.
        target_line_y1: Top of the target marker.
        target_line_y2: Bottom of the target marker.
    """

    container_width: float
    container_height: float
    percent_done: float
    percent_target_of_max: float
    remaining_room: float
    margin: float
    bar_y: float
    bar_height: float
    target_line_y1: float
    target_line_y2: float


def percent_done(model: BarModel) -> float:
    """Return the share of the target achieved, in percent (unclamped)."""

    return divide(model.value.value, model.target.value) * 100


def percent_target_of_max(model: BarModel) -> float:
    """Return the target position as a percentage of the max."""

    return divide(model.target.value, model.max.value) * 100


def compute_layout(
    *,
    container_width: float,
    container_height: float,
    percent_done: float,
    percent_target_of_max: float,
    value_label_height: float | None = None,
    max_label_height: float | None = None,
    label_baseline: float | None = None,
) -> BarLayout:
    """Compute bar and target-marker geometry.

    Args:
        container_width: Canvas width in pixels.
        container_height: Canvas height in pixels.
        percent_done: Fill width percentage (see `percent_done`).
        percent_target_of_max: Target marker position (see `percent_target_of_max`).
        value_label_height: Rendered value label height, or None when hidden.
        max_label_height: Rendered max label height, or None when hidden.
        label_baseline: Baseline y of the labels; defaults to the container height.

    Returns:
        BarLayout for the inputs.

    Notes:
        The label reductions are not additive: when both labels are shown the
        value label determines the remaining room.
    """

    baseline = container_height if label_baseline is None else label_baseline
    remaining_room = container_height
    if max_label_height is not None:
        remaining_room = baseline - max_label_height
    if value_label_height is not None:
        remaining_room = baseline - value_label_height

    margin = remaining_room * BAR_MARGIN_FRACTION
    bar_height = remaining_room - margin * 2
    target_line_y2 = container_height - (max_label_height or 0)

    return BarLayout(
        container_width=container_width,
        container_height=container_height,
        percent_done=percent_done,
        percent_target_of_max=percent_target_of_max,
        remaining_room=remaining_room,
        margin=margin,
        bar_y=margin,
        bar_height=bar_height,
        target_line_y1=0,
        target_line_y2=target_line_y2,
    )


def layout_for_model(
    model: BarModel,
    *,
    container_width: float,
    container_height: float,
    value_label_height: float | None = None,
    max_label_height: float | None = None,
) -> BarLayout:
    """Compute the layout for a model using its derived percentages."""

    return compute_layout(
        container_width=container_width,
        container_height=container_height,
        percent_done=percent_done(model),
        percent_target_of_max=percent_target_of_max(model),
        value_label_height=value_label_height,
        max_label_height=max_label_height,
    )
