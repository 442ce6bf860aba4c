"""SVG rendering of the data bar (one update cycle).

`render_databar` is the rendering collaborator for the pure `kpi` package:
it runs extraction, applies presentation settings, resolves the status color,
computes the layout and tooltip rows, and renders `visual/databar.svg`.
Drawing handles live only for the duration of a cycle.

Drawing choices for unclamped percentages:
- a fill above 100% is drawn as is and overflows the outer bar,
- a negative or non-finite fill is drawn with zero width; the raw value is
  kept on the `data-percent-done` attribute,
- a non-finite target position omits the target line.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

from django.conf import settings as django_settings
from django.template.loader import render_to_string

from kpi.coercion import number_to_string
from kpi.extraction import extract_bar_model
from kpi.fields import FormattingService
from kpi.layout import BarLayout, layout_for_model
from kpi.options import TextSettings, VisualSettings, apply_text_settings
from kpi.status import resolve_status_color
from kpi.tooltips import TooltipItem, assemble_tooltip

from .dataview import DataView
from .formatting import LocaleFormattingService

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "visual/databar.svg"
FONT_FAMILY = "'Segoe UI', 'wf_segoe-ui_normal', helvetica, arial, sans-serif"

# Rendered text height relative to the font size (no DOM to measure).
LABEL_HEIGHT_RATIO = 1.25


@dataclass(frozen=True, slots=True)
class Viewport:
    """Canvas size in pixels."""

    width: float
    height: float


@dataclass(frozen=True, slots=True)
class RenderedDatabar:
    """Output of one update cycle.

    Attributes:
        svg: Rendered SVG markup (chart or status message).
        status_message: Extraction failure message, or None on success.
        status_color: Resolved fill color, when a model was built.
        layout: Computed geometry, when a model was built.
        tooltip: Ordered tooltip rows, when a model was built.
    """

    svg: str
    status_message: str | None = None
    status_color: str | None = None
    layout: BarLayout | None = None
    tooltip: tuple[TooltipItem, ...] = ()


def default_visual_settings() -> VisualSettings:
    """Return VisualSettings seeded from the Django `DATABAR_*` settings."""

    text = TextSettings(
        display_units=getattr(django_settings, "DATABAR_DEFAULT_DISPLAY_UNITS", 0),
        font_size=getattr(django_settings, "DATABAR_FONT_SIZE", 12),
    )
    return VisualSettings(text=text)


def default_viewport() -> Viewport:
    """Return the viewport configured by `DATABAR_VIEWPORT_*` settings."""

    return Viewport(
        width=getattr(django_settings, "DATABAR_VIEWPORT_WIDTH", 300),
        height=getattr(django_settings, "DATABAR_VIEWPORT_HEIGHT", 60),
    )


def estimate_label_height(font_size: float) -> float:
    """Estimate the rendered height of a single-line label."""

    return font_size * LABEL_HEIGHT_RATIO


def render_databar(
    *,
    data_view: DataView,
    settings: VisualSettings,
    viewport: Viewport,
    formatting: FormattingService | None = None,
) -> RenderedDatabar:
    """Render the data bar for one update cycle.

    Args:
        data_view: Parsed host columns and data row.
        settings: Visual settings for this cycle.
        viewport: Canvas size.
        formatting: Formatting service; defaults to the Django locale service.

    Returns:
        RenderedDatabar with the SVG and the derived values used to draw it.
    """

    formatting = formatting or LocaleFormattingService()
    text = settings.text

    result = extract_bar_model(
        data_view.columns, data_view.row, default_display_units=text.display_units
    )
    if result.model is None:
        svg = render_to_string(
            TEMPLATE_NAME,
            {
                "width": number_to_string(viewport.width),
                "height": number_to_string(viewport.height),
                "status_message": result.status_message,
                "message_y": number_to_string(estimate_label_height(text.font_size)),
                "font_size": number_to_string(text.font_size),
                "font_family": FONT_FAMILY,
            },
        )
        return RenderedDatabar(svg=svg, status_message=result.status_message)

    model = apply_text_settings(result.model, text)
    status_color = resolve_status_color(model.value.value, model.target.value, settings.colors)
    label_height = estimate_label_height(text.font_size)
    layout = layout_for_model(
        model,
        container_width=viewport.width,
        container_height=viewport.height,
        value_label_height=label_height if text.show_value_text else None,
        max_label_height=label_height if text.show_max_text else None,
    )
    tooltip = assemble_tooltip(model, text, formatting=formatting)
    logger.debug(
        "Rendered data bar: percent_done=%s percent_target_of_max=%s color=%s",
        layout.percent_done,
        layout.percent_target_of_max,
        status_color,
    )

    context: dict[str, Any] = {
        "width": number_to_string(viewport.width),
        "height": number_to_string(viewport.height),
        "font_size": number_to_string(text.font_size),
        "font_family": FONT_FAMILY,
        "status_color": status_color,
        "bar_y": number_to_string(layout.bar_y),
        "bar_height": number_to_string(max(layout.bar_height, 0)),
        "fill_width": _fill_width(layout.percent_done),
        "percent_done": number_to_string(layout.percent_done),
        "target_x": _target_x(layout.percent_target_of_max),
        "target_y2": number_to_string(layout.target_line_y2),
        "outer_bar": settings.outer_bar,
        "target_line": settings.target_line,
        "target_stroke_width": number_to_string(settings.target_line.stroke_width),
        "dashed": settings.target_line.line_style == "dashed",
        "value_text": model.value.to_string(formatting) if text.show_value_text else None,
        "max_text": model.max.to_string(formatting) if text.show_max_text else None,
        "tooltip": tooltip,
    }
    svg = render_to_string(TEMPLATE_NAME, context)
    return RenderedDatabar(
        svg=svg,
        status_color=status_color,
        layout=layout,
        tooltip=tooltip,
    )


def _fill_width(percent: float) -> str:
    if not math.isfinite(percent) or percent < 0:
        return "0%"
    return f"{number_to_string(round(percent, 4))}%"


def _target_x(percent: float) -> str | None:
    if not math.isfinite(percent):
        return None
    return f"{number_to_string(round(percent, 4))}%"
