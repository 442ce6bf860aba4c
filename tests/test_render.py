"""Integration tests for rendering a data bar update cycle to SVG."""

from __future__ import annotations

import pytest

from kpi.extraction import MISSING_ROLES_MESSAGE
from kpi.options import TargetLineSettings, TextSettings, VisualSettings
from visual.dataview import parse_data_view
from visual.render import Viewport, default_viewport, default_visual_settings, render_databar

pytestmark = pytest.mark.integration


def _data_view(row: list[object], *, with_max: bool = False, tooltip_name: str | None = None):
    columns = [
        {"roles": {"value": True}, "format": "0", "displayName": "Actual"},
        {"roles": {"target": True}, "format": "0", "displayName": "Goal"},
    ]
    if with_max:
        columns.append({"roles": {"max": True}, "format": "0", "displayName": "Cap"})
    if tooltip_name:
        columns.append({"roles": {"tooltips": True}, "format": "0", "displayName": tooltip_name})
    return parse_data_view({"columns": columns, "rows": [row]})


def test_render_draws_bar_target_and_labels(formatting) -> None:
    """A valid row renders the fill bar, target line and both labels."""

    rendered = render_databar(
        data_view=_data_view([45, 60]),
        settings=VisualSettings(),
        viewport=Viewport(width=300, height=60),
        formatting=formatting,
    )

    assert rendered.status_message is None
    assert rendered.status_color == VisualSettings().colors.less_than_color
    assert rendered.layout is not None
    assert rendered.layout.remaining_room == pytest.approx(45.0)
    assert rendered.layout.bar_height == pytest.approx(31.5)
    assert rendered.layout.target_line_y2 == pytest.approx(45.0)
    assert len(rendered.tooltip) == 5

    svg = rendered.svg
    assert 'class="pebar"' in svg
    assert 'width="75%"' in svg
    assert f'fill="{rendered.status_color}"' in svg
    assert 'x1="50%"' in svg
    assert "stroke-dasharray: 2,2" in svg
    assert ">45</text>" in svg
    assert ">120</text>" in svg
    assert "Gap - Actual &amp; Goal: 15(25.00%)" in svg


def test_render_hides_labels_and_uses_solid_line(formatting) -> None:
    """Hidden labels leave the full height to the bar."""

    settings = VisualSettings(
        text=TextSettings(show_value_text=False, show_max_text=False),
        target_line=TargetLineSettings(line_style="solid"),
    )
    rendered = render_databar(
        data_view=_data_view([70, 60]),
        settings=settings,
        viewport=Viewport(width=300, height=60),
        formatting=formatting,
    )

    assert rendered.status_color == settings.colors.greater_than_color
    assert rendered.layout.bar_height == pytest.approx(42.0)
    assert "valueTxt" not in rendered.svg
    assert "goalTxt" not in rendered.svg
    assert "stroke-dasharray" not in rendered.svg


def test_render_shows_status_message_on_failure(formatting) -> None:
    """Extraction failures render the message and no chart."""

    rendered = render_databar(
        data_view=_data_view([70, 60, 50], with_max=True),
        settings=VisualSettings(),
        viewport=Viewport(width=300, height=60),
        formatting=formatting,
    )

    assert rendered.status_message == "Target (60) is greater than max (50). This is not allowed"
    assert rendered.layout is None
    assert rendered.tooltip == ()
    assert "statusMessage" in rendered.svg
    assert "pebar" not in rendered.svg

    missing = render_databar(
        data_view=parse_data_view({"columns": [], "rows": []}),
        settings=VisualSettings(),
        viewport=Viewport(width=300, height=60),
        formatting=formatting,
    )
    assert missing.status_message == MISSING_ROLES_MESSAGE


def test_render_negative_fill_keeps_raw_percentage(formatting) -> None:
    """Negative fill widths draw at zero and keep the raw percentage."""

    rendered = render_databar(
        data_view=_data_view([-30, 60]),
        settings=VisualSettings(),
        viewport=Viewport(width=300, height=60),
        formatting=formatting,
    )

    assert rendered.layout.percent_done == pytest.approx(-50.0)
    assert 'width="0%"' in rendered.svg
    assert 'data-percent-done="-50"' in rendered.svg


def test_render_overshoot_and_zero_target(formatting) -> None:
    """Overshoot draws past 100%; a zero target omits the target line."""

    over = render_databar(
        data_view=_data_view([90, 60]),
        settings=VisualSettings(),
        viewport=Viewport(width=300, height=60),
        formatting=formatting,
    )
    assert 'width="150%"' in over.svg

    zero = render_databar(
        data_view=_data_view([45, 0]),
        settings=VisualSettings(),
        viewport=Viewport(width=300, height=60),
        formatting=formatting,
    )
    assert zero.status_message is None
    assert 'data-percent-done="Infinity"' in zero.svg
    assert "tline" not in zero.svg


def test_render_escapes_display_names(formatting) -> None:
    """Display names are escaped in the SVG tooltip."""

    rendered = render_databar(
        data_view=_data_view([45, 60, 7], tooltip_name="R&D <spend>"),
        settings=VisualSettings(),
        viewport=Viewport(width=300, height=60),
        formatting=formatting,
    )

    assert "R&amp;D &lt;spend&gt;: 7" in rendered.svg


def test_defaults_come_from_django_settings(settings) -> None:
    """DATABAR_* settings seed the default visual settings and viewport."""

    settings.DATABAR_FONT_SIZE = 20
    settings.DATABAR_DEFAULT_DISPLAY_UNITS = 1000
    settings.DATABAR_VIEWPORT_WIDTH = 400
    settings.DATABAR_VIEWPORT_HEIGHT = 80

    visual = default_visual_settings()
    assert visual.text.font_size == 20
    assert visual.text.display_units == 1000
    assert default_viewport() == Viewport(width=400, height=80)
