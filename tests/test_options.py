"""Unit tests for visual settings parsing and the display-unit overlay."""

from __future__ import annotations

import pytest

from kpi.fields import Field
from kpi.model import BarModel
from kpi.options import (
    SettingsError,
    TextSettings,
    VisualSettings,
    apply_text_settings,
    parse_visual_settings,
)

pytestmark = pytest.mark.unit


def _model() -> BarModel:
    return BarModel(
        value=Field(value=45, format="0", display_name="Actual"),
        target=Field(value=60, format="0", display_name="Goal"),
        max=Field(value=120, format="0", display_name="Max"),
    )


def test_parse_visual_settings_defaults_when_objects_missing() -> None:
    """No host objects means the base settings are returned."""

    assert parse_visual_settings(None) == VisualSettings()
    base = VisualSettings(text=TextSettings(font_size=20))
    assert parse_visual_settings({}, base=base) is base


def test_parse_visual_settings_reads_host_keys() -> None:
    """CamelCase host properties override the matching fields only."""

    settings = parse_visual_settings(
        {
            "textSettings": {"fontSize": 14, "repPositiveGapAsNegativeNumber": True, "unknown": 1},
            "colorSettings": {"lessThanColor": "#FF0000"},
            "targetLineSettings": {"lineStyle": "solid", "strokeWidth": 3},
            "outerBarSettings": {"outlineColor": None},
            "somethingElse": {"x": 1},
        }
    )

    assert settings.text.font_size == 14
    assert settings.text.rep_positive_gap_as_negative_number is True
    assert settings.text.show_value_text is True
    assert settings.colors.less_than_color == "#FF0000"
    assert settings.colors.greater_than_color == VisualSettings().colors.greater_than_color
    assert settings.target_line.line_style == "solid"
    assert settings.target_line.stroke_width == 3
    assert settings.outer_bar == VisualSettings().outer_bar


@pytest.mark.parametrize(
    "objects",
    [
        {"textSettings": {"showValueText": "yes"}},
        {"textSettings": {"fontSize": "12"}},
        {"textSettings": {"displayUnits": True}},
        {"colorSettings": {"equalToColor": 5}},
        {"targetLineSettings": {"lineStyle": "dotted"}},
        {"textSettings": ["fontSize"]},
    ],
)
def test_parse_visual_settings_rejects_invalid_values(objects) -> None:
    """Wrongly typed properties raise SettingsError."""

    with pytest.raises(SettingsError):
        parse_visual_settings(objects)


def test_apply_text_settings_uses_default_units() -> None:
    """Without overrides every primary field uses the default units."""

    model = apply_text_settings(_model(), TextSettings(display_units=1000))

    assert model.value.display_units == 1000
    assert model.target.display_units == 1000
    assert model.max.display_units == 1000


def test_apply_text_settings_prefers_value_and_max_overrides() -> None:
    """Value and max overrides win; the target always uses the default."""

    text = TextSettings(display_units=1000, display_units_for_value=1_000_000, display_units_for_max=1_000_000_000)
    model = apply_text_settings(_model(), text)

    assert model.value.display_units == 1_000_000
    assert model.target.display_units == 1000
    assert model.max.display_units == 1_000_000_000
    assert model.value.value == 45
