"""Visual settings for the data bar.

These dataclasses mirror the host's property pane. `parse_visual_settings`
reads the host `objects` mapping (camelCase keys) over a base so that unset
properties keep their defaults.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any, Final, Literal

from .model import BarModel
from .status import StatusColors

LineStyle = Literal["solid", "dashed"]

LINE_STYLES: Final[frozenset[str]] = frozenset({"solid", "dashed"})


class SettingsError(ValueError):
    """Raised when a host settings object carries an invalid value."""

    def __init__(self, *, section: str, key: str, value: object, expected: str) -> None:
        """Initialize the error.

        Args:
            section: Settings section name (host spelling).
            key: Property name (host spelling).
            value: Offending value.
            expected: Human-readable description of the expected value.
        """

        super().__init__(f"Invalid value for {section}.{key}: {value!r} (expected {expected}).")
        self.section = section
        self.key = key
        self.value = value


@dataclass(frozen=True, slots=True)
class TextSettings:
    """Label and tooltip text options.

    Attributes:
        display_units: Default display units (value, target, gaps, tooltips).
        display_units_for_value: Override for the value; 0 falls back to the default.
        display_units_for_max: Override for the max; 0 falls back to the default.
        show_value_text: Whether the value label is drawn.
        show_max_text: Whether the max label is drawn.
        font_size: Label font size in pixels.
        rep_positive_gap_as_negative_number: Negate gaps in the tooltip.
        show_percentages_on_gaps: Show gap rows (with percentages) in the tooltip.
    """

    display_units: float = 0
    display_units_for_value: float = 0
    display_units_for_max: float = 0
    show_value_text: bool = True
    show_max_text: bool = True
    font_size: float = 12
    rep_positive_gap_as_negative_number: bool = False
    show_percentages_on_gaps: bool = True


@dataclass(frozen=True, slots=True)
class OuterBarSettings:
    """Styling of the outer (max) bar."""

    fill: str = "#FFFFFF"
    outline_color: str = "#A6A6A6"


@dataclass(frozen=True, slots=True)
class TargetLineSettings:
    """Styling of the target marker."""

    color: str = "#000000"
    stroke_width: float = 2
    line_style: LineStyle = "dashed"


@dataclass(frozen=True, slots=True)
class VisualSettings:
    """All settings sections for the data bar."""

    text: TextSettings = field(default_factory=TextSettings)
    colors: StatusColors = field(
        default_factory=lambda: StatusColors(
            equal_to_color="#F2C80F",
            greater_than_color="#1AAB40",
            less_than_color="#FD625E",
        )
    )
    outer_bar: OuterBarSettings = field(default_factory=OuterBarSettings)
    target_line: TargetLineSettings = field(default_factory=TargetLineSettings)


# host section -> (VisualSettings attribute, {host key: dataclass attribute})
_SECTIONS: Final[dict[str, tuple[str, dict[str, str]]]] = {
    "textSettings": (
        "text",
        {
            "displayUnits": "display_units",
            "displayUnitsForValue": "display_units_for_value",
            "displayUnitsForMax": "display_units_for_max",
            "showValueText": "show_value_text",
            "showMaxText": "show_max_text",
            "fontSize": "font_size",
            "repPositiveGapAsNegativeNumber": "rep_positive_gap_as_negative_number",
            "showPercentagesOnGaps": "show_percentages_on_gaps",
        },
    ),
    "colorSettings": (
        "colors",
        {
            "equalToColor": "equal_to_color",
            "greaterThanColor": "greater_than_color",
            "lessThanColor": "less_than_color",
        },
    ),
    "outerBarSettings": (
        "outer_bar",
        {"fill": "fill", "outlineColor": "outline_color"},
    ),
    "targetLineSettings": (
        "target_line",
        {"color": "color", "strokeWidth": "stroke_width", "lineStyle": "line_style"},
    ),
}


def parse_visual_settings(
    objects: Mapping[str, Any] | None,
    *,
    base: VisualSettings | None = None,
) -> VisualSettings:
    """Read host settings objects over a base configuration.

    Args:
        objects: Host mapping like `{"textSettings": {"fontSize": 14}}`.
        base: Settings used for properties the host leaves unset.

    Returns:
        Parsed VisualSettings.

    Raises:
        SettingsError: When a property has the wrong type or an unknown
            line style.
    """

    settings = base or VisualSettings()
    if not objects:
        return settings

    for section_name, (attribute, keys) in _SECTIONS.items():
        section = objects.get(section_name)
        if not section:
            continue
        if not isinstance(section, Mapping):
            raise SettingsError(section=section_name, key="*", value=section, expected="an object")
        current = getattr(settings, attribute)
        types = {f.name: f.type for f in fields(current)}
        updates: dict[str, Any] = {}
        for host_key, name in keys.items():
            if host_key not in section or section[host_key] is None:
                continue
            updates[name] = _coerce_property(
                section_name, host_key, section[host_key], annotation=str(types[name])
            )
        if updates:
            settings = replace(settings, **{attribute: replace(current, **updates)})
    return settings


def _coerce_property(section: str, key: str, value: object, *, annotation: str) -> Any:
    """Validate a single host property against its dataclass annotation."""

    if annotation == "bool":
        if not isinstance(value, bool):
            raise SettingsError(section=section, key=key, value=value, expected="a boolean")
        return value
    if annotation == "float":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise SettingsError(section=section, key=key, value=value, expected="a number")
        return float(value)
    if annotation == "LineStyle":
        if value not in LINE_STYLES:
            raise SettingsError(section=section, key=key, value=value, expected="'solid' or 'dashed'")
        return value
    if not isinstance(value, str):
        raise SettingsError(section=section, key=key, value=value, expected="a string")
    return value


def apply_text_settings(model: BarModel, text: TextSettings) -> BarModel:
    """Overlay display units from the text settings onto a model.

    The value uses its own override when set, the max uses its override when
    non-zero, and the target always uses the default display units.
    """

    return model.with_display_units(
        value=text.display_units_for_value or text.display_units,
        target=text.display_units,
        max=text.display_units_for_max if text.display_units_for_max != 0 else text.display_units,
    )
