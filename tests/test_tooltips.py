"""Unit tests for tooltip row assembly."""

from __future__ import annotations

import pytest

from kpi.extraction import extract_bar_model
from kpi.options import TextSettings, apply_text_settings
from kpi.tooltips import TooltipItem, assemble_tooltip

pytestmark = pytest.mark.unit


@pytest.fixture
def model(column):
    """Return the Actual/Goal model (45 of 60, synthesized max) with a tooltip field."""

    result = extract_bar_model(
        [
            column("Actual", value=True),
            column("Goal", target=True),
            column("Region Sales", fmt="#,0", tooltips=True),
        ],
        [45, 60, 12345.6],
        default_display_units=1000,
    )
    assert result.model is not None
    return result.model


def test_tooltip_rows_in_fixed_order_with_gap_percentages(model, formatting) -> None:
    """Rows: value, target, max, gaps (with percentages), then tooltip fields."""

    items = assemble_tooltip(model, TextSettings(show_percentages_on_gaps=True), formatting=formatting)

    assert items == (
        TooltipItem("Actual", "45"),
        TooltipItem("Goal", "60"),
        TooltipItem("(Goal * 2)", "120"),
        TooltipItem("Gap - Actual & Goal", "15(25.00%)"),
        TooltipItem("Gap - Actual & (Goal * 2)", "75(62.50%)"),
        TooltipItem("Region Sales", "12K"),
    )


def test_tooltip_negates_gaps_when_requested(model, formatting) -> None:
    """Positive gaps are shown as negative numbers; percentages use |gap|."""

    text = TextSettings(rep_positive_gap_as_negative_number=True, show_percentages_on_gaps=True)
    items = assemble_tooltip(model, text, formatting=formatting)

    assert items[3] == TooltipItem("Gap - Actual & Goal", "-15(25.00%)")
    assert items[4] == TooltipItem("Gap - Actual & (Goal * 2)", "-75(62.50%)")


def test_tooltip_keeps_empty_gap_rows_without_percentages(model, formatting) -> None:
    """Gap rows are emitted with empty values when percentages are off."""

    items = assemble_tooltip(model, TextSettings(show_percentages_on_gaps=False), formatting=formatting)

    assert len(items) == 6
    assert items[3] == TooltipItem("Gap - Actual & Goal", "")
    assert items[4] == TooltipItem("Gap - Actual & (Goal * 2)", "")


def test_tooltip_gaps_use_default_display_units(model, formatting) -> None:
    """Gap values are scaled with the default display units from settings."""

    text = TextSettings(display_units=1000, show_percentages_on_gaps=True)
    items = assemble_tooltip(apply_text_settings(model, text), text, formatting=formatting)

    assert items[0] == TooltipItem("Actual", "0K")
    assert items[3] == TooltipItem("Gap - Actual & Goal", "0K(25.00%)")


def test_tooltip_overshoot_produces_negative_gap(column, formatting) -> None:
    """A value above its target yields a negative gap and a positive share."""

    result = extract_bar_model(
        [column("Actual", value=True), column("Goal", target=True), column("Max", max=True)],
        [90, 60, 100],
    )
    items = assemble_tooltip(result.model, TextSettings(), formatting=formatting)

    assert items[3] == TooltipItem("Gap - Actual & Goal", "-30(50.00%)")
    assert items[4] == TooltipItem("Gap - Actual & Max", "10(10.00%)")


def test_tooltip_zero_target_reports_infinite_share(column, formatting) -> None:
    """A zero target is not guarded; the gap share renders as Infinity."""

    result = extract_bar_model(
        [column("Actual", value=True), column("Goal", target=True)],
        [5, 0],
    )
    items = assemble_tooltip(result.model, TextSettings(), formatting=formatting)

    assert items[3] == TooltipItem("Gap - Actual & Goal", "-5(Infinity)")
