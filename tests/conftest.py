"""Pytest fixtures shared across the data bar test suite."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import pytest

from kpi.extraction import ColumnRoles, DataColumn
from visual.formatting import LocaleFormattingService, NumberSeparators


@pytest.fixture
def column() -> Callable[..., DataColumn]:
    """Return a factory building DataColumn entries from keyword role flags."""

    def build(display_name: str, *, fmt: str | None = "0", **roles: bool) -> DataColumn:
        return DataColumn(roles=ColumnRoles(**roles), format=fmt, display_name=display_name)

    return build


@pytest.fixture
def formatting() -> LocaleFormattingService:
    """Return a formatting service with fixed en-US separators."""

    return LocaleFormattingService(NumberSeparators(decimal=".", thousands=",", grouping=3))


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests that never touch Django settings or templates.
    - `integration`: tests touching Django settings, templates, locale formats
      or management commands.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
