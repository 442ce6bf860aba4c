"""Classify the value against its target and pick the bar color."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BarStatus(Enum):
    """Relationship between the value and the target."""

    equal = "equal"
    greater = "greater"
    less = "less"


@dataclass(frozen=True, slots=True)
class StatusColors:
    """Colors used for each status."""

    equal_to_color: str
    greater_than_color: str
    less_than_color: str

    def for_status(self, status: BarStatus) -> str:
        if status is BarStatus.greater:
            return self.greater_than_color
        if status is BarStatus.less:
            return self.less_than_color
        return self.equal_to_color


def classify_status(value: float, target: float) -> BarStatus:
    """Return greater/less when the comparison holds, otherwise equal.

    NaN on either side compares false both ways and therefore reads as equal.
    """

    if value > target:
        return BarStatus.greater
    if value < target:
        return BarStatus.less
    return BarStatus.equal


def resolve_status_color(value: float, target: float, colors: StatusColors) -> str:
    """Resolve the bar color for a value/target pair."""

    return colors.for_status(classify_status(value, target))
