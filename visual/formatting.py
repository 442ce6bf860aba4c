"""Locale-aware value formatting service.

Implements the `kpi.fields.FormattingService` contract on top of Django's
locale formats. Format strings follow the host's numeric pattern syntax:

- up to three `;`-separated sections (positive; negative; zero),
- `0` (required) and `#` (optional) digit placeholders,
- `,` inside the integer placeholders to enable digit grouping,
- `%` outside the placeholders to scale by 100,
- literals in quotes or escaped with a backslash.

Display units above 1 scale the value down and append a short suffix.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from functools import lru_cache
from typing import Final

from django.utils import numberformat
from django.utils.formats import get_format

DEFAULT_FORMAT: Final[str] = "#,0.##"

UNIT_SUFFIXES: Final[dict[float, str]] = {
    1_000: "K",
    1_000_000: "M",
    1_000_000_000: "bn",
    1_000_000_000_000: "T",
}

BEAUTIFIED_FORMATS: Final[dict[str, str]] = {
    "0.00 %;-0.00 %;0.00 %": "#,0.00%;-#,0.00%;#,0.00%",
    "0.0 %;-0.0 %;0.0 %": "#,0.0%;-#,0.0%;#,0.0%",
}

_GENERAL_FORMATS: Final[frozenset[str]] = frozenset({"", "g", "general"})
_PLACEHOLDERS: Final[str] = "0#"
_NUMERIC_CHARS: Final[str] = "0#,."
# Enough digits to quantize any finite float.
_DECIMAL_PRECISION: Final[int] = 400


@dataclass(frozen=True, slots=True)
class NumberSeparators:
    """Decimal/thousand separators and digit grouping for a locale."""

    decimal: str = "."
    thousands: str = ","
    grouping: int | Sequence[int] = 3

    @classmethod
    def from_locale(cls, lang: str | None = None) -> NumberSeparators:
        """Read separators from Django's locale formats.

        Args:
            lang: Language code; defaults to the active language.

        Returns:
            NumberSeparators for the language.
        """

        return cls(
            decimal=str(get_format("DECIMAL_SEPARATOR", lang)),
            thousands=str(get_format("THOUSAND_SEPARATOR", lang)),
            grouping=get_format("NUMBER_GROUPING", lang) or 3,
        )


@dataclass(frozen=True, slots=True)
class FormatSection:
    """One parsed section of a numeric format pattern.

    Attributes:
        prefix: Literal text before the digits.
        suffix: Literal text after the digits.
        min_decimals: Number of `0` placeholders after the decimal point.
        max_decimals: Number of `0` and `#` placeholders after the decimal point.
        grouping: Whether the integer part is grouped.
        percent: Whether the value is scaled by 100.
        digits: False for literal-only sections, which render `prefix` as is.
    """

    prefix: str
    suffix: str
    min_decimals: int
    max_decimals: int
    grouping: bool
    percent: bool
    digits: bool = True


@lru_cache(maxsize=256)
def parse_format(format_string: str | None) -> tuple[FormatSection, ...]:
    """Parse a format pattern into its sections.

    Args:
        format_string: Host pattern (e.g. `#,0.00`, `0 %;-0 %;0 %`), or None.

    Returns:
        One to three FormatSection entries. Empty sections fall back to the
        general number format; sections without placeholders are literal.
    """

    text = (format_string or "").strip()
    if text.casefold() in _GENERAL_FORMATS:
        text = DEFAULT_FORMAT

    sections = []
    for raw_section in _split_sections(text)[:3]:
        section = _parse_section(raw_section)
        if section is None:
            section = _parse_section(_tokenize(DEFAULT_FORMAT))
        sections.append(section)
    return tuple(sections)


class NumberFormatter:
    """Formatter bound to a pattern, a display unit and locale separators."""

    def __init__(
        self,
        sections: tuple[FormatSection, ...],
        *,
        display_units: float = 0,
        separators: NumberSeparators | None = None,
    ) -> None:
        self.sections = sections
        self.display_units = display_units
        self.separators = separators or NumberSeparators()

    def format(self, value: float) -> str:
        """Format a value.

        Args:
            value: Numeric value to render.

        Returns:
            Display text; non-finite values render as `NaN`, `Infinity` or
            `-Infinity`.
        """

        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"

        sign = ""
        if value < 0 and len(self.sections) >= 2:
            section = self.sections[1]
        elif value == 0 and len(self.sections) >= 3:
            section = self.sections[2]
        else:
            section = self.sections[0]
            if value < 0:
                sign = "-"
        if not section.digits:
            return section.prefix
        magnitude = abs(value)

        unit_suffix = ""
        if section.percent:
            magnitude *= 100
        elif self.display_units > 1 and self.display_units in UNIT_SUFFIXES:
            magnitude /= self.display_units
            unit_suffix = UNIT_SUFFIXES[self.display_units]

        quantum = Decimal(1).scaleb(-section.max_decimals)
        with localcontext() as context:
            context.prec = _DECIMAL_PRECISION
            rounded = Decimal(str(magnitude)).quantize(quantum, rounding=ROUND_HALF_UP)
        if rounded == 0:
            sign = ""

        digits = numberformat.format(
            rounded,
            self.separators.decimal,
            decimal_pos=section.max_decimals,
            grouping=self.separators.grouping if section.grouping else 0,
            thousand_sep=self.separators.thousands,
            force_grouping=section.grouping,
            use_l10n=False,
        )
        if section.max_decimals > section.min_decimals:
            digits = self._trim_optional_decimals(digits, keep=section.min_decimals)
        return f"{sign}{section.prefix}{digits}{unit_suffix}{section.suffix}"

    def _trim_optional_decimals(self, digits: str, *, keep: int) -> str:
        integer, sep, fraction = digits.rpartition(self.separators.decimal)
        if not sep:
            return digits
        fraction = fraction.rstrip("0")
        if len(fraction) < keep:
            fraction = fraction.ljust(keep, "0")
        if not fraction:
            return integer
        return f"{integer}{sep}{fraction}"


class LocaleFormattingService:
    """Formatting service using Django locale separators.

    Args:
        separators: Fixed separators; when omitted they are read from the
            active Django locale each time a formatter is created.
    """

    def __init__(self, separators: NumberSeparators | None = None) -> None:
        self._separators = separators

    def create(
        self,
        format_string: str | None,
        display_units: float = 0,
        *,
        allow_beautification: bool = False,
    ) -> NumberFormatter:
        """Return a formatter for a pattern and display-unit hint."""

        if allow_beautification and format_string in BEAUTIFIED_FORMATS:
            format_string = BEAUTIFIED_FORMATS[format_string]
        separators = self._separators or NumberSeparators.from_locale()
        return NumberFormatter(
            parse_format(format_string),
            display_units=display_units,
            separators=separators,
        )


def _tokenize(text: str) -> list[tuple[str, bool]]:
    """Split a pattern into `(char, is_literal)` pairs."""

    tokens: list[tuple[str, bool]] = []
    quote: str | None = None
    chars = iter(text)
    for char in chars:
        if quote is not None:
            if char == quote:
                quote = None
            else:
                tokens.append((char, True))
        elif char in "\"'":
            quote = char
        elif char == "\\":
            escaped = next(chars, "")
            if escaped:
                tokens.append((escaped, True))
        else:
            tokens.append((char, False))
    return tokens


def _split_sections(text: str) -> list[list[tuple[str, bool]]]:
    sections: list[list[tuple[str, bool]]] = [[]]
    for char, literal in _tokenize(text):
        if char == ";" and not literal:
            sections.append([])
        else:
            sections[-1].append((char, literal))
    return sections


def _parse_section(tokens: list[tuple[str, bool]]) -> FormatSection | None:
    start = next(
        (i for i, (char, literal) in enumerate(tokens) if not literal and char in _PLACEHOLDERS + "."),
        None,
    )
    if start is None:
        if not tokens:
            return None
        return FormatSection(
            prefix="".join(char for char, _ in tokens),
            suffix="",
            min_decimals=0,
            max_decimals=0,
            grouping=False,
            percent=False,
            digits=False,
        )
    end = start
    while end < len(tokens) and not tokens[end][1] and tokens[end][0] in _NUMERIC_CHARS:
        end += 1
    numeric = "".join(char for char, _ in tokens[start:end])
    if not any(char in _PLACEHOLDERS for char in numeric):
        return None

    integer, _, fraction = numeric.partition(".")
    outside = tokens[:start] + tokens[end:]
    return FormatSection(
        prefix="".join(char for char, _ in tokens[:start]),
        suffix="".join(char for char, _ in tokens[end:]),
        min_decimals=fraction.count("0"),
        max_decimals=fraction.count("0") + fraction.count("#"),
        grouping="," in integer.rstrip(","),
        percent=any(char == "%" and not literal for char, literal in outside),
    )
