"""Numeric coercion helpers shared by the KPI core.

Cells arrive from the host as loosely typed values. These helpers never raise:
non-numeric input becomes NaN and division follows IEEE semantics so that
degenerate inputs propagate to the renderer instead of failing the cycle.
"""

from __future__ import annotations

import math
from decimal import Decimal
from numbers import Real


def coerce_number(raw: object) -> float:
    """Coerce a raw cell value into a float.

    Args:
        raw: Cell value as supplied by the host (number, string, None, ...).

    Returns:
        The parsed float, or NaN when the value is not numeric.

    Notes:
        - Booleans are not numbers here and coerce to NaN.
        - Strings are trimmed; empty strings and `_`-separated digits are NaN.
        - Only the spelling `Infinity` (optionally signed) parses as infinite;
          `inf` and other float() spellings are NaN. Overflowing
          exponents such as `1e400` are infinite.
    """

    if raw is None or isinstance(raw, bool):
        return math.nan
    if isinstance(raw, (Real, Decimal)):
        return float(raw)
    text = str(raw).strip()
    if not text or "_" in text:
        return math.nan
    try:
        number = float(text)
    except ValueError:
        return math.nan
    spelled = text.lstrip("+-")
    if spelled.casefold() in {"inf", "infinity"} and spelled != "Infinity":
        return math.nan
    return number


def divide(numerator: float, denominator: float) -> float:
    """Divide two floats without raising on a zero denominator.

    Args:
        numerator: Dividend.
        denominator: Divisor.

    Returns:
        `numerator / denominator`; for a zero divisor NaN when the dividend is
        zero or NaN, otherwise a signed infinity.
    """

    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def number_to_string(value: float) -> str:
    """Render a number the way status messages and raw labels show it.

    Uses the shortest round-trip digits with ECMAScript `Number#toString`
    notation: plain digits for magnitudes in `[1e-6, 1e21)`, otherwise
    `d.ddde+N` / `d.ddde-N`. Integral values drop the fractional part
    (`60.0` -> `60`) and non-finite values read `NaN`, `Infinity` or
    `-Infinity`.
    """

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(float(value)))).normalize().as_tuple()
    digits = "".join(str(digit) for digit in digit_tuple)
    # Position of the decimal point relative to the first significant digit.
    point = exponent + len(digits)

    if len(digits) <= point <= 21:
        body = digits + "0" * (point - len(digits))
    elif 0 < point <= 21:
        body = f"{digits[:point]}.{digits[point:]}"
    elif -6 < point <= 0:
        body = "0." + "0" * -point + digits
    else:
        mantissa = digits[0] + (f".{digits[1:]}" if len(digits) > 1 else "")
        power = point - 1
        body = f"{mantissa}e{'+' if power >= 0 else '-'}{abs(power)}"
    return sign + body
