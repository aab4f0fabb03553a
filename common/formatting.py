"""Number formatting helpers shared by the calculator and compounding plugins."""

from __future__ import annotations

import math
import re
from decimal import ROUND_FLOOR, Decimal, InvalidOperation
from typing import Any

GROUP_SEPARATOR = ","

_DIGITS_ONLY = re.compile(r"[0-9]*")
_HALF = Decimal("0.5")


def round_half_up(value: float | int | Decimal) -> int:
    """Round to the nearest integer, halves toward positive infinity.

    ``2.5`` becomes ``3`` and ``-2.5`` becomes ``-2``.
    """

    if isinstance(value, int) and not isinstance(value, bool):
        return value
    try:
        number = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Cannot round {value!r}") from exc
    if not number.is_finite():
        raise ValueError(f"Cannot round non-finite value {value!r}")
    floor = number.to_integral_value(rounding=ROUND_FLOOR)
    return int(floor) + (1 if number - floor >= _HALF else 0)


def parse_grouped(text: str | None) -> str | None:
    """Strip thousands separators and return the raw digit string.

    Returns ``None`` when anything other than digits remains, so callers can
    keep their previous value. An empty string is a valid (blank) value.
    """

    if text is None:
        return None
    clean = str(text).replace(GROUP_SEPARATOR, "")
    if not _DIGITS_ONLY.fullmatch(clean):
        return None
    return clean


def _coerce_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    if isinstance(value, str):
        raw = value.replace(GROUP_SEPARATOR, "").strip()
        if not raw:
            return None
        try:
            return float(raw)
        except ValueError:
            return None
    return None


def format_grouped(value: Any) -> str:
    """Render *value* rounded to an integer with grouped thousands.

    Non-numeric and non-finite input renders as an empty string.
    """

    if isinstance(value, int) and not isinstance(value, bool):
        return f"{value:,}"
    number = _coerce_number(value)
    if number is None or not math.isfinite(number):
        return ""
    return f"{round_half_up(number):,}"


class GroupedField:
    """Numeric text field that only ever holds digits.

    Rejected input leaves the previously accepted value in place.
    """

    def __init__(self, initial: str = "") -> None:
        parsed = parse_grouped(initial)
        self._raw = parsed if parsed is not None else ""

    @property
    def raw(self) -> str:
        return self._raw

    @property
    def display(self) -> str:
        return format_grouped(self._raw)

    def update(self, text: str | None) -> bool:
        parsed = parse_grouped(text)
        if parsed is None:
            return False
        self._raw = parsed
        return True

    def as_int(self) -> int:
        return int(self._raw) if self._raw else 0


__all__ = [
    "GROUP_SEPARATOR",
    "GroupedField",
    "format_grouped",
    "parse_grouped",
    "round_half_up",
]
