"""Configuration helpers for the compounding plugin."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .form import CompoundForm
from .simulator import DEFAULT_MAX_DAYS, DEFAULT_ROW_CAP


@dataclass(frozen=True)
class CompoundSettings:
    row_cap: int
    max_days: int

    def new_form(self) -> CompoundForm:
        return CompoundForm(row_cap=self.row_cap, max_days=self.max_days)

    def to_dict(self) -> dict[str, int]:
        return {"row_cap": self.row_cap, "max_days": self.max_days}


def load_settings(raw: Mapping[str, Any] | None) -> CompoundSettings:
    raw = raw or {}
    try:
        row_cap = int(float(raw.get("row_cap", DEFAULT_ROW_CAP)))
    except (TypeError, ValueError):
        row_cap = DEFAULT_ROW_CAP
    try:
        max_days = int(float(raw.get("max_days", DEFAULT_MAX_DAYS)))
    except (TypeError, ValueError):
        max_days = DEFAULT_MAX_DAYS
    return CompoundSettings(row_cap=max(row_cap, 0), max_days=max(max_days, 1))


__all__ = ["CompoundSettings", "load_settings"]
