"""Configuration helpers for the calculator plugin."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Mapping

from .engine import MathEngine
from .history import DEFAULT_HISTORY_CAPACITY
from .normalizer import LOG_MODES
from .session import CalculatorSession
from .store import DEFAULT_MAX_SESSIONS, DEFAULT_SESSION_TTL


@dataclass(frozen=True)
class CalculatorSettings:
    history_capacity: int
    log_mode: str
    angle_unit: str
    precision: int
    session_ttl: timedelta
    max_sessions: int

    def engine(self) -> MathEngine:
        return MathEngine(angle_unit=self.angle_unit, precision=self.precision)  # type: ignore[arg-type]

    def new_session(self) -> CalculatorSession:
        return CalculatorSession(
            history_capacity=self.history_capacity,
            log_mode=self.log_mode,  # type: ignore[arg-type]
            engine=self.engine(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "history_capacity": self.history_capacity,
            "log_mode": self.log_mode,
            "angle_unit": self.angle_unit,
            "precision": self.precision,
            "session_ttl_minutes": int(self.session_ttl.total_seconds() // 60),
            "max_sessions": self.max_sessions,
        }


def _int_setting(raw: Mapping[str, Any], key: str, default: int, *, minimum: int, maximum: int | None = None) -> int:
    try:
        value = int(float(raw.get(key, default)))
    except (TypeError, ValueError):
        value = default
    value = max(value, minimum)
    if maximum is not None:
        value = min(value, maximum)
    return value


def load_settings(raw: Mapping[str, Any] | None) -> CalculatorSettings:
    """Build settings from the ``plugins.calculator`` config section.

    Malformed values fall back to defaults so a bad config never breaks startup.
    """

    raw = raw or {}
    log_mode = str(raw.get("log_mode", "faithful"))
    if log_mode not in LOG_MODES:
        log_mode = "faithful"
    angle_unit = str(raw.get("angle_unit", "radian"))
    if angle_unit not in {"radian", "degree"}:
        angle_unit = "radian"
    ttl_minutes = _int_setting(
        raw,
        "session_ttl_minutes",
        int(DEFAULT_SESSION_TTL.total_seconds() // 60),
        minimum=1,
    )
    return CalculatorSettings(
        history_capacity=_int_setting(raw, "history_capacity", DEFAULT_HISTORY_CAPACITY, minimum=1),
        log_mode=log_mode,
        angle_unit=angle_unit,
        precision=_int_setting(raw, "precision", 15, minimum=1, maximum=17),
        session_ttl=timedelta(minutes=ttl_minutes),
        max_sessions=_int_setting(raw, "max_sessions", DEFAULT_MAX_SESSIONS, minimum=1),
    )


__all__ = ["CalculatorSettings", "load_settings"]
