"""Exports for compound interest core."""

from .form import CompoundForm
from .settings import CompoundSettings, load_settings
from .simulator import (
    DEFAULT_MAX_DAYS,
    DEFAULT_ROW_CAP,
    EXTENDED_ROW_CAP,
    CompoundResult,
    CompoundRow,
    SimulationLimitError,
    simulate,
)

__all__ = [
    "CompoundForm",
    "CompoundSettings",
    "load_settings",
    "DEFAULT_MAX_DAYS",
    "DEFAULT_ROW_CAP",
    "EXTENDED_ROW_CAP",
    "CompoundResult",
    "CompoundRow",
    "SimulationLimitError",
    "simulate",
]
