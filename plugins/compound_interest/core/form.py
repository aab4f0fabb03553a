"""Input-field state for the compounding calculator."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from common.formatting import GroupedField
from common.logging import get_logger

from .simulator import DEFAULT_MAX_DAYS, DEFAULT_ROW_CAP, CompoundResult, SimulationLimitError, simulate

_RATE_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)?")

logger = get_logger(__name__)


@dataclass
class CompoundForm:
    """Principal, days and daily rate as typed by the user.

    Each setter rejects malformed text and keeps the previous value, so
    :meth:`result` always works from the last accepted input.
    """

    row_cap: int = DEFAULT_ROW_CAP
    max_days: int = DEFAULT_MAX_DAYS
    principal: GroupedField = field(default_factory=GroupedField)
    days: str = ""
    rate: str = ""

    def set_principal(self, text: str | None) -> bool:
        return self.principal.update(text)

    def set_days(self, text: str | None) -> bool:
        clean = GroupedField()
        if not clean.update(text) or clean.as_int() > self.max_days:
            return False
        self.days = clean.raw
        return True

    def set_rate(self, text: str | None) -> bool:
        if text is None:
            return False
        candidate = text.strip()
        if not _RATE_PATTERN.fullmatch(candidate):
            return False
        self.rate = candidate
        return True

    @property
    def principal_display(self) -> str:
        return self.principal.display

    def result(self) -> CompoundResult:
        days = int(self.days) if self.days else 0
        rate = self.rate if self.rate not in {"", "+", "-"} else ""
        try:
            return simulate(
                self.principal.as_int(),
                days,
                rate,
                row_cap=self.row_cap,
                max_days=self.max_days,
            )
        except SimulationLimitError as exc:
            logger.info("compound simulation rejected: %s", exc)
            return CompoundResult.zero()


__all__ = ["CompoundForm"]
