"""Daily compounding of a principal with a capped per-day ledger."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from common.formatting import format_grouped, round_half_up

DEFAULT_ROW_CAP = 365
EXTENDED_ROW_CAP = 1000
DEFAULT_MAX_DAYS = 36500


class SimulationLimitError(ValueError):
    """Raised when the requested number of days exceeds the iteration guard."""


@dataclass(frozen=True, slots=True)
class CompoundRow:
    day: int
    daily_profit: int
    running_total: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "daily_profit": self.daily_profit,
            "running_total": self.running_total,
            "daily_profit_display": format_grouped(self.daily_profit),
            "running_total_display": format_grouped(self.running_total),
        }


@dataclass(frozen=True, slots=True)
class CompoundResult:
    final_total: int
    total_interest: int
    rows: tuple[CompoundRow, ...] = field(default_factory=tuple)
    days_simulated: int = 0

    @classmethod
    def zero(cls) -> "CompoundResult":
        return cls(final_total=0, total_interest=0, rows=())

    @property
    def truncated(self) -> bool:
        return self.days_simulated > len(self.rows)

    def to_dict(self) -> dict[str, Any]:
        return {
            "final_total": self.final_total,
            "total_interest": self.total_interest,
            "final_total_display": format_grouped(self.final_total),
            "total_interest_display": format_grouped(self.total_interest),
            "days_simulated": self.days_simulated,
            "truncated": self.truncated,
            "rows": [row.to_dict() for row in self.rows],
        }


def _parse_rate(rate: float | int | str | None) -> float | None:
    if rate is None or isinstance(rate, bool):
        return None
    if isinstance(rate, str):
        if not rate.strip():
            return None
        try:
            value = float(rate.replace(",", ""))
        except ValueError:
            return None
    else:
        value = float(rate)
    return value if math.isfinite(value) else None


def simulate(
    principal: int | float,
    days: int,
    daily_rate_percent: float | int | str | None,
    *,
    row_cap: int = DEFAULT_ROW_CAP,
    max_days: int = DEFAULT_MAX_DAYS,
) -> CompoundResult:
    """Grow *principal* by *daily_rate_percent* per day for *days* days.

    Non-positive principal or days, or a blank rate, give the zero result.
    Only the first *row_cap* days are kept as rows; every day still feeds
    the final total. Running totals stay unrounded between days.
    """

    if row_cap < 0:
        raise ValueError("row_cap must be zero or positive")
    if max_days < 1:
        raise ValueError("max_days must be at least 1")

    rate_percent = _parse_rate(daily_rate_percent)
    if principal <= 0 or days <= 0 or rate_percent is None:
        return CompoundResult.zero()
    if days > max_days:
        raise SimulationLimitError(f"days must be ≤ {max_days}")

    rate = rate_percent / 100
    try:
        running_total = float(principal)
    except OverflowError as exc:
        raise SimulationLimitError("Principal is too large") from exc
    rows: list[CompoundRow] = []
    for day in range(1, int(days) + 1):
        daily_profit = running_total * rate
        running_total += daily_profit
        if not math.isfinite(running_total):
            raise SimulationLimitError(f"Total overflows after {day} days")
        if day <= row_cap:
            rows.append(
                CompoundRow(
                    day=day,
                    daily_profit=round_half_up(daily_profit),
                    running_total=round_half_up(running_total),
                )
            )

    return CompoundResult(
        final_total=round_half_up(running_total),
        total_interest=round_half_up(running_total - principal),
        rows=tuple(rows),
        days_simulated=int(days),
    )


__all__ = [
    "DEFAULT_MAX_DAYS",
    "DEFAULT_ROW_CAP",
    "EXTENDED_ROW_CAP",
    "CompoundResult",
    "CompoundRow",
    "SimulationLimitError",
    "simulate",
]
