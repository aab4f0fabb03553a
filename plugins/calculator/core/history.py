"""Bounded, newest-first record of evaluated expressions."""

from __future__ import annotations

from collections import deque
from dataclasses import asdict, dataclass
from typing import Iterator

DEFAULT_HISTORY_CAPACITY = 8


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """One evaluated expression and its rendered result."""

    expression: str
    result: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


class HistoryLedger:
    """Fixed-capacity history; recording past capacity drops the oldest entry."""

    def __init__(self, capacity: int = DEFAULT_HISTORY_CAPACITY) -> None:
        if int(capacity) < 1:
            raise ValueError("History capacity must be at least 1")
        self._entries: deque[HistoryEntry] = deque(maxlen=int(capacity))

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 0

    def record(self, entry: HistoryEntry) -> None:
        self._entries.appendleft(entry)

    def restore(self, entry: HistoryEntry | int) -> tuple[str, str]:
        """Return ``(expression, result)`` for an entry or a newest-first index."""

        if isinstance(entry, int):
            if entry < 0 or entry >= len(self._entries):
                raise IndexError(f"No history entry at index {entry}")
            entry = self._entries[entry]
        return entry.expression, entry.result

    def clear(self) -> None:
        self._entries.clear()

    def entries(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    def to_list(self) -> list[dict[str, str]]:
        return [entry.to_dict() for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(tuple(self._entries))


__all__ = ["DEFAULT_HISTORY_CAPACITY", "HistoryEntry", "HistoryLedger"]
