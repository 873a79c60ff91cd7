from __future__ import annotations

import logging
from typing import Any, Iterable

from .indicators import matched_indicators
from .models import LogEntry
from .plan import generate_plan

logger = logging.getLogger(__name__)


class EntryStore:
    """
    In-memory entry collection, newest first.

    Hosts hold one instance and pass it to whatever needs it. Reads go
    through snapshot() so callers never see later appends.
    """

    def __init__(self, entries: Iterable[LogEntry] = (), rejected: Iterable[Any] = ()):
        self._entries: list[LogEntry] = list(entries)
        # raw payload rows that failed to parse; written back untouched on save
        self._rejected: list[Any] = list(rejected)

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, entry: LogEntry) -> None:
        self._entries.insert(0, entry)
        logger.debug("entry %s added for %s (%d total)", entry.id, entry.date, len(self._entries))

    def snapshot(self) -> tuple[LogEntry, ...]:
        return tuple(self._entries)

    def matched_indicators(self, indicators: Iterable[str]) -> set[str]:
        return matched_indicators(indicators, self.snapshot())

    def generate_plan(self, user_notes: str = "", chart_notes: str = "") -> str:
        return generate_plan(self.snapshot(), user_notes, chart_notes)

    # -------------------------
    # Payload (host persistence)
    # -------------------------

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> EntryStore:
        rows = data.get("entries", [])
        if not isinstance(rows, list):
            logger.warning("ignoring non-list 'entries' payload (%s)", type(rows).__name__)
            rows = []

        entries: list[LogEntry] = []
        rejected: list[Any] = []
        for i, row in enumerate(rows):
            if not isinstance(row, dict):
                logger.warning("skipping entry #%d: not an object", i)
                rejected.append(row)
                continue
            try:
                entries.append(LogEntry.from_dict(row))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("skipping malformed entry #%d: %s", i, e)
                rejected.append(row)
        return cls(entries, rejected)

    @property
    def rejected(self) -> tuple[Any, ...]:
        return tuple(self._rejected)

    def to_payload(self) -> dict[str, Any]:
        return {"entries": [e.to_dict() for e in self._entries] + list(self._rejected)}
