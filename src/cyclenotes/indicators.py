"""Match logged symptom names against the fixed indicator checklists."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .catalog import CHECKLISTS
from .models import LogEntry


def _logged_names(entries: Iterable[LogEntry]) -> set[str]:
    return {s.name.lower() for e in entries for s in e.symptoms}


def matched_indicators(indicators: Iterable[str], entries: Iterable[LogEntry]) -> set[str]:
    """
    Indicators (original casing) whose name was logged at least once as a
    symptom, compared case-insensitively. No entries -> empty set.
    """
    logged = _logged_names(entries)
    return {i for i in indicators if i.lower() in logged}


def count_indicators_matched(indicators: Iterable[str], entries: Iterable[LogEntry]) -> int:
    return len(matched_indicators(indicators, entries))


@dataclass(frozen=True)
class ChecklistResult:
    title: str
    indicators: tuple[str, ...]
    matched: frozenset[str]

    @property
    def matched_count(self) -> int:
        return len(self.matched)

    @property
    def total(self) -> int:
        return len(self.indicators)


def checklist_summary(entries: Sequence[LogEntry], titles: Iterable[str] | None = None) -> list[ChecklistResult]:
    """
    One result per checklist, in CHECKLISTS order. `titles` restricts the
    output to those checklist titles; unknown titles raise KeyError.
    """
    if titles is None:
        selected = list(CHECKLISTS)
    else:
        wanted = set(titles)
        unknown = wanted - set(CHECKLISTS)
        if unknown:
            raise KeyError(f"unknown checklist(s): {', '.join(sorted(unknown))}")
        selected = [t for t in CHECKLISTS if t in wanted]

    out: list[ChecklistResult] = []
    for title in selected:
        indicators = CHECKLISTS[title]
        out.append(
            ChecklistResult(
                title=title,
                indicators=tuple(indicators),
                matched=frozenset(matched_indicators(indicators, entries)),
            )
        )
    return out
