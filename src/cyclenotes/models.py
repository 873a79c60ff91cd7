"""Log entry models shared by the core, the store and the hosts."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable

RATING_MIN = 1
RATING_MAX = 10


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class SymptomRating:
    name: str
    rating: int
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("symptom name must not be blank")
        if not (RATING_MIN <= self.rating <= RATING_MAX):
            raise ValueError(f"rating must be {RATING_MIN}-{RATING_MAX} (got {self.rating!r})")


@dataclass(frozen=True)
class MoodTag:
    label: str
    position: float  # 0..1 along the spectrum
    major: str
    id: str = field(default_factory=_new_id)


@dataclass(frozen=True)
class LogEntry:
    date: date
    moods: tuple[MoodTag, ...] = ()
    symptoms: tuple[SymptomRating, ...] = ()
    journal: str = ""
    id: str = field(default_factory=_new_id)

    def is_saveable(self) -> bool:
        return bool(self.symptoms) or bool(self.journal.strip())

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "moods": [
                {"id": m.id, "label": m.label, "position": m.position, "major": m.major}
                for m in self.moods
            ],
            "symptoms": [{"id": s.id, "name": s.name, "rating": s.rating} for s in self.symptoms],
            "journal": self.journal,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> LogEntry:
        """
        Rebuild an entry from to_dict() output.
        Raises KeyError/ValueError/TypeError on malformed rows.
        """
        moods = [
            MoodTag(
                label=str(m["label"]),
                position=float(m.get("position", 0.0)),
                major=str(m.get("major", "")),
                id=str(m.get("id") or _new_id()),
            )
            for m in d.get("moods", [])
        ]
        symptoms = tuple(
            SymptomRating(name=str(s["name"]), rating=_stored_rating(s["rating"]), id=str(s.get("id") or _new_id()))
            for s in d.get("symptoms", [])
        )
        return cls(
            date=date.fromisoformat(str(d["date"])),
            moods=normalize_moods(moods),
            symptoms=symptoms,
            journal=str(d.get("journal", "")),
            id=str(d.get("id") or _new_id()),
        )


def _stored_rating(value: Any) -> int:
    # no truncation: 5.7 or "5" in a data file is a malformed row
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"rating must be a whole number (got {value!r})")
    return value


def make_symptom(name: str, rating: int) -> SymptomRating:
    """
    Build a rating the way the log form does:
    - name trimmed (blank -> ValueError)
    - rating clamped into 1..10
    """
    t = str(name or "").strip()
    if not t:
        raise ValueError("symptom name must not be blank")
    r = max(RATING_MIN, min(RATING_MAX, int(rating)))
    return SymptomRating(name=t, rating=r)


def normalize_moods(moods: Iterable[MoodTag]) -> tuple[MoodTag, ...]:
    # ordered set: one tag per label, sorted by label
    seen: dict[str, MoodTag] = {}
    for m in moods:
        seen.setdefault(m.label, m)
    return tuple(sorted(seen.values(), key=lambda m: m.label))


def make_entry(
    day: date,
    moods: Iterable[MoodTag] = (),
    symptoms: Iterable[SymptomRating] = (),
    journal: str = "",
) -> LogEntry:
    return LogEntry(
        date=day,
        moods=normalize_moods(moods),
        symptoms=tuple(symptoms),
        journal=journal,
    )
