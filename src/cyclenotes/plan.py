"""Next-visit plan: aggregate the log history into a copyable text brief."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .dateparse import fmt_day
from .models import LogEntry

EMPTY_PLAN = "No logs yet. Add a few entries first so I can pull patterns for your next visit."

TOP_MOODS = 5
TOP_SYMPTOMS = 6

TALKING_POINTS = (
    "What diagnoses are you considering, and what criteria would confirm/deny them?",
    "What tests or imaging are appropriate (and what would each one rule in/out)?",
    "What are my treatment options now vs later (pain, cycle regulation, fertility goals)?",
    "What red flags should prompt urgent care?",
    "If symptoms persist, what is the stepwise plan and timeline for follow-up?",
)

PLAN_NOTES = (
    "This tool does not diagnose. It organizes your notes + your logs to support evaluation.",
    "Only paste chart text you feel comfortable sharing.",
)


@dataclass(frozen=True)
class SymptomStats:
    name: str
    count: int
    avg: float
    max: int


def top_moods(entries: Sequence[LogEntry], limit: int = TOP_MOODS) -> list[tuple[str, int]]:
    counts: dict[str, int] = {}
    for e in entries:
        for m in e.moods:
            counts[m.label] = counts.get(m.label, 0) + 1
    # sorted() is stable: equal counts keep first-seen order
    return sorted(counts.items(), key=lambda x: -x[1])[:limit]


def top_symptoms(entries: Sequence[LogEntry], limit: int = TOP_SYMPTOMS) -> list[SymptomStats]:
    by_name: dict[str, list[int]] = {}
    for e in entries:
        for s in e.symptoms:
            by_name.setdefault(s.name, []).append(s.rating)

    stats = [
        SymptomStats(name=name, count=len(vals), avg=sum(vals) / len(vals), max=max(vals))
        for name, vals in by_name.items()
    ]
    return sorted(stats, key=lambda st: -st.count)[:limit]


def generate_plan(entries: Sequence[LogEntry], user_notes: str = "", chart_notes: str = "") -> str:
    if not entries:
        return EMPTY_PLAN

    ordered = sorted(entries, key=lambda e: e.date)
    start = fmt_day(ordered[0].date)
    end = fmt_day(ordered[-1].date)

    moods = top_moods(entries)
    symptoms = top_symptoms(entries)

    user_text = (user_notes or "").strip()
    chart_text = (chart_notes or "").strip()

    out: list[str] = []
    out.append("NEXT VISIT PLAN\n")
    out.append(f"Log window: {start} – {end}\n")
    out.append(f"Entries: {len(entries)}\n\n")

    out.append("1) What I want to discuss (my words)\n")
    out.append(f"• {user_text}\n\n" if user_text else "• (Add your notes below)\n\n")

    out.append("2) Patterns from my logs\n")
    if not symptoms:
        out.append("• Symptoms: (none logged)\n")
    else:
        out.append("• Top symptoms:\n")
        for st in symptoms:
            out.append(f"  - {st.name} ({st.count} days), avg {st.avg:.1f}/10, max {st.max}/10\n")

    if not moods:
        out.append("\n• Moods: (none selected)\n\n")
    else:
        out.append("\n• Common moods:\n")
        for label, c in moods:
            out.append(f"  - {label} ({c} days)\n")
        out.append("\n")

    out.append("3) Optional: pasted chart/clinician notes\n")
    out.append(f"• {chart_text}\n\n" if chart_text else "• (Nothing pasted)\n\n")

    out.append("4) Suggested questions / talking points\n")
    for q in TALKING_POINTS:
        out.append(f"• {q}\n")
    out.append("\n")

    out.append("Notes:\n")
    for n in PLAN_NOTES:
        out.append(f"• {n}\n")

    return "".join(out)
