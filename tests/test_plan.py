"""Tests for plan.generate_plan and its aggregation helpers."""

from __future__ import annotations

from datetime import date

import pytest

from cyclenotes.catalog import find_mood
from cyclenotes.models import make_entry, make_symptom
from cyclenotes.plan import EMPTY_PLAN, TALKING_POINTS, generate_plan, top_moods, top_symptoms


def _entry(day: date, symptoms=(), moods=(), journal=""):
    return make_entry(
        day,
        moods=[find_mood(m) for m in moods],
        symptoms=[make_symptom(n, r) for n, r in symptoms],
        journal=journal,
    )


@pytest.fixture()
def pelvic_entries():
    return [
        _entry(date(2025, 1, 5), symptoms=[("Pelvic pain", 6)]),
        _entry(date(2025, 1, 7), symptoms=[("Pelvic pain", 8)]),
    ]


# ---- empty state ----


def test_empty_entries_returns_placeholder():
    assert generate_plan([], "", "") == EMPTY_PLAN
    assert EMPTY_PLAN == "No logs yet. Add a few entries first so I can pull patterns for your next visit."


def test_empty_entries_ignores_notes():
    assert generate_plan([], "my notes", "chart") == EMPTY_PLAN


# ---- header ----


def test_header_window_and_count(pelvic_entries):
    plan = generate_plan(pelvic_entries, "", "")
    assert plan.startswith("NEXT VISIT PLAN\nLog window: Jan 5, 2025 – Jan 7, 2025\nEntries: 2\n\n")


def test_window_uses_chronological_order_not_insertion_order():
    entries = [
        _entry(date(2025, 3, 1), journal="newest"),
        _entry(date(2025, 1, 20), journal="oldest"),
        _entry(date(2025, 2, 10), journal="middle"),
    ]
    plan = generate_plan(entries)
    assert "Log window: Jan 20, 2025 – Mar 1, 2025\n" in plan


# ---- symptoms ----


def test_symptom_line_format(pelvic_entries):
    plan = generate_plan(pelvic_entries, "", "")
    assert "• Top symptoms:\n  - Pelvic pain (2 days), avg 7.0/10, max 8/10\n" in plan


def test_no_symptoms_placeholder():
    plan = generate_plan([_entry(date(2025, 1, 1), journal="just a note")])
    assert "• Symptoms: (none logged)\n" in plan
    assert "Top symptoms" not in plan


def test_top_symptoms_sorted_by_count_and_capped():
    entries = []
    # symptom "S{i}" logged i times, 1..8
    for i in range(1, 9):
        for day in range(i):
            entries.append(_entry(date(2025, 1, day + 1), symptoms=[(f"S{i}", 5)]))
    top = top_symptoms(entries)
    assert len(top) == 6
    counts = [s.count for s in top]
    assert counts == sorted(counts, reverse=True)
    assert [s.name for s in top] == ["S8", "S7", "S6", "S5", "S4", "S3"]


def test_symptom_seen_once_never_outranks_seen_twice():
    entries = [
        _entry(date(2025, 1, 1), symptoms=[("Acne", 3)]),
        _entry(date(2025, 1, 2), symptoms=[("Bloating", 4)]),
        _entry(date(2025, 1, 3), symptoms=[("Bloating", 6)]),
    ]
    top = top_symptoms(entries)
    assert top[0].name == "Bloating"
    assert top[0].count == 2


def test_symptom_stats_avg_and_max():
    entries = [
        _entry(date(2025, 1, 1), symptoms=[("Nausea", 2), ("Fatigue", 9)]),
        _entry(date(2025, 1, 2), symptoms=[("Nausea", 3)]),
        _entry(date(2025, 1, 3), symptoms=[("Nausea", 5)]),
    ]
    nausea = top_symptoms(entries)[0]
    assert nausea.name == "Nausea"
    assert nausea.count == 3
    assert nausea.avg == pytest.approx(10 / 3)
    assert nausea.max == 5
    assert "  - Nausea (3 days), avg 3.3/10, max 5/10\n" in generate_plan(entries)


def test_symptom_grouping_is_case_sensitive():
    entries = [
        _entry(date(2025, 1, 1), symptoms=[("Bloating", 4)]),
        _entry(date(2025, 1, 2), symptoms=[("bloating", 6)]),
    ]
    assert sorted(s.name for s in top_symptoms(entries)) == ["Bloating", "bloating"]


# ---- moods ----


def test_common_moods_section():
    entries = [
        _entry(date(2025, 1, 1), moods=["Tired", "Calm"], journal="x"),
        _entry(date(2025, 1, 2), moods=["Tired"], journal="y"),
    ]
    plan = generate_plan(entries)
    assert "\n• Common moods:\n  - Tired (2 days)\n  - Calm (1 days)\n\n" in plan


def test_no_moods_placeholder():
    plan = generate_plan([_entry(date(2025, 1, 1), symptoms=[("Acne", 2)])])
    assert "\n• Moods: (none selected)\n\n3) Optional" in plan


def test_top_moods_capped_at_five_and_sorted():
    labels = ["Calm", "Tired", "Sad", "Focused", "Foggy", "Heavy", "Hopeful"]
    entries = []
    for i, label in enumerate(labels):
        for _ in range(i + 1):
            entries.append(_entry(date(2025, 1, 1), moods=[label], journal="n"))
    top = top_moods(entries)
    assert len(top) == 5
    assert [c for _, c in top] == [7, 6, 5, 4, 3]
    assert top[0] == ("Hopeful", 7)


# ---- notes ----


def test_user_and_chart_notes_are_trimmed(pelvic_entries):
    plan = generate_plan(pelvic_entries, "  \n pain after meals \n", "\tLabs normal  ")
    assert "1) What I want to discuss (my words)\n• pain after meals\n\n" in plan
    assert "3) Optional: pasted chart/clinician notes\n• Labs normal\n\n" in plan


@pytest.mark.parametrize("blank", ["", "   ", "\n\t \n"])
def test_whitespace_notes_use_placeholders(pelvic_entries, blank):
    plan = generate_plan(pelvic_entries, blank, blank)
    assert "• (Add your notes below)\n\n" in plan
    assert "• (Nothing pasted)\n\n" in plan
    assert plan == generate_plan(pelvic_entries, "", "")


# ---- fixed sections ----


def test_fixed_sections_in_order(pelvic_entries):
    plan = generate_plan(pelvic_entries)
    headings = [
        "NEXT VISIT PLAN",
        "1) What I want to discuss (my words)",
        "2) Patterns from my logs",
        "3) Optional: pasted chart/clinician notes",
        "4) Suggested questions / talking points",
        "Notes:",
    ]
    positions = [plan.index(h) for h in headings]
    assert positions == sorted(positions)


def test_talking_points_and_disclaimers_verbatim(pelvic_entries):
    plan = generate_plan(pelvic_entries)
    assert len(TALKING_POINTS) == 5
    for q in TALKING_POINTS:
        assert f"• {q}\n" in plan
    assert plan.endswith(
        "\n\nNotes:\n"
        "• This tool does not diagnose. It organizes your notes + your logs to support evaluation.\n"
        "• Only paste chart text you feel comfortable sharing.\n"
    )


def test_full_plan_layout(pelvic_entries):
    expected = (
        "NEXT VISIT PLAN\n"
        "Log window: Jan 5, 2025 – Jan 7, 2025\n"
        "Entries: 2\n\n"
        "1) What I want to discuss (my words)\n"
        "• (Add your notes below)\n\n"
        "2) Patterns from my logs\n"
        "• Top symptoms:\n"
        "  - Pelvic pain (2 days), avg 7.0/10, max 8/10\n"
        "\n• Moods: (none selected)\n\n"
        "3) Optional: pasted chart/clinician notes\n"
        "• (Nothing pasted)\n\n"
        "4) Suggested questions / talking points\n"
        "• What diagnoses are you considering, and what criteria would confirm/deny them?\n"
        "• What tests or imaging are appropriate (and what would each one rule in/out)?\n"
        "• What are my treatment options now vs later (pain, cycle regulation, fertility goals)?\n"
        "• What red flags should prompt urgent care?\n"
        "• If symptoms persist, what is the stepwise plan and timeline for follow-up?\n\n"
        "Notes:\n"
        "• This tool does not diagnose. It organizes your notes + your logs to support evaluation.\n"
        "• Only paste chart text you feel comfortable sharing.\n"
    )
    assert generate_plan(pelvic_entries, "", "") == expected


def test_same_input_same_output(pelvic_entries):
    a = generate_plan(pelvic_entries, "notes", "chart")
    b = generate_plan(pelvic_entries, "notes", "chart")
    assert a == b
