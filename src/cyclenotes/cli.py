from __future__ import annotations

import argparse
import logging
import stat
import sys
from pathlib import Path

from .catalog import CHECKLISTS, INDICATOR_DISCLAIMER, MOOD_OPTIONS
from .catalog import find_mood, mood_majors, rainbow_color
from .dateparse import fmt_day, parse_day
from .indicators import checklist_summary
from .models import RATING_MAX, RATING_MIN, LogEntry, MoodTag, SymptomRating, make_entry, make_symptom
from .paths import resolve_data_path
from .safety import assert_safe_data_path
from .storage import load_json, load_store, save_json, save_store

logger = logging.getLogger(__name__)


# -------------------------
# Logging
# -------------------------

def _setup_logging(verbose: bool) -> None:
    # stderr only: plan output on stdout must stay copyable
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        stream=sys.stderr,
    )


# -------------------------
# Parsing helpers
# -------------------------

def _parse_moods(raw: list[str] | None) -> list[MoodTag]:
    """
    Accepts repeated --mood values, each optionally comma-separated
    (labels may contain spaces, e.g. "Low mood").
    Unknown labels -> SystemExit; duplicates dropped case-insensitively.
    """
    if not raw:
        return []
    out: list[MoodTag] = []
    seen: set[str] = set()
    for value in raw:
        for chunk in value.split(","):
            label = chunk.strip()
            if not label:
                continue
            tag = find_mood(label)
            if tag is None:
                raise SystemExit(f"Unknown mood {label!r}. Run `cn moods` to see the catalog.")
            if tag.label in seen:
                continue
            seen.add(tag.label)
            out.append(tag)
    return out


def _parse_symptom(value: str) -> SymptomRating:
    """
    "Pelvic pain:6" -> SymptomRating("Pelvic pain", 6)
    The rating comes after the LAST colon so names may contain colons.
    """
    name, sep, rating = str(value).rpartition(":")
    if not sep:
        raise SystemExit(f"--symptom must look like NAME:RATING (got {value!r})")
    rating = rating.strip()
    # ASCII only: isdigit() also accepts "²", which int() rejects
    if not (rating.isascii() and rating.isdigit()):
        raise SystemExit(f"--symptom rating must be a whole number (got {value!r})")
    r = int(rating)
    if not (RATING_MIN <= r <= RATING_MAX):
        raise SystemExit(f"--symptom rating must be between {RATING_MIN} and {RATING_MAX} (got {r})")
    try:
        return make_symptom(name, r)
    except ValueError as e:
        raise SystemExit(f"--symptom {value!r}: {e}") from e


def _read_text_arg(text: str | None, file_arg: str | None, arg_name: str) -> str:
    if file_arg:
        path = Path(file_arg).expanduser()
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise SystemExit(f"{arg_name}: could not read {path}: {e}") from e
    return text or ""


# -------------------------
# Print blocks
# -------------------------

def _entry_line(entry: LogEntry) -> str:
    line = f"{entry.date.isoformat()}"
    if entry.moods:
        line += f" [{', '.join(m.label for m in entry.moods)}]"
    if entry.symptoms:
        line += " " + "; ".join(f"{s.name} {s.rating}/10" for s in entry.symptoms)
    journal = entry.journal.strip()
    if journal:
        line += f" ({journal})"
    return line


def _print_entry_block(entry: LogEntry) -> None:
    print("```")
    print("📒 Symptom Log")
    print(f"- 📅 Date: {fmt_day(entry.date)}")
    if entry.moods:
        print(f"- 🙂 Moods: {' • '.join(m.label for m in entry.moods)}")
    for s in entry.symptoms:
        print(f"- 🩺 {s.name}: {s.rating}/10")
    journal = entry.journal.strip()
    if journal:
        print(f"- 📝 Journal: {journal}")
    print("```")


# -------------------------
# LOG commands
# -------------------------

def cmd_log_add(args: argparse.Namespace) -> None:
    try:
        day = parse_day(args.date)
    except ValueError as e:
        raise SystemExit(str(e)) from e

    moods = _parse_moods(args.mood)
    symptoms = [_parse_symptom(s) for s in (args.symptom or [])]
    entry = make_entry(day, moods=moods, symptoms=symptoms, journal=args.journal or "")

    if not entry.is_saveable():
        raise SystemExit("Nothing to save: add at least one --symptom or a --journal note.")

    store = load_store(args.data_path)
    store.add(entry)
    save_store(args.data_path, store)
    logger.info("saved entry %s", entry.id)

    if args.format == "block":
        _print_entry_block(entry)
    else:
        print(f"📒 Logged {fmt_day(entry.date)}: {len(entry.symptoms)} symptom(s), {len(entry.moods)} mood(s)")


def cmd_log_list(args: argparse.Namespace) -> None:
    entries = load_store(args.data_path).snapshot()

    if not entries:
        print("No log entries yet.")
        return

    if args.format == "block":
        for e in entries[: args.limit]:
            _print_entry_block(e)
        return

    print("=== Symptom Log (newest first) ===")
    for e in entries[: args.limit]:
        print(_entry_line(e))


# -------------------------
# Catalog / insights / plan
# -------------------------

def cmd_moods(args: argparse.Namespace) -> None:
    for major in mood_majors():
        tags = [m for m in MOOD_OPTIONS if m.major == major]
        print(f"[{major}]")
        for m in tags:
            if args.colors:
                print(f"- {m.label} ({rainbow_color(m.position)})")
            else:
                print(f"- {m.label}")


_CHECKLIST_CHOICES: dict[str, tuple[str, ...]] = {
    "pcos": ("PCOS Common Symptoms",),
    "endo": ("Endometriosis Common Symptoms",),
    "all": tuple(CHECKLISTS),
}


def cmd_insights(args: argparse.Namespace) -> None:
    entries = load_store(args.data_path).snapshot()

    print("=== Insights ===")
    print("This highlights patterns you've logged (not a diagnosis).")
    print(f"- entries logged: {len(entries)}")

    for result in checklist_summary(entries, titles=_CHECKLIST_CHOICES[args.checklist]):
        print(f"\n[{result.title}] {result.matched_count}/{result.total}")
        for item in result.indicators:
            mark = "✓" if item in result.matched else " "
            suffix = "  (logged)" if item in result.matched else ""
            print(f"  [{mark}] {item}{suffix}")

    print(f"\n{INDICATOR_DISCLAIMER}")


def cmd_plan(args: argparse.Namespace) -> None:
    user_notes = _read_text_arg(args.notes, args.notes_file, "--notes-file")
    chart_notes = _read_text_arg(args.chart, args.chart_file, "--chart-file")

    store = load_store(args.data_path)
    plan = store.generate_plan(user_notes, chart_notes)

    if args.out:
        out_path = Path(args.out).expanduser().resolve()
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(plan, encoding="utf-8")
        print(f"📄 Wrote visit plan ({len(store)} entries) → {out_path}")
        return

    sys.stdout.write(plan)
    if not plan.endswith("\n"):
        sys.stdout.write("\n")


# -------------------------
# Core commands
# -------------------------

def cmd_init(args: argparse.Namespace) -> None:
    data = load_json(args.data_path)
    data.setdefault("entries", [])
    save_json(args.data_path, data)
    print(f"✅ Initialized data file: {args.data_path}")


def cmd_where(args: argparse.Namespace) -> None:
    print(args.data_path)
    print(f"↳ using {args.data_reason}")


def cmd_doctor(args: argparse.Namespace) -> None:
    print("=== CycleNotes Doctor ===")

    assert_safe_data_path(args.data_path, args.allow_repo_data_path)
    print("✅ Data path safety guard: OK")

    store = load_store(args.data_path)
    print(f"✅ JSON readable: OK ({len(store)} entries)")

    try:
        perms = stat.S_IMODE(args.data_path.stat().st_mode)
        print(f"🔐 File permissions: {oct(perms)} (target 0o600)")
    except FileNotFoundError:
        print("⚠️ Data file missing (run `cn init`)")

    print(f"📋 Checklists: {', '.join(f'{t} ({len(i)})' for t, i in CHECKLISTS.items())}")
    print("=== Done ===")


def cmd_gui(args: argparse.Namespace) -> None:
    from .gui import run_app

    run_app(args.data_path)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="cn", description="CycleNotes symptom journal + visit planner")
    p.add_argument("--data", default=None, help="Path to data JSON (overrides env/default)")
    p.add_argument("--profile", default=None, help="Profile name (e.g. dev/test)")
    p.add_argument("--allow-repo-data-path", action="store_true", help="Override safety guard (not recommended)")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")

    sub = p.add_subparsers(dest="cmd", required=True)
    sub.add_parser("init", help="Initialize data store safely").set_defaults(func=cmd_init)
    sub.add_parser("where", help="Show which data file is active and why").set_defaults(func=cmd_where)
    sub.add_parser("doctor", help="Run safety + health checks").set_defaults(func=cmd_doctor)
    sub.add_parser("gui", help="Open the desktop window").set_defaults(func=cmd_gui)

    # ---- log ----
    log = sub.add_parser("log", help="Daily symptom / mood / journal log")
    log_sub = log.add_subparsers(dest="log_cmd", required=True)

    log_add = log_sub.add_parser("add", help="Add a log entry")
    log_add.add_argument("--date", default=None, help="e.g. 2025-01-05, 'Jan 5, 2025', yesterday, '3 days ago'")
    log_add.add_argument("--mood", action="append", default=None,
                         help="Mood label from the catalog (repeatable or comma-separated)")
    log_add.add_argument("--symptom", action="append", default=None,
                         help="NAME:RATING with rating 1–10 (repeatable), e.g. 'Pelvic pain:6'")
    log_add.add_argument("--journal", default=None, help="Free-text notes (context, triggers, cycle notes, meds)")
    log_add.add_argument("--format", choices=["line", "block"], default="line")
    log_add.set_defaults(func=cmd_log_add)

    log_list = log_sub.add_parser("list", help="List log entries")
    log_list.add_argument("--limit", type=int, default=50)
    log_list.add_argument("--format", choices=["line", "block"], default="line")
    log_list.set_defaults(func=cmd_log_list)

    # ---- catalog / insights / plan ----
    moods = sub.add_parser("moods", help="Show the mood catalog")
    moods.add_argument("--colors", action="store_true", help="Show each tag's spectrum colour")
    moods.set_defaults(func=cmd_moods)

    insights = sub.add_parser("insights", help="Indicator checklists matched by your logged symptoms")
    insights.add_argument("--checklist", choices=["pcos", "endo", "all"], default="all")
    insights.set_defaults(func=cmd_insights)

    plan = sub.add_parser("plan", help="Generate a next-visit plan from your logs")
    plan.add_argument("--notes", default=None, help="What you want to discuss (your words)")
    plan.add_argument("--notes-file", default=None, help="Read your notes from a text file")
    plan.add_argument("--chart", default=None, help="Pasted chart/clinician notes")
    plan.add_argument("--chart-file", default=None, help="Read chart notes from a text file")
    plan.add_argument("--out", default=None, help="Write the plan to this file instead of stdout")
    plan.set_defaults(func=cmd_plan)

    return p


def main(argv=None) -> None:
    p = build_parser()
    args = p.parse_args(argv)
    _setup_logging(args.verbose)

    args.data_path, args.data_reason = resolve_data_path(args.data, args.profile)
    logger.debug("data path: %s (%s)", args.data_path, args.data_reason)

    assert_safe_data_path(args.data_path, args.allow_repo_data_path)

    args.func(args)


if __name__ == "__main__":
    main()
