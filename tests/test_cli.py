"""End-to-end tests for the `cn` commands against a temp data file."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cyclenotes.cli import main
from cyclenotes.plan import EMPTY_PLAN


@pytest.fixture()
def data_path(tmp_path: Path) -> Path:
    return tmp_path / "cfg" / "data.json"


@pytest.fixture()
def cn(data_path):
    def run(*argv: str) -> None:
        main(["--data", str(data_path), *argv])

    return run


def test_init_creates_entries_list(cn, data_path, capsys):
    cn("init")
    assert json.loads(data_path.read_text()) == {"entries": []}
    assert "Initialized" in capsys.readouterr().out


def test_where_reports_reason(cn, data_path, capsys):
    cn("where")
    out = capsys.readouterr().out
    assert str(data_path.resolve()) in out
    assert "--data" in out


def test_where_uses_env_var(tmp_path, monkeypatch, capsys):
    target = tmp_path / "env.json"
    monkeypatch.setenv("CYCLENOTES_DATA", str(target))
    main(["where"])
    out = capsys.readouterr().out
    assert str(target.resolve()) in out
    assert "CYCLENOTES_DATA" in out


def test_log_add_and_list(cn, data_path, capsys):
    cn("log", "add", "--date", "2025-01-05", "--symptom", "Pelvic pain:6", "--mood", "Tired, Calm")
    cn("log", "add", "--date", "2025-01-07", "--journal", "cramps eased")
    capsys.readouterr()

    cn("log", "list")
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("===")
    assert lines[1] == "2025-01-07 (cramps eased)"
    assert lines[2] == "2025-01-05 [Calm, Tired] Pelvic pain 6/10"

    rows = json.loads(data_path.read_text())["entries"]
    assert [r["date"] for r in rows] == ["2025-01-07", "2025-01-05"]


def test_log_add_block_format(cn, capsys):
    cn("log", "add", "--date", "Jan 5, 2025", "--symptom", "Acne:3", "--format", "block")
    out = capsys.readouterr().out
    assert "- 📅 Date: Jan 5, 2025" in out
    assert "- 🩺 Acne: 3/10" in out


def test_log_add_refuses_empty_entry(cn, data_path):
    with pytest.raises(SystemExit, match="Nothing to save"):
        cn("log", "add", "--mood", "Calm", "--journal", "   ")
    assert not data_path.exists() or json.loads(data_path.read_text()).get("entries", []) == []


def test_log_add_bad_date(cn):
    with pytest.raises(SystemExit, match="Could not parse date"):
        cn("log", "add", "--date", "someday", "--journal", "x")


def test_log_list_empty(cn, capsys):
    cn("log", "list")
    assert "No log entries yet." in capsys.readouterr().out


def test_insights_marks_matches(cn, capsys):
    cn("log", "add", "--date", "2025-01-05", "--symptom", "pelvic pain:6", "--symptom", "Acne:2")
    capsys.readouterr()
    cn("insights")
    out = capsys.readouterr().out
    assert "- entries logged: 1" in out
    assert "[PCOS Common Symptoms] 1/11" in out
    assert "[Endometriosis Common Symptoms] 1/16" in out
    assert "  [✓] Pelvic pain  (logged)" in out
    assert "not diagnoses" in out


def test_insights_single_checklist(cn, capsys):
    cn("insights", "--checklist", "pcos")
    out = capsys.readouterr().out
    assert "PCOS Common Symptoms" in out
    assert "Endometriosis" not in out


def test_plan_empty(cn, capsys):
    cn("plan")
    assert capsys.readouterr().out == EMPTY_PLAN + "\n"


def test_plan_from_logs(cn, capsys):
    cn("log", "add", "--date", "2025-01-05", "--symptom", "Pelvic pain:6")
    cn("log", "add", "--date", "2025-01-07", "--symptom", "Pelvic pain:8")
    capsys.readouterr()
    cn("plan", "--notes", "  pain pattern ", "--chart", "")
    out = capsys.readouterr().out
    assert "Log window: Jan 5, 2025 – Jan 7, 2025\n" in out
    assert "  - Pelvic pain (2 days), avg 7.0/10, max 8/10\n" in out
    assert "• pain pattern\n" in out
    assert "• (Nothing pasted)\n" in out


def test_plan_reads_files_and_writes_out(cn, tmp_path, capsys):
    cn("log", "add", "--date", "2025-01-05", "--symptom", "Nausea:4")
    notes = tmp_path / "notes.txt"
    notes.write_text("\nmorning nausea\n", encoding="utf-8")
    out_file = tmp_path / "out" / "plan.txt"
    cn("plan", "--notes-file", str(notes), "--out", str(out_file))
    text = out_file.read_text(encoding="utf-8")
    assert "• morning nausea\n" in text
    assert "Wrote visit plan" in capsys.readouterr().out


def test_plan_missing_notes_file(cn, tmp_path):
    with pytest.raises(SystemExit):
        cn("plan", "--notes-file", str(tmp_path / "nope.txt"))


def test_moods_lists_catalog(cn, capsys):
    cn("moods", "--colors")
    out = capsys.readouterr().out
    assert "[Stress]" in out
    assert "- Low mood (#" in out


def test_doctor(cn, capsys):
    cn("doctor")
    out = capsys.readouterr().out
    assert "Data path safety guard: OK" in out
    assert "JSON readable: OK (0 entries)" in out


def test_refuses_data_inside_git_repo(tmp_path):
    (tmp_path / ".git").mkdir()
    with pytest.raises(SystemExit, match="inside a git repo"):
        main(["--data", str(tmp_path / "data.json"), "where"])


def test_log_add_keeps_unreadable_rows(cn, data_path):
    data_path.parent.mkdir(parents=True)
    bad = {"date": "2025-01-03", "symptoms": [{"name": "Pain", "rating": 11}], "journal": "keep me"}
    data_path.write_text(json.dumps({"entries": [bad]}), encoding="utf-8")

    cn("log", "add", "--date", "2025-01-04", "--journal", "hi")

    rows = json.loads(data_path.read_text())["entries"]
    assert [r["journal"] for r in rows] == ["hi", "keep me"]


def test_log_add_non_ascii_digit_rating_exits(cn):
    with pytest.raises(SystemExit, match="whole number"):
        cn("log", "add", "--symptom", "Acne:²")


def test_insights_endo_only(cn, capsys):
    cn("insights", "--checklist", "endo")
    out = capsys.readouterr().out
    assert "[Endometriosis Common Symptoms] 0/16" in out
    assert "PCOS" not in out
