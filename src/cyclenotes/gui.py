from __future__ import annotations

import logging
import tkinter as tk
import traceback
from pathlib import Path
from tkinter import messagebox, ttk

from .catalog import INDICATOR_DISCLAIMER, MOOD_OPTIONS, mood_majors, rainbow_color
from .dateparse import fmt_day, parse_day
from .indicators import checklist_summary
from .models import RATING_MAX, RATING_MIN, make_entry, make_symptom, SymptomRating
from .paths import resolve_data_path
from .safety import assert_safe_data_path
from .storage import load_store, save_store

logger = logging.getLogger(__name__)

PLAN_HINT = "Tap Generate to create your plan."


class CycleNotesApp(tk.Tk):
    def __init__(self, data_path: Path):
        super().__init__()
        self.title("CycleNotes")
        self.geometry("900x640")
        self.data_path = data_path
        self.store = load_store(data_path)

        self._pending_symptoms: list[SymptomRating] = []

        self._build_header()
        self._build_tabs()
        self._refresh_all()

    # -------- Crash guard --------

    def report_callback_exception(self, exc, val, tb):  # type: ignore[override]
        traceback.print_exception(exc, val, tb)
        messagebox.showerror("Crash prevented", f"{exc.__name__}: {val}")

    def _safe_cmd(self, fn):
        def wrapped(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except Exception as e:
                logger.exception("callback failed")
                messagebox.showerror("Crash prevented", f"{type(e).__name__}: {e}")
                return None

        return wrapped

    # -------------------------
    # Header / tabs
    # -------------------------

    def _build_header(self) -> None:
        frm = ttk.Frame(self, padding=10)
        frm.pack(fill="x")
        ttk.Label(frm, text="CycleNotes", font=("TkDefaultFont", 16, "bold")).pack(side="left")
        ttk.Label(frm, text=str(self.data_path), foreground="#666").pack(side="left", padx=12)

    def _build_tabs(self) -> None:
        self.nb = ttk.Notebook(self)
        self.nb.pack(fill="both", expand=True, padx=10, pady=10)

        self.tab_log = ttk.Frame(self.nb, padding=10)
        self.tab_insights = ttk.Frame(self.nb, padding=10)
        self.tab_visit = ttk.Frame(self.nb, padding=10)

        self.nb.add(self.tab_log, text="Log")
        self.nb.add(self.tab_insights, text="Insights")
        self.nb.add(self.tab_visit, text="Next Visit")

        self._build_log_tab()
        self._build_insights_tab()
        self._build_visit_tab()

    def _refresh_all(self) -> None:
        self._refresh_pending_symptoms()
        self._refresh_insights()

    # -------------------------
    # Log tab
    # -------------------------

    def _build_log_tab(self) -> None:
        left = ttk.Frame(self.tab_log)
        right = ttk.Frame(self.tab_log)
        left.pack(side="left", fill="y", padx=(0, 10))
        right.pack(side="right", fill="both", expand=True)

        ttk.Label(left, text="Today", font=("TkDefaultFont", 12, "bold")).pack(anchor="w")
        ttk.Label(left, text="Log how you're feeling. Patterns matter.", foreground="#555").pack(anchor="w")

        self.log_date = tk.StringVar(value="today")
        ttk.Label(left, text="Date (e.g. today, 2025-01-05)").pack(anchor="w", pady=(8, 0))
        ttk.Entry(left, textvariable=self.log_date, width=24).pack(anchor="w", pady=(0, 8))

        ttk.Label(left, text="Symptoms", font=("TkDefaultFont", 12, "bold")).pack(anchor="w")
        self.symptom_name = tk.StringVar()
        self.symptom_rating = tk.IntVar(value=5)
        row = ttk.Frame(left)
        row.pack(anchor="w", pady=(0, 4))
        ttk.Entry(row, textvariable=self.symptom_name, width=22).pack(side="left")
        ttk.Spinbox(row, from_=RATING_MIN, to=RATING_MAX, textvariable=self.symptom_rating, width=4).pack(
            side="left", padx=4
        )
        ttk.Button(row, text="Add", command=self._safe_cmd(self._symptom_add)).pack(side="left")

        self.pending_list = tk.Listbox(left, height=6, width=34)
        self.pending_list.pack(anchor="w", pady=(0, 8))

        ttk.Label(left, text="Journal", font=("TkDefaultFont", 12, "bold")).pack(anchor="w")
        self.journal_text = tk.Text(left, height=6, width=34, wrap="word")
        self.journal_text.pack(anchor="w")
        ttk.Label(left, text="Optional: context, triggers, cycle notes, meds, etc.", foreground="#555").pack(
            anchor="w", pady=(0, 8)
        )

        ttk.Button(left, text="Save Entry", command=self._safe_cmd(self._entry_save)).pack(fill="x")

        ttk.Label(right, text="Mood / What applies", font=("TkDefaultFont", 12, "bold")).pack(anchor="w")
        self.mood_vars: dict[str, tk.BooleanVar] = {}
        grid = ttk.Frame(right)
        grid.pack(fill="both", expand=True, pady=8)
        for col, major in enumerate(mood_majors()):
            ttk.Label(grid, text=major, foreground="#444").grid(row=0, column=col, sticky="w", padx=4)
            tags = [m for m in MOOD_OPTIONS if m.major == major]
            for r, tag in enumerate(tags, start=1):
                var = tk.BooleanVar(value=False)
                self.mood_vars[tag.label] = var
                tk.Checkbutton(
                    grid,
                    text=tag.label,
                    variable=var,
                    selectcolor=rainbow_color(tag.position, saturation=0.35, brightness=1.0),
                    anchor="w",
                ).grid(row=r, column=col, sticky="w", padx=4)

    def _symptom_add(self) -> None:
        try:
            symptom = make_symptom(self.symptom_name.get(), int(self.symptom_rating.get()))
        except (ValueError, tk.TclError):
            messagebox.showerror("Bad symptom", "Enter a symptom name and a severity from 1 to 10.")
            return
        self._pending_symptoms.append(symptom)
        self.symptom_name.set("")
        self.symptom_rating.set(5)
        self._refresh_pending_symptoms()

    def _refresh_pending_symptoms(self) -> None:
        self.pending_list.delete(0, tk.END)
        for s in self._pending_symptoms:
            self.pending_list.insert(tk.END, f"{s.name} — {s.rating}/10")

    def _entry_save(self) -> None:
        try:
            day = parse_day(self.log_date.get())
        except ValueError as e:
            messagebox.showerror("Bad date", str(e))
            return

        moods = [m for m in MOOD_OPTIONS if self.mood_vars[m.label].get()]
        journal = self.journal_text.get("1.0", tk.END).rstrip("\n")
        entry = make_entry(day, moods=moods, symptoms=self._pending_symptoms, journal=journal)
        if not entry.is_saveable():
            messagebox.showinfo("Nothing to save", "Add a symptom or a journal note first.")
            return

        self.store.add(entry)
        save_store(self.data_path, self.store)

        for var in self.mood_vars.values():
            var.set(False)
        self._pending_symptoms = []
        self.journal_text.delete("1.0", tk.END)
        self._refresh_all()
        messagebox.showinfo("Saved", f"Entry saved for {fmt_day(day)}.")

    # -------------------------
    # Insights tab
    # -------------------------

    def _build_insights_tab(self) -> None:
        ttk.Label(self.tab_insights, text="Insights", font=("TkDefaultFont", 12, "bold")).pack(anchor="w")
        ttk.Label(
            self.tab_insights,
            text="This highlights patterns you've logged (not a diagnosis).",
            foreground="#555",
        ).pack(anchor="w", pady=(0, 8))
        self.insights_out = tk.Text(self.tab_insights, wrap="word")
        self.insights_out.pack(fill="both", expand=True)

    def _refresh_insights(self) -> None:
        entries = self.store.snapshot()
        lines = [f"Entries logged: {len(entries)}", ""]
        for result in checklist_summary(entries):
            lines.append(f"{result.title}  {result.matched_count}/{result.total}")
            for item in result.indicators:
                mark = "●" if item in result.matched else "○"
                suffix = "   logged" if item in result.matched else ""
                lines.append(f"  {mark} {item}{suffix}")
            lines.append("")
        lines.append(INDICATOR_DISCLAIMER)

        self.insights_out.configure(state="normal")
        self.insights_out.delete("1.0", tk.END)
        self.insights_out.insert(tk.END, "\n".join(lines))
        self.insights_out.configure(state="disabled")

    # -------------------------
    # Next Visit tab
    # -------------------------

    def _build_visit_tab(self) -> None:
        top = ttk.Frame(self.tab_visit)
        top.pack(fill="x")

        ttk.Label(top, text="What I want to discuss", font=("TkDefaultFont", 12, "bold")).pack(anchor="w")
        self.my_notes = tk.Text(top, height=4, wrap="word")
        self.my_notes.pack(fill="x")
        ttk.Label(
            top,
            text="Examples: pain pattern, cycle changes, fatigue, fertility goals, meds tried.",
            foreground="#555",
        ).pack(anchor="w", pady=(0, 8))

        ttk.Label(top, text="Optional: paste chart / clinician notes", font=("TkDefaultFont", 12, "bold")).pack(
            anchor="w"
        )
        self.chart_notes = tk.Text(top, height=4, wrap="word")
        self.chart_notes.pack(fill="x")
        ttk.Label(top, text="Only paste what you're comfortable sharing.", foreground="#555").pack(
            anchor="w", pady=(0, 8)
        )

        btns = ttk.Frame(top)
        btns.pack(anchor="w", pady=(0, 8))
        ttk.Button(btns, text="Generate", command=self._safe_cmd(self._plan_generate)).pack(side="left")
        ttk.Button(btns, text="Copy", command=self._safe_cmd(self._plan_copy)).pack(side="left", padx=6)

        self.plan_out = tk.Text(self.tab_visit, wrap="word")
        self.plan_out.pack(fill="both", expand=True)
        self.plan_out.insert(tk.END, PLAN_HINT)
        self._plan = ""

    def _plan_generate(self) -> None:
        self._plan = self.store.generate_plan(
            self.my_notes.get("1.0", tk.END),
            self.chart_notes.get("1.0", tk.END),
        )
        self.plan_out.delete("1.0", tk.END)
        self.plan_out.insert(tk.END, self._plan)

    def _plan_copy(self) -> None:
        if not self._plan:
            return
        self.clipboard_clear()
        self.clipboard_append(self._plan)


# -------------------------
# GUI Entrypoint
# -------------------------


def run_app(data_path: Path) -> None:
    app = CycleNotesApp(data_path)
    app.mainloop()


def run_gui(argv=None) -> None:
    data_path, _reason = resolve_data_path(None, None)
    assert_safe_data_path(data_path, allow_repo_data_path=False)
    run_app(data_path)


if __name__ == "__main__":
    run_gui()
