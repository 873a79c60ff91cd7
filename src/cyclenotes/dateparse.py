from __future__ import annotations

import re
from datetime import date, datetime, timedelta


def _today() -> date:
    return datetime.now().astimezone().date()


def parse_day(value: str | None) -> date:
    """
    Parse a flexible calendar day for a log entry.
    Accepts:
      - None / "" / "today" -> today
      - "yesterday", "tomorrow"
      - relative: "3 days ago", "1 day ago"
      - ISO: "2025-01-05"
      - "2025/01/05"
      - "Jan 5, 2025", "January 5, 2025", "Jan 5 2025"
    Raises ValueError with the accepted forms when nothing matches.
    """
    if not value or not value.strip():
        return _today()

    s = value.strip().lower()

    # --- 1) Keywords ---
    if s == "today":
        return _today()
    if s == "yesterday":
        return _today() - timedelta(days=1)
    if s == "tomorrow":
        return _today() + timedelta(days=1)

    # --- 2) Relative ---
    m = re.fullmatch(r"(\d+)\s*(day|days)\s*ago", s)
    if m:
        return _today() - timedelta(days=int(m.group(1)))

    # --- 3) ISO ---
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        pass

    # --- 4) Other explicit formats ---
    formats = [
        "%Y/%m/%d",
        "%b %d, %Y",
        "%B %d, %Y",
        "%b %d %Y",
        "%B %d %Y",
    ]
    for fmt in formats:
        try:
            return datetime.strptime(value.strip(), fmt).date()
        except ValueError:
            continue

    raise ValueError(
        f"Could not parse date {value!r}. Try '2025-01-05', 'Jan 5, 2025', "
        f"'yesterday' or '3 days ago'."
    )


def fmt_day(d: date) -> str:
    # abbreviated form like "Jan 5, 2025" (no zero padding on any platform)
    return f"{d.strftime('%b')} {d.day}, {d.year}"
