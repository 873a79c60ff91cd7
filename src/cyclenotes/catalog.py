"""Static reference data: the mood catalog and the two indicator checklists."""

from __future__ import annotations

import colorsys
import math

from .models import MoodTag


def _tag(label: str, position: float, major: str) -> MoodTag:
    # stable ids so the same catalog tag compares equal across runs
    return MoodTag(label=label, position=position, major=major, id=f"mood:{label.lower()}")


# Ordered along the spectrum (0 = stress ... 1 = body fatigue)
MOOD_OPTIONS: tuple[MoodTag, ...] = (
    _tag("Overwhelmed", 0.01, "Stress"),
    _tag("Panicky", 0.03, "Stress"),
    _tag("On edge", 0.05, "Stress"),
    _tag("Overstimulated", 0.07, "Stress"),
    _tag("Frustrated", 0.09, "Stress"),

    _tag("Irritable", 0.11, "Tense"),
    _tag("Snappy", 0.12, "Tense"),
    _tag("Restless", 0.13, "Tense"),
    _tag("Uneasy", 0.14, "Tense"),
    _tag("Wired", 0.15, "Tense"),

    _tag("Low mood", 0.17, "Mood"),
    _tag("Sad", 0.18, "Mood"),
    _tag("Sensitive", 0.19, "Mood"),
    _tag("Tearful", 0.20, "Mood"),
    _tag("Unmotivated", 0.22, "Mood"),
    _tag("Self-critical", 0.24, "Mood"),

    _tag("Okay", 0.27, "Balance"),
    _tag("Stable", 0.30, "Balance"),
    _tag("Grounded", 0.32, "Balance"),
    _tag("Centered", 0.34, "Balance"),
    _tag("Hopeful", 0.36, "Balance"),

    _tag("Calm", 0.40, "Calm"),
    _tag("Peaceful", 0.42, "Calm"),
    _tag("Safe", 0.44, "Calm"),
    _tag("Patient", 0.46, "Calm"),
    _tag("In control", 0.48, "Calm"),

    _tag("Energized", 0.52, "Energy"),
    _tag("Motivated", 0.54, "Energy"),
    _tag("Social", 0.56, "Energy"),
    _tag("Confident", 0.58, "Energy"),
    _tag("Upbeat", 0.60, "Energy"),

    _tag("Focused", 0.63, "Clarity"),
    _tag("Clear-headed", 0.65, "Clarity"),
    _tag("Productive", 0.67, "Clarity"),
    _tag("Present", 0.69, "Clarity"),

    _tag("Foggy", 0.71, "Fatigue"),
    _tag("Drained", 0.74, "Fatigue"),
    _tag("Tired", 0.77, "Fatigue"),
    _tag("Exhausted", 0.80, "Fatigue"),
    _tag("Burned out", 0.83, "Fatigue"),
    _tag("Numb", 0.86, "Fatigue"),

    _tag("Heavy", 0.88, "Body"),
    _tag("Sluggish", 0.91, "Body"),
    _tag("Sleepy", 0.94, "Body"),
    _tag("Worn out", 0.97, "Body"),
)

_MOODS_BY_KEY = {m.label.lower(): m for m in MOOD_OPTIONS}


# Informational indicators, not diagnoses.
PCOS_INDICATORS: tuple[str, ...] = (
    "Irregular periods",
    "Infrequent periods (few per year)",
    "Cycles > 35 days",
    "Periods lasting many days",
    "Trouble getting pregnant / ovulation issues",
    "Acne",
    "Excess facial/body hair (hirsutism)",
    "Hair thinning / male-pattern hair loss",
    "Weight changes / weight gain",
    "Increased appetite",
    "Insulin resistance signs (dark velvety skin patches)",
)

ENDO_INDICATORS: tuple[str, ...] = (
    "Pelvic pain",
    "Painful periods (dysmenorrhea)",
    "Pain that starts before period and lasts into it",
    "Lower back pain around periods",
    "Stomach/abdominal pain around periods",
    "Pain during or after sex",
    "Pain with bowel movements (esp. around period)",
    "Pain with urination (esp. around period)",
    "Heavy menstrual bleeding",
    "Bleeding between periods",
    "Bloating",
    "Diarrhea",
    "Constipation",
    "Nausea",
    "Fatigue",
    "Infertility / trouble conceiving",
)

CHECKLISTS: dict[str, tuple[str, ...]] = {
    "PCOS Common Symptoms": PCOS_INDICATORS,
    "Endometriosis Common Symptoms": ENDO_INDICATORS,
}

INDICATOR_DISCLAIMER = "Informational indicators — not diagnoses."


def find_mood(label: str) -> MoodTag | None:
    return _MOODS_BY_KEY.get(str(label or "").strip().lower())


def mood_majors() -> list[str]:
    """Major categories in spectrum order."""
    out: list[str] = []
    for m in MOOD_OPTIONS:
        if m.major not in out:
            out.append(m.major)
    return out


# -------------------------
# Spectrum colours
# -------------------------

# ROYGBIV anchor hues (0..1 around the wheel)
_MAJOR_HUES = (0.00, 0.08, 0.15, 0.33, 0.55, 0.65, 0.78)


def _lerp_hue(a: float, b: float, t: float) -> float:
    delta = b - a
    if abs(delta) > 0.5:
        delta -= math.copysign(1.0, delta)
    h = a + delta * t
    if h < 0:
        h += 1
    if h > 1:
        h -= 1
    return h


def rainbow_color(position: float, saturation: float = 0.78, brightness: float = 0.97) -> str:
    """
    Map a spectrum position (clamped to 0..1) to a '#rrggbb' colour by
    interpolating between the seven anchor hues.
    """
    anchors = sorted(_MAJOR_HUES)
    p = min(max(float(position), 0.0), 1.0)

    scaled = p * (len(anchors) - 1)
    i = int(math.floor(scaled))
    t = scaled - i

    h1 = anchors[i]
    h2 = anchors[min(i + 1, len(anchors) - 1)]
    r, g, b = colorsys.hsv_to_rgb(_lerp_hue(h1, h2, t), saturation, brightness)
    return "#{:02x}{:02x}{:02x}".format(round(r * 255), round(g * 255), round(b * 255))
