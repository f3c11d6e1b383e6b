"""Cycle phase resolution from a birth-control cycle-day label.

The tracker models a fixed 28-day pill pack: 21 active-pill days labelled
``"Day 1"``..``"Day 21"`` followed by a 7-day hormone-free interval labelled
``"Break Day 1"``..``"Break Day 7"``.  The phase is always derived from the
label and never stored on its own.

Band boundaries:

    Day 1-7        → Follicular
    Day 8-14       → Ovulation
    Day 15-21      → Luteal
    Break Day 1-7  → Menstrual
"""

from __future__ import annotations

import logging
import re
from enum import Enum

logger = logging.getLogger("pcos_tracker.symptoms.phase")

ACTIVE_DAYS = 21
BREAK_DAYS = 7

BREAK_PREFIX = "Break"

_DAY_LABEL_RE = re.compile(r"^Day\s+(-?\d+)$")


class CyclePhase(str, Enum):
    follicular = "Follicular"
    ovulation = "Ovulation"
    luteal = "Luteal"
    menstrual = "Menstrual"
    unknown = ""


# (first day, last day, phase) over the active-pill days
_ACTIVE_BANDS: tuple[tuple[int, int, CyclePhase], ...] = (
    (1, 7, CyclePhase.follicular),
    (8, 14, CyclePhase.ovulation),
    (15, 21, CyclePhase.luteal),
)


def resolve_phase(cycle_day: str | None) -> CyclePhase:
    """Map a cycle-day label to its cycle phase.

    Never raises.  Labels that are empty, unparsable or outside the 21-day
    active range resolve to ``CyclePhase.unknown`` (the empty string).

    Args:
        cycle_day: Label such as ``"Day 8"`` or ``"Break Day 3"``.

    Returns:
        The derived CyclePhase.
    """
    if not isinstance(cycle_day, str):
        return CyclePhase.unknown

    label = cycle_day.strip()
    if not label:
        return CyclePhase.unknown

    if label.startswith(BREAK_PREFIX):
        return CyclePhase.menstrual

    match = _DAY_LABEL_RE.match(label)
    if match is None:
        logger.debug("Unrecognised cycle day label %r", cycle_day)
        return CyclePhase.unknown

    day = int(match.group(1))
    for first, last, phase in _ACTIVE_BANDS:
        if first <= day <= last:
            return phase

    logger.debug("Cycle day %d outside the %d-day active range", day, ACTIVE_DAYS)
    return CyclePhase.unknown


def cycle_day_labels() -> tuple[str, ...]:
    """Return the closed cycle-day vocabulary in the order a capture form lists it."""
    active = tuple(f"Day {n}" for n in range(1, ACTIVE_DAYS + 1))
    breaks = tuple(f"{BREAK_PREFIX} Day {n}" for n in range(1, BREAK_DAYS + 1))
    return active + breaks
