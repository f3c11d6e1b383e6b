"""Running averages, trailing windows and severity banding over an EntryStore.

Averages always cover the whole store; windows only affect what is listed or
charted.  All results are recomputed from the store on each call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from src.symptoms.config_loader import TrackerConfig, get_tracker_config
from src.symptoms.entry import (
    SYMPTOM_FIELDS,
    SYMPTOM_KEYS,
    SymptomEntry,
    resolve_symptom_key,
)
from src.symptoms.phase import CyclePhase
from src.symptoms.store import EntryStore

logger = logging.getLogger("pcos_tracker.symptoms.aggregation")

_TENTHS = Decimal("0.1")


class SeverityBand(str, Enum):
    none = "None"
    mild = "Mild"
    moderate = "Moderate"
    severe = "Severe"


@dataclass
class DashboardSummary:
    """Headline numbers for the dashboard view.

    Attributes:
        total_entries:  Number of entries in the store.
        averages:       Whole-store average per symptom (wire names).
        highlights:     Subset of ``averages`` shown as headline cards.
        recent_entries: Most recent entries, oldest first.
    """

    total_entries: int
    averages: dict[str, float] = field(default_factory=dict)
    highlights: dict[str, float] = field(default_factory=dict)
    recent_entries: tuple[SymptomEntry, ...] = ()


@dataclass
class PhaseProfile:
    """Average severities over the entries logged in one cycle phase."""

    phase: CyclePhase
    sample_count: int = 0
    averages: dict[str, float] = field(default_factory=dict)


def _mean_tenths(values: list[int]) -> float:
    """Arithmetic mean rounded half-up to one decimal; 0 for no values."""
    if not values:
        return 0.0
    mean = Decimal(sum(values)) / Decimal(len(values))
    return float(mean.quantize(_TENTHS, rounding=ROUND_HALF_UP))


def _severities_of(entries: tuple[SymptomEntry, ...], attr: str) -> list[int]:
    return [getattr(entry.severities, attr) for entry in entries]


def average_of(store: EntryStore, symptom_key: str) -> float:
    """Mean severity of one symptom over every entry in the store.

    Returns 0 for an empty store; check ``len(store)`` to tell "no data" from
    "average 0".

    Args:
        store:       The entry store.
        symptom_key: Wire (``moonFace``) or attribute (``moon_face``) name.

    Raises:
        UnknownSymptomError: If the key is not a tracked symptom.
    """
    attr = resolve_symptom_key(symptom_key)
    return _mean_tenths(_severities_of(store.all(), attr))


def averages(store: EntryStore) -> dict[str, float]:
    """Whole-store averages for all six symptoms, keyed by wire name."""
    entries = store.all()
    return {
        wire: _mean_tenths(_severities_of(entries, attr))
        for attr, wire in SYMPTOM_FIELDS.items()
    }


def trailing_window(store: EntryStore, n: int) -> tuple[SymptomEntry, ...]:
    """The last ``n`` entries in insertion order (fewer if the store is smaller)."""
    return store.trailing_window(n)


def severity_band(value: int) -> SeverityBand:
    """Classify a 0–10 severity into a display band."""
    if value <= 0:
        return SeverityBand.none
    if value <= 3:
        return SeverityBand.mild
    if value <= 6:
        return SeverityBand.moderate
    return SeverityBand.severe


def dashboard_summary(
    store: EntryStore, config: TrackerConfig | None = None
) -> DashboardSummary:
    """Build the dashboard headline numbers and recent-entries list.

    Args:
        store:  The entry store.
        config: Tracker config; the global one is used when omitted.
    """
    cfg = config or get_tracker_config()
    all_averages = averages(store)
    return DashboardSummary(
        total_entries=len(store),
        averages=all_averages,
        highlights={
            name: all_averages[name] for name in cfg.dashboard.highlight_symptoms
        },
        recent_entries=store.trailing_window(cfg.windows.dashboard_recent),
    )


def phase_averages(store: EntryStore) -> dict[CyclePhase, PhaseProfile]:
    """Per-phase average severities.

    Entries without a resolvable phase are left out.  Phases with no entries
    are present with ``sample_count == 0`` and zero averages.
    """
    grouped: dict[CyclePhase, list[SymptomEntry]] = {
        phase: [] for phase in CyclePhase if phase is not CyclePhase.unknown
    }
    skipped = 0
    for entry in store.all():
        phase = entry.cycle_phase
        if phase is CyclePhase.unknown:
            skipped += 1
            continue
        grouped[phase].append(entry)

    if skipped:
        logger.debug("Left %d entries without a cycle phase out of phase averages", skipped)

    profiles: dict[CyclePhase, PhaseProfile] = {}
    for phase, entries in grouped.items():
        phase_entries = tuple(entries)
        profiles[phase] = PhaseProfile(
            phase=phase,
            sample_count=len(phase_entries),
            averages={
                wire: _mean_tenths(_severities_of(phase_entries, resolve_symptom_key(wire)))
                for wire in SYMPTOM_KEYS
            },
        )
    return profiles
