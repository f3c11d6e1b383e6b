"""Chart-ready point series built from windows of symptom entries.

Every point carries the full set of severities so each symptom's line is read
off the same shared points.  Points keep the order of the window they were
built from; nothing is re-sorted by calendar date.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date

from src.symptoms.config_loader import TrackerConfig, get_tracker_config
from src.symptoms.entry import (
    SYMPTOM_KEYS,
    SymptomEntry,
    SymptomSeverities,
    resolve_symptom_key,
    wire_symptom_key,
)
from src.symptoms.phase import CyclePhase
from src.symptoms.store import EntryStore

logger = logging.getLogger("pcos_tracker.symptoms.series")

_MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def date_label(day: date) -> str:
    """Short axis label, e.g. ``"Mar 5"``."""
    return f"{_MONTH_ABBR[day.month - 1]} {day.day}"


@dataclass(frozen=True)
class ChartPoint:
    """One x-axis position of a symptom chart.

    Attributes:
        date_label:  Short human-readable date (``"Mar 5"``).
        iso_date:    The entry date as ``YYYY-MM-DD``.
        cycle_day:   Cycle-day label of the entry (may be empty).
        cycle_phase: Phase derived from ``cycle_day``.
        severities:  All six severities of the entry.
        values:      Severities of the requested symptoms, by wire name.
    """

    date_label: str
    iso_date: str
    cycle_day: str
    cycle_phase: CyclePhase
    severities: SymptomSeverities
    values: dict[str, int] = field(default_factory=dict)

    @property
    def display_label(self) -> str:
        """Axis label with the phase appended when known, e.g. ``"Mar 5 (Luteal)"``."""
        if self.cycle_phase is CyclePhase.unknown:
            return self.date_label
        return f"{self.date_label} ({self.cycle_phase.value})"


def build_series(
    window: Iterable[SymptomEntry],
    symptom_keys: Sequence[str] | None = None,
) -> list[ChartPoint]:
    """Turn a window of entries into chart points, one per entry, same order.

    Args:
        window:       Entries to plot, typically a trailing window.
        symptom_keys: Symptoms exposed in each point's ``values``.  All six
                      when omitted.

    Raises:
        UnknownSymptomError: If any requested symptom is not tracked.
    """
    keys = SYMPTOM_KEYS if symptom_keys is None else tuple(
        wire_symptom_key(key) for key in symptom_keys
    )

    points = []
    for entry in window:
        points.append(
            ChartPoint(
                date_label=date_label(entry.entry_date),
                iso_date=entry.entry_date.isoformat(),
                cycle_day=entry.cycle_day,
                cycle_phase=entry.cycle_phase,
                severities=entry.severities,
                values={key: entry.severities.get(key) for key in keys},
            )
        )
    return points


def series_values(points: Iterable[ChartPoint], symptom_key: str) -> list[int]:
    """One symptom's line, read off shared chart points."""
    attr = resolve_symptom_key(symptom_key)
    return [getattr(point.severities, attr) for point in points]


class SeriesBuilder:
    """Build the two standard charts from a store using configured windows.

    Usage::

        builder = SeriesBuilder()
        stress = builder.symptom_chart(store, "stress")   # last 30 entries
        overview = builder.overview_chart(store)          # last 14 entries
    """

    def __init__(self, config: TrackerConfig | None = None) -> None:
        self._config = config or get_tracker_config()

    @property
    def symptom_window(self) -> int:
        return self._config.windows.symptom_chart

    @property
    def overview_window(self) -> int:
        return self._config.windows.overview_chart

    def symptom_chart(
        self,
        store: EntryStore,
        symptom_key: str,
        window_size: int | None = None,
    ) -> list[ChartPoint]:
        """Points for a single selected symptom over the wide window."""
        size = window_size if window_size is not None else self.symptom_window
        points = build_series(store.trailing_window(size), [symptom_key])
        logger.debug("Built %s chart: %d points (window %d)", symptom_key, len(points), size)
        return points

    def overview_chart(
        self, store: EntryStore, window_size: int | None = None
    ) -> list[ChartPoint]:
        """Points for all symptoms over the narrow window."""
        size = window_size if window_size is not None else self.overview_window
        points = build_series(store.trailing_window(size))
        logger.debug("Built overview chart: %d points (window %d)", len(points), size)
        return points
