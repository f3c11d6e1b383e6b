"""Cycle-aware symptom tracking core.

Records daily symptom severities next to a birth-control cycle position and
derives averages and chart series from them.  Everything here is synchronous
and works on in-memory data only.

Modules:
    phase         — Cycle-day label → cycle phase
    entry         — Canonical SymptomEntry and the raw-field normalizer
    store         — Append-only, insertion-ordered EntryStore
    aggregation   — Averages, trailing windows, severity bands, dashboard
    series        — Chart point series per symptom
    config_loader — Load/validate/hot-reload tracker_config.yaml
"""

from src.symptoms.aggregation import (
    DashboardSummary,
    PhaseProfile,
    SeverityBand,
    average_of,
    averages,
    dashboard_summary,
    phase_averages,
    severity_band,
    trailing_window,
)
from src.symptoms.config_loader import TrackerConfig, get_tracker_config
from src.symptoms.entry import (
    SYMPTOM_KEYS,
    EntryValidationError,
    SymptomEntry,
    SymptomSeverities,
    UnknownSymptomError,
    normalize_entry,
)
from src.symptoms.phase import CyclePhase, cycle_day_labels, resolve_phase
from src.symptoms.series import ChartPoint, SeriesBuilder, build_series, series_values
from src.symptoms.store import EntryStore

__all__ = [
    "CyclePhase",
    "resolve_phase",
    "cycle_day_labels",
    "SYMPTOM_KEYS",
    "SymptomSeverities",
    "SymptomEntry",
    "EntryValidationError",
    "UnknownSymptomError",
    "normalize_entry",
    "EntryStore",
    "SeverityBand",
    "DashboardSummary",
    "PhaseProfile",
    "average_of",
    "averages",
    "trailing_window",
    "severity_band",
    "dashboard_summary",
    "phase_averages",
    "ChartPoint",
    "SeriesBuilder",
    "build_series",
    "series_values",
    "TrackerConfig",
    "get_tracker_config",
]
