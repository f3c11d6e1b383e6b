"""Request and response schemas for the symptom and cycle endpoints.

Field names on the wire are camelCase, matching the capture and chart
surfaces (``emotionalEvent``, ``cycleDay``, ``displayLabel``).
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import ConfigDict, Field

from src.models.base import TrackerBase
from src.symptoms.aggregation import PhaseProfile, SeverityBand, severity_band
from src.symptoms.entry import SymptomEntry
from src.symptoms.phase import CyclePhase
from src.symptoms.series import ChartPoint


# ---------- Entries ----------

class SymptomEntryCreate(TrackerBase):
    """Raw captured fields.  Deliberately loose: the normalizer clamps and
    defaults instead of rejecting."""

    entry_date: Any = Field(default=None, alias="date")
    symptoms: Any = None
    emotional_event: Any = Field(default=None, alias="emotionalEvent")
    cycle_day: Any = Field(default=None, alias="cycleDay")
    notes: Any = None
    photo: Any = None

    def raw_fields(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class SymptomEntryRead(TrackerBase):
    model_config = ConfigDict(str_strip_whitespace=False)

    entry_date: date = Field(alias="date")
    symptoms: dict[str, int]
    severity_bands: dict[str, SeverityBand] = Field(alias="severityBands")
    emotional_event: str = Field(alias="emotionalEvent")
    cycle_day: str = Field(alias="cycleDay")
    cycle_phase: CyclePhase = Field(alias="cyclePhase")
    notes: str
    photo: str | None = None

    @classmethod
    def from_entry(cls, entry: SymptomEntry) -> SymptomEntryRead:
        severities = entry.severities.as_dict()
        return cls(
            entry_date=entry.entry_date,
            symptoms=severities,
            severity_bands={name: severity_band(v) for name, v in severities.items()},
            emotional_event=entry.emotional_event,
            cycle_day=entry.cycle_day,
            cycle_phase=entry.cycle_phase,
            notes=entry.notes,
            photo=entry.encoded_photo,
        )


# ---------- Aggregates ----------

class AveragesRead(TrackerBase):
    total_entries: int = Field(alias="totalEntries")
    averages: dict[str, float]


class DashboardRead(TrackerBase):
    total_entries: int = Field(alias="totalEntries")
    averages: dict[str, float]
    highlights: dict[str, float]
    recent_entries: list[SymptomEntryRead] = Field(alias="recentEntries")


class PhaseProfileRead(TrackerBase):
    phase: CyclePhase
    sample_count: int = Field(alias="sampleCount")
    averages: dict[str, float]

    @classmethod
    def from_profile(cls, profile: PhaseProfile) -> PhaseProfileRead:
        return cls(
            phase=profile.phase,
            sample_count=profile.sample_count,
            averages=profile.averages,
        )


# ---------- Series ----------

class ChartPointRead(TrackerBase):
    date_label: str = Field(alias="date")
    full_date: str = Field(alias="fullDate")
    cycle_day: str = Field(alias="cycleDay")
    cycle_phase: CyclePhase = Field(alias="cyclePhase")
    display_label: str = Field(alias="displayLabel")
    symptoms: dict[str, int]
    values: dict[str, int]

    @classmethod
    def from_point(cls, point: ChartPoint) -> ChartPointRead:
        return cls(
            date_label=point.date_label,
            full_date=point.iso_date,
            cycle_day=point.cycle_day,
            cycle_phase=point.cycle_phase,
            display_label=point.display_label,
            symptoms=point.severities.as_dict(),
            values=point.values,
        )


class SeriesRead(TrackerBase):
    symptom: str | None = None
    window: int
    points: list[ChartPointRead]


# ---------- Cycle ----------

class CyclePhaseRead(TrackerBase):
    cycle_day: str = Field(alias="cycleDay")
    cycle_phase: CyclePhase = Field(alias="cyclePhase")


class CycleDaysRead(TrackerBase):
    labels: list[str]
