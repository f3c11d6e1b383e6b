"""Canonical symptom entry model and the normalizer that builds it.

A capture surface hands over loosely-typed fields (slider values, free text,
a cycle-day selection, maybe a photo).  ``normalize_entry`` turns them into an
immutable ``SymptomEntry`` whose severities are always six integers in
[0, 10] and whose cycle phase is derived from the cycle-day label.

Usage::

    entry = normalize_entry({
        "date": "2026-03-05",
        "symptoms": {"stress": 7, "moonFace": 2},
        "cycleDay": "Day 16",
        "notes": "long day",
    })
    entry.cycle_phase        # CyclePhase.luteal
    entry.severities.acne    # 0
"""

from __future__ import annotations

import base64
import logging
from collections.abc import Mapping
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from pydantic import Field, computed_field, field_serializer

from src.models.base import FrozenTrackerBase
from src.symptoms.phase import CyclePhase, resolve_phase

logger = logging.getLogger("pcos_tracker.symptoms.entry")

SEVERITY_MIN = 0
SEVERITY_MAX = 10

# attribute name → wire name, in display order
SYMPTOM_FIELDS: dict[str, str] = {
    "acne": "acne",
    "moon_face": "moonFace",
    "bloating": "bloating",
    "stress": "stress",
    "eczema": "eczema",
    "fatigue": "fatigue",
}

SYMPTOM_KEYS: tuple[str, ...] = tuple(SYMPTOM_FIELDS.values())

_WIRE_TO_ATTR = {wire: attr for attr, wire in SYMPTOM_FIELDS.items()}


class EntryValidationError(ValueError):
    """Raised when a captured field cannot be turned into an entry at all."""


class UnknownSymptomError(ValueError):
    """Raised when a symptom key is not one of the six tracked symptoms."""


def resolve_symptom_key(key: str) -> str:
    """Return the attribute name for a symptom given its wire or attribute name.

    Raises:
        UnknownSymptomError: If the key is not a tracked symptom.
    """
    if key in SYMPTOM_FIELDS:
        return key
    if key in _WIRE_TO_ATTR:
        return _WIRE_TO_ATTR[key]
    raise UnknownSymptomError(
        f"Unknown symptom {key!r}; expected one of {', '.join(SYMPTOM_KEYS)}"
    )


def wire_symptom_key(key: str) -> str:
    """Return the wire (camelCase) name for a symptom key."""
    return SYMPTOM_FIELDS[resolve_symptom_key(key)]


class SymptomSeverities(FrozenTrackerBase):
    """Six self-reported severities, each on a 0–10 scale."""

    acne: int = Field(default=0, ge=SEVERITY_MIN, le=SEVERITY_MAX)
    moon_face: int = Field(default=0, ge=SEVERITY_MIN, le=SEVERITY_MAX, alias="moonFace")
    bloating: int = Field(default=0, ge=SEVERITY_MIN, le=SEVERITY_MAX)
    stress: int = Field(default=0, ge=SEVERITY_MIN, le=SEVERITY_MAX)
    eczema: int = Field(default=0, ge=SEVERITY_MIN, le=SEVERITY_MAX)
    fatigue: int = Field(default=0, ge=SEVERITY_MIN, le=SEVERITY_MAX)

    def get(self, key: str) -> int:
        return getattr(self, resolve_symptom_key(key))

    def as_dict(self) -> dict[str, int]:
        """Severities keyed by wire name."""
        return {wire: getattr(self, attr) for attr, wire in SYMPTOM_FIELDS.items()}


class SymptomEntry(FrozenTrackerBase):
    """One day's normalized symptom and cycle record.

    Attributes:
        entry_date:      Calendar day the entry describes (wire name ``date``).
                         Not unique; several entries may share a day.
        severities:      The six symptom severities (wire name ``symptoms``).
        emotional_event: Free-text emotional event or trigger.
        cycle_day:       Cycle-day label, e.g. ``"Day 3"`` or ``"Break Day 2"``.
        notes:           Free-text notes.
        photo:           Opaque image reference, either an encoded string
                         (e.g. a data URL) or raw image bytes.  Absent when
                         no photo was captured.
        cycle_phase:     Derived from ``cycle_day`` on every read.
    """

    entry_date: date = Field(alias="date")
    severities: SymptomSeverities = Field(default_factory=SymptomSeverities, alias="symptoms")
    emotional_event: str = Field(default="", alias="emotionalEvent")
    cycle_day: str = Field(default="", alias="cycleDay")
    notes: str = ""
    photo: str | bytes | None = None

    @computed_field(alias="cyclePhase")  # type: ignore[prop-decorator]
    @property
    def cycle_phase(self) -> CyclePhase:
        return resolve_phase(self.cycle_day)

    @property
    def has_photo(self) -> bool:
        return self.photo is not None

    @property
    def encoded_photo(self) -> str | None:
        """The photo as text; raw bytes are base64-encoded."""
        if isinstance(self.photo, bytes):
            return base64.b64encode(self.photo).decode("ascii")
        return self.photo

    @field_serializer("photo", when_used="json")
    def _serialize_photo(self, photo: str | bytes | None) -> str | None:
        return self.encoded_photo

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict using wire names; ``photo`` is left out when absent."""
        exclude = None if self.has_photo else {"photo"}
        return self.model_dump(mode="json", by_alias=True, exclude=exclude)


# ---------------------------------------------------------------------------
# Normalizer
# ---------------------------------------------------------------------------


def _pick(raw: Mapping[str, Any], *names: str) -> Any:
    """Return the first present value among alternative field names."""
    for name in names:
        if name in raw:
            return raw[name]
    return None


def _coerce_severity(symptom: str, value: Any) -> int:
    """Turn any captured severity into an integer in [0, 10].

    Absent or non-numeric values become 0; fractional values round half-up;
    out-of-range values are clamped.
    """
    if value is None:
        return SEVERITY_MIN
    if isinstance(value, bool):
        value = int(value)

    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        logger.warning("Non-numeric severity %r for %s; using 0", value, symptom)
        return SEVERITY_MIN

    if number.is_nan():
        logger.warning("NaN severity for %s; using 0", symptom)
        return SEVERITY_MIN
    if number > SEVERITY_MAX or number < SEVERITY_MIN:
        clamped = SEVERITY_MAX if number > SEVERITY_MAX else SEVERITY_MIN
        logger.warning("Severity %s for %s out of range; clamped to %d", value, symptom, clamped)
        return clamped

    return int(number.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _coerce_severities(raw: Any) -> SymptomSeverities:
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        logger.warning("Ignoring severities of type %s", type(raw).__name__)
        raw = {}

    values: dict[str, int] = {}
    for attr, wire in SYMPTOM_FIELDS.items():
        values[attr] = _coerce_severity(wire, _pick(raw, wire, attr))
    return SymptomSeverities(**values)


def _coerce_date(value: Any, today: date | None) -> date:
    if value is None or value == "":
        return today or date.today()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError as exc:
        raise EntryValidationError(f"Unparsable entry date: {value!r}") from exc


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def normalize_entry(raw: Mapping[str, Any], today: date | None = None) -> SymptomEntry:
    """Build a canonical SymptomEntry from raw captured fields.

    Accepts wire names (``emotionalEvent``, ``cycleDay``, ``symptoms``) or
    attribute names (``emotional_event``, ``cycle_day``, ``severities``).  Any
    supplied ``cyclePhase`` is ignored; the phase is always derived.

    Args:
        raw:   Captured fields.
        today: Capture day used when ``date`` is absent.  Defaults to the
               local current date.

    Returns:
        A new immutable SymptomEntry.  Nothing is stored.

    Raises:
        EntryValidationError: If ``date`` is present but unparsable.
    """
    fields: dict[str, Any] = {
        "entry_date": _coerce_date(_pick(raw, "date", "entry_date"), today),
        "severities": _coerce_severities(_pick(raw, "symptoms", "severities")),
        "emotional_event": _text(_pick(raw, "emotionalEvent", "emotional_event")),
        "cycle_day": _text(_pick(raw, "cycleDay", "cycle_day")),
        "notes": _text(raw.get("notes")),
    }

    photo = raw.get("photo")
    if photo not in (None, "", b""):
        fields["photo"] = photo

    entry = SymptomEntry(**fields)
    if entry.cycle_day and entry.cycle_phase is CyclePhase.unknown:
        logger.warning("Cycle day %r has no known phase; keeping it as entered", entry.cycle_day)
    logger.debug(
        "Normalized entry for %s (cycle day %r → %r)",
        entry.entry_date,
        entry.cycle_day,
        entry.cycle_phase.value,
    )
    return entry
