"""Shared fixtures for symptom tracker tests."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from src.symptoms.config_loader import TrackerConfig, load_tracker_config
from src.symptoms.entry import SymptomEntry, normalize_entry
from src.symptoms.store import EntryStore

# Canonical capture day used across tests
TEST_DATE = date(2026, 3, 1)


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def tracker_config() -> TrackerConfig:
    """Load the bundled tracker config."""
    return load_tracker_config()


# ---------------------------------------------------------------------------
# Store fixtures
# ---------------------------------------------------------------------------


def build_entry(
    day: date = TEST_DATE,
    cycle_day: str = "",
    **severities: int,
) -> SymptomEntry:
    return normalize_entry(
        {"date": day.isoformat(), "symptoms": severities, "cycleDay": cycle_day}
    )


@pytest.fixture
def store() -> EntryStore:
    return EntryStore()


@pytest.fixture
def month_store() -> EntryStore:
    """35 consecutive daily entries walking through a 28-day pill pack.

    Stress on day ``i`` is ``i % 11`` so every value 0–10 shows up.
    """
    labels = [f"Day {n}" for n in range(1, 22)] + [f"Break Day {n}" for n in range(1, 8)]
    s = EntryStore()
    for i in range(35):
        s.append(
            build_entry(
                TEST_DATE + timedelta(days=i),
                cycle_day=labels[i % len(labels)],
                stress=i % 11,
                fatigue=3,
            )
        )
    return s


# ---------------------------------------------------------------------------
# API fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def client() -> Iterator[TestClient]:
    """A fresh app (and so a fresh, empty entry store) per test."""
    from src.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client
