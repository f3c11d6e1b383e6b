"""Shared FastAPI dependencies injected into route handlers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from src.config import Settings, get_settings
from src.symptoms.config_loader import TrackerConfig, get_tracker_config
from src.symptoms.store import EntryStore


def get_entry_store(request: Request) -> EntryStore:
    """Return the entry store owned by the running application.

    ``create_app`` puts a fresh store on ``app.state`` so every app instance
    (and every test client) starts with its own empty session.
    """
    return request.app.state.entry_store


# Annotated shortcuts for route signatures
Store = Annotated[EntryStore, Depends(get_entry_store)]
Tracker = Annotated[TrackerConfig, Depends(get_tracker_config)]
AppSettings = Annotated[Settings, Depends(get_settings)]
