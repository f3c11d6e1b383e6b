"""Cycle-day vocabulary and phase preview for capture forms."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query

from src.models.symptoms import CycleDaysRead, CyclePhaseRead
from src.symptoms.phase import cycle_day_labels, resolve_phase

router = APIRouter(prefix="/cycle", tags=["cycle"])


@router.get("/days", response_model=CycleDaysRead)
async def list_cycle_days() -> Any:
    return CycleDaysRead(labels=list(cycle_day_labels()))


@router.get("/phase", response_model=CyclePhaseRead)
async def preview_phase(cycle_day: str = Query(default="", alias="cycleDay")) -> Any:
    """Phase a label would resolve to, before the entry is submitted."""
    return CyclePhaseRead(cycle_day=cycle_day, cycle_phase=resolve_phase(cycle_day))
