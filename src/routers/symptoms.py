"""Symptom log endpoints: capture entries, read averages, dashboard and charts."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Query

from src.dependencies import Store, Tracker
from src.models.base import ErrorDetail
from src.models.symptoms import (
    AveragesRead,
    ChartPointRead,
    DashboardRead,
    PhaseProfileRead,
    SeriesRead,
    SymptomEntryCreate,
    SymptomEntryRead,
)
from src.symptoms.aggregation import averages, dashboard_summary, phase_averages
from src.symptoms.entry import (
    EntryValidationError,
    UnknownSymptomError,
    normalize_entry,
    wire_symptom_key,
)
from src.symptoms.series import SeriesBuilder

router = APIRouter(prefix="/symptoms", tags=["symptoms"])
logger = logging.getLogger("pcos_tracker.routers.symptoms")


@router.post(
    "/entries",
    response_model=SymptomEntryRead,
    response_model_exclude_none=True,
    status_code=201,
    responses={422: {"model": ErrorDetail}},
)
async def create_entry(store: Store, body: SymptomEntryCreate) -> Any:
    try:
        entry = normalize_entry(body.raw_fields())
    except EntryValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    store.append(entry)
    logger.info("Logged entry for %s (%d total)", entry.entry_date, len(store))
    return SymptomEntryRead.from_entry(entry)


@router.get("/entries", response_model=list[SymptomEntryRead], response_model_exclude_none=True)
async def list_entries(
    store: Store,
    limit: int | None = Query(default=None, ge=1),
) -> Any:
    entries = store.all() if limit is None else store.trailing_window(limit)
    return [SymptomEntryRead.from_entry(e) for e in entries]


@router.get("/averages", response_model=AveragesRead)
async def get_averages(store: Store) -> Any:
    return AveragesRead(total_entries=len(store), averages=averages(store))


@router.get("/dashboard", response_model=DashboardRead, response_model_exclude_none=True)
async def get_dashboard(store: Store, config: Tracker) -> Any:
    summary = dashboard_summary(store, config)
    return DashboardRead(
        total_entries=summary.total_entries,
        averages=summary.averages,
        highlights=summary.highlights,
        recent_entries=[SymptomEntryRead.from_entry(e) for e in summary.recent_entries],
    )


@router.get("/phases", response_model=list[PhaseProfileRead])
async def get_phase_profiles(store: Store) -> Any:
    return [PhaseProfileRead.from_profile(p) for p in phase_averages(store).values()]


@router.get("/series/overview", response_model=SeriesRead)
async def get_overview_series(
    store: Store,
    config: Tracker,
    window: int | None = Query(default=None, ge=1),
) -> Any:
    builder = SeriesBuilder(config)
    size = window if window is not None else builder.overview_window
    points = builder.overview_chart(store, size)
    return SeriesRead(window=size, points=[ChartPointRead.from_point(p) for p in points])


@router.get(
    "/series/{symptom}",
    response_model=SeriesRead,
    responses={404: {"model": ErrorDetail}},
)
async def get_symptom_series(
    symptom: str,
    store: Store,
    config: Tracker,
    window: int | None = Query(default=None, ge=1),
) -> Any:
    builder = SeriesBuilder(config)
    size = window if window is not None else builder.symptom_window
    try:
        points = builder.symptom_chart(store, symptom, size)
    except UnknownSymptomError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return SeriesRead(
        symptom=wire_symptom_key(symptom),
        window=size,
        points=[ChartPointRead.from_point(p) for p in points],
    )
