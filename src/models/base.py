"""Shared Pydantic base models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class TrackerBase(BaseModel):
    """Base model with shared config for all tracker schemas.

    Wire names are camelCase (``moonFace``, ``cycleDay``); Python code may use
    either the alias or the snake_case attribute name.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class FrozenTrackerBase(TrackerBase):
    """Immutable variant for canonical domain records.

    Stored text (free-text notes, photo payloads) is kept exactly as given.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=False)


class ErrorDetail(BaseModel):
    detail: str
