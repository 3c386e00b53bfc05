"""
Wire models for GDD service responses.

Pydantic models that parse the raw JSON leniently: a field with an unexpected
type never fails validation, it falls back to the documented default (0,
"Unknown Stage", or absent).  Normalization into the canonical series happens
in ``datasources.gdd.normalize``.
"""

from __future__ import annotations

import math
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

UNKNOWN_STAGE = "Unknown Stage"


class RequestStatus(StrEnum):
    """Lifecycle of the dashboard's current query."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


def as_number(value: Any) -> float | None:
    """Return ``value`` as a float if it is a finite JSON number, else None.

    Booleans are rejected even though Python treats them as ints.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def error_text(value: Any) -> str | None:
    """Message for a truthy ``error`` field (non-strings are stringified), else None."""
    if not value:
        return None
    return value if isinstance(value, str) else str(value)


# =============================================================================
# Per-day entries
# =============================================================================


class RawDayEntry(BaseModel):
    """One element of ``temperature_debug``, in either backend shape.

    Shape A carries ``morning_temp``/``afternoon_temp``; shape B carries
    ``tmin``/``tmax``.  Which keys were actually sent is available through
    ``model_fields_set``.
    """

    model_config = ConfigDict(extra="ignore")

    date: str | None = None
    gdd: float | None = None
    morning_temp: float | None = None
    afternoon_temp: float | None = None
    tmin: float | None = None
    tmax: float | None = None

    @field_validator("date", mode="before")
    @classmethod
    def _text_or_none(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("gdd", "morning_temp", "afternoon_temp", "tmin", "tmax", mode="before")
    @classmethod
    def _number_or_none(cls, value: Any) -> float | None:
        return as_number(value)

    @property
    def has_morning_afternoon(self) -> bool:
        return bool({"morning_temp", "afternoon_temp"} & self.model_fields_set)


# =============================================================================
# Whole response
# =============================================================================


class RawResponse(BaseModel):
    """Top-level GDD service response, shared by both backend versions."""

    model_config = ConfigDict(extra="ignore")

    error: str | None = None
    total_gdd: float = 0.0
    growth_stage: str = UNKNOWN_STAGE
    temperature_debug: list[RawDayEntry] | None = None

    @field_validator("error", mode="before")
    @classmethod
    def _error_message(cls, value: Any) -> str | None:
        return error_text(value)

    @field_validator("total_gdd", mode="before")
    @classmethod
    def _total_or_zero(cls, value: Any) -> float:
        return as_number(value) or 0.0

    @field_validator("growth_stage", mode="before")
    @classmethod
    def _stage_or_unknown(cls, value: Any) -> str:
        return value if isinstance(value, str) and value else UNKNOWN_STAGE

    @field_validator("temperature_debug", mode="before")
    @classmethod
    def _entries_or_none(cls, value: Any) -> list[dict[str, Any]] | None:
        if not isinstance(value, list):
            return None
        # Keep one slot per element so the series length matches the input.
        return [entry if isinstance(entry, dict) else {} for entry in value]
