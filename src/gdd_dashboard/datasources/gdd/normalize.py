"""Map either GDD service response shape onto the canonical series.

Two backend versions are live at once and differ only in their per-day
entries:

- morning/afternoon: ``{"date", "morning_temp", "afternoon_temp", "gdd"}``
- min/max:           ``{"date", "tmin", "tmax", "gdd"}`` (plus an ignored
  top-level ``daily_gdd`` array)

Each entry is classified on its own by which keys it carries, so a response
that mixes shapes row by row still normalizes correctly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from gdd_dashboard.datasources.gdd.models import (
    DayRecord,
    NormalizedResponse,
    QuerySummary,
    ReadingKind,
)
from gdd_dashboard.errors import BackendReportedError
from gdd_dashboard.schemas import RawDayEntry, RawResponse, error_text

if TYPE_CHECKING:
    from collections.abc import Mapping


def normalize(raw: Mapping[str, Any]) -> NormalizedResponse:
    """Convert a decoded GDD response into summary + canonical series.

    Args:
        raw: The JSON object returned by the service. It is not modified.

    Returns:
        NormalizedResponse with defaults substituted for missing or
        malformed top-level fields.

    Raises:
        BackendReportedError: If the response carries a truthy ``error``.
    """
    message = error_text(raw.get("error"))
    if message is not None:
        raise BackendReportedError(message)

    parsed = RawResponse.model_validate(dict(raw))
    summary = QuerySummary(total_gdd=parsed.total_gdd, growth_stage=parsed.growth_stage)
    series = tuple(to_day_record(entry) for entry in parsed.temperature_debug or [])
    return NormalizedResponse(summary=summary, series=series)


def to_day_record(entry: RawDayEntry) -> DayRecord:
    """Place one entry's temperatures into the shape-neutral slots."""
    if entry.has_morning_afternoon:
        return DayRecord(
            date=entry.date,
            gdd=entry.gdd,
            primary_temp=entry.morning_temp,
            secondary_temp=entry.afternoon_temp,
            reading=ReadingKind.MORNING_AFTERNOON,
        )
    return DayRecord(
        date=entry.date,
        gdd=entry.gdd,
        primary_temp=entry.tmin,
        secondary_temp=entry.tmax,
        reading=ReadingKind.MIN_MAX,
    )
