"""Canonical GDD series models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from gdd_dashboard.schemas import UNKNOWN_STAGE


class ReadingKind(Enum):
    """What the two temperature slots of a :class:`DayRecord` hold.

    Value is ``(primary_key, secondary_key, primary_heading, secondary_heading)``.
    """

    MORNING_AFTERNOON = ("morning", "afternoon", "Morning Temp (°C)", "Afternoon Temp (°C)")
    MIN_MAX = ("min", "max", "Min Temp (°C)", "Max Temp (°C)")

    @property
    def keys(self) -> tuple[str, str]:
        return self.value[0], self.value[1]

    @property
    def headings(self) -> tuple[str, str]:
        return self.value[2], self.value[3]


@dataclass(frozen=True)
class DayRecord:
    """One day of the GDD series, independent of backend version.

    ``None`` means the backend sent no usable value, which is distinct from 0.
    """

    date: str | None
    gdd: float | None = None
    primary_temp: float | None = None
    secondary_temp: float | None = None
    reading: ReadingKind = ReadingKind.MIN_MAX


@dataclass(frozen=True)
class QuerySummary:
    """Scalar results of a query."""

    total_gdd: float = 0.0
    growth_stage: str = UNKNOWN_STAGE


@dataclass(frozen=True)
class NormalizedResponse:
    """A successful response in canonical form."""

    summary: QuerySummary = field(default_factory=QuerySummary)
    series: tuple[DayRecord, ...] = ()
