"""Render-ready projections of the canonical GDD series.

Pure functions: canonical records in, chart points / table rows / summary
text out.  No I/O and no HTML; see ``renderers`` for markup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gdd_dashboard.datasources.gdd.models import ReadingKind
from gdd_dashboard.schemas import RequestStatus

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gdd_dashboard.datasources.gdd.models import DayRecord, QuerySummary

NOT_AVAILABLE = "N/A"
CELSIUS = "°C"


@dataclass(frozen=True)
class ChartPoint:
    """One x position of the chart; ``None`` values are drawn as gaps."""

    date: str | None
    gdd: float | None
    primary_temp: float | None
    secondary_temp: float | None


@dataclass(frozen=True)
class TableRow:
    """One row of the daily records table, already formatted as text."""

    date: str
    gdd: str
    primary: str
    secondary: str
    reading: ReadingKind = ReadingKind.MIN_MAX

    def as_dict(self) -> dict[str, str]:
        """Row keyed by column name, e.g. ``{"date", "gdd", "min", "max"}``."""
        primary_key, secondary_key = self.reading.keys
        return {
            "date": self.date,
            "gdd": self.gdd,
            primary_key: self.primary,
            secondary_key: self.secondary,
        }


@dataclass(frozen=True)
class DerivedViews:
    """Everything the presentation layer needs from one query result."""

    chart_series: list[ChartPoint] = field(default_factory=list)
    table_rows: list[TableRow] = field(default_factory=list)
    summary_line: str | None = None


def format_value(value: float | None, suffix: str = "") -> str:
    """Two-decimal text for a reading, or ``"N/A"`` when absent."""
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.2f}{suffix}"


def format_summary_line(summary: QuerySummary) -> str:
    return f"Total GDD: {summary.total_gdd:.2f} | Current Growth Stage: {summary.growth_stage}"


def build_views(
    summary: QuerySummary,
    series: Sequence[DayRecord],
    status: RequestStatus = RequestStatus.SUCCESS,
) -> DerivedViews:
    """Project a query result into chart, table and summary views.

    The summary line is only produced for a successful query with a positive
    total; a zero or negative total hides the summary block entirely.

    Args:
        summary: Total GDD and growth stage.
        series: Canonical day records, in backend order.
        status: Current request status.

    Returns:
        DerivedViews with one chart point and one table row per record.
    """
    chart_series = [
        ChartPoint(
            date=record.date,
            gdd=record.gdd,
            primary_temp=record.primary_temp,
            secondary_temp=record.secondary_temp,
        )
        for record in series
    ]
    table_rows = [
        TableRow(
            date=record.date if record.date is not None else NOT_AVAILABLE,
            gdd=format_value(record.gdd),
            primary=format_value(record.primary_temp, CELSIUS),
            secondary=format_value(record.secondary_temp, CELSIUS),
            reading=record.reading,
        )
        for record in series
    ]
    summary_line = None
    if status == RequestStatus.SUCCESS and summary.total_gdd > 0:
        summary_line = format_summary_line(summary)
    return DerivedViews(chart_series=chart_series, table_rows=table_rows, summary_line=summary_line)


def table_headings(series: Sequence[DayRecord]) -> tuple[str, str, str, str]:
    """Column headings for the records table, labelled by the first record's reading."""
    reading = series[0].reading if series else ReadingKind.MIN_MAX
    primary, secondary = reading.headings
    return "Date", "Daily GDD", primary, secondary
