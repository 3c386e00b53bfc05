"""GDD dashboard page renderer.

One self-contained HTML page: query parameters, status message, summary
block, an inline SVG line chart (daily GDD on the left axis, the two
temperature readings on the right axis) and the daily records table.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from gdd_dashboard.params import format_number
from gdd_dashboard.renderers import render_template
from gdd_dashboard.schemas import RequestStatus
from gdd_dashboard.views import table_headings

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from gdd_dashboard.controller import DashboardState
    from gdd_dashboard.views import ChartPoint

TITLE = "DeepFarm - Growing Degree Days (GDD) Tracker"

# Line colours, matching the original dashboard chart
GDD_COLOR = "#8884d8"
PRIMARY_COLOR = "#82ca9d"
SECONDARY_COLOR = "#ff7300"

# SVG dimensions
SVG_WIDTH = 760
SVG_HEIGHT = 320
MARGIN_LEFT = 55
MARGIN_RIGHT = 60
MARGIN_TOP = 20
MARGIN_BOTTOM = 40
MAX_X_LABELS = 8


def build_dashboard_html(state: DashboardState) -> str:
    """Render the full dashboard page for a controller snapshot."""
    params = state.parameters
    primary_heading, secondary_heading = table_headings(state.series)[2:]
    return render_template(
        "dashboard.html.j2",
        title=TITLE,
        location=params.location,
        base_temp=format_number(params.base_temperature),
        planting_date=params.planting_date or "not set",
        loading=state.status == RequestStatus.LOADING,
        error_message=state.error_message,
        summary=state.summary if state.summary_line else None,
        headings=table_headings(state.series),
        rows=state.table_rows,
        chart=build_chart_context(state.chart_series, primary_heading, secondary_heading),
    )


def build_chart_context(
    points: Sequence[ChartPoint],
    primary_label: str = "Min Temp (°C)",
    secondary_label: str = "Max Temp (°C)",
) -> dict[str, Any]:
    """Compute SVG geometry for the GDD & temperature chart.

    Absent values break a line into separate segments rather than being
    plotted as zero.

    Returns:
        Template context: axis ticks, x labels and one entry per series with
        its polyline segments and point markers.
    """
    plot_right = SVG_WIDTH - MARGIN_RIGHT
    plot_bottom = SVG_HEIGHT - MARGIN_BOTTOM
    plot_width = plot_right - MARGIN_LEFT
    plot_height = plot_bottom - MARGIN_TOP

    gdd_values = [p.gdd for p in points]
    temp_values = [p.primary_temp for p in points] + [p.secondary_temp for p in points]

    gdd_max = _nice_ceiling(max((v for v in gdd_values if v is not None), default=0.0) * 1.1)
    present_temps = [v for v in temp_values if v is not None]
    lowest = min(present_temps, default=0.0)
    temp_min = -_nice_ceiling(-lowest) if lowest < 0 else 0.0
    temp_max = _nice_ceiling(max(present_temps, default=0.0) * 1.1)

    def x_for(index: int) -> float:
        if len(points) <= 1:
            return MARGIN_LEFT + plot_width / 2
        return MARGIN_LEFT + index / (len(points) - 1) * plot_width

    def y_for_gdd(value: float) -> float:
        return plot_bottom - (value / gdd_max) * plot_height

    def y_for_temp(value: float) -> float:
        return plot_bottom - (value - temp_min) / (temp_max - temp_min) * plot_height

    n_ticks = 5
    gdd_ticks = []
    temp_ticks = []
    for i in range(n_ticks + 1):
        gdd_val = gdd_max * i / n_ticks
        temp_val = temp_min + (temp_max - temp_min) * i / n_ticks
        gdd_ticks.append({"y": round(y_for_gdd(gdd_val), 1), "label": _tick_label(gdd_val)})
        temp_ticks.append({"y": round(y_for_temp(temp_val), 1), "label": _tick_label(temp_val)})

    step = max(1, math.ceil(len(points) / MAX_X_LABELS))
    x_labels = [
        {"x": round(x_for(i), 1), "text": p.date or ""}
        for i, p in enumerate(points)
        if i % step == 0
    ]

    series = [
        _series("Daily GDD", GDD_COLOR, gdd_values, x_for, y_for_gdd),
        _series(primary_label, PRIMARY_COLOR, [p.primary_temp for p in points], x_for, y_for_temp),
        _series(
            secondary_label, SECONDARY_COLOR, [p.secondary_temp for p in points], x_for, y_for_temp
        ),
    ]

    return {
        "width": SVG_WIDTH,
        "height": SVG_HEIGHT,
        "margin_left": MARGIN_LEFT,
        "margin_top": MARGIN_TOP,
        "plot_right": plot_right,
        "plot_bottom": plot_bottom,
        "gdd_ticks": gdd_ticks,
        "temp_ticks": temp_ticks,
        "x_labels": x_labels,
        "series": series,
        "empty": not points,
    }


def _series(
    label: str,
    color: str,
    values: Sequence[float | None],
    x_fn: Callable[[int], float],
    y_fn: Callable[[float], float],
) -> dict[str, Any]:
    """One chart line: polyline segments split at gaps, plus point markers."""
    segments: list[str] = []
    markers: list[dict[str, float]] = []
    current: list[str] = []
    for i, value in enumerate(values):
        if value is None:
            if current:
                segments.append(" ".join(current))
                current = []
            continue
        x, y = x_fn(i), y_fn(value)
        current.append(f"{x:.1f},{y:.1f}")
        markers.append({"x": round(x, 1), "y": round(y, 1)})
    if current:
        segments.append(" ".join(current))
    return {"label": label, "color": color, "segments": segments, "markers": markers}


def _nice_ceiling(value: float) -> float:
    """Round up to 1, 2 or 5 times a power of ten (minimum 1) for axis scaling."""
    if value <= 1:
        return 1.0
    magnitude = 10 ** math.floor(math.log10(value))
    for factor in (1, 2, 5, 10):
        if factor * magnitude >= value:
            return float(factor * magnitude)
    return float(10 * magnitude)


def _tick_label(value: float) -> str:
    return f"{value:.0f}" if abs(value) >= 10 or value == 0 else f"{value:.1f}"
