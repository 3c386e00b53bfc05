"""Tests for the dashboard HTML renderer."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

import gdd_dashboard.renderers.dashboard as dashboard_renderer
from gdd_dashboard.controller import DashboardState
from gdd_dashboard.datasources.gdd import DayRecord, QuerySummary, ReadingKind
from gdd_dashboard.params import QueryParameters
from gdd_dashboard.renderers.dashboard import (
    _nice_ceiling,
    build_chart_context,
    build_dashboard_html,
)
from gdd_dashboard.schemas import RequestStatus
from gdd_dashboard.views import ChartPoint, build_views


def _state(
    series: tuple[DayRecord, ...],
    summary: QuerySummary,
    status: RequestStatus = RequestStatus.SUCCESS,
    error_message: str = "",
) -> DashboardState:
    views = build_views(summary, series, status)
    return DashboardState(
        parameters=QueryParameters("Larnaca", 10.0, "2024-03-01"),
        status=status,
        error_message=error_message,
        summary=summary,
        series=series,
        summary_line=views.summary_line,
        chart_series=views.chart_series,
        table_rows=views.table_rows,
    )


SERIES = (
    DayRecord("2024-03-01", 3.0, 8.0, 18.0),
    DayRecord("2024-03-02", None, 6.0, None),
    DayRecord("2024-03-03", 4.5, -2.0, 20.0),
)


class TestBuildChartContext:
    """SVG geometry."""

    def test_gaps_split_lines(self):
        points = [
            ChartPoint("d1", 1.0, 5.0, 10.0),
            ChartPoint("d2", None, 6.0, 11.0),
            ChartPoint("d3", 2.0, 7.0, 12.0),
        ]
        chart = build_chart_context(points)
        gdd, primary, _ = chart["series"]
        assert len(gdd["segments"]) == 2
        assert len(gdd["markers"]) == 2
        assert len(primary["segments"]) == 1
        assert len(primary["segments"][0].split()) == 3

    def test_series_labels(self):
        chart = build_chart_context([], "Morning Temp (°C)", "Afternoon Temp (°C)")
        assert [s["label"] for s in chart["series"]] == [
            "Daily GDD",
            "Morning Temp (°C)",
            "Afternoon Temp (°C)",
        ]
        assert chart["empty"] is True

    def test_points_inside_plot_area(self):
        points = [ChartPoint(r.date, r.gdd, r.primary_temp, r.secondary_temp) for r in SERIES]
        chart = build_chart_context(points)
        for line in chart["series"]:
            for marker in line["markers"]:
                assert chart["margin_left"] <= marker["x"] <= chart["plot_right"]
                assert chart["margin_top"] <= marker["y"] <= chart["plot_bottom"]

    def test_x_labels_thinned(self):
        points = [ChartPoint(f"2024-03-{d:02d}", 1.0, 1.0, 2.0) for d in range(1, 31)]
        chart = build_chart_context(points)
        assert 1 < len(chart["x_labels"]) <= 8
        assert chart["x_labels"][0]["text"] == "2024-03-01"


class TestNiceCeiling:
    def test_values(self):
        assert _nice_ceiling(0) == 1
        assert _nice_ceiling(1.5) == 2
        assert _nice_ceiling(3.3) == 5
        assert _nice_ceiling(7) == 10
        assert _nice_ceiling(10) == 10
        assert _nice_ceiling(23) == 50


class TestBuildDashboardHtml:
    """Rendered page content."""

    def test_success_page(self):
        html = build_dashboard_html(_state(SERIES, QuerySummary(42.5, "Vegetative")))
        assert "DeepFarm - Growing Degree Days (GDD) Tracker" in html
        assert "Total GDD: 42.50" in html
        assert "Current Growth Stage: Vegetative" in html
        assert "<td>18.00°C</td>" in html
        assert "<td>N/A</td>" in html
        assert "Min Temp (°C)" in html
        assert html.count("<tr>") == 4  # header + three records

    def test_zero_total_hides_summary(self):
        html = build_dashboard_html(_state(SERIES, QuerySummary(0.0, "Vegetative")))
        assert "Total GDD" not in html

    def test_error_page(self):
        state = _state((), QuerySummary(), RequestStatus.ERROR, error_message="Bad <date>")
        html = build_dashboard_html(state)
        assert 'class="error">Bad &lt;date&gt;</p>' in html
        assert "Total GDD" not in html

    def test_loading_page(self):
        html = build_dashboard_html(_state((), QuerySummary(), RequestStatus.LOADING))
        assert "Loading GDD data" in html

    def test_morning_afternoon_headings(self):
        series = (DayRecord("2024-03-01", 3.0, 5.0, 15.0, ReadingKind.MORNING_AFTERNOON),)
        html = build_dashboard_html(_state(series, QuerySummary(3.0, "Emergence")))
        assert "Morning Temp (°C)" in html
        assert "Afternoon Temp (°C)" in html

    @pytest.fixture
    def mock_render(self, monkeypatch: pytest.MonkeyPatch) -> MagicMock:
        mock = MagicMock(return_value="<rendered>")
        monkeypatch.setattr(dashboard_renderer, "render_template", mock)
        return mock

    def test_template_context(self, mock_render):
        build_dashboard_html(_state(SERIES, QuerySummary(42.5, "Vegetative")))
        args, kwargs = mock_render.call_args
        assert args[0] == "dashboard.html.j2"
        assert kwargs["base_temp"] == "10"
        assert kwargs["planting_date"] == "2024-03-01"
        assert kwargs["loading"] is False
        assert kwargs["summary"] == QuerySummary(42.5, "Vegetative")
        assert len(kwargs["rows"]) == 3
