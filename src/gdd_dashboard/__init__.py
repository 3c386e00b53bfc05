"""GDD Dashboard - Growing Degree Day tracking for a crop planting.

Architecture::

    params.py       Parameter store (location, base temperature, planting date)
    datasources/    Remote GDD service client and response normalization
    controller.py   Fetch lifecycle: trigger, supersede, status, stale-discard
    views.py        Canonical series -> chart points, table rows, summary line
    renderers/      Pure data -> HTML (dashboard page with inline SVG chart)
    services/       Shared utilities (HTTP client with retry)

Data flow: params → controller → datasources (fetch + normalize) → views → renderers
"""

__version__ = "0.1.0"

from gdd_dashboard.config import Settings
from gdd_dashboard.controller import DashboardController
from gdd_dashboard.params import ParameterStore, QueryParameters

__all__ = ["DashboardController", "ParameterStore", "QueryParameters", "Settings", "__version__"]
