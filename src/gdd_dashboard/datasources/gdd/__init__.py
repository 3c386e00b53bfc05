"""Remote GDD computation service.

The service owns weather sourcing, degree-day accumulation and growth-stage
classification. This package only fetches its answer and normalizes it.

Public API:
  - models: DayRecord, QuerySummary, NormalizedResponse, ReadingKind
  - client: fetch_gdd, gdd_url
  - normalize: normalize, to_day_record
"""

from gdd_dashboard.datasources.gdd.client import GDD_PATH, fetch_gdd, gdd_url
from gdd_dashboard.datasources.gdd.models import (
    DayRecord,
    NormalizedResponse,
    QuerySummary,
    ReadingKind,
)
from gdd_dashboard.datasources.gdd.normalize import normalize, to_day_record

__all__ = [
    "GDD_PATH",
    "DayRecord",
    "NormalizedResponse",
    "QuerySummary",
    "ReadingKind",
    "fetch_gdd",
    "gdd_url",
    "normalize",
    "to_day_record",
]
