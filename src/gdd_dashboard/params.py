"""Query parameter store.

Holds the three dashboard inputs and tells subscribers when the parameter
tuple changes.  Values are replaced, never validated: a negative or
non-numeric base temperature is passed through to the service as-is.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import date
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

    Listener = Callable[["QueryParameters"], object]

DEFAULT_LOCATION = "Larnaca"
DEFAULT_BASE_TEMP = 10.0


def coerce_number(value: Any) -> float:
    """Convert form input to a number the way a browser ``Number()`` call does.

    Empty or whitespace-only text becomes 0, unparseable text becomes NaN.
    No range checks are applied.

    Examples:
        >>> coerce_number("12.5")
        12.5
        >>> coerce_number("")
        0.0
        >>> math.isnan(coerce_number("warm"))
        True
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, float):
        return value
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    text = str(value).strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return math.nan


def format_number(value: float) -> str:
    """Render a number for a query string: ``10`` not ``10.0``, ``NaN`` for NaN."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer():
        return str(int(value))
    return repr(value)


@dataclass(frozen=True)
class QueryParameters:
    """One immutable snapshot of the dashboard inputs."""

    location: str = DEFAULT_LOCATION
    base_temperature: float = DEFAULT_BASE_TEMP
    planting_date: str = ""

    @property
    def is_ready(self) -> bool:
        """A query may only be issued once a planting date is chosen."""
        return bool(self.planting_date)

    def query_params(self) -> dict[str, str]:
        """Encode the request key as GDD service query parameters."""
        return {
            "location": self.location,
            "base_temp": format_number(self.base_temperature),
            "start_date": self.planting_date,
        }

    def same_as(self, other: QueryParameters) -> bool:
        """Value equality where NaN equals NaN (a repeated bad input is not a change)."""
        if self.location != other.location or self.planting_date != other.planting_date:
            return False
        a, b = self.base_temperature, other.base_temperature
        return a == b or (math.isnan(a) and math.isnan(b))


class ParameterStore:
    """Mutable holder for the current :class:`QueryParameters`."""

    def __init__(
        self,
        location: str = DEFAULT_LOCATION,
        base_temperature: Any = DEFAULT_BASE_TEMP,
        planting_date: date | str | None = "",
    ) -> None:
        self._params = QueryParameters(
            location=location,
            base_temperature=coerce_number(base_temperature),
            planting_date=_date_text(planting_date),
        )
        self._listeners: list[Listener] = []

    @property
    def params(self) -> QueryParameters:
        return self._params

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_location(self, value: str) -> None:
        self._replace(location=value)

    def set_base_temperature(self, value: Any) -> None:
        self._replace(base_temperature=coerce_number(value))

    def set_planting_date(self, value: date | str | None) -> None:
        self._replace(planting_date=_date_text(value))

    def _replace(self, **changes: Any) -> None:
        updated = replace(self._params, **changes)
        if updated.same_as(self._params):
            return
        self._params = updated
        for listener in list(self._listeners):
            listener(updated)


def _date_text(value: date | str | None) -> str:
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    return value
