"""Dashboard request controller.

Owns the fetch lifecycle for one dashboard session: watches the parameter
store, issues a GDD query whenever the parameter tuple changes, tracks the
request status and keeps the latest normalized result.

Everything runs on one asyncio loop.  The outbound request is the only
suspension point; the default fetcher pushes the blocking ``requests`` call
to a worker thread, but all state changes happen back on the loop.

Requests are numbered.  When parameters change mid-flight the new request
becomes authoritative and any response carrying an older number is
discarded, so a slow early answer can never overwrite a newer one::

    store = ParameterStore()
    async with DashboardController(store) as controller:
        store.set_planting_date("2024-03-01")
        await controller.wait_idle()
        print(controller.state.summary_line)
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from gdd_dashboard.config import get_settings
from gdd_dashboard.datasources.gdd import QuerySummary, fetch_gdd, normalize
from gdd_dashboard.errors import BackendReportedError, FetchError, TransportError
from gdd_dashboard.params import ParameterStore, QueryParameters
from gdd_dashboard.schemas import RequestStatus
from gdd_dashboard.views import build_views

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping
    from types import TracebackType

    from gdd_dashboard.config import Settings
    from gdd_dashboard.datasources.gdd import DayRecord, NormalizedResponse
    from gdd_dashboard.views import ChartPoint, TableRow

    Fetcher = Callable[[QueryParameters], Awaitable[Mapping[str, Any]]]

logger = logging.getLogger(__name__)


def http_fetcher(settings: Settings) -> Fetcher:
    """Fetcher that queries the configured GDD service over HTTP."""

    async def fetch(params: QueryParameters) -> Mapping[str, Any]:
        return await asyncio.to_thread(
            fetch_gdd, params, settings.api_base_url, settings.request_timeout
        )

    return fetch


@dataclass(frozen=True)
class DashboardState:
    """Read-only snapshot handed to the presentation layer."""

    parameters: QueryParameters
    status: RequestStatus
    error_message: str
    summary: QuerySummary
    series: tuple[DayRecord, ...]
    summary_line: str | None
    chart_series: list[ChartPoint]
    table_rows: list[TableRow]


class DashboardController:
    """Fetch controller for one mounted dashboard session."""

    def __init__(
        self,
        store: ParameterStore | None = None,
        fetcher: Fetcher | None = None,
        settings: Settings | None = None,
    ) -> None:
        if settings is None:
            settings = get_settings()
        self.store = store or ParameterStore(settings.default_location, settings.default_base_temp)
        self._fetch = fetcher or http_fetcher(settings)

        self.status = RequestStatus.IDLE
        self.error_message = ""
        self.summary = QuerySummary()
        self.series: tuple[DayRecord, ...] = ()

        self._generation = 0
        self._tasks: set[asyncio.Task[None]] = set()
        self._unsubscribe: Callable[[], None] | None = None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> asyncio.Task[None] | None:
        """Begin watching the store and evaluate the current parameters once.

        Must be called with a running event loop.
        """
        if self._unsubscribe is None:
            self._unsubscribe = self.store.subscribe(self.on_parameters_changed)
        return self.on_parameters_changed(self.store.params)

    def close(self) -> None:
        """Stop watching the store and abandon any in-flight request."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._generation += 1
        for task in list(self._tasks):
            task.cancel()

    async def wait_idle(self) -> None:
        """Wait until no request is in flight."""
        while self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def __aenter__(self) -> DashboardController:
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
        await self.wait_idle()

    # -------------------------------------------------------------------------
    # Triggering
    # -------------------------------------------------------------------------

    def on_parameters_changed(self, params: QueryParameters) -> asyncio.Task[None] | None:
        """Issue a query for ``params``, superseding any request in flight.

        Does nothing (and leaves the current result alone) until a planting
        date is set.

        Returns:
            The task running the request, or None if nothing was issued.
        """
        if not params.is_ready:
            logger.debug("No planting date yet; not querying (%s)", params)
            return None

        self._generation += 1
        generation = self._generation
        self.status = RequestStatus.LOADING
        self.error_message = ""
        logger.info("Requesting GDD #%d for %s", generation, params.query_params())

        task = asyncio.get_running_loop().create_task(self._run(generation, params))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, generation: int, params: QueryParameters) -> None:
        result: NormalizedResponse | None = None
        error: FetchError | None = None
        try:
            result = normalize(await self._fetch(params))
        except FetchError as exc:
            error = exc
        except Exception as exc:
            logger.exception("Unexpected failure fetching GDD for %s", params)
            error = TransportError(str(exc))

        if generation != self._generation:
            logger.info(
                "Discarding stale GDD response #%d (latest is #%d)", generation, self._generation
            )
            return

        if isinstance(error, BackendReportedError):
            logger.warning("GDD service reported an error: %s", error.message)
            self.status = RequestStatus.ERROR
            self.error_message = error.message
            self.summary = QuerySummary()
            self.series = ()
        elif error is not None:
            # Previous series stays on screen; the status alone marks it stale.
            logger.warning("GDD request #%d failed: %s", generation, error)
            self.status = RequestStatus.ERROR
            self.error_message = TransportError.user_message
        elif result is not None:
            self.status = RequestStatus.SUCCESS
            self.summary = result.summary
            self.series = result.series

    # -------------------------------------------------------------------------
    # Read-only projection
    # -------------------------------------------------------------------------

    @property
    def state(self) -> DashboardState:
        views = build_views(self.summary, self.series, self.status)
        return DashboardState(
            parameters=self.store.params,
            status=self.status,
            error_message=self.error_message,
            summary=self.summary,
            series=self.series,
            summary_line=views.summary_line,
            chart_series=views.chart_series,
            table_rows=views.table_rows,
        )
