"""
Shared HTTP client with automatic retry and backoff.

The GDD service is hosted on a free tier that sleeps when idle, so the first
request after a pause often sees a 502/503 while the instance wakes up.  The
session returned here retries those with exponential backoff and gives every
request a timeout unless the caller chose one.

Usage::

    from gdd_dashboard.services.http import session

    resp = session.get("https://gdd-sw.onrender.com/gdd", params={...})
"""

from __future__ import annotations

from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from gdd_dashboard import __version__

#: Retry strategy for idempotent reads against a sleepy backend.
DEFAULT_RETRY = Retry(
    total=3,
    backoff_factor=1,  # 0s, 1s, 2s between retries
    status_forcelist=[429, 502, 503, 504],
    allowed_methods=["GET", "HEAD"],
    raise_on_status=False,  # the caller inspects the final response itself
)

DEFAULT_TIMEOUT = 30  # seconds

USER_AGENT = f"gdd-dashboard/{__version__}"


class TimeoutSession(requests.Session):
    """``requests.Session`` that never sends a request without a timeout.

    ``Session.request`` forwards ``timeout=None`` when the caller omits it, so
    the default is filled in here, before the request is prepared.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        super().__init__()
        self.default_timeout = timeout

    def request(self, method: str | bytes, url: str | bytes, **kwargs: Any) -> requests.Response:
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.default_timeout
        return super().request(method, url, **kwargs)


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> TimeoutSession:
    """
    Build a session with the retry adapter mounted and JSON headers set.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Timeout for every request that does not pass one.
    """
    s = TimeoutSession(timeout)
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers.update({"User-Agent": USER_AGENT, "Accept": "application/json"})
    return s


#: Module-level session, shared by every client in the process.
session: TimeoutSession = create_session()
