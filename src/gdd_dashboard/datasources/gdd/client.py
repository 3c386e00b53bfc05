"""GDD service HTTP client."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import requests

from gdd_dashboard.config import DEFAULT_API_BASE_URL
from gdd_dashboard.errors import TransportError
from gdd_dashboard.services.http import session

if TYPE_CHECKING:
    from gdd_dashboard.params import QueryParameters

logger = logging.getLogger(__name__)

GDD_PATH = "/gdd"


def gdd_url(base_url: str = DEFAULT_API_BASE_URL) -> str:
    """Full URL of the GDD endpoint under ``base_url``."""
    return base_url.rstrip("/") + GDD_PATH


def fetch_gdd(
    params: QueryParameters,
    base_url: str = DEFAULT_API_BASE_URL,
    timeout: float | None = None,
) -> dict[str, Any]:
    """Query the GDD service for one parameter tuple.

    A body that decodes to a JSON object is returned even on an HTTP error
    status, as long as it carries an ``error`` field: the service reports
    bad locations and dates that way and the message is meant for the user.

    Args:
        params: Location, base temperature and planting date to query.
        base_url: Service root URL.
        timeout: Per-request timeout; the session default applies if None.

    Returns:
        The decoded JSON object, unvalidated.

    Raises:
        TransportError: On network failure, a non-JSON or non-object body,
            or an HTTP error status without a backend error message.
    """
    url = gdd_url(base_url)
    kwargs: dict[str, Any] = {"params": params.query_params()}
    if timeout is not None:
        kwargs["timeout"] = timeout

    try:
        resp = session.get(url, **kwargs)
    except requests.RequestException as exc:
        msg = f"GDD request to {url} failed: {exc}"
        raise TransportError(msg) from exc

    try:
        data = resp.json()
    except ValueError as exc:
        msg = f"GDD response from {url} is not JSON (HTTP {resp.status_code})"
        raise TransportError(msg) from exc

    if not isinstance(data, dict):
        msg = f"GDD response from {url} is {type(data).__name__}, expected an object"
        raise TransportError(msg)

    if not resp.ok and not data.get("error"):
        msg = f"GDD service returned HTTP {resp.status_code}"
        raise TransportError(msg)

    logger.debug("Backend response for %s: %s", params, data)
    return data
