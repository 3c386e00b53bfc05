"""Fetch error taxonomy.

Malformed fields are deliberately absent here: they fall back to defaults
during parsing (see ``schemas``) and never fail a request.
"""

from __future__ import annotations


class FetchError(Exception):
    """Base class for a GDD query that produced no usable data."""


class BackendReportedError(FetchError):
    """The service answered with an ``error`` field; shown to the user verbatim."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TransportError(FetchError):
    """The request could not complete or the body was not a JSON object."""

    #: Generic user-facing text; the underlying cause is only logged.
    user_message = "Failed to fetch GDD data. Check your backend."
