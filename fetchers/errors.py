"""Errors raised while fetching pull requests from GitHub."""

from typing import Optional


class FetchError(Exception):
    """Base class for failures that abort a multi-page fetch."""


class TransportError(FetchError):
    """The HTTP request itself could not complete (DNS, connection, timeout)."""


class UpstreamStatusError(FetchError):
    """GitHub answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: Optional[str] = None, page: Optional[int] = None):
        self.status_code = status_code
        self.reason = reason or ""
        self.page = page
        super().__init__(f"GitHub API error: {status_code} {self.reason}".rstrip())


class MalformedResponseError(FetchError):
    """Response body was not a JSON array of pull request objects."""
