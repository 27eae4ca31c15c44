"""
errors — Exception types raised by the fetch/crawl layers and their user-facing wording.
"""
from __future__ import annotations


class MediaIndexError(Exception):
    """Base class for all mediaindex failures."""


class UpstreamHTTPError(MediaIndexError):
    """A transport strategy got a non-2xx response."""

    def __init__(self, status: int | None, target: str = "", message: str | None = None):
        self.status = status
        self.target = target
        super().__init__(message or f"Failed to fetch {target} ({status})")


class RateLimitedError(UpstreamHTTPError):
    """HTTP 429 anywhere in a crawl. Never retried through another strategy."""

    def __init__(self, target: str = ""):
        super().__init__(429, target, f"Rate limited while fetching {target} (429)")


class UnreachableHostError(MediaIndexError):
    """Connection-level failure with no HTTP status (DNS, refused, timeout)."""

    def __init__(self, target: str, reason: str = ""):
        self.target = target
        self.status = None
        super().__init__(f"Failed to fetch {target}: {reason}" if reason else f"Failed to fetch {target}")


class MalformedInputError(MediaIndexError):
    """User-supplied input that cannot be processed at all."""


def describe_failure(exc: BaseException) -> str:
    """Turn an exception into a message that says what went wrong, not how."""
    status = getattr(exc, "status", None)
    if isinstance(exc, RateLimitedError) or status == 429:
        return "Rate limited by the host or relay (HTTP 429). Wait a moment and try again."
    if isinstance(exc, MalformedInputError):
        return f"Malformed input: {exc}"
    if isinstance(exc, UnreachableHostError):
        return "Unable to reach that host. It may be offline or block relayed access."
    if isinstance(exc, UpstreamHTTPError):
        if status in (401, 403):
            return f"The host refused access to that directory index (HTTP {status})."
        if status == 404:
            return "No directory index found at that URL (HTTP 404)."
        return f"Unable to fetch that directory index (HTTP {status}). The host may be blocked or unreachable."
    return str(exc) or exc.__class__.__name__
