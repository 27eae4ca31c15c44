"""
Tests for error types and their user-facing messages.
"""
import pytest

from mediaindex.errors import (
    MalformedInputError,
    MediaIndexError,
    RateLimitedError,
    UnreachableHostError,
    UpstreamHTTPError,
    describe_failure,
)


class TestErrors:
    def test_hierarchy(self):
        assert issubclass(RateLimitedError, UpstreamHTTPError)
        assert issubclass(UnreachableHostError, MediaIndexError)
        assert RateLimitedError("u").status == 429
        assert UnreachableHostError("u", "dns").status is None

    def test_message_includes_target(self):
        assert "http://h/" in str(UpstreamHTTPError(500, "http://h/"))


class TestDescribeFailure:
    @pytest.mark.parametrize("exc,fragment", [
        (RateLimitedError("u"), "HTTP 429"),
        (UpstreamHTTPError(429, "u"), "Rate limited"),
        (UpstreamHTTPError(403, "u"), "refused access"),
        (UpstreamHTTPError(401, "u"), "HTTP 401"),
        (UpstreamHTTPError(404, "u"), "No directory index"),
        (UpstreamHTTPError(502, "u"), "HTTP 502"),
        (UnreachableHostError("u"), "Unable to reach"),
        (MalformedInputError("Enter a base URL"), "Malformed input: Enter a base URL"),
    ])
    def test_messages(self, exc, fragment):
        assert fragment in describe_failure(exc)

    def test_plain_exception(self):
        assert describe_failure(RuntimeError("boom")) == "boom"
        assert describe_failure(RuntimeError()) == "RuntimeError"
