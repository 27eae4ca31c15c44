"""
fetch — Fetch a directory index through an ordered chain of transports.

Three strategies, tried in order until one answers 2xx:
1. local relay:  <relay>/proxy?url=<target>, fetched server-side
2. direct:       plain GET from this process
3. remote relay: public read-only text relay (r.jina.ai), last resort

A 429 from any of them stops the chain.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote, urlparse, parse_qs

import requests
import structlog

from .errors import MediaIndexError, RateLimitedError, UnreachableHostError, UpstreamHTTPError

log = structlog.get_logger()

_UA = "Mozilla/5.0 (compatible; mediaindex/0.3)"

LOCAL_PROXY_PATH = "/proxy?url="
DEFAULT_RELAY_URL = "http://localhost:3000"
DEFAULT_REMOTE_PREFIX = "https://r.jina.ai/"


@dataclass(frozen=True)
class FetchResult:
    text: str
    link_base: str   # absolute, '/'-terminated; resolve child hrefs against this
    mode: str        # "local" | "none" | "remote"
    fetched_url: str


def with_slash(url: str) -> str:
    return url if url.endswith("/") else f"{url}/"


class Transport:
    """One way of getting text for a URL."""
    mode = ""

    def __init__(self, session: requests.Session, timeout: float):
        self.session = session
        self.timeout = timeout

    def wrap(self, target: str) -> str:
        return target

    def owns(self, url: str) -> bool:
        return False

    def unwrap(self, url: str) -> str:
        return url

    def get(self, url: str) -> str:
        try:
            r = self.session.get(url, headers={"User-Agent": _UA}, timeout=self.timeout)
        except requests.RequestException as e:
            raise UnreachableHostError(url, str(e)) from e
        if r.status_code == 429:
            raise RateLimitedError(url)
        if not 200 <= r.status_code < 300:
            raise UpstreamHTTPError(r.status_code, url)
        return r.text


class LocalRelay(Transport):
    mode = "local"

    def __init__(self, session, timeout, relay_url: str = DEFAULT_RELAY_URL):
        super().__init__(session, timeout)
        self.prefix = relay_url.rstrip("/") + LOCAL_PROXY_PATH

    def wrap(self, target: str) -> str:
        return self.prefix + quote(target, safe="")

    def owns(self, url: str) -> bool:
        return url.startswith(self.prefix) or url.startswith(LOCAL_PROXY_PATH)

    def unwrap(self, url: str) -> str:
        query = urlparse(url).query
        original = parse_qs(query).get("url", [""])[0]
        return original or url

    def absolute(self, url: str) -> str:
        if url.startswith(LOCAL_PROXY_PATH):
            return self.prefix + url[len(LOCAL_PROXY_PATH):]
        return url


class Direct(Transport):
    mode = "none"


class RemoteRelay(Transport):
    mode = "remote"

    def __init__(self, session, timeout, prefix: str = DEFAULT_REMOTE_PREFIX):
        super().__init__(session, timeout)
        self.prefix = prefix

    def wrap(self, target: str) -> str:
        return self.prefix + (target if target.startswith("http") else f"https://{target}")

    def owns(self, url: str) -> bool:
        return url.startswith(self.prefix)

    def unwrap(self, url: str) -> str:
        return url[len(self.prefix):]


class Fetcher:
    """Holds the transport chain for one crawl; `fetch(url)` is the only entry point callers need."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        relay_url: str = DEFAULT_RELAY_URL,
        remote_prefix: str = DEFAULT_REMOTE_PREFIX,
        timeout: float = 15.0,
    ):
        self.session = session or requests.Session()
        self.local = LocalRelay(self.session, timeout, relay_url) if relay_url else None
        self.direct = Direct(self.session, timeout)
        self.remote = RemoteRelay(self.session, timeout, remote_prefix)
        self.strategies = [s for s in (self.local, self.direct, self.remote) if s is not None]

    @classmethod
    def from_config(cls, cfg, session: Optional[requests.Session] = None) -> "Fetcher":
        return cls(
            session=session,
            relay_url=cfg.relay_url,
            remote_prefix=cfg.remote_relay_prefix,
            timeout=cfg.request_timeout,
        )

    def _by_mode(self, mode: str) -> Optional[Transport]:
        for s in self.strategies:
            if s.mode == mode:
                return s
        return None

    def fetch_url_for(self, link_url: str, mode: str) -> str:
        """Re-derive how a child link should be fetched, given the mode that worked for its parent."""
        strategy = self._by_mode(mode)
        if strategy is None or mode == "none":
            return link_url
        return strategy.wrap(link_url)

    def _pinned(self, url: str) -> Optional[Transport]:
        if self.local and self.local.owns(url):
            return self.local
        if self.remote.owns(url):
            return self.remote
        return None

    def fetch(self, url: str) -> FetchResult:
        clean = url.strip()
        pinned = self._pinned(clean)
        if pinned is not None:
            # Already proxied: that route and nothing else
            target = self.local.absolute(clean) if pinned is self.local else clean
            link_base = with_slash(pinned.unwrap(clean))
            return FetchResult(pinned.get(target), link_base, pinned.mode, target)

        original = with_slash(clean)
        errors: list[MediaIndexError] = []
        for strategy in self.strategies:
            target = strategy.wrap(original)
            try:
                text = strategy.get(target)
            except RateLimitedError:
                log.warning("fetch_rate_limited", url=original, via=strategy.mode)
                raise
            except MediaIndexError as e:
                log.debug("fetch_strategy_failed", url=original, via=strategy.mode,
                          status=getattr(e, "status", None), error=str(e))
                errors.append(e)
                continue
            log.debug("fetch_ok", url=original, via=strategy.mode)
            return FetchResult(text, original, strategy.mode, target)

        last = errors[-1]
        if getattr(last, "status", None) is None:
            known = next((e.status for e in errors if getattr(e, "status", None)), None)
            if known is not None:
                raise UpstreamHTTPError(known, original, str(last)) from last
        raise last
