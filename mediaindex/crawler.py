"""
crawler — Breadth-first walk of an HTTP directory index, collecting playable files.

Strictly sequential: one request in flight, a pause between dequeues.
"""
from __future__ import annotations
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Optional, Protocol
from urllib.parse import urljoin, urlparse

import structlog

from .errors import RateLimitedError
from .fetch import Fetcher, with_slash
from .listing import parse_directory_listing

log = structlog.get_logger()

VIDEO_EXTS = (".mp4", ".mkv", ".m3u8", ".avi", ".mov", ".ts", ".flv", ".wmv")

DEFAULT_MAX_DEPTH = 4
DEFAULT_THROTTLE_MS = 800


@dataclass(frozen=True)
class DiscoveredFile:
    name: str
    url: str
    path: str
    depth: int


@dataclass(frozen=True)
class DiscoveryEvent:
    kind: str  # "dir" | "file"
    path: str
    depth: int
    file: Optional[DiscoveredFile] = None


@dataclass
class _QueueItem:
    fetch_url: str
    link_url: str
    depth: int


class CancelToken(Protocol):
    def is_set(self) -> bool: ...


def is_video(name: str) -> bool:
    return name.lower().endswith(VIDEO_EXTS)


class Crawler:
    """
    One crawl run. Owns its queue and seen-set; do not reuse across runs.

    `on_discover` is called synchronously for every directory queued-or-skipped
    and every file accepted. `cancel` is any object with is_set() (threading.Event);
    it is checked before each dequeue, never mid-request.
    """

    def __init__(
        self,
        fetcher: Optional[Fetcher] = None,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
        throttle_ms: int = DEFAULT_THROTTLE_MS,
        cancel: Optional[CancelToken] = None,
        on_discover: Optional[Callable[[DiscoveryEvent], None]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.fetcher = fetcher or Fetcher()
        self.max_depth = max_depth
        self.throttle_ms = throttle_ms
        self.cancel = cancel
        self.on_discover = on_discover
        self._sleep = sleep
        self.queue: deque[_QueueItem] = deque()
        self.seen: set[str] = set()
        self.files: list[DiscoveredFile] = []

    def _emit(self, event: DiscoveryEvent) -> None:
        if self.on_discover is not None:
            self.on_discover(event)

    def _cancelled(self) -> bool:
        return self.cancel is not None and self.cancel.is_set()

    def run(self, base_url: str) -> list[DiscoveredFile]:
        root = with_slash(base_url.strip())
        self.queue.append(_QueueItem(fetch_url=root, link_url=root, depth=0))
        log.info("crawl_start", url=root, max_depth=self.max_depth)

        while self.queue:
            if self._cancelled():
                log.info("crawl_cancelled", files=len(self.files), pending=len(self.queue))
                break
            item = self.queue.popleft()
            if item.fetch_url in self.seen:
                continue
            self.seen.add(item.fetch_url)

            try:
                self._visit(item)
            except RateLimitedError:
                log.error("crawl_rate_limited", url=item.link_url, depth=item.depth)
                raise
            except Exception as e:
                if item.depth == 0:
                    log.error("crawl_root_failed", url=item.link_url, error=str(e))
                    raise
                log.warning("crawl_branch_failed", url=item.link_url, depth=item.depth,
                            status=getattr(e, "status", None), error=str(e))

            if self.throttle_ms > 0 and self.queue:
                self._sleep(self.throttle_ms / 1000.0)

        log.info("crawl_done", url=root, files=len(self.files), visited=len(self.seen))
        return self.files

    def _visit(self, item: _QueueItem) -> None:
        res = self.fetcher.fetch(item.fetch_url)
        # Children address this page in the mode that worked, e.g. a relay-wrapped root
        self.seen.add(self.fetcher.fetch_url_for(res.link_base, res.mode))
        entries = parse_directory_listing(res.text)
        log.debug("crawl_page", url=res.link_base, via=res.mode, entries=len(entries))

        for entry in entries:
            link = urljoin(res.link_base, entry.href)
            fetch_url = self.fetcher.fetch_url_for(link, res.mode)
            path = urlparse(link).path

            if entry.is_dir:
                if item.depth < self.max_depth:
                    self.queue.append(_QueueItem(fetch_url=fetch_url, link_url=link, depth=item.depth + 1))
                self._emit(DiscoveryEvent(kind="dir", path=link, depth=item.depth + 1))
                continue

            if not is_video(entry.name):
                continue
            f = DiscoveredFile(name=entry.name, url=link, path=path, depth=item.depth)
            self.files.append(f)
            self._emit(DiscoveryEvent(kind="file", path=path, depth=item.depth, file=f))


def crawl(
    base_url: str,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    throttle_ms: int = DEFAULT_THROTTLE_MS,
    cancel: Optional[CancelToken] = None,
    on_discover: Optional[Callable[[DiscoveryEvent], None]] = None,
    fetcher: Optional[Fetcher] = None,
) -> list[DiscoveredFile]:
    """
    Crawl `base_url` and return every playable file found.
    Raises only for a failing root page or a 429 anywhere.
    """
    return Crawler(
        fetcher,
        max_depth=max_depth,
        throttle_ms=throttle_ms,
        cancel=cancel,
        on_discover=on_discover,
    ).run(base_url)
