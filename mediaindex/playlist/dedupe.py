"""
dedupe — Collapse duplicate playlist entries and order the survivors.

Two tiers, applied in one pass:
1. URL: an exact URL seen before is skipped outright, whatever its score
2. (group, title): keep the highest score; the first seen wins an exact tie
"""
from __future__ import annotations
from typing import Iterable

import structlog

from ..titles import strip_diacritics
from .parser import PlaylistEntry

log = structlog.get_logger()


def dedupe_entries(entries: Iterable[PlaylistEntry]) -> list[PlaylistEntry]:
    by_key: dict[str, PlaylistEntry] = {}
    seen_urls: set[str] = set()
    total = dropped_no_url = dropped_url = 0

    for e in entries:
        total += 1
        if not e.url:
            dropped_no_url += 1
            continue
        if e.url_key in seen_urls:
            dropped_url += 1
            continue
        prev = by_key.get(e.dedupe_key)
        if prev is None or e.score > prev.score:
            by_key[e.dedupe_key] = e
        seen_urls.add(e.url_key)

    log.debug(
        "playlist_dedupe",
        total=total,
        unique=len(by_key),
        no_url=dropped_no_url,
        url_dupes=dropped_url,
    )
    return list(by_key.values())


def _sort_text(s: str) -> str:
    return strip_diacritics(s or "").casefold()


def sort_entries(entries: Iterable[PlaylistEntry]) -> list[PlaylistEntry]:
    """Group, then title; both case- and accent-insensitive."""
    return sorted(entries, key=lambda e: (_sort_text(e.group), _sort_text(e.title)))
