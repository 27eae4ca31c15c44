"""
listing — Parse Apache/nginx-style directory indexes (or their markdown text dumps).

Returns entries in document order. Garbage in gives an empty list, never an exception.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from urllib.parse import unquote

import structlog
from bs4 import BeautifulSoup

log = structlog.get_logger()

_MD_LINK_RE = re.compile(r"\[(.+?)\]\((https?://[^\s)]+)\)")
_BRACKET_LABEL_RE = re.compile(r"\[.*?\]")
_SORT_LINK_SUFFIXES = ("/?C=N;O=D", "/?C=M;O=A", "/?C=S;O=A", "/?C=D;O=A")
_PARENT_LABELS = {"[PARENTDIR]", "Parent Directory"}


@dataclass(frozen=True)
class ListingEntry:
    name: str
    href: str
    kind: str  # "dir" | "file"

    @property
    def is_dir(self) -> bool:
        return self.kind == "dir"


def _skip_href(href: str) -> bool:
    if not href:
        return True
    if href.startswith("?") or href.startswith("#"):
        return True
    if "javascript:" in href.lower():
        return True
    return href in ("./", "../")


def _entry(name: str, href: str) -> ListingEntry:
    return ListingEntry(
        name=name.rstrip("/"),
        href=href,
        kind="dir" if href.endswith("/") else "file",
    )


def _parse_anchors(soup: BeautifulSoup) -> list[ListingEntry] | None:
    anchors = soup.find_all("a", href=True)
    if not anchors:
        return None
    entries: list[ListingEntry] = []
    for a in anchors:
        href = a.get("href", "").strip()
        if _skip_href(href):
            continue
        label = a.get_text(strip=True)
        if label in _PARENT_LABELS:
            continue
        entries.append(_entry(label or unquote(href), href))
    return entries


def _parse_markdown(text: str) -> list[ListingEntry]:
    """Fallback for text relays that flatten an index into '[name](url)' lines."""
    entries: list[ListingEntry] = []
    for line in text.splitlines():
        m = _MD_LINK_RE.search(line)
        if not m:
            continue
        label, href = m.group(1), m.group(2)
        if href == "../" or href.endswith(_SORT_LINK_SUFFIXES):
            continue
        if not label or label in _PARENT_LABELS:
            continue
        name = _BRACKET_LABEL_RE.sub("", label).strip()
        if not name:
            continue
        entries.append(_entry(name, href))
    return entries


def parse_directory_listing(text: str | None) -> list[ListingEntry]:
    if not text:
        return []
    try:
        soup = BeautifulSoup(text, "html.parser")
        entries = _parse_anchors(soup)
    except Exception as e:  # unusable markup
        log.warning("listing_html_unparseable", error=str(e))
        entries = None
    if entries is not None:
        return entries
    return _parse_markdown(text)
