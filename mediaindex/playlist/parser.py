"""
parser — Read #EXTINF records out of an M3U playlist.

A record is: one #EXTINF line, any number of directive lines (#EXTVLCOPT,
#KODIPROP, ...) kept verbatim, then the first non-comment line as the URL.
Malformed #EXTINF lines are skipped; parsing never raises.
"""
from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Iterator, Optional

import structlog

log = structlog.get_logger()

# #EXTINF:<duration> <attrs>,<title>  (commas inside quoted attr values are allowed)
EXTINF_RE = re.compile(r'^#EXTINF:\s*([^\s,]*)\s*((?:[^,"]|"[^"]*")*?)\s*,(.*)$', re.IGNORECASE)
ATTR_RE = re.compile(r'(\w[\w-]*)=(?:"([^"]*)"|([^\s"]+))')

ENTRY_MARKERS = ("#EXTINF", "#EXTM3U")


@dataclass
class PlaylistEntry:
    duration: int
    attrs: dict[str, str]
    title: str
    url: str = ""
    extra_lines: list[str] = field(default_factory=list)
    raw_title: str = ""
    group: str = ""
    score: int = 0

    @property
    def dedupe_key(self) -> str:
        return f"{self.group}|{self.title}".lower()

    @property
    def url_key(self) -> str:
        return self.url


def parse_duration(text: str) -> int:
    try:
        return int(float(text))
    except (TypeError, ValueError):
        return -1


def parse_attrs(text: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for m in ATTR_RE.finditer(text or ""):
        value = m.group(2) if m.group(2) is not None else m.group(3)
        attrs[m.group(1)] = value
    return attrs


def parse_extinf(line: str) -> Optional[PlaylistEntry]:
    """'#EXTINF:-1 tvg-id="x" group-title="News",BBC One' -> PlaylistEntry (no URL yet)."""
    m = EXTINF_RE.match(line.strip())
    if not m:
        return None
    title = m.group(3).strip()
    return PlaylistEntry(
        duration=parse_duration(m.group(1)),
        attrs=parse_attrs(m.group(2)),
        title=title,
        raw_title=title,
    )


def iter_entries(text: str) -> Iterator[PlaylistEntry]:
    lines = (text or "").splitlines()
    i = 0
    while i < len(lines):
        line = lines[i].strip()
        i += 1
        if not line.startswith("#EXTINF:"):
            continue  # header, blank or stray line

        entry = parse_extinf(line)
        if entry is None:
            log.debug("playlist_extinf_unparseable", line=line[:120])
            continue

        while i < len(lines):
            ln = lines[i].strip()
            if not ln:
                i += 1
                continue
            if ln.startswith("#"):
                if ln.startswith("#EXTINF"):
                    break  # next record began before a URL showed up
                if not ln.startswith(ENTRY_MARKERS):
                    entry.extra_lines.append(ln)
                i += 1
                continue
            entry.url = ln
            i += 1
            break
        yield entry


def parse_playlist(text: str) -> list[PlaylistEntry]:
    return list(iter_entries(text))
