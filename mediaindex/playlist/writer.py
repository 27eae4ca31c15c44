"""
writer — Normalize a playlist into live/VOD halves and emit M3U text.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import structlog

from ..errors import MalformedInputError
from ..library import Channel, LibraryMovie, LibraryShow
from .dedupe import dedupe_entries, sort_entries
from .parser import PlaylistEntry, parse_playlist
from .rules import clean_title, existing_group, infer_group, is_vod, quality_score

log = structlog.get_logger()

HEADER = "#EXTM3U"

_NEEDS_QUOTE_RE = re.compile(r"[\s,]")


@dataclass
class SplitResult:
    live: list[PlaylistEntry]
    vod: list[PlaylistEntry]


def sanitize(value) -> str:
    return str(value if value is not None else "").replace("\n", " ").strip()


def build_extinf(duration: int | str | None, attrs: dict[str, str], title: str) -> str:
    parts = []
    for k, v in attrs.items():
        if v is None:
            continue
        v = str(v)
        parts.append(f'{k}="{v}"' if _NEEDS_QUOTE_RE.search(v) else f"{k}={v}")
    attr_block = (" " + " ".join(parts)) if parts else ""
    dur = "-1" if duration is None or duration == "" else str(duration)
    return f"#EXTINF:{dur}{attr_block},{title}"


def prepare_entry(entry: PlaylistEntry, country: str = "UK", prefix: str = "UK") -> bool:
    """
    Clean, group and score one parsed entry in place. Returns True for VOD.

    VOD is decided on the attributes as they arrived, before the inferred
    group is written back into group-title.
    """
    entry.title = clean_title(entry.raw_title)
    vod = is_vod(entry)
    entry.group = infer_group(entry.title, existing_group(entry.attrs), prefix=prefix)
    entry.attrs["group-title"] = entry.group
    if country and not entry.attrs.get("tvg-country"):
        entry.attrs["tvg-country"] = country
    if not entry.attrs.get("tvg-name"):
        entry.attrs["tvg-name"] = entry.title
    entry.score = quality_score(entry.raw_title, entry.url)
    return vod


def normalize_entries(
    entries: Iterable[PlaylistEntry], country: str = "UK", prefix: str = "UK"
) -> SplitResult:
    live: list[PlaylistEntry] = []
    vod: list[PlaylistEntry] = []
    for entry in entries:
        (vod if prepare_entry(entry, country, prefix) else live).append(entry)

    result = SplitResult(
        live=sort_entries(dedupe_entries(live)),
        vod=sort_entries(dedupe_entries(vod)),
    )
    log.info(
        "playlist_normalized",
        parsed_live=len(live),
        parsed_vod=len(vod),
        live=len(result.live),
        vod=len(result.vod),
    )
    return result


def normalize_playlist(text: str, country: str = "UK", prefix: str = "UK") -> SplitResult:
    return normalize_entries(parse_playlist(text), country, prefix)


def render_playlist(entries: Iterable[PlaylistEntry]) -> str:
    lines = [HEADER]
    for e in entries:
        lines.append(build_extinf(e.duration, e.attrs, e.title))
        lines.extend(e.extra_lines)
        lines.append(e.url)
    return "\n".join(lines) + "\n"


def split_playlist_file(
    input_path: str | Path,
    live_out: str | Path,
    vod_out: str | Path,
    country: str = "UK",
    prefix: str = "UK",
) -> SplitResult:
    """Raises MalformedInputError, writing nothing, when the input holds no usable entries."""
    text = Path(input_path).read_text(encoding="utf-8", errors="replace")
    entries = parse_playlist(text)
    if not entries:
        log.warning("playlist_no_entries", path=str(input_path))
        raise MalformedInputError(f"No #EXTINF entries in {input_path}")
    result = normalize_entries(entries, country=country, prefix=prefix)
    Path(live_out).write_text(render_playlist(result.live), encoding="utf-8")
    Path(vod_out).write_text(render_playlist(result.vod), encoding="utf-8")
    log.info("playlist_split_written", live_out=str(live_out), vod_out=str(vod_out))
    return result


# ── Catalog export ────────────────────────────────────────────────────

def catalog_extinf(name: str, tvg_id="", tvg_logo="", group="", chno="") -> str:
    attrs = [
        tvg_id and f'tvg-id="{sanitize(tvg_id)}"',
        tvg_logo and f'tvg-logo="{sanitize(tvg_logo)}"',
        group and f'group-title="{sanitize(group)}"',
        chno and f'tvg-chno="{sanitize(chno)}"',
    ]
    attr_block = " ".join(a for a in attrs if a)
    return f"#EXTINF:-1 {attr_block},{sanitize(name)}" if attr_block else f"#EXTINF:-1,{sanitize(name)}"


def build_m3u(
    channels: Iterable[Channel] = (),
    shows: Iterable[LibraryShow] = (),
    movies: Iterable[LibraryMovie] = (),
) -> str:
    """Channels first, then one line per show episode, then movies."""
    lines = [HEADER]

    for ch in channels:
        lines.append(catalog_extinf(ch.name, ch.id, ch.logo, ch.group, ch.chno))
        lines.append(sanitize(ch.url))

    for show in shows:
        for season in show.seasons:
            for ep in season.episodes:
                name = f"{show.title} S{season.season:02d}E{ep.episode:02d} — {ep.title or 'Episode'}"
                lines.append(catalog_extinf(
                    name,
                    tvg_id=f"{show.tmdb_id}-S{season.season}E{ep.episode}",
                    tvg_logo=show.poster,
                    group=show.group or "TV Shows",
                ))
                lines.append(sanitize(ep.url))

    for m in movies:
        lines.append(catalog_extinf(m.title, m.tmdb_id, m.poster, m.group or "Movies"))
        lines.append(sanitize(m.url))

    return "\n".join(lines)
