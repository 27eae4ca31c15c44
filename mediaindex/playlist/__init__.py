"""
mediaindex.playlist — M3U normalization: parse, classify, dedupe, sort, emit.

Public API:
    parse_playlist(text) -> list[PlaylistEntry]
    parse_extinf(line) -> PlaylistEntry | None
    clean_title(raw) -> str
    infer_group(title, current=None, prefix="UK") -> str
    is_vod(entry) -> bool
    quality_score(title, url) -> int
    dedupe_entries(entries) / sort_entries(entries)
    normalize_entries(entries, country, prefix) -> SplitResult
    normalize_playlist(text, country, prefix) -> SplitResult
    render_playlist(entries) -> str
    split_playlist_file(input, live_out, vod_out) -> SplitResult
    build_m3u(channels, shows, movies) -> str
"""
from .parser import PlaylistEntry, parse_extinf, parse_playlist
from .rules import GROUP_PATTERNS, clean_title, infer_group, is_vod, quality_score
from .dedupe import dedupe_entries, sort_entries
from .writer import (
    SplitResult,
    build_extinf,
    build_m3u,
    normalize_entries,
    normalize_playlist,
    render_playlist,
    split_playlist_file,
)

__all__ = [
    "PlaylistEntry",
    "parse_extinf",
    "parse_playlist",
    "GROUP_PATTERNS",
    "clean_title",
    "infer_group",
    "is_vod",
    "quality_score",
    "dedupe_entries",
    "sort_entries",
    "SplitResult",
    "build_extinf",
    "build_m3u",
    "normalize_entries",
    "normalize_playlist",
    "render_playlist",
    "split_playlist_file",
]
