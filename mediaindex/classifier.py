"""
classifier — Infer show/episode or movie identity from a bare file name.

Episode markers are checked before the year, so "Show.2019.S01E02.mkv" is an episode.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import unquote

from .titles import normalize_title

# Checked in this order; first hit wins.
EPISODE_PATTERNS = [
    ("sxxexx", re.compile(r"(?:^|\b)[Ss](\d{1,2})[^\d]{0,2}[Ee](\d{1,2})(?:\b|[^0-9])")),
    ("season_episode", re.compile(r"Season\s*(\d{1,2}).*Episode\s*(\d{1,2})", re.IGNORECASE)),
    ("x_notation", re.compile(r"\b(\d{1,2})x(\d{1,2})\b")),
]

_EXT_RE = re.compile(r"\.[^/.]+$")
_TRAILING_SEP_RE = re.compile(r"[-_.\s]+$")
_YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")


@dataclass(frozen=True)
class EpisodeIdentity:
    show_title: str
    season: int
    episode: int
    kind: str = "episode"


@dataclass(frozen=True)
class MovieIdentity:
    title: str
    year: Optional[str] = None
    kind: str = "movie"


MediaIdentity = Union[EpisodeIdentity, MovieIdentity]


def strip_extension(name: str) -> str:
    return _EXT_RE.sub("", name)


def match_episode(normalized: str):
    for _label, rx in EPISODE_PATTERNS:
        m = rx.search(normalized)
        if m:
            return m
    return None


def parse_media_name(filename: str) -> MediaIdentity:
    """
    Classify a (possibly percent-encoded) file name.

    'Show.Name.S01E02.1080p.mkv' -> EpisodeIdentity('Show Name', 1, 2)
    'Movie.Title.2020.720p.mp4'  -> MovieIdentity('Movie Title', '2020')
    """
    decoded = unquote(filename or "")
    normalized = normalize_title(strip_extension(decoded))

    m = match_episode(normalized)
    if m:
        head = _TRAILING_SEP_RE.sub("", normalized[:m.start()])
        show_title = normalize_title(head) or normalized
        return EpisodeIdentity(show_title=show_title, season=int(m.group(1)), episode=int(m.group(2)))

    ym = _YEAR_RE.search(normalized)
    title = normalize_title(_YEAR_RE.sub("", normalized, count=1))
    return MovieIdentity(title=title or normalized, year=ym.group(0) if ym else None)
