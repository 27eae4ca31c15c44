"""
catalog — Fold crawled files into show and movie candidates.

Candidates are what a user (or the metadata step) picks from; nothing here is
final. Duplicate season/episode pairs are kept side by side so the import step
can choose which URL to link.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Optional

import structlog

from .classifier import EpisodeIdentity, parse_media_name
from .crawler import DiscoveredFile

log = structlog.get_logger()


@dataclass(frozen=True)
class FileRef:
    url: str
    name: str
    path: str


@dataclass(frozen=True)
class EpisodeRef:
    season: int
    episode: int
    url: str
    name: str
    path: str


@dataclass
class ShowCandidate:
    key: str
    title: str
    episodes: list[EpisodeRef] = field(default_factory=list)


@dataclass
class MovieCandidate:
    key: str
    title: str
    year: Optional[str] = None
    entries: list[FileRef] = field(default_factory=list)


@dataclass
class LibraryCandidates:
    shows: list[ShowCandidate]
    movies: list[MovieCandidate]


def movie_key(title: str, year: Optional[str]) -> str:
    return f"{title.lower()}|{year or ''}"


def build_library_candidates(files: Iterable[DiscoveredFile]) -> LibraryCandidates:
    shows: dict[str, ShowCandidate] = {}
    movies: dict[str, MovieCandidate] = {}

    for f in files:
        meta = parse_media_name(f.name)
        if isinstance(meta, EpisodeIdentity):
            key = meta.show_title.lower()
            show = shows.get(key)
            if show is None:
                show = shows[key] = ShowCandidate(key=key, title=meta.show_title)
            show.episodes.append(EpisodeRef(meta.season, meta.episode, f.url, f.name, f.path))
        else:
            key = movie_key(meta.title, meta.year)
            movie = movies.get(key)
            if movie is None:
                movie = movies[key] = MovieCandidate(key=key, title=meta.title, year=meta.year)
            movie.entries.append(FileRef(f.url, f.name, f.path))

    for show in shows.values():
        show.episodes.sort(key=lambda e: (e.season, e.episode))

    result = LibraryCandidates(
        shows=sorted(shows.values(), key=lambda s: s.title.lower()),
        movies=sorted(movies.values(), key=lambda m: m.title.lower()),
    )
    log.info("catalog_built", shows=len(result.shows), movies=len(result.movies))
    return result


def episode_map(show: ShowCandidate) -> dict[tuple[int, int], str]:
    """(season, episode) -> url, first file wins for duplicates."""
    mapping: dict[tuple[int, int], str] = {}
    for ep in show.episodes:
        mapping.setdefault((ep.season, ep.episode), ep.url)
    return mapping
