"""
library — Catalog records ready for playlist export, and the helpers that build them
from crawl candidates plus looked-up metadata.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from .patterns import fill_pattern
from .tmdb import MediaDetails


@dataclass
class Channel:
    id: str
    name: str
    url: str
    logo: str = ""
    group: str = "Live"
    chno: str = ""


@dataclass
class LibraryEpisode:
    episode: int
    title: str = ""
    url: str = ""


@dataclass
class LibrarySeason:
    season: int
    episodes: list[LibraryEpisode] = field(default_factory=list)


@dataclass
class LibraryShow:
    tmdb_id: str
    title: str
    poster: str = ""
    overview: str = ""
    seasons: list[LibrarySeason] = field(default_factory=list)
    pattern: str = ""
    group: str = "TV Shows"


@dataclass
class LibraryMovie:
    tmdb_id: str
    title: str
    url: str = ""
    poster: str = ""
    overview: str = ""
    group: str = "Movies"


def show_from_details(
    details: MediaDetails,
    episode_urls: Optional[dict[tuple[int, int], str]] = None,
    group: str = "TV Shows",
    pattern: str = "",
) -> LibraryShow:
    """Attach known stream URLs (see catalog.episode_map) to a looked-up show."""
    episode_urls = episode_urls or {}
    seasons = [
        LibrarySeason(
            season=s.season,
            episodes=[
                LibraryEpisode(e.episode, e.title, episode_urls.get((s.season, e.episode), ""))
                for e in s.episodes
            ],
        )
        for s in details.seasons
    ]
    return LibraryShow(
        tmdb_id=details.tmdb_id,
        title=details.title,
        poster=details.poster,
        overview=details.overview,
        seasons=seasons,
        pattern=pattern,
        group=group or "TV Shows",
    )


def movie_from_details(details: MediaDetails, url: str = "", group: str = "Movies") -> LibraryMovie:
    return LibraryMovie(
        tmdb_id=details.tmdb_id,
        title=details.title,
        url=url,
        poster=details.poster,
        overview=details.overview,
        group=group or "Movies",
    )


def fill_missing_urls(show: LibraryShow, pattern: Optional[str] = None) -> int:
    """Fill empty episode URLs from the show's template. Returns how many were filled."""
    pattern = pattern if pattern is not None else show.pattern
    if not pattern:
        return 0
    filled = 0
    for season in show.seasons:
        for ep in season.episodes:
            if not ep.url:
                ep.url = fill_pattern(pattern, season.season, ep.episode)
                filled += 1
    return filled
