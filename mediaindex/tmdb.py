"""
tmdb — Metadata lookup against The Movie Database (api.themoviedb.org/3).

Two calls, mirroring what the library import needs:
    search(kind, query)  -> up to 8 SearchResult, [] on empty query or any failure
    lookup(kind, tmdb_id) -> MediaDetails (with every season's episodes for "tv")

kind is "tv" or "movie".
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

import requests
import structlog

from .errors import MediaIndexError, RateLimitedError, UnreachableHostError, UpstreamHTTPError
from .ratelimit import RateLimiter

log = structlog.get_logger()

_API_BASE = "https://api.themoviedb.org/3"
_IMG_BASE = "https://image.tmdb.org/t/p"

KINDS = ("tv", "movie")
SEARCH_LIMIT = 8


@dataclass(frozen=True)
class SearchResult:
    id: int
    title: str
    overview: str = ""
    poster: str = ""
    date: str = ""
    vote_average: float = 0.0


@dataclass
class EpisodeInfo:
    episode: int
    title: str = ""
    overview: str = ""


@dataclass
class SeasonInfo:
    season: int
    name: str = ""
    episodes: list[EpisodeInfo] = field(default_factory=list)


@dataclass
class MediaDetails:
    tmdb_id: str
    kind: str
    title: str
    overview: str = ""
    poster: str = ""
    seasons: list[SeasonInfo] = field(default_factory=list)


def _poster(path: Optional[str], size: str) -> str:
    return f"{_IMG_BASE}/{size}{path}" if path else ""


def _check_kind(kind: str) -> str:
    if kind not in KINDS:
        raise ValueError(f"Unknown media kind: {kind!r} (expected one of {KINDS})")
    return kind


class TMDBClient:
    def __init__(
        self,
        api_key: str,
        session: Optional[requests.Session] = None,
        limiter: Optional[RateLimiter] = None,
        timeout: float = 15.0,
    ):
        self.api_key = api_key
        self.session = session or requests.Session()
        self.limiter = limiter or RateLimiter(rate=4.0, burst=4)
        self.timeout = timeout

    @classmethod
    def from_config(cls, cfg) -> "TMDBClient":
        return cls(
            cfg.tmdb_api_key,
            limiter=RateLimiter(rate=cfg.tmdb_rate_limit_rps, burst=4),
            timeout=cfg.request_timeout,
        )

    def _get(self, path: str, **params) -> dict:
        self.limiter.wait()
        params = {"api_key": self.api_key, "language": "en-US", **params}
        url = f"{_API_BASE}{path}"
        try:
            r = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise UnreachableHostError(url, str(e)) from e
        if r.status_code == 429:
            raise RateLimitedError(url)
        if not 200 <= r.status_code < 300:
            raise UpstreamHTTPError(r.status_code, url)
        data = r.json()
        if not isinstance(data, dict):
            raise ValueError(f"TMDB returned {type(data).__name__}, expected an object")
        return data

    def search(self, kind: str, query: str) -> list[SearchResult]:
        _check_kind(kind)
        query = (query or "").strip()
        if not query:
            return []
        try:
            data = self._get(f"/search/{kind}", query=query, page=1, include_adult="false")
        except (MediaIndexError, ValueError) as e:
            log.warning("tmdb_search_failed", kind=kind, query=query, error=str(e))
            return []

        title_key, date_key = ("name", "first_air_date") if kind == "tv" else ("title", "release_date")
        results = []
        for item in (data.get("results") or [])[:SEARCH_LIMIT]:
            results.append(SearchResult(
                id=item.get("id"),
                title=item.get(title_key) or "",
                overview=item.get("overview") or "",
                poster=_poster(item.get("poster_path"), "w185"),
                date=item.get(date_key) or "",
                vote_average=item.get("vote_average") or 0.0,
            ))
        log.debug("tmdb_search", kind=kind, query=query, count=len(results))
        return results

    def lookup(self, kind: str, tmdb_id: str | int) -> MediaDetails:
        """Fetch full details. Unlike search(), upstream failures propagate."""
        _check_kind(kind)
        data = self._get(f"/{kind}/{tmdb_id}")
        details = MediaDetails(
            tmdb_id=str(tmdb_id),
            kind=kind,
            title=data.get("name" if kind == "tv" else "title") or "",
            overview=data.get("overview") or "",
            poster=_poster(data.get("poster_path"), "w342"),
        )
        if kind == "tv":
            for s in data.get("seasons") or []:
                num = s.get("season_number")
                season_data = self._get(f"/tv/{tmdb_id}/season/{num}")
                details.seasons.append(SeasonInfo(
                    season=num,
                    name=s.get("name") or "",
                    episodes=[
                        EpisodeInfo(
                            episode=e.get("episode_number"),
                            title=e.get("name") or "",
                            overview=e.get("overview") or "",
                        )
                        for e in season_data.get("episodes") or []
                    ],
                ))
        log.info("tmdb_lookup", kind=kind, id=str(tmdb_id), title=details.title, seasons=len(details.seasons))
        return details
