"""
Tests for the TMDB client. The requests session is mocked; no network.
"""
from unittest.mock import MagicMock

import pytest
import requests

from mediaindex.errors import RateLimitedError, UnreachableHostError, UpstreamHTTPError
from mediaindex.tmdb import SEARCH_LIMIT, TMDBClient


class _NoWait:
    def wait(self):
        pass


def _json_response(data, status=200):
    r = MagicMock()
    r.status_code = status
    r.json.return_value = data
    return r


def _client(session):
    return TMDBClient("k", session=session, limiter=_NoWait())


class TestSearch:
    def test_tv(self):
        session = MagicMock()
        session.get.return_value = _json_response({"results": [{
            "id": 1399,
            "name": "Show Name",
            "overview": "About it",
            "poster_path": "/p.jpg",
            "first_air_date": "2011-04-17",
            "vote_average": 8.4,
        }]})
        results = _client(session).search("tv", " Show Name ")
        assert len(results) == 1
        r = results[0]
        assert (r.id, r.title, r.date) == (1399, "Show Name", "2011-04-17")
        assert r.poster == "https://image.tmdb.org/t/p/w185/p.jpg"

        url = session.get.call_args.args[0]
        params = session.get.call_args.kwargs["params"]
        assert url == "https://api.themoviedb.org/3/search/tv"
        assert params["query"] == "Show Name"
        assert params["api_key"] == "k"
        assert params["include_adult"] == "false"

    def test_movie_fields(self):
        session = MagicMock()
        session.get.return_value = _json_response({"results": [
            {"id": 5, "title": "Movie Title", "release_date": "2020-01-01", "poster_path": None},
        ]})
        r = _client(session).search("movie", "Movie Title")[0]
        assert (r.title, r.date, r.poster, r.vote_average) == ("Movie Title", "2020-01-01", "", 0.0)

    def test_capped(self):
        session = MagicMock()
        session.get.return_value = _json_response({"results": [{"id": i, "title": str(i)} for i in range(20)]})
        assert len(_client(session).search("movie", "x")) == SEARCH_LIMIT

    def test_empty_query_skips_request(self):
        session = MagicMock()
        assert _client(session).search("tv", "   ") == []
        session.get.assert_not_called()

    def test_failure_returns_empty(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("down")
        assert _client(session).search("tv", "x") == []

    def test_rate_limited_returns_empty(self):
        session = MagicMock()
        session.get.return_value = _json_response({}, status=429)
        assert _client(session).search("movie", "x") == []

    def test_non_object_body_returns_empty(self):
        session = MagicMock()
        session.get.return_value = _json_response([{"id": 1}])
        assert _client(session).search("tv", "x") == []

    def test_undecodable_body_returns_empty(self):
        session = MagicMock()
        session.get.return_value = _json_response(None)
        session.get.return_value.json.side_effect = ValueError("Expecting value")
        assert _client(session).search("tv", "x") == []

    def test_bad_kind(self):
        with pytest.raises(ValueError):
            _client(MagicMock()).search("anime", "x")


class TestLookup:
    def test_tv_with_seasons(self):
        session = MagicMock()
        responses = {
            "https://api.themoviedb.org/3/tv/42": {
                "name": "Show Name",
                "overview": "About it",
                "poster_path": "/p.jpg",
                "seasons": [{"season_number": 1, "name": "Season 1"}],
            },
            "https://api.themoviedb.org/3/tv/42/season/1": {
                "episodes": [
                    {"episode_number": 1, "name": "Pilot", "overview": "Start"},
                    {"episode_number": 2, "name": None},
                ],
            },
        }
        session.get.side_effect = lambda url, params=None, timeout=None: _json_response(responses[url])

        details = _client(session).lookup("tv", 42)
        assert details.tmdb_id == "42"
        assert details.title == "Show Name"
        assert details.poster == "https://image.tmdb.org/t/p/w342/p.jpg"
        assert len(details.seasons) == 1
        season = details.seasons[0]
        assert (season.season, season.name) == (1, "Season 1")
        assert [(e.episode, e.title) for e in season.episodes] == [(1, "Pilot"), (2, "")]

    def test_movie(self):
        session = MagicMock()
        session.get.return_value = _json_response({"title": "Movie Title", "overview": "Plot"})
        details = _client(session).lookup("movie", "7")
        assert (details.kind, details.title, details.seasons) == ("movie", "Movie Title", [])
        assert session.get.call_count == 1

    def test_http_error_propagates(self):
        session = MagicMock()
        session.get.return_value = _json_response({"status_message": "nope"}, status=404)
        with pytest.raises(UpstreamHTTPError) as ei:
            _client(session).lookup("movie", "0")
        assert ei.value.status == 404
        assert "api_key" not in str(ei.value)

    def test_rate_limited(self):
        session = MagicMock()
        session.get.return_value = _json_response({}, status=429)
        with pytest.raises(RateLimitedError):
            _client(session).lookup("tv", "42")

    def test_connection_error_is_unreachable(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(UnreachableHostError):
            _client(session).lookup("movie", "7")

    def test_season_failure_propagates(self):
        session = MagicMock()
        session.get.side_effect = [
            _json_response({"name": "Show", "seasons": [{"season_number": 1}]}),
            _json_response({}, status=500),
        ]
        with pytest.raises(UpstreamHTTPError):
            _client(session).lookup("tv", "42")

    def test_non_object_body(self):
        session = MagicMock()
        session.get.return_value = _json_response(["not", "a", "dict"])
        with pytest.raises(ValueError):
            _client(session).lookup("movie", "7")
