"""
Tests for file-name classification into episodes and movies.
"""
import pytest

from mediaindex.classifier import EpisodeIdentity, MovieIdentity, parse_media_name


class TestEpisodes:
    @pytest.mark.parametrize("season,episode", [(0, 1), (1, 1), (1, 9), (9, 10), (10, 42), (99, 99)])
    def test_padded_sxxexx(self, season, episode):
        meta = parse_media_name(f"Show.Name.S{season:02d}E{episode:02d}.mkv")
        assert meta == EpisodeIdentity("Show Name", season, episode)

    @pytest.mark.parametrize("season,episode", [(1, 1), (1, 10), (10, 1), (42, 9)])
    def test_unpadded_sxxexx(self, season, episode):
        meta = parse_media_name(f"Show.Name.S{season}E{episode}.mkv")
        assert (meta.season, meta.episode) == (season, episode)

    def test_lowercase_with_quality_tags(self):
        meta = parse_media_name("show_name_s02e05_720p_x264.mp4")
        assert meta == EpisodeIdentity("show name", 2, 5)

    def test_x_notation(self):
        meta = parse_media_name("Show.1x05.mkv")
        assert meta == EpisodeIdentity("Show", 1, 5)

    def test_season_episode_words(self):
        meta = parse_media_name("Show Season 2 Episode 3.mkv")
        assert meta == EpisodeIdentity("Show", 2, 3)

    def test_episode_beats_year(self):
        meta = parse_media_name("Show.2019.S01E02.mkv")
        assert isinstance(meta, EpisodeIdentity)
        assert meta.show_title == "Show 2019"

    def test_no_title_before_marker(self):
        meta = parse_media_name("S01E01.mkv")
        assert meta.kind == "episode"
        assert meta.show_title == "S01E01"


class TestMovies:
    def test_release_name(self):
        meta = parse_media_name("The.Movie.2019.1080p.BluRay.x264.mkv")
        assert meta == MovieIdentity("The Movie", "2019")

    def test_percent_encoded_year_in_parens(self):
        meta = parse_media_name("Movie%20Title%20(2010).mkv")
        assert meta == MovieIdentity("Movie Title", "2010")

    def test_no_year(self):
        meta = parse_media_name("Behind.The.Scenes.mkv")
        assert meta == MovieIdentity("Behind The Scenes", None)

    def test_only_first_year_removed(self):
        meta = parse_media_name("Blade Runner 2049 (2017).mkv")
        assert meta.year == "2049"
        assert meta.title == "Blade Runner (2017)"
