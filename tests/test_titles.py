"""
Tests for release-name title cleanup.
"""
import pytest

from mediaindex.titles import normalize_title, strip_diacritics


class TestNormalizeTitle:
    def test_separators(self):
        assert normalize_title("Some_Movie.Name") == "Some Movie Name"

    def test_bracketed_quality_group(self):
        assert normalize_title("Movie Name [1080p x264]") == "Movie Name"

    def test_parenthesized_source(self):
        assert normalize_title("Movie Name (BluRay)") == "Movie Name"

    def test_bare_keywords(self):
        assert normalize_title("Movie.Name.720p.WEBRip.x265") == "Movie Name"

    def test_keyword_case_insensitive(self):
        assert normalize_title("Movie Name HDTV PROPER") == "Movie Name"

    def test_part_suffix(self):
        assert normalize_title("Movie Name Part 2") == "Movie Name"

    def test_directors_cut_suffix(self):
        assert normalize_title("Movie Name - Director's Cut") == "Movie Name"

    def test_theatrical_suffix(self):
        assert normalize_title("Movie Name - Theatrical") == "Movie Name"

    def test_stacked_suffixes(self):
        assert normalize_title("Movie Part 1 Part 2") == "Movie"

    def test_plain_brackets_kept(self):
        assert normalize_title("Movie Name (2019)") == "Movie Name (2019)"

    def test_keyword_inside_word_kept(self):
        # "ts" and "cam" only count as whole words
        assert normalize_title("Pets Camera") == "Pets Camera"

    def test_empty(self):
        assert normalize_title("") == ""
        assert normalize_title(None) == ""

    def test_docstring_example(self):
        assert normalize_title("Some_Movie.2019.(BluRay x264).Part 2") == "Some Movie 2019"

    @pytest.mark.parametrize("raw", [
        "Show.Name.S01E01.1080p.mkv",
        "Movie Part 1 Part 2",
        "A.Film.(2010).[BluRay].-.Extended",
        "Movie ( ( ) ) Name",
        "  spaced   out  __ title ..",
        "Movie Name - Director's Cut Part 3",
        "Plain Title",
    ])
    def test_idempotent(self, raw):
        once = normalize_title(raw)
        assert normalize_title(once) == once


class TestStripDiacritics:
    def test_accents(self):
        assert strip_diacritics("Amélie Café") == "Amelie Cafe"

    def test_empty(self):
        assert strip_diacritics("") == ""
