"""
Shared fixtures: an in-memory fetcher so crawler tests never touch the network.
"""
import pytest

from mediaindex.fetch import FetchResult, with_slash


class FakeFetcher:
    """Serves canned index pages; `errors` maps a URL to the exception to raise for it."""

    def __init__(self, pages=None, errors=None, mode="none"):
        self.pages = pages or {}
        self.errors = errors or {}
        self.mode = mode
        self.calls = []

    def fetch(self, url):
        self.calls.append(url)
        if url in self.errors:
            raise self.errors[url]
        if url not in self.pages:
            raise KeyError(url)
        return FetchResult(self.pages[url], with_slash(url), self.mode, url)

    def fetch_url_for(self, link_url, mode):
        return link_url


def index_page(*hrefs):
    """Minimal Apache-style index with a parent link and sort links."""
    rows = ['<a href="?C=N;O=D">Name</a>', '<a href="../">Parent Directory</a>']
    rows += [f'<a href="{h}">{h}</a>' for h in hrefs]
    return "<html><body><pre>" + "\n".join(rows) + "</pre></body></html>"


@pytest.fixture
def library_pages():
    return {
        "http://host/media/": index_page(
            "Show/", "Movie.Title.2020.720p.mp4", "notes.txt"
        ),
        "http://host/media/Show/": index_page(
            "Show.Name.S01E01.1080p.mkv", "Show.Name.S01E02.1080p.mkv", "Extras/"
        ),
        "http://host/media/Show/Extras/": index_page("Behind.The.Scenes.mkv"),
    }
