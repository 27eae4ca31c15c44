"""
mediaindex — Crawl HTTP media indexes and normalize M3U playlists into a clean catalog.
"""
__version__ = "0.3.0"
