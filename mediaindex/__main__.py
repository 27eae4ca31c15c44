# mediaindex/__main__.py
import sys
from .cli import app


def cli(argv=None):
    """
    Launcher so you can run:
      - python3 -m mediaindex crawl <url>
      - python3 -m mediaindex split <playlist.m3u>
    """
    return app(args=argv)


if __name__ == "__main__":
    sys.exit(cli())
