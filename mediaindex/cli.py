from __future__ import annotations
import json
import signal
import threading
from dataclasses import asdict
from pathlib import Path

import typer
from rich import print
from rich.console import Console
from rich.table import Table

from .catalog import build_library_candidates
from .config import load_config
from .crawler import Crawler, DiscoveryEvent
from .errors import MalformedInputError, MediaIndexError, describe_failure
from .fetch import Fetcher
from .logging_setup import setup_logging
from .paths import get_dirs
from .patterns import expand_pattern, infer_pattern, parse_episode_range
from .playlist import split_playlist_file
from .tmdb import KINDS, TMDBClient

console = Console(stderr=True)

app = typer.Typer(no_args_is_help=True)


def _fail(exc: BaseException) -> None:
    console.print(f"[red]{describe_failure(exc)}[/red]")
    raise typer.Exit(code=1)


@app.command("paths")
def show_paths():
    """Show where mediaindex stores logs, cache, config."""
    setup_logging()
    t = Table(title="mediaindex paths")
    t.add_column("Kind"); t.add_column("Location")
    for k, p in get_dirs().items():
        t.add_row(k, str(p))
    Console().print(t)


@app.command()
def crawl(
    url: str = typer.Argument(..., help="Base URL of an Apache/nginx style directory index"),
    max_depth: int = typer.Option(None, help="Subfolder depth limit (default from config: 4)"),
    throttle_ms: int = typer.Option(None, help="Pause between requests in ms (default from config: 800)"),
    as_json: bool = typer.Option(False, "--json", help="Dump candidates as JSON to stdout"),
):
    """Crawl a directory index and group playable files into shows and movies."""
    cfg = load_config()
    setup_logging(cfg.log_level)
    if not url.strip():
        _fail(MalformedInputError("Enter a base URL to crawl."))

    def progress(ev: DiscoveryEvent) -> None:
        if ev.kind == "dir":
            console.print(f"[dim]Scanning {ev.path}[/dim]")
        else:
            console.print(f"Found {ev.path}")

    # Ctrl-C finishes the request in flight, then stops with what was found
    cancel = threading.Event()
    crawler = Crawler(
        Fetcher.from_config(cfg),
        max_depth=cfg.max_depth if max_depth is None else max_depth,
        throttle_ms=cfg.throttle_ms if throttle_ms is None else throttle_ms,
        cancel=cancel,
        on_discover=progress,
    )
    previous = signal.signal(signal.SIGINT, lambda *_: cancel.set())
    try:
        files = crawler.run(url)
    except MediaIndexError as e:
        _fail(e)
    finally:
        signal.signal(signal.SIGINT, previous)

    if cancel.is_set():
        console.print("[yellow]Interrupted; keeping files found so far[/yellow]")
    if not files:
        console.print("[yellow]No playable media files detected at that URL.[/yellow]")
        raise typer.Exit(code=0)

    candidates = build_library_candidates(files)
    if as_json:
        typer.echo(json.dumps(asdict(candidates), indent=2, ensure_ascii=False))
        return

    t = Table(title=f"Shows ({len(candidates.shows)})")
    t.add_column("Title"); t.add_column("Episodes", justify="right"); t.add_column("Seasons")
    for s in candidates.shows:
        seasons = sorted({e.season for e in s.episodes})
        t.add_row(s.title, str(len(s.episodes)), ", ".join(str(n) for n in seasons))
    Console().print(t)

    t = Table(title=f"Movies ({len(candidates.movies)})")
    t.add_column("Title"); t.add_column("Year"); t.add_column("Files", justify="right")
    for m in candidates.movies:
        t.add_row(m.title, m.year or "", str(len(m.entries)))
    Console().print(t)


@app.command()
def split(
    playlist: Path = typer.Argument(..., exists=True, dir_okay=False, help="Input .m3u"),
    live_out: Path = typer.Option(Path("live_channels.m3u"), help="Live channels output"),
    vod_out: Path = typer.Option(Path("vod_playlist.m3u"), help="VOD output"),
):
    """Clean, group, dedupe and split a playlist into live and VOD files."""
    cfg = load_config()
    setup_logging(cfg.log_level)
    try:
        result = split_playlist_file(
            playlist, live_out, vod_out, country=cfg.default_country, prefix=cfg.group_prefix
        )
    except MediaIndexError as e:
        _fail(e)
    print(f"[green]Done.[/green] Live: {live_out.resolve()} ({len(result.live)})")
    print(f"      VOD: {vod_out.resolve()} ({len(result.vod)})")


@app.command()
def pattern(samples: list[str] = typer.Argument(..., help="Two or more episode URLs")):
    """Guess a URL template with {season}/{episode}/{s2}/{e2} placeholders."""
    setup_logging()
    guess = infer_pattern(samples)
    if not guess:
        console.print(f"[yellow]{guess.notes}[/yellow]")
        raise typer.Exit(code=1)
    console.print(f"[dim]{guess.notes}[/dim]")
    typer.echo(guess.pattern)


@app.command()
def fill(
    template: str = typer.Argument(..., help="URL template, e.g. https://x/S{s2}E{e2}.mkv"),
    season: int = typer.Option(1, help="Season number"),
    episodes: str = typer.Option("1-10", help="Episode list, e.g. 1-8,10"),
):
    """Expand a URL template for a range of episodes."""
    try:
        numbers = parse_episode_range(episodes)
    except ValueError:
        _fail(MalformedInputError(f"Bad episode range: {episodes!r}"))
    for u in expand_pattern(template, season, numbers):
        typer.echo(u)


def _tmdb_client(kind: str) -> TMDBClient:
    cfg = load_config()
    setup_logging(cfg.log_level)
    if kind not in KINDS:
        _fail(MalformedInputError(f"kind must be one of {', '.join(KINDS)}"))
    if not cfg.tmdb_api_key:
        _fail(MalformedInputError("Set TMDB_API_KEY or tmdb_api_key in config.yaml"))
    return TMDBClient.from_config(cfg)


@app.command()
def search(kind: str = typer.Argument(..., help="tv | movie"), query: str = typer.Argument(...)):
    """Search TMDB for a show or movie title."""
    client = _tmdb_client(kind)
    results = client.search(kind, query)
    if not results:
        console.print("[yellow]No TMDB matches found.[/yellow]")
        return
    t = Table(title=f"TMDB {kind}: {query}")
    t.add_column("ID", justify="right"); t.add_column("Title"); t.add_column("Date"); t.add_column("Vote", justify="right")
    for r in results:
        t.add_row(str(r.id), r.title, r.date, f"{r.vote_average:.1f}")
    Console().print(t)


@app.command()
def lookup(kind: str = typer.Argument(..., help="tv | movie"), tmdb_id: str = typer.Argument(...)):
    """Show TMDB details for one id."""
    client = _tmdb_client(kind)
    try:
        details = client.lookup(kind, tmdb_id)
    except (MediaIndexError, ValueError) as e:
        _fail(e)
    print(f"[bold]{details.title}[/bold]  {details.poster}")
    if details.overview:
        print(details.overview)
    for s in details.seasons:
        print(f"  Season {s.season}: {len(s.episodes)} episode(s)")
