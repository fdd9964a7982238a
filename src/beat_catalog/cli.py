"""Command line interface for beat catalog."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .application.session import BrowserSession
from .domain.catalog.services import genre_counts
from .exceptions import BeatCatalogError
from .models.config import Config, load_config
from .ui.catalog_renderer import RichCatalogRenderer

console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _build_config(
    config_path: Optional[Path],
    data: Optional[Path],
    remote_url: Optional[str],
    page_size: Optional[int] = None,
) -> Config:
    cfg = load_config(config_path) if config_path else Config.default()
    if data is not None:
        cfg.catalog.local_data_path = data
    if remote_url:
        cfg.remote.public_url = remote_url
    if page_size is not None:
        cfg.catalog.page_size = page_size
    cfg.validate()
    return cfg


def _source_options(func):
    """Options shared by every command that loads the catalog."""
    func = click.option(
        '--verbose', is_flag=True, help='Verbose output'
    )(func)
    func = click.option(
        '--remote-url', help='Public URL of the bucket serving beats-metadata.json and audio'
    )(func)
    func = click.option(
        '--data',
        type=click.Path(path_type=Path),
        help='Local catalog JSON file (default: data/beats.json)'
    )(func)
    func = click.option(
        '--config',
        type=click.Path(exists=True, path_type=Path),
        help='Configuration file path'
    )(func)
    return func


@click.group()
@click.version_option(version=__version__)
def cli():
    """Browse, search and preview the beat catalog."""
    pass


@cli.command()
@_source_options
@click.option('--search', 'query', default='', help='Search title, genre, tags, BPM or key')
@click.option('--genre', default='all', help='Only show one genre')
@click.option('--pages', default=1, type=click.IntRange(min=1), help='Number of pages to show')
@click.option('--page-size', type=click.IntRange(min=1), help='Beats per page')
@click.option('--play', 'play_id', help='Start the preview of this beat')
@click.option('--urls', is_flag=True, help='Show resolved audio URLs')
def browse(
    config: Optional[Path],
    data: Optional[Path],
    remote_url: Optional[str],
    verbose: bool,
    query: str,
    genre: str,
    pages: int,
    page_size: Optional[int],
    play_id: Optional[str],
    urls: bool,
):
    """Show the catalog, optionally filtered and searched."""
    _setup_logging(verbose)
    renderer = RichCatalogRenderer(console, show_urls=urls)

    try:
        cfg = _build_config(config, data, remote_url, page_size)
        session = BrowserSession(config=cfg)
        result = asyncio.run(_browse(session, query, genre, pages, play_id))

        renderer.render(session.view())
        renderer.render_notices(session.notifier.active())

        if result.is_failure():
            sys.exit(1)

    except BeatCatalogError as e:
        console.print(f"\n[red]Error: {e}[/red]")
        sys.exit(1)


async def _browse(
    session: BrowserSession,
    query: str,
    genre: str,
    pages: int,
    play_id: Optional[str],
):
    """Replay the command line options as user input on a fresh session."""
    result = await session.load()
    if result.is_failure():
        return result

    session.filter(genre)
    if query:
        session.search(query)
        await session.flush_search()
    for _ in range(pages - 1):
        if not session.load_more():
            break
    if play_id:
        session.toggle_playback(play_id)
    return result


@cli.command()
@_source_options
def genres(
    config: Optional[Path],
    data: Optional[Path],
    remote_url: Optional[str],
    verbose: bool,
):
    """List the genres in the catalog with beat counts."""
    _setup_logging(verbose)

    try:
        cfg = _build_config(config, data, remote_url)
        session = BrowserSession(config=cfg)
        result = asyncio.run(session.load())
        if result.is_failure():
            console.print(f"[red]Error: {result.error()}[/red]")
            sys.exit(1)

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Genre")
        table.add_column("Beats", justify="right")
        for name, count in genre_counts(session.store.all_items).items():
            table.add_row(name, str(count))
        console.print(table)

    except BeatCatalogError as e:
        console.print(f"\n[red]Error: {e}[/red]")
        sys.exit(1)


@cli.command()
@click.argument('beat_id')
@_source_options
def download(
    beat_id: str,
    config: Optional[Path],
    data: Optional[Path],
    remote_url: Optional[str],
    verbose: bool,
):
    """Print the direct download link for BEAT_ID."""
    _setup_logging(verbose)

    try:
        cfg = _build_config(config, data, remote_url)
        session = BrowserSession(config=cfg)

        async def run():
            loaded = await session.load()
            if loaded.is_failure():
                return loaded
            return await session.download(beat_id)

        result = asyncio.run(run())
        if result.is_failure():
            console.print(f"[red]Error: {result.error()}[/red]")
            sys.exit(1)

        link = result.value()
        console.print(f"[bold]{link.title}[/bold] -> {link.filename}")
        console.print(link.url)
        RichCatalogRenderer(console).render_notices(session.notifier.active())

    except BeatCatalogError as e:
        console.print(f"\n[red]Error: {e}[/red]")
        sys.exit(1)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
