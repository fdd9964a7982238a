"""Rich renderer for catalog views in the terminal."""

from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..application.read_models.projector import BeatCard, CatalogView, ViewStatus
from ..core.notifications import Notice, NoticeLevel


NOTICE_STYLES = {
    NoticeLevel.INFO: "cyan",
    NoticeLevel.WARNING: "yellow",
    NoticeLevel.ERROR: "red",
}


class RichCatalogRenderer:
    """Draws catalog views using Rich tables and panels."""

    def __init__(self, console: Optional[Console] = None, show_urls: bool = False):
        self.console = console or Console()
        self.show_urls = show_urls

    def render(self, view: CatalogView) -> None:
        if view.status == ViewStatus.LOADING:
            self.console.print(f"[dim]{escape(view.message or 'Loading...')}[/dim]")
            return

        if view.status == ViewStatus.ERROR:
            body = f"{escape(view.message or 'Unable to load beats')}"
            if view.can_retry:
                body += "\n\n[bold]Try again:[/bold] run the command again or use --data/--remote-url"
            self.console.print(Panel(body, title="[red]Unable to load beats[/red]", border_style="red"))
            return

        self.console.print(self._header(view))

        if view.status == ViewStatus.EMPTY:
            self.console.print(Panel(
                escape(view.message or ""),
                title="[yellow]No beats found[/yellow]",
                border_style="yellow",
            ))
            return

        self.console.print(self._table(view.cards))

        if view.has_more:
            remaining = view.filtered_count - len(view.cards)
            self.console.print(f"[dim]{remaining} more - use --pages {view.page + 1} to load more[/dim]")

    def render_notices(self, notices: Iterable[Notice]) -> None:
        for notice in notices:
            style = NOTICE_STYLES[notice.level]
            self.console.print(f"[{style}]{escape(notice.message)}[/{style}]")

    def _header(self, view: CatalogView) -> str:
        genres = " ".join(
            f"[reverse]{escape(g)}[/reverse]" if g == view.genre_filter.lower() else escape(g)
            for g in ["all"] + view.genres
        )
        header = (
            f"[bold cyan]{view.total_count} beats[/bold cyan]"
            f" | showing {len(view.cards)} of {view.filtered_count}"
            f" | genres: {genres}"
        )
        if view.search_query:
            header += f" | search: [italic]{escape(view.search_query)}[/italic]"
        return header

    def _table(self, cards: Iterable[BeatCard]) -> Table:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("ID", style="dim", no_wrap=True)
        table.add_column("Title", style="bold")
        table.add_column("Genre")
        table.add_column("BPM", justify="right")
        table.add_column("Key")
        table.add_column("Length", justify="right")
        table.add_column("Price", style="green")
        table.add_column("Tags")
        table.add_column("Preview")
        if self.show_urls:
            table.add_column("Audio")

        for card in cards:
            if card.preview_available:
                preview = "[green]playing[/green]" if card.is_playing else card.play_label
            else:
                preview = f"[red]{escape(card.preview_notice or '')}[/red]"
            row = [
                escape(card.id),
                escape(card.title),
                escape(card.genre),
                str(card.bpm),
                escape(card.key),
                escape(card.duration),
                escape(card.price),
                escape(" ".join(f"#{tag}" for tag in card.tags)),
                preview,
            ]
            if self.show_urls:
                row.append(escape(card.audio_url))
            table.add_row(*row)

        return table
