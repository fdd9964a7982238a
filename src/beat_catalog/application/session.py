"""Browsing session.

The session owns all mutable state for one visitor: the catalog store,
the playback controller and the pending search. User input arrives as
method calls; each one mutates state completely and then hands exactly
one fresh view to the renderer.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..core.debounce import Debouncer
from ..core.notifications import NoticeLevel, NotificationCenter, Notifier
from ..domain.catalog.entities import Beat
from ..domain.catalog.store import CatalogStore
from ..domain.catalog.value_objects import normalize_query
from ..domain.playback.controller import PlaybackController
from ..domain.playback.preview import InMemoryPreview, PlaybackState, PreviewControl
from ..domain.result import (
    MediaUnavailableError,
    NoDataLoadedError,
    NotFoundError,
    Result,
    failure,
    success,
)
from ..events.domain_events import CatalogLoaded, CatalogLoadFailed
from ..events.event_bus import DomainEvent, EventBus
from ..events.telemetry import LoggingTelemetrySink, TelemetrySink
from ..infrastructure.loader import CatalogLoader
from ..infrastructure.media import MediaResolver
from ..models.config import Config
from .read_models.projector import CatalogRenderer, CatalogView, project_view

logger = logging.getLogger(__name__)

DOWNLOAD_EVENT = "beat_download"

PreviewFactory = Callable[[str, str], PreviewControl]


@dataclass(frozen=True, slots=True)
class DownloadLink:
    """A direct download for one beat."""
    beat_id: str
    title: str
    url: str
    filename: str


class BrowserSession:
    """Session-scoped context for browsing the catalog."""

    def __init__(
        self,
        config: Optional[Config] = None,
        loader: Optional[CatalogLoader] = None,
        renderer: Optional[CatalogRenderer] = None,
        telemetry: Optional[TelemetrySink] = None,
        notifier: Optional[Notifier] = None,
        event_bus: Optional[EventBus] = None,
        media: Optional[MediaResolver] = None,
        preview_factory: Optional[PreviewFactory] = None,
    ):
        self.config = config or Config.default()
        self.config.validate()

        self.store = CatalogStore(page_size=self.config.catalog.page_size)
        self.playback = PlaybackController()
        self.media = media or MediaResolver.from_config(self.config)
        self.loader = loader or CatalogLoader.from_config(self.config)
        self.renderer = renderer
        self.telemetry = telemetry or LoggingTelemetrySink()
        self.notifier = notifier or NotificationCenter(duration=self.config.notification_seconds)
        self.event_bus = event_bus
        self._preview_factory = preview_factory or InMemoryPreview
        self._search = Debouncer(self._apply_search, wait=self.config.catalog.search_debounce_seconds)

        self.is_loading = False
        self.load_error: Optional[NoDataLoadedError] = None
        self.last_view: Optional[CatalogView] = None

    # Loading

    async def load(self) -> Result[List[Beat], NoDataLoadedError]:
        """Load the catalog, replacing whatever was loaded before."""
        self._search.cancel()
        self.is_loading = True
        self.load_error = None
        self._publish()

        try:
            result = await self.loader.load_into(self.store)
        finally:
            self.is_loading = False

        if result.is_success():
            self.playback.reset()
            await self._announce(CatalogLoaded(
                source=self.loader.last_source or "unknown",
                beat_count=self.store.total_count,
            ))
        else:
            self.load_error = result.error()
            self.notifier.notify(str(self.load_error), NoticeLevel.ERROR)
            await self._announce(CatalogLoadFailed(
                message=str(self.load_error),
                failed_sources=list(self.load_error.attempts),
            ))

        self._publish()
        return result

    async def retry(self) -> Result[List[Beat], NoDataLoadedError]:
        """Retry action offered on the failure state."""
        return await self.load()

    # Search and filtering

    def search(self, text: str) -> asyncio.Task:
        """Debounced search; only the last input within the window applies."""
        return self._search(text)

    async def flush_search(self) -> bool:
        """Apply a pending search now instead of waiting out the window."""
        return await self._search.flush()

    @property
    def search_pending(self) -> bool:
        return self._search.pending

    def clear_search(self) -> None:
        """Drop any pending search and show the unsearched view at once."""
        self._search.cancel()
        self._apply_search("")

    def filter(self, genre: str) -> None:
        """Select a genre (or ``"all"``); always starts again from page 1."""
        self.store.apply(genre_filter=genre, reset_page=True)
        self._publish()

    def load_more(self) -> bool:
        """Show the next page; returns False once everything is shown."""
        advanced = self.store.advance_page()
        if advanced:
            self._publish()
        return advanced

    def _apply_search(self, text: str) -> None:
        query = normalize_query(text)
        self.store.apply(
            search_query=query,
            reset_page=self.config.catalog.search_resets_page,
        )
        self._publish()

    # Playback

    def toggle_playback(self, beat_id: str) -> PlaybackState:
        """Play or pause a beat's preview."""
        try:
            state = self.playback.toggle(beat_id)
        except MediaUnavailableError as e:
            self.notifier.notify(str(e), NoticeLevel.WARNING)
            state = PlaybackState.IDLE
        self._publish()
        return state

    def playback_ended(self, beat_id: str) -> None:
        self.playback.on_ended(beat_id)
        self._publish()

    def media_failed(self, beat_id: str) -> None:
        """A beat's audio failed to load; swap its preview for a notice."""
        if self.playback.mark_unavailable(beat_id):
            self.notifier.notify(str(MediaUnavailableError(str(beat_id))), NoticeLevel.WARNING)
            self._publish()

    # Downloads

    async def download(self, beat_id: str) -> Result[DownloadLink, NotFoundError]:
        """Resolve a beat's download link and report it to telemetry."""
        beat = self.store.get(beat_id)
        if beat is None:
            return failure(NotFoundError(f"Beat {beat_id!r} is not in the catalog"))

        link = DownloadLink(
            beat_id=beat.id,
            title=beat.title,
            url=self.media.download_url(beat.audio_file),
            filename=self.media.download_filename(beat.title),
        )

        if self.config.enable_analytics:
            await self.telemetry.track(DOWNLOAD_EVENT, {
                "beat_id": beat.id,
                "beat_title": beat.title,
                "audio_file": beat.audio_file,
            })

        self.notifier.notify(f'Downloading "{beat.title}"...')
        return success(link)

    # Rendering

    def view(self) -> CatalogView:
        return project_view(
            self.store,
            self.media,
            self.playback,
            loading=self.is_loading,
            error=self.load_error,
        )

    def _publish(self) -> CatalogView:
        if not self.is_loading:
            visible = self.store.visible_slice().or_else([])
            self.playback.sync([beat.id for beat in visible], self._make_preview)
        view = self.view()
        self.last_view = view
        if self.renderer is not None:
            self.renderer.render(view)
        return view

    def _make_preview(self, beat_id: str) -> PreviewControl:
        beat = self.store.get(beat_id)
        url = self.media.resolve(beat.audio_file) if beat else ""
        return self._preview_factory(beat_id, url)

    async def _announce(self, event: DomainEvent) -> None:
        if self.event_bus is not None:
            await self.event_bus.publish(event)
