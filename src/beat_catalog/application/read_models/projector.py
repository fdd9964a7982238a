"""Read model projector for the catalog view.

Projects session state into plain presentational records. Renderers
(terminal, HTML, tests) only ever see these records, never the store or
the playback controller.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Protocol, Tuple

from ...domain.catalog.entities import Beat
from ...domain.catalog.services import available_genres
from ...domain.catalog.store import CatalogStore
from ...domain.playback.controller import PlaybackController
from ...domain.playback.preview import PlaybackState
from ...infrastructure.media import MediaResolver

EMPTY_MESSAGE = "Try adjusting your search or filter criteria"
UNAVAILABLE_MESSAGE = "Audio preview not available"


class ViewStatus(Enum):
    LOADING = "loading"
    READY = "ready"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class BeatCard:
    """Everything needed to draw one beat card."""
    id: str
    title: str
    genre: str
    bpm: int
    key: str
    duration: str
    price: str
    audio_file: str
    tags: Tuple[str, ...]
    description: Optional[str]
    audio_url: str
    alternate_audio_url: Optional[str]
    download_url: str
    download_filename: str
    preview_available: bool = True
    playback_state: PlaybackState = PlaybackState.IDLE

    @property
    def is_playing(self) -> bool:
        return self.playback_state == PlaybackState.PLAYING

    @property
    def play_label(self) -> str:
        return "Pause" if self.is_playing else "Play"

    @property
    def preview_notice(self) -> Optional[str]:
        return None if self.preview_available else UNAVAILABLE_MESSAGE


@dataclass(frozen=True, slots=True)
class CatalogView:
    """A complete, consistent snapshot of what the catalog page shows."""
    status: ViewStatus
    cards: List[BeatCard] = field(default_factory=list)
    total_count: int = 0
    filtered_count: int = 0
    has_more: bool = False
    page: int = 1
    genre_filter: str = "all"
    search_query: str = ""
    genres: List[str] = field(default_factory=list)
    message: Optional[str] = None
    can_retry: bool = False


class CatalogRenderer(Protocol):
    """Presentation layer that draws catalog views."""

    def render(self, view: CatalogView) -> None:
        ...


def project_card(
    beat: Beat,
    media: MediaResolver,
    preview_available: bool = True,
    playback_state: PlaybackState = PlaybackState.IDLE,
) -> BeatCard:
    """Project a beat into its card record."""
    return BeatCard(
        id=beat.id,
        title=beat.title,
        genre=beat.genre,
        bpm=beat.bpm,
        key=beat.key,
        duration=beat.duration,
        price=beat.price,
        audio_file=beat.audio_file,
        tags=beat.tags,
        description=beat.description,
        audio_url=media.resolve(beat.audio_file),
        alternate_audio_url=media.alternate_url(beat.audio_file),
        download_url=media.download_url(beat.audio_file),
        download_filename=media.download_filename(beat.title),
        preview_available=preview_available,
        playback_state=playback_state if preview_available else PlaybackState.IDLE,
    )


def project_view(
    store: CatalogStore,
    media: MediaResolver,
    playback: Optional[PlaybackController] = None,
    loading: bool = False,
    error: Optional[Exception] = None,
) -> CatalogView:
    """Project the store (and playback state) into a catalog view."""
    common = dict(
        total_count=store.total_count,
        filtered_count=store.filtered_count,
        page=store.page,
        genre_filter=store.genre_filter,
        search_query=store.search_query,
        genres=available_genres(store.all_items),
    )

    if loading:
        return CatalogView(status=ViewStatus.LOADING, message="Loading premium beats...", **common)

    if error is not None:
        return CatalogView(status=ViewStatus.ERROR, message=str(error), can_retry=True, **common)

    visible = store.visible_slice()
    if visible.is_failure():
        # A loaded catalog with nothing to show is an empty state, not an error.
        if store.loaded:
            return CatalogView(status=ViewStatus.EMPTY, message=EMPTY_MESSAGE, **common)
        return CatalogView(status=ViewStatus.ERROR, message=str(visible.error()), can_retry=True, **common)

    cards = []
    for beat in visible.value():
        available = playback.is_available(beat.id) if playback else True
        state = playback.state(beat.id) if playback else PlaybackState.IDLE
        cards.append(project_card(beat, media, available, state))

    return CatalogView(status=ViewStatus.READY, cards=cards, has_more=store.has_more, **common)
