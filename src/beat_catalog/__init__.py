"""Beat Catalog

Browse a beat storefront catalog: load it from the first available
source, filter it by genre, search it, page through it and preview beats
one at a time.
"""

__version__ = "0.1.0"

from .application.session import BrowserSession, DownloadLink
from .application.read_models import BeatCard, CatalogView, ViewStatus
from .domain.catalog import ALL_GENRES, Beat, CatalogStore, apply_filters
from .domain.playback import PlaybackController, PlaybackState
from .infrastructure.loader import CatalogLoader
from .infrastructure.media import MediaResolver
from .models.config import Config, load_config

__all__ = [
    # Session
    "BrowserSession",
    "DownloadLink",
    # Read models
    "BeatCard",
    "CatalogView",
    "ViewStatus",
    # Domain
    "ALL_GENRES",
    "Beat",
    "CatalogStore",
    "apply_filters",
    "PlaybackController",
    "PlaybackState",
    # Infrastructure
    "CatalogLoader",
    "MediaResolver",
    # Configuration
    "Config",
    "load_config",
]
