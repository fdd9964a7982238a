"""
Playback Context - beat audio previews.

Enforces that at most one preview is audible at a time.
"""

from .preview import InMemoryPreview, PlaybackState, PreviewControl
from .controller import PlaybackController

__all__ = [
    "InMemoryPreview",
    "PlaybackController",
    "PlaybackState",
    "PreviewControl",
]
