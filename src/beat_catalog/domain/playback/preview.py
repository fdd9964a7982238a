"""Preview controls.

A preview control is whatever actually plays a beat's audio (an audio
element in a browser, a terminal player, a test double). The playback
controller only needs to start it, pause it and ask whether it is paused.
"""

from enum import Enum
from typing import Protocol, runtime_checkable

from ..result import MediaUnavailableError


class PlaybackState(Enum):
    """Per-beat preview state."""
    IDLE = "idle"
    PLAYING = "playing"


@runtime_checkable
class PreviewControl(Protocol):
    """Interface for a single beat's audio preview."""

    @property
    def paused(self) -> bool:
        ...

    def play(self) -> None:
        """Start playback. Raises MediaUnavailableError if the audio cannot play."""
        ...

    def pause(self) -> None:
        ...


class InMemoryPreview:
    """Headless preview control that tracks play/pause without producing sound."""

    def __init__(self, beat_id: str, url: str = "", available: bool = True):
        self.beat_id = beat_id
        self.url = url
        self.available = available
        self._paused = True
        self.play_count = 0

    @property
    def paused(self) -> bool:
        return self._paused

    def play(self) -> None:
        if not self.available:
            raise MediaUnavailableError(self.beat_id)
        self._paused = False
        self.play_count += 1

    def pause(self) -> None:
        self._paused = True

    def finish(self) -> None:
        """Simulate the audio reaching its end."""
        self._paused = True

    def __repr__(self) -> str:
        state = "paused" if self._paused else "playing"
        return f"InMemoryPreview({self.beat_id!r}, {state})"
