"""Playback controller.

Keeps at most one beat preview audible at a time. Starting a preview
stops whichever one was playing; a preview that reaches its end or fails
to load drops back to idle on its own.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Set

from ..result import MediaUnavailableError
from .preview import PlaybackState, PreviewControl

logger = logging.getLogger(__name__)


class PlaybackController:
    """Single-concurrent-playback state machine over registered previews."""

    def __init__(self) -> None:
        self._controls: Dict[str, PreviewControl] = {}
        self._current: Optional[str] = None
        self._unavailable: Set[str] = set()

    @property
    def currently_playing(self) -> Optional[str]:
        """Id of the beat that is audible right now, if any."""
        return self._current

    @property
    def registered_ids(self) -> List[str]:
        return list(self._controls)

    def register(self, beat_id: str, control: PreviewControl) -> None:
        """Attach a preview control to a beat, replacing any previous one."""
        beat_id = str(beat_id)
        previous = self._controls.get(beat_id)
        if previous is not None and previous is not control:
            self._stop(beat_id)
        self._controls[beat_id] = control

    def unregister(self, beat_id: str) -> None:
        """Detach a beat's control, stopping it first if it is playing."""
        beat_id = str(beat_id)
        if beat_id not in self._controls:
            return
        self._stop(beat_id)
        del self._controls[beat_id]

    def control_for(self, beat_id: str) -> Optional[PreviewControl]:
        return self._controls.get(str(beat_id))

    def sync(self, beat_ids: Iterable[str], factory: Callable[[str], PreviewControl]) -> None:
        """Make the registered controls match the beats currently on screen.

        Controls for beats that are still visible are kept (a playing
        preview keeps playing), missing ones are created through
        ``factory``, and controls for beats no longer visible are dropped.
        Beats marked unavailable never get a control.
        """
        wanted = [str(beat_id) for beat_id in beat_ids]
        wanted_set = set(wanted)
        for beat_id in list(self._controls):
            if beat_id not in wanted_set:
                self.unregister(beat_id)
        for beat_id in wanted:
            if beat_id in self._unavailable or beat_id in self._controls:
                continue
            self._controls[beat_id] = factory(beat_id)

    def state(self, beat_id: str) -> PlaybackState:
        if self._current is not None and self._current == str(beat_id):
            return PlaybackState.PLAYING
        return PlaybackState.IDLE

    def is_available(self, beat_id: str) -> bool:
        return str(beat_id) not in self._unavailable

    def toggle(self, beat_id: str) -> PlaybackState:
        """Play or pause a beat's preview.

        Any other playing preview is stopped before the target starts.
        Toggling a beat without a control is a no-op.
        """
        beat_id = str(beat_id)
        control = self._controls.get(beat_id)
        if control is None:
            logger.debug("No preview control for beat %s", beat_id)
            return PlaybackState.IDLE

        if self._current is not None and self._current != beat_id:
            self._stop(self._current)

        if self._current == beat_id and not control.paused:
            control.pause()
            self._current = None
            return PlaybackState.IDLE

        try:
            control.play()
        except MediaUnavailableError as e:
            logger.warning("Preview for beat %s failed: %s", beat_id, e)
            self.mark_unavailable(beat_id)
            raise
        self._current = beat_id
        return PlaybackState.PLAYING

    def on_ended(self, beat_id: str) -> None:
        """Playback reached the end of the audio."""
        beat_id = str(beat_id)
        control = self._controls.get(beat_id)
        if control is not None and not control.paused:
            control.pause()
        if self._current == beat_id:
            self._current = None

    def mark_unavailable(self, beat_id: str) -> bool:
        """Replace a beat's preview with an unavailable notice.

        Returns False if the beat was already marked.
        """
        beat_id = str(beat_id)
        if beat_id in self._unavailable:
            return False
        self.unregister(beat_id)
        if self._current == beat_id:
            self._current = None
        self._unavailable.add(beat_id)
        return True

    def stop_all(self) -> None:
        if self._current is not None:
            self._stop(self._current)

    def reset(self) -> None:
        """Forget every control and availability mark (used on catalog reload)."""
        self.stop_all()
        self._controls.clear()
        self._unavailable.clear()

    def _stop(self, beat_id: str) -> None:
        control = self._controls.get(beat_id)
        if control is not None and not control.paused:
            control.pause()
        if self._current == beat_id:
            self._current = None
