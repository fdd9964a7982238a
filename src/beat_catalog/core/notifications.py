"""Transient user notices.

Short messages ("Downloading ...", "Failed to load beats") shown for a
few seconds and then dismissed on their own.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Protocol

logger = logging.getLogger(__name__)


class NoticeLevel(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Notice:
    """A single transient notice."""
    message: str
    level: NoticeLevel
    created_at: float
    expires_at: float

    def is_active(self, now: float) -> bool:
        return now < self.expires_at


class Notifier(Protocol):
    """Anything that can show a transient notice."""

    def notify(self, message: str, level: NoticeLevel = NoticeLevel.INFO) -> Notice:
        ...


class NotificationCenter:
    """Keeps notices until their display time runs out."""

    def __init__(
        self,
        duration: float = 3.0,
        clock: Optional[Callable[[], float]] = None,
        max_notices: int = 50,
    ):
        self.duration = duration
        self._clock = clock or time.monotonic
        self._max_notices = max_notices
        self._notices: List[Notice] = []

    def notify(self, message: str, level: NoticeLevel = NoticeLevel.INFO) -> Notice:
        now = self._clock()
        notice = Notice(message=message, level=level, created_at=now, expires_at=now + self.duration)
        self._notices.append(notice)
        if len(self._notices) > self._max_notices:
            self._notices.pop(0)

        log_level = {
            NoticeLevel.INFO: logging.INFO,
            NoticeLevel.WARNING: logging.WARNING,
            NoticeLevel.ERROR: logging.ERROR,
        }[level]
        logger.log(log_level, "Notice: %s", message)
        return notice

    def active(self) -> List[Notice]:
        """Notices still on screen; expired ones are dismissed."""
        now = self._clock()
        self._notices = [notice for notice in self._notices if notice.is_active(now)]
        return list(self._notices)

    def dismiss_all(self) -> None:
        self._notices.clear()
