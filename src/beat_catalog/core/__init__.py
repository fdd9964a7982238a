"""Core session utilities: debounced scheduling and transient notices."""

from .debounce import Debouncer
from .notifications import Notice, NoticeLevel, NotificationCenter, Notifier

__all__ = ["Debouncer", "Notice", "NoticeLevel", "NotificationCenter", "Notifier"]
