"""Debounced, cancellable scheduling on the asyncio event loop.

Used for search input: every keystroke reschedules the call, and only
the last input survives a full quiet window.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional, Tuple, Dict

logger = logging.getLogger(__name__)


class Debouncer:
    """Runs ``func`` once input has been quiet for ``wait`` seconds.

    Calling the debouncer cancels any call still waiting and schedules a
    new one with the latest arguments (last input wins). ``func`` may be
    a plain function or a coroutine function.
    """

    def __init__(self, func: Callable[..., Any], wait: float = 0.3) -> None:
        if wait < 0:
            raise ValueError("wait cannot be negative")
        self.func = func
        self.wait = wait
        self._task: Optional[asyncio.Task] = None
        self._pending: Optional[Tuple[Tuple[Any, ...], Dict[str, Any]]] = None
        self.calls = 0

    @property
    def pending(self) -> bool:
        """True while a scheduled call is waiting to run."""
        return self._task is not None and not self._task.done()

    def __call__(self, *args: Any, **kwargs: Any) -> asyncio.Task:
        """Schedule ``func(*args, **kwargs)`` after the quiet window.

        Must be called from a running event loop.
        """
        self.cancel()
        self._pending = (args, kwargs)
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run_later())
        return self._task

    def cancel(self) -> bool:
        """Drop the waiting call, if any."""
        self._pending = None
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            return True
        return False

    async def flush(self) -> bool:
        """Run the waiting call immediately instead of after the window."""
        pending = self._pending
        if pending is None or not self.pending:
            return False
        self.cancel()
        await self._invoke(*pending)
        return True

    async def _run_later(self) -> None:
        await asyncio.sleep(self.wait)
        pending = self._pending
        if pending is None:
            return
        self._pending = None
        await self._invoke(*pending)

    async def _invoke(self, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> None:
        self.calls += 1
        try:
            result = self.func(*args, **kwargs)
            if asyncio.iscoroutine(result):
                await result
        except Exception:
            logger.exception("Debounced call to %r failed", self.func)
