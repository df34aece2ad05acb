from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class Immediate:
    """FIFO queue of deferred callbacks, drained by the host with `run`."""

    def __init__(self) -> None:
        self._queue: deque[Callable[[], Any]] = deque()
        self._running = False

    def __repr__(self) -> str:
        return f"Immediate(pending={len(self._queue)}, running={self._running})"

    def schedule(self, callback: Callable[[], Any], /) -> None:
        self._queue.append(callback)

    def pending(self) -> int:
        return len(self._queue)

    def run(self) -> int:
        """Run queued callbacks until the queue is empty and return how many ran.

        Callbacks scheduled while draining run in the same call. A nested call
        from inside a callback returns 0 and leaves draining to the outer call.
        """
        if self._running:
            return 0

        self._running = True
        n = 0
        try:
            while self._queue:
                callback = self._queue.popleft()
                try:
                    callback()
                except Exception:
                    logger.exception("Scheduled callback %r raised, %d callback(s) left in queue", callback, len(self._queue))
                    raise
                n += 1
        finally:
            self._running = False

        return n
