from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable


class AsyncioScheduler:
    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        # without an explicit loop we must be constructed inside a running one
        self._loop = loop or asyncio.get_running_loop()

    def __repr__(self) -> str:
        return f"AsyncioScheduler(loop={self._loop!r})"

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def schedule(self, callback: Callable[[], Any], /) -> None:
        self._loop.call_soon_threadsafe(callback)
