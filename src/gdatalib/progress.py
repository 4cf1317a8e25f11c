"""Delivery of per-entry progress callbacks to the caller's execution context.

A feed may be parsed on a worker thread while the code that wants to hear
about each entry lives on a main loop. Dispatchers decouple the two: the
parser hands every callback to ``schedule`` in document order and the
dispatcher runs them, first in first out, wherever its owner wants them.
"""

from __future__ import annotations

import asyncio
import queue
from collections import deque
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from gdatalib.entry import Entry

logger = structlog.get_logger()

ProgressCallback = Callable[["Entry", int, int], None]


class ProgressDispatcher(Protocol):
    def schedule(self, callback: Callable[..., Any], *args: Any) -> None: ...


class DeferredDispatcher:
    """Hold callbacks until the parse succeeds, then run them on the caller's thread."""

    def __init__(self) -> None:
        self._pending: deque[tuple[Callable[..., Any], tuple[Any, ...]]] = deque()

    def schedule(self, callback: Callable[..., Any], *args: Any) -> None:
        self._pending.append((callback, args))

    def flush(self) -> int:
        delivered = 0
        while self._pending:
            callback, args = self._pending.popleft()
            callback(*args)
            delivered += 1
        return delivered

    def discard(self) -> None:
        if self._pending:
            logger.debug("Discarding progress callbacks", count=len(self._pending))
        self._pending.clear()


class QueueDispatcher:
    """Post callbacks to a thread-safe queue drained by the owning thread."""

    def __init__(self, callbacks: queue.Queue | None = None) -> None:
        self._queue: queue.Queue = callbacks if callbacks is not None else queue.Queue()

    def schedule(self, callback: Callable[..., Any], *args: Any) -> None:
        self._queue.put((callback, args))

    def run_pending(self) -> int:
        """Run every callback queued so far; call this from the owning thread."""
        delivered = 0
        while True:
            try:
                callback, args = self._queue.get_nowait()
            except queue.Empty:
                return delivered
            callback(*args)
            delivered += 1


class AsyncioDispatcher:
    """Post callbacks onto an event loop from any thread."""

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    def schedule(self, callback: Callable[..., Any], *args: Any) -> None:
        self._loop.call_soon_threadsafe(callback, *args)
