"""Bounded single-producer channel used to feed the worker pool."""

from __future__ import annotations

import asyncio
from contextlib import suppress
from typing import Final, cast

from condenser.domain.errors import ChannelClosedError

_CLOSED: Final = object()


class ChannelDrained(Exception):  # noqa: N818
    """Signals a receiver that the channel is closed and holds no more items."""


class Channel[T]:
    """Bounded FIFO with explicit close on top of ``asyncio.Queue``.

    ``send`` suspends while the channel is full and ``receive`` suspends while it
    is empty but still open. Once closed, receivers drain the remaining items and
    then get ``ChannelDrained``. A close marker travels through the queue to wake
    suspended receivers; each receiver that sees it puts it back for the next one.
    """

    __slots__ = ("_closed", "_queue")

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError(f"Channel capacity must be positive, got {capacity}")
        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize=capacity)
        self._closed = False

    @property
    def capacity(self) -> int:
        return self._queue.maxsize

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(self, item: T) -> None:
        if self._closed:
            raise ChannelClosedError("Send on a closed channel")
        await self._queue.put(item)

    async def receive(self) -> T:
        if self._closed and self._queue.empty():
            raise ChannelDrained
        item = await self._queue.get()
        if item is _CLOSED:
            self._put_marker()
            raise ChannelDrained
        if self._closed and self._queue.empty():
            # The marker was dropped on close because the queue was full.
            self._put_marker()
        return cast(T, item)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._put_marker()

    def _put_marker(self) -> None:
        with suppress(asyncio.QueueFull):
            self._queue.put_nowait(_CLOSED)
