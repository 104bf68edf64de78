"""FIFO queue of byte buffers that recycles its storage."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

__all__ = ["BufferQueue", "BufferQueueStats"]


@dataclass(frozen=True)
class BufferQueueStats:
    """Usage figures of a :class:`BufferQueue`."""

    used_blocks: int
    free_blocks: int
    nallocs: int
    nreallocs: int
    allocmem: int


class _Buffer:
    __slots__ = ("data", "length")

    def __init__(self, data: bytearray, length: int) -> None:
        self.data = data
        self.length = length


def _next_pow2(val: int) -> int:
    res = 2
    while res <= val:
        res <<= 1
    return res


class BufferQueue:
    """Queue of writable byte buffers.

    :meth:`put` hands out a buffer of the requested size to fill in and
    queues it; :meth:`get` returns the oldest queued buffer. Buffers taken
    out are kept and reused by later calls to :meth:`put`.
    """

    def __init__(self) -> None:
        self._free: deque[_Buffer] = deque()
        self._used: deque[_Buffer] = deque()
        self._nallocs = 0
        self._nreallocs = 0
        self._allocmem = 0

    def put(self, nbytes: int) -> memoryview:
        """Queue a buffer of ``nbytes`` bytes and return a writable view of it."""
        if nbytes < 0:
            raise ValueError("nbytes must not be negative")
        if self._free:
            buf = self._free.popleft()
            cap = len(buf.data)
            if cap < nbytes:
                new_cap = _next_pow2(nbytes + 1)
                buf.data = bytearray(new_cap)
                self._allocmem += new_cap - cap
                self._nreallocs += 1
        else:
            cap = _next_pow2(nbytes + 1)
            buf = _Buffer(bytearray(cap), 0)
            self._allocmem += cap
            self._nallocs += 1
        buf.length = nbytes
        self._used.append(buf)
        return memoryview(buf.data)[:nbytes]

    def get(self) -> memoryview | None:
        """Dequeue the oldest buffer and return a view of its bytes, or None if empty.

        The view stays valid until the buffer is handed out again by :meth:`put`.
        """
        if not self._used:
            return None
        buf = self._used.popleft()
        self._free.append(buf)
        return memoryview(buf.data)[: buf.length]

    def clear(self) -> None:
        """Drop every queued buffer, keeping them for reuse."""
        while self._used:
            self._free.append(self._used.pop())

    def __len__(self) -> int:
        return len(self._used)

    def stats(self) -> BufferQueueStats:
        """Return current usage figures."""
        return BufferQueueStats(
            used_blocks=len(self._used),
            free_blocks=len(self._free),
            nallocs=self._nallocs,
            nreallocs=self._nreallocs,
            allocmem=self._allocmem,
        )

    def format_stats(self) -> str:
        """Return the usage figures as one line of text."""
        s = self.stats()
        return (
            f"used:{s.used_blocks} free:{s.free_blocks} nallocs:{s.nallocs} "
            f"nreallocs:{s.nreallocs} allocmem:{s.allocmem}"
        )