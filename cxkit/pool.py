"""Pool allocator handing out byte regions carved from reusable blocks."""

from __future__ import annotations

import threading
from dataclasses import dataclass

__all__ = ["DEFAULT_ALIGN", "PoolAllocator", "PoolStats"]

DEFAULT_ALIGN = 16


@dataclass(frozen=True)
class PoolStats:
    """Allocation figures of a :class:`PoolAllocator`."""

    nallocs: int
    nbytes: int
    used_blocks: int
    free_blocks: int


class _Block:
    __slots__ = ("data",)

    def __init__(self, size: int) -> None:
        self.data = bytearray(size)

    @property
    def size(self) -> int:
        return len(self.data)


def _align_forward(offset: int, align: int) -> int:
    modulo = offset & (align - 1)
    return offset + (align - modulo) if modulo else offset


class PoolAllocator:
    """Allocator of byte regions that are released all at once.

    Regions are writable memoryviews into blocks of at least ``block_size``
    bytes. :meth:`clear` keeps the blocks for reuse; :meth:`free` drops them.
    """

    def __init__(self, block_size: int) -> None:
        if block_size < 0:
            raise ValueError("block_size must not be negative")
        self._lock = threading.Lock()
        self._block_size = block_size
        self._free: list[_Block] = []
        self._used: list[_Block] = []
        self._offset = 0
        self._nallocs = 0
        self._nbytes = 0

    @property
    def block_size(self) -> int:
        return self._block_size

    def _new_block(self, size: int) -> None:
        size = max(size, self._block_size)
        for index, block in enumerate(self._free):
            if block.size >= size:
                chosen = self._free.pop(index)
                break
        else:
            chosen = _Block(size)
        self._used.append(chosen)
        self._offset = 0

    def alloc(self, size: int, align: int = DEFAULT_ALIGN) -> memoryview:
        """Return a writable region of ``size`` bytes aligned within its block."""
        if size < 0:
            raise ValueError("size must not be negative")
        if align <= 0 or align & (align - 1):
            raise ValueError("align must be a power of two")
        with self._lock:
            padding = 0
            if self._used:
                padding = _align_forward(self._offset, align) - self._offset
            if not self._used or self._offset + padding + size > self._used[-1].size:
                self._new_block(size)
                padding = 0
            start = self._offset + padding
            region = memoryview(self._used[-1].data)[start : start + size]
            self._offset = start + size
            self._nallocs += 1
            self._nbytes += size
            return region

    def realloc(
        self, old: memoryview | None, old_size: int, size: int
    ) -> memoryview | None:
        """Return a region of ``size`` bytes holding the first ``old_size`` bytes of ``old``.

        When ``size`` does not exceed ``old_size``, ``old`` itself is returned.
        """
        if size <= old_size:
            return old
        region = self.alloc(size)
        if old is not None:
            with self._lock:
                region[:old_size] = old[:old_size]
        return region

    def clear(self) -> None:
        """Forget every allocation, keeping all blocks for reuse."""
        with self._lock:
            if not self._used:
                return
            self._free.extend(self._used)
            self._used = []
            self._offset = 0
            self._nallocs = 0
            self._nbytes = 0

    def free(self) -> None:
        """Drop every block; the allocator stays usable."""
        with self._lock:
            self._free = []
            self._used = []
            self._offset = 0
            self._nallocs = 0
            self._nbytes = 0

    def stats(self) -> PoolStats:
        """Return current allocation figures."""
        with self._lock:
            return PoolStats(
                nallocs=self._nallocs,
                nbytes=self._nbytes,
                used_blocks=len(self._used),
                free_blocks=len(self._free),
            )