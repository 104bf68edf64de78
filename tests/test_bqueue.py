import pytest

from cxkit.bqueue import BufferQueue


def _put(queue, payload):
    view = queue.put(len(payload))
    view[:] = payload
    return view


def test_empty_queue_returns_none():
    queue = BufferQueue()
    assert queue.get() is None
    assert len(queue) == 0


def test_fifo_order_and_contents():
    queue = BufferQueue()
    messages = [b"first", b"second message", b"", b"x"]
    for msg in messages:
        _put(queue, msg)
    assert len(queue) == len(messages)
    received = []
    while (view := queue.get()) is not None:
        received.append(bytes(view))
    assert received == messages
    assert len(queue) == 0


def test_put_returns_view_of_requested_length():
    queue = BufferQueue()
    view = queue.put(10)
    assert len(view) == 10
    assert len(queue.get()) == 10


def test_first_allocation_uses_power_of_two_capacity():
    queue = BufferQueue()
    queue.put(10)
    stats = queue.stats()
    assert stats.allocmem == 16
    assert stats.nallocs == 1
    assert stats.used_blocks == 1
    assert stats.free_blocks == 0


def test_buffers_are_recycled():
    queue = BufferQueue()
    _put(queue, b"abc")
    queue.get()
    assert queue.stats().free_blocks == 1
    _put(queue, b"xyz")
    stats = queue.stats()
    assert stats.nallocs == 1
    assert stats.nreallocs == 0
    assert stats.free_blocks == 0
    assert bytes(queue.get()) == b"xyz"


def test_recycled_buffer_grows_when_too_small():
    queue = BufferQueue()
    queue.put(3)
    queue.get()
    before = queue.stats().allocmem
    payload = bytes(range(100))
    _put(queue, payload)
    stats = queue.stats()
    assert stats.nreallocs == 1
    assert stats.nallocs == 1
    assert stats.allocmem > before
    assert bytes(queue.get()) == payload


def test_clear_moves_buffers_to_free_list():
    queue = BufferQueue()
    for msg in (b"a", b"bb", b"ccc"):
        _put(queue, msg)
    queue.clear()
    stats = queue.stats()
    assert len(queue) == 0
    assert stats.used_blocks == 0
    assert stats.free_blocks == 3
    assert queue.get() is None


def test_format_stats_reflects_stats():
    queue = BufferQueue()
    queue.put(5)
    s = queue.stats()
    assert queue.format_stats() == (
        f"used:{s.used_blocks} free:{s.free_blocks} nallocs:{s.nallocs} "
        f"nreallocs:{s.nreallocs} allocmem:{s.allocmem}"
    )


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        BufferQueue().put(-1)