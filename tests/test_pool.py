import pytest

from cxkit.pool import PoolAllocator, PoolStats


def test_fresh_allocator_is_empty():
    pool = PoolAllocator(64)
    assert pool.stats() == PoolStats(0, 0, 0, 0)


def test_allocations_share_a_block():
    pool = PoolAllocator(64)
    a = pool.alloc(8, 8)
    b = pool.alloc(8, 8)
    assert len(a) == 8 and len(b) == 8
    s = pool.stats()
    assert s.used_blocks == 1
    assert s.nallocs == 2
    assert s.nbytes == 16


def test_regions_do_not_overlap():
    pool = PoolAllocator(32)
    regions = [pool.alloc(5, 1) for _ in range(20)]
    for index, region in enumerate(regions):
        region[:] = bytes([index]) * 5
    for index, region in enumerate(regions):
        assert bytes(region) == bytes([index]) * 5


def test_overflow_starts_new_block():
    pool = PoolAllocator(16)
    pool.alloc(10, 1)
    pool.alloc(10, 1)
    assert pool.stats().used_blocks == 2


def test_large_request_gets_its_own_block():
    pool = PoolAllocator(16)
    region = pool.alloc(100)
    assert len(region) == 100
    assert pool.stats().used_blocks == 1


def test_padding_is_applied():
    pool = PoolAllocator(16)
    pool.alloc(1, 1)
    pool.alloc(8, 8)
    assert pool.stats().used_blocks == 1
    pool2 = PoolAllocator(16)
    pool2.alloc(1, 1)
    pool2.alloc(9, 8)
    assert pool2.stats().used_blocks == 2


@pytest.mark.parametrize("align", [0, 3, 12, -4])
def test_bad_alignment_rejected(align):
    pool = PoolAllocator(16)
    with pytest.raises(ValueError):
        pool.alloc(4, align)


def test_negative_sizes_rejected():
    with pytest.raises(ValueError):
        PoolAllocator(-1)
    with pytest.raises(ValueError):
        PoolAllocator(16).alloc(-1)


def test_clear_keeps_blocks_for_reuse():
    pool = PoolAllocator(16)
    pool.alloc(10, 1)
    pool.alloc(10, 1)
    pool.clear()
    s = pool.stats()
    assert (s.used_blocks, s.free_blocks, s.nallocs, s.nbytes) == (0, 2, 0, 0)
    pool.alloc(4, 1)
    s = pool.stats()
    assert (s.used_blocks, s.free_blocks) == (1, 1)


def test_reuse_skips_blocks_too_small():
    pool = PoolAllocator(8)
    pool.alloc(8, 1)
    pool.alloc(40, 1)
    pool.clear()
    pool.alloc(30, 1)
    s = pool.stats()
    assert (s.used_blocks, s.free_blocks) == (1, 1)


def test_free_drops_everything_and_stays_usable():
    pool = PoolAllocator(16)
    pool.alloc(10)
    pool.clear()
    pool.alloc(10)
    pool.free()
    assert pool.stats() == PoolStats(0, 0, 0, 0)
    region = pool.alloc(4)
    assert len(region) == 4
    assert pool.stats().used_blocks == 1


def test_realloc_copies_contents():
    pool = PoolAllocator(64)
    old = pool.alloc(4)
    old[:] = b"abcd"
    new = pool.realloc(old, 4, 10)
    assert len(new) == 10
    assert bytes(new[:4]) == b"abcd"


def test_realloc_smaller_returns_same_region():
    pool = PoolAllocator(64)
    old = pool.alloc(8)
    assert pool.realloc(old, 8, 4) is old
    assert pool.stats().nallocs == 1


def test_realloc_from_none():
    pool = PoolAllocator(64)
    region = pool.realloc(None, 0, 6)
    assert len(region) == 6
    assert pool.stats().nbytes == 6