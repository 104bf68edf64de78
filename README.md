# cxkit

This package collects small general-purpose building blocks, written in plain
Python with no third-party dependencies.

| Module | What it gives you |
| --- | --- |
| `cxkit.hmap` | `HashMap`, a chained hash map that is a `MutableMapping`. It also provides `fnv1a32`, `next_prime` and `HashMapStats`. |
| `cxkit.utf8_codec` | Code point decoding and encoding, case mapping, and validation and repair of UTF-8 bytes. |
| `cxkit.utf8_search` | Searching for substrings, code points and character sets, both case-sensitive and case-insensitive. |
| `cxkit.utf8_compare` | Byte-wise and case-insensitive comparison, length and size counting, and truncation at a code point boundary. |
| `cxkit.json_build` | `build` and `to_json`, which write plain Python values as compact JSON. |
| `cxkit.bqueue` | `BufferQueue`, a FIFO of byte buffers that are reused. |
| `cxkit.pool` | `PoolAllocator`, which hands out byte regions carved from reusable blocks. |

## Install

```
pip install .
```

## Hash map

`HashMap(nbuckets=0, hash_key=None, load_factor=2.0)` keeps its entries in
buckets. The bucket count is always a prime taken from `next_prime`. When an
insertion would reach `load_factor` entries per bucket, the map grows to the
next prime. By default, keys of type `bytes`, `str` and `int` are hashed with
`fnv1a32`, and other keys use `hash()`. You can pass your own `hash_key`
callable instead. Iteration goes in bucket order, and within a bucket in
insertion order.

```python
from cxkit.hmap import HashMap

m = HashMap()
for i in range(100):
    m[i] = i * 2.0
assert len(m) == 100
assert m.delete(0) is True      # False when the key is absent
assert m.get(0) is None
print(m.nbuckets, m.stats())    # HashMapStats(nbuckets=..., count=99, ...)
```

## UTF-8 helpers

These functions work on the UTF-8 bytes themselves. The lead byte of each
code point decides its length.

- `utf8_codec`: `decode_codepoint`, `prev_codepoint`, `encode_codepoint`,
  `codepoint_size`, `codepoint_calc_size`, `lower_codepoint`,
  `upper_codepoint`, `is_lower`, `is_upper`, `lower`, `upper`,
  `find_invalid` and `make_valid`.
- `utf8_search`: `find`, `casefind`, `find_char`, `rfind_char`, `span`,
  `cspan` and `find_any`. They accept `bytes`, which gives byte offsets, or
  `str`, which gives character indices.
- `utf8_compare`: `compare`, `ncompare`, `casecompare`, `ncasecompare`,
  `length`, `nlength`, `size`, `nsize`, `truncate` and `ndup`.

In `utf8_search` and `utf8_compare`, text ends at its first NUL byte.

```python
from cxkit.utf8_codec import find_invalid, make_valid, upper
from cxkit.utf8_compare import casecompare, length, truncate
from cxkit.utf8_search import find

assert upper("héllo") == "HÉLLO"
assert find_invalid(b"ab\xffcd") == 2
assert make_valid(b"ab\xffcd") == b"ab?cd"
assert find("héllo", "l") == 2
assert casecompare("ÀBC", "àbc") == 0
assert length("héllo") == 5
assert truncate("héllo", 2) == "h"
```

## JSON output

`to_json(value, replacer=None)` returns a string, and
`build(value, out, replacer=None)` writes to a text stream instead. Both
accept `None`, `bool`, `int`, `float`, `str`, lists and tuples, and mappings
with `str` keys. Floats are written with six decimals. If you give a
`replacer`, it is called on every value, the root included, and whatever it
returns is written in place of that value.

```python
from cxkit.json_build import to_json

assert to_json({"a": [1, 2.5, "x", None, True]}) == '{"a":[1,2.500000,"x",null,true]}'
```

## Buffer queue

`BufferQueue.put(nbytes)` queues a buffer and returns a writable
`memoryview` for you to fill. `get()` returns the oldest buffer, or `None`
when the queue is empty. Buffers that have been taken out are reused by
later calls to `put`. `stats()` and `format_stats()` report allocation
counts.

```python
from cxkit.bqueue import BufferQueue

q = BufferQueue()
q.put(5)[:] = b"hello"
assert len(q) == 1
assert q.get().tobytes() == b"hello"
print(q.format_stats())   # used:0 free:1 nallocs:1 nreallocs:0 allocmem:8
```

## Pool allocator

`PoolAllocator(block_size)` hands out aligned regions as writable
memoryviews. The default alignment is 16. `realloc` copies the old contents
into a larger region. `clear()` keeps the blocks for reuse, while `free()`
drops them. Both leave the allocator usable.

```python
from cxkit.pool import PoolAllocator

pool = PoolAllocator(1024)
region = pool.alloc(10)
region[:3] = b"abc"
bigger = pool.realloc(region, 10, 20)
assert bigger[:3].tobytes() == b"abc"
pool.clear()
assert pool.stats().free_blocks == 1
```

## What this package does not do

- It writes JSON but does not parse it.
- It has no logger.
- It has no task scheduler or thread pool.
- It has no error type of its own. Failures raise the standard `ValueError`,
  `KeyError`, `TypeError` and `IndexError`.
- It provides no command-line tools.

## Tests

```
pip install .[test]
pytest
```