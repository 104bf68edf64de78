"""Comparison, measuring and bounded copying of UTF-8 text.

Every function accepts ``bytes`` or ``str``. Text is taken as its UTF-8
encoding and ends at its first NUL byte, if any. Byte counts (``n``) always
refer to that encoding.
"""

from __future__ import annotations

import sys
from typing import Union

from .utf8_codec import (
    codepoint_calc_size,
    codepoint_size,
    decode_codepoint,
    lower_codepoint,
    upper_codepoint,
)

__all__ = [
    "casecompare",
    "compare",
    "length",
    "ncasecompare",
    "ncompare",
    "ndup",
    "nlength",
    "nsize",
    "size",
    "truncate",
]

Text = Union[bytes, bytearray, memoryview, str]


def _raw(data: Text) -> bytes:
    if isinstance(data, str):
        raw = data.encode("utf-8", "surrogatepass")
    else:
        raw = bytes(data)
    nul = raw.find(b"\0")
    return raw if nul < 0 else raw[:nul]


def _check_n(n: int) -> None:
    if n < 0:
        raise ValueError("n must not be negative")


def _at(data: bytes, pos: int) -> int:
    return data[pos] if pos < len(data) else 0


def _decode(data: bytes, pos: int) -> tuple[int, int]:
    if pos >= len(data):
        return 0, pos
    return decode_codepoint(data, pos)


def _is_cont(byte: int) -> bool:
    return (byte & 0xC0) == 0x80


def _sign(a: bytes, b: bytes) -> int:
    return (a > b) - (a < b)


def compare(a: Text, b: Text) -> int:
    """Compare byte by byte; return -1, 0 or 1."""
    return _sign(_raw(a), _raw(b))


def ncompare(a: Text, b: Text, n: int) -> int:
    """Compare at most the first ``n`` bytes; return -1, 0 or 1."""
    _check_n(n)
    return _sign(_raw(a)[:n], _raw(b)[:n])


def _cases_match(c1: int, c2: int) -> bool:
    return (
        lower_codepoint(c1) == lower_codepoint(c2)
        or upper_codepoint(c1) == upper_codepoint(c2)
    )


def casecompare(a: Text, b: Text) -> int:
    """Compare code points ignoring case.

    Returns 0 when equal, otherwise the difference of the lowered code
    points where the texts first differ.
    """
    r1, r2 = _raw(a), _raw(b)
    p1 = p2 = 0
    while True:
        c1, p1 = _decode(r1, p1)
        c2, p2 = _decode(r2, p2)
        if c1 == 0 and c2 == 0:
            return 0
        if _cases_match(c1, c2):
            continue
        return lower_codepoint(c1) - lower_codepoint(c2)


def _partial(b1: int, b2: int, mask: int, lead: int) -> int | None:
    if (b1 & mask) == lead or (b2 & mask) == lead:
        c1, c2 = b1 & mask, b2 & mask
        return c1 - c2 if c1 < c2 else 0
    return None


def ncasecompare(a: Text, b: Text, n: int) -> int:
    """Like :func:`casecompare`, looking at no more than ``n`` bytes.

    A code point that would not fit in the remaining byte budget is
    judged by its lead byte alone.
    """
    _check_n(n)
    r1, r2 = _raw(a), _raw(b)
    p1 = p2 = 0
    while True:
        if n == 0:
            return 0
        b1, b2 = _at(r1, p1), _at(r2, p2)
        for limit, mask, lead in ((1, 0xE0, 0xC0), (2, 0xF0, 0xE0), (3, 0xF8, 0xF0)):
            if n <= limit:
                result = _partial(b1, b2, mask, lead)
                if result is not None:
                    return result
        c1, p1 = _decode(r1, p1)
        c2, p2 = _decode(r2, p2)
        n -= codepoint_size(c1)
        if n < 0:
            # An overrun of the byte budget leaves the comparison unbounded.
            n = sys.maxsize
        if c1 == 0 and c2 == 0:
            return 0
        if not _cases_match(c1, c2):
            return lower_codepoint(c1) - lower_codepoint(c2)


def nlength(data: Text, n: int | None) -> int:
    """Count code points whose encoding starts within the first ``n`` bytes.

    A final code point whose lead byte announces more bytes than ``n``
    allows is not counted. ``n`` of None means no limit.
    """
    raw = _raw(data)
    if n is not None:
        _check_n(n)
    limit = len(raw) if n is None else min(n, len(raw))
    pos = count = 0
    while pos < limit:
        pos += codepoint_calc_size(raw[pos])
        count += 1
    if n is not None and pos > n:
        count -= 1
    return count


def length(data: Text) -> int:
    """Count the code points of ``data`` by their lead bytes."""
    return nlength(data, None)


def size(data: Text) -> int:
    """Return the encoded byte count, counting one terminating NUL byte."""
    return len(_raw(data)) + 1


def nsize(data: Text, n: int) -> int:
    """Return the encoded byte count, looking at no more than ``n`` bytes."""
    _check_n(n)
    return min(n, len(_raw(data)))


def truncate(data: Text, n: int) -> Text:
    """Return ``data`` cut to at most ``n`` bytes at a code point boundary.

    The result has the type of the input (``str`` or ``bytes``). A last code
    point that does not fit whole is dropped; when the kept bytes form a
    single code point that fills all ``n`` bytes, it is dropped as well,
    leaving room for a terminator.
    """
    _check_n(n)
    raw = _raw(data)
    kept = raw[:n]
    index = len(kept)
    if index:
        check = index - 1
        while check > 0 and _is_cont(kept[check]):
            check -= 1
        span = index - check
        if span < codepoint_calc_size(kept[check]) or span == n:
            index = check
    result = kept[:index]
    if isinstance(data, str):
        return result.decode("utf-8", "surrogatepass")
    return result


def ndup(data: Text, n: int) -> bytes:
    """Return the first ``n`` bytes of the encoding of ``data``, unchecked."""
    _check_n(n)
    return _raw(data)[:n]