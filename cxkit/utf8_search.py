"""Code point aware searching and spanning over UTF-8 text.

Every function accepts ``bytes`` (offsets are byte offsets) or ``str``
(offsets are character indices). Data ends at its first NUL byte, if any.
"""

from __future__ import annotations

from typing import Union

from .utf8_codec import (
    codepoint_calc_size,
    decode_codepoint,
    encode_codepoint,
    lower_codepoint,
)

__all__ = [
    "casefind",
    "cspan",
    "find",
    "find_any",
    "find_char",
    "rfind_char",
    "span",
]

Text = Union[bytes, bytearray, memoryview, str]


def _raw(data: Text) -> bytes:
    if isinstance(data, str):
        raw = data.encode("utf-8", "surrogatepass")
    else:
        raw = bytes(data)
    nul = raw.find(b"\0")
    return raw if nul < 0 else raw[:nul]


def _offset(raw: bytes, off: int | None, as_text: bool) -> int | None:
    if off is None or not as_text:
        return off
    return len(raw[:off].decode("utf-8", "surrogatepass"))


def _at(data: bytes, pos: int) -> int:
    return data[pos] if pos < len(data) else 0


def _is_cont(byte: int) -> bool:
    return byte & 0xC0 == 0x80


def _decode(data: bytes, pos: int) -> tuple[int, int]:
    if pos >= len(data):
        return 0, pos + 1
    return decode_codepoint(data, pos)


def _find(haystack: bytes, needle: bytes) -> int | None:
    if not needle:
        return 0
    pos = 0
    while pos < len(haystack):
        if haystack.startswith(needle, pos):
            return pos
        pos += codepoint_calc_size(haystack[pos])
    return None


def find(haystack: Text, needle: Text) -> int | None:
    """Return where ``needle`` first starts at a code point boundary, or None."""
    raw = _raw(haystack)
    return _offset(raw, _find(raw, _raw(needle)), isinstance(haystack, str))


def casefind(haystack: Text, needle: Text) -> int | None:
    """Like :func:`find`, comparing code points without regard to case."""
    hay = _raw(haystack)
    ndl = _raw(needle)
    as_text = isinstance(haystack, str)
    if not ndl:
        return _offset(hay, 0, as_text)
    pos = 0
    while True:
        start = pos
        h_cp, pos = _decode(hay, pos)
        next_h = pos
        n_cp, npos = _decode(ndl, 0)
        while h_cp and n_cp:
            if lower_codepoint(h_cp) != lower_codepoint(n_cp):
                break
            h_cp, pos = _decode(hay, pos)
            n_cp, npos = _decode(ndl, npos)
        if n_cp == 0:
            return _offset(hay, start, as_text)
        if h_cp == 0:
            return None
        pos = next_h


def find_char(data: Text, cp: int) -> int | None:
    """Return the first position of code point ``cp``; ``cp`` 0 gives the end."""
    raw = _raw(data)
    as_text = isinstance(data, str)
    if cp == 0:
        return _offset(raw, len(raw), as_text)
    return _offset(raw, _find(raw, encode_codepoint(cp)), as_text)


def rfind_char(data: Text, cp: int) -> int | None:
    """Return the last position of code point ``cp``; ``cp`` 0 gives the end."""
    raw = _raw(data)
    as_text = isinstance(data, str)
    if cp == 0:
        return _offset(raw, len(raw), as_text)
    enc = encode_codepoint(cp)
    match = None
    pos = 0
    while pos < len(raw):
        offset = 0
        while offset < len(enc) and _at(raw, pos + offset) == enc[offset]:
            offset += 1
        pos += offset
        if offset == len(enc):
            match = pos - offset
        elif pos < len(raw):
            pos += 1
            while _is_cont(_at(raw, pos)):
                pos += 1
    return _offset(raw, match, as_text)


def _match_set(src: bytes, pos: int, accept: bytes) -> int:
    """Return the byte length of the code point of ``accept`` matched at ``pos``, or 0."""
    a = 0
    offset = 0
    while a < len(accept):
        if not _is_cont(accept[a]) and offset > 0:
            return offset
        if accept[a] == _at(src, pos + offset):
            offset += 1
            a += 1
        else:
            a += 1
            while _is_cont(_at(accept, a)):
                a += 1
            offset = 0
    return offset


def span(data: Text, accept: Text) -> int:
    """Count leading code points of ``data`` that all occur in ``accept``."""
    src = _raw(data)
    acc = _raw(accept)
    chars = 0
    pos = 0
    while pos < len(src):
        matched = _match_set(src, pos, acc)
        if not matched:
            break
        chars += 1
        pos += matched
    return chars


def cspan(data: Text, reject: Text) -> int:
    """Count leading code points of ``data`` that do not occur in ``reject``."""
    src = _raw(data)
    rej = _raw(reject)
    chars = 0
    pos = 0
    while pos < len(src):
        if _match_set(src, pos, rej):
            return chars
        pos += 1
        while _is_cont(_at(src, pos)):
            pos += 1
        chars += 1
    return chars


def find_any(data: Text, accept: Text) -> int | None:
    """Return the position of the first code point of ``data`` found in ``accept``."""
    src = _raw(data)
    acc = _raw(accept)
    pos = 0
    while pos < len(src):
        if _match_set(src, pos, acc):
            return _offset(src, pos, isinstance(data, str))
        pos += 1
        while _is_cont(_at(src, pos)):
            pos += 1
    return None