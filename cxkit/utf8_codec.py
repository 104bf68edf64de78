"""UTF-8 code point decoding, encoding, case mapping and validation on bytes."""

from __future__ import annotations

__all__ = [
    "codepoint_calc_size",
    "codepoint_size",
    "decode_codepoint",
    "encode_codepoint",
    "find_invalid",
    "is_lower",
    "is_upper",
    "lower",
    "lower_codepoint",
    "make_valid",
    "prev_codepoint",
    "upper",
    "upper_codepoint",
]

_MAX_CODEPOINT = 0x1FFFFF


def _at(data: bytes, pos: int) -> int:
    """Byte at ``pos``, or 0 past the end (as if the data were terminated)."""
    return data[pos] if 0 <= pos < len(data) else 0


def _is_cont(byte: int) -> bool:
    return byte & 0xC0 == 0x80


def codepoint_calc_size(lead: int) -> int:
    """Return the sequence length announced by the lead byte ``lead``."""
    if lead & 0xF8 == 0xF0:
        return 4
    if lead & 0xF0 == 0xE0:
        return 3
    if lead & 0xE0 == 0xC0:
        return 2
    return 1


def _decode_at(data: bytes, pos: int) -> tuple[int, int]:
    b0 = _at(data, pos)
    size = codepoint_calc_size(b0)
    if size == 4:
        cp = (
            ((b0 & 0x07) << 18)
            | ((_at(data, pos + 1) & 0x3F) << 12)
            | ((_at(data, pos + 2) & 0x3F) << 6)
            | (_at(data, pos + 3) & 0x3F)
        )
    elif size == 3:
        cp = (
            ((b0 & 0x0F) << 12)
            | ((_at(data, pos + 1) & 0x3F) << 6)
            | (_at(data, pos + 2) & 0x3F)
        )
    elif size == 2:
        cp = ((b0 & 0x1F) << 6) | (_at(data, pos + 1) & 0x3F)
    else:
        cp = b0
    return cp, pos + size


def decode_codepoint(data: bytes, pos: int = 0) -> tuple[int, int]:
    """Decode the code point starting at ``pos``; return it and the next position.

    The lead byte alone decides the length; missing trailing bytes read as 0.
    """
    data = bytes(data)
    if not 0 <= pos < len(data):
        raise IndexError(f"position {pos} out of range")
    return _decode_at(data, pos)


def prev_codepoint(data: bytes, pos: int) -> tuple[int, int]:
    """Decode the code point at ``pos`` and return it with the start of the previous one.

    ``pos`` may equal ``len(data)``, where the code point reads as 0.
    """
    data = bytes(data)
    if not 0 < pos <= len(data):
        raise IndexError(f"position {pos} out of range")
    cp, _ = _decode_at(data, pos)
    start = pos - 1
    while start > 0 and _is_cont(data[start]):
        start -= 1
    return cp, start


def codepoint_size(cp: int) -> int:
    """Return the number of bytes needed to encode ``cp``."""
    if cp & ~0x7F == 0:
        return 1
    if cp & ~0x7FF == 0:
        return 2
    if cp & ~0xFFFF == 0:
        return 3
    return 4


def encode_codepoint(cp: int) -> bytes:
    """Encode ``cp`` as UTF-8 bytes (surrogates included, up to 0x1FFFFF)."""
    if not 0 <= cp <= _MAX_CODEPOINT:
        raise ValueError(f"code point {cp:#x} out of range")
    size = codepoint_size(cp)
    if size == 1:
        return bytes((cp,))
    if size == 2:
        return bytes((0xC0 | ((cp >> 6) & 0x1F), 0x80 | (cp & 0x3F)))
    if size == 3:
        return bytes(
            (
                0xE0 | ((cp >> 12) & 0x0F),
                0x80 | ((cp >> 6) & 0x3F),
                0x80 | (cp & 0x3F),
            )
        )
    return bytes(
        (
            0xF0 | ((cp >> 18) & 0x07),
            0x80 | ((cp >> 12) & 0x3F),
            0x80 | ((cp >> 6) & 0x3F),
            0x80 | (cp & 0x3F),
        )
    )


def _in(cp: int, ranges: tuple[tuple[int, int], ...]) -> bool:
    return any(lo <= cp <= hi for lo, hi in ranges)


_SHIFT32_UPPER = (
    (0x0041, 0x005A), (0x00C0, 0x00D6), (0x00D8, 0x00DE),
    (0x0391, 0x03A1), (0x03A3, 0x03AB), (0x0410, 0x042F),
)
_SHIFT32_LOWER = (
    (0x0061, 0x007A), (0x00E0, 0x00F6), (0x00F8, 0x00FE),
    (0x03B1, 0x03C1), (0x03C3, 0x03CB), (0x0430, 0x044F),
)
_ODD_LOWER = (
    (0x0100, 0x012F), (0x0132, 0x0137), (0x014A, 0x0177), (0x0182, 0x0185),
    (0x01A0, 0x01A5), (0x01DE, 0x01EF), (0x01F8, 0x021F), (0x0222, 0x0233),
    (0x0246, 0x024F), (0x03D8, 0x03EF), (0x0460, 0x0481), (0x048A, 0x04FF),
)
_EVEN_LOWER = (
    (0x0139, 0x0148), (0x0179, 0x017E), (0x01AF, 0x01B0), (0x01B3, 0x01B6),
    (0x01CD, 0x01DC),
)

_LOWER_SPECIAL = {
    0x0178: 0x00FF, 0x0243: 0x0180, 0x018E: 0x01DD, 0x023D: 0x019A,
    0x0220: 0x019E, 0x01B7: 0x0292, 0x01C4: 0x01C6, 0x01C7: 0x01C9,
    0x01CA: 0x01CC, 0x01F1: 0x01F3, 0x01F7: 0x01BF, 0x0187: 0x0188,
    0x018B: 0x018C, 0x0191: 0x0192, 0x0198: 0x0199, 0x01A7: 0x01A8,
    0x01AC: 0x01AD, 0x01AF: 0x01B0, 0x01B8: 0x01B9, 0x01BC: 0x01BD,
    0x01F4: 0x01F5, 0x023B: 0x023C, 0x0241: 0x0242, 0x03FD: 0x037B,
    0x03FE: 0x037C, 0x03FF: 0x037D, 0x037F: 0x03F3, 0x0386: 0x03AC,
    0x0388: 0x03AD, 0x0389: 0x03AE, 0x038A: 0x03AF, 0x038C: 0x03CC,
    0x038E: 0x03CD, 0x038F: 0x03CE, 0x0370: 0x0371, 0x0372: 0x0373,
    0x0376: 0x0377, 0x03F4: 0x03B8, 0x03CF: 0x03D7, 0x03F9: 0x03F2,
    0x03F7: 0x03F8, 0x03FA: 0x03FB,
}

_UPPER_SPECIAL = {
    0x00FF: 0x0178, 0x0180: 0x0243, 0x01DD: 0x018E, 0x019A: 0x023D,
    0x019E: 0x0220, 0x0292: 0x01B7, 0x01C6: 0x01C4, 0x01C9: 0x01C7,
    0x01CC: 0x01CA, 0x01F3: 0x01F1, 0x01BF: 0x01F7, 0x0188: 0x0187,
    0x018C: 0x018B, 0x0192: 0x0191, 0x0199: 0x0198, 0x01A8: 0x01A7,
    0x01AD: 0x01AC, 0x01B0: 0x01AF, 0x01B9: 0x01B8, 0x01BD: 0x01BC,
    0x01F5: 0x01F4, 0x023C: 0x023B, 0x0242: 0x0241, 0x037B: 0x03FD,
    0x037C: 0x03FE, 0x037D: 0x03FF, 0x03F3: 0x037F, 0x03AC: 0x0386,
    0x03AD: 0x0388, 0x03AE: 0x0389, 0x03AF: 0x038A, 0x03CC: 0x038C,
    0x03CD: 0x038E, 0x03CE: 0x038F, 0x0371: 0x0370, 0x0373: 0x0372,
    0x0377: 0x0376, 0x03D1: 0x0398, 0x03D7: 0x03CF, 0x03F2: 0x03F9,
    0x03F8: 0x03F7, 0x03FB: 0x03FA,
}


def lower_codepoint(cp: int) -> int:
    """Return the lower-case counterpart of ``cp``, or ``cp`` if it has none."""
    if _in(cp, _SHIFT32_UPPER):
        return cp + 32
    if 0x0400 <= cp <= 0x040F:
        return cp + 80
    if _in(cp, _ODD_LOWER):
        return cp | 0x1
    if _in(cp, _EVEN_LOWER):
        return (cp + 1) & ~0x1
    return _LOWER_SPECIAL.get(cp, cp)


def upper_codepoint(cp: int) -> int:
    """Return the upper-case counterpart of ``cp``, or ``cp`` if it has none."""
    if _in(cp, _SHIFT32_LOWER):
        return cp - 32
    if 0x0450 <= cp <= 0x045F:
        return cp - 80
    if _in(cp, _ODD_LOWER):
        return cp & ~0x1
    if _in(cp, _EVEN_LOWER):
        return (cp - 1) | 0x1
    return _UPPER_SPECIAL.get(cp, cp)


def is_lower(cp: int) -> bool:
    """True if ``cp`` has a distinct upper-case form."""
    return cp != upper_codepoint(cp)


def is_upper(cp: int) -> bool:
    """True if ``cp`` has a distinct lower-case form."""
    return cp != lower_codepoint(cp)


def _map_case(data: bytes | str, mapper) -> bytes | str:
    as_text = isinstance(data, str)
    raw = data.encode("utf-8", "surrogatepass") if as_text else bytes(data)
    out = bytearray()
    pos = 0
    while pos < len(raw):
        cp, nxt = _decode_at(raw, pos)
        mapped = mapper(cp)
        if mapped != cp:
            out += encode_codepoint(mapped)
        else:
            out += raw[pos:nxt]
        pos = nxt
    if as_text:
        return out.decode("utf-8", "surrogatepass")
    return bytes(out)


def lower(data: bytes | str) -> bytes | str:
    """Return ``data`` with every mappable code point lowered (same type as input)."""
    return _map_case(data, lower_codepoint)


def upper(data: bytes | str) -> bytes | str:
    """Return ``data`` with every mappable code point raised (same type as input)."""
    return _map_case(data, upper_codepoint)


def find_invalid(data: bytes, n: int | None = None) -> int | None:
    """Return the offset of the first invalid sequence in the first ``n`` bytes, or None."""
    data = bytes(data)
    limit = len(data) if n is None else min(n, len(data))
    pos = 0
    while pos < limit:
        remaining = limit - pos
        b0 = data[pos]
        if b0 & 0xF8 == 0xF0:
            if remaining < 4:
                return pos
            if not all(_is_cont(data[pos + k]) for k in (1, 2, 3)):
                return pos
            if remaining != 4 and _is_cont(data[pos + 4]):
                return pos
            if b0 & 0x07 == 0 and data[pos + 1] & 0x30 == 0:
                return pos
            pos += 4
        elif b0 & 0xF0 == 0xE0:
            if remaining < 3:
                return pos
            if not (_is_cont(data[pos + 1]) and _is_cont(data[pos + 2])):
                return pos
            if remaining != 3 and _is_cont(data[pos + 3]):
                return pos
            if b0 & 0x0F == 0 and data[pos + 1] & 0x20 == 0:
                return pos
            pos += 3
        elif b0 & 0xE0 == 0xC0:
            if remaining < 2:
                return pos
            if not _is_cont(data[pos + 1]):
                return pos
            if remaining != 2 and _is_cont(data[pos + 2]):
                return pos
            if b0 & 0x1E == 0:
                return pos
            pos += 2
        elif b0 & 0x80 == 0:
            pos += 1
        else:
            return pos
    return None


def make_valid(data: bytes, replacement: int = ord("?")) -> bytes:
    """Return ``data`` with each malformed lead or stray byte replaced by ``replacement``.

    ``replacement`` must be an ASCII code (at most 0x7F).
    """
    if not 0 <= replacement <= 0x7F:
        raise ValueError("replacement must be an ASCII code point")
    data = bytes(data)
    out = bytearray()
    pos = 0
    while pos < len(data):
        b0 = data[pos]
        if b0 & 0xF8 == 0xF0:
            needed = 3
        elif b0 & 0xF0 == 0xE0:
            needed = 2
        elif b0 & 0xE0 == 0xC0:
            needed = 1
        elif b0 & 0x80 == 0:
            needed = 0
        else:
            out.append(replacement)
            pos += 1
            continue
        if not all(_is_cont(_at(data, pos + k)) for k in range(1, needed + 1)):
            out.append(replacement)
            pos += 1
            continue
        cp, pos = _decode_at(data, pos)
        out += encode_codepoint(cp)
    return bytes(out)