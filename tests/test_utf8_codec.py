import pytest

from cxkit import utf8_codec as u

SAMPLES = ["a", "é", "€", "😀", "Ω", "Ж"]


@pytest.mark.parametrize("ch", SAMPLES)
def test_encode_matches_python(ch):
    assert u.encode_codepoint(ord(ch)) == ch.encode("utf-8")


@pytest.mark.parametrize("ch", SAMPLES)
def test_decode_round_trip(ch):
    raw = ch.encode("utf-8")
    cp, nxt = u.decode_codepoint(raw, 0)
    assert cp == ord(ch)
    assert nxt == len(raw)
    assert u.codepoint_size(cp) == len(raw)
    assert u.codepoint_calc_size(raw[0]) == len(raw)


def test_decode_walks_string():
    text = "aé€😀"
    raw = text.encode("utf-8")
    pos, cps = 0, []
    while pos < len(raw):
        cp, pos = u.decode_codepoint(raw, pos)
        cps.append(cp)
    assert cps == [ord(c) for c in text]


def test_decode_out_of_range():
    with pytest.raises(IndexError):
        u.decode_codepoint(b"abc", 3)


def test_prev_codepoint():
    raw = "aé€".encode("utf-8")
    cp, prev = u.prev_codepoint(raw, 3)
    assert cp == ord("€")
    assert prev == 1
    cp, prev = u.prev_codepoint(raw, 1)
    assert cp == ord("é")
    assert prev == 0


def test_prev_codepoint_rejects_start():
    with pytest.raises(IndexError):
        u.prev_codepoint(b"abc", 0)


def test_encode_rejects_negative():
    with pytest.raises(ValueError):
        u.encode_codepoint(-1)


@pytest.mark.parametrize(
    "text", ["ABCXYZ", "ÀÉÖØÞ", "ΑΒΓΩ", "АБВЯ", "ЀЁЏ"]
)
def test_lower_upper_match_python(text):
    for ch in text:
        lo = u.lower_codepoint(ord(ch))
        assert lo == ord(ch.lower())
        assert u.upper_codepoint(lo) == ord(ch)
        assert u.is_upper(ord(ch))
        assert u.is_lower(lo)


def test_special_mappings_from_table():
    assert u.lower_codepoint(0x0178) == 0x00FF
    assert u.upper_codepoint(0x00FF) == 0x0178
    assert u.upper_codepoint(0x03D1) == 0x0398


def test_alternating_ranges():
    assert u.lower_codepoint(0x0100) == 0x0101
    assert u.upper_codepoint(0x0101) == 0x0100
    assert u.lower_codepoint(0x0139) == 0x013A
    assert u.upper_codepoint(0x013A) == 0x0139


def test_caseless_unchanged():
    for cp in (ord("1"), ord(" "), 0x4E2D):
        assert u.lower_codepoint(cp) == cp
        assert u.upper_codepoint(cp) == cp
        assert not u.is_lower(cp)
        assert not u.is_upper(cp)


def test_lower_upper_strings():
    assert u.lower("Hello ΩМИР") == "Hello ΩМИР".lower()
    assert u.upper("hello ωмир") == "hello ωмир".upper()
    assert u.lower("ABC".encode()) == b"abc"


def test_lower_keeps_invalid_bytes():
    assert u.lower(b"A\x80B") == b"a\x80b"


def test_find_invalid_valid_text():
    assert u.find_invalid("aé€😀".encode("utf-8")) is None


def test_find_invalid_positions():
    assert u.find_invalid(b"abc\x80") == 3
    assert u.find_invalid(b"\xc0\x80") == 0  # overlong
    raw = "é".encode("utf-8")
    assert u.find_invalid(b"xy" + raw[:1]) == 2


def test_find_invalid_limit():
    raw = "a€".encode("utf-8")
    assert u.find_invalid(raw, 2) == 1
    assert u.find_invalid(raw, 1) is None


def test_make_valid_replaces():
    fixed = u.make_valid(b"a\x80b\xe2\x82", ord("?"))
    assert fixed == b"a?b??"
    assert u.find_invalid(fixed) is None


def test_make_valid_keeps_valid():
    raw = "aé€😀".encode("utf-8")
    assert u.make_valid(raw) == raw


def test_make_valid_rejects_non_ascii_replacement():
    with pytest.raises(ValueError):
        u.make_valid(b"abc", 0x80)