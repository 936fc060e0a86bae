import pytest

from ustr import Detector, Encoding, ErrKind, TextErr, UStr


@pytest.mark.parametrize("data", [b"", b"A", b"\xC3", b"\xFE"])
def test_short_input_is_ascii(data):
    assert Detector.detect(data) is Encoding.ascii()


@pytest.mark.parametrize("data, expected", [
    (b"\xEF\xBB\xBFhi", Encoding.utf8()),
    (b"\xFE\xFF\x00A", Encoding.utf16BE()),
    (b"\xFF\xFEA\x00", Encoding.utf16LE()),
    (b"\x00\x00\xFE\xFF\x00\x00\x00A", Encoding.utf32BE()),
    (b"\xFF\xFE\x00\x00A\x00\x00\x00", Encoding.utf32LE()),
])
def test_bom_decides(data, expected):
    assert Detector.detect(data) is expected


def test_utf32le_bom_shadows_utf16le_starting_with_nul():
    # FF FE 00 00 is read as the longer UTF-32LE mark
    data = b"\xFF\xFE\x00\x00A\x00"
    assert Detector.detect(data) is Encoding.utf32LE()
    with pytest.raises(TextErr) as e:
        UStr.fromBytes(data)
    assert e.value.kind() is ErrKind.malformedSequence()
    assert UStr.fromBytes(data, encoding=Encoding.utf16LE()).units() == [0x0000, 0x0041]


def test_utf16be_bom_wins_over_utf8_looking_bytes():
    assert Detector.detect(b"\xFE\xFF\xC3\xA9") is Encoding.utf16BE()
    assert Detector.detect(b"\xFE\xFF\xE2\x82\xAC\xF0\x9F\x98\x80") is Encoding.utf16BE()


def test_plain_ascii():
    assert Detector.detect(b"Hello") is Encoding.ascii()


@pytest.mark.parametrize("data", [
    "é".encode("utf-8"),
    "price: €5".encode("utf-8"),
    "\U0001F600".encode("utf-8"),
    "mixed 你好 text".encode("utf-8"),
])
def test_valid_multibyte_is_utf8(data):
    assert Detector.detect(data) is Encoding.utf8()


@pytest.mark.parametrize("data", [
    b"\xC3\x28",          # bad continuation
    b"caf\xC3",           # cut off by the end
    b"\xFF\x41\x42",      # not a lead byte
    b"ab\x80cd",          # stray continuation
    b"\xE2\x82\x41",
])
def test_broken_utf8_falls_back_to_ascii(data):
    assert Detector.detect(data) is Encoding.ascii()


def test_explicit_length_limits_window():
    assert Detector.detect(b"\xC3\xA9", 1) is Encoding.ascii()
    assert Detector.detect(b"\xC3\xA9\xFF", 2) is Encoding.utf8()


def test_scan_sentinel_stops_at_nul():
    assert Detector.detect(b"\xC3\xA9\x00\xFF", -1) is Encoding.utf8()
    assert Detector.window(b"ab\x00cd", -1) == b"ab"
    assert Detector.window(b"abcd", -1) == b"abcd"


def test_scan_sentinel_is_byte_oriented():
    # the first NUL byte ends the window, even inside a UTF-16 unit
    data = b"\xFF\xFEH\x00i\x00"
    assert Detector.window(data, -1) == b"\xFF\xFEH"
    with pytest.raises(TextErr) as e:
        UStr.fromBytes(data, -1)
    assert e.value.kind() is ErrKind.malformedSequence()
    assert UStr.fromBytes(data).toStr() == "Hi"


def test_length_past_end_is_out_of_range():
    with pytest.raises(TextErr) as e:
        Detector.window(b"ab", 3)
    assert e.value.kind() is ErrKind.outOfRange()


def test_probe_bom():
    assert Detector.probeBom(b"abc") is None
    assert Detector.probeBom(b"\xEF\xBB\xBF") is Encoding.utf8()
