import pytest

from ustr import Encoding, Endian, Err


def test_vals_are_closed_set():
    names = [e.name() for e in Encoding.vals()]
    assert names == ["ASCII", "UTF-8", "UTF-16LE", "UTF-16BE", "UTF-32LE", "UTF-32BE"]


@pytest.mark.parametrize("name, expected", [
    ("utf8", Encoding.utf8()),
    ("UTF-8", Encoding.utf8()),
    ("utf_16le", Encoding.utf16LE()),
    ("UTF-16BE", Encoding.utf16BE()),
    ("us-ascii", Encoding.ascii()),
    ("utf-32le", Encoding.utf32LE()),
])
def test_from_str(name, expected):
    assert Encoding.fromStr(name) is expected


def test_from_str_unknown():
    assert Encoding.fromStr("latin-9", checked=False) is None
    with pytest.raises(Err):
        Encoding.fromStr("latin-9")


def test_width_and_endian():
    assert Encoding.utf8().width() == 1
    assert Encoding.utf8().endian() is None
    assert Encoding.utf16BE().width() == 2
    assert Encoding.utf16BE().endian() is Endian.big()
    assert Encoding.utf32LE().width() == 4
    assert Encoding.utf32LE().endian() is Endian.little()


def test_bom_len():
    assert Encoding.utf8().bomLen(b"\xEF\xBB\xBFx") == 3
    assert Encoding.utf16LE().bomLen(b"\xFF\xFE") == 2
    assert Encoding.utf16BE().bomLen(b"\xFF\xFE") == 0
    assert Encoding.ascii().bomLen(b"\xEF\xBB\xBF") == 0


def test_endian():
    assert Endian.big().isBig()
    assert not Endian.little().isBig()
    assert Endian.fromStr("LITTLE") is Endian.little()
    assert Endian.fromStr("middle", checked=False) is None
