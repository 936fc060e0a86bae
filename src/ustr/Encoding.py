#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj
from .Endian import Endian


class Encoding(Obj):
    """
    Encoding tags the byte layout of text handed to the decoder:
    ASCII, UTF-8, UTF-16LE, UTF-16BE, UTF-32LE or UTF-32BE.
    """

    _vals_list = []
    _byName = {}

    # Common aliases accepted by fromStr
    _ALIASES = {
        "ascii": "ASCII",
        "us-ascii": "ASCII",
        "utf-8": "UTF-8",
        "utf8": "UTF-8",
        "utf-16le": "UTF-16LE",
        "utf16le": "UTF-16LE",
        "utf-16be": "UTF-16BE",
        "utf16be": "UTF-16BE",
        "utf-32le": "UTF-32LE",
        "utf32le": "UTF-32LE",
        "utf-32be": "UTF-32BE",
        "utf32be": "UTF-32BE",
    }

    def __init__(self, name, ordinal, width, endian, bom):
        super().__init__()
        self._name = name
        self._ordinal = ordinal
        self._width = width
        self._endian = endian
        self._bom = bom

    @staticmethod
    def _define(name, width, endian, bom):
        enc = Encoding(name, len(Encoding._vals_list), width, endian, bom)
        Encoding._vals_list.append(enc)
        Encoding._byName[name] = enc
        return enc

    @staticmethod
    def fromStr(name, checked=True):
        """
        Get an Encoding by name, case-insensitive ("utf8", "UTF-16LE", ...).
        Raises Err for unknown names when checked, else returns None.
        """
        if name is not None:
            canonical = Encoding._ALIASES.get(str(name).strip().lower().replace('_', '-'))
            if canonical is not None:
                return Encoding._byName[canonical]
        if checked:
            from .Err import Err
            raise Err.make(f"Unsupported encoding '{name}'")
        return None

    @staticmethod
    def vals():
        return list(Encoding._vals_list)

    @staticmethod
    def ascii():
        return Encoding._ascii

    @staticmethod
    def utf8():
        return Encoding._utf8

    @staticmethod
    def utf16LE():
        return Encoding._utf16LE

    @staticmethod
    def utf16BE():
        return Encoding._utf16BE

    @staticmethod
    def utf32LE():
        return Encoding._utf32LE

    @staticmethod
    def utf32BE():
        return Encoding._utf32BE

    def name(self):
        return self._name

    def ordinal(self):
        return self._ordinal

    def width(self):
        """Bytes per code unit in the encoded form (1, 2 or 4)."""
        return self._width

    def endian(self):
        """Byte order of multi-byte units, None for byte-oriented encodings."""
        return self._endian

    def bom(self):
        """Byte-order mark, empty for ASCII."""
        return self._bom

    def bomLen(self, data):
        """Length of this encoding's BOM at the start of data, else 0."""
        n = len(self._bom)
        if n and len(data) >= n and bytes(data[:n]) == self._bom:
            return n
        return 0

    def toStr(self):
        return self._name

    def __repr__(self):
        return f"Encoding.{self._name}"

    def equals(self, other):
        return self is other

    def hash(self):
        return hash(self._name)

    def compare(self, that):
        return self._ordinal - that._ordinal


Encoding._ascii = Encoding._define("ASCII", 1, None, b"")
Encoding._utf8 = Encoding._define("UTF-8", 1, None, b"\xEF\xBB\xBF")
Encoding._utf16LE = Encoding._define("UTF-16LE", 2, Endian.little(), b"\xFF\xFE")
Encoding._utf16BE = Encoding._define("UTF-16BE", 2, Endian.big(), b"\xFE\xFF")
Encoding._utf32LE = Encoding._define("UTF-32LE", 4, Endian.little(), b"\xFF\xFE\x00\x00")
Encoding._utf32BE = Encoding._define("UTF-32BE", 4, Endian.big(), b"\x00\x00\xFE\xFF")
