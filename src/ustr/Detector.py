#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Encoding import Encoding
from .Log import Log

# Length sentinel: scan to the first NUL byte
SCAN = -1

# BOM probe order, longest match first
_BOMS = [
    Encoding.utf8(),
    Encoding.utf32BE(),
    Encoding.utf32LE(),
    Encoding.utf16BE(),
    Encoding.utf16LE(),
]


class Detector:
    """
    Detector classifies a raw byte span as one of the supported encodings.
    A BOM decides immediately; otherwise a structural UTF-8 scan decides
    between UTF-8 and ASCII.
    """

    @staticmethod
    def window(data, length=None):
        """
        Return the bytes of data the caller asked for: all of it when length
        is None, up to the first NUL when length is SCAN, else the first
        length bytes.
        """
        if isinstance(data, str):
            from .Err import Err
            raise Err.make("Expected bytes, not str")
        data = bytes(data)
        if length is None:
            return data
        length = int(length)
        if length == SCAN:
            nul = data.find(0)
            return data if nul < 0 else data[:nul]
        if length < 0 or length > len(data):
            from .Err import TextErr, ErrKind
            raise TextErr.make(ErrKind.outOfRange(), f"Length {length} outside 0..{len(data)}")
        return data[:length]

    @staticmethod
    def detect(data, length=None):
        """Classify the window of data selected by length."""
        data = Detector.window(data, length)
        enc = Detector._classify(data)
        log = Log.get("ustr")
        if log.isDebug():
            log.debug(f"Detected {enc.name()} for {len(data)} bytes")
        return enc

    @staticmethod
    def _classify(data):
        if len(data) < 2:
            return Encoding.ascii()
        enc = Detector.probeBom(data)
        if enc is not None:
            return enc
        return Encoding.utf8() if Detector.looksUtf8(data) else Encoding.ascii()

    @staticmethod
    def probeBom(data):
        """Return the encoding whose BOM starts data, or None."""
        for enc in _BOMS:
            if enc.bomLen(data):
                return enc
        return None

    @staticmethod
    def looksUtf8(data):
        """
        True if data is structurally valid UTF-8 with at least one
        multi-byte sequence. Any bad lead byte, bad continuation byte or
        sequence cut off by the end of data means no.
        """
        sequences = 0
        expected = 0
        for b in data:
            if expected == 0:
                if b < 0x80:
                    continue
                if (b & 0xE0) == 0xC0:
                    expected = 1
                elif (b & 0xF0) == 0xE0:
                    expected = 2
                elif (b & 0xF8) == 0xF0:
                    expected = 3
                else:
                    return False
                sequences += 1
            else:
                if (b & 0xC0) != 0x80:
                    return False
                expected -= 1
        return expected == 0 and sequences > 0
