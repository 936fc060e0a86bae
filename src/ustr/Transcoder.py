#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Alloc import Alloc
from .Detector import Detector
from .Encoding import Encoding
from .Err import TextErr, ErrKind
from .Log import Log

MAX_CODEPOINT = 0x10FFFF

# U+FFFD, used only when rendering to a Python str
REPLACEMENT = 0xFFFD


#################################################################
# Surrogates
#################################################################

def isHighSurrogate(u):
    return 0xD800 <= u <= 0xDBFF


def isLowSurrogate(u):
    return 0xDC00 <= u <= 0xDFFF


def isSurrogate(u):
    return 0xD800 <= u <= 0xDFFF


def toSurrogates(v):
    """Split a supplementary scalar (0x10000..0x10FFFF) into (high, low)."""
    v -= 0x10000
    return 0xD800 | (v >> 10), 0xDC00 | (v & 0x3FF)


def fromSurrogates(high, low):
    """Recombine a surrogate pair into its scalar value."""
    return 0x10000 + ((high - 0xD800) << 10) + (low - 0xDC00)


class Transcoder:
    """
    Transcoder converts raw bytes into a UStr of 16-bit code units and
    converts code units back out to UTF-8.
    """

    #################################################################
    # Decode
    #################################################################

    @staticmethod
    def decode(data, encoding=None, alloc=None, length=None):
        """
        Decode data into a new UStr. When encoding is None it is detected.
        A BOM matching the encoding is skipped. Raises TextErr on
        malformed input; nothing partially decoded escapes.
        """
        from .UStr import UStr

        data = Detector.window(data, length)
        if encoding is None:
            encoding = Detector.detect(data)
        elif isinstance(encoding, str):
            encoding = Encoding.fromStr(encoding)

        out = UStr.make(alloc=alloc)
        try:
            Transcoder._decodeTo(out, data, encoding)
        except TextErr:
            out.free()
            raise

        log = Log.get("ustr")
        if log.isDebug():
            log.debug(f"Decoded {len(data)} bytes of {encoding.name()} into {out.size()} units")
        return out

    @staticmethod
    def decodeInto(out, data, encoding):
        """
        Decode data and append the units to out. On TextErr out is left
        exactly as it was.
        """
        tmp = Transcoder.decode(data, encoding, out.alloc())
        try:
            out.append(tmp)
        finally:
            tmp.free()
        return out

    @staticmethod
    def _decodeTo(out, data, encoding):
        start = encoding.bomLen(data)
        if encoding is Encoding.ascii():
            Transcoder._decodeAscii(out, data, start)
        elif encoding is Encoding.utf8():
            Transcoder._decodeUtf8(out, data, start)
        elif encoding.width() == 2:
            Transcoder._decodeUtf16(out, data, start, encoding.endian().isBig())
        else:
            Transcoder._decodeUtf32(out, data, start, encoding.endian().isBig())
        return out

    @staticmethod
    def _decodeAscii(out, data, start):
        out.reserve(out.size() + len(data) - start)
        for i in range(start, len(data)):
            out.pushBack(data[i])

    @staticmethod
    def _decodeUtf8(out, data, start):
        n = len(data)
        # one unit per byte is an upper bound
        out.reserve(out.size() + n - start)
        i = start
        while i < n:
            b = data[i]
            if b < 0x80:
                out.pushBack(b)
                i += 1
                continue

            if (b & 0xE0) == 0xC0:
                need = 1
                v = b & 0x1F
            elif (b & 0xF0) == 0xE0:
                need = 2
                v = b & 0x0F
            elif (b & 0xF8) == 0xF0:
                need = 3
                v = b & 0x07
            else:
                raise TextErr.make(ErrKind.malformedSequence(), f"Invalid UTF-8 start byte 0x{b:02X} at {i}")

            if i + need >= n:
                raise TextErr.make(ErrKind.malformedSequence(), f"Incomplete UTF-8 sequence at {i}")

            for k in range(1, need + 1):
                c = data[i + k]
                if (c & 0xC0) != 0x80:
                    raise TextErr.make(ErrKind.malformedSequence(),
                                       f"Invalid UTF-8 continuation byte 0x{c:02X} at {i + k}")
                v = (v << 6) | (c & 0x3F)

            if v > MAX_CODEPOINT:
                raise TextErr.make(ErrKind.invalidCodepoint(), f"Code point 0x{v:X} at {i} above 0x10FFFF")

            Transcoder._pushScalar(out, v)
            i += need + 1

    @staticmethod
    def _decodeUtf16(out, data, start, big):
        n = len(data)
        if (n - start) % 2 != 0:
            raise TextErr.make(ErrKind.malformedSequence(), f"Odd trailing byte in UTF-16 input of {n} bytes")
        out.reserve(out.size() + (n - start) // 2)

        def unitAt(i):
            if big:
                return (data[i] << 8) | data[i + 1]
            return data[i] | (data[i + 1] << 8)

        i = start
        while i < n:
            u = unitAt(i)
            if isHighSurrogate(u):
                if i + 2 >= n:
                    raise TextErr.make(ErrKind.invalidSurrogate(), f"Incomplete surrogate pair at {i}")
                low = unitAt(i + 2)
                if not isLowSurrogate(low):
                    raise TextErr.make(ErrKind.invalidSurrogate(),
                                       f"Invalid low surrogate 0x{low:04X} at {i + 2}")
                out.pushBack(u)
                out.pushBack(low)
                i += 4
            elif isLowSurrogate(u):
                raise TextErr.make(ErrKind.invalidSurrogate(), f"Unpaired low surrogate 0x{u:04X} at {i}")
            else:
                out.pushBack(u)
                i += 2

    @staticmethod
    def _decodeUtf32(out, data, start, big):
        n = len(data)
        if (n - start) % 4 != 0:
            raise TextErr.make(ErrKind.malformedSequence(),
                               f"Trailing partial code point in UTF-32 input of {n} bytes")
        out.reserve(out.size() + (n - start) // 4 * 2)
        for i in range(start, n, 4):
            if big:
                v = (data[i] << 24) | (data[i + 1] << 16) | (data[i + 2] << 8) | data[i + 3]
            else:
                v = data[i] | (data[i + 1] << 8) | (data[i + 2] << 16) | (data[i + 3] << 24)
            if v > MAX_CODEPOINT:
                raise TextErr.make(ErrKind.invalidCodepoint(), f"Code point 0x{v:X} at {i} above 0x10FFFF")
            Transcoder._pushScalar(out, v)

    @staticmethod
    def _pushScalar(out, v):
        if v <= 0xFFFF:
            out.pushBack(v)
        else:
            high, low = toSurrogates(v)
            out.pushBack(high)
            out.pushBack(low)

    #################################################################
    # Encode
    #################################################################

    @staticmethod
    def encodeUtf8(units, size=None, strict=False, alloc=None):
        """
        Encode the first size code units as UTF-8 into a new Utf8Buf.
        Unpaired surrogates are skipped, or raise invalidSurrogate
        when strict.
        """
        from .Utf8Buf import Utf8Buf

        if size is None:
            size = len(units)
        if alloc is None:
            alloc = Alloc.defVal()

        # 3 bytes per unit bounds every case, a pair takes 4 for 2 units
        block = alloc.alloc(size * 3, 'B')
        j = 0
        i = 0
        skipped = 0
        try:
            while i < size:
                u = units[i]
                i += 1
                if u < 0x80:
                    block[j] = u
                    j += 1
                elif u < 0x800:
                    block[j] = 0xC0 | (u >> 6)
                    block[j + 1] = 0x80 | (u & 0x3F)
                    j += 2
                elif isHighSurrogate(u):
                    if i < size and isLowSurrogate(units[i]):
                        v = fromSurrogates(u, units[i])
                        i += 1
                        block[j] = 0xF0 | (v >> 18)
                        block[j + 1] = 0x80 | ((v >> 12) & 0x3F)
                        block[j + 2] = 0x80 | ((v >> 6) & 0x3F)
                        block[j + 3] = 0x80 | (v & 0x3F)
                        j += 4
                    elif strict:
                        raise TextErr.make(ErrKind.invalidSurrogate(),
                                           f"Unpaired high surrogate 0x{u:04X} at {i - 1}")
                    else:
                        skipped += 1
                elif isLowSurrogate(u):
                    if strict:
                        raise TextErr.make(ErrKind.invalidSurrogate(),
                                           f"Unpaired low surrogate 0x{u:04X} at {i - 1}")
                    skipped += 1
                else:
                    block[j] = 0xE0 | (u >> 12)
                    block[j + 1] = 0x80 | ((u >> 6) & 0x3F)
                    block[j + 2] = 0x80 | (u & 0x3F)
                    j += 3
        except TextErr:
            alloc.free(block)
            raise

        log = Log.get("ustr")
        if skipped and log.isDebug():
            log.debug(f"Skipped {skipped} unpaired surrogates encoding {size} units")
        return Utf8Buf._make(block, j, alloc)

    #################################################################
    # Python str
    #################################################################

    @staticmethod
    def unitsFromStr(s):
        """Code units of a Python str; astral chars become surrogate pairs."""
        units = []
        for ch in s:
            v = ord(ch)
            if v > 0xFFFF:
                units.extend(toSurrogates(v))
            else:
                units.append(v)
        return units

    @staticmethod
    def unitsToStr(units, size=None):
        """Render code units as a Python str, unpaired surrogates as U+FFFD."""
        if size is None:
            size = len(units)
        chars = []
        i = 0
        while i < size:
            u = units[i]
            i += 1
            if isHighSurrogate(u) and i < size and isLowSurrogate(units[i]):
                chars.append(chr(fromSurrogates(u, units[i])))
                i += 1
            elif isSurrogate(u):
                chars.append(chr(REPLACEMENT))
            else:
                chars.append(chr(u))
        return ''.join(chars)
