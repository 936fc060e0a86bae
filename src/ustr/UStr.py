#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import array

from .Alloc import Alloc
from .Detector import SCAN
from .Err import TextErr, ErrKind
from .Growth import nextCapacity
from .Log import Log
from .Obj import Obj
from .Transcoder import Transcoder

# "not found" index: all 64 bits set
NPOS = (1 << 64) - 1


class UStr(Obj):
    """
    UStr is a growable sequence of 16-bit code units.

    Text decoded from any supported encoding lands here as UTF-16 code
    units. Every operation works on units, not code points: a position
    may fall between the two halves of a surrogate pair.
    """

    npos = NPOS

    # mutable, so not hashable
    __hash__ = None

    def __init__(self, alloc=None):
        super().__init__()
        self._alloc = alloc if alloc is not None else Alloc.defVal()
        self._ptr = None
        self._len = 0
        self._cap = 0

    @staticmethod
    def make(alloc=None):
        """Create an empty UStr with no storage."""
        return UStr(alloc)

    @staticmethod
    def fromBytes(data, length=None, encoding=None, alloc=None):
        """
        Decode raw bytes. The encoding is detected unless given (an
        Encoding or a name like "utf-16le"). length=None takes all of
        data; -1 scans to the first NUL byte.
        """
        return Transcoder.decode(data, encoding, alloc, length)

    @staticmethod
    def tryFromBytes(data, length=None, encoding=None, alloc=None):
        """Like fromBytes but returns a Result instead of raising TextErr."""
        from .Result import Result
        return Result.of(UStr.fromBytes, data, length, encoding, alloc)

    @staticmethod
    def fromUnits(units, length=None, alloc=None):
        """
        Create from a code-unit literal. length=None takes every unit;
        -1 stops at the first 0 unit.
        """
        units = list(units)
        if length is not None:
            length = int(length)
            if length == SCAN:
                length = units.index(0) if 0 in units else len(units)
            elif length < 0 or length > len(units):
                raise TextErr.make(ErrKind.outOfRange(), f"Length {length} outside 0..{len(units)}")
            units = units[:length]
        s = UStr(alloc)
        s.append(units)
        return s

    @staticmethod
    def fromStr(s, alloc=None):
        """Create from a Python str."""
        u = UStr(alloc)
        u.append(Transcoder.unitsFromStr(str(s)))
        return u

    #################################################################
    # Ownership
    #################################################################

    def dup(self):
        """Deep copy with its own storage."""
        that = UStr(self._alloc)
        if self._len > 0:
            that._grow(self._cap)
            self._alloc.copy(that._ptr, 0, self._ptr, 0, self._len)
            that._len = self._len
        return that

    def __copy__(self):
        return self.dup()

    def __deepcopy__(self, memo):
        return self.dup()

    def move(self):
        """Transfer storage to a new UStr; this one is left empty."""
        that = UStr(self._alloc)
        that._ptr, that._len, that._cap = self._ptr, self._len, self._cap
        self._ptr = None
        self._len = 0
        self._cap = 0
        return that

    def free(self):
        """Release storage back to the allocator."""
        if self._ptr is not None:
            self._alloc.free(self._ptr)
        self._ptr = None
        self._len = 0
        self._cap = 0
        return self

    def alloc(self):
        return self._alloc

    #################################################################
    # Accessors
    #################################################################

    def isEmpty(self):
        return self._len == 0

    def size(self):
        """Number of code units in use."""
        return self._len

    def length(self):
        return self._len

    def __len__(self):
        return self._len

    def capacity(self):
        """Number of code units allocated."""
        return self._cap

    @staticmethod
    def maxSize():
        return NPOS // 2

    def get(self, index):
        """Get code unit at index. Supports negative indexing."""
        return self._ptr[self._index(index)]

    def __getitem__(self, index):
        if isinstance(index, slice):
            start, stop, step = index.indices(self._len)
            if step != 1:
                return UStr.fromUnits([self.get(i) for i in range(start, stop, step)], alloc=self._alloc)
            return self.substr(start, max(start, stop))
        return self.get(index)

    def set(self, index, unit):
        """Set code unit at index. Supports negative indexing."""
        self._ptr[self._index(index)] = int(unit) & 0xFFFF
        return self

    def __setitem__(self, index, unit):
        self.set(index, unit)

    def front(self):
        return self.get(0)

    def back(self):
        return self.get(-1)

    def units(self):
        """Snapshot of the code units as a list."""
        if self._ptr is None:
            return []
        return self._ptr[:self._len].tolist()

    def data(self):
        """Writable view of the units in use."""
        if self._ptr is None:
            return memoryview(array.array('H'))
        return memoryview(self._ptr)[:self._len]

    def __iter__(self):
        for i in range(self._len):
            yield self._ptr[i]

    def __reversed__(self):
        for i in range(self._len - 1, -1, -1):
            yield self._ptr[i]

    def _index(self, index):
        index = int(index)
        if index < 0:
            index = self._len + index
        if index < 0 or index >= self._len:
            raise TextErr.make(ErrKind.outOfRange(), f"Index {index} out of bounds for size {self._len}")
        return index

    def _checkPos(self, pos):
        pos = int(pos)
        if pos < 0 or pos > self._len:
            raise TextErr.make(ErrKind.outOfRange(), f"Position {pos} outside 0..{self._len}")
        return pos

    #################################################################
    # Capacity
    #################################################################

    def reserve(self, n):
        """Ensure room for at least n units."""
        self._ensureCapacity(int(n))
        return self

    def shrinkToFit(self):
        """Reallocate to exactly size units (no storage when empty)."""
        if self._cap == self._len:
            return self
        old = self._cap
        if self._len == 0:
            self._alloc.free(self._ptr)
            self._ptr = None
            self._cap = 0
        else:
            self._grow(self._len)
        log = Log.get("ustr")
        if log.isDebug():
            log.debug(f"Shrank UStr capacity {old} -> {self._cap}")
        return self

    def resize(self, n, fill=0):
        """Set size to n, padding new units with fill."""
        n = int(n)
        if n < 0:
            raise TextErr.make(ErrKind.outOfRange(), f"Negative size {n}")
        if n > self._len:
            self._ensureCapacity(n)
            fill = int(fill) & 0xFFFF
            for i in range(self._len, n):
                self._ptr[i] = fill
        self._len = n
        return self

    def clear(self):
        """Remove all units and release storage."""
        return self.free()

    def _ensureCapacity(self, required):
        if required <= self._cap:
            return
        old = self._cap
        self._grow(nextCapacity(self._cap, required))
        log = Log.get("ustr")
        if log.isDebug():
            log.debug(f"Grew UStr capacity {old} -> {self._cap}")

    def _grow(self, cap):
        # allocate first so a failure leaves this UStr untouched
        ptr = self._alloc.alloc(cap)
        if self._ptr is not None:
            self._alloc.copy(ptr, 0, self._ptr, 0, self._len)
            self._alloc.free(self._ptr)
        self._ptr = ptr
        self._cap = cap

    #################################################################
    # Modification
    #################################################################

    def pushBack(self, unit):
        """Append a single code unit."""
        self._ensureCapacity(self._len + 1)
        self._ptr[self._len] = unit & 0xFFFF
        self._len += 1
        return self

    def popBack(self):
        """Remove the last code unit; no-op when empty."""
        if self._len > 0:
            self._len -= 1
        return self

    def append(self, obj):
        """
        Append a unit (int), another UStr, a Python str, a sequence of
        units, or raw bytes (decoded with a detected encoding).
        """
        src = UStr._coerce(obj, self._alloc)
        n = len(src)
        if n == 0:
            return self
        self._ensureCapacity(self._len + n)
        self._alloc.copy(self._ptr, self._len, src, 0, n)
        self._len += n
        return self

    def __iadd__(self, obj):
        return self.append(obj)

    def plus(self, obj):
        """Return a new UStr of this followed by obj."""
        return self.dup().append(obj)

    def __add__(self, obj):
        return self.plus(obj)

    def __radd__(self, obj):
        return UStr(self._alloc).append(obj).append(self)

    def insert(self, pos, obj):
        """Insert units (anything append accepts) before pos."""
        pos = self._checkPos(pos)
        src = UStr._coerce(obj, self._alloc)
        n = len(src)
        if n == 0:
            return self
        self._ensureCapacity(self._len + n)
        self._alloc.move(self._ptr, pos + n, pos, self._len - pos)
        self._alloc.copy(self._ptr, pos, src, 0, n)
        self._len += n
        return self

    def insertFill(self, pos, n, unit):
        """Insert n copies of unit before pos."""
        n = int(n)
        if n < 0:
            raise TextErr.make(ErrKind.outOfRange(), f"Negative count {n}")
        return self.insert(pos, array.array('H', [int(unit) & 0xFFFF]) * n)

    def erase(self, pos=0, n=NPOS):
        """Remove up to n units starting at pos."""
        pos = self._checkPos(pos)
        n = min(int(n), self._len - pos)
        if n <= 0:
            return self
        self._alloc.move(self._ptr, pos, pos + n, self._len - pos - n)
        self._len -= n
        return self

    def substr(self, start, end=None):
        """New UStr of the units in [start, end)."""
        if end is None:
            end = self._len
        start = self._checkPos(start)
        end = self._checkPos(end)
        if end < start:
            raise TextErr.make(ErrKind.outOfRange(), f"Range {start}..{end} is reversed")
        that = UStr(self._alloc)
        n = end - start
        if n > 0:
            that._ensureCapacity(n)
            self._alloc.copy(that._ptr, 0, self._ptr, start, n)
            that._len = n
        return that

    #################################################################
    # Search
    #################################################################

    def find(self, needle, pos=0):
        """Index of the first occurrence of needle at or after pos, else npos."""
        pos = self._checkFrom(pos)
        if pos >= self._len:
            return NPOS
        sub = UStr._coerce(needle, self._alloc)
        m = len(sub)
        if m == 0:
            return pos
        for i in range(pos, self._len - m + 1):
            if self._ptr[i:i + m] == sub:
                return i
        return NPOS

    def rfind(self, needle, pos=NPOS):
        """Index of the last occurrence of needle starting at or before pos, else npos."""
        pos = self._checkFrom(pos)
        sub = UStr._coerce(needle, self._alloc)
        m = len(sub)
        if m == 0:
            return min(pos, self._len)
        if self._len < m:
            return NPOS
        for i in range(min(pos, self._len - m), -1, -1):
            if self._ptr[i:i + m] == sub:
                return i
        return NPOS

    def findFirstOf(self, units, pos=0):
        """Index of the first unit at or after pos that is in units, else npos."""
        pos = self._checkFrom(pos)
        members = set(UStr._coerce(units, self._alloc))
        for i in range(pos, self._len):
            if self._ptr[i] in members:
                return i
        return NPOS

    def findLastOf(self, units, pos=NPOS):
        """Index of the last unit at or before pos that is in units, else npos."""
        pos = self._checkFrom(pos)
        if self._len == 0:
            return NPOS
        members = set(UStr._coerce(units, self._alloc))
        for i in range(min(pos, self._len - 1), -1, -1):
            if self._ptr[i] in members:
                return i
        return NPOS

    def contains(self, needle):
        sub = UStr._coerce(needle, self._alloc)
        return len(sub) == 0 or self.find(sub) != NPOS

    def __contains__(self, needle):
        return self.contains(needle)

    def startsWith(self, prefix):
        sub = UStr._coerce(prefix, self._alloc)
        m = len(sub)
        return m <= self._len and (m == 0 or self._ptr[:m] == sub)

    def endsWith(self, suffix):
        sub = UStr._coerce(suffix, self._alloc)
        m = len(sub)
        return m <= self._len and (m == 0 or self._ptr[self._len - m:self._len] == sub)

    def _checkFrom(self, pos):
        pos = int(pos)
        if pos < 0:
            raise TextErr.make(ErrKind.outOfRange(), f"Negative position {pos}")
        return pos

    #################################################################
    # Comparison
    #################################################################

    def equals(self, that):
        """Equal to another UStr or a Python str with the same units."""
        if self is that:
            return True
        if not isinstance(that, (UStr, str)):
            return False
        other = UStr._coerce(that, self._alloc)
        if self._len != len(other):
            return False
        return self._len == 0 or self._ptr[:self._len] == other

    def compare(self, that):
        """
        Unit-wise order against a UStr or Python str; on a common prefix
        the shorter sorts first.
        """
        if that is None:
            return 1
        if not isinstance(that, (UStr, str)):
            from .Err import Err
            raise Err.make(f"Cannot compare UStr with {type(that).__name__}")
        other = UStr._coerce(that, self._alloc)
        for a, b in zip(self, other):
            if a != b:
                return -1 if a < b else 1
        if self._len == len(other):
            return 0
        return -1 if self._len < len(other) else 1

    #################################################################
    # Conversion
    #################################################################

    def toUtf8(self, strict=None):
        """
        Encode as UTF-8 into a new move-only Utf8Buf. Unpaired surrogates
        are skipped unless strict (default from the strictEncode config).
        """
        if strict is None:
            from .Env import Env
            strict = Env.cur().configBool("strictEncode", False)
        units = self._ptr if self._ptr is not None else array.array('H')
        return Transcoder.encodeUtf8(units, self._len, strict, self._alloc)

    def toStr(self):
        """Render as a Python str."""
        if self._ptr is None:
            return ""
        return Transcoder.unitsToStr(self._ptr, self._len)

    def __repr__(self):
        return f"UStr({self.toStr()!r})"

    @staticmethod
    def _coerce(obj, alloc):
        """Return obj as an array('H') of code units independent of any UStr storage."""
        if isinstance(obj, UStr):
            if obj._ptr is None:
                return array.array('H')
            return obj._ptr[:obj._len]
        if isinstance(obj, int):
            return array.array('H', [obj & 0xFFFF])
        if isinstance(obj, str):
            return array.array('H', Transcoder.unitsFromStr(obj))
        if isinstance(obj, (bytes, bytearray, memoryview)):
            tmp = Transcoder.decode(obj, alloc=alloc)
            units = UStr._coerce(tmp, alloc)
            tmp.free()
            return units
        if isinstance(obj, array.array) and obj.typecode == 'H':
            return array.array('H', obj)
        return array.array('H', [int(u) & 0xFFFF for u in obj])
