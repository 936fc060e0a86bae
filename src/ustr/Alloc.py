#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import array
import weakref

from .Obj import Obj


class Alloc(Obj):
    """
    Alloc is the raw buffer provider every owning type allocates through.
    Blocks are zero-filled typed arrays of 1, 2 or 4 byte unsigned ints.
    An optional limit caps the number of live bytes.
    """

    # (type_code) -> byte_size
    _TYPES = {
        'B': 1,
        'H': 2,
        'I': 4,
    }

    _defVal = None

    def __init__(self, limit=None):
        super().__init__()
        self._limit = None if limit is None else int(limit)
        self._used = 0
        self._blocks = {}

    @staticmethod
    def make(limit=None):
        return Alloc(limit)

    @staticmethod
    def defVal():
        """Shared default provider, limited by the allocLimit config."""
        if Alloc._defVal is None:
            from .Env import Env
            Alloc._defVal = Alloc(Env.cur().configInt("allocLimit"))
        return Alloc._defVal

    @staticmethod
    def resetDefVal():
        Alloc._defVal = None

    def limit(self):
        return self._limit

    def used(self):
        """Bytes held by live blocks."""
        return self._used

    def blocks(self):
        return len(self._blocks)

    #################################################################
    # Allocation
    #################################################################

    def alloc(self, count, typecode='H'):
        """Allocate a zero-filled block of count items."""
        count = int(count)
        itemsize = self._itemsize(typecode)
        if count < 0:
            from .Err import TextErr, ErrKind
            raise TextErr.make(ErrKind.outOfMemory(), f"Negative allocation: {count}")
        nbytes = count * itemsize
        if self._limit is not None and self._used + nbytes > self._limit:
            from .Err import TextErr, ErrKind
            raise TextErr.make(ErrKind.outOfMemory(),
                               f"Allocation of {nbytes} bytes exceeds limit {self._limit} ({self._used} in use)")
        try:
            block = array.array(typecode, bytes(nbytes))
        except MemoryError as e:
            from .Err import TextErr, ErrKind
            raise TextErr.make(ErrKind.outOfMemory(), f"Allocation of {nbytes} bytes failed", e)
        self._track(block, nbytes)
        return block

    def allocAligned(self, count, align, typecode='H'):
        """Allocate count items with the byte size rounded up to a multiple of align."""
        align = int(align)
        itemsize = self._itemsize(typecode)
        if align <= 0 or (align & (align - 1)) != 0:
            from .Err import Err
            raise Err.make(f"Alignment must be a power of two: {align}")
        if align < itemsize:
            align = itemsize
        nbytes = int(count) * itemsize
        nbytes = (nbytes + align - 1) & ~(align - 1)
        return self.alloc(nbytes // itemsize, typecode)

    def free(self, block):
        """Release a block; freeing None is a no-op."""
        if block is None:
            return
        entry = self._blocks.pop(id(block), None)
        if entry is None:
            from .Err import Err
            raise Err.make("Free of block not owned by this Alloc")
        finalizer, nbytes = entry
        finalizer.detach()
        self._used -= nbytes

    def owns(self, block):
        return block is not None and id(block) in self._blocks

    def _track(self, block, nbytes):
        key = id(block)
        # collected blocks give their bytes back even if never freed
        finalizer = weakref.finalize(block, self._release, key)
        self._blocks[key] = (finalizer, nbytes)
        self._used += nbytes

    def _release(self, key):
        entry = self._blocks.pop(key, None)
        if entry is not None:
            self._used -= entry[1]

    def _itemsize(self, typecode):
        size = self._TYPES.get(typecode)
        if size is None:
            from .Err import Err
            raise Err.make(f"Unsupported type code: {typecode}")
        return size

    #################################################################
    # Block Operations
    #################################################################

    def zero(self, block, off=0, n=None):
        """Zero n items starting at off."""
        if n is None:
            n = len(block) - off
        block[off:off + n] = array.array(block.typecode, bytes(n * block.itemsize))
        return block

    def copy(self, dst, dstOff, src, srcOff, n):
        """Copy n items from src into dst; the ranges must not overlap."""
        if n <= 0:
            return dst
        dst[dstOff:dstOff + n] = src[srcOff:srcOff + n]
        return dst

    def move(self, block, dstOff, srcOff, n):
        """Move n items within block; overlapping ranges are safe."""
        if n <= 0 or dstOff == srcOff:
            return block
        # slicing copies the source range before the write
        block[dstOff:dstOff + n] = block[srcOff:srcOff + n]
        return block

    def toStr(self):
        limit = "none" if self._limit is None else self._limit
        return f"Alloc(used={self._used} blocks={len(self._blocks)} limit={limit})"
