#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj


class Utf8Buf(Obj):
    """
    Utf8Buf holds the UTF-8 bytes produced by UStr.toUtf8().

    It has exactly one owner. It cannot be copied; move() hands the bytes
    to a new holder and take() drains them once. Either call leaves this
    holder consumed, after which any access raises unsupported.
    """

    def __init__(self, block, size, alloc):
        super().__init__()
        self._block = block
        self._size = size
        self._alloc = alloc

    @staticmethod
    def _make(block, size, alloc):
        """Wrap an encoded block; only the encoder creates Utf8Bufs."""
        return Utf8Buf(block, size, alloc)

    #################################################################
    # Access
    #################################################################

    def isConsumed(self):
        return self._block is None

    def size(self):
        """Number of encoded bytes, 0 once consumed."""
        return self._size

    def isEmpty(self):
        return self._size == 0

    def __len__(self):
        return self._size

    def get(self, index):
        self._checkLive()
        index = int(index)
        if index < 0:
            index = self._size + index
        if index < 0 or index >= self._size:
            from .Err import TextErr, ErrKind
            raise TextErr.make(ErrKind.outOfRange(), f"Index {index} out of bounds for size {self._size}")
        return self._block[index]

    def __getitem__(self, index):
        return self.get(index)

    def view(self):
        """Read-only view of the bytes, valid until the buffer is freed."""
        self._checkLive()
        return memoryview(self._block)[:self._size].toreadonly()

    #################################################################
    # Ownership
    #################################################################

    def take(self):
        """Drain the bytes and release the block. Only valid once."""
        self._checkLive()
        data = self._block[:self._size].tobytes()
        self.free()
        return data

    def move(self):
        """Transfer the bytes to a new Utf8Buf; this one becomes consumed."""
        self._checkLive()
        that = Utf8Buf(self._block, self._size, self._alloc)
        self._block = None
        self._size = 0
        return that

    def free(self):
        """Release the block; a consumed buffer is left alone."""
        if self._block is not None:
            self._alloc.free(self._block)
        self._block = None
        self._size = 0

    def _checkLive(self):
        if self._block is None:
            from .Err import TextErr, ErrKind
            raise TextErr.make(ErrKind.unsupported(), "Utf8Buf already consumed")

    def __copy__(self):
        from .Err import TextErr, ErrKind
        raise TextErr.make(ErrKind.unsupported(), "Utf8Buf cannot be copied, use move()")

    def __deepcopy__(self, memo):
        return self.__copy__()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.free()
        return False

    def toStr(self):
        if self._block is None:
            return "Utf8Buf(consumed)"
        return f"Utf8Buf(size={self._size})"

    def __repr__(self):
        return self.toStr()
