#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

class Obj:
    """Base class for all ustr objects"""

    _hash_counter = 0

    def __init__(self):
        Obj._hash_counter += 1
        self._hash = Obj._hash_counter

    def equals(self, that):
        return self is that

    def hash(self):
        # Lazily initialize _hash if not set (subclasses may not call super().__init__())
        if not hasattr(self, '_hash'):
            Obj._hash_counter += 1
            self._hash = Obj._hash_counter
        return self._hash

    def compare(self, that):
        """Compare this object to that for ordering.

        Default implementation checks equals() first, then uses string representation.
        Subclasses can override for custom ordering.
        Returns -1 if this < that, 0 if equal, 1 if this > that.
        """
        if self is that:
            return 0
        if that is None:
            return 1
        if self.equals(that):
            return 0
        my_str = self.toStr()
        that_str = that.toStr() if isinstance(that, Obj) else str(that)
        if my_str < that_str:
            return -1
        if my_str > that_str:
            return 1
        return 0

    def __eq__(self, other):
        return self.equals(other)

    def __ne__(self, other):
        return not self.equals(other)

    def __hash__(self):
        return self.hash()

    def __lt__(self, other):
        """Python < operator - delegates to compare()"""
        return self.compare(other) < 0

    def __le__(self, other):
        """Python <= operator - delegates to compare()"""
        return self.compare(other) <= 0

    def __gt__(self, other):
        """Python > operator - delegates to compare()"""
        return self.compare(other) > 0

    def __ge__(self, other):
        """Python >= operator - delegates to compare()"""
        return self.compare(other) >= 0

    def toStr(self):
        return f"{type(self).__name__}@{self.hash()}"

    def __str__(self):
        return self.toStr()
