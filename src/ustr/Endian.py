#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj


class Endian(Obj):
    """Endian represents byte order (big or little endian)."""

    _big = None
    _little = None

    def __init__(self, name):
        super().__init__()
        self._name = name

    @staticmethod
    def big():
        """Big endian byte order."""
        if Endian._big is None:
            Endian._big = Endian("big")
        return Endian._big

    @staticmethod
    def little():
        """Little endian byte order."""
        if Endian._little is None:
            Endian._little = Endian("little")
        return Endian._little

    @staticmethod
    def fromStr(s, checked=True):
        s = str(s).lower()
        if s == "big":
            return Endian.big()
        if s == "little":
            return Endian.little()
        if checked:
            from .Err import Err
            raise Err.make(f"Invalid Endian: {s}")
        return None

    @staticmethod
    def vals():
        return [Endian.big(), Endian.little()]

    def name(self):
        return self._name

    def isBig(self):
        return self is Endian.big()

    def toStr(self):
        return self._name

    def equals(self, other):
        return self is other

    def hash(self):
        return hash(self._name)
