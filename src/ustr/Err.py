#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj


class Err(Exception, Obj):
    """Base error class"""

    def __init__(self, msg=None, cause=None):
        Exception.__init__(self, msg)
        Obj.__init__(self)
        self._msg = msg
        self._cause = cause

    @classmethod
    def make(cls, msg=None, cause=None):
        """Factory method - creates instance of the calling class"""
        return cls(msg, cause)

    def msg(self):
        return self._msg if self._msg is not None else ""

    def cause(self):
        return self._cause

    def toStr(self):
        name = type(self).__name__
        if self._msg:
            return f"{name}: {self._msg}"
        return name

    def traceToStr(self):
        """Return stack trace as string"""
        import traceback

        s = self.toStr()

        tb = getattr(self, '__traceback__', None)
        if tb:
            lines = traceback.format_tb(tb)
            s += "\n" + "".join(lines)

        if self._cause:
            if hasattr(self._cause, 'traceToStr'):
                s += "\n  Caused by: " + self._cause.traceToStr()
            else:
                s += f"\n  Caused by: {self._cause}"

        return s

    def __str__(self):
        return self.toStr()


class ErrKind(Obj):
    """
    ErrKind is the closed set of failures raised by text operations.

    Values:
    - malformedSequence: invalid lead/continuation byte pattern in UTF-8
    - invalidSurrogate: unpaired or out-of-order surrogate
    - invalidCodepoint: scalar value above 0x10FFFF
    - outOfRange: index or position beyond the current size
    - outOfMemory: allocation refused by the buffer provider
    - unsupported: copy or re-drain of a move-only buffer
    """

    _vals = {}
    _vals_list = []

    def __init__(self, name, ordinal):
        super().__init__()
        self._name = name
        self._ordinal = ordinal

    @staticmethod
    def _define(name):
        kind = ErrKind(name, len(ErrKind._vals_list))
        ErrKind._vals[name] = kind
        ErrKind._vals_list.append(kind)
        return kind

    @staticmethod
    def vals():
        return list(ErrKind._vals_list)

    @staticmethod
    def fromStr(name, checked=True):
        kind = ErrKind._vals.get(name)
        if kind is None and checked:
            raise Err.make(f"Unknown ErrKind: {name}")
        return kind

    @staticmethod
    def malformedSequence():
        return ErrKind._malformedSequence

    @staticmethod
    def invalidSurrogate():
        return ErrKind._invalidSurrogate

    @staticmethod
    def invalidCodepoint():
        return ErrKind._invalidCodepoint

    @staticmethod
    def outOfRange():
        return ErrKind._outOfRange

    @staticmethod
    def outOfMemory():
        return ErrKind._outOfMemory

    @staticmethod
    def unsupported():
        return ErrKind._unsupported

    def name(self):
        return self._name

    def ordinal(self):
        return self._ordinal

    def equals(self, that):
        return self is that

    def hash(self):
        return hash(self._ordinal)

    def compare(self, that):
        return self._ordinal - that._ordinal

    def toStr(self):
        return self._name

    def __repr__(self):
        return f"ErrKind.{self._name}"


ErrKind._malformedSequence = ErrKind._define("malformedSequence")
ErrKind._invalidSurrogate = ErrKind._define("invalidSurrogate")
ErrKind._invalidCodepoint = ErrKind._define("invalidCodepoint")
ErrKind._outOfRange = ErrKind._define("outOfRange")
ErrKind._outOfMemory = ErrKind._define("outOfMemory")
ErrKind._unsupported = ErrKind._define("unsupported")


class TextErr(Err):
    """Text error - carries the ErrKind that caused the failure"""

    def __init__(self, kind, msg=None, cause=None):
        Err.__init__(self, msg, cause)
        self._kind = kind

    @classmethod
    def make(cls, kind, msg=None, cause=None):
        return cls(kind, msg, cause)

    def kind(self):
        return self._kind

    def toStr(self):
        if self._msg:
            return f"{self._kind.name()}: {self._msg}"
        return self._kind.name()
