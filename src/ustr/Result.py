#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj


class Result(Obj):
    """
    Result holds either the value of a fallible operation or the error
    that aborted it, never both.
    """

    def __init__(self, val=None, err=None, ok=True):
        super().__init__()
        self._val = val
        self._err = err
        self._ok = ok

    @staticmethod
    def ok(val=None):
        """Completed successfully with val."""
        return Result(val, None, True)

    @staticmethod
    def err(err):
        """Completed with err."""
        return Result(None, err, False)

    @staticmethod
    def of(func, *args, **kwargs):
        """Call func and capture its value or TextErr."""
        from .Err import TextErr
        try:
            return Result.ok(func(*args, **kwargs))
        except TextErr as e:
            return Result.err(e)

    def isOk(self):
        return self._ok

    def isErr(self):
        return not self._ok

    def get(self):
        """Return the value, raising the captured error if there is one."""
        if not self._ok:
            raise self._err
        return self._val

    def getOr(self, defVal):
        return self._val if self._ok else defVal

    def error(self):
        """Return the error or None if completed successfully."""
        return self._err

    def toStr(self):
        if self._ok:
            return f"Result.ok({self._val})"
        return f"Result.err({self._err})"

    def __repr__(self):
        return self.toStr()

    def __bool__(self):
        return self._ok
