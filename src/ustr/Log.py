#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import logging
from datetime import datetime

from .Obj import Obj


class LogLevel(Obj):
    """
    LogLevel represents the severity of a log message.
    """

    _levels = {}

    def __init__(self, name, ordinal, pyLevel):
        super().__init__()
        self._name = name
        self._ordinal = ordinal
        self._pyLevel = pyLevel

    @staticmethod
    def fromStr(name, checked=True):
        """Parse LogLevel from string"""
        name_lower = str(name).strip().lower()
        if name_lower in LogLevel._levels:
            return LogLevel._levels[name_lower]
        if checked:
            from .Err import Err
            raise Err.make(f"Unknown log level: {name}")
        return None

    @staticmethod
    def vals():
        return [LogLevel._debug, LogLevel._info, LogLevel._warn, LogLevel._err, LogLevel._silent]

    @staticmethod
    def debug():
        return LogLevel._debug

    @staticmethod
    def info():
        return LogLevel._info

    @staticmethod
    def warn():
        return LogLevel._warn

    @staticmethod
    def err():
        return LogLevel._err

    @staticmethod
    def silent():
        return LogLevel._silent

    def name(self):
        return self._name

    def ordinal(self):
        return self._ordinal

    def pyLevel(self):
        """Matching stdlib logging level"""
        return self._pyLevel

    def toStr(self):
        return self._name

    def equals(self, that):
        return isinstance(that, LogLevel) and self._ordinal == that._ordinal

    def hash(self):
        return hash(self._ordinal)

    def compare(self, that):
        return self._ordinal - that._ordinal


LogLevel._debug = LogLevel("debug", 0, logging.DEBUG)
LogLevel._info = LogLevel("info", 1, logging.INFO)
LogLevel._warn = LogLevel("warn", 2, logging.WARNING)
LogLevel._err = LogLevel("err", 3, logging.ERROR)
LogLevel._silent = LogLevel("silent", 4, logging.CRITICAL + 10)

for _lvl in LogLevel.vals():
    LogLevel._levels[_lvl.name()] = _lvl


class LogRec(Obj):
    """
    LogRec represents a single log record.
    """

    def __init__(self, time, level, logName, msg, err=None):
        super().__init__()
        self._time = time
        self._level = level
        self._logName = logName
        self._msg = msg
        self._err = err

    def time(self):
        return self._time

    def level(self):
        return self._level

    def logName(self):
        return self._logName

    def msg(self):
        return self._msg

    def err(self):
        return self._err

    def toStr(self):
        return f"[{self._level.name()}] {self._logName}: {self._msg}"


class Log(Obj):
    """
    Log provides named logging, forwarded to the stdlib logger of the same name.
    """

    _logs = {}
    _handlers = []

    def __init__(self, name, register=True):
        """Create a new log. If register=True, adds to global registry."""
        super().__init__()
        if not Log._isValidName(name):
            from .Err import Err
            raise Err.make(f"Invalid log name: {name}")

        if register and name in Log._logs:
            from .Err import Err
            raise Err.make(f"Log already registered: {name}")

        self._name = name
        self._level = Log._configuredLevel()
        self._pyLogger = logging.getLogger(name)

        if register:
            Log._logs[name] = self

    @staticmethod
    def _isValidName(name):
        """Validate log name - must be valid identifier characters"""
        if not name:
            return False
        for c in name:
            if not (c.isalnum() or c == '.' or c == '_'):
                return False
        return True

    @staticmethod
    def _configuredLevel():
        from .Env import Env
        return LogLevel.fromStr(Env.cur().config("logLevel", "info"))

    @staticmethod
    def make(name, register=True):
        return Log(name, register)

    @staticmethod
    def get(name):
        """Get or create a log by name"""
        if name in Log._logs:
            return Log._logs[name]
        return Log(name, True)

    @staticmethod
    def find(name, checked=True):
        """Find a log by name"""
        if name in Log._logs:
            return Log._logs[name]
        if checked:
            from .Err import Err
            raise Err.make(f"Unknown log: {name}")
        return None

    @staticmethod
    def list_():
        return list(Log._logs.values())

    @staticmethod
    def clear():
        """Drop all registered logs and handlers."""
        Log._logs = {}
        Log._handlers = []

    def name(self):
        return self._name

    def level(self, value=None):
        """Get or set log level - called as log.level() or log.level(newLevel)"""
        if value is None:
            return self._level
        self._level = value
        return None

    def isEnabled(self, level):
        return level._ordinal >= self._level._ordinal

    def isDebug(self):
        return self.isEnabled(LogLevel._debug)

    def isInfo(self):
        return self.isEnabled(LogLevel._info)

    def isWarn(self):
        return self.isEnabled(LogLevel._warn)

    def isErr(self):
        return self.isEnabled(LogLevel._err)

    def debug(self, msg, err=None):
        if self.isEnabled(LogLevel._debug):
            self._log(LogLevel._debug, msg, err)

    def info(self, msg, err=None):
        if self.isEnabled(LogLevel._info):
            self._log(LogLevel._info, msg, err)

    def warn(self, msg, err=None):
        if self.isEnabled(LogLevel._warn):
            self._log(LogLevel._warn, msg, err)

    def err(self, msg, err=None):
        if self.isEnabled(LogLevel._err):
            self._log(LogLevel._err, msg, err)

    def _log(self, level, msg, err):
        rec = LogRec(datetime.now(), level, self._name, msg, err)
        self.log(rec)

    def log(self, rec):
        """Log a record - can be overridden by subclasses"""
        for handler in Log._handlers:
            try:
                handler(rec)
            except Exception:
                self._pyLogger.exception("Log handler failed: %r", handler)

        self._pyLogger.log(rec._level.pyLevel(), rec._msg)
        if rec._err is not None:
            self._pyLogger.log(rec._level.pyLevel(), rec._err.toStr() if hasattr(rec._err, 'toStr') else str(rec._err))

    def toStr(self):
        return self._name

    @staticmethod
    def handlers():
        return list(Log._handlers)

    @staticmethod
    def addHandler(handler):
        """Add a global log handler"""
        if not callable(handler):
            from .Err import Err
            raise Err.make("Handler must be callable")
        Log._handlers.append(handler)

    @staticmethod
    def removeHandler(handler):
        if handler in Log._handlers:
            Log._handlers.remove(handler)
