#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import os
from pathlib import Path

from .Obj import Obj


class Env(Obj):
    """Env resolves ustr configuration from the process environment and props files"""

    _instance = None

    def __init__(self, workDir=None, environ=None):
        super().__init__()
        self._workDir = Path(workDir) if workDir is not None else None
        self._environ = environ if environ is not None else os.environ
        self._props = None

    @staticmethod
    def cur():
        if Env._instance is None:
            Env._instance = Env()
        return Env._instance

    @staticmethod
    def reset(env=None):
        """Replace the current Env (None reloads from the process on next cur())."""
        Env._instance = env

    def workDir(self):
        if self._workDir is None:
            return Path.cwd()
        return self._workDir

    def vars(self):
        return self._environ

    def config(self, key, defVal=None):
        """Get configuration value.

        Args:
            key: Config key, e.g. "logLevel"
            defVal: Default value if not found

        Returns:
            Config value or default
        """
        # USTR_LOGLEVEL style environment variable wins
        val = self._environ.get("USTR_" + key.upper())
        if val is not None:
            return val

        val = self.props().get(key)
        if val is not None:
            return val

        return defVal

    def configInt(self, key, defVal=None):
        val = self.config(key)
        if val is None:
            return defVal
        try:
            return int(str(val).strip())
        except ValueError:
            from .Err import Err
            raise Err.make(f"Invalid int for config '{key}': {val}")

    def configBool(self, key, defVal=False):
        val = self.config(key)
        if val is None:
            return defVal
        return str(val).strip().lower() in ("true", "yes", "1", "on")

    def props(self):
        """Load etc/ustr/config.props under workDir (cached)."""
        if self._props is None:
            self._props = {}
            etc_file = self.workDir() / "etc" / "ustr" / "config.props"
            if etc_file.exists():
                self._props = Env._readProps(etc_file.read_text(encoding="utf-8"))
        return self._props

    @staticmethod
    def _readProps(text):
        props = {}
        for line in text.splitlines():
            line = line.strip()
            if not line or line.startswith("#") or line.startswith("//"):
                continue
            eq = line.find("=")
            if eq < 0:
                continue
            props[line[:eq].strip()] = line[eq + 1:].strip()
        return props

    def toStr(self):
        return f"Env({self.workDir()})"
