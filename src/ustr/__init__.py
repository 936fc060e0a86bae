#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

# ustr - growable UTF-16 text buffer with encoding detection

# Base types
from .Obj import Obj
from .Err import Err, ErrKind, TextErr
from .Result import Result

# Runtime
from .Env import Env
from .Log import Log, LogLevel, LogRec
from .Alloc import Alloc

# Encodings
from .Endian import Endian
from .Encoding import Encoding
from .Detector import Detector
from .Transcoder import Transcoder

# Text
from .UStr import UStr, NPOS
from .Utf8Buf import Utf8Buf
