#!/usr/bin/env python3
"""
Classifying what msgfmt writes to stderr.
"""
##-- imports
from __future__ import annotations

import enum
import logging as logmod
import re
from typing import Final

from crowtasks.errors import TaskFailed
##-- end imports

##-- logging
logging = logmod.getLogger(__name__)
##-- end logging

# javac warnings msgfmt passes on
NOISE_RE     : Final[re.Pattern] = re.compile(r"^.*(uses unchecked or unsafe operations|unchecked for details).*$\n?", re.MULTILINE)
UNTRANSLATED : Final[re.Pattern] = re.compile(r"(untranslated|no translations|\b0 translated)", re.IGNORECASE)

class Verdict_e(enum.Enum):
    silent      = enum.auto()
    info        = enum.auto()
    error       = enum.auto()

def strip_noise(stderr:str) -> str:
    return NOISE_RE.sub("", stderr).rstrip()

def classify_msgfmt_output(stderr:str, *, name:str, strict:bool) -> tuple[Verdict_e, str]:
    """
      Decide how to report msgfmt's stderr for the file `name`.
      Missing translations raise TaskFailed when strict.
      Multiple lines of output are always an error.
    """
    text  = strip_noise(stderr)
    lines = text.splitlines()
    match lines:
        case []:
            return Verdict_e.silent, text
        case [*_, last] if strict and UNTRANSLATED.search(last):
            raise TaskFailed("Missing translations in file : %s\n%s", name, text)
        case [_, _, *_]:
            return Verdict_e.error, text
        case [last] if UNTRANSLATED.search(last):
            return Verdict_e.error, text
        case _:
            return Verdict_e.info, text
