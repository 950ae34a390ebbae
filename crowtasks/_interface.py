#!/usr/bin/env python3
"""
Shared constants for crowtasks.
"""
##-- std imports
from __future__ import annotations

import pathlib as pl
import re
from importlib import resources
from typing import Final
##-- end std imports

__version__ : Final[str] = "0.3.0"

##-- names
PROG_NAME             : Final[str]       = "crowtasks"
TASK_SEP              : Final[str]       = "::"
PLUGIN_ENTRY_GROUP    : Final[str]       = "crowtasks.plugins"
PRINTER_NAME          : Final[str]       = "crowtasks._printer"
FAIL_PRINTER_NAME     : Final[str]       = "crowtasks._printer.fail"
##-- end names

##-- paths
DEFAULT_CONFIG        : Final[pl.Path]   = pl.Path("crowtasks.toml")
DEFAULT_STATE_DIR     : Final[str]       = ".crowtasks"
DEFAULT_BUILD_DIR     : Final[str]       = "build"
DEFAULT_VERSION       : Final[str]       = "unspecified"
TEMPLATE_PATH         : Final            = resources.files("crowtasks").joinpath("__templates")
##-- end paths

# Always loaded, as (name, import path)
DEFAULT_PLUGINS       : Final[list[tuple[str, str]]] = [
    ("gettext", "crowtasks.gettext"),
    ("linux",   "crowtasks.linux"),
    ("poetry",  "crowtasks.poetry"),
    ]

KEY_PATTERN           : Final[re.Pattern] = re.compile(r"\$\{(\w+)\}")
