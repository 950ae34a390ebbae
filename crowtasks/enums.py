#!/usr/bin/env python3
"""

"""
from __future__ import annotations

import enum

class ChangeType_e(enum.Enum):
    """ How a tracked file differs from its last committed snapshot """
    added    = enum.auto()
    modified = enum.auto()
    removed  = enum.auto()

class TaskStatus_e(enum.Enum):
    """ The outcome of running a single task """
    SUCCESS = enum.auto()
    SKIPPED = enum.auto()
    FAILED  = enum.auto()
