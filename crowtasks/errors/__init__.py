#!/usr/bin/env python3
"""
These are the crowtasks specific errors that can occur
"""
from __future__ import annotations

from ._base import CrowError, UserError
from .config import ConfigError, InvalidConfigError, LocaleError
from .task import TaskError, TaskFailed, CommandFailed, TrackingError
