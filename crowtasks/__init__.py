#!/usr/bin/env python3
"""
crowtasks : incremental gettext, linux packaging and poetry tasks.

"""
from __future__ import annotations

from ._interface import __version__
