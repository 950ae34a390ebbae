#!/usr/bin/env python3
"""

"""
from __future__ import annotations

import pathlib as pl
from dataclasses import dataclass

from crowtasks.enums import ChangeType_e

@dataclass(frozen=True)
class FileChange:
    """ A single tracked file, and how it changed since the last successful run """
    path        : pl.Path
    change_type : ChangeType_e

    @property
    def is_removal(self) -> bool:
        return self.change_type is ChangeType_e.removed

    def __str__(self):
        return "{} : {}".format(self.change_type.name, self.path)
