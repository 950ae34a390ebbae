#!/usr/bin/env python3
"""
Deciding which PO files the merge and compile tasks act on.
"""
##-- imports
from __future__ import annotations

import logging as logmod
import pathlib as pl
from typing import Final, Iterable

from crowtasks.enums import ChangeType_e
from crowtasks.structs.file_change import FileChange
##-- end imports

##-- logging
logging = logmod.getLogger(__name__)
##-- end logging

PO_EXT     : Final[str] = ".po"
CLASS_EXT  : Final[str] = ".class"

def po_files(i18n_dir:pl.Path) -> list[pl.Path]:
    """ The PO files directly in the i18n directory """
    if not i18n_dir.is_dir():
        return []

    return sorted(x for x in i18n_dir.iterdir() if x.is_file() and x.suffix == PO_EXT)

def merge_set(pot_changed:bool, changes:Iterable[FileChange], i18n_dir:pl.Path) -> list[pl.Path]:
    """
      A changed template invalidates every PO file.
      Otherwise only newly added PO files need their first merge.
    """
    if pot_changed:
        return po_files(i18n_dir)

    return sorted(x.path for x in changes if x.change_type is ChangeType_e.added and x.path.suffix == PO_EXT)

def artifact_path(output_dir:pl.Path, bundle:str, locale:str) -> pl.Path:
    """ Where msgfmt --java2 puts the class for a bundle and locale """
    return output_dir / "{}_{}{}".format(bundle.replace(".", "/"), locale, CLASS_EXT)

def compile_delta(changes:Iterable[FileChange]) -> tuple[list[pl.Path], list[pl.Path]]:
    """ Split change records into (removed, to compile) PO files """
    removed, compile = [], []
    for change in changes:
        match change:
            case FileChange(path=path, change_type=ChangeType_e.removed):
                removed.append(path)
            case FileChange(path=path) if path.is_file():
                compile.append(path)
            case _:
                logging.debug("Not a file, skipping: %s", change.path)

    return removed, compile
