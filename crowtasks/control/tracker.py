#!/usr/bin/env python3
"""
Change tracking for incremental tasks.

Each task owns a json state file, holding named groups of {relative path : sha256}.
Calling `changes` compares the files on disk against the last committed
snapshot of a group. A group never committed reports all of its files as added.
Snapshots are only written by `commit`, after the task succeeds.

"""
##-- imports
from __future__ import annotations

import json
import logging as logmod
import pathlib as pl
from hashlib import sha256
from typing import Final, Iterable

from crowtasks.enums import ChangeType_e
from crowtasks.errors import TrackingError
from crowtasks.structs.file_change import FileChange
##-- end imports

##-- logging
logging = logmod.getLogger(__name__)
##-- end logging

STATE_VERSION : Final[int] = 1
HASH_CHUNK    : Final[int] = 65536

def hash_file(path:pl.Path) -> str:
    digest = sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(HASH_CHUNK), b""):
            digest.update(chunk)

    return digest.hexdigest()

class ChangeTracker:
    """ Snapshot based added/modified/removed detection for a single task """

    def __init__(self, state_dir:pl.Path, key:str, root:pl.Path):
        self.root       = root.resolve()
        self.key        = key
        self.state_file = state_dir / "{}.json".format(key.replace(":", "_"))
        self._previous  : None|dict[str, dict[str, str]] = None
        self._pending   : dict[str, dict[str, str]]      = {}

    def __repr__(self):
        return "<ChangeTracker: {}>".format(self.key)

    @property
    def previous(self) -> dict[str, dict[str, str]]:
        if self._previous is None:
            self._previous = self._read()

        return self._previous

    def _read(self) -> dict[str, dict[str, str]]:
        if not self.state_file.exists():
            return {}

        try:
            data = json.loads(self.state_file.read_text())
        except (OSError, ValueError) as err:
            raise TrackingError("Could not read tracker state %s : %s", self.state_file, err) from err

        if data.get("version", None) != STATE_VERSION:
            logging.warning("Ignoring tracker state with unknown version: %s", self.state_file)
            return {}

        return data.get("groups", {})

    def _rel(self, path:pl.Path) -> str:
        try:
            return path.resolve().relative_to(self.root).as_posix()
        except ValueError:
            return path.resolve().as_posix()

    def _abs(self, rel:str) -> pl.Path:
        return self.root / rel

    def snapshot(self, paths:Iterable[pl.Path]) -> dict[str, str]:
        return {self._rel(x) : hash_file(x) for x in paths if x.is_file()}

    def is_tracked(self, group:str) -> bool:
        return group in self.previous

    def changes(self, group:str, paths:Iterable[pl.Path]) -> list[FileChange]:
        """
          Diff the current files of a group against its last commit,
          and stage the current state to be committed.
        """
        previous = self.previous.get(group, {})
        current  = self.snapshot(paths)
        result   = []
        for rel, digest in sorted(current.items()):
            match previous.get(rel, None):
                case None:
                    result.append(FileChange(self._abs(rel), ChangeType_e.added))
                case x if x != digest:
                    result.append(FileChange(self._abs(rel), ChangeType_e.modified))
                case _:
                    pass

        for rel in sorted(set(previous) - set(current)):
            result.append(FileChange(self._abs(rel), ChangeType_e.removed))

        self._pending[group] = current
        logging.debug("%s : %s changes in group %s", self.key, len(result), group)
        return result

    def has_changed(self, group:str, paths:Iterable[pl.Path]) -> bool:
        return bool(self.changes(group, paths))

    def commit(self) -> None:
        if not bool(self._pending):
            return

        groups = dict(self.previous)
        groups.update(self._pending)
        self.state_file.parent.mkdir(parents=True, exist_ok=True)
        self.state_file.write_text(json.dumps({"version": STATE_VERSION, "groups": groups}, indent=2, sort_keys=True))
        self._previous = groups
        self._pending  = {}
        logging.debug("Committed tracker state: %s", self.state_file)

    def discard(self) -> None:
        self._pending = {}
