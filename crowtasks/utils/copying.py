#!/usr/bin/env python3
"""
Filtered tree copying, for staging packages.

Include and exclude patterns are ant style globs, matched against
the posix path of a file relative to the root being copied:
 - `**` matches across directories,
 - `*` and `?` match within a single path segment,
 - a trailing `/` means everything beneath.

Text files have `@key@` tokens replaced, binary files are copied as is.

"""
##-- imports
from __future__ import annotations

import functools as ftz
import logging as logmod
import pathlib as pl
import re
import shutil
import tempfile
from dataclasses import dataclass, field
from typing import Final, Generator, Iterable

from crowtasks.errors import TaskFailed
##-- end imports

##-- logging
logging = logmod.getLogger(__name__)
##-- end logging

TOKEN_MARK      : Final[str]  = "@"
ARCHIVE_FORMATS : Final[list[tuple[str, str]]] = [
    (".tar.gz",  "gztar"),
    (".tgz",     "gztar"),
    (".tar.bz2", "bztar"),
    (".tar.xz",  "xztar"),
    (".tar",     "tar"),
    (".zip",     "zip"),
    (".jar",     "zip"),
    ]

@ftz.cache
def glob_to_re(pattern:str) -> re.Pattern:
    """ Convert an ant style glob into a regex """
    if pattern.endswith("/"):
        pattern += "**"

    parts = []
    index = 0
    while index < len(pattern):
        match pattern[index:index+3], pattern[index:index+2], pattern[index]:
            case "**/", _, _:
                parts.append("(?:.*/)?")
                index += 3
            case _, "**", _:
                parts.append(".*")
                index += 2
            case _, _, "*":
                parts.append("[^/]*")
                index += 1
            case _, _, "?":
                parts.append("[^/]")
                index += 1
            case _, _, char:
                parts.append(re.escape(char))
                index += 1

    return re.compile("^{}$".format("".join(parts)))

@dataclass
class CopySpec:
    """ What to copy out of a tree, and how to filter file contents """
    include : list[str]      = field(default_factory=lambda: ["**"])
    exclude : list[str]      = field(default_factory=list)
    tokens  : dict[str, str] = field(default_factory=dict)

    def accepts(self, rel:str) -> bool:
        if bool(self.include) and not any(glob_to_re(x).match(rel) for x in self.include):
            return False

        return not any(glob_to_re(x).match(rel) for x in self.exclude)

    def filter_bytes(self, data:bytes) -> bytes:
        """ Replace @key@ tokens, leaving undecodable (binary) data alone """
        if not bool(self.tokens):
            return data

        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            return data

        for key, value in self.tokens.items():
            text = text.replace("{0}{1}{0}".format(TOKEN_MARK, key), str(value))

        return text.encode("utf-8")

def walk_files(root:pl.Path) -> Generator[pl.Path]:
    queue = [root]
    while bool(queue):
        current = queue.pop()
        if current.is_dir():
            queue += sorted(current.iterdir(), reverse=True)
        elif current.is_file():
            yield current

def copy_file(source:pl.Path, dest:pl.Path, spec:CopySpec) -> None:
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_bytes(spec.filter_bytes(source.read_bytes()))
    shutil.copymode(source, dest)

def copy_tree(source:pl.Path, dest:pl.Path, spec:CopySpec) -> list[pl.Path]:
    """ Copy accepted files from source into dest, returning the files written """
    if not source.exists():
        logging.info("Nothing to copy, missing: %s", source)
        return []

    written = []
    for path in walk_files(source):
        rel = path.relative_to(source).as_posix()
        if not spec.accepts(rel):
            logging.debug("Excluded: %s", rel)
            continue

        target = dest / rel
        copy_file(path, target, spec)
        written.append(target)

    logging.info("Copied %s files: %s -> %s", len(written), source, dest)
    return written

def archive_format(path:pl.Path) -> None|str:
    name = path.name.lower()
    for ext, fmt in ARCHIVE_FORMATS:
        if name.endswith(ext):
            return fmt

    return None

def unpack_into(archive:pl.Path, dest:pl.Path, spec:CopySpec) -> list[pl.Path]:
    """ Extract an archive, then copy its accepted contents into dest """
    match archive_format(archive):
        case None:
            raise TaskFailed("Unsupported archive type: %s", archive)
        case fmt:
            pass

    with tempfile.TemporaryDirectory() as tmp:
        match fmt:
            case "zip":
                shutil.unpack_archive(archive, tmp, format=fmt)
            case _:
                shutil.unpack_archive(archive, tmp, format=fmt, filter="data")
        return copy_tree(pl.Path(tmp), dest, spec)

def copy_artifacts(artifacts:Iterable[pl.Path], dest:pl.Path, spec:CopySpec, *, unarchive:bool=False) -> list[pl.Path]:
    written = []
    for artifact in artifacts:
        match artifact:
            case x if not x.exists():
                raise TaskFailed("Missing artifact: %s", x)
            case x if x.is_dir():
                written += copy_tree(x, dest, spec)
            case x if unarchive:
                written += unpack_into(x, dest, spec)
            case x if spec.accepts(x.name):
                copy_file(x, dest / x.name, spec)
                written.append(dest / x.name)
            case x:
                logging.debug("Excluded: %s", x)

    return written
