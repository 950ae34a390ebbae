#!/usr/bin/env python3
"""
Running external commands with `sh`.
"""
##-- imports
from __future__ import annotations

import logging as logmod
import pathlib as pl
from dataclasses import dataclass
from typing import Iterable

import sh

from crowtasks._interface import FAIL_PRINTER_NAME, PRINTER_NAME
from crowtasks.errors import CommandFailed
##-- end imports

##-- logging
logging = logmod.getLogger(__name__)
printer = logmod.getLogger(PRINTER_NAME)
fail_l  = logmod.getLogger(FAIL_PRINTER_NAME)
##-- end logging

@dataclass
class CmdResult:
    """ The decoded outcome of a finished command """
    cmd       : str
    exit_code : int
    stdout    : str
    stderr    : str

    @property
    def stderr_lines(self) -> list[str]:
        return self.stderr.splitlines()

def run(cmd:str, *args:str|pl.Path, cwd:None|pl.Path=None, exitcodes:Iterable[int]=(0,), echo:bool=True) -> CmdResult:
    """
      Run cmd with args, blocking until it exits.
      Exit codes outside of `exitcodes` raise CommandFailed,
      stdout is echoed to the printer unless echo=False.
    """
    expanded = [str(x) for x in args]
    logging.debug("Shell Cmd: %s, Args: %s, Cwd: %s", cmd, expanded, cwd)
    try:
        command = sh.Command(cmd)
        result  = command(*expanded, _return_cmd=True, _cwd=None if cwd is None else str(cwd), _ok_code=list(exitcodes), _tty_out=False)
    except sh.CommandNotFound as err:
        fail_l.error("Shell Command '%s' Not Found: %s", cmd, expanded)
        raise CommandFailed("Command not found: %s", cmd) from err
    except sh.ErrorReturnCode as err:
        stderr = err.stderr.decode(errors="replace")
        fail_l.error("Shell Command '%s' exited with code: %s", err.full_cmd, err.exit_code)
        if bool(err.stdout):
            fail_l.error("-- Stdout: ")
            fail_l.error("%s", err.stdout.decode(errors="replace"))
            fail_l.error("-- Stdout End")

        if bool(stderr):
            fail_l.error("-- Stderr: ")
            fail_l.error("%s", stderr)
            fail_l.error("-- Stderr End")

        raise CommandFailed("%s exited with code %s", cmd, err.exit_code, exit_code=err.exit_code, stderr=stderr) from err

    output = CmdResult(cmd=cmd,
                       exit_code=result.exit_code,
                       stdout=result.stdout.decode(errors="replace"),
                       stderr=result.stderr.decode(errors="replace"))
    printer.debug("(%s) Shell Cmd: %s, Args: %s", output.exit_code, cmd, expanded)
    if echo and bool(output.stdout.strip()):
        printer.info("%s", output.stdout.rstrip())

    return output
