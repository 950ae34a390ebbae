#!/usr/bin/env python3
"""
Pytest testing fixtures
"""
##-- imports
from __future__ import annotations

import logging as logmod
import os
import pathlib as pl

import pytest
from tomlguard import TomlGuard

from crowtasks.actions.shell import CmdResult
from crowtasks.structs.project_spec import ProjectSpec
##-- end imports

##-- logging
logging = logmod.getLogger(__name__)
##-- end logging

@pytest.fixture
def wrap_tmp(tmp_path):
    """ create a new temp directory, and change cwd to it,
      returning to original cwd after the test
      """
    logging.debug("Moving to temp dir")
    orig     = pl.Path().cwd()
    new_base = tmp_path / "test_root"
    new_base.mkdir()
    os.chdir(new_base)
    yield new_base
    logging.debug("Returning to original dir")
    os.chdir(orig)

@pytest.fixture
def make_task(wrap_tmp):
    """ Build a task in the temp dir, from a config dict and project table """

    def _make(cls, config:None|dict=None, **project):
        data = dict(config or {})
        data.setdefault("project", {"name": "demo", "version": "1.0.0", **project})
        guard   = TomlGuard(data)
        spec    = ProjectSpec.build(guard, wrap_tmp)
        return cls(guard, spec, state_dir=wrap_tmp / ".crowtasks")

    return _make

@pytest.fixture
def mock_run(mocker):
    """ Replace external commands with a successful, silent, result """
    return mocker.patch("crowtasks.actions.shell.run",
                        side_effect=lambda cmd, *args, **kwargs: CmdResult(cmd=cmd, exit_code=0, stdout="", stderr=""))
