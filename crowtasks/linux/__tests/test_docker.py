#!/usr/bin/env python3
"""

"""
from __future__ import annotations

import logging as logmod
import pathlib as pl

import pytest

from crowtasks.actions.shell import CmdResult
from crowtasks.errors import CommandFailed, TaskFailed
from crowtasks.linux.docker import BuildImages, BuildPackages
from crowtasks.utils.testing_fixtures import make_task, mock_run, wrap_tmp

logging = logmod.root

CONFIG = {"linux": {"package_types": ["Debian"]}}

def _docker(stdout:dict|None=None, stderr:dict|None=None, fail:set|None=None):
    """ Build a fake shell.run for docker, keyed by subcommand """
    stdout = {"create": "abc123\n", "wait": "0\n"} | (stdout or {})
    stderr = stderr or {}
    fail   = fail or set()

    def _run(cmd, *args, **kwargs):
        sub = args[0]
        if sub in fail:
            raise CommandFailed("docker %s failed", sub, exit_code=1)
        return CmdResult(cmd=cmd, exit_code=0, stdout=stdout.get(sub, ""), stderr=stderr.get(sub, ""))

    return _run

class TestBuildImages:

    def test_initial(self, make_task):
        obj = make_task(BuildImages, CONFIG, name="Demo")
        assert(obj.settings.image("Debian") == "demo_debian:1.0.0")

    def test_build(self, make_task, mock_run, wrap_tmp):
        (wrap_tmp / "build/deployment/Debian").mkdir(parents=True)
        make_task(BuildImages, CONFIG).run()
        mock_run.assert_called_once()
        args = [str(x) for x in mock_run.call_args.args]
        assert(args[:4] == ["docker", "build", "-t", "demo_debian:1.0.0"])
        assert(pl.Path(args[4]) == wrap_tmp.resolve() / "build/deployment/Debian")

    def test_missing_context(self, make_task, mock_run):
        with pytest.raises(TaskFailed, match="No docker context"):
            make_task(BuildImages, CONFIG).run()

class TestBuildPackages:

    def test_initial(self, make_task):
        assert(make_task(BuildPackages).depends_on == ["linux::docker-image"])

    def test_sequence(self, make_task, mocker, wrap_tmp):
        run = mocker.patch("crowtasks.actions.shell.run", side_effect=_docker())
        make_task(BuildPackages, CONFIG).run()
        subs = [x.args[1] for x in run.call_args_list]
        assert(subs == ["create", "cp", "start", "logs", "wait", "cp", "rm"])
        assert(run.call_args_list[1].args[3] == "abc123:/root/build/")
        assert(run.call_args_list[5].args[2] == "abc123:/root/build/artifacts/.")
        assert((wrap_tmp / "build/deployment/Debian/artifacts").is_dir())

    def test_failed_container(self, make_task, mocker):
        run = mocker.patch("crowtasks.actions.shell.run", side_effect=_docker(stdout={"wait": "2\n"}))
        with pytest.raises(TaskFailed, match="exited with status 2"):
            make_task(BuildPackages, CONFIG).run()

        assert(run.call_args_list[-1].args[1] == "rm")

    def test_log_stderr_fails(self, make_task, mocker):
        run = mocker.patch("crowtasks.actions.shell.run", side_effect=_docker(stderr={"logs": "build broke\n"}))
        with pytest.raises(TaskFailed, match="wrote to stderr"):
            make_task(BuildPackages, CONFIG).run()

        assert(run.call_args_list[-1].args[1] == "rm")

    def test_command_failure_still_removes(self, make_task, mocker):
        run = mocker.patch("crowtasks.actions.shell.run", side_effect=_docker(fail={"start"}))
        with pytest.raises(CommandFailed):
            make_task(BuildPackages, CONFIG).run()

        assert(run.call_args_list[-1].args[1:] == ("rm", "--force", "abc123"))

    def test_no_container_id(self, make_task, mocker):
        mocker.patch("crowtasks.actions.shell.run", side_effect=_docker(stdout={"create": ""}))
        with pytest.raises(TaskFailed, match="container id"):
            make_task(BuildPackages, CONFIG).run()
