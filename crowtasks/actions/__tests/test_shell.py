#!/usr/bin/env python3
"""

"""
from __future__ import annotations

import logging as logmod

import pytest

from crowtasks.actions import shell
from crowtasks.errors import CommandFailed

logging = logmod.root

class TestShellRun:

    def test_initial(self):
        result = shell.run("echo", "hello")
        assert(isinstance(result, shell.CmdResult))
        assert(result.exit_code == 0)
        assert(result.stdout == "hello\n")

    def test_echo_to_printer(self, caplog):
        with caplog.at_level(logmod.INFO):
            shell.run("echo", "printed")
        assert("printed" in caplog.messages)

    def test_no_echo(self, caplog):
        with caplog.at_level(logmod.INFO):
            shell.run("echo", "quiet", echo=False)
        assert("quiet" not in caplog.messages)

    def test_cwd(self, tmp_path):
        result = shell.run("pwd", cwd=tmp_path)
        assert(result.stdout.strip() == str(tmp_path.resolve()))

    def test_failure(self):
        with pytest.raises(CommandFailed) as ctx:
            shell.run("sh", "-c", "echo broken >&2; exit 3")

        assert(ctx.value.exit_code == 3)
        assert(ctx.value.stderr.strip() == "broken")

    def test_allowed_exit_code(self):
        result = shell.run("sh", "-c", "echo warned >&2; exit 5", exitcodes=(0, 5))
        assert(result.exit_code == 5)
        assert(result.stderr_lines == ["warned"])

    def test_missing_command(self):
        with pytest.raises(CommandFailed, match="Command not found"):
            shell.run("crowtasks-definitely-not-a-command")
