#!/usr/bin/env python3
"""

"""
from __future__ import annotations

import logging as logmod

import pytest

from crowtasks.control.main import CrowMain, build_parser
from crowtasks.utils.testing_fixtures import mock_run, wrap_tmp

logging = logmod.root

POT = 'msgid ""\nmsgstr ""\n"POT-Creation-Date: 2024-01-01 10:00+0000\\n"\n'

@pytest.fixture
def no_log_setup(mocker):
    return mocker.patch("crowtasks.control.main.LogConfig")

class TestParser:

    def test_initial(self):
        args = build_parser().parse_args([])
        assert(args.tasks == [])
        assert(args.verbose == 0)
        assert(not args.list)

    def test_verbosity(self):
        args = build_parser().parse_args(["-vv", "gettext::all"])
        assert(args.verbose == 2)
        assert(args.tasks == ["gettext::all"])

class TestCrowMain:

    def test_list(self, wrap_tmp, no_log_setup, caplog):
        with caplog.at_level(logmod.INFO):
            assert(CrowMain(["--list"]).main() == 0)

        assert(any("gettext::msgfmt" in x and "Compile PO files" in x for x in caplog.messages))

    def test_no_tasks(self, wrap_tmp, no_log_setup):
        assert(CrowMain([]).main() == 0)

    def test_unknown_task_fails(self, wrap_tmp, no_log_setup):
        assert(CrowMain(["nothing::here"]).main() != 0)

    def test_bad_config_fails(self, wrap_tmp, no_log_setup):
        (wrap_tmp / "crowtasks.toml").write_text("[project\n")
        assert(CrowMain(["gettext::properties"]).main() == 1)

    def test_runs_default_tasks(self, wrap_tmp, no_log_setup):
        (wrap_tmp / "crowtasks.toml").write_text('[project]\nname = "demo"\n\n[settings]\ntasks = ["gettext::properties"]\n')
        assert(CrowMain([]).main() == 0)
        assert((wrap_tmp / "build" / "resources" / "main" / "i18n.properties").read_text() == "basename = demo.i18n.Messages")

    def test_state_dir(self, wrap_tmp, no_log_setup, mock_run):
        (wrap_tmp / "crowtasks.toml").write_text('[settings]\nstate_dir = ".state"\n')
        (wrap_tmp / "src" / "main" / "resources" / "i18n").mkdir(parents=True)
        (wrap_tmp / "src" / "main" / "resources" / "i18n" / "de.po").write_text("")
        (wrap_tmp / "src" / "main" / "resources" / "i18n" / "keys.pot").write_text(POT)
        assert(CrowMain(["gettext::msgfmt", "--config", str(wrap_tmp / "crowtasks.toml")]).main() == 0)
        assert((wrap_tmp / ".state" / "gettext__msgfmt.json").exists())
