#!/usr/bin/env python3
"""
The crowtasks cli
"""
##-- imports
from __future__ import annotations

import argparse
import logging as logmod
import pathlib as pl
import sys

from tomlguard import TomlGuard

from crowtasks._interface import (DEFAULT_CONFIG, DEFAULT_STATE_DIR, FAIL_PRINTER_NAME,
                                  PRINTER_NAME, PROG_NAME, __version__)
from crowtasks.config import load_config
from crowtasks.control.registry import TaskRegistry
from crowtasks.control.runner import TaskRunner
from crowtasks.errors import CrowError, UserError
from crowtasks.structs.project_spec import ProjectSpec
from crowtasks.utils.log_config import LogConfig
##-- end imports

##-- logging
logging = logmod.getLogger(__name__)
printer = logmod.getLogger(PRINTER_NAME)
fail_l  = logmod.getLogger(FAIL_PRINTER_NAME)
##-- end logging

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(PROG_NAME, description="Incremental build tasks for gettext, linux packaging and poetry")
    parser.add_argument("--config",    type=pl.Path, default=DEFAULT_CONFIG)
    parser.add_argument("-v", "--verbose", action="count", default=0)
    parser.add_argument("--list",      action="store_true", help="List the available tasks")
    parser.add_argument("--version",   action="version", version="%(prog)s {}".format(__version__))
    parser.add_argument("tasks",       nargs="*")
    return parser

class CrowMain:
    """ Parse args, load config and plugins, then run or list tasks """

    def __init__(self, args:None|list[str]=None):
        self.log_config = LogConfig()
        self.args       = build_parser().parse_args(args)
        self.config     : TomlGuard    = TomlGuard({})
        self.registry   : TaskRegistry = TaskRegistry()

    def main(self) -> int:
        try:
            self.config = load_config(self.args.config)
            self.log_config.setup(self.config, verbosity=self.args.verbose)
            self.registry.load()
            if self.args.list:
                self.list_tasks()
                return 0

            return self.run_tasks()
        except UserError as err:
            fail_l.error("%s %s", err.general_msg, err)
            return 1
        except CrowError as err:
            fail_l.error("%s %s", err.general_msg, err)
            return 2

    def root(self) -> pl.Path:
        return self.args.config.resolve().parent

    def list_tasks(self) -> None:
        printer.info("Available Tasks:")
        width = max((len(x) for x in self.registry), default=0)
        for name in self.registry:
            printer.info("  %-*s %s", width, name, self.registry[name].short_doc())

    def run_tasks(self) -> int:
        targets = self.args.tasks or self.config.on_fail([]).settings.tasks(wrapper=list)
        if not bool(targets):
            printer.info("No tasks specified, use --list to see what is available")
            return 0

        root      = self.root()
        project   = ProjectSpec.build(self.config, root)
        state_dir = project.path(self.config.on_fail(DEFAULT_STATE_DIR).settings.state_dir())
        runner    = TaskRunner(self.registry, self.config, project, state_dir=state_dir)
        results   = runner.run(targets)
        printer.info("Completed %s tasks", len(results))
        return 0

def main():
    sys.exit(CrowMain().main())
