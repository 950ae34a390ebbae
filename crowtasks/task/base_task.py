#!/usr/bin/env python3
"""
The base class every crowtasks task builds on.
"""
##-- imports
from __future__ import annotations

import functools as ftz
import logging as logmod
import pathlib as pl
from typing import Any, ClassVar

from tomlguard import TomlGuard

from crowtasks._interface import PRINTER_NAME, TASK_SEP
from crowtasks.config import TaskConfig
from crowtasks.control.tracker import ChangeTracker
from crowtasks.enums import TaskStatus_e
from crowtasks.errors import CrowError
from crowtasks.structs.project_spec import ProjectSpec
##-- end imports

##-- logging
logging = logmod.getLogger(__name__)
printer = logmod.getLogger(PRINTER_NAME)
##-- end logging

class CrowTask:
    """
      A Single runnable task.
      Subclasses set `group`, `name` and `depends_on`,
      build their settings in `build_settings`,
      and do their work in `execute`.

      The task's config is the table [group.name], falling back to [group].
    """
    group      : ClassVar[str]       = "crowtasks"
    name       : ClassVar[str]       = "task"
    depends_on : ClassVar[list[str]] = []

    def __init__(self, config:TomlGuard, project:ProjectSpec, *, state_dir:pl.Path):
        self.config    = config
        self.project   = project
        self.cfg       = TaskConfig(config, project, self.group, self.config_key())
        self.tracker   = ChangeTracker(state_dir, self.fullname(), project.root_dir)

    def __repr__(self):
        return "<{}: {}>".format(self.__class__.__name__, self.fullname())

    @classmethod
    def fullname(cls) -> str:
        return "{}{}{}".format(cls.group, TASK_SEP, cls.name)

    @classmethod
    def config_key(cls) -> str:
        return cls.name.replace("-", "_")

    @classmethod
    def short_doc(cls) -> str:
        """ The first line of the class docstring, for listing tasks """
        try:
            split_doc = [x for x in cls.__doc__.split("\n") if bool(x.strip())]
            return ":: " + split_doc[0].strip() if bool(split_doc) else ""
        except AttributeError:
            return ":: "

    @ftz.cached_property
    def settings(self) -> Any:
        return self.build_settings(self.cfg)

    def build_settings(self, cfg:TaskConfig) -> Any:
        return None

    def only_if(self) -> bool:
        """ When False, the task is skipped """
        return True

    def execute(self) -> None:
        raise NotImplementedError(self.__class__)

    def run(self) -> TaskStatus_e:
        if not self.only_if():
            printer.info("---- Skipping %s", self.fullname())
            return TaskStatus_e.SKIPPED

        printer.info("---- %s", self.fullname())
        try:
            self.execute()
        except CrowError:
            self.tracker.discard()
            raise

        self.tracker.commit()
        return TaskStatus_e.SUCCESS

    def log(self, msg, *args, level=logmod.DEBUG) -> None:
        logging.log(level, "[%s] " + msg, self.fullname(), *args)

class AggregateTask(CrowTask):
    """ A task that only exists to depend on others """

    def execute(self) -> None:
        pass
