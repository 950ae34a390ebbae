#!/usr/bin/env python3
"""
Finding task classes.

A plugin is a module exposing `TASKS`, a list of CrowTask subclasses.
The default plugins are always loaded, then any installed entry points
in the 'crowtasks.plugins' group.
"""
##-- imports
from __future__ import annotations

import importlib
import logging as logmod
from importlib.metadata import EntryPoint, entry_points

from crowtasks._interface import DEFAULT_PLUGINS, PLUGIN_ENTRY_GROUP
from crowtasks.errors import TaskError
from crowtasks.task.base_task import CrowTask
##-- end imports

##-- logging
logging = logmod.getLogger(__name__)
##-- end logging

class TaskRegistry:
    """ Task classes by full name, eg: 'gettext::msgfmt' """

    def __init__(self):
        self.tasks : dict[str, type[CrowTask]] = {}

    def __contains__(self, name:str) -> bool:
        return name in self.tasks

    def __getitem__(self, name:str) -> type[CrowTask]:
        try:
            return self.tasks[name]
        except KeyError:
            raise TaskError("Unknown task: %s", name, task=name) from None

    def __iter__(self):
        return iter(sorted(self.tasks))

    def __len__(self):
        return len(self.tasks)

    def load(self, *, defaults:bool=True, search:bool=True) -> TaskRegistry:
        if defaults:
            for name, path in DEFAULT_PLUGINS:
                logging.debug("Loading default plugin: %s", name)
                self.add_module(path)

        if search:
            for entry_point in entry_points(group=PLUGIN_ENTRY_GROUP):
                self.add_entry_point(entry_point)

        logging.debug("Registered %s tasks", len(self.tasks))
        return self

    def add_module(self, path:str) -> None:
        try:
            module = importlib.import_module(path)
        except ImportError as err:
            raise TaskError("Failed to import plugin %s : %s", path, err) from err

        self.add_tasks(getattr(module, "TASKS", []))

    def add_entry_point(self, entry_point:EntryPoint) -> None:
        logging.debug("Loading plugin entry point: %s", entry_point.name)
        try:
            loaded = entry_point.load()
        except Exception as err:
            raise TaskError("Plugin Failed to Load: %s : %s", entry_point.name, err) from err

        match loaded:
            case list() | tuple():
                self.add_tasks(loaded)
            case type() if issubclass(loaded, CrowTask):
                self.add_tasks([loaded])
            case _:
                self.add_tasks(getattr(loaded, "TASKS", []))

    def add_tasks(self, tasks:list[type[CrowTask]]) -> None:
        for task in tasks:
            if not (isinstance(task, type) and issubclass(task, CrowTask)):
                raise TaskError("Not a task class: %s", task)

            name = task.fullname()
            if name in self.tasks and self.tasks[name] is not task:
                logging.warning("Task %s redefined by %s", name, task)

            self.tasks[name] = task
