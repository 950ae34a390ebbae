#!/usr/bin/env python3
"""
Loading crowtasks.toml, and resolving task settings from it.

Task settings cascade, eg: for gettext::msgmerge's 'encoding':
[gettext.msgmerge].encoding -> [gettext].encoding -> fallback

"""
##-- imports
from __future__ import annotations

import logging as logmod
import pathlib as pl
from typing import Any, Final

import tomlguard
from tomlguard import TomlGuard

from crowtasks.errors import ConfigError, InvalidConfigError
from crowtasks.structs.project_spec import ProjectSpec
##-- end imports

##-- logging
logging = logmod.getLogger(__name__)
##-- end logging

class _Missing:
    """ Marker for a setting found in neither table """

MISSING : Final = _Missing()

def load_config(path:pl.Path) -> TomlGuard:
    """ Load the crowtasks toml. A missing file means an empty config """
    if not path.exists():
        logging.info("No Config Found at %s, using defaults", path)
        return TomlGuard({})

    try:
        return tomlguard.load(path)
    except OSError as err:
        raise InvalidConfigError("Failed to read config %s : %s", path, err) from err
    except Exception as err:
        raise InvalidConfigError("Failed to parse config %s : %s", path, err) from err

class TaskConfig:
    """
      A view of the config for a single task of a plugin.
      Lookups go task table -> plugin table -> fallback,
      and string values are ${key} expanded with project metadata.
    """

    def __init__(self, config:TomlGuard, project:ProjectSpec, plugin:str, task:str):
        self.config  = config
        self.project = project
        self.plugin  = plugin
        self.task    = task

    def _lookup(self, *keys:str) -> Any:
        proxy = self.config.on_fail(MISSING)
        for key in keys:
            proxy = getattr(proxy, key)
        return proxy()

    def raw(self, key:str, fallback:Any=MISSING) -> Any:
        """ Get a value without expansion """
        for value in (self._lookup(self.plugin, self.task, key), self._lookup(self.plugin, key)):
            if value is not MISSING:
                return value

        if fallback is MISSING:
            raise ConfigError("Missing required setting: %s.%s.%s", self.plugin, self.task, key)

        return fallback

    def value(self, key:str, fallback:Any=MISSING) -> Any:
        return self.project.expand(self.raw(key, fallback))

    def as_str(self, key:str, fallback:Any=MISSING) -> str:
        match self.value(key, fallback):
            case str() as val:
                return val
            case None:
                return None
            case val:
                raise ConfigError("Setting %s.%s.%s should be a string: %s", self.plugin, self.task, key, val)

    def as_list(self, key:str, fallback:Any=MISSING) -> list:
        match self.value(key, fallback):
            case list() as val:
                return val
            case str() as val:
                return val.split()
            case val:
                raise ConfigError("Setting %s.%s.%s should be a list: %s", self.plugin, self.task, key, val)

    def as_bool(self, key:str, fallback:Any=MISSING) -> bool:
        match self.raw(key, fallback):
            case bool() as val:
                return val
            case val:
                raise ConfigError("Setting %s.%s.%s should be a bool: %s", self.plugin, self.task, key, val)

    def as_dict(self, key:str, fallback:Any=MISSING) -> dict:
        match self.raw(key, fallback):
            case None:
                return {}
            case val:
                try:
                    return {k: self.project.expand(v) for k,v in dict(val).items()}
                except (TypeError, ValueError) as err:
                    raise ConfigError("Setting %s.%s.%s should be a table: %s", self.plugin, self.task, key, val) from err

    def as_path(self, key:str, fallback:Any=MISSING) -> None|pl.Path:
        match self.value(key, fallback):
            case None:
                return None
            case str() | pl.Path() as val:
                return self.project.path(val)
            case val:
                raise ConfigError("Setting %s.%s.%s should be a path: %s", self.plugin, self.task, key, val)
