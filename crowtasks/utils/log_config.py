#!/usr/bin/env python3
"""
Logging setup.

Three loggers are configured:
- root, the general log stream (stderr by default),
- an optional file log,
- the printer, which replaces 'print(x)' for user facing output.

The printer has a 'fail' child, used to report external command failures.

"""

# Imports:
from __future__ import annotations

# ##-- stdlib imports
import logging as logmod

# ##-- end stdlib imports

# ##-- 3rd party imports
from tomlguard import TomlGuard

# ##-- end 3rd party imports

# ##-- 1st party imports
from crowtasks._interface import PRINTER_NAME
from crowtasks.structs.logger_spec import LoggerSpec

# ##-- end 1st party imports

##-- logging
logging = logmod.getLogger(__name__)
##-- end logging

VERBOSITY_LEVELS = {0: None, 1: logmod.INFO, 2: logmod.DEBUG}

class LogConfig:
    """ Utility class to setup [stream, file, printer] logging. """

    def __init__(self):
        self.stream_spec  = LoggerSpec.build({"name"   : LoggerSpec.RootName,
                                              "level"  : "WARNING",
                                              "target" : "stderr",
                                              "format" : "{levelname:<8} : INIT : {message}",
                                              })
        self.printer_spec = LoggerSpec.build({"name"   : PRINTER_NAME,
                                              "level"  : "INFO",
                                              "target" : "stdout",
                                              "format" : "{message}",
                                              })
        self.file_spec    = None
        self.stream_spec.apply()
        self.printer_spec.apply()
        logging.debug("Post Log Setup")

    def setup(self, config:TomlGuard, *, verbosity:int=0):
        """ a setup that uses config values """
        self.stream_spec  = LoggerSpec.build(self._table(config, "stream", {"target": "stderr"}), name=LoggerSpec.RootName)
        self.printer_spec = LoggerSpec.build(self._table(config, "printer", {"level": "INFO", "target": "stdout", "format": "{message}"}), name=PRINTER_NAME)
        self.stream_spec.apply()
        self.printer_spec.apply()

        match self._table(config, "file", {}):
            case dict() as data if bool(data):
                self.file_spec = LoggerSpec.build(data, name="crowtasks", target="file", propagate=True)
                self.file_spec.apply()
            case _:
                pass

        self.set_verbosity(verbosity)

    def set_verbosity(self, verbosity:int):
        match VERBOSITY_LEVELS.get(min(verbosity, 2)):
            case None:
                pass
            case level:
                self.stream_spec.set_level(level)
                self.printer_spec.set_level(level)

    def _table(self, config:TomlGuard, name:str, defaults:dict) -> dict:
        data = defaults.copy()
        data.update(getattr(config.on_fail({}).logging, name)(wrapper=dict))
        return data
