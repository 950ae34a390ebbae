#!/usr/bin/env python3
"""
Errors for defining, ordering and running tasks
"""
# Imports:
from __future__ import annotations

# ##-- stdlib imports
import logging as logmod
from typing import Any

# ##-- end stdlib imports

from ._base import CrowError

##-- logging
logging = logmod.getLogger(__name__)
##-- end logging

class TaskError(CrowError):
    """ An Error indicating a specific task is unusable """
    general_msg = "Task Error:"

    def __init__(self, msg:str, *args:Any, task:None|str=None):
        super().__init__(msg, *args)
        self.task = task

class TaskFailed(TaskError):
    """ A Task attempted to run, but failed in some way. """
    general_msg = "Task Failure:"

class CommandFailed(TaskFailed):
    """ An external command could not be found, or exited with an unaccepted code """
    general_msg = "External Command Failure:"

    def __init__(self, msg:str, *args:Any, exit_code:None|int=None, stderr:str="", task:None|str=None):
        super().__init__(msg, *args, task=task)
        self.exit_code = exit_code
        self.stderr    = stderr

class TrackingError(CrowError):
    """ The recorded state of tracked files could not be read or written """
    general_msg = "Tracking Failure:"
