"""
Poetry tasks, for python projects built with poetry
"""
from .tasks import (PoetryConfigInit, PoetryStructure, PoetryReadMe, PoetryPyProject,
                    PoetryEnvironment, PoetryVersion, PoetryUpdate, PoetryTest, PoetryBuild)
from .idea import PoetryIdeaSyncModule, PoetryIdeaWorkspace

TASKS = [PoetryConfigInit, PoetryStructure, PoetryReadMe, PoetryPyProject,
         PoetryEnvironment, PoetryVersion, PoetryUpdate, PoetryTest, PoetryBuild,
         PoetryIdeaSyncModule, PoetryIdeaWorkspace]
