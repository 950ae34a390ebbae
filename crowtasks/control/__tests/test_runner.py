#!/usr/bin/env python3
"""

"""
from __future__ import annotations

import logging as logmod

import pytest
from tomlguard import TomlGuard

from crowtasks.control.registry import TaskRegistry
from crowtasks.control.runner import TaskRunner
from crowtasks.enums import TaskStatus_e
from crowtasks.errors import TaskError, TaskFailed
from crowtasks.structs.project_spec import ProjectSpec
from crowtasks.task.base_task import CrowTask
from crowtasks.utils.testing_fixtures import wrap_tmp

logging = logmod.root

RAN = []

class _Recorder(CrowTask):
    group = "test"

    def execute(self):
        RAN.append(self.name)

class First(_Recorder):
    name = "first"

class Second(_Recorder):
    name       = "second"
    depends_on = ["test::first"]

class Third(_Recorder):
    name       = "third"
    depends_on = ["test::second", "test::first"]

class Skipped(_Recorder):
    name       = "skipped"
    depends_on = ["test::first"]

    def only_if(self):
        return False

class Broken(_Recorder):
    name       = "broken"
    depends_on = ["test::first"]

    def execute(self):
        raise TaskFailed("broken")

class After(_Recorder):
    name       = "after"
    depends_on = ["test::broken"]

class CycleA(_Recorder):
    name       = "cycle-a"
    depends_on = ["test::cycle-b"]

class CycleB(_Recorder):
    name       = "cycle-b"
    depends_on = ["test::cycle-a"]

class Dangling(_Recorder):
    name       = "dangling"
    depends_on = ["test::nowhere"]

@pytest.fixture
def runner(wrap_tmp):
    RAN.clear()
    registry = TaskRegistry()
    registry.add_tasks([First, Second, Third, Skipped, Broken, After, CycleA, CycleB, Dangling])
    config   = TomlGuard({})
    project  = ProjectSpec.build(config, wrap_tmp)
    return TaskRunner(registry, config, project, state_dir=wrap_tmp / ".crowtasks")

class TestTaskRunner:

    def test_initial(self, runner):
        assert(isinstance(runner, TaskRunner))

    def test_plan_includes_dependencies(self, runner):
        assert(runner.plan(["test::third"]) == ["test::first", "test::second", "test::third"])

    def test_plan_single(self, runner):
        assert(runner.plan(["test::first"]) == ["test::first"])

    def test_run_order(self, runner):
        results = runner.run(["test::third"])
        assert(RAN == ["first", "second", "third"])
        assert(all(x is TaskStatus_e.SUCCESS for x in results.values()))

    def test_skip(self, runner):
        results = runner.run(["test::skipped"])
        assert(RAN == ["first"])
        assert(results["test::skipped"] is TaskStatus_e.SKIPPED)

    def test_stops_at_failure(self, runner):
        with pytest.raises(TaskFailed):
            runner.run(["test::after"])

        assert(RAN == ["first"])
        assert(runner.results["test::broken"] is TaskStatus_e.FAILED)
        assert("test::after" not in runner.results)

    def test_unknown_task(self, runner):
        with pytest.raises(TaskError):
            runner.plan(["test::missing"])

    def test_unknown_dependency(self, runner):
        with pytest.raises(TaskError, match="unknown task"):
            runner.plan(["test::dangling"])

    def test_cycle(self, runner):
        with pytest.raises(TaskError, match="cycle"):
            runner.plan(["test::cycle-a"])
