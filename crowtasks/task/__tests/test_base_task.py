#!/usr/bin/env python3
"""

"""
from __future__ import annotations

import logging as logmod

import pytest

from crowtasks.enums import TaskStatus_e
from crowtasks.errors import TaskFailed
from crowtasks.task.base_task import AggregateTask, CrowTask
from crowtasks.utils.testing_fixtures import make_task, wrap_tmp

logging = logmod.root

class SimpleTask(CrowTask):
    """
    A simple task

    with more docs
    """
    group = "test"
    name  = "simple-task"

    def execute(self):
        self.tracker.changes("files", [self.project.root_dir / "a.txt"])

class SkippedTask(CrowTask):
    group = "test"
    name  = "skipped"

    def only_if(self):
        return False

class FailingTask(SimpleTask):
    name = "failing"

    def execute(self):
        super().execute()
        raise TaskFailed("failed on purpose")

class TestCrowTask:

    def test_initial(self, make_task):
        obj = make_task(SimpleTask)
        assert(isinstance(obj, CrowTask))
        assert(obj.fullname() == "test::simple-task")
        assert(obj.config_key() == "simple_task")

    def test_short_doc(self):
        assert(SimpleTask.short_doc() == ":: A simple task")
        assert(SkippedTask.short_doc() == ":: ")

    def test_config_table(self, make_task):
        obj = make_task(SimpleTask, {"test": {"simple_task": {"value": "found"}}})
        assert(obj.cfg.as_str("value") == "found")

    def test_run_commits(self, make_task, wrap_tmp):
        (wrap_tmp / "a.txt").write_text("a")
        obj = make_task(SimpleTask)
        assert(obj.run() is TaskStatus_e.SUCCESS)
        assert(obj.tracker.state_file.exists())

    def test_skipped(self, make_task):
        obj = make_task(SkippedTask)
        assert(obj.run() is TaskStatus_e.SKIPPED)

    def test_failure_discards(self, make_task, wrap_tmp):
        (wrap_tmp / "a.txt").write_text("a")
        obj = make_task(FailingTask)
        with pytest.raises(TaskFailed):
            obj.run()

        assert(not obj.tracker.state_file.exists())

    def test_aggregate(self, make_task):
        class Agg(AggregateTask):
            group = "test"
            name  = "agg"

        assert(make_task(Agg).run() is TaskStatus_e.SUCCESS)
