#!/usr/bin/env python3
"""

"""
from __future__ import annotations

import logging as logmod
import pathlib as pl

import pytest
from lxml import etree

from crowtasks.enums import TaskStatus_e
from crowtasks.errors import TaskFailed
from crowtasks.poetry.idea import PoetryIdeaSyncModule, PoetryIdeaWorkspace
from crowtasks.utils.testing_fixtures import make_task, wrap_tmp

logging = logmod.root

MODULE = """<?xml version="1.0" encoding="UTF-8"?>
<module type="JAVA_MODULE" version="4">
  <component name="NewModuleRootManager">
    <content url="file://$MODULE_DIR$/../..">
      <sourceFolder url="file://$MODULE_DIR$/../../src/main/python" isTestSource="true" />
    </content>
    <orderEntry type="inheritedJdk" />
    <orderEntry type="sourceFolder" forTests="false" />
  </component>
</module>
"""

WORKSPACE = """<?xml version="1.0" encoding="UTF-8"?>
<project version="4">
  <component name="ExternalProjectsManager">
    <system id="GRADLE">
      <state>
        <task path="$PROJECT_DIR$">
          <activation />
        </task>
      </state>
    </system>
  </component>
</project>
"""

def _write(root:pl.Path, rel:str, text:str) -> pl.Path:
    target = root / rel
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text)
    return target

class TestIdeaSyncModule:

    def test_initial(self, make_task):
        obj = make_task(PoetryIdeaSyncModule)
        assert(obj.fullname() == "poetry::idea-sync")

    def test_skipped_without_module(self, make_task):
        assert(make_task(PoetryIdeaSyncModule).run() is TaskStatus_e.SKIPPED)

    def test_sync(self, make_task, wrap_tmp):
        module = _write(wrap_tmp, ".idea/modules/demo.iml", MODULE)
        (wrap_tmp / "src/main/python").mkdir(parents=True)
        (wrap_tmp / "src/test/resources").mkdir(parents=True)
        make_task(PoetryIdeaSyncModule).run()

        tree = etree.parse(str(module))
        jdk  = tree.xpath("/module/component/orderEntry[@type='jdk']")
        assert(len(jdk) == 1)
        assert(jdk[0].get("jdkName") == "Poetry (demo)")
        assert(jdk[0].get("jdkType") == "Python SDK")

        folders = {x.get("url"): x for x in tree.xpath("//sourceFolder")}
        assert(len(folders) == 2)
        assert(folders["file://$MODULE_DIR$/../../src/main/python"].get("isTestSource") == "false")
        assert(folders["file://$MODULE_DIR$/../../src/test/resources"].get("type") == "java-test-resource")

    def test_sync_twice(self, make_task, wrap_tmp):
        module = _write(wrap_tmp, ".idea/modules/demo.iml", MODULE)
        (wrap_tmp / "src/main/python").mkdir(parents=True)
        make_task(PoetryIdeaSyncModule).run()
        once = module.read_text()
        make_task(PoetryIdeaSyncModule).run()
        assert(module.read_text() == once)

    def test_jdk_name(self, make_task, wrap_tmp):
        module = _write(wrap_tmp, ".idea/modules/demo.iml", MODULE)
        make_task(PoetryIdeaSyncModule, {"poetry": {"idea_sync": {"jdk_name": "Python 3.12"}}}).run()
        assert('jdkName="Python 3.12"' in module.read_text())

    def test_missing_content_url(self, make_task, wrap_tmp):
        _write(wrap_tmp, ".idea/modules/demo.iml", MODULE.replace(' url="file://$MODULE_DIR$/../.."', "", 1))
        with pytest.raises(TaskFailed, match="url not found"):
            make_task(PoetryIdeaSyncModule).run()

class TestIdeaWorkspace:

    def test_initial(self, make_task):
        assert(make_task(PoetryIdeaWorkspace).fullname() == "poetry::idea-workspace")

    def test_missing_workspace(self, make_task):
        with pytest.raises(TaskFailed, match="Workspace file not found"):
            make_task(PoetryIdeaWorkspace).run()

    def test_missing_activation(self, make_task, wrap_tmp):
        _write(wrap_tmp, ".idea/workspace.xml", '<?xml version="1.0"?>\n<project version="4"/>\n')
        with pytest.raises(TaskFailed, match="activation"):
            make_task(PoetryIdeaWorkspace).run()

    def test_upsert(self, make_task, wrap_tmp):
        workspace = _write(wrap_tmp, ".idea/workspace.xml", WORKSPACE)
        make_task(PoetryIdeaWorkspace).run()
        make_task(PoetryIdeaWorkspace).run()
        tree = etree.parse(str(workspace))
        for phase in ["before_sync", "after_sync"]:
            tasks = tree.xpath("//activation/{}/task".format(phase))
            assert(len(tasks) == 1)
            assert(tasks[0].get("name") == "PoetryIdeaSyncModule")

        assert(workspace.read_text().startswith("<?xml"))
