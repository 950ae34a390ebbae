#!/usr/bin/env python3
"""
Keeping IntelliJ project files in step with a poetry project.
"""
##-- imports
from __future__ import annotations

import logging as logmod
import pathlib as pl
from typing import Final

from crowtasks._interface import PRINTER_NAME
from crowtasks.errors import TaskFailed
from crowtasks.poetry.tasks import _PoetryTask
from crowtasks.utils.xml_doc import XmlDoc, set_attrs, upsert_child
##-- end imports

##-- logging
logging = logmod.getLogger(__name__)
printer = logmod.getLogger(PRINTER_NAME)
##-- end logging

JDK_XPATHS      : Final[list[str]] = ["/module/component/orderEntry[@type='inheritedJdk']",
                                      "/module/component/orderEntry[@type='jdk']"]
CONTENT_XPATH   : Final[str]       = "/module/component/content"
ACTIVATION_PATH : Final[str]       = ("/project/component[@name='ExternalProjectsManager']"
                                      "/system[@id='GRADLE']/state/task[@path='$PROJECT_DIR$']/activation")
SYNC_PHASES     : Final[list[str]] = ["before_sync", "after_sync"]

class PoetryIdeaSyncModule(_PoetryTask):
    """
    Point the IntelliJ module at the poetry sdk and source directories
    """
    name = "idea-sync"

    def module_file(self) -> pl.Path:
        return self.cfg.as_path("module_file", ".idea/modules/${name}.iml")

    def only_if(self) -> bool:
        return self.module_file().exists()

    def source_dirs(self) -> list[tuple[pl.Path, dict[str, str]]]:
        """ The existing source directories, with the sourceFolder attributes each gets """
        settings = self.settings
        dirs     = [(settings.main_sources,   {"isTestSource": "false"}),
                    (settings.main_resources, {"type": "java-resource"}),
                    (settings.test_sources,   {"isTestSource": "true"}),
                    (settings.test_resources, {"type": "java-test-resource"}),
                    ]
        return [(path, attrs) for path, attrs in dirs if path.exists()]

    def execute(self):
        doc = XmlDoc(self.module_file())
        self.set_jdk(doc)
        self.set_sources(doc)
        doc.write()
        printer.info("Synced: %s", self.rel(self.module_file()))

    def set_jdk(self, doc:XmlDoc) -> None:
        match doc.first(*JDK_XPATHS):
            case None:
                logging.info("No jdk entry in module: %s", doc.path)
            case node:
                set_attrs(node,
                          type="jdk",
                          jdkName=self.cfg.as_str("jdk_name", "Poetry (${name})"),
                          jdkType="Python SDK")

    def set_sources(self, doc:XmlDoc) -> None:
        content = doc.first(CONTENT_XPATH)
        if content is None:
            raise TaskFailed("Content node not found in module file: %s", doc.path, task=self.fullname())

        base_url = content.get("url")
        if base_url is None:
            raise TaskFailed("Module directory url not found in module file: %s", doc.path, task=self.fullname())

        for path, attrs in self.source_dirs():
            url = "{}/{}".format(base_url, self.rel(path))
            set_attrs(upsert_child(content, "sourceFolder", url=url), **attrs)

class PoetryIdeaWorkspace(_PoetryTask):
    """
    Run the module sync whenever IntelliJ syncs the project
    """
    name = "idea-workspace"

    def execute(self):
        workspace = self.cfg.as_path("workspace_file", ".idea/workspace.xml")
        if not workspace.is_file():
            raise TaskFailed("Workspace file not found: %s", workspace, task=self.fullname())

        doc        = XmlDoc(workspace)
        activation = doc.first(ACTIVATION_PATH)
        if activation is None:
            raise TaskFailed("Failed to find activation node in workspace file: %s", workspace, task=self.fullname())

        sync_task = self.cfg.as_str("sync_task", "PoetryIdeaSyncModule")
        for phase in SYNC_PHASES:
            upsert_child(upsert_child(activation, phase), "task", name=sync_task)

        doc.write()
        printer.info("Updated: %s", self.rel(workspace))
