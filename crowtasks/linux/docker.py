#!/usr/bin/env python3
"""
Building linux packages inside docker containers.

For each package type an image is built from its staging tree,
then a container is created from it, given the package sources,
run to completion, and the artifacts it produced copied back out.

"""
##-- imports
from __future__ import annotations

import logging as logmod
import pathlib as pl
from typing import Final

from crowtasks._interface import PRINTER_NAME
from crowtasks.actions import shell
from crowtasks.config import TaskConfig
from crowtasks.errors import CommandFailed, TaskFailed
from crowtasks.linux.tasks import PackagingSettings, _PackagingTask
##-- end imports

##-- logging
logging = logmod.getLogger(__name__)
printer = logmod.getLogger(PRINTER_NAME)
##-- end logging

REMOTE_BUILD     : Final[str] = "/root/build/"
REMOTE_ARTIFACTS : Final[str] = "/root/build/artifacts"
ARTIFACTS_DIR    : Final[str] = "artifacts"

class DockerSettings(PackagingSettings):
    engine       : str
    image_prefix : str
    version      : str

    def image(self, package_type:str) -> str:
        return "{}_{}:{}".format(self.image_prefix.lower(), package_type.lower(), self.version)

class _DockerTask(_PackagingTask):

    def build_settings(self, cfg:TaskConfig) -> DockerSettings:
        base = PackagingSettings.build(cfg)
        return DockerSettings(engine=cfg.as_str("engine", "docker"),
                              image_prefix=cfg.as_str("image_prefix", "${name}"),
                              version=self.project.version,
                              **base.model_dump())

    def docker(self, *args:str|pl.Path, echo:bool=True) -> shell.CmdResult:
        return shell.run(self.settings.engine, *args, cwd=self.project.root_dir, echo=echo)

class BuildImages(_DockerTask):
    """
    Build a docker image for each package type
    """
    name       = "docker-image"
    depends_on = ["linux::artifacts"]

    def execute(self):
        settings = self.settings
        for package_type in settings.package_types:
            context = settings.type_dir(package_type)
            if not context.is_dir():
                raise TaskFailed("No docker context for %s: %s", package_type, context, task=self.fullname())

            self.docker("build", "-t", settings.image(package_type), context)
            printer.info("Built Image: %s", settings.image(package_type))

class BuildPackages(_DockerTask):
    """
    Build each package type in its docker container, and collect the artifacts
    """
    name       = "package"
    depends_on = ["linux::docker-image"]

    def execute(self):
        for package_type in self.settings.package_types:
            self.package(package_type)

    def package(self, package_type:str) -> None:
        settings  = self.settings
        container = self.docker("create", settings.image(package_type), echo=False).stdout.strip()
        if not bool(container):
            raise TaskFailed("Docker did not report a container id for %s", package_type, task=self.fullname())

        try:
            self.docker("cp", settings.package_dir(package_type).resolve(), "{}:{}".format(container, REMOTE_BUILD))
            self.docker("start", container)
            self.follow_logs(container)
            self.wait(container)
            artifacts = settings.type_dir(package_type) / ARTIFACTS_DIR
            artifacts.mkdir(parents=True, exist_ok=True)
            self.docker("cp", "{}:{}/.".format(container, REMOTE_ARTIFACTS), artifacts.resolve())
            printer.info("%s artifacts: %s", package_type, self.project.relative(artifacts))
        finally:
            self.remove(container)

    def follow_logs(self, container:str) -> None:
        result = self.docker("logs", "--follow", container)
        if bool(result.stderr.strip()):
            printer.error("%s", result.stderr.rstrip())
            raise TaskFailed("Container %s wrote to stderr", container, task=self.fullname())

    def wait(self, container:str) -> None:
        status = self.docker("wait", container, echo=False).stdout.strip()
        if status != "0":
            raise TaskFailed("Container %s exited with status %s", container, status, task=self.fullname())

    def remove(self, container:str) -> None:
        try:
            self.docker("rm", "--force", container, echo=False)
        except CommandFailed as err:
            logging.warning("Failed to remove container %s : %s", container, err)
