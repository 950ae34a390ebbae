#!/usr/bin/env python3
"""
Linux packaging tasks.

Each package type (eg: Debian, RedHat) gets a staging tree in the output dir:

<output_dir>/<type>/                 <- shared resources, docker sources
<output_dir>/<type>/<package_name>/  <- shared sources, distribution sources, artifacts

which is then used as the context of a docker image that builds the package.

"""
##-- imports
from __future__ import annotations

import logging as logmod
import pathlib as pl
from typing import Final

from pydantic import BaseModel

from crowtasks._interface import PRINTER_NAME
from crowtasks.config import TaskConfig
from crowtasks.task.base_task import CrowTask
from crowtasks.utils.copying import CopySpec, copy_artifacts, copy_tree
##-- end imports

##-- logging
logging = logmod.getLogger(__name__)
printer = logmod.getLogger(PRINTER_NAME)
##-- end logging

DEFAULT_TYPES        : Final[list[str]] = ["Debian", "RedHat"]
DEFAULT_DIST_DIR     : Final[str]       = "src/main/linux"
DEFAULT_RESOURCES    : Final[str]       = "src/main/resources"
DEFAULT_COMMON_SRC   : Final[str]       = "src/main/linux/src"
DEFAULT_OUTPUT       : Final[str]       = "${build}/deployment"
DEFAULT_PACKAGE_NAME : Final[str]       = "${name}_${version}"

class PackagingSettings(BaseModel, arbitrary_types_allowed=True):
    """ The settings every packaging task shares """
    package_types        : list[str]
    source_dir_name      : str
    docker_dir_name      : str
    distribution_dir     : pl.Path
    resources_dir        : pl.Path
    common_src_dir       : pl.Path
    output_dir           : pl.Path
    package_name         : str
    include              : list[str]
    exclude              : list[str]
    filter               : dict[str, str]

    @staticmethod
    def build(cfg:TaskConfig) -> PackagingSettings:
        return PackagingSettings(package_types=cfg.as_list("package_types", DEFAULT_TYPES),
                                 source_dir_name=cfg.as_str("source_dir_name", "src"),
                                 docker_dir_name=cfg.as_str("docker_dir_name", "Docker"),
                                 distribution_dir=cfg.as_path("distribution_dir", DEFAULT_DIST_DIR),
                                 resources_dir=cfg.as_path("resources_dir", DEFAULT_RESOURCES),
                                 common_src_dir=cfg.as_path("common_src_dir", DEFAULT_COMMON_SRC),
                                 output_dir=cfg.as_path("output_dir", DEFAULT_OUTPUT),
                                 package_name=cfg.as_str("package_name", DEFAULT_PACKAGE_NAME),
                                 include=cfg.as_list("include", []),
                                 exclude=cfg.as_list("exclude", []),
                                 filter={k: str(v) for k,v in cfg.as_dict("filter", {}).items()},
                                 )

    @property
    def copy_spec(self) -> CopySpec:
        return CopySpec(include=self.include, exclude=self.exclude, tokens=self.filter)

    def type_dir(self, package_type:str) -> pl.Path:
        return self.output_dir / package_type

    def package_dir(self, package_type:str) -> pl.Path:
        return self.output_dir / package_type / self.package_name

    def dist_sources(self, package_type:str) -> pl.Path:
        return self.distribution_dir / package_type / self.source_dir_name

    def dist_docker(self, package_type:str) -> pl.Path:
        return self.distribution_dir / package_type / self.docker_dir_name

class _PackagingTask(CrowTask):
    group = "linux"

    def build_settings(self, cfg:TaskConfig) -> PackagingSettings:
        return PackagingSettings.build(cfg)

class PackagingInit(_PackagingTask):
    """
    Create the linux packaging directory structure
    """
    name = "init"

    def directories(self) -> list[pl.Path]:
        settings = self.settings
        dirs     = [settings.distribution_dir, settings.resources_dir, settings.common_src_dir]
        for package_type in settings.package_types:
            dirs += [settings.dist_sources(package_type), settings.dist_docker(package_type)]

        return dirs

    def execute(self):
        for path in self.directories():
            if path.exists():
                continue
            path.mkdir(parents=True)
            printer.info("Created: %s", self.project.relative(path))

class _ProcessTask(_PackagingTask):
    """ Copies a source tree into every package type's staging tree """

    def source(self, package_type:str) -> pl.Path:
        raise NotImplementedError(self.__class__)

    def destination(self, package_type:str) -> pl.Path:
        raise NotImplementedError(self.__class__)

    def execute(self):
        spec = self.settings.copy_spec
        for package_type in self.settings.package_types:
            written = copy_tree(self.source(package_type), self.destination(package_type), spec)
            printer.info("%s : %s files", package_type, len(written))

class ProcessResources(_ProcessTask):
    """
    Copy shared resources into each package type
    """
    name = "resources"

    def source(self, package_type:str) -> pl.Path:
        return self.settings.resources_dir

    def destination(self, package_type:str) -> pl.Path:
        return self.settings.type_dir(package_type)

class ProcessDockerSources(_ProcessTask):
    """
    Copy each package type's docker sources
    """
    name       = "docker-sources"
    depends_on = ["linux::resources"]

    def source(self, package_type:str) -> pl.Path:
        return self.settings.dist_docker(package_type)

    def destination(self, package_type:str) -> pl.Path:
        return self.settings.type_dir(package_type)

class ProcessSharedSources(_ProcessTask):
    """
    Copy the sources common to every package type
    """
    name       = "shared-sources"
    depends_on = ["linux::docker-sources"]

    def source(self, package_type:str) -> pl.Path:
        return self.settings.common_src_dir

    def destination(self, package_type:str) -> pl.Path:
        return self.settings.package_dir(package_type)

class ProcessDistributionSources(_ProcessTask):
    """
    Copy each package type's own sources
    """
    name       = "distribution-sources"
    depends_on = ["linux::shared-sources"]

    def source(self, package_type:str) -> pl.Path:
        return self.settings.dist_sources(package_type)

    def destination(self, package_type:str) -> pl.Path:
        return self.settings.package_dir(package_type)

class ProcessArtifacts(_PackagingTask):
    """
    Copy, or unpack, built artifacts into each package
    """
    name       = "artifacts"
    depends_on = ["linux::distribution-sources"]

    class Settings(PackagingSettings):
        artifacts         : list[pl.Path]
        distribution_path : str
        unarchive         : bool

    def build_settings(self, cfg:TaskConfig) -> Settings:
        base = PackagingSettings.build(cfg)
        return ProcessArtifacts.Settings(artifacts=[self.project.path(x) for x in cfg.as_list("artifacts", [])],
                                         distribution_path=cfg.as_str("distribution_path", "usr/share/${name}"),
                                         unarchive=cfg.as_bool("unarchive", False),
                                         **base.model_dump())

    def execute(self):
        settings = self.settings
        if not bool(settings.artifacts):
            printer.info("No artifacts to package")
            return

        for package_type in settings.package_types:
            dest    = settings.package_dir(package_type) / settings.distribution_path
            written = copy_artifacts(settings.artifacts, dest, settings.copy_spec, unarchive=settings.unarchive)
            printer.info("%s : %s artifact files", package_type, len(written))
