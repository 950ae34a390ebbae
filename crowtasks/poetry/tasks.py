#!/usr/bin/env python3
"""
Poetry tasks: scaffolding a poetry project, then versioning, updating,
testing and building it with poetry.
"""
##-- imports
from __future__ import annotations

import logging as logmod
import pathlib as pl
from string import Template
from typing import Final

from pydantic import BaseModel

from crowtasks._interface import PRINTER_NAME, TEMPLATE_PATH
from crowtasks.actions import shell
from crowtasks.config import TaskConfig
from crowtasks.errors import CommandFailed
from crowtasks.task.base_task import CrowTask
##-- end imports

##-- logging
logging = logmod.getLogger(__name__)
printer = logmod.getLogger(PRINTER_NAME)
##-- end logging

POETRY_EXIT_CODES : Final[tuple[int, ...]] = (0, 5)
INIT_FILE         : Final[str]             = "__init__.py"

class PoetrySettings(BaseModel, arbitrary_types_allowed=True):
    """ Settings shared by every poetry task """
    cmd            : str
    main_sources   : pl.Path
    main_resources : pl.Path
    test_sources   : pl.Path
    test_resources : pl.Path
    python_version : str
    args           : list[str]

    @staticmethod
    def build(cfg:TaskConfig) -> PoetrySettings:
        return PoetrySettings(cmd=cfg.as_str("cmd", "poetry"),
                              main_sources=cfg.as_path("main_sources", "src/main/python"),
                              main_resources=cfg.as_path("main_resources", "src/main/resources"),
                              test_sources=cfg.as_path("test_sources", "src/test/python"),
                              test_resources=cfg.as_path("test_resources", "src/test/resources"),
                              python_version=str(cfg.value("python_version", "3.11")),
                              args=cfg.as_list("args", []),
                              )

class _PoetryTask(CrowTask):
    group = "poetry"

    def build_settings(self, cfg:TaskConfig) -> PoetrySettings:
        return PoetrySettings.build(cfg)

    def verbosity(self) -> list[str]:
        if logging.isEnabledFor(logmod.DEBUG):
            return ["-vv"]
        if logging.isEnabledFor(logmod.INFO):
            return ["-v"]
        return []

    def poetry(self, *args:str|pl.Path) -> shell.CmdResult:
        """ Run poetry, treating exit codes 0 and 5 as success """
        try:
            return shell.run(self.settings.cmd, *self.verbosity(), *args,
                             cwd=self.project.root_dir,
                             exitcodes=POETRY_EXIT_CODES)
        except CommandFailed as err:
            raise CommandFailed("Poetry command failed with exit code %s.", err.exit_code,
                                exit_code=err.exit_code, stderr=err.stderr, task=self.fullname()) from err

    def render(self, template:str, **kwargs) -> str:
        return Template(TEMPLATE_PATH.joinpath(template).read_text()).substitute(**kwargs)

    def rel(self, path:pl.Path) -> str:
        return self.project.relative(path).as_posix()

class _WriteOnceTask(_PoetryTask):
    """ Writes a single generated file, skipped if the file exists """

    def target(self) -> pl.Path:
        raise NotImplementedError(self.__class__)

    def text(self) -> str:
        raise NotImplementedError(self.__class__)

    def only_if(self) -> bool:
        return not self.target().exists()

    def execute(self):
        target = self.target()
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.text())
        printer.info("Wrote: %s", self.rel(target))

class PoetryConfigInit(_WriteOnceTask):
    """
    Write a poetry.toml that keeps the virtualenv in the project
    """
    name = "config-init"

    def target(self) -> pl.Path:
        return self.cfg.as_path("toml_file", "poetry.toml")

    def text(self) -> str:
        return TEMPLATE_PATH.joinpath("poetry_toml").read_text()

class PoetryStructure(_PoetryTask):
    """
    Create the python source and resource packages
    """
    name = "structure"

    def packages(self) -> list[pl.Path]:
        settings = self.settings
        name     = self.project.name
        return [settings.main_sources / name,
                settings.main_resources / "{}_res".format(name),
                settings.test_sources / "test_{}".format(name),
                settings.test_resources / "test_{}_res".format(name),
                ]

    def execute(self):
        for package in self.packages():
            package.mkdir(parents=True, exist_ok=True)
            init = package / INIT_FILE
            if init.exists():
                continue
            init.touch()
            printer.info("Created: %s", self.rel(init))

class PoetryReadMe(_WriteOnceTask):
    """
    Write a README for the project
    """
    name = "readme"

    def target(self) -> pl.Path:
        return self.cfg.as_path("readme_file", "README.md")

    def text(self) -> str:
        return self.render("poetry_readme", name=self.project.name, description=self.project.description)

class PoetryPyProject(_WriteOnceTask):
    """
    Write the project's pyproject.toml
    """
    name       = "pyproject"
    depends_on = ["poetry::structure", "poetry::readme"]

    def target(self) -> pl.Path:
        return self.cfg.as_path("pyproject_file", "pyproject.toml")

    def urls(self) -> str:
        lines = []
        if (homepage := self.cfg.as_str("homepage", self.project.url)) is not None:
            lines.append('homepage = "{}"'.format(homepage))
        if (repository := self.cfg.as_str("repository", self.project.url)) is not None:
            lines.append('repository = "{}"'.format(repository))

        return "\n".join(lines)

    def text(self) -> str:
        settings = self.settings
        return self.render("poetry_pyproject",
                           name=self.project.name,
                           version=self.project.version,
                           description=self.project.description,
                           author=self.project.author,
                           readme=self.rel(self.cfg.as_path("readme_file", "README.md")),
                           urls=self.urls(),
                           main_sources=self.rel(settings.main_sources),
                           main_resources=self.rel(settings.main_resources),
                           python_version=settings.python_version,
                           test_sources=self.rel(settings.test_sources),
                           test_resources=self.rel(settings.test_resources),
                           )

class PoetryEnvironment(_PoetryTask):
    """
    Create the project's virtualenv and install its dependencies
    """
    name       = "environment"
    depends_on = ["poetry::config-init", "poetry::structure", "poetry::readme", "poetry::pyproject"]

    def venv(self) -> pl.Path:
        return self.cfg.as_path("venv_dir", ".venv")

    def only_if(self) -> bool:
        return not self.venv().exists()

    def execute(self):
        self.poetry("env", "use", self.settings.python_version)
        self.poetry("install", "--sync")

class PoetryVersion(_PoetryTask):
    """
    Set the poetry project version to the project's version
    """
    name = "version"

    def execute(self):
        self.poetry("version", self.project.version)

class PoetryUpdate(_PoetryTask):
    """
    Update dependencies, pinning local dependencies for a release
    """
    name       = "update"
    depends_on = ["poetry::version"]

    def execute(self):
        if self.cfg.as_bool("release", False):
            self.pin_local_dependencies()

        self.poetry("update", *self.settings.args)

    def pin_local_dependencies(self) -> None:
        for name, version in self.cfg.as_dict("local_dependencies", {}).items():
            try:
                self.poetry("remove", name)
            except CommandFailed:
                printer.error("Nothing to remove for %s:%s", name, version)

            self.poetry("add", "{}={}".format(name, version))

class PoetryTest(_PoetryTask):
    """
    Run the project's tests with poetry
    """
    name       = "test"
    depends_on = ["poetry::update"]

    def only_if(self) -> bool:
        return any(x.is_file() for x in self.settings.test_sources.glob("**/*"))

    def execute(self):
        report = self.cfg.as_path("report", "${build}/reports/tests/test/index.html")
        report.parent.mkdir(parents=True, exist_ok=True)
        self.poetry("update", "--sync", "--with", "test")
        self.poetry("run",
                    self.cfg.as_str("test_cmd", "pytest"),
                    "{}{}".format(self.cfg.as_str("report_arg", "--html="), report.resolve()),
                    *self.settings.args)

class PoetryBuild(_PoetryTask):
    """
    Build the project's distributions with poetry
    """
    name       = "build"
    depends_on = ["poetry::update"]

    def only_if(self) -> bool:
        return any(x.is_file() for x in self.settings.main_sources.glob("**/*"))

    def execute(self):
        build_dir = self.cfg.as_path("build_dir", "${build}/dist")
        build_dir.mkdir(parents=True, exist_ok=True)
        self.poetry("build", "--output", build_dir.resolve(), *self.settings.args)
