#!/usr/bin/env python3
"""
The gettext tasks:
xgettext extracts keys into a template,
msgmerge merges the template into each locale's PO file,
msgfmt compiles PO files into java resource bundle classes,
properties writes the bundle properties gettext-commons reads.

"""
##-- imports
from __future__ import annotations

import logging as logmod
import pathlib as pl
import shutil
from typing import Final

from pydantic import BaseModel

from crowtasks._interface import PRINTER_NAME
from crowtasks.actions import shell
from crowtasks.config import TaskConfig
from crowtasks.errors import TaskFailed
from crowtasks.task.base_task import AggregateTask, CrowTask
from crowtasks.gettext.changes import artifact_path, compile_delta, merge_set, po_files
from crowtasks.gettext.header import DEFAULT_PLURALS, set_encoding, update_header
from crowtasks.gettext.locale import locale_of
from crowtasks.gettext.msgfmt_output import Verdict_e, classify_msgfmt_output
##-- end imports

##-- logging
logging = logmod.getLogger(__name__)
printer = logmod.getLogger(PRINTER_NAME)
##-- end logging

DEFAULT_ENCODING : Final[str]       = "UTF-8"
DEFAULT_POT      : Final[str]       = "src/main/resources/i18n/keys.pot"
DEFAULT_I18N     : Final[str]       = "src/main/resources/i18n"
DEFAULT_BUNDLE   : Final[str]       = "${qualified}.i18n.Messages"
DEFAULT_KEYWORDS : Final[list[str]] = ["trc:lc,2", "trnc:lc,2,3", "tr", "mrktr", "trn:1,2"]
XGETTEXT_ARGS    : Final[list[str]] = ["--package-name=${qualified}",
                                       "--package-version=${version}",
                                       "-LJava",
                                       "-n",
                                       "--no-wrap",
                                       "-F",
                                       "--msgid-bugs-address=${developers}",
                                       "-k",
                                       ]
MSGMERGE_ARGS    : Final[list[str]] = ["--no-wrap", "-F", "-q"]
MSGFMT_ARGS      : Final[list[str]] = ["--java2", "-c", "-f"]

class GettextSettings(BaseModel, arbitrary_types_allowed=True):
    cmd      : str       = ""
    args     : list[str] = []
    encoding : str       = DEFAULT_ENCODING

class _GettextTask(CrowTask):
    group = "gettext"

    def verbose_args(self) -> list[str]:
        if logging.isEnabledFor(logmod.INFO):
            return ["--verbose"]
        return []

    def rel(self, path:pl.Path) -> pl.Path:
        return self.project.relative(path)

class XGettextTask(_GettextTask):
    """
    Extract translatable strings from sources into the POT file
    """
    name = "xgettext"

    class Settings(GettextSettings):
        keywords   : list[str]
        sources    : list[str]
        pot_file   : pl.Path
        files_list : pl.Path

    def build_settings(self, cfg:TaskConfig) -> Settings:
        return XGettextTask.Settings(cmd=cfg.as_str("cmd", "xgettext"),
                                     args=cfg.as_list("args", XGETTEXT_ARGS),
                                     encoding=cfg.as_str("encoding", DEFAULT_ENCODING),
                                     keywords=cfg.as_list("keywords", DEFAULT_KEYWORDS),
                                     sources=cfg.as_list("sources", ["src/main/java/**/*.java"]),
                                     pot_file=cfg.as_path("pot_file", DEFAULT_POT),
                                     files_list=cfg.as_path("files_list", "${build}/i18n/inputFilesList.txt"),
                                     )

    def source_files(self) -> list[pl.Path]:
        found = set()
        for pattern in self.settings.sources:
            found.update(x for x in self.project.root_dir.glob(pattern) if x.is_file())

        return sorted(found)

    def keyword_args(self) -> list[str]:
        if not bool(self.settings.keywords):
            return []
        return "--keyword={}".format(" -k".join(self.settings.keywords)).split(" ")

    def execute(self):
        settings      = self.settings
        sources       = self.source_files()
        if not bool(sources):
            printer.info("No sources to extract keys from")
            return

        sources_changed = self.tracker.has_changed("sources", sources)
        pot_changed     = self.tracker.has_changed("pot", [settings.pot_file])
        if not (sources_changed or pot_changed) and settings.pot_file.exists():
            printer.info("Keys are up to date: %s", self.rel(settings.pot_file))
            return

        settings.pot_file.parent.mkdir(parents=True, exist_ok=True)
        settings.files_list.parent.mkdir(parents=True, exist_ok=True)
        settings.files_list.write_text("\n".join(self.rel(x).as_posix() for x in sources), encoding=settings.encoding)

        shell.run(settings.cmd,
                  *settings.args,
                  *self.verbose_args(),
                  "--from-code={}".format(settings.encoding),
                  *self.keyword_args(),
                  "--files-from={}".format(self.rel(settings.files_list).as_posix()),
                  "-o{}".format(self.rel(settings.pot_file).as_posix()),
                  cwd=self.project.root_dir)

        if settings.pot_file.exists():
            set_encoding(settings.pot_file, settings.encoding)

        # track the regenerated template, not the one before the run
        self.tracker.changes("pot", [settings.pot_file])

class MsgMergeTask(_GettextTask):
    """
    Merge the POT file into every PO file that needs it
    """
    name       = "msgmerge"
    depends_on = ["gettext::xgettext"]

    class Settings(GettextSettings):
        pot_file     : pl.Path
        i18n_dir     : pl.Path
        plural_forms : str = DEFAULT_PLURALS

    def build_settings(self, cfg:TaskConfig) -> Settings:
        return MsgMergeTask.Settings(cmd=cfg.as_str("cmd", "msgmerge"),
                                     args=cfg.as_list("args", MSGMERGE_ARGS),
                                     encoding=cfg.as_str("encoding", DEFAULT_ENCODING),
                                     pot_file=cfg.as_path("pot_file", DEFAULT_POT),
                                     i18n_dir=cfg.as_path("i18n_dir", DEFAULT_I18N),
                                     plural_forms=cfg.as_str("plural_forms", DEFAULT_PLURALS),
                                     )

    def execute(self):
        settings = self.settings
        pot      = settings.pot_file
        if not pot.is_file():
            raise TaskFailed("Template not found: %s", pot, task=self.fullname())

        pot_changed = self.tracker.has_changed("pot", [pot])
        changes     = self.tracker.changes("po", po_files(settings.i18n_dir))
        targets     = merge_set(pot_changed, changes, settings.i18n_dir)
        if not bool(targets):
            printer.info("No changes detected skipping msgmerge")
            return

        for po in targets:
            self.merge(po, pot)

        # merging rewrote the PO files, stage their new state
        self.tracker.changes("po", po_files(settings.i18n_dir))

    def merge(self, po:pl.Path, pot:pl.Path) -> None:
        settings = self.settings
        locale_of(po)
        if po.stat().st_size == 0:
            logging.info("Seeding empty PO file from template: %s", po)
            shutil.copyfile(pot, po)

        shell.run(settings.cmd,
                  *settings.args,
                  *self.verbose_args(),
                  "--update",
                  "--lang={}".format(po.stem),
                  self.rel(po).as_posix(),
                  self.rel(pot).as_posix(),
                  cwd=self.project.root_dir)

        set_encoding(po, settings.encoding)
        update_header(po, pot, settings.encoding, settings.plural_forms)
        printer.info("Merged: %s", self.rel(po))

class MsgFmtTask(_GettextTask):
    """
    Compile PO files into java resource bundle classes.
    With check_translated, any untranslated message fails the build,
    including a partially translated catalog reported by msgfmt --statistics.
    """
    name       = "msgfmt"
    depends_on = ["gettext::msgmerge"]

    class Settings(GettextSettings):
        i18n_dir         : pl.Path
        po_pattern       : str
        target_bundle    : str
        output_dir       : pl.Path
        check_translated : bool

    def build_settings(self, cfg:TaskConfig) -> Settings:
        return MsgFmtTask.Settings(cmd=cfg.as_str("cmd", "msgfmt"),
                                   args=cfg.as_list("args", MSGFMT_ARGS),
                                   encoding=cfg.as_str("encoding", DEFAULT_ENCODING),
                                   i18n_dir=cfg.as_path("i18n_dir", DEFAULT_I18N),
                                   po_pattern=cfg.as_str("po_pattern", "**/*.po"),
                                   target_bundle=cfg.as_str("target_bundle", DEFAULT_BUNDLE),
                                   output_dir=cfg.as_path("output_dir", "${build}/classes/java/main"),
                                   check_translated=cfg.as_bool("check_translated", True),
                                   )

    def po_sources(self) -> list[pl.Path]:
        if not self.settings.i18n_dir.is_dir():
            return []
        return sorted(x for x in self.settings.i18n_dir.glob(self.settings.po_pattern) if x.is_file())

    def artifact(self, po:pl.Path) -> pl.Path:
        return artifact_path(self.settings.output_dir, self.settings.target_bundle, str(locale_of(po)))

    def execute(self):
        settings          = self.settings
        sources           = self.po_sources()
        removed, compile  = compile_delta(self.tracker.changes("po", sources))
        # unchanged sources whose output has gone missing
        compile          += [x for x in sources if x not in compile and not self.artifact(x).exists()]

        for po in removed:
            self.remove_artifact(po)

        if bool(compile):
            settings.output_dir.mkdir(parents=True, exist_ok=True)

        for po in compile:
            self.compile(po)

    def remove_artifact(self, po:pl.Path) -> None:
        target = self.artifact(po)
        if target.exists():
            target.unlink()
            printer.info("Removed: %s", self.rel(target))

    def compile(self, po:pl.Path) -> None:
        settings = self.settings
        locale   = locale_of(po)
        result   = shell.run(settings.cmd,
                             *settings.args,
                             *self.verbose_args(),
                             "-d", self.rel(settings.output_dir).as_posix(),
                             "-r", settings.target_bundle,
                             "-l", str(locale),
                             "--statistics",
                             self.rel(po).as_posix(),
                             cwd=self.project.root_dir,
                             echo=False)

        verdict, text = classify_msgfmt_output(result.stderr, name=po.name, strict=settings.check_translated)
        match verdict:
            case Verdict_e.error:
                printer.error("%s", text)
            case Verdict_e.info:
                printer.info("%s", text)
            case Verdict_e.silent:
                pass

class PropertiesTask(_GettextTask):
    """
    Write the i18n properties naming the target bundle
    """
    name = "properties"

    class Settings(GettextSettings):
        target_bundle    : str
        properties_file  : pl.Path
        default_file     : pl.Path

    def build_settings(self, cfg:TaskConfig) -> Settings:
        bundle = cfg.as_str("target_bundle", DEFAULT_BUNDLE)
        return PropertiesTask.Settings(encoding=cfg.as_str("encoding", DEFAULT_ENCODING),
                                       target_bundle=bundle,
                                       properties_file=cfg.as_path("properties_file", "${build}/resources/main/i18n.properties"),
                                       default_file=cfg.as_path("default_file", "${build}/resources/main/{}.properties".format(bundle.replace(".", "/"))),
                                       )

    def execute(self):
        settings = self.settings
        settings.properties_file.parent.mkdir(parents=True, exist_ok=True)
        settings.properties_file.write_text("basename = {}".format(settings.target_bundle), encoding=settings.encoding)
        settings.default_file.parent.mkdir(parents=True, exist_ok=True)
        if not settings.default_file.exists():
            settings.default_file.touch()
        printer.info("Wrote: %s", self.rel(settings.properties_file))

class GettextAll(AggregateTask):
    """
    Run every gettext task
    """
    group      = "gettext"
    name       = "all"
    depends_on = ["gettext::xgettext", "gettext::msgmerge", "gettext::msgfmt", "gettext::properties"]
