#!/usr/bin/env python3
"""
Deriving locales from PO file names.

A name is `lang[_region[_variant]][@variant][#script]`, eg:
- de.po          -> de
- pt_BR.po       -> pt_BR
- ca_ES_VALENCIA -> ca_ES_VALENCIA
- ca@valencia    -> invalid, 'valencia' is not a region
- sr_RS#Latn     -> sr_RS_#Latn

The string form matches what java's Locale.toString produces,
as that is what msgfmt --java2 names bundle classes with.
"""
##-- imports
from __future__ import annotations

import logging as logmod
import pathlib as pl
import re
from dataclasses import dataclass
from typing import Final

from babel import Locale, UnknownLocaleError

from crowtasks.errors import LocaleError
##-- end imports

##-- logging
logging = logmod.getLogger(__name__)
##-- end logging

MAX_TOKENS   : Final[int]        = 3
TOKEN_SEP    : Final[str]        = "_"
VARIANT_SEP  : Final[str]        = "@"
SCRIPT_SEP   : Final[str]        = "#"

LANGUAGE_RE  : Final[re.Pattern] = re.compile(r"^[a-zA-Z]{2,8}$")
REGION_RE    : Final[re.Pattern] = re.compile(r"^([a-zA-Z]{2}|[0-9]{3})$")
VARIANT_RE   : Final[re.Pattern] = re.compile(r"^([0-9a-zA-Z]{5,8}|[0-9][0-9a-zA-Z]{3})$")
SCRIPT_RE    : Final[re.Pattern] = re.compile(r"^[a-zA-Z]{4}$")

@dataclass(frozen=True)
class LocaleId:
    language : str
    region   : str = ""
    variant  : str = ""
    script   : str = ""

    def __str__(self):
        result = [self.language]
        if bool(self.region) or (bool(self.language) and (bool(self.variant) or bool(self.script))):
            result += [TOKEN_SEP, self.region]

        if bool(self.variant):
            result += [TOKEN_SEP, self.variant]

        if bool(self.script):
            result += [TOKEN_SEP, SCRIPT_SEP, self.script]

        return "".join(result)

    @property
    def babel_id(self) -> str:
        """ The identifier babel uses for the same locale """
        return "_".join(x for x in [self.language, self.script, self.region, self.variant] if bool(x))

def _split(stem:str) -> tuple[list[str], str]:
    script = ""
    if SCRIPT_SEP in stem:
        stem, script = stem.split(SCRIPT_SEP, 1)

    tokens = stem.split(TOKEN_SEP)
    if len(tokens) < MAX_TOKENS:
        *head, last = tokens
        tokens = [*head, *last.split(VARIANT_SEP, 1)]

    return tokens, script

def _validate_form(name:str, value:str, pattern:re.Pattern, kind:str) -> None:
    if bool(value) and not pattern.match(value):
        raise LocaleError("Ill-formed %s '%s' in locale of file: %s", kind, value, name)

def _canonical(tokens:list[str], script:str) -> LocaleId:
    match tokens:
        case [lang]:
            return LocaleId(lang.lower(), script=script.title())
        case [lang, region]:
            return LocaleId(lang.lower(), region=region.upper(), script=script.title())
        case [lang, region, variant]:
            return LocaleId(lang.lower(), region=region.upper(), variant=variant, script=script.title())
        case _:
            raise LocaleError("Unexpected locale token count: %s", tokens)

def _check_known(name:str, locale:LocaleId) -> None:
    try:
        found = Locale.parse(locale.babel_id)
    except (UnknownLocaleError, ValueError) as err:
        raise LocaleError("Unknown locale '%s' for file: %s", str(locale), name) from err

    if found.language != locale.language or (bool(locale.region) and found.territory != locale.region):
        raise LocaleError("Unknown locale '%s' for file: %s", str(locale), name)

def parse_locale(name:str) -> LocaleId:
    """ Parse a PO file's stem into a locale known to the locale database """
    tokens, script = _split(name)
    if len(tokens) > MAX_TOKENS:
        raise LocaleError("Too many locale tokens (%s) in file name: %s", len(tokens), name)

    if not bool(tokens[0]):
        raise LocaleError("No language in locale of file: %s", name)

    locale = _canonical(tokens, script)
    _validate_form(name, locale.language, LANGUAGE_RE, "language")
    _validate_form(name, locale.region, REGION_RE, "region")
    _validate_form(name, locale.variant, VARIANT_RE, "variant")
    _validate_form(name, locale.script, SCRIPT_RE, "script")
    _check_known(name, locale)
    logging.debug("Parsed Locale: %s -> %s", name, locale)
    return locale

def locale_of(path:pl.Path) -> LocaleId:
    return parse_locale(path.stem)
