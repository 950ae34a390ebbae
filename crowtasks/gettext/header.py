#!/usr/bin/env python3
"""
Textual patching of PO/POT header fields.
"""
##-- imports
from __future__ import annotations

import logging as logmod
import pathlib as pl
import re
from typing import Final
##-- end imports

##-- logging
logging = logmod.getLogger(__name__)
##-- end logging

CHARSET_MARKER      : Final[bytes]      = b"Content-Type: text/plain; charset="
CHARSET_PLACEHOLDER : Final[bytes]      = b"CHARSET"
CREATION_DATE_START : Final[str]        = '"POT-Creation-Date:'
CREATION_DATE_RE    : Final[re.Pattern] = re.compile(r".*POT-Creation-Date:.*")
PLURAL_PLACEHOLDER  : Final[str]        = '"Plural-Forms: nplurals=INTEGER; plural=EXPRESSION;\\n"'
PLURAL_TEMPLATE     : Final[str]        = '"Plural-Forms: {}\\n"'
DEFAULT_PLURALS     : Final[str]        = "nplurals=2; plural=(n > 1);"

def set_encoding(path:pl.Path, encoding:str) -> bool:
    """
      Replace the charset placeholder of a catalog header with the given encoding.
      Returns False, changing nothing, if the placeholder isn't there.
    """
    data   = path.read_bytes()
    marker = CHARSET_MARKER + CHARSET_PLACEHOLDER
    index  = data.find(marker)
    if index < 0:
        logging.debug("No charset placeholder in: %s", path)
        return False

    start = index + len(CHARSET_MARKER)
    end   = start + len(CHARSET_PLACEHOLDER)
    path.write_bytes(data[:start] + encoding.encode("ascii") + data[end:])
    return True

def creation_date_line(text:str) -> None|str:
    for line in text.splitlines():
        if line.startswith(CREATION_DATE_START):
            return line

    return None

def update_header(po:pl.Path, pot:pl.Path, encoding:str, plural_forms:str=DEFAULT_PLURALS) -> bool:
    """
      Copy the template's creation date into the PO header,
      and fill in the plural forms placeholder.
      Returns False, changing nothing, if the template has no creation date.
    """
    date_line = creation_date_line(pot.read_text(encoding=encoding))
    if date_line is None:
        logging.debug("No creation date in template: %s", pot)
        return False

    text = po.read_text(encoding=encoding)
    text = CREATION_DATE_RE.sub(lambda _: date_line, text, count=1)
    text = text.replace(PLURAL_PLACEHOLDER, PLURAL_TEMPLATE.format(plural_forms), 1)
    po.write_text(text, encoding=encoding)
    return True
