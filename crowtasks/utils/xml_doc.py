#!/usr/bin/env python3
"""
A small wrapper around an lxml document, for patching IDE project files.
"""
##-- imports
from __future__ import annotations

import logging as logmod
import pathlib as pl

from lxml import etree

from crowtasks.errors import TaskFailed
##-- end imports

##-- logging
logging = logmod.getLogger(__name__)
##-- end logging

class XmlDoc:
    """ Parse an xml file, query it with xpath, write it back pretty printed """

    def __init__(self, path:pl.Path):
        self.path = path
        parser    = etree.XMLParser(remove_blank_text=True)
        try:
            self.tree = etree.parse(str(path), parser)
        except (OSError, etree.XMLSyntaxError) as err:
            raise TaskFailed("Could not parse xml file %s : %s", path, err) from err

    def find(self, xpath:str) -> list[etree._Element]:
        return self.tree.xpath(xpath)

    def first(self, *xpaths:str) -> None|etree._Element:
        """ The first match of the first xpath that matches anything """
        for xpath in xpaths:
            match self.find(xpath):
                case [x, *_]:
                    return x
                case _:
                    pass

        return None

    def write(self) -> None:
        self.tree.write(str(self.path), pretty_print=True, xml_declaration=True, encoding="UTF-8")
        logging.debug("Wrote xml: %s", self.path)

def upsert_child(parent:etree._Element, tag:str, **attrs:str) -> etree._Element:
    """ Find the first child with tag and matching attrs, or create it """
    for child in parent.iterchildren(tag):
        if all(child.get(k) == v for k,v in attrs.items()):
            return child

    return etree.SubElement(parent, tag, attrs)

def set_attrs(node:etree._Element, **attrs:str) -> etree._Element:
    for key, val in attrs.items():
        node.set(key, val)

    return node
