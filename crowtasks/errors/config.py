#!/usr/bin/env python3
"""

"""
# Imports:
from __future__ import annotations

# ##-- stdlib imports
import logging as logmod

# ##-- end stdlib imports

##-- logging
logging = logmod.getLogger(__name__)
##-- end logging

from ._base import UserError

class ConfigError(UserError):
    """ The config was loaded, but a value in it was unusable """
    general_msg = "Config Error:"

class InvalidConfigError(ConfigError):
    """ Trying to read the crowtasks toml, something went wrong. """
    general_msg = "Invalid Config:"

class LocaleError(ConfigError):
    """ A PO file name could not be turned into a known locale """
    general_msg = "Locale Error:"
