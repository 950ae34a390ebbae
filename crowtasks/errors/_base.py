#!/usr/bin/env python3
"""
The root of the crowtasks error hierarchy.
"""
from __future__ import annotations

class CrowError(Exception):
    """
      Every crowtasks error.
      The message is args[0], %-formatted with the rest of args when printed.
    """
    general_msg = "Crowtasks Error:"

    def __str__(self):
        try:
            return self.args[0] % self.args[1:]
        except (TypeError, ValueError, IndexError):
            return str(self.args)

class UserError(CrowError):
    """ Errors the user can fix, such as a bad config """
    general_msg = "User Error:"
