#!/usr/bin/env python3
"""
The crowtasks cli runner
"""
from __future__ import annotations

import logging as logmod

##-- logging
logging         = logmod.root
logging.setLevel(logmod.WARNING)
##-- end logging

def main():
    from crowtasks.control.main import main as crow_main
    crow_main()

if __name__ == "__main__":
    main()
