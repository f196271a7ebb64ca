from __future__ import annotations

"""
Main Entry Point.

Allows running the command line interface as a script or with
'python -m logsmith.main'.
"""

import os
import sys

# Path visibility when executed as a plain script from a source checkout
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
if not getattr(sys, 'frozen', False):
    SRC_DIR = os.path.dirname(BASE_DIR)
    if SRC_DIR not in sys.path:
        sys.path.insert(0, SRC_DIR)

from logsmith.interface.cli.app import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
