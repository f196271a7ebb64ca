from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides the log file write primitives and the rooting of relative log file
names. Writes are synchronous, UTF-8, one line per call, terminated with the
platform newline.
"""

import os
import sys
from typing import Optional

from logsmith.infra.caller import find_external_frame

# -----------------------------------------------------------------------------
# FILE WRITE API
# -----------------------------------------------------------------------------

class FileWriter:
    """
    Default file sink primitive.

    Neither method creates missing directories; failures surface as
    OSError (or ValueError for unusable paths) to the caller.
    """

    def overwrite(self, path: str, text: str) -> None:
        """Replace the file content with a single line."""
        with open(path, "w", encoding="utf-8") as f:
            f.write(f"{text}\n")

    def append(self, path: str, text: str) -> None:
        """Append a single line, creating the file if needed."""
        with open(path, "a", encoding="utf-8") as f:
            f.write(f"{text}\n")

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

class PathRooting:
    """
    Resolves relative log file names to absolute paths.

    Relative names are rooted at `base_dir` when one is given; otherwise at
    the directory of the source file of the nearest caller outside this
    package, falling back to the current working directory for interactive
    callers.
    """

    def __init__(self, base_dir: Optional[str] = None):
        self.base_dir = os.path.abspath(base_dir) if base_dir else None

    def absolute_path(self, path: str) -> str:
        expanded = os.path.expandvars(os.path.expanduser(path))
        if os.path.isabs(expanded):
            return os.path.normpath(expanded)
        return os.path.normpath(os.path.join(self.caller_directory(), expanded))

    def caller_directory(self) -> str:
        if self.base_dir:
            return self.base_dir

        frame = find_external_frame()
        try:
            filename = frame.f_code.co_filename if frame is not None else ""
        finally:
            del frame

        if filename and not filename.startswith("<") and os.path.exists(filename):
            return os.path.dirname(os.path.abspath(filename))

        # Frozen executables report paths inside the bundle
        if getattr(sys, "frozen", False):
            return os.path.dirname(os.path.abspath(sys.executable))
        return os.getcwd()
