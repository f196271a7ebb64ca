from __future__ import annotations

"""
Log File Path Resolution.

Resolution happens in two steps. The configured name is rooted once, when
the name itself is set, giving the undated base path. Every later refresh
only stamps the date onto that stored base, so the path never depends on
which code happens to emit a message. A change of the resulting path is the
only event that re-arms the overwrite-on-first-write behavior.
"""

import logging
import os
from datetime import date
from typing import Optional, Tuple

from logsmith.core.formatting.timestamp import format_date_stamp
from logsmith.domain.models import FileSettings
from logsmith.infra.fs import PathRooting

logger = logging.getLogger(__name__)


class LogFilePathResolver:
    """
    Resolves FileSettings to the path the file sink writes to.

    Args:
        rooting: Resolver for relative file names.
    """

    def __init__(self, rooting: Optional[PathRooting] = None):
        self.rooting = rooting or PathRooting()

    def resolve_base(self, settings: FileSettings) -> str:
        """
        Root the configured file name, without the date stamp.

        Returns:
            str: Absolute path, or '' for a blank or unresolvable name
            (no file sink).
        """
        name = settings.name or ""
        if not name.strip():
            return ""
        try:
            return self.rooting.absolute_path(name)
        except (TypeError, ValueError, OSError) as e:
            logger.debug(f"Cannot resolve log file name {name!r}: {e}")
            return ""

    def resolve(
            self,
            settings: FileSettings,
            base_path: str,
            previous_path: str,
            today: Optional[date] = None,
    ) -> Tuple[str, bool]:
        """
        Resolve the effective log file path from a stored base path.

        Args:
            settings: Current file settings.
            base_path: Result of resolve_base for the current name.
            previous_path: Path resolved last time ('' if none).
            today: Date used for the stamp; defaults to the local date.

        Returns:
            Tuple[str, bool]: (new path or '' for no file sink,
            True if the path differs from previous_path).
        """
        new_path = base_path or ""
        if new_path and settings.include_date_in_name:
            new_path = insert_date_stamp(new_path, today or date.today())

        changed = new_path != (previous_path or "")
        if changed:
            logger.debug(f"Log file path changed: {previous_path!r} -> {new_path!r}")
        return new_path, changed


def insert_date_stamp(path: str, day: date) -> str:
    """
    Insert '_yyyyMMdd' between the file name stem and its extension.

    'logs/run.log' -> 'logs/run_20240131.log'; 'logs/run' -> 'logs/run_20240131'.
    """
    directory, filename = os.path.split(path)
    stem, ext = os.path.splitext(filename)
    stamped = f"{stem}_{format_date_stamp(day)}{ext}"
    return os.path.join(directory, stamped)
