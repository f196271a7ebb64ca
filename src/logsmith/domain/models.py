from __future__ import annotations

"""
Configuration Domain Data Models.

Defines the mutable configuration aggregate handed to and returned from the
configuration store, plus the per-session file state. Callers only ever see
deep copies of these objects.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from logsmith.domain.constants import SeverityLevel

# -----------------------------------------------------------------------------
# CONFIGURATION MODELS
# -----------------------------------------------------------------------------

@dataclass
class CategoryEntry:
    """
    Display metadata attached to a message category.

    Attributes:
        color: Console color used on the host for messages in this category.
        is_default: Marks the category applied when a call names none.
    """
    color: Optional[str] = None
    is_default: Optional[bool] = None


@dataclass
class FileSettings:
    """
    Log file destination settings.

    Attributes:
        name: File name or path; blank disables the file sink.
        include_date_in_name: Append '_yyyyMMdd' to the file name stem.
        overwrite_on_first_write: Truncate the file on the first write of a session.
    """
    name: str = ""
    include_date_in_name: bool = False
    overwrite_on_first_write: bool = False


@dataclass
class Configuration:
    """
    The complete logging configuration.

    Attributes:
        log_level: Severity threshold; messages of lower priority are dropped.
        write_to_host: Route to the host (True) or the severity streams (False).
        host_text_colors: Host color per message severity.
        category_info: Category name to display metadata.
        log_file: File sink settings.
        message_format: Template text used to render every message.
    """
    log_level: SeverityLevel = SeverityLevel.INFORMATION
    write_to_host: bool = True
    host_text_colors: Dict[SeverityLevel, str] = field(default_factory=dict)
    category_info: Dict[str, CategoryEntry] = field(default_factory=dict)
    log_file: FileSettings = field(default_factory=FileSettings)
    message_format: str = "{Message}"

    def copy(self) -> "Configuration":
        """Return a deep, independent copy."""
        return copy.deepcopy(self)

    def default_category(self) -> Optional[str]:
        """Name of the category flagged as default, if any."""
        for name, entry in self.category_info.items():
            if entry.is_default:
                return name
        return None

    def category_entry(self, name: str) -> Optional[CategoryEntry]:
        """Look up a category, ignoring case."""
        if name in self.category_info:
            return self.category_info[name]
        wanted = name.lower()
        for key, entry in self.category_info.items():
            if key.lower() == wanted:
                return entry
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-compatible representation."""
        return {
            "log_level": self.log_level.display_name,
            "write_to_host": self.write_to_host,
            "host_text_colors": {
                level.display_name: color for level, color in self.host_text_colors.items()
            },
            "category_info": {
                name: {"color": entry.color, "is_default": entry.is_default}
                for name, entry in self.category_info.items()
            },
            "log_file": {
                "name": self.log_file.name,
                "include_date_in_name": self.log_file.include_date_in_name,
                "overwrite_on_first_write": self.log_file.overwrite_on_first_write,
            },
            "message_format": self.message_format,
        }

# -----------------------------------------------------------------------------
# SESSION STATE
# -----------------------------------------------------------------------------

@dataclass
class SessionFileState:
    """
    Process-lifetime file sink state. Never persisted.

    Attributes:
        base_path: Rooted, undated log file path; set only when the file
            name is set. Empty when no file sink.
        resolved_path: Absolute file path in effect; empty when no file sink.
        has_been_written_this_session: The path was already overwritten once.
    """
    base_path: str = ""
    resolved_path: str = ""
    has_been_written_this_session: bool = False
