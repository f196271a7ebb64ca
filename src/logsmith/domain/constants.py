from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides centralized access to the severity scale, the recognized template
fields, the console color palette and the built-in configuration defaults.
"""

from enum import Enum, IntEnum
from typing import Dict, List, Optional

# -----------------------------------------------------------------------------
# SEVERITY SCALE
# -----------------------------------------------------------------------------

class SeverityLevel(IntEnum):
    """
    Ordered message severity. Lower values carry higher priority.

    OFF is only meaningful as a threshold; no message is ever logged at OFF.
    """
    OFF = 0
    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    DEBUG = 4
    VERBOSE = 5

    @property
    def display_name(self) -> str:
        return _SEVERITY_DISPLAY_NAMES[self]

    @classmethod
    def lookup(cls, name: str) -> Optional["SeverityLevel"]:
        """Case-insensitive lookup by name; None when unknown."""
        if not isinstance(name, str):
            return None
        return _SEVERITY_BY_KEY.get(name.strip().lower())


_SEVERITY_DISPLAY_NAMES: Dict[SeverityLevel, str] = {
    SeverityLevel.OFF: "Off",
    SeverityLevel.ERROR: "Error",
    SeverityLevel.WARNING: "Warning",
    SeverityLevel.INFORMATION: "Information",
    SeverityLevel.DEBUG: "Debug",
    SeverityLevel.VERBOSE: "Verbose",
}

_SEVERITY_BY_KEY: Dict[str, SeverityLevel] = {
    name.lower(): level for level, name in _SEVERITY_DISPLAY_NAMES.items()
}

# Levels a message may actually carry
MESSAGE_LEVELS: List[SeverityLevel] = [
    SeverityLevel.ERROR,
    SeverityLevel.WARNING,
    SeverityLevel.INFORMATION,
    SeverityLevel.DEBUG,
    SeverityLevel.VERBOSE,
]

# -----------------------------------------------------------------------------
# TEMPLATE FIELDS
# -----------------------------------------------------------------------------

class FieldName(str, Enum):
    """Placeholders recognized inside a message format."""
    MESSAGE = "Message"
    TIMESTAMP = "Timestamp"
    CALLER_NAME = "CallerName"
    CATEGORY = "Category"
    MESSAGE_LEVEL = "MessageLevel"


# Placeholder spellings (lower-case) mapped to their field
FIELD_ALIASES: Dict[str, FieldName] = {
    "message": FieldName.MESSAGE,
    "timestamp": FieldName.TIMESTAMP,
    "callername": FieldName.CALLER_NAME,
    "category": FieldName.CATEGORY,
    "messagelevel": FieldName.MESSAGE_LEVEL,
    "severitylevel": FieldName.MESSAGE_LEVEL,
}

DEFAULT_TIMESTAMP_PATTERN = "yyyy-MM-dd hh:mm:ss.fff"

# -----------------------------------------------------------------------------
# CONSOLE COLORS
# -----------------------------------------------------------------------------

# Canonical console color names and their rich style equivalents
CONSOLE_COLORS: Dict[str, str] = {
    "Black": "black",
    "DarkBlue": "blue",
    "DarkGreen": "green",
    "DarkCyan": "cyan",
    "DarkRed": "red",
    "DarkMagenta": "magenta",
    "DarkYellow": "yellow",
    "Gray": "white",
    "DarkGray": "bright_black",
    "Blue": "bright_blue",
    "Green": "bright_green",
    "Cyan": "bright_cyan",
    "Red": "bright_red",
    "Magenta": "bright_magenta",
    "Yellow": "bright_yellow",
    "White": "bright_white",
}

_COLOR_BY_KEY: Dict[str, str] = {name.lower(): name for name in CONSOLE_COLORS}


def canonical_color(name: str) -> Optional[str]:
    """Return the canonical spelling of a console color, or None if unknown."""
    if not isinstance(name, str):
        return None
    return _COLOR_BY_KEY.get(name.strip().lower())

# -----------------------------------------------------------------------------
# BUILT-IN DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_LOG_LEVEL = SeverityLevel.INFORMATION
DEFAULT_LOG_FILE_NAME = "Results.log"
DEFAULT_INCLUDE_DATE_IN_FILE_NAME = True
DEFAULT_OVERWRITE_LOG_FILE = True
DEFAULT_WRITE_TO_HOST = True
DEFAULT_MESSAGE_FORMAT = (
    "{Timestamp:yyyy-MM-dd hh:mm:ss.fff} | {CallerName} | {Category} | {MessageLevel} | {Message}"
)

DEFAULT_HOST_TEXT_COLORS: Dict[SeverityLevel, str] = {
    SeverityLevel.ERROR: "DarkRed",
    SeverityLevel.WARNING: "DarkYellow",
    SeverityLevel.INFORMATION: "DarkCyan",
    SeverityLevel.DEBUG: "White",
    SeverityLevel.VERBOSE: "White",
}

DEFAULT_CATEGORY_COLORS: Dict[str, str] = {
    "Progress": "DarkCyan",
    "Success": "Green",
    "Failure": "Red",
    "PartialFailure": "Yellow",
}

# Sentinels returned by the caller name lookup
CONSOLE_CALLER = "[CONSOLE]"
UNKNOWN_CALLER = "[UNKNOWN CALLER]"
