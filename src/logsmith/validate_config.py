from __future__ import annotations

"""
Configuration Validation and Normalization.

Strict validators shared by the configuration store, the dispatcher and the
CLI. Every helper either returns a normalized value or raises
ValidationError before any state has been touched.
"""

import logging
import os
from collections.abc import Mapping, Sequence
from typing import Any, Dict, Optional

from logsmith.domain.constants import (
    CONSOLE_COLORS,
    MESSAGE_LEVELS,
    SeverityLevel,
    canonical_color,
)
from logsmith.domain.errors import ValidationError
from logsmith.domain.models import CategoryEntry, Configuration, FileSettings

logger = logging.getLogger(__name__)

_CONFIG_KEYS = (
    "log_level",
    "write_to_host",
    "host_text_colors",
    "category_info",
    "log_file",
    "message_format",
)
_FILE_KEYS = ("name", "include_date_in_name", "overwrite_on_first_write")
_CATEGORY_KEYS = {"color": "color", "isdefault": "is_default"}

# Characters Windows refuses in any path component
_WINDOWS_INVALID_CHARS = set('<>"|?*')

# -----------------------------------------------------------------------------
# SCALAR VALIDATORS
# -----------------------------------------------------------------------------

def parse_severity(value: Any, field: str = "log_level", *, allow_off: bool = True) -> SeverityLevel:
    """
    Convert a severity name (or SeverityLevel) into a SeverityLevel.

    Args:
        value: Name such as 'Warning' (any case) or a SeverityLevel member.
        field: Option name reported on failure.
        allow_off: Whether OFF is acceptable (thresholds only).

    Returns:
        SeverityLevel: The parsed level.

    Raises:
        ValidationError: If the value names no acceptable level.
    """
    levels = list(SeverityLevel) if allow_off else MESSAGE_LEVELS
    allowed = [level.display_name for level in levels]

    level: Optional[SeverityLevel] = None
    if isinstance(value, SeverityLevel):
        level = value
    elif isinstance(value, str):
        level = SeverityLevel.lookup(value)

    if level is None or level not in levels:
        raise ValidationError(
            f"Invalid {field} {value!r}. Valid values: {', '.join(allowed)}.",
            field=field,
            value=value,
            allowed=allowed,
        )
    return level


def parse_color(value: Any, field: str = "color") -> str:
    """Validate a console color name and return its canonical spelling."""
    color = canonical_color(value)
    if color is None:
        allowed = list(CONSOLE_COLORS)
        raise ValidationError(
            f"Invalid {field} {value!r}. Valid colors: {', '.join(allowed)}.",
            field=field,
            value=value,
            allowed=allowed,
        )
    return color


def parse_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    raise ValidationError(
        f"Invalid {field}: expected bool, got {type(value).__name__}.",
        field=field,
        value=value,
    )


def parse_message_format(value: Any, field: str = "message_format") -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    raise ValidationError(
        f"Invalid {field}: expected str, got {type(value).__name__}.",
        field=field,
        value=value,
    )


def is_valid_path_syntax(path: str) -> bool:
    """
    Check whether a string can name a filesystem path at all.

    Existence and permissions are not checked; only the syntax.
    """
    if "\x00" in path:
        return False

    if os.name == "nt":
        drive, rest = os.path.splitdrive(path)
        if drive and ":" in drive and not (len(drive) == 2 and drive[0].isalpha()):
            return False
        if ":" in rest:
            return False
        if any(ch in _WINDOWS_INVALID_CHARS or ord(ch) < 32 for ch in rest):
            return False

    try:
        os.path.abspath(path)
    except (TypeError, ValueError):
        return False
    return True


def validate_file_path(value: Any, field: str = "log_file.name") -> str:
    """
    Validate an explicitly supplied log file name.

    Blank names are legal and disable the file sink.

    Raises:
        ValidationError: If the value is not a string or is not a valid path.
    """
    if value is None:
        return ""
    if isinstance(value, os.PathLike):
        value = os.fspath(value)
    if not isinstance(value, str):
        raise ValidationError(
            f"Invalid {field}: expected str, got {type(value).__name__}.",
            field=field,
            value=value,
        )
    if value.strip() and not is_valid_path_syntax(value):
        raise ValidationError(
            f"Invalid {field} {value!r}: not a valid file path.",
            field=field,
            value=value,
        )
    return value

# -----------------------------------------------------------------------------
# SWITCH GROUPS
# -----------------------------------------------------------------------------

def resolve_switch(
        group: str,
        on_name: str,
        on: Optional[bool],
        off_name: str,
        off: Optional[bool],
) -> Optional[bool]:
    """
    Resolve a pair of logically opposite switches.

    Args:
        group: Name of the switch group, reported on conflict.
        on_name: Name of the switch meaning True.
        on: Whether that switch was given.
        off_name: Name of the switch meaning False.
        off: Whether that switch was given.

    Returns:
        Optional[bool]: True, False, or None when neither switch was given.

    Raises:
        ValidationError: If both switches were given.
    """
    if on and off:
        raise ValidationError(
            f"Only one of {on_name} and {off_name} may be set ({group}).",
            field=group,
            value=[on_name, off_name],
            allowed=[on_name, off_name],
        )
    if on:
        return True
    if off:
        return False
    return None


def resolve_one_of(group: str, switches: Dict[str, Optional[bool]]) -> Optional[str]:
    """
    Return the single switch name set to True in a group, or None.

    Raises:
        ValidationError: If more than one switch in the group is set.
    """
    chosen = [name for name, flag in switches.items() if flag]
    if len(chosen) > 1:
        raise ValidationError(
            f"Only one of {', '.join(switches)} may be set ({group}); got {', '.join(chosen)}.",
            field=group,
            value=chosen,
            allowed=list(switches),
        )
    return chosen[0] if chosen else None

# -----------------------------------------------------------------------------
# COMPOSITE VALIDATORS
# -----------------------------------------------------------------------------

def parse_category_entry(value: Any, key: str) -> CategoryEntry:
    """
    Validate one category entry.

    Accepts a CategoryEntry or a mapping with 'color' and/or 'is_default'
    (key spelling is case and underscore insensitive).
    """
    field = f"category_info[{key!r}]"
    if isinstance(value, CategoryEntry):
        color, is_default = value.color, value.is_default
    elif isinstance(value, Mapping):
        normalized: Dict[str, Any] = {}
        for raw_key, item in value.items():
            attr = _CATEGORY_KEYS.get(str(raw_key).replace("_", "").lower())
            if attr is None:
                raise ValidationError(
                    f"Invalid {field}: unknown key {raw_key!r}.",
                    field=field,
                    value=raw_key,
                    allowed=list(_CATEGORY_KEYS.values()),
                )
            normalized[attr] = item
        color, is_default = normalized.get("color"), normalized.get("is_default")
    else:
        raise ValidationError(
            f"Invalid {field}: expected a mapping, got {type(value).__name__}.",
            field=field,
            value=value,
        )

    if color is not None:
        color = parse_color(color, f"{field}.color")
    if is_default is not None:
        is_default = parse_bool(is_default, f"{field}.is_default")
    return CategoryEntry(color=color, is_default=is_default)


def parse_category_items(items: Any) -> Dict[str, CategoryEntry]:
    """
    Validate a category upsert request.

    Accepts either a mapping of several categories or a single
    (key, entry) pair.

    Returns:
        Dict[str, CategoryEntry]: Entries keyed by category name, in input order.

    Raises:
        ValidationError: On any malformed shape or value.
    """
    if isinstance(items, Mapping):
        pairs = list(items.items())
    elif isinstance(items, Sequence) and not isinstance(items, (str, bytes)):
        if len(items) != 2:
            raise ValidationError(
                f"Invalid category item: expected a (key, entry) pair, got {len(items)} elements.",
                field="category_info_item",
                value=items,
            )
        pairs = [(items[0], items[1])]
    else:
        raise ValidationError(
            f"Invalid category item: expected a mapping or a (key, entry) pair, "
            f"got {type(items).__name__}.",
            field="category_info_item",
            value=items,
        )

    parsed: Dict[str, CategoryEntry] = {}
    for key, entry in pairs:
        if not isinstance(key, str) or not key.strip():
            raise ValidationError(
                f"Invalid category key {key!r}: expected a non-empty str.",
                field="category_info_item",
                value=key,
            )
        parsed[key] = parse_category_entry(entry, key)
    return parsed


def parse_host_text_colors(value: Any) -> Dict[SeverityLevel, str]:
    """Validate a severity-to-color mapping."""
    if not isinstance(value, Mapping):
        raise ValidationError(
            f"Invalid host_text_colors: expected a mapping, got {type(value).__name__}.",
            field="host_text_colors",
            value=value,
        )
    colors: Dict[SeverityLevel, str] = {}
    for level, color in value.items():
        parsed = parse_severity(level, "host_text_colors key", allow_off=False)
        colors[parsed] = parse_color(color, f"host_text_colors[{parsed.display_name}]")
    return colors


def parse_file_settings(value: Any) -> FileSettings:
    if isinstance(value, FileSettings):
        raw = {
            "name": value.name,
            "include_date_in_name": value.include_date_in_name,
            "overwrite_on_first_write": value.overwrite_on_first_write,
        }
    elif isinstance(value, Mapping):
        unknown = [k for k in value if k not in _FILE_KEYS]
        if unknown:
            raise ValidationError(
                f"Invalid log_file: unknown keys {unknown}.",
                field="log_file",
                value=unknown,
                allowed=list(_FILE_KEYS),
            )
        raw = dict(value)
    else:
        raise ValidationError(
            f"Invalid log_file: expected a mapping, got {type(value).__name__}.",
            field="log_file",
            value=value,
        )

    defaults = FileSettings()
    return FileSettings(
        name=validate_file_path(raw.get("name", defaults.name)),
        include_date_in_name=parse_bool(
            raw.get("include_date_in_name", defaults.include_date_in_name),
            "log_file.include_date_in_name",
        ),
        overwrite_on_first_write=parse_bool(
            raw.get("overwrite_on_first_write", defaults.overwrite_on_first_write),
            "log_file.overwrite_on_first_write",
        ),
    )


def validate_configuration(config: Any) -> Configuration:
    """
    Validate and normalize a whole configuration.

    Accepts a Configuration or a mapping of the same shape. Keys missing from
    a mapping take the model defaults; nothing is merged from any prior state.

    Returns:
        Configuration: A new, normalized instance sharing nothing with the input.

    Raises:
        ValidationError: On the first invalid field.
    """
    if isinstance(config, Configuration):
        raw: Dict[str, Any] = {
            "log_level": config.log_level,
            "write_to_host": config.write_to_host,
            "host_text_colors": config.host_text_colors,
            "category_info": config.category_info,
            "log_file": config.log_file,
            "message_format": config.message_format,
        }
    elif isinstance(config, Mapping):
        unknown = [k for k in config if k not in _CONFIG_KEYS]
        if unknown:
            raise ValidationError(
                f"Invalid configuration: unknown keys {unknown}.",
                field="configuration",
                value=unknown,
                allowed=list(_CONFIG_KEYS),
            )
        raw = dict(config)
    else:
        raise ValidationError(
            f"Invalid configuration: expected Configuration or mapping, got {type(config).__name__}.",
            field="configuration",
            value=config,
        )

    defaults = Configuration()
    category_info = raw.get("category_info", {})
    if not isinstance(category_info, Mapping):
        raise ValidationError(
            f"Invalid category_info: expected a mapping, got {type(category_info).__name__}.",
            field="category_info",
            value=category_info,
        )
    categories = parse_category_items(category_info) if category_info else {}
    flagged = [name for name, entry in categories.items() if entry.is_default]
    if len(flagged) > 1:
        raise ValidationError(
            f"Invalid category_info: at most one default category allowed, got {flagged}.",
            field="category_info",
            value=flagged,
        )

    validated = Configuration(
        log_level=parse_severity(raw.get("log_level", defaults.log_level)),
        write_to_host=parse_bool(raw.get("write_to_host", defaults.write_to_host), "write_to_host"),
        host_text_colors=parse_host_text_colors(raw.get("host_text_colors", {})),
        category_info=categories,
        log_file=parse_file_settings(raw.get("log_file", FileSettings())),
        message_format=parse_message_format(raw.get("message_format", defaults.message_format)),
    )
    logger.debug(f"Configuration validated: level={validated.log_level.display_name}")
    return validated
