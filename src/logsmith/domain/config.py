from __future__ import annotations

"""
Configuration Domain Management.

Builds the built-in default configuration and handles optional JSON
persistence of configurations for the CLI. The logging engine itself never
reads or writes configuration files.
"""

import json
import logging
import os
from typing import Any, Dict

from logsmith.domain import constants as const
from logsmith.domain.models import CategoryEntry, Configuration, FileSettings
from logsmith.validate_config import validate_configuration

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------
def get_default_config() -> Configuration:
    """
    Generate a fresh built-in default configuration.

    Returns:
        Configuration: New instance; safe to mutate.
    """
    return Configuration(
        log_level=const.DEFAULT_LOG_LEVEL,
        write_to_host=const.DEFAULT_WRITE_TO_HOST,
        host_text_colors=dict(const.DEFAULT_HOST_TEXT_COLORS),
        category_info={
            name: CategoryEntry(color=color)
            for name, color in const.DEFAULT_CATEGORY_COLORS.items()
        },
        log_file=FileSettings(
            name=const.DEFAULT_LOG_FILE_NAME,
            include_date_in_name=const.DEFAULT_INCLUDE_DATE_IN_FILE_NAME,
            overwrite_on_first_write=const.DEFAULT_OVERWRITE_LOG_FILE,
        ),
        message_format=const.DEFAULT_MESSAGE_FORMAT,
    )

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_configuration(path: str) -> Configuration:
    """
    Load a configuration from a JSON file.

    Missing keys are taken from the defaults and unknown keys are ignored.
    A missing, unreadable or corrupted file yields the defaults. Values that
    are present but invalid raise ValidationError.

    Args:
        path: JSON file to read.

    Returns:
        Configuration: The validated configuration.
    """
    defaults = get_default_config()

    if not os.path.exists(path):
        logger.debug(f"Config file not found at {path}. Returning defaults.")
        return defaults

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to load config from {path}: {e}. Using defaults.")
        return defaults

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Using defaults.")
        return defaults

    merged: Dict[str, Any] = defaults.to_dict()
    for key in merged:
        if key not in data:
            continue
        if key == "log_file" and isinstance(data[key], dict):
            merged[key].update(data[key])
        else:
            merged[key] = data[key]

    ignored = sorted(set(data) - set(merged))
    if ignored:
        logger.info(f"Ignoring unknown configuration keys: {ignored}")

    return validate_configuration(merged)


def save_configuration(config: Configuration, path: str) -> None:
    """
    Persist a configuration as JSON.

    Args:
        config: Configuration to save.
        path: Target JSON file; parent directories are created.
    """
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, ensure_ascii=False, indent=4)
    logger.debug(f"Configuration saved to {path}")
