from __future__ import annotations

"""
Configuration Store.

Owns the live configuration, its compiled message template and the session
file state. Reads hand out deep copies; writes validate first and only then
mutate, so a rejected call never leaves partial state behind. The compiled
template and the resolved log file path are refreshed only by the changes
that affect them.
"""

import logging
import threading
from datetime import date
from typing import Any, Callable, Dict, Iterable, Optional, Union

from logsmith.core.formatting.template import FormatTemplate, compile_template
from logsmith.core.services.path_resolver import LogFilePathResolver
from logsmith.domain.config import get_default_config
from logsmith.domain.constants import SeverityLevel
from logsmith.domain.models import CategoryEntry, Configuration, SessionFileState
from logsmith.validate_config import (
    parse_bool,
    parse_category_items,
    parse_color,
    parse_host_text_colors,
    parse_message_format,
    parse_severity,
    resolve_switch,
    validate_configuration,
    validate_file_path,
)

logger = logging.getLogger(__name__)

ConfigInput = Union[Configuration, Dict[str, Any]]


class ConfigStore:
    """
    Process-wide configuration state of one MessageLogger.

    Args:
        resolver: Log file path resolver.
        lock: Re-entrant lock shared with the dispatcher.
        defaults_factory: Builds the built-in default configuration.
    """

    def __init__(
            self,
            resolver: Optional[LogFilePathResolver] = None,
            lock: Optional[threading.RLock] = None,
            defaults_factory: Callable[[], Configuration] = get_default_config,
    ):
        self.resolver = resolver or LogFilePathResolver()
        self.lock = lock or threading.RLock()
        self._defaults_factory = defaults_factory
        self._config: Optional[Configuration] = None
        self._template: FormatTemplate = compile_template("")
        self.session = SessionFileState()

    # -------------------------------------------------------------------------
    # Whole-configuration API
    # -------------------------------------------------------------------------

    def get_configuration(self) -> Configuration:
        """Return a deep, independent copy of the active configuration."""
        with self.lock:
            return self._live().copy()

    def set_configuration(self, new_config: ConfigInput) -> None:
        """
        Replace the whole configuration.

        Nothing from the previous configuration is merged in. The input is
        validated before anything changes and copied, so later changes to
        it have no effect on the store.

        Raises:
            ValidationError: If any field is invalid.
        """
        validated = validate_configuration(new_config)
        with self.lock:
            self._apply(validated)
        logger.debug("Configuration replaced")

    def reset_configuration(self) -> None:
        """Restore the built-in defaults."""
        with self.lock:
            self._apply(self._defaults_factory())
        logger.debug("Configuration reset to defaults")

    # -------------------------------------------------------------------------
    # Engine-facing accessors
    # -------------------------------------------------------------------------

    def active_configuration(self) -> Configuration:
        """
        Return the live configuration for read-only use by the engine.

        Callers must hold `lock` and must not mutate the result.
        """
        return self._live()

    @property
    def template(self) -> FormatTemplate:
        with self.lock:
            self._live()
            return self._template

    def refresh_log_file_path(self, today: Optional[date] = None) -> str:
        """
        Recompute the resolved log file path (e.g. after a date change).

        Only the date stamp is applied again; the rooted base path stays as
        it was when the file name was last set.

        Returns:
            str: The path now in effect; '' when there is no file sink.
        """
        with self.lock:
            self._live()
            return self._refresh_path(today)

    def mark_file_written(self) -> None:
        with self.lock:
            self.session.has_been_written_this_session = True

    # -------------------------------------------------------------------------
    # Field setters
    # -------------------------------------------------------------------------

    def set_log_level(self, level: Union[str, SeverityLevel]) -> None:
        parsed = parse_severity(level)
        with self.lock:
            self._live().log_level = parsed

    def set_log_file_name(self, name: Optional[str]) -> None:
        """Set the log file name; '' or None disables the file sink."""
        parsed = validate_file_path(name)
        with self.lock:
            self._live().log_file.name = parsed
            self._root_file_name()
            self._refresh_path()

    def set_include_date_in_file_name(self, include: bool) -> None:
        parsed = parse_bool(include, "log_file.include_date_in_name")
        with self.lock:
            self._live().log_file.include_date_in_name = parsed
            self._refresh_path()

    def set_overwrite_log_file(self, overwrite: bool) -> None:
        parsed = parse_bool(overwrite, "log_file.overwrite_on_first_write")
        with self.lock:
            self._live().log_file.overwrite_on_first_write = parsed

    def set_write_to_host(self, write_to_host: bool) -> None:
        parsed = parse_bool(write_to_host, "write_to_host")
        with self.lock:
            self._live().write_to_host = parsed

    def set_message_format(self, message_format: Optional[str]) -> None:
        parsed = parse_message_format(message_format)
        with self.lock:
            self._live().message_format = parsed
            self._template = compile_template(parsed)

    def set_host_text_color(self, level: Union[str, SeverityLevel], color: str) -> None:
        """Set the host color used for one message severity."""
        parsed_level = parse_severity(level, "host_text_colors key", allow_off=False)
        parsed_color = parse_color(color, f"host_text_colors[{parsed_level.display_name}]")
        with self.lock:
            self._live().host_text_colors[parsed_level] = parsed_color

    def set_host_text_colors(self, colors: Dict[Any, str]) -> None:
        """Set the host colors of several (or all) severities at once."""
        parsed = parse_host_text_colors(colors)
        with self.lock:
            self._live().host_text_colors.update(parsed)

    def set_category_info_items(self, items: Any) -> None:
        """
        Create or replace category entries.

        Args:
            items: A mapping {name: entry} or a single (name, entry) pair.
                Entries are CategoryEntry objects or mappings with 'color'
                and/or 'is_default'.

        Existing entries are replaced wholesale. An entry flagged as default
        removes the flag from every other entry.
        """
        parsed = parse_category_items(items)
        with self.lock:
            self._upsert_categories(parsed)

    def set_category_info_item(self, name: str, entry: Any) -> None:
        self.set_category_info_items((name, entry))

    def remove_category_info_items(self, names: Union[str, Iterable[str]]) -> None:
        """Remove categories by name; unknown names are ignored."""
        keys = [names] if isinstance(names, str) else list(names)
        with self.lock:
            categories = self._live().category_info
            for key in keys:
                categories.pop(key, None)

    # -------------------------------------------------------------------------
    # Multi-option entry point
    # -------------------------------------------------------------------------

    def configure(
            self,
            *,
            log_level: Optional[Union[str, SeverityLevel]] = None,
            log_file_name: Optional[str] = None,
            include_date_in_file_name: bool = False,
            exclude_date_from_file_name: bool = False,
            overwrite_log_file: bool = False,
            append_to_log_file: bool = False,
            write_to_host: bool = False,
            write_to_streams: bool = False,
            message_format: Optional[str] = None,
            category_info_item: Any = None,
            category_info_keys_to_remove: Optional[Union[str, Iterable[str]]] = None,
            host_text_color: Optional[Dict[Any, str]] = None,
    ) -> None:
        """
        Apply several configuration changes in one validated step.

        Options left at None (or switches left False) keep their current
        value. Opposite switches given together raise ValidationError and
        nothing is changed.

        Raises:
            ValidationError: On any invalid option or switch conflict.
        """
        include_date = resolve_switch(
            "date_in_file_name",
            "include_date_in_file_name", include_date_in_file_name,
            "exclude_date_from_file_name", exclude_date_from_file_name,
        )
        overwrite = resolve_switch(
            "log_file_mode",
            "overwrite_log_file", overwrite_log_file,
            "append_to_log_file", append_to_log_file,
        )
        to_host = resolve_switch(
            "destination",
            "write_to_host", write_to_host,
            "write_to_streams", write_to_streams,
        )

        level = parse_severity(log_level) if log_level is not None else None
        file_name = validate_file_path(log_file_name) if log_file_name is not None else None
        fmt = parse_message_format(message_format) if message_format is not None else None
        categories = parse_category_items(category_info_item) if category_info_item is not None else None
        colors = parse_host_text_colors(host_text_color) if host_text_color is not None else None
        removals = None
        if category_info_keys_to_remove is not None:
            if isinstance(category_info_keys_to_remove, str):
                removals = [category_info_keys_to_remove]
            else:
                removals = list(category_info_keys_to_remove)

        with self.lock:
            config = self._live()
            if level is not None:
                config.log_level = level
            if to_host is not None:
                config.write_to_host = to_host
            if overwrite is not None:
                config.log_file.overwrite_on_first_write = overwrite
            if colors:
                config.host_text_colors.update(colors)
            if categories:
                self._upsert_categories(categories)
            if removals:
                for key in removals:
                    config.category_info.pop(key, None)
            if fmt is not None:
                config.message_format = fmt
                self._template = compile_template(fmt)

            path_affected = False
            if file_name is not None:
                config.log_file.name = file_name
                self._root_file_name()
                path_affected = True
            if include_date is not None:
                config.log_file.include_date_in_name = include_date
                path_affected = True
            if path_affected:
                self._refresh_path()

    # -------------------------------------------------------------------------
    # Internals (lock held)
    # -------------------------------------------------------------------------

    def _live(self) -> Configuration:
        if self._config is None:
            self._apply(self._defaults_factory())
        return self._config

    def _apply(self, config: Configuration) -> None:
        self._config = config.copy()
        self._template = compile_template(self._config.message_format)
        self._root_file_name()
        self._refresh_path()

    def _root_file_name(self) -> None:
        # The only place the stack is consulted for a relative name
        self.session.base_path = self.resolver.resolve_base(self._config.log_file)

    def _refresh_path(self, today: Optional[date] = None) -> str:
        new_path, changed = self.resolver.resolve(
            self._config.log_file,
            self.session.base_path,
            self.session.resolved_path,
            today,
        )
        if changed:
            self.session.resolved_path = new_path
            self.session.has_been_written_this_session = False
        return self.session.resolved_path

    def _upsert_categories(self, entries: Dict[str, CategoryEntry]) -> None:
        categories = self._live().category_info
        for name, entry in entries.items():
            if entry.is_default:
                for other in categories.values():
                    if other.is_default:
                        other.is_default = False
            categories[name] = CategoryEntry(color=entry.color, is_default=entry.is_default)
