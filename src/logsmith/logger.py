from __future__ import annotations

"""
MessageLogger Facade.

The constructible service object that owns one configuration store, its
session file state and a dispatcher. Every instance is fully independent;
there is no implicit global logger.

Usage:
    from logsmith import MessageLogger

    log = MessageLogger()
    log.configure(log_level="Debug", message_format="{MessageLevel} | {Message}")
    log.write("Starting up")
    log.error("Something failed", category="Failure")
"""

import threading
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, Optional, Union

from logsmith.core.services.config_store import ConfigInput, ConfigStore
from logsmith.core.services.dispatcher import (
    CallerLookup,
    Dispatcher,
    EmitOverrides,
    FileOutput,
    HostOutput,
    StreamOutput,
)
from logsmith.core.services.path_resolver import LogFilePathResolver
from logsmith.domain.constants import SeverityLevel
from logsmith.domain.models import Configuration
from logsmith.infra.fs import PathRooting


class MessageLogger:
    """
    Configurable message logger.

    Args:
        base_dir: Directory relative log file names are rooted at. Defaults
            to the directory of the script that sets the file name (or
            constructs the logger, for the default name).
        host_sink: Replacement host output.
        stream_sink: Replacement stream output.
        file_writer: Replacement file primitive.
        caller_resolver: Replacement caller name lookup.
        clock: Timestamp source.
    """

    def __init__(
            self,
            base_dir: Optional[str] = None,
            *,
            host_sink: Optional[HostOutput] = None,
            stream_sink: Optional[StreamOutput] = None,
            file_writer: Optional[FileOutput] = None,
            caller_resolver: Optional[CallerLookup] = None,
            clock: Callable[[], datetime] = datetime.now,
    ):
        self._lock = threading.RLock()
        resolver = LogFilePathResolver(PathRooting(base_dir))
        self.store = ConfigStore(resolver=resolver, lock=self._lock)
        self.dispatcher = Dispatcher(
            self.store,
            host_sink=host_sink,
            stream_sink=stream_sink,
            file_writer=file_writer,
            caller_resolver=caller_resolver,
            clock=clock,
        )
        # Root the default file name at the constructing script, not at the first emitter
        self.store.refresh_log_file_path()

    # -------------------------------------------------------------------------
    # Configuration API
    # -------------------------------------------------------------------------

    def get_configuration(self) -> Configuration:
        return self.store.get_configuration()

    def set_configuration(self, config: ConfigInput) -> None:
        self.store.set_configuration(config)

    def reset_configuration(self) -> None:
        self.store.reset_configuration()

    def configure(self, **options: Any) -> None:
        """Apply several options at once; see ConfigStore.configure."""
        self.store.configure(**options)

    def set_log_level(self, level: Union[str, SeverityLevel]) -> None:
        self.store.set_log_level(level)

    def set_log_file_name(self, name: Optional[str]) -> None:
        self.store.set_log_file_name(name)

    def set_include_date_in_file_name(self, include: bool) -> None:
        self.store.set_include_date_in_file_name(include)

    def set_overwrite_log_file(self, overwrite: bool) -> None:
        self.store.set_overwrite_log_file(overwrite)

    def set_write_to_host(self, write_to_host: bool) -> None:
        self.store.set_write_to_host(write_to_host)

    def set_message_format(self, message_format: Optional[str]) -> None:
        self.store.set_message_format(message_format)

    def set_host_text_color(self, level: Union[str, SeverityLevel], color: str) -> None:
        self.store.set_host_text_color(level, color)

    def set_host_text_colors(self, colors: Dict[Any, str]) -> None:
        self.store.set_host_text_colors(colors)

    def set_category_info_items(self, items: Any) -> None:
        self.store.set_category_info_items(items)

    def set_category_info_item(self, name: str, entry: Any) -> None:
        self.store.set_category_info_item(name, entry)

    def remove_category_info_items(self, names: Union[str, Iterable[str]]) -> None:
        self.store.remove_category_info_items(names)

    @property
    def log_file_path(self) -> str:
        """The resolved log file path currently in effect ('' if none)."""
        return self.store.refresh_log_file_path()

    # -------------------------------------------------------------------------
    # Logging API
    # -------------------------------------------------------------------------

    def write(self, message: str, **overrides: Any) -> bool:
        """
        Log a message.

        Keyword overrides are the fields of EmitOverrides: message_level,
        is_error, is_warning, is_information, is_debug, is_verbose,
        message_format, category, host_text_color, write_to_host,
        write_to_streams.

        Returns:
            bool: False when the message was below the severity threshold.

        Raises:
            ValidationError: On invalid or conflicting overrides.
        """
        return self.dispatcher.emit(message, EmitOverrides(**overrides))

    def error(self, message: str, **overrides: Any) -> bool:
        return self.write(message, message_level=SeverityLevel.ERROR, **overrides)

    def warning(self, message: str, **overrides: Any) -> bool:
        return self.write(message, message_level=SeverityLevel.WARNING, **overrides)

    def info(self, message: str, **overrides: Any) -> bool:
        return self.write(message, message_level=SeverityLevel.INFORMATION, **overrides)

    def debug(self, message: str, **overrides: Any) -> bool:
        return self.write(message, message_level=SeverityLevel.DEBUG, **overrides)

    def verbose(self, message: str, **overrides: Any) -> bool:
        return self.write(message, message_level=SeverityLevel.VERBOSE, **overrides)
