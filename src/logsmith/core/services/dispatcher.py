from __future__ import annotations

"""
Message Dispatcher.

Decides, per message, whether anything is written at all, then resolves the
template, caller name, category, destination and color, renders the line and
routes it to the host or stream sink and to the log file. File problems are
never allowed to interrupt host or stream output.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Protocol, Union

from logsmith.core.formatting.template import compile_template
from logsmith.core.services.config_store import ConfigStore
from logsmith.domain.constants import FieldName, SeverityLevel
from logsmith.domain.models import Configuration
from logsmith.infra.caller import CallerNameResolver
from logsmith.infra.fs import FileWriter
from logsmith.infra.sinks import HostSink, StreamSink
from logsmith.validate_config import (
    parse_color,
    parse_message_format,
    parse_severity,
    resolve_one_of,
    resolve_switch,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# COLLABORATOR INTERFACES
# -----------------------------------------------------------------------------

class HostOutput(Protocol):
    def write_host(self, text: str, color: Optional[str]) -> None: ...


class StreamOutput(Protocol):
    def write_stream(self, severity: SeverityLevel, text: str) -> None: ...


class FileOutput(Protocol):
    def overwrite(self, path: str, text: str) -> None: ...

    def append(self, path: str, text: str) -> None: ...


class CallerLookup(Protocol):
    def resolve(self) -> str: ...

# -----------------------------------------------------------------------------
# PER-CALL OVERRIDES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class EmitOverrides:
    """
    Per-call overrides for a single message. None (or False for the
    switches) means "not given".

    Attributes:
        message_level: Severity name or level of the message.
        is_error: Shorthand for message_level='Error'.
        is_warning: Shorthand for message_level='Warning'.
        is_information: Shorthand for message_level='Information'.
        is_debug: Shorthand for message_level='Debug'.
        is_verbose: Shorthand for message_level='Verbose'.
        message_format: Template used for this message only.
        category: Category of the message.
        host_text_color: Host color for this message only.
        write_to_host: Force host output for this message.
        write_to_streams: Force stream output for this message.
    """
    message_level: Optional[Union[str, SeverityLevel]] = None
    is_error: bool = False
    is_warning: bool = False
    is_information: bool = False
    is_debug: bool = False
    is_verbose: bool = False
    message_format: Optional[str] = None
    category: Optional[str] = None
    host_text_color: Optional[str] = None
    write_to_host: bool = False
    write_to_streams: bool = False


_SHORTHAND_LEVELS = {
    "is_error": SeverityLevel.ERROR,
    "is_warning": SeverityLevel.WARNING,
    "is_information": SeverityLevel.INFORMATION,
    "is_debug": SeverityLevel.DEBUG,
    "is_verbose": SeverityLevel.VERBOSE,
}

# -----------------------------------------------------------------------------
# DISPATCHER
# -----------------------------------------------------------------------------

class Dispatcher:
    """
    Renders and routes messages according to a ConfigStore.

    Args:
        store: Source of configuration, template and session file state.
        host_sink: Receives host output with its color.
        stream_sink: Receives stream output per severity.
        file_writer: Overwrite/append primitive for the log file.
        caller_resolver: Looked up only when the template needs CallerName.
        clock: Supplies the message timestamp.
    """

    def __init__(
            self,
            store: ConfigStore,
            host_sink: Optional[HostOutput] = None,
            stream_sink: Optional[StreamOutput] = None,
            file_writer: Optional[FileOutput] = None,
            caller_resolver: Optional[CallerLookup] = None,
            clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.host_sink = host_sink or HostSink()
        self.stream_sink = stream_sink or StreamSink()
        self.file_writer = file_writer or FileWriter()
        self.caller_resolver = caller_resolver or CallerNameResolver()
        self.clock = clock

    def emit(self, message: str, overrides: Optional[EmitOverrides] = None) -> bool:
        """
        Render and route one message.

        Args:
            message: Message text.
            overrides: Per-call overrides.

        Returns:
            bool: False when the message was filtered out by severity.

        Raises:
            ValidationError: On invalid or conflicting overrides.
        """
        ov = overrides or EmitOverrides()

        # 1. Effective severity
        severity = self._resolve_severity(ov)
        to_host_override = resolve_switch(
            "destination",
            "write_to_host", ov.write_to_host,
            "write_to_streams", ov.write_to_streams,
        )
        color_override = parse_color(ov.host_text_color, "host_text_color") if ov.host_text_color else None
        format_override = parse_message_format(ov.message_format) if ov.message_format is not None else None

        with self.store.lock:
            config = self.store.active_configuration()

            # 2. Severity filter
            if severity > config.log_level:
                return False

            # 3. Template
            template = compile_template(format_override) if format_override is not None \
                else self.store.template

            # 4. Caller name (lazy)
            caller_name = ""
            if template.has_field(FieldName.CALLER_NAME):
                caller_name = self.caller_resolver.resolve()

            # 5-7. Category, destination, color
            category = ov.category if ov.category is not None else (config.default_category() or "")
            to_host = to_host_override if to_host_override is not None else config.write_to_host
            color = self._resolve_color(config, severity, category, color_override) if to_host else None

            # 8. Render
            line = template.render(
                message=message,
                timestamp=self.clock(),
                caller_name=caller_name,
                category=category,
                level=severity,
            ).rstrip()

            # 9. Host or stream
            if to_host:
                self.host_sink.write_host(line, color)
            else:
                self.stream_sink.write_stream(severity, line)

            # 10. File
            self._write_file(config, line)

        return True

    # -------------------------------------------------------------------------
    # Resolution helpers
    # -------------------------------------------------------------------------

    def _resolve_severity(self, ov: EmitOverrides) -> SeverityLevel:
        shorthand = resolve_one_of(
            "message_level", {name: getattr(ov, name) for name in _SHORTHAND_LEVELS}
        )
        if ov.message_level is not None:
            return parse_severity(ov.message_level, "message_level", allow_off=False)
        if shorthand is not None:
            return _SHORTHAND_LEVELS[shorthand]
        return SeverityLevel.INFORMATION

    @staticmethod
    def _resolve_color(
            config: Configuration,
            severity: SeverityLevel,
            category: str,
            override: Optional[str],
    ) -> Optional[str]:
        if override:
            return override
        entry = config.category_entry(category) if category else None
        if entry is not None and entry.color:
            return entry.color
        return config.host_text_colors.get(severity)

    def _write_file(self, config: Configuration, line: str) -> None:
        path = self.store.refresh_log_file_path()
        if not path:
            return

        session = self.store.session
        try:
            if config.log_file.overwrite_on_first_write and not session.has_been_written_this_session:
                self.file_writer.overwrite(path, line)
                self.store.mark_file_written()
            else:
                self.file_writer.append(path, line)
        except Exception as e:
            logger.debug(f"Log file write to {path!r} failed: {e}")
