from __future__ import annotations

"""
Output Sinks.

Host output goes through a rich Console so console color names become
terminal styles. Stream output goes through a dedicated stdlib logger, one
logging level per message severity, so applications can attach their own
handlers to the 'logsmith.streams' logger.
"""

import logging
from typing import Dict, Optional

from rich.console import Console

from logsmith.domain.constants import CONSOLE_COLORS, SeverityLevel

VERBOSE = 5
logging.addLevelName(VERBOSE, "VERBOSE")

STREAM_LOGGER_NAME = "logsmith.streams"

_STREAM_LEVELS: Dict[SeverityLevel, int] = {
    SeverityLevel.ERROR: logging.ERROR,
    SeverityLevel.WARNING: logging.WARNING,
    SeverityLevel.INFORMATION: logging.INFO,
    SeverityLevel.DEBUG: logging.DEBUG,
    SeverityLevel.VERBOSE: VERBOSE,
}


class HostSink:
    """Writes rendered lines to the terminal in a console color."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False, soft_wrap=True)

    def write_host(self, text: str, color: Optional[str]) -> None:
        style = CONSOLE_COLORS.get(color) if color else None
        self.console.print(text, style=style, markup=False, emoji=False, highlight=False)


class StreamSink:
    """Writes rendered lines to the severity-matched level of the stream logger."""

    def __init__(self, stream_logger: Optional[logging.Logger] = None):
        self.logger = stream_logger or logging.getLogger(STREAM_LOGGER_NAME)

    def write_stream(self, severity: SeverityLevel, text: str) -> None:
        self.logger.log(_STREAM_LEVELS.get(severity, logging.INFO), text)
