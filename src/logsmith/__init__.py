from __future__ import annotations

"""
logsmith: configurable message logging.

Messages are rendered through a user-defined template and routed to the
console host, the severity streams or a log file, subject to a severity
threshold.
"""

from logsmith.core.formatting.template import FormatTemplate, compile_template
from logsmith.core.services.dispatcher import EmitOverrides
from logsmith.domain.constants import SeverityLevel
from logsmith.domain.errors import ValidationError
from logsmith.domain.models import CategoryEntry, Configuration, FileSettings
from logsmith.logger import MessageLogger

__version__ = "0.1.0"

__all__ = [
    "CategoryEntry",
    "Configuration",
    "EmitOverrides",
    "FileSettings",
    "FormatTemplate",
    "MessageLogger",
    "SeverityLevel",
    "ValidationError",
    "compile_template",
]
