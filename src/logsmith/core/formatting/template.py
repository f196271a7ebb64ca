from __future__ import annotations

"""
Message Template Compiler.

Turns a user-supplied message format such as
'{Timestamp:yyyy-MM-dd hh:mm:ss.fff} | {MessageLevel} | {Message}' into an
immutable FormatTemplate: an ordered render plan of literal text and field
references. Compilation never fails; anything that is not a recognized
placeholder stays literal text.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import List, Optional, Tuple, Union

from logsmith.core.formatting.timestamp import format_timestamp
from logsmith.domain.constants import (
    DEFAULT_TIMESTAMP_PATTERN,
    FIELD_ALIASES,
    FieldName,
    SeverityLevel,
)

# Field names are case-insensitive; only Timestamp takes a ':pattern' part,
# which runs up to the closing brace.
_PLACEHOLDER_RE = re.compile(
    r"\{\s*(?:"
    r"(?P<timestamp>timestamp)\s*(?::\s*(?P<pattern>[^}]*?))?"
    r"|(?P<field>messagelevel|severitylevel|message|callername|category)"
    r")\s*\}",
    re.IGNORECASE,
)

# -----------------------------------------------------------------------------
# RENDER PLAN MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Literal:
    """Text copied to the output unchanged."""
    text: str


@dataclass(frozen=True)
class FieldRef:
    """
    Reference to a message field.

    Attributes:
        field: The field substituted at render time.
        pattern: Timestamp format pattern; None for every other field.
    """
    field: FieldName
    pattern: Optional[str] = None


PlanItem = Union[Literal, FieldRef]


@dataclass(frozen=True)
class FormatTemplate:
    """
    Compiled, reusable representation of a message format.

    Attributes:
        raw_text: The format string this template was compiled from.
        render_plan: Literal and field items in source order.
        fields_present: Distinct fields found, in first-occurrence order.
    """
    raw_text: str
    render_plan: Tuple[PlanItem, ...]
    fields_present: Tuple[FieldName, ...]

    def has_field(self, field: FieldName) -> bool:
        return field in self.fields_present

    def render(
            self,
            *,
            message: str = "",
            timestamp: Optional[datetime] = None,
            caller_name: str = "",
            category: str = "",
            level: Optional[SeverityLevel] = None,
    ) -> str:
        """
        Substitute every field reference and join the plan.

        MessageLevel and Category render upper-case. Timestamp defaults to
        the current local time.

        Returns:
            str: The rendered text, whitespace untouched.
        """
        parts: List[str] = []
        for item in self.render_plan:
            if isinstance(item, Literal):
                parts.append(item.text)
            elif item.field is FieldName.MESSAGE:
                parts.append("" if message is None else str(message))
            elif item.field is FieldName.TIMESTAMP:
                moment = timestamp if timestamp is not None else datetime.now()
                parts.append(format_timestamp(moment, item.pattern or DEFAULT_TIMESTAMP_PATTERN))
            elif item.field is FieldName.CALLER_NAME:
                parts.append(caller_name or "")
            elif item.field is FieldName.CATEGORY:
                parts.append((category or "").upper())
            elif item.field is FieldName.MESSAGE_LEVEL:
                parts.append(level.display_name.upper() if level is not None else "")
        return "".join(parts)

# -----------------------------------------------------------------------------
# COMPILER
# -----------------------------------------------------------------------------

@lru_cache(maxsize=64)
def compile_template(raw_format: Optional[str]) -> FormatTemplate:
    """
    Compile a message format into a FormatTemplate.

    Args:
        raw_format: Format text; None compiles as an empty template.

    Returns:
        FormatTemplate: The compiled template. Equal inputs share one instance.
    """
    text = raw_format or ""
    plan: List[PlanItem] = []
    fields: List[FieldName] = []
    pos = 0

    for match in _PLACEHOLDER_RE.finditer(text):
        if match.start() > pos:
            plan.append(Literal(text[pos:match.start()]))

        if match.group("timestamp") is not None:
            pattern = (match.group("pattern") or "").strip() or DEFAULT_TIMESTAMP_PATTERN
            ref = FieldRef(FieldName.TIMESTAMP, pattern)
        else:
            ref = FieldRef(FIELD_ALIASES[match.group("field").lower()])

        plan.append(ref)
        if ref.field not in fields:
            fields.append(ref.field)
        pos = match.end()

    if pos < len(text):
        plan.append(Literal(text[pos:]))

    return FormatTemplate(raw_text=text, render_plan=tuple(plan), fields_present=tuple(fields))
