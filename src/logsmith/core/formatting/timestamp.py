from __future__ import annotations

"""
Timestamp Pattern Rendering.

Renders datetimes through .NET-style custom format patterns
('yyyy-MM-dd hh:mm:ss.fff'). Patterns are tokenized once and cached; any
character that is not a recognized token is copied through literally.

'f' to 'fffffff' render that many fractional second digits; the seventh is
always 0 since datetime resolves microseconds. 'F' to 'FFFFFFF' do the same
but drop trailing zeros, rendering nothing for a whole second.
"""

import re
from datetime import date, datetime
from functools import lru_cache
from typing import Callable, Dict, List, Tuple

_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

# Longest tokens first so 'yyyy' wins over 'yy'
_TOKEN_RE = re.compile(
    r"'[^']*'?"          # quoted literal
    r"|\\."              # escaped character
    r"|f{1,7}|F{1,7}"    # fractional seconds
    r"|yyyy|yy"
    r"|MMMM|MMM|MM|M"
    r"|dddd|ddd|dd|d"
    r"|HH|H|hh|h"
    r"|mm|m|ss|s"
    r"|tt|zzz"
)


def _utc_offset(dt: datetime) -> str:
    offset = dt.utcoffset()
    if offset is None:
        offset = dt.astimezone().utcoffset()
    minutes = int(offset.total_seconds() // 60) if offset is not None else 0
    sign = "+" if minutes >= 0 else "-"
    minutes = abs(minutes)
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


# Hour tokens render the 24-hour clock in both spellings
_RENDERERS: Dict[str, Callable[[datetime], str]] = {
    "yyyy": lambda dt: f"{dt.year:04d}",
    "yy": lambda dt: f"{dt.year % 100:02d}",
    "MMMM": lambda dt: _MONTH_NAMES[dt.month - 1],
    "MMM": lambda dt: _MONTH_NAMES[dt.month - 1][:3],
    "MM": lambda dt: f"{dt.month:02d}",
    "M": lambda dt: str(dt.month),
    "dddd": lambda dt: _DAY_NAMES[dt.weekday()],
    "ddd": lambda dt: _DAY_NAMES[dt.weekday()][:3],
    "dd": lambda dt: f"{dt.day:02d}",
    "d": lambda dt: str(dt.day),
    "HH": lambda dt: f"{dt.hour:02d}",
    "H": lambda dt: str(dt.hour),
    "hh": lambda dt: f"{dt.hour:02d}",
    "h": lambda dt: str(dt.hour),
    "mm": lambda dt: f"{dt.minute:02d}",
    "m": lambda dt: str(dt.minute),
    "ss": lambda dt: f"{dt.second:02d}",
    "s": lambda dt: str(dt.second),
    "tt": lambda dt: "AM" if dt.hour < 12 else "PM",
    "zzz": _utc_offset,
}

def _fraction(dt: datetime, token: str) -> str:
    # Seven digits of ticks; datetime stops at microseconds
    digits = f"{dt.microsecond:06d}0"[:len(token)]
    return digits if token[0] == "f" else digits.rstrip("0")


# (is_literal, text) pairs
Segment = Tuple[bool, str]


@lru_cache(maxsize=128)
def _tokenize(pattern: str) -> Tuple[Segment, ...]:
    segments: List[Segment] = []
    pos = 0
    for match in _TOKEN_RE.finditer(pattern):
        if match.start() > pos:
            segments.append((True, pattern[pos:match.start()]))
        token = match.group(0)
        if token.startswith("'"):
            segments.append((True, token[1:-1] if token.endswith("'") and len(token) > 1 else token[1:]))
        elif token.startswith("\\"):
            segments.append((True, token[1:]))
        else:
            segments.append((False, token))
        pos = match.end()
    if pos < len(pattern):
        segments.append((True, pattern[pos:]))
    return tuple(segments)


def format_timestamp(dt: datetime, pattern: str) -> str:
    """
    Render a datetime through a custom format pattern.

    Args:
        dt: The moment to render.
        pattern: Pattern such as 'yyyy-MM-dd hh:mm:ss.fff'.

    Returns:
        str: The rendered timestamp.
    """
    out: List[str] = []
    for is_literal, text in _tokenize(pattern):
        if is_literal:
            out.append(text)
        elif text[0] in "fF":
            out.append(_fraction(dt, text))
        else:
            out.append(_RENDERERS[text](dt))
    return "".join(out)


def format_date_stamp(day: date) -> str:
    """Render the 'yyyyMMdd' stamp used in dated log file names."""
    return f"{day.year:04d}{day.month:02d}{day.day:02d}"
