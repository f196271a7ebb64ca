from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Recording fakes for the host, stream and file outputs.
3. A MessageLogger fixture wired to those fakes with a fixed clock.
"""

import os
import sys
from datetime import datetime
from typing import List, Optional, Tuple

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from logsmith.logger import MessageLogger  # noqa: E402

FIXED_NOW = datetime(2024, 1, 31, 13, 5, 9, 123456)


# -----------------------------------------------------------------------------
# Recording Fakes
# -----------------------------------------------------------------------------
class RecordingHost:
    """Collects (text, color) pairs written to the host."""

    def __init__(self) -> None:
        self.lines: List[Tuple[str, Optional[str]]] = []

    def write_host(self, text: str, color: Optional[str]) -> None:
        self.lines.append((text, color))


class RecordingStreams:
    """Collects (severity, text) pairs written to the streams."""

    def __init__(self) -> None:
        self.lines: List[Tuple[object, str]] = []

    def write_stream(self, severity, text: str) -> None:
        self.lines.append((severity, text))


class RecordingFileWriter:
    """Collects ('overwrite' | 'append', path, text) calls."""

    def __init__(self, fail: bool = False) -> None:
        self.calls: List[Tuple[str, str, str]] = []
        self.fail = fail

    def overwrite(self, path: str, text: str) -> None:
        if self.fail:
            raise OSError("disk full")
        self.calls.append(("overwrite", path, text))

    def append(self, path: str, text: str) -> None:
        if self.fail:
            raise OSError("disk full")
        self.calls.append(("append", path, text))


class FixedCaller:
    def __init__(self, name: str = "script.py: main") -> None:
        self.name = name
        self.calls = 0

    def resolve(self) -> str:
        self.calls += 1
        return self.name


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def host() -> RecordingHost:
    return RecordingHost()


@pytest.fixture
def streams() -> RecordingStreams:
    return RecordingStreams()


@pytest.fixture
def file_writer() -> RecordingFileWriter:
    return RecordingFileWriter()


@pytest.fixture
def failing_file_writer() -> RecordingFileWriter:
    """File writer whose every call raises OSError."""
    return RecordingFileWriter(fail=True)


@pytest.fixture
def caller() -> FixedCaller:
    return FixedCaller()


@pytest.fixture
def message_logger(tmp_path, host, streams, file_writer, caller) -> MessageLogger:
    """
    Return a MessageLogger rooted at tmp_path with recording outputs.

    The clock always returns FIXED_NOW (2024-01-31 13:05:09.123456).
    """
    return MessageLogger(
        base_dir=str(tmp_path),
        host_sink=host,
        stream_sink=streams,
        file_writer=file_writer,
        caller_resolver=caller,
        clock=lambda: FIXED_NOW,
    )
