from __future__ import annotations

"""
Caller Introspection.

Locates the nearest stack frame outside the logsmith package and derives a
human-readable caller name from it. Only used when a message format actually
contains the CallerName field.
"""

import inspect
import logging
import os
from types import FrameType
from typing import Optional

from logsmith.domain.constants import CONSOLE_CALLER, UNKNOWN_CALLER

logger = logging.getLogger(__name__)

_PACKAGE = __name__.split(".")[0]


def _is_internal(frame: FrameType) -> bool:
    module = frame.f_globals.get("__name__", "") or ""
    return module == _PACKAGE or module.startswith(_PACKAGE + ".")


def find_external_frame() -> Optional[FrameType]:
    """
    Return the first frame, walking outward, that does not belong to this package.

    Returns:
        Optional[FrameType]: The frame, or None if the stack cannot be inspected.
    """
    frame = inspect.currentframe()
    try:
        while frame is not None and _is_internal(frame):
            frame = frame.f_back
        return frame
    except Exception as e:
        logger.debug(f"Stack inspection failed: {e}")
        return None


class CallerNameResolver:
    """
    Resolves the name of the code that submitted a message.

    Returns 'script.py' for module-level code, 'script.py: Class.method' or
    'script.py: function' inside callables, CONSOLE_CALLER for interactive
    top-level input and UNKNOWN_CALLER when the stack is not inspectable.
    """

    def resolve(self) -> str:
        frame = find_external_frame()
        if frame is None:
            return UNKNOWN_CALLER

        try:
            filename = frame.f_code.co_filename or ""
            func_name = frame.f_code.co_name

            if filename.startswith("<") and func_name == "<module>":
                return CONSOLE_CALLER

            script = os.path.basename(filename) if not filename.startswith("<") else filename
            if func_name == "<module>":
                return script

            class_name = None
            if "self" in frame.f_locals:
                class_name = type(frame.f_locals["self"]).__name__
            elif "cls" in frame.f_locals and isinstance(frame.f_locals["cls"], type):
                class_name = frame.f_locals["cls"].__name__

            qualified = f"{class_name}.{func_name}" if class_name else func_name
            return f"{script}: {qualified}"
        finally:
            del frame
