from __future__ import annotations

"""
Diagnostic Handlers and Low-Level Utilities.

Provides handler factories and the tagging mechanism that lets logsmith tell
its own diagnostic handlers apart from handlers installed by the host
application.
"""

import logging
import os
import sys
from typing import Optional

# Internal attribute used to tag and identify our own handlers
_HANDLER_TAG_ATTR: str = "_logsmith_handler"


# ==============================================================================
# INTERNAL LOGGING UTILITIES
# ==============================================================================

def _tag_handler(handler: logging.Handler) -> None:
    """Mark a handler as managed by logsmith."""
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    """
    Verify if a handler was installed by this module.

    Args:
        handler: The handler to inspect.

    Returns:
        bool: True if the handler carries our internal tag.
    """
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
) -> Optional[logging.FileHandler]:
    """
    Initialize an appending FileHandler, tolerating I/O failures.

    Args:
        log_file: Target path for the diagnostic log.
        level_int: Numeric logging level.
        formatter: Pre-configured logging formatter.

    Returns:
        Optional[logging.FileHandler]: Configured handler or None if I/O fails.
    """
    try:
        _ensure_parent_dir(log_file)
        fh = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        fh.setLevel(level_int)
        fh.setFormatter(formatter)
        _tag_handler(fh)
        return fh
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open diagnostic log '{log_file}': {e}\n")
        return None


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _ensure_parent_dir(path: str) -> None:
    parent = os.path.dirname(os.path.abspath(path))
    if parent and not os.path.exists(parent):
        os.makedirs(parent, exist_ok=True)
