from __future__ import annotations

"""
Diagnostic Logging Orchestrator.

Maintains the idempotent lifecycle of the root logger configuration used by
the logsmith command line entry point. Library code never calls this; it
only logs through module-level loggers.
"""

import logging
import sys
from typing import List

from logsmith.infra.logging.config import _LEVEL_MAP, LoggingConfig
from logsmith.infra.logging.handlers import (
    _create_file_handler,
    _is_our_handler,
    _tag_handler,
)

# Internal state flag for idempotency
_CONFIGURED_FLAG_ATTR: str = "_logsmith_configured"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Execute idempotent configuration of the root logger.

    Handlers installed by a previous call are replaced, foreign handlers
    are left untouched.

    Args:
        cfg: Structural configuration for diagnostic logging.
        force: If True, re-initialize even when already configured.

    Returns:
        logging.Logger: The configured root logger.
    """
    root = logging.getLogger()

    already_configured = bool(getattr(root, _CONFIGURED_FLAG_ATTR, False))
    if already_configured and not force:
        return root

    level_int = _parse_level(cfg.level)
    root.setLevel(level_int)

    # Cleanup existing infrastructure to prevent handler leakage
    _remove_our_handlers(root)

    handlers_list: List[logging.Handler] = []

    if cfg.console:
        sh = logging.StreamHandler(sys.stderr)
        sh.setLevel(level_int)
        sh.setFormatter(logging.Formatter(cfg.console_fmt))
        _tag_handler(sh)
        handlers_list.append(sh)

    if cfg.log_file:
        fh = _create_file_handler(
            cfg.log_file,
            level_int,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
        )
        if fh:
            handlers_list.append(fh)

    for handler in handlers_list:
        root.addHandler(handler)

    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    return root


def get_logger(name: str) -> logging.Logger:
    """
    Acquire a named logger instance.

    Args:
        name: Hierarchical name for the logger (usually __name__).

    Returns:
        logging.Logger: The requested logger instance.
    """
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Convert a string-based logging level to its numeric constant."""
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.WARNING)


def _remove_our_handlers(root: logging.Logger) -> None:
    """Detach and close all logsmith-managed handlers from the root."""
    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()
