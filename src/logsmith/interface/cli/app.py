from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: initialization of diagnostic logging,
resolution of the configuration (defaults or JSON file, then command-line
options), optional configuration dump/save and finally logging of the
message itself.
"""

import json
import logging
import os
import sys
from typing import List, Optional

from logsmith.domain.config import get_default_config, load_configuration, save_configuration
from logsmith.domain.errors import ValidationError
from logsmith.infra.logging import LoggingConfig, configure_logging, get_logger
from logsmith.infra.sinks import STREAM_LOGGER_NAME, VERBOSE
from logsmith.interface.cli import args as cli_args
from logsmith.logger import MessageLogger

logger = get_logger(__name__)

_STREAM_HANDLER_ATTR = "_logsmith_cli_stream"

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 2 invalid input, 1 other failure).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (diagnostics on stderr)
    log_level = "DEBUG" if args.debug else "WARNING"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=None), force=True)
    _attach_stream_output()

    logger.debug("CLI execution initiated. Resolving configuration...")

    try:
        # 3. Resolve base configuration (defaults vs JSON file)
        if args.use_defaults or not args.config_path:
            base_conf = get_default_config()
        else:
            base_conf = load_configuration(args.config_path)

        # Relative log file names are rooted at the working directory
        message_logger = MessageLogger(base_dir=os.getcwd())
        message_logger.set_configuration(base_conf)

        # 4. Apply command-line configuration options
        options = cli_args.args_to_config_options(args)
        if options:
            message_logger.configure(**options)

        effective = message_logger.get_configuration()

        if args.dump_config:
            print(json.dumps(effective.to_dict(), ensure_ascii=False, indent=2))
            return 0

        if args.save_config_path:
            save_configuration(effective, args.save_config_path)

        # 5. Message phase
        if args.message is not None:
            overrides = cli_args.args_to_overrides(args)
            written = message_logger.write(args.message, **overrides)
            if not written:
                logger.debug("Message suppressed by the severity threshold.")

    except ValidationError as e:
        logger.debug(f"Validation failed for {e.field!r}: {e.value!r}")
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except Exception as e:
        logger.critical(f"Unexpected failure: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    return 0

# -----------------------------------------------------------------------------
# STREAM OUTPUT WIRING
# -----------------------------------------------------------------------------

def _attach_stream_output() -> None:
    """
    Give the severity stream logger a plain stdout handler.

    A handler left by a previous run is replaced, and the logger stops
    propagating, so stream messages are not repeated by the diagnostic
    handlers on the root logger.
    """
    stream_logger = logging.getLogger(STREAM_LOGGER_NAME)
    for h in list(stream_logger.handlers):
        if getattr(h, _STREAM_HANDLER_ATTR, False):
            stream_logger.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(VERBOSE)
    handler.setFormatter(logging.Formatter("%(message)s"))
    setattr(handler, _STREAM_HANDLER_ATTR, True)

    stream_logger.addHandler(handler)
    stream_logger.setLevel(VERBOSE)
    stream_logger.propagate = False

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
