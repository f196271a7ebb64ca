from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema: the message to log, its per-call
overrides and the configuration options. Provides the logic translating the
raw argparse namespace into keyword arguments for MessageLogger.configure()
and MessageLogger.write().
"""

import argparse
from typing import Any, Dict

from logsmith.domain.constants import CONSOLE_COLORS, SeverityLevel

_LEVEL_CHOICES = [level.display_name for level in SeverityLevel]

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the logsmith CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="logsmith",
        description="Render a message through a configurable template and route it "
                    "to the console, the severity streams or a log file.",
    )

    p.add_argument(
        "message",
        nargs="?",
        default=None,
        help="Message text to log. Nothing is logged when omitted.",
    )

    # --- Configuration Sources ---
    p.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="JSON configuration file to start from.",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore --config and start from the built-in defaults.",
    )

    # --- Per-Message Overrides ---
    p.add_argument(
        "-l", "--level",
        dest="message_level",
        default=None,
        help=f"Severity of the message ({', '.join(_LEVEL_CHOICES[1:])}).",
    )
    p.add_argument("--is-error", action="store_true", help="Log the message as an Error.")
    p.add_argument("--is-warning", action="store_true", help="Log the message as a Warning.")
    p.add_argument("--is-information", action="store_true", help="Log the message as Information.")
    p.add_argument("--is-debug", action="store_true", help="Log the message as Debug.")
    p.add_argument("--is-verbose", action="store_true", help="Log the message as Verbose.")
    p.add_argument(
        "-c", "--category",
        dest="category",
        default=None,
        help="Category of the message.",
    )
    p.add_argument(
        "--color",
        dest="host_text_color",
        default=None,
        help=f"Host color of the message ({', '.join(CONSOLE_COLORS)}).",
    )
    p.add_argument(
        "--format",
        dest="message_format",
        default=None,
        help="Template used for this message only, e.g. '{MessageLevel} | {Message}'.",
    )
    p.add_argument(
        "--host",
        dest="write_to_host",
        action="store_true",
        help="Write this message to the host.",
    )
    p.add_argument(
        "--streams",
        dest="write_to_streams",
        action="store_true",
        help="Write this message to the severity streams.",
    )

    # --- Configuration Options ---
    p.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        help=f"Severity threshold ({', '.join(_LEVEL_CHOICES)}).",
    )
    p.add_argument(
        "--log-file",
        dest="log_file_name",
        default=None,
        help="Log file name or path. An empty string disables the log file.",
    )
    p.add_argument(
        "--include-date",
        dest="include_date_in_file_name",
        action="store_true",
        help="Append '_yyyyMMdd' to the log file name.",
    )
    p.add_argument(
        "--exclude-date",
        dest="exclude_date_from_file_name",
        action="store_true",
        help="Do not append a date to the log file name.",
    )
    p.add_argument(
        "--overwrite",
        dest="overwrite_log_file",
        action="store_true",
        help="Overwrite the log file on the first write.",
    )
    p.add_argument(
        "--append",
        dest="append_to_log_file",
        action="store_true",
        help="Always append to the log file.",
    )
    p.add_argument(
        "--default-format",
        dest="default_message_format",
        default=None,
        help="Template stored in the configuration.",
    )

    # --- Persistence and Diagnostics ---
    p.add_argument(
        "--save-config",
        dest="save_config_path",
        default=None,
        help="Write the effective configuration to this JSON file.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate diagnostic logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_config_options(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into MessageLogger.configure() options.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Only the options that were actually given.
    """
    options: Dict[str, Any] = {}

    if args.log_level is not None:
        options["log_level"] = args.log_level
    if args.log_file_name is not None:
        options["log_file_name"] = args.log_file_name
    if args.default_message_format is not None:
        options["message_format"] = args.default_message_format

    # Switch pairs are passed through as-is; conflicts are rejected downstream
    for switch in (
            "include_date_in_file_name",
            "exclude_date_from_file_name",
            "overwrite_log_file",
            "append_to_log_file",
    ):
        if getattr(args, switch):
            options[switch] = True

    return options


def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into MessageLogger.write() overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Per-message overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.message_level is not None:
        overrides["message_level"] = args.message_level
    if args.category is not None:
        overrides["category"] = args.category
    if args.host_text_color is not None:
        overrides["host_text_color"] = args.host_text_color
    if args.message_format is not None:
        overrides["message_format"] = args.message_format

    for switch in (
            "is_error",
            "is_warning",
            "is_information",
            "is_debug",
            "is_verbose",
            "write_to_host",
            "write_to_streams",
    ):
        if getattr(args, switch):
            overrides[switch] = True

    return overrides
