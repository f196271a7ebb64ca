from __future__ import annotations

"""
Unit tests for Configuration Validation.

Verifies:
1. Severity and color parsing (case-insensitive, canonical output).
2. Switch group conflict detection.
3. Category item shapes and entry keys.
4. Whole-configuration validation (unknown keys, single default category).
"""

import pytest

from logsmith.domain.constants import CONSOLE_COLORS, SeverityLevel
from logsmith.domain.errors import ValidationError
from logsmith.domain.models import CategoryEntry, Configuration, FileSettings
from logsmith.validate_config import (
    parse_bool,
    parse_category_items,
    parse_color,
    parse_host_text_colors,
    parse_severity,
    resolve_one_of,
    resolve_switch,
    validate_configuration,
    validate_file_path,
)

# -----------------------------------------------------------------------------
# Scalars
# -----------------------------------------------------------------------------

def test_parse_severity_is_case_insensitive():
    assert parse_severity("warning") is SeverityLevel.WARNING
    assert parse_severity("VERBOSE") is SeverityLevel.VERBOSE
    assert parse_severity(SeverityLevel.DEBUG) is SeverityLevel.DEBUG


def test_parse_severity_rejects_unknown_name():
    with pytest.raises(ValidationError) as exc:
        parse_severity("Loud")

    err = exc.value
    assert err.field == "log_level"
    assert err.value == "Loud"
    assert err.allowed == ["Off", "Error", "Warning", "Information", "Debug", "Verbose"]


def test_parse_severity_rejects_off_for_messages():
    with pytest.raises(ValidationError) as exc:
        parse_severity("Off", "message_level", allow_off=False)

    assert "Off" not in exc.value.allowed


def test_parse_color_returns_canonical_spelling():
    assert parse_color("darkred") == "DarkRed"
    assert parse_color(" YELLOW ") == "Yellow"


def test_parse_color_rejects_unknown_color():
    with pytest.raises(ValidationError) as exc:
        parse_color("Purple", "host_text_color")

    assert exc.value.field == "host_text_color"
    assert exc.value.allowed == list(CONSOLE_COLORS)
    assert len(exc.value.allowed) == 16


def test_parse_bool_is_strict():
    assert parse_bool(False, "write_to_host") is False
    with pytest.raises(ValidationError):
        parse_bool("yes", "write_to_host")


def test_validate_file_path():
    assert validate_file_path("") == ""
    assert validate_file_path(None) == ""
    assert validate_file_path("logs/run.log") == "logs/run.log"
    with pytest.raises(ValidationError):
        validate_file_path("bad\x00name.log")
    with pytest.raises(ValidationError):
        validate_file_path(42)

# -----------------------------------------------------------------------------
# Switch Groups
# -----------------------------------------------------------------------------

def test_resolve_switch():
    assert resolve_switch("g", "on", True, "off", False) is True
    assert resolve_switch("g", "on", False, "off", True) is False
    assert resolve_switch("g", "on", False, "off", False) is None


def test_resolve_switch_conflict_names_group():
    with pytest.raises(ValidationError) as exc:
        resolve_switch("log_file_mode", "overwrite_log_file", True, "append_to_log_file", True)

    assert exc.value.field == "log_file_mode"
    assert exc.value.allowed == ["overwrite_log_file", "append_to_log_file"]


def test_resolve_one_of():
    assert resolve_one_of("g", {"a": False, "b": True}) == "b"
    assert resolve_one_of("g", {"a": False, "b": None}) is None
    with pytest.raises(ValidationError) as exc:
        resolve_one_of("g", {"a": True, "b": True, "c": False})
    assert exc.value.value == ["a", "b"]

# -----------------------------------------------------------------------------
# Composites
# -----------------------------------------------------------------------------

def test_parse_category_items_single_pair_with_loose_keys():
    parsed = parse_category_items(("Build", {"Color": "cyan", "IsDefault": True}))

    assert parsed == {"Build": CategoryEntry(color="Cyan", is_default=True)}


def test_parse_category_items_mapping():
    parsed = parse_category_items({
        "A": {"color": "Red"},
        "B": CategoryEntry(is_default=False),
    })

    assert parsed["A"] == CategoryEntry(color="Red")
    assert parsed["B"] == CategoryEntry(is_default=False)


def test_parse_category_items_rejects_wrong_element_count():
    with pytest.raises(ValidationError) as exc:
        parse_category_items(("A", {"color": "Red"}, "extra"))

    assert "3 elements" in str(exc.value)


def test_parse_category_items_rejects_unknown_entry_key():
    with pytest.raises(ValidationError):
        parse_category_items({"A": {"colour": "Red"}})


def test_parse_host_text_colors_rejects_off():
    assert parse_host_text_colors({"error": "red"}) == {SeverityLevel.ERROR: "Red"}
    with pytest.raises(ValidationError):
        parse_host_text_colors({"Off": "Red"})


def test_validate_configuration_from_mapping():
    config = validate_configuration({
        "log_level": "debug",
        "write_to_host": False,
        "host_text_colors": {"Warning": "yellow"},
        "category_info": {"Build": {"color": "blue", "is_default": True}},
        "log_file": {"name": "run.log", "include_date_in_name": True},
        "message_format": "{Message}",
    })

    assert config.log_level is SeverityLevel.DEBUG
    assert config.write_to_host is False
    assert config.host_text_colors == {SeverityLevel.WARNING: "Yellow"}
    assert config.default_category() == "Build"
    assert config.log_file == FileSettings("run.log", True, False)


def test_validate_configuration_rejects_two_default_categories():
    with pytest.raises(ValidationError) as exc:
        validate_configuration({
            "category_info": {
                "A": {"is_default": True},
                "B": {"is_default": True},
            },
        })

    assert exc.value.field == "category_info"


def test_validate_configuration_rejects_unknown_keys():
    with pytest.raises(ValidationError) as exc:
        validate_configuration({"log_level": "Error", "colour": "Red"})

    assert exc.value.value == ["colour"]


def test_validate_configuration_shares_nothing_with_input():
    source = Configuration(category_info={"A": CategoryEntry(color="Red")})

    validated = validate_configuration(source)
    source.category_info["A"].color = "Blue"

    assert validated.category_info["A"].color == "Red"
    assert validated.category_info is not source.category_info
