from __future__ import annotations

"""
Unit tests for the Message Template Compiler.

Verifies:
1. Field detection and first-occurrence ordering.
2. Timestamp patterns (explicit and default).
3. Literal preservation of unrecognized placeholders.
4. Rendering of level/category casing and the round-trip scenario.
"""

from datetime import datetime

import pytest

from logsmith.core.formatting.template import (
    FieldRef,
    Literal,
    compile_template,
)
from logsmith.domain.constants import DEFAULT_TIMESTAMP_PATTERN, FieldName, SeverityLevel

MOMENT = datetime(2024, 1, 31, 13, 5, 9, 123456)


def test_round_trip_timestamp_and_message():
    """A custom timestamp pattern and the message render in place."""
    template = compile_template("{Timestamp:hh:mm:ss} | {Message}")

    assert template.render(message="hi", timestamp=MOMENT) == "13:05:09 | hi"


def test_fields_present_in_first_occurrence_order():
    template = compile_template("{Message} {Timestamp} {Category} {Message}")

    assert template.fields_present == (
        FieldName.MESSAGE,
        FieldName.TIMESTAMP,
        FieldName.CATEGORY,
    )
    assert template.has_field(FieldName.CATEGORY)
    assert not template.has_field(FieldName.CALLER_NAME)


def test_timestamp_without_pattern_uses_default():
    template = compile_template("{Timestamp}")

    assert template.render_plan == (FieldRef(FieldName.TIMESTAMP, DEFAULT_TIMESTAMP_PATTERN),)
    assert template.render(timestamp=MOMENT) == "2024-01-31 13:05:09.123"


def test_blank_timestamp_pattern_uses_default():
    template = compile_template("{Timestamp:   }")

    assert template.render_plan[0].pattern == DEFAULT_TIMESTAMP_PATTERN


def test_unrecognized_placeholders_stay_literal():
    template = compile_template("{Foo} {Message} {MessageLevel")

    assert template.fields_present == (FieldName.MESSAGE,)
    assert template.render(message="x") == "{Foo} x {MessageLevel"


def test_field_names_are_case_insensitive_and_trimmed():
    template = compile_template("{ message } {CALLERNAME}")

    assert template.fields_present == (FieldName.MESSAGE, FieldName.CALLER_NAME)
    assert template.render(message="m", caller_name="run.py") == "m run.py"


def test_severity_level_alias():
    template = compile_template("{SeverityLevel}")

    assert template.fields_present == (FieldName.MESSAGE_LEVEL,)
    assert template.render(level=SeverityLevel.DEBUG) == "DEBUG"


@pytest.mark.parametrize("raw", ["", None])
def test_empty_format_compiles_to_empty_plan(raw):
    template = compile_template(raw)

    assert template.raw_text == ""
    assert template.render_plan == ()
    assert template.fields_present == ()
    assert template.render(message="ignored") == ""


def test_render_plan_keeps_literals_between_fields():
    template = compile_template("[{Category}] {Message}!")

    assert template.render_plan == (
        Literal("["),
        FieldRef(FieldName.CATEGORY),
        Literal("] "),
        FieldRef(FieldName.MESSAGE),
        Literal("!"),
    )


def test_level_and_category_render_upper_case():
    template = compile_template("{MessageLevel} | {Category} | {Message}")

    out = template.render(message="Done", category="Success", level=SeverityLevel.INFORMATION)
    assert out == "INFORMATION | SUCCESS | Done"


def test_whitespace_is_not_trimmed_by_render():
    template = compile_template("  {Message}  ")

    assert template.render(message="x") == "  x  "


def test_equal_formats_share_compiled_template():
    assert compile_template("{Message}") is compile_template("{Message}")


@pytest.mark.parametrize("name, field", [
    ("Message", FieldName.MESSAGE),
    ("Timestamp", FieldName.TIMESTAMP),
    ("CallerName", FieldName.CALLER_NAME),
    ("Category", FieldName.CATEGORY),
    ("MessageLevel", FieldName.MESSAGE_LEVEL),
])
def test_single_field_detection(name, field):
    assert compile_template(f"xxx {{{name}}} xxx").fields_present == (field,)
