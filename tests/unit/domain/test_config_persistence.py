from __future__ import annotations

"""
Unit tests for the Config Domain.

Verifies:
1. Built-in default configuration values.
2. Resilience against missing and corrupted config files.
3. Partial files merged over the defaults; unknown keys ignored.
4. Persistence round trip (Save/Load) inside a temporary directory.
"""

import json

import pytest

from logsmith.domain.config import get_default_config, load_configuration, save_configuration
from logsmith.domain.constants import SeverityLevel
from logsmith.domain.errors import ValidationError
from logsmith.domain.models import CategoryEntry


def test_default_config_values():
    config = get_default_config()

    assert config.log_level is SeverityLevel.INFORMATION
    assert config.write_to_host is True
    assert config.log_file.name == "Results.log"
    assert config.log_file.include_date_in_name is True
    assert config.log_file.overwrite_on_first_write is True
    assert config.message_format == (
        "{Timestamp:yyyy-MM-dd hh:mm:ss.fff} | {CallerName} | {Category} | {MessageLevel} | {Message}"
    )
    assert config.host_text_colors[SeverityLevel.WARNING] == "DarkYellow"
    assert config.category_info["Success"] == CategoryEntry(color="Green")
    assert config.default_category() is None


def test_default_config_is_fresh_each_call():
    first = get_default_config()
    first.category_info.clear()

    assert get_default_config().category_info


def test_missing_file_returns_defaults(tmp_path):
    assert load_configuration(str(tmp_path / "absent.json")) == get_default_config()


@pytest.mark.parametrize("content", ["{ incomplete json ", "[1, 2, 3]"])
def test_corrupted_file_returns_defaults(tmp_path, content):
    path = tmp_path / "config.json"
    path.write_text(content, encoding="utf-8")

    assert load_configuration(str(path)) == get_default_config()


def test_partial_file_is_merged_over_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "log_level": "Debug",
        "log_file": {"name": "custom.log"},
        "legacy_option": True,
    }), encoding="utf-8")

    config = load_configuration(str(path))

    assert config.log_level is SeverityLevel.DEBUG
    assert config.log_file.name == "custom.log"
    assert config.log_file.include_date_in_name is True
    assert "Progress" in config.category_info


def test_invalid_value_in_file_raises(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"log_level": "Chatty"}), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_configuration(str(path))


def test_save_and_load_round_trip(tmp_path):
    config = get_default_config()
    config.log_level = SeverityLevel.VERBOSE
    config.category_info["Build"] = CategoryEntry(color="Blue", is_default=True)
    path = tmp_path / "nested" / "config.json"

    save_configuration(config, str(path))

    assert json.loads(path.read_text(encoding="utf-8"))["log_level"] == "Verbose"
    assert load_configuration(str(path)) == config
