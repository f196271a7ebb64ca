from __future__ import annotations

"""
Integration tests for the MessageLogger facade.

Exercises the full path from the public API to a real log file:
configuration, rendering, session overwrite semantics, silent file
degradation, instance independence and concurrent writers.
"""

import importlib.util
import os
import threading
from datetime import date

import pytest

from logsmith import MessageLogger, SeverityLevel, ValidationError


@pytest.fixture
def file_logger(tmp_path, host, streams, fixed_now) -> MessageLogger:
    """MessageLogger writing through the real FileWriter into tmp_path."""
    log = MessageLogger(base_dir=str(tmp_path), host_sink=host, stream_sink=streams,
                        clock=lambda: fixed_now)
    log.configure(
        log_file_name="app.log",
        exclude_date_from_file_name=True,
        overwrite_log_file=True,
        message_format="{MessageLevel} | {Message}",
    )
    return log


def _read(path) -> list:
    return path.read_text(encoding="utf-8").splitlines()


def test_first_write_overwrites_previous_session(tmp_path, file_logger):
    (tmp_path / "app.log").write_text("from an earlier run\n", encoding="utf-8")

    file_logger.info("A")
    file_logger.warning("B")

    assert _read(tmp_path / "app.log") == ["INFORMATION | A", "WARNING | B"]


def test_new_logger_instance_is_a_new_session(tmp_path, file_logger, host, fixed_now):
    file_logger.info("first session")

    second = MessageLogger(base_dir=str(tmp_path), host_sink=host, clock=lambda: fixed_now)
    second.configure(log_file_name="app.log", exclude_date_from_file_name=True,
                     message_format="{Message}")
    second.write("second session")

    assert _read(tmp_path / "app.log") == ["second session"]


def test_append_mode_keeps_existing_content(tmp_path, file_logger):
    (tmp_path / "app.log").write_text("kept\n", encoding="utf-8")
    file_logger.configure(append_to_log_file=True)

    file_logger.error("E")

    assert _read(tmp_path / "app.log") == ["kept", "ERROR | E"]


def test_unwritable_file_does_not_interrupt_host_output(file_logger, host):
    file_logger.set_log_file_name(os.path.join("no", "such", "dir", "app.log"))

    assert file_logger.error("visible") is True

    assert host.lines == [("ERROR | visible", "DarkRed")]


def test_dated_file_name(tmp_path, file_logger):
    file_logger.configure(include_date_in_file_name=True)

    file_logger.info("dated")

    stamp = date.today().strftime("%Y%m%d")
    assert _read(tmp_path / f"app_{stamp}.log") == ["INFORMATION | dated"]
    assert file_logger.log_file_path == os.path.join(str(tmp_path), f"app_{stamp}.log")


def test_shorthand_methods_and_threshold(file_logger, host):
    file_logger.set_log_level("Warning")

    results = [
        file_logger.error("e"),
        file_logger.warning("w"),
        file_logger.info("i"),
        file_logger.debug("d"),
        file_logger.verbose("v"),
    ]

    assert results == [True, True, False, False, False]
    assert [text for text, _ in host.lines] == ["ERROR | e", "WARNING | w"]


def test_write_rejects_unknown_override(file_logger):
    with pytest.raises(TypeError):
        file_logger.write("x", colour="Red")


def test_write_rejects_invalid_override(file_logger, host):
    with pytest.raises(ValidationError):
        file_logger.write("x", message_level="Loud")

    assert host.lines == []


def test_instances_are_independent(message_logger, tmp_path):
    other = MessageLogger(base_dir=str(tmp_path))

    message_logger.set_log_level("Verbose")

    assert other.get_configuration().log_level is SeverityLevel.INFORMATION


def test_default_format_renders_caller_and_category(message_logger, host, caller):
    message_logger.set_log_file_name("")

    message_logger.write("Deploying", category="Progress")

    text, color = host.lines[0]
    assert text == "2024-01-31 13:05:09.123 | script.py: main | PROGRESS | INFORMATION | Deploying"
    assert color == "DarkCyan"


def _load_module(path, name: str):
    spec = importlib.util.spec_from_file_location(name, str(path))
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_relative_file_stays_put_across_callers_in_other_directories(tmp_path, host):
    """
    A relative name is rooted at the script that set it; emitting from a
    script in another directory neither moves nor truncates the file.
    """
    (tmp_path / "a").mkdir()
    (tmp_path / "b").mkdir()
    (tmp_path / "a" / "writer_a.py").write_text(
        "def setup(log):\n"
        "    log.configure(log_file_name='shared.log', exclude_date_from_file_name=True,\n"
        "                  overwrite_log_file=True, message_format='{Message}')\n"
        "\n"
        "def emit(log, message):\n"
        "    log.write(message)\n",
        encoding="utf-8",
    )
    (tmp_path / "b" / "writer_b.py").write_text(
        "def emit(log, message):\n"
        "    log.write(message)\n",
        encoding="utf-8",
    )
    writer_a = _load_module(tmp_path / "a" / "writer_a.py", "writer_a")
    writer_b = _load_module(tmp_path / "b" / "writer_b.py", "writer_b")

    log = MessageLogger(host_sink=host)
    writer_a.setup(log)
    writer_a.emit(log, "a1")
    writer_b.emit(log, "b1")
    writer_a.emit(log, "a2")

    expected = os.path.join(str(tmp_path), "a", "shared.log")
    assert log.log_file_path == expected
    assert _read(tmp_path / "a" / "shared.log") == ["a1", "b1", "a2"]
    assert not (tmp_path / "b" / "shared.log").exists()


def test_concurrent_writers_produce_whole_lines(tmp_path, file_logger):
    file_logger.configure(append_to_log_file=True, message_format="{Message}")

    def worker(n: int) -> None:
        for i in range(50):
            file_logger.write(f"worker-{n}-{i}")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    lines = _read(tmp_path / "app.log")
    assert len(lines) == 200
    assert sorted(lines) == sorted(f"worker-{n}-{i}" for n in range(4) for i in range(50))
