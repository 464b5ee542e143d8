import json

import pytest

from dungeonkit import logging_utils
from dungeonkit.logging_utils import get_logger


def test_key_value_format():
    line = logging_utils._format("info", event="dungeon generated", rooms=7, skipped=None)
    assert line.startswith("level=info ts=")
    assert "event=dungeon_generated" in line
    assert "rooms=7" in line
    assert "skipped" not in line


def test_json_format(monkeypatch):
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    rec = json.loads(logging_utils._format("warn", event="room_slot_dropped", slot=3))
    assert rec["level"] == "warn"
    assert rec["slot"] == 3


def test_level_threshold(capsys):
    logging_utils.set_level("warn")
    log = get_logger("layout")
    log.info(event="hidden")
    log.warn(event="shown")
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "event=shown" in out and "logger=layout" in out


def test_errors_go_to_stderr(capsys):
    get_logger("api").error(event="boom")
    captured = capsys.readouterr()
    assert "event=boom" in captured.err
    assert captured.out == ""


def test_bind_adds_context(capsys):
    get_logger("pipeline").bind(seed=42).info(event="phase")
    assert "seed=42" in capsys.readouterr().out


def test_get_logger_is_cached():
    assert get_logger("layout") is get_logger("layout")


def test_unknown_level_rejected():
    with pytest.raises(ValueError):
        logging_utils.set_level("verbose")
