"""Minimal structured logging helper.

Emits key=value pairs (or one JSON object per line) with a timestamp and
level, so generation events stay easy to grep and parse.

Usage:
    from dungeonkit.logging_utils import get_logger
    log = get_logger("layout")
    log.warn(event="room_slot_dropped", slot=4, attempts=50)

Environment:
    DUNGEONKIT_LOG_LEVEL   debug | info | warn | error (default: info)
    DUNGEONKIT_LOG_JSON    1/true/yes/on for JSON lines

All non-numeric values are str()'d. Reserved keys: level, ts.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("DUNGEONKIT_LOG_LEVEL", "info").lower(), 20)
JSON_MODE = os.getenv("DUNGEONKIT_LOG_JSON", "0") in ("1", "true", "TRUE", "yes", "on")


def _format(level: str, **fields):
    if JSON_MODE:
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=str)
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            s = str(v).replace(" ", "_")
            parts.append(f"{k}={s}")
    return " ".join(parts)


def set_level(level: str) -> None:
    """Change the threshold at runtime (CLI --log-level)."""
    global CURRENT_LEVEL
    key = level.lower()
    if key not in LEVELS:
        raise ValueError(f"unknown log level {level!r}; expected one of {sorted(LEVELS)}")
    CURRENT_LEVEL = LEVELS[key]


class _Logger:
    def __init__(self, name: str | None = None, context: dict | None = None):
        self.name = name or "dungeonkit"
        self.context = dict(context or {})

    def bind(self, **context):
        """Return a logger that adds ``context`` to every record."""
        merged = dict(self.context)
        merged.update(context)
        return _Logger(self.name, merged)

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < CURRENT_LEVEL:
            return
        record = {"logger": self.name}
        record.update(self.context)
        record.update(fields)
        print(_format(lvl, **record), file=sys.stdout if lvl != "error" else sys.stderr)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("dungeonkit")
