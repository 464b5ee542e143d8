"""
project: Dungeon Kit
module: dungeon_api.py
License: MIT

Dungeon generation API routes.

The app holds one "current dungeon" (a DungeonSession). Generating replaces
it wholesale, DELETE clears it, and GET returns it. Requests are serialized
with a module-level lock since the session is shared across worker threads.
"""

import hashlib
import logging
import secrets
import threading

from flask import Blueprint, current_app, jsonify, request

from dungeonkit.dungeon.config import DungeonConfig
from dungeonkit.dungeon.styles import catalog_snapshot
from dungeonkit.exceptions import InvalidConfigError
from dungeonkit.logging_utils import get_logger

bp_dungeon = Blueprint("dungeon_api", __name__)

logger = logging.getLogger(__name__)
_log = get_logger("dungeon_api")

_session_lock = threading.Lock()

MAX_SEED = 2**63 - 1


def _coerce_seed(payload_seed):
    """Convert provided seed (int or str) into a bounded non-negative int.

    Missing or blank seeds get a fresh random one; digit strings are taken
    literally; any other string is hashed so names like "goblin-caves" are
    reproducible.
    """
    if payload_seed is None or isinstance(payload_seed, bool):
        return secrets.randbelow(1_000_000) + 1
    if isinstance(payload_seed, int):
        return payload_seed % MAX_SEED
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return secrets.randbelow(1_000_000) + 1
        if s.isdigit():
            return int(s) % MAX_SEED
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % MAX_SEED
    raise InvalidConfigError("seed", f"unsupported seed type {type(payload_seed).__name__}")


def _session():
    return current_app.extensions["dungeon_session"]


def _bad_config(exc: InvalidConfigError):
    _log.warn(event="config_rejected", field=exc.field, reason=exc.message)
    return jsonify({"error": exc.message, "field": exc.field}), 400


@bp_dungeon.route("/api/dungeon/styles", methods=["GET"])
def list_styles():
    """Return the style catalog: {style: {floor, wall, accent, description}}."""
    return jsonify(catalog_snapshot())


@bp_dungeon.route("/api/dungeon/generate", methods=["POST"])
def generate():
    """Generate a new dungeon, replacing the current one.

    Body JSON (all optional): any DungeonConfig field plus
      { "seed": <int|str|null> }
    Response: the plan dict, including footprints and metrics.
    """
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return jsonify({"error": "body must be a JSON object", "field": None}), 400
    data = dict(data)
    data.setdefault("style", current_app.config.get("DUNGEON_DEFAULT_STYLE", "stone"))
    try:
        seed = _coerce_seed(data.pop("seed", None))
        config = DungeonConfig.from_mapping(data)
        config.validate(ranges=bool(current_app.config.get("DUNGEON_ENFORCE_RANGES", True)))
    except InvalidConfigError as exc:
        return _bad_config(exc)

    with _session_lock:
        plan = _session().regenerate(config, seed=seed)
    logger.info("Generated dungeon seed=%s rooms=%s", plan.seed, len(plan.rooms))
    return jsonify(plan.to_dict())


@bp_dungeon.route("/api/dungeon/plan", methods=["GET"])
def current_plan():
    with _session_lock:
        plan = _session().plan
    if plan is None:
        return jsonify({"error": "no dungeon generated"}), 404
    return jsonify(plan.to_dict())


@bp_dungeon.route("/api/dungeon/plan", methods=["DELETE"])
def clear_plan():
    """Clear the current dungeon. Idempotent: clearing nothing still returns 200."""
    with _session_lock:
        had_plan = _session().plan is not None
        _session().clear()
    return jsonify({"cleared": had_plan})
