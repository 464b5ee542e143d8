"""
project: Dungeon Kit
module: __init__.py
License: MIT

Flask application factory and service wiring.

The generator itself lives in ``dungeonkit.dungeon`` and has no Flask
dependency. This module builds the HTTP service around it: configuration is
sourced from environment variables (optionally from a .env file) and a single
``DungeonSession`` backed by an in-memory scene is attached to the app.
"""

import os

from dotenv import load_dotenv
from flask import Flask

from dungeonkit.dungeon.materializer import InMemoryMaterializer
from dungeonkit.dungeon.pipeline import DungeonSession

# Load .env if present so HOST, PORT and DUNGEONKIT_* can be supplied without
# exporting shell variables during development.
load_dotenv()

# Instance-relative config so ./instance holds runtime files (app.log).
app = Flask(__name__, instance_relative_config=True)

try:
    os.makedirs(app.instance_path, exist_ok=True)
except OSError:
    # Read-only checkouts still serve requests; only file logging is lost.
    pass

app.config.update(
    HOST=os.getenv("HOST", "0.0.0.0"),
    PORT=int(os.getenv("PORT", "5000")),
    # Generation defaults / flags
    DUNGEON_DEFAULT_STYLE=os.getenv("DUNGEON_DEFAULT_STYLE", "stone").lower(),
    DUNGEON_ENFORCE_RANGES=os.getenv("DUNGEON_ENFORCE_RANGES", "1") == "1",
)

app.extensions["dungeon_session"] = DungeonSession(InMemoryMaterializer())

from dungeonkit.routes.dungeon_api import bp_dungeon  # noqa: E402

app.register_blueprint(bp_dungeon)


def get_session() -> DungeonSession:
    """Return the app's current-dungeon slot."""
    return app.extensions["dungeon_session"]


def create_app(config_overrides=None):
    """Return the Flask app instance with optional config overrides applied.

    A fresh ``DungeonSession`` is installed on every call so test runs do not
    inherit a dungeon from a previous app user.
    """
    if config_overrides:
        app.config.update(config_overrides)
    app.extensions["dungeon_session"] = DungeonSession(InMemoryMaterializer())
    return app
