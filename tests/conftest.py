import os
import random
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from dungeonkit import create_app, logging_utils  # noqa: E402
from dungeonkit.dungeon.config import DungeonConfig  # noqa: E402


class CenteredRandom(random.Random):
    """Deterministic source: uniform() returns the interval midpoint, random() 0.5."""

    def uniform(self, a, b):
        return (a + b) / 2

    def random(self):
        return 0.5


class ScriptedRandom(random.Random):
    """Replays fixed random() values; uniform() maps them onto [a, b]."""

    def __init__(self, values):
        super().__init__(0)
        self._values = list(values)
        self._idx = 0

    def random(self):
        v = self._values[self._idx % len(self._values)]
        self._idx += 1
        return v

    def uniform(self, a, b):
        return a + (b - a) * self.random()


@pytest.fixture()
def centered_rng():
    return CenteredRandom()


@pytest.fixture()
def scripted_rng():
    return ScriptedRandom


@pytest.fixture()
def default_config():
    return DungeonConfig()


@pytest.fixture()
def test_app():
    app = create_app({"TESTING": True})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _structured_log_defaults(monkeypatch):
    # Tests assert on key=value output at info level; CLI runs may change both.
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
