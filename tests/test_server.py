import logging
from logging.handlers import RotatingFileHandler

import pytest

from dungeonkit.server import _configure_logging


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
        if h not in saved_handlers:
            h.close()
    for h in saved_handlers:
        root.addHandler(h)
    root.setLevel(saved_level)


def test_configure_logging_writes_rotating_file(tmp_path, restore_root_logging):
    path = _configure_logging(str(tmp_path))
    root = restore_root_logging
    assert path == str(tmp_path / "app.log")
    kinds = [type(h) for h in root.handlers]
    assert RotatingFileHandler in kinds
    assert len(root.handlers) == 2

    logging.getLogger("dungeonkit.test").info("hello from test")
    for h in root.handlers:
        h.flush()
    assert "hello from test" in (tmp_path / "app.log").read_text()


def test_configure_logging_is_idempotent(tmp_path, restore_root_logging):
    _configure_logging(str(tmp_path))
    _configure_logging(str(tmp_path))
    assert len(restore_root_logging.handlers) == 2
