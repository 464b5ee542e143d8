import importlib
import json
import sys

import pytest

# Import run.py as a module and exercise parse_args + main with a patched
# start_server so no networking happens.


@pytest.fixture()
def run_module():
    # Clean import each time (run.py reads VERSION once)
    if "run" in sys.modules:
        del sys.modules["run"]
    return importlib.import_module("run")


@pytest.fixture()
def fake_server(monkeypatch):
    calls = {}

    def fake_start_server(host, port, debug):
        calls.update(host=host, port=port, debug=debug)

    import dungeonkit.server as server_mod

    monkeypatch.setattr(server_mod, "start_server", fake_start_server)
    return calls


def test_version_flag_outputs_version(run_module, capsys):
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(["--version"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert run_module.__version__ in out
    assert "Dungeon Kit" in out


def test_default_command_is_generate(run_module):
    assert run_module.parse_args([]).command == "generate"


def test_generate_json_output(run_module, capsys):
    code = run_module.main(["generate", "--style", "crypt", "--rooms", "5", "--seed", "42", "--json"])
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["seed"] == 42
    assert data["config"]["style"] == "crypt"
    assert len(data["rooms"]) <= 5


def test_generate_flags_disable_features(run_module, capsys):
    run_module.main(["generate", "--seed", "3", "--no-torches", "--no-pillars", "--no-treasure", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["decorations"] == []
    assert data["config"]["add_torches"] is False


def test_generate_summary_lists_rooms(run_module, capsys):
    assert run_module.main(["generate", "--seed", "9", "--rooms", "4"]) == 0
    out = capsys.readouterr().out
    assert "Dungeon Kit" in out
    assert "Room  0" in out


def test_room_and_corridor_previews(run_module, capsys):
    run_module.main(["room", "--min-size", "9", "--max-size", "14", "--seed", "1", "--json"])
    room = json.loads(capsys.readouterr().out)
    assert len(room["rooms"]) == 1
    assert {d["kind"] for d in room["decorations"]} == {"pillar"}

    run_module.main(["corridor", "--json"])
    corridor = json.loads(capsys.readouterr().out)
    assert room["rooms"] and corridor["rooms"] == []
    assert len(corridor["corridors"]) == 1


def test_invalid_flags_exit_code(run_module, capsys):
    assert run_module.main(["generate", "--rooms", "99"]) == 2
    assert "room_count" in capsys.readouterr().err


def test_bad_log_level(run_module, capsys):
    assert run_module.main(["--log-level", "loud", "styles"]) == 2


def test_styles_listing(run_module, capsys):
    assert run_module.main(["styles"]) == 0
    out = capsys.readouterr().out
    for name in ("stone", "crypt", "mine", "temple", "sewer"):
        assert name in out


def test_server_main_invokes_start_server(monkeypatch, run_module, fake_server):
    monkeypatch.setenv("PORT", "5555")
    monkeypatch.setenv("HOST", "127.0.0.1")
    assert run_module.main(["server"]) == 0
    assert fake_server == {"host": "127.0.0.1", "port": 5555, "debug": False}


def test_server_flags_override_env(monkeypatch, run_module, fake_server):
    monkeypatch.setenv("PORT", "5555")
    run_module.main(["server", "--port", "8080", "--debug"])
    assert fake_server["port"] == 8080
    assert fake_server["debug"] is True


def test_env_file_argument(monkeypatch, tmp_path, run_module, fake_server):
    env_file = tmp_path / ".env"
    env_file.write_text("PORT=6001\n")
    # setenv then delenv so the value loaded from the file is undone afterwards
    monkeypatch.setenv("PORT", "1")
    monkeypatch.delenv("PORT")
    run_module.main(["--env-file", str(env_file), "server"])
    assert fake_server["port"] == 6001
