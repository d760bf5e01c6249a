import importlib
import json
import sys

import pytest

# We import run.py as a module and exercise parse_args + main with a patched
# start_server so we do not actually start networking.


@pytest.fixture()
def run_module(monkeypatch):
    # Ensure a clean import each time (important because run.py reads VERSION once)
    if "run" in sys.modules:
        del sys.modules["run"]
    mod = importlib.import_module("run")
    return mod


@pytest.fixture()
def fake_server(monkeypatch):
    calls = {}

    def fake_start_server(host, port, debug):  # signature match
        calls["called"] = True
        calls["host"] = host
        calls["port"] = port
        calls["debug"] = debug

    import lavamaze.server as server_mod

    monkeypatch.setattr(server_mod, "start_server", fake_start_server)
    return calls


def test_version_flag_outputs_version(run_module, capsys):
    ver = run_module.__version__
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(["--version"])
    assert exc.value.code == 0
    captured = capsys.readouterr().out
    assert ver in captured
    assert "Lava Maze" in captured


def test_default_command_is_server(run_module):
    ns = run_module.parse_args([])
    assert ns.command == "server"


def test_server_main_invokes_start_server(monkeypatch, run_module, fake_server):
    monkeypatch.setenv("PORT", "5555")
    monkeypatch.setenv("HOST", "127.0.0.1")
    exit_code = run_module.main(["server"])
    assert exit_code == 0
    assert fake_server == {"called": True, "host": "127.0.0.1", "port": 5555, "debug": False}


def test_server_flags_override_env(monkeypatch, run_module, fake_server):
    monkeypatch.setenv("PORT", "5555")
    run_module.main(["server", "--port", "6000", "--host", "0.0.0.0", "--debug"])
    assert fake_server["port"] == 6000
    assert fake_server["host"] == "0.0.0.0"
    assert fake_server["debug"] is True


def test_env_file_argument(monkeypatch, tmp_path, run_module, fake_server):
    env_file = tmp_path / ".env"
    env_file.write_text("PORT=6001\n")
    monkeypatch.delenv("PORT", raising=False)
    run_module.main(["--env-file", str(env_file), "server"])
    assert fake_server["port"] == 6001
    monkeypatch.delenv("PORT", raising=False)


def test_generate_json(run_module, capsys):
    assert run_module.main(["generate", "--seed", "42", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["seed"] == 42
    assert len(data["grid"]) == 35
    assert "metrics" in data


def test_generate_ascii(run_module, capsys):
    assert run_module.main(["generate", "--seed", "42", "--width", "30", "--height", "20"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    grid_lines = lines[:-1]
    assert len(grid_lines) == 20
    assert all(len(line) == 30 for line in grid_lines)
    assert sum(line.count("@") for line in grid_lines) == 1
    assert sum(line.count("E") for line in grid_lines) == 1
    assert lines[-1].startswith("seed=42 ")


def test_generate_invalid_size_fails(run_module, capsys):
    assert run_module.main(["generate", "--seed", "1", "--width", "3"]) == 1
    assert "[ERROR]" in capsys.readouterr().err


def test_generate_exhausted_fails(monkeypatch, run_module, capsys):
    monkeypatch.setenv("DUNGEON_MIN_EXIT_DISTANCE", "1000")
    monkeypatch.setenv("DUNGEON_MAX_ATTEMPTS", "2")
    assert run_module.main(["generate", "--seed", "1"]) == 1
    assert "failed after 2 attempts" in capsys.readouterr().err


def test_diagnose_seeds(run_module, capsys):
    assert run_module.main(["diagnose", "42", "7"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert [r["seed"] for r in data["results"]] == [42, 7]
    assert all(r["ok"] for r in data["results"])
