import json

import pytest

from delve.cli import main
from delve.config import ENV_OVERRIDES


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ENV_OVERRIDES:
        monkeypatch.delenv(var, raising=False)


def test_json_summary(capsys):
    code = main(["--seed", "3", "--width", "30", "--height", "12", "--rooms", "10", "--json"])
    assert code == 0

    data = json.loads(capsys.readouterr().out)
    assert data["width"] == 30 and data["height"] == 12
    assert data["seed"] == 3
    assert len(data["rows"]) == 12 and all(len(row) == 30 for row in data["rows"])
    assert data["connected"] is True
    assert len(data["upstairs"]) == 1 and len(data["downstairs"]) == 1
    x, y = data["upstairs"][0]
    assert data["rows"][y][x] == "<"


def test_same_seed_prints_same_map(capsys):
    main(["--seed", "11", "--width", "40", "--height", "14"])
    first = capsys.readouterr().out
    main(["--seed", "11", "--width", "40", "--height", "14"])
    assert capsys.readouterr().out == first
    assert len(first.splitlines()) == 14


def test_fog_view_marks_observer(capsys):
    code = main(["--seed", "5", "--width", "40", "--height", "14", "--fog", "--radius", "4"])
    assert code == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 14
    assert sum(line.count("@") for line in lines) == 1
    assert not any("<" in line for line in lines)


def test_invalid_settings_exit_nonzero(capsys):
    assert main(["--width", "5"]) == 1


def test_wrong_typed_config_value_exits_nonzero(tmp_path, caplog):
    path = tmp_path / "level.yaml"
    path.write_text("width: '80'\n", encoding="utf-8")
    assert main(["--config", str(path)]) == 1
    assert "Invalid generation settings" in caplog.text


def test_seed_flag_parsed_like_env_seed(capsys, monkeypatch):
    main(["--seed", " 5", "--width", "30", "--height", "12", "--json"])
    from_flag = json.loads(capsys.readouterr().out)
    assert from_flag["seed"] == 5

    monkeypatch.setenv("DELVE_SEED", "5")
    main(["--width", "30", "--height", "12", "--json"])
    assert json.loads(capsys.readouterr().out) == from_flag
