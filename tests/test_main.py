import json

import pytest

from main import main


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


def _write_config(path, **overrides):
    data = {"scenario": "Cli Run", "principal": 10000, "contribution": 500}
    data.update(overrides)
    path.write_text(json.dumps(data))
    return str(path)


def test_target_mode_writes_chart_and_log(workdir):
    config_path = _write_config(workdir / "config.json")
    assert main([config_path]) == 0
    assert list(workdir.glob("wcir_Cli_Run_*_TRAJ.png"))
    assert list(workdir.glob("wcir_log_*.log"))


def test_future_value_mode(workdir):
    config_path = _write_config(workdir / "fv.json", mode="future_value", horizon_years=10)
    assert main([config_path]) == 0
    assert list(workdir.glob("wcir_Cli_Run_*_FV.png"))


def test_defaults_to_config_json_in_cwd(workdir):
    _write_config(workdir / "config.json")
    assert main([]) == 0


def test_display_name_is_remembered(workdir):
    assert main([_write_config(workdir / "a.json", first_name="Tom")]) == 0
    stored = json.loads((workdir / ".wcir_profile.json").read_text())
    assert stored == {"first_name": "Tom"}
    assert main([_write_config(workdir / "b.json")]) == 0


def test_missing_config_returns_error(workdir):
    assert main([str(workdir / "missing.json")]) == 1


def test_invalid_config_returns_error(workdir):
    assert main([_write_config(workdir / "bad.json", currency="JPY")]) == 1


def test_minus_one_hundred_percent_inflation_still_charts(workdir):
    config_path = _write_config(workdir / "config.json", inflation_pct=-100)
    assert main([config_path]) == 0
    assert list(workdir.glob("wcir_Cli_Run_*_TRAJ.png"))
