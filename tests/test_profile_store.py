import json

from profile_store import load_display_name, save_display_name


def test_round_trip(tmp_path):
    path = str(tmp_path / "profile.json")
    assert save_display_name("Tom", path) is True
    assert load_display_name(path) == "Tom"
    with open(path, encoding="utf-8") as f:
        assert json.load(f) == {"first_name": "Tom"}


def test_missing_file_gives_empty_name(tmp_path):
    assert load_display_name(str(tmp_path / "absent.json")) == ""


def test_empty_name_is_not_written(tmp_path):
    path = tmp_path / "profile.json"
    assert save_display_name("", str(path)) is False
    assert not path.exists()


def test_corrupt_file_is_ignored(tmp_path):
    path = tmp_path / "profile.json"
    path.write_text("{oops")
    assert load_display_name(str(path)) == ""

    path.write_text('["Tom"]')
    assert load_display_name(str(path)) == ""

    path.write_text('{"first_name": 42}')
    assert load_display_name(str(path)) == ""


def test_unwritable_location_is_ignored(tmp_path):
    path = tmp_path / "missing_dir" / "profile.json"
    assert save_display_name("Tom", str(path)) is False


def test_default_location_uses_home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert save_display_name("Ana") is True
    assert load_display_name() == "Ana"
