"""Tests for per-command settings files."""

import json

import pytest

import codex_control.io.settings as settings
from codex_control.io.settings import SettingsError


def test_config_dir_uses_xdg_when_mnt_config_missing(config_home):
    assert settings.get_config_dir("codex-auth") == config_home / "codex-control" / "codex-auth"


def test_config_dir_prefers_mnt_config(tmp_path, monkeypatch):
    base = tmp_path / "mnt-config"
    base.mkdir()
    monkeypatch.setattr(settings, "PREFERRED_BASE_DIR", base)
    assert settings.get_config_path("/usr/local/bin/codex-update") == base / ".codex-update" / "settings.json"


@pytest.mark.parametrize("name", ["", ".", ".."])
def test_invalid_command_name(name, config_home):
    with pytest.raises(SettingsError):
        settings.get_config_dir(name)


def test_load_creates_file_with_defaults(config_home):
    data = settings.load("codex-yolo", {"verbosity": 1, "codex-binary": "codex"})
    assert data == {"verbosity": 1, "codex-binary": "codex"}
    path = settings.get_config_path("codex-yolo")
    assert json.loads(path.read_text(encoding="utf-8")) == data


def test_load_backfills_missing_keys_and_keeps_values(config_home):
    path = settings.get_config_path("codex-update-select")
    settings.save_settings(path, {"verbosity": 2, "custom": True})
    data = settings.load("codex-update-select", {"verbosity": 1, "release-limit": 200})
    assert data == {"verbosity": 2, "custom": True, "release-limit": 200}
    assert json.loads(path.read_text(encoding="utf-8")) == data


def test_load_does_not_rewrite_complete_file(config_home):
    path = settings.get_config_path("codex-update")
    path.parent.mkdir(parents=True)
    path.write_text('{"verbosity": 0, "github-token": ""}', encoding="utf-8")
    settings.load("codex-update", {"verbosity": 1, "github-token": ""})
    assert path.read_text(encoding="utf-8") == '{"verbosity": 0, "github-token": ""}'


def test_read_settings(tmp_path):
    path = tmp_path / "settings.json"
    assert settings.read_settings(path) is None
    path.write_text("  \n", encoding="utf-8")
    assert settings.read_settings(path) == {}
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SettingsError):
        settings.read_settings(path)
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(SettingsError, match="expected a JSON object"):
        settings.read_settings(path)


def test_save_settings_leaves_no_temp_files(tmp_path):
    path = tmp_path / "nested" / "settings.json"
    settings.save_settings(path, {"b": 1, "a": 2})
    assert [p.name for p in path.parent.iterdir()] == ["settings.json"]
    assert path.read_text(encoding="utf-8").startswith('{\n  "a": 2')
