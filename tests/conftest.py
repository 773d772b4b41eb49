"""Pytest configuration and shared fixtures for codex-control tests."""

import pytest

import codex_control.io.logging_setup
import codex_control.io.settings


# ---------------------------------------------------------------------------
# Isolation fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def isolated_logging(tmp_path, monkeypatch):
    """Send any configured log file into tmp and undo handler wiring afterwards."""
    monkeypatch.setenv("CODEX_CONTROL_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("CODEX_CONTROL_LOG_FILE", raising=False)
    monkeypatch.delenv("CODEX_CONTROL_LOG_LEVEL", raising=False)
    yield
    codex_control.io.logging_setup.reset()


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    """Point settings at a temporary XDG_CONFIG_HOME (never /mnt/config)."""
    home = tmp_path / "config"
    monkeypatch.setattr(codex_control.io.settings, "PREFERRED_BASE_DIR", tmp_path / "no-mnt-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home))
    return home


@pytest.fixture
def auth_dir(tmp_path):
    """Auth directory holding two profiles."""
    root = tmp_path / "auths"
    root.mkdir()
    (root / "work.json").write_text('{"token": "work"}', encoding="utf-8")
    (root / "personal.json").write_text('{"token": "personal"}', encoding="utf-8")
    return root
