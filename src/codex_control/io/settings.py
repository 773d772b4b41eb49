"""Per-command settings file I/O for codex-control.

Each command owns one JSON settings file. When /mnt/config exists (container
deployments mount their config there) the file lives at
/mnt/config/.<command>/settings.json; otherwise at
XDG_CONFIG_HOME/codex-control/<command>/settings.json.

load() bootstraps the file: missing files are created and missing keys are
back-filled from the command's defaults, so the file on disk always lists
every knob the command understands.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

PREFERRED_BASE_DIR = Path("/mnt/config")
FILE_NAME = "settings.json"


class SettingsError(Exception):
    """Settings file exists but cannot be used."""


def get_config_dir(command: str) -> Path:
    """Return the settings directory for a command."""
    name = Path(command).name
    if not name or name in {".", ".."}:
        raise SettingsError(f"invalid command name {command!r}")
    if PREFERRED_BASE_DIR.is_dir():
        return PREFERRED_BASE_DIR / f".{name}"
    config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "codex-control" / name


def get_config_path(command: str) -> Path:
    return get_config_dir(command) / FILE_NAME


def read_settings(path: Path) -> dict | None:
    """Read a settings file. Returns None when the file does not exist."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SettingsError(f"{path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SettingsError(f"{path}: expected a JSON object, got {type(data).__name__}")
    return data


def save_settings(path: Path, data: dict) -> None:
    """Atomic write of settings dict to JSON file.

    Creates parent directories if needed. Writes to temp file then renames
    to avoid partial writes on crash.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    # Atomic: write temp → rename
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True)
            f.write("\n")
        os.replace(tmp_path, path)
    except Exception:
        # Clean up temp file on failure
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def load(command: str, defaults: dict) -> dict:
    """Load a command's settings, creating or back-filling the file as needed."""
    path = get_config_path(command)
    existing = read_settings(path)
    data = dict(existing or {})
    changed = existing is None
    for key, value in defaults.items():
        if key not in data:
            data[key] = value
            changed = True
    if changed:
        logger.debug("writing settings %s", path)
        save_settings(path, data)
    return data
