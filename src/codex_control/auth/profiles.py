"""Auth profile discovery and installation.

An auth directory holds one credential file per profile. Installing a
profile copies it to ~/.codex/auth.json.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from codex_control.io.files import copy_file

logger = logging.getLogger(__name__)

USAGE_STATE_FILE = ".codex-auth-last-used.json"
AUTH_DIR_NAME = "auths"


class AuthError(Exception):
    """Auth directory is missing, empty, or unusable."""


@dataclass(frozen=True)
class AuthFile:
    name: str
    path: Path
    size: int
    modified: datetime


@dataclass(frozen=True)
class CopyResult:
    source: str
    destination: str
    bytes: int


def _profile_paths(root: Path) -> list[Path]:
    return sorted(
        (p for p in root.iterdir() if p.is_file() and p.name != USAGE_STATE_FILE),
        key=lambda p: p.name,
    )


def list_files(root: Path) -> list[AuthFile]:
    """Regular files in root sorted by name, excluding the usage state file."""
    files = []
    for path in _profile_paths(root):
        stat = path.stat()
        files.append(
            AuthFile(
                name=path.name,
                path=path,
                size=stat.st_size,
                modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            )
        )
    return files


def validate_root(path: str | Path | None) -> Path:
    """Resolve the folder that actually stores auth files.

    A nested "auths" directory with files wins over the given directory.
    """
    if not path:
        raise AuthError("auths path is not set; pass --auths-path or update the settings file")
    root = Path(path).expanduser()
    if not root.exists():
        raise AuthError(f"{root} does not exist")
    if not root.is_dir():
        raise AuthError(f"{root} is not a directory")
    candidates = [root]
    if root.name != AUTH_DIR_NAME:
        candidates.insert(0, root / AUTH_DIR_NAME)
    for candidate in candidates:
        if candidate.is_dir() and _profile_paths(candidate):
            return candidate
    raise AuthError(f"no auth files found inside {root}")


def install(src: Path, home: Path | None = None) -> CopyResult:
    """Copy an auth file into <home>/.codex/auth.json (mode 0600)."""
    home = home if home is not None else Path.home()
    dest_dir = home / ".codex"
    dest_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
    dest = dest_dir / "auth.json"
    size = src.stat().st_size
    copy_file(src, dest, 0o600)
    logger.info("copied %s to %s", src, dest)
    return CopyResult(source=str(src), destination=str(dest), bytes=size)
