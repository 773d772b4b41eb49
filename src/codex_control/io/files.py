"""Filesystem helpers: atomic copies and the shared install workspace."""

import os
import shutil
import tempfile
from pathlib import Path

DEFAULT_WORKSPACE = Path("/tmp/codex-control")
TARGET_BINARY = Path("/usr/bin/codex")


def copy_file(src: Path, dst: Path, mode: int) -> None:
    """Copy src to dst atomically with the given permission bits."""
    dst.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=dst.parent, prefix="codex-copy-")
    try:
        with os.fdopen(fd, "wb") as out, open(src, "rb") as source:
            shutil.copyfileobj(source, out)
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, dst)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def prepare_workspace(path: Path = DEFAULT_WORKSPACE) -> Path:
    """Make sure the workspace directory exists and is empty."""
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def cleanup_workspace(path: Path, workspace: Path = DEFAULT_WORKSPACE) -> None:
    """Remove the workspace. Refuses to touch any other directory."""
    if Path(os.path.normpath(path)) != Path(os.path.normpath(workspace)):
        return
    shutil.rmtree(path, ignore_errors=True)
