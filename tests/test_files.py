"""Tests for atomic copies and the install workspace."""

import stat

from codex_control.io.files import cleanup_workspace, copy_file, prepare_workspace


def test_copy_file_sets_mode_and_replaces(tmp_path):
    src = tmp_path / "src.json"
    src.write_text("new", encoding="utf-8")
    dst = tmp_path / "out" / "dst.json"
    dst.parent.mkdir()
    dst.write_text("old", encoding="utf-8")

    copy_file(src, dst, 0o600)

    assert dst.read_text(encoding="utf-8") == "new"
    assert stat.S_IMODE(dst.stat().st_mode) == 0o600
    assert sorted(p.name for p in dst.parent.iterdir()) == ["dst.json"]


def test_prepare_workspace_empties_existing_directory(tmp_path):
    workspace = tmp_path / "ws"
    workspace.mkdir()
    (workspace / "stale.tar.gz").write_bytes(b"x")
    assert prepare_workspace(workspace) == workspace
    assert list(workspace.iterdir()) == []


def test_cleanup_only_removes_the_workspace(tmp_path):
    workspace = tmp_path / "ws"
    other = tmp_path / "other"
    workspace.mkdir()
    other.mkdir()
    cleanup_workspace(other, workspace=workspace)
    assert other.exists()
    cleanup_workspace(workspace / ".." / "ws", workspace=workspace)
    assert not workspace.exists()
