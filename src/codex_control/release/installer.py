"""Download, extract, and install codex release binaries."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import tarfile
import tempfile
from dataclasses import dataclass
from pathlib import Path

from codex_control.release.client import Asset, Release, ReleaseClient
from codex_control.release.platform import Platform

logger = logging.getLogger(__name__)

BINARY_PREFIX = "codex"
INSTALL_COMMAND = ("sudo", "install", "-m", "0755")


class InstallError(Exception):
    pass


@dataclass(frozen=True)
class InstallResult:
    version: str
    target: str
    archive: str
    bytes: int


def extract_binary(archive: Path, dest_dir: Path) -> Path:
    """Extract the first regular file named codex* from a .tar.gz archive."""
    with tarfile.open(archive, "r:gz") as tar:
        for member in tar:
            if not member.isreg():
                continue
            if not os.path.basename(member.name).startswith(BINARY_PREFIX):
                continue
            source = tar.extractfile(member)
            if source is None:
                continue
            fd, tmp_path = tempfile.mkstemp(dir=dest_dir, prefix="codex-bin-")
            try:
                with os.fdopen(fd, "wb") as out, source:
                    shutil.copyfileobj(source, out)
                os.chmod(tmp_path, 0o755)
            except BaseException:
                os.unlink(tmp_path)
                raise
            return Path(tmp_path)
    raise InstallError(f"codex binary not found in {archive.name}")


class Installer:
    """Installs a release asset to target_path using sudo install."""

    def __init__(
        self,
        client: ReleaseClient,
        workdir: Path,
        target_path: Path,
        install_command: tuple[str, ...] = INSTALL_COMMAND,
    ):
        self.client = client
        self.workdir = workdir
        self.target_path = target_path
        self.install_command = install_command

    def install_latest(self, platform: Platform) -> InstallResult:
        release = self.client.latest()
        archive = platform.archive_name()
        asset = release.find_asset(archive)
        if asset is None:
            raise InstallError(f"asset {archive} not found in release {release.tag}")
        return self.install_release(release, asset)

    def install_release(self, release: Release, asset: Asset) -> InstallResult:
        self.workdir.mkdir(parents=True, exist_ok=True)
        logger.info("downloading %s (%s)", asset.name, release.tag)
        fd, archive_path = tempfile.mkstemp(dir=self.workdir, prefix="codex-archive-", suffix=".tar.gz")
        archive = Path(archive_path)
        try:
            with os.fdopen(fd, "wb") as out, self.client.open(asset.url) as response:
                shutil.copyfileobj(response, out)
            logger.info("extracting codex from %s", archive)
            binary = extract_binary(archive, self.workdir)
            try:
                self._install(binary)
            finally:
                binary.unlink(missing_ok=True)
        finally:
            archive.unlink(missing_ok=True)
        return InstallResult(
            version=release.tag,
            target=str(self.target_path),
            archive=asset.name,
            bytes=asset.size,
        )

    def _install(self, binary: Path) -> None:
        self.target_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("installing codex to %s", self.target_path)
        command = [*self.install_command, str(binary), str(self.target_path)]
        completed = subprocess.run(command, check=False)
        if completed.returncode != 0:
            raise InstallError(f"{' '.join(command)} exited with status {completed.returncode}")
