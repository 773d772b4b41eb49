"""codex-update: install the latest codex release for this machine."""

from __future__ import annotations

import logging
from pathlib import Path

from codex_control.io.files import DEFAULT_WORKSPACE, TARGET_BINARY, cleanup_workspace, prepare_workspace
from codex_control.io.output import Printer
from codex_control.release.client import ReleaseClient, ReleaseError
from codex_control.release.installer import Installer, InstallError
from codex_control.release.platform import Platform, PlatformError

logger = logging.getLogger(__name__)

COMMAND = "codex-update"
DEFAULTS = {"verbosity": 1, "github-token": ""}


def run(
    printer: Printer,
    token: str = "",
    workspace: Path = DEFAULT_WORKSPACE,
    target: Path = TARGET_BINARY,
) -> int:
    try:
        workdir = prepare_workspace(workspace)
    except OSError as exc:
        logger.error("failed to prepare workspace: %s", exc)
        return 1
    try:
        try:
            platform = Platform.detect()
        except PlatformError as exc:
            logger.error("failed to resolve platform: %s", exc)
            return 1
        installer = Installer(ReleaseClient(token=token or None), workdir, target)
        try:
            result = installer.install_latest(platform)
        except (ReleaseError, InstallError, OSError) as exc:
            logger.error("installation failed: %s", exc)
            return 1
    finally:
        cleanup_workspace(workdir, workspace)

    logger.info("installed codex %s at %s", result.version, result.target)
    printer.print(
        {"workspace": str(workdir), "target": result.target, "archive": result.archive},
        result,
    )
    return 0
