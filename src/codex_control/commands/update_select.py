"""codex-update-select: choose a codex release from a menu and install it."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from codex_control.io.files import DEFAULT_WORKSPACE, TARGET_BINARY, cleanup_workspace, prepare_workspace
from codex_control.io.output import Printer
from codex_control.release.client import Asset, Release, ReleaseClient, ReleaseError
from codex_control.release.installer import Installer, InstallError, InstallResult
from codex_control.release.platform import Platform, PlatformError
from codex_control.tui.menu.app import MenuError, start
from codex_control.tui.menu.types import Action, Entry, MenuConfig, PanelUpdate

logger = logging.getLogger(__name__)

COMMAND = "codex-update-select"
DEFAULT_RELEASE_LIMIT = 200
DEFAULTS = {"verbosity": 1, "github-token": "", "release-limit": DEFAULT_RELEASE_LIMIT}
INSTALL_TIMEOUT = 5 * 60
ACTION_TITLE = "Install release"


@dataclass(frozen=True)
class ReleaseChoice:
    release: Release
    asset: Asset


def human_size(size: int) -> str:
    if size <= 0:
        return "unknown size"
    return f"{size / (1024 * 1024):.1f} MiB"


def format_published(ts: datetime | None) -> str:
    if ts is None:
        return "unknown release time"
    return ts.astimezone(timezone.utc).strftime("%a, %d %b %Y %H:%M UTC")


def build_entries(releases: list[Release], archive: str) -> list[Entry[ReleaseChoice]]:
    entries = []
    for release in releases:
        asset = release.find_asset(archive)
        if asset is None:
            continue
        entries.append(
            Entry(
                title=release.tag,
                description=f"{human_size(asset.size)} • {format_published(release.published_at)}",
                badges=("ready",),
                payload=ReleaseChoice(release=release, asset=asset),
            )
        )
    if not entries:
        raise ReleaseError(f"no releases provide {archive}")
    return entries


def build_config(
    client: ReleaseClient,
    installer: Installer,
    platform: Platform,
    limit: int,
) -> MenuConfig:
    archive = platform.archive_name()

    async def load() -> list[Entry[ReleaseChoice]]:
        releases = await asyncio.to_thread(client.list_releases, limit)
        return build_entries(releases, archive)

    async def install_release(entry: Entry) -> PanelUpdate:
        choice = entry.payload
        if not isinstance(choice, ReleaseChoice):
            return PanelUpdate(
                title=ACTION_TITLE,
                content="Invalid choice payload",
                error=TypeError("invalid payload"),
            )
        try:
            result = await asyncio.wait_for(
                asyncio.to_thread(installer.install_release, choice.release, choice.asset),
                timeout=INSTALL_TIMEOUT,
            )
        except asyncio.TimeoutError:
            message = f"install timed out after {INSTALL_TIMEOUT}s"
            return PanelUpdate(title=ACTION_TITLE, content=message, error=message)
        except (ReleaseError, InstallError, OSError) as exc:
            return PanelUpdate(title=ACTION_TITLE, content=str(exc), error=exc)
        return PanelUpdate(
            title=ACTION_TITLE,
            content=f"Version {result.version} installed at {result.target}",
            payload=result,
            exit_after=True,
        )

    return MenuConfig(
        loader=load,
        actions=[Action(label=ACTION_TITLE, run=install_release)],
        list_title="Available Codex releases",
        list_help=[
            "Use ↑/↓ or digits + Enter to highlight a release.",
            "Press R to refresh, Ctrl+C to abort.",
        ],
        actions_title="Release actions",
        actions_help=["Enter installs the highlighted release.", "Esc returns to the release list."],
        panel_placeholder="Action output appears here.",
        disable_panel=True,
    )


def run(
    printer: Printer,
    token: str = "",
    limit: int = DEFAULT_RELEASE_LIMIT,
    workspace: Path = DEFAULT_WORKSPACE,
    target: Path = TARGET_BINARY,
) -> int:
    if limit <= 0:
        limit = DEFAULT_RELEASE_LIMIT
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
        client = ReleaseClient(token=token or None)
        installer = Installer(client, workdir, target)
        try:
            result = start(build_config(client, installer, platform, limit))
        except MenuError as exc:
            logger.error("menu failed: %s", exc)
            return 1
    finally:
        cleanup_workspace(workdir, workspace)

    if not result.success:
        logger.error("operation cancelled before installation")
        return 1
    installed = result.action_payload
    if not isinstance(installed, InstallResult):
        logger.error("unexpected action payload type %s", type(installed).__name__)
        return 1

    printer.print(
        {"workspace": str(workdir), "target": installed.target, "archive": installed.archive},
        installed,
    )
    return 0
