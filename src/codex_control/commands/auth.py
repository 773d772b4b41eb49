"""codex-auth: pick an auth profile and install it as ~/.codex/auth.json."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from pathlib import Path

from codex_control.auth.profiles import AuthError, AuthFile, CopyResult, install, list_files, validate_root
from codex_control.auth.usage import UsageTracker
from codex_control.io.output import Printer
from codex_control.tui.menu.app import MenuError, start
from codex_control.tui.menu.types import Action, Entry, MenuConfig, PanelUpdate

logger = logging.getLogger(__name__)

COMMAND = "codex-auth"
DEFAULTS = {"verbosity": 1, "auths-path": ""}
ACTION_TITLE = "Copy auth"


def format_last_used(ts: datetime | None) -> str:
    if ts is None:
        return "never used"
    return "Last used " + ts.astimezone().strftime("%a, %d %b %Y %H:%M")


def _order_key(tracker: UsageTracker):
    # Never-used profiles first (by name), then the least recently used.
    def key(file: AuthFile):
        ts = tracker.last_used(file.name)
        return (ts is not None, ts.timestamp() if ts is not None else 0.0, file.name)

    return key


def build_entries(root: Path, tracker: UsageTracker) -> list[Entry[AuthFile]]:
    files = list_files(root)
    if not files:
        raise AuthError(f"{root} contains no files")
    files.sort(key=_order_key(tracker))
    return [
        Entry(
            title=file.name,
            description=format_last_used(tracker.last_used(file.name)),
            payload=file,
        )
        for file in files
    ]


def _copy(file: AuthFile, tracker: UsageTracker, home: Path | None) -> CopyResult:
    result = install(file.path, home=home)
    try:
        tracker.touch(file.name)
    except (OSError, ValueError) as exc:
        # The copy already happened; a stale timestamp only affects ordering.
        logger.warning("could not record usage for %s: %s", file.name, exc)
    return result


def build_config(root: Path, tracker: UsageTracker, home: Path | None = None) -> MenuConfig:
    async def load() -> list[Entry[AuthFile]]:
        return await asyncio.to_thread(build_entries, root, tracker)

    async def use_auth_file(entry: Entry) -> PanelUpdate:
        file = entry.payload
        if not isinstance(file, AuthFile):
            return PanelUpdate(
                title=ACTION_TITLE,
                content="Invalid selection payload",
                error=TypeError("invalid payload"),
            )
        try:
            result = await asyncio.to_thread(_copy, file, tracker, home)
        except OSError as exc:
            return PanelUpdate(title=ACTION_TITLE, content=str(exc), error=exc)
        return PanelUpdate(
            title=ACTION_TITLE,
            content=f"Copied {file.name} to {result.destination}",
            payload=result,
            exit_after=True,
        )

    return MenuConfig(
        loader=load,
        actions=[Action(label="Use auth file", run=use_auth_file)],
        list_title="Codex auth profiles",
        list_help=[
            "Use ↑/↓ or digits + Enter to highlight a profile.",
            "Press R to rescan the folder, Ctrl+C to abort.",
        ],
        actions_title="Auth actions",
        actions_help=["Enter copies the highlighted profile to ~/.codex/auth.json."],
        panel_placeholder="Selections show copy results here.",
        disable_panel=True,
    )


def run(auths_path: str, printer: Printer, home: Path | None = None) -> int:
    try:
        root = validate_root(auths_path)
    except AuthError as exc:
        logger.error("invalid auth directory: %s", exc)
        return 1
    try:
        tracker = UsageTracker.load(root)
    except (OSError, ValueError) as exc:
        logger.error("failed to load auth usage data: %s", exc)
        return 1

    try:
        result = start(build_config(root, tracker, home=home))
    except MenuError as exc:
        logger.error("menu failed: %s", exc)
        return 1
    if not result.success:
        logger.error("operation cancelled before copying an auth file")
        return 1
    if not isinstance(result.action_payload, CopyResult):
        logger.error("unexpected action payload type %s", type(result.action_payload).__name__)
        return 1

    printer.print({"auths_path": str(root)}, result.action_payload)
    return 0
