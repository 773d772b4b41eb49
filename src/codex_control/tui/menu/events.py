"""Type-safe events and commands for the selection menu.

// [LAW:one-source-of-truth] kind is set by subclass, not caller.
// [LAW:single-enforcer] Only the menu state machine consumes events; only
// the menu app executes commands.

Events flow in (keys, resizes, worker completions); commands flow out
(start a load, run an action, quit). This module is STABLE.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from codex_control.tui.menu.types import Action, Entry, PanelUpdate


# ─── Events ───────────────────────────────────────────────────────────────────


class MenuEventKind(Enum):
    """Discriminator for menu events."""

    MOVE = "move"
    DIGIT = "digit"
    CONFIRM = "confirm"
    BACK = "back"
    REFRESH = "refresh"
    QUIT = "quit"
    RESIZE = "resize"
    ENTRIES_LOADED = "entries_loaded"
    PANEL_UPDATED = "panel_updated"


@dataclass(frozen=True)
class MenuEvent:
    """Base class for all menu events."""

    kind: MenuEventKind = field(init=False)


@dataclass(frozen=True)
class MoveEvent(MenuEvent):
    """Cursor movement; delta is -1 (up) or +1 (down)."""

    delta: int
    kind: MenuEventKind = field(default=MenuEventKind.MOVE, init=False)


@dataclass(frozen=True)
class DigitEvent(MenuEvent):
    """A digit typed toward a numeric jump target."""

    digit: str
    kind: MenuEventKind = field(default=MenuEventKind.DIGIT, init=False)


@dataclass(frozen=True)
class ConfirmEvent(MenuEvent):
    kind: MenuEventKind = field(default=MenuEventKind.CONFIRM, init=False)


@dataclass(frozen=True)
class BackEvent(MenuEvent):
    kind: MenuEventKind = field(default=MenuEventKind.BACK, init=False)


@dataclass(frozen=True)
class RefreshEvent(MenuEvent):
    kind: MenuEventKind = field(default=MenuEventKind.REFRESH, init=False)


@dataclass(frozen=True)
class QuitEvent(MenuEvent):
    kind: MenuEventKind = field(default=MenuEventKind.QUIT, init=False)


@dataclass(frozen=True)
class ResizeEvent(MenuEvent):
    width: int
    height: int
    kind: MenuEventKind = field(default=MenuEventKind.RESIZE, init=False)


@dataclass(frozen=True)
class EntriesLoadedEvent(MenuEvent):
    """Loader finished. Exactly one of entries/error is meaningful."""

    entries: Sequence[Entry] = ()
    error: BaseException | str | None = None
    kind: MenuEventKind = field(default=MenuEventKind.ENTRIES_LOADED, init=False)


@dataclass(frozen=True)
class PanelUpdatedEvent(MenuEvent):
    """An action finished; entry is the one it was dispatched against."""

    update: PanelUpdate
    entry: Entry | None = None
    kind: MenuEventKind = field(default=MenuEventKind.PANEL_UPDATED, init=False)


# ─── Commands ─────────────────────────────────────────────────────────────────


class CommandKind(Enum):
    """Discriminator for effects requested by a transition."""

    LOAD_ENTRIES = "load_entries"
    RUN_ACTION = "run_action"
    QUIT = "quit"


@dataclass(frozen=True)
class Command:
    kind: CommandKind = field(init=False)


@dataclass(frozen=True)
class LoadEntriesCommand(Command):
    kind: CommandKind = field(default=CommandKind.LOAD_ENTRIES, init=False)


@dataclass(frozen=True)
class RunActionCommand(Command):
    action: Action
    entry: Entry
    kind: CommandKind = field(default=CommandKind.RUN_ACTION, init=False)


@dataclass(frozen=True)
class QuitCommand(Command):
    kind: CommandKind = field(default=CommandKind.QUIT, init=False)
