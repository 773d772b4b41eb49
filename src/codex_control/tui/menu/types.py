"""Plain data for the selection menu: rows, actions, outcomes, configuration.

This module is STABLE. Nothing here has behavior beyond trivial accessors;
the payload type parameter is owned by the caller and never inspected.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

P = TypeVar("P")

DEFAULT_LOAD_TIMEOUT = 20.0


class ViewMode(Enum):
    """Which half of the menu is on screen."""

    LIST = "list"
    ACTIONS = "actions"


@dataclass(frozen=True)
class Entry(Generic[P]):
    """One selectable row.

    `number` is assigned by the menu on every successful load; callers leave
    it at 0.
    """

    title: str
    subtitle: str = ""
    description: str = ""
    badges: tuple[str, ...] = ()
    payload: P | None = None
    number: int = 0


@dataclass(frozen=True)
class PanelUpdate:
    """Outcome of one action run, shown in the side panel and recorded.

    `error` is None on success. `exit_after` asks the menu to end the
    session once the outcome has been recorded.
    """

    title: str
    content: str = ""
    payload: object = None
    error: BaseException | str | None = None
    exit_after: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


Loader = Callable[[], Awaitable[Sequence[Entry]]]
ActionRunner = Callable[[Entry], Awaitable[PanelUpdate]]


@dataclass(frozen=True)
class Action:
    """A named asynchronous operation offered against the selected entry."""

    label: str
    run: ActionRunner


@dataclass(frozen=True)
class MenuResult(Generic[P]):
    """Last completed action, handed back to the caller when the menu ends."""

    selected_entry: Entry[P] | None = None
    action_payload: object = None
    message: str = ""
    success: bool = False

    @classmethod
    def no_action(cls) -> MenuResult:
        return cls(message="no action executed", success=False)


@dataclass(frozen=True)
class MenuConfig:
    """Caller configuration for one menu session."""

    loader: Loader
    actions: tuple[Action, ...] = ()
    load_timeout: float = DEFAULT_LOAD_TIMEOUT
    list_title: str = ""
    list_help: tuple[str, ...] = ()
    actions_title: str = ""
    actions_help: tuple[str, ...] = ()
    panel_placeholder: str = ""
    disable_panel: bool = False

    def __post_init__(self) -> None:
        # Normalize caller-supplied lists so the config stays immutable.
        object.__setattr__(self, "actions", tuple(self.actions))
        object.__setattr__(self, "list_help", tuple(self.list_help))
        object.__setattr__(self, "actions_help", tuple(self.actions_help))
        if not self.load_timeout or self.load_timeout <= 0:
            object.__setattr__(self, "load_timeout", DEFAULT_LOAD_TIMEOUT)
