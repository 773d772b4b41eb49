"""Menu state machine - pure functions from (state, event) to next state.

// [LAW:single-enforcer] transition() is the only place MenuState changes.
// [LAW:dataflow-not-control-flow] Handlers are looked up by event kind in
// TRANSITIONS; every MenuEventKind has exactly one handler.

The app owns the current MenuState and feeds it one event at a time from its
message pump. Handlers never perform I/O; effects are returned as commands.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace

from codex_control.tui.menu import viewport
from codex_control.tui.menu.events import (
    Command,
    DigitEvent,
    EntriesLoadedEvent,
    LoadEntriesCommand,
    MenuEvent,
    MenuEventKind,
    MoveEvent,
    PanelUpdatedEvent,
    QuitCommand,
    ResizeEvent,
    RunActionCommand,
)
from codex_control.tui.menu.types import Entry, MenuConfig, MenuResult, ViewMode

MAX_JUMP_DIGITS = 4

DEFAULT_PANEL_TITLE = "Information"
NO_OUTPUT = "No output"
INVALID_SELECTION = "Invalid selection"


@dataclass(frozen=True)
class MenuState:
    """Everything the menu knows about the session."""

    entries: tuple[Entry, ...] = ()
    view: ViewMode = ViewMode.LIST
    width: int = 0
    height: int = 0
    list_cursor: int = 0
    list_offset: int = 0
    action_cursor: int = 0
    number_input: str = ""
    loading: bool = True
    message: str = "Loading entries..."
    panel_title: str = DEFAULT_PANEL_TITLE
    panel_text: str = ""
    last_action: MenuResult | None = None

    @property
    def window(self) -> int:
        return viewport.window_size(self.height)

    @property
    def current_entry(self) -> Entry | None:
        if not self.entries or not 0 <= self.list_cursor < len(self.entries):
            return None
        return self.entries[self.list_cursor]

    def result(self) -> MenuResult:
        """The outcome handed back to the caller when the session ends."""
        if self.last_action is None:
            return MenuResult.no_action()
        return self.last_action


def initial_state(config: MenuConfig) -> MenuState:
    return MenuState(panel_text=config.panel_placeholder)


Transition = tuple[MenuState, Command | None]
Handler = Callable[[MenuState, MenuEvent, MenuConfig], Transition]


def _scrolled(state: MenuState, **changes) -> MenuState:
    """Apply changes, then re-clamp cursor and offset to the viewport."""
    state = replace(state, **changes)
    cursor, offset = viewport.ensure_visible(
        state.list_cursor, state.list_offset, len(state.entries), state.window
    )
    return replace(state, list_cursor=cursor, list_offset=offset)


def _error_text(error: BaseException | str) -> str:
    text = str(error)
    if text:
        return text
    # Exceptions such as TimeoutError() stringify to "".
    return type(error).__name__ if isinstance(error, BaseException) else "unknown error"


# ─── Handlers ─────────────────────────────────────────────────────────────────


def _on_move(state: MenuState, event: MoveEvent, config: MenuConfig) -> Transition:
    if state.view is ViewMode.ACTIONS:
        cursor = viewport.clamp_cursor(state.action_cursor + event.delta, len(config.actions))
        return replace(state, action_cursor=cursor), None
    return _scrolled(state, number_input="", list_cursor=state.list_cursor + event.delta), None


def _on_digit(state: MenuState, event: DigitEvent, config: MenuConfig) -> Transition:
    if state.view is not ViewMode.LIST:
        return state, None
    if not state.number_input and event.digit == "0":
        return state, None
    if len(state.number_input) >= MAX_JUMP_DIGITS:
        return state, None
    buffer = state.number_input + event.digit
    return replace(state, number_input=buffer, message=f"Jump target: {buffer}"), None


def _on_confirm(state: MenuState, event: MenuEvent, config: MenuConfig) -> Transition:
    if state.view is ViewMode.ACTIONS:
        entry = state.current_entry
        if not config.actions or entry is None:
            return state, None
        action = config.actions[state.action_cursor]
        return (
            replace(state, message=f"Running {action.label}..."),
            RunActionCommand(action=action, entry=entry),
        )

    if state.number_input:
        buffer = state.number_input
        state = replace(state, number_input="")
        try:
            index = int(buffer)
        except ValueError:
            index = 0
        if not 1 <= index <= len(state.entries):
            return replace(state, message=INVALID_SELECTION), None
        return _scrolled(state, list_cursor=index - 1), None

    if not state.entries:
        return state, None
    return replace(state, view=ViewMode.ACTIONS, action_cursor=0), None


def _on_back(state: MenuState, event: MenuEvent, config: MenuConfig) -> Transition:
    if state.view is ViewMode.ACTIONS:
        return replace(state, view=ViewMode.LIST, action_cursor=0, number_input=""), None
    return replace(state, number_input=""), None


def _on_refresh(state: MenuState, event: MenuEvent, config: MenuConfig) -> Transition:
    if state.view is not ViewMode.LIST:
        return state, None
    # Stale entries stay on screen until the new load lands.
    return replace(state, loading=True, message="Refreshing entries..."), LoadEntriesCommand()


def _on_quit(state: MenuState, event: MenuEvent, config: MenuConfig) -> Transition:
    return state, QuitCommand()


def _on_resize(state: MenuState, event: ResizeEvent, config: MenuConfig) -> Transition:
    return _scrolled(state, width=event.width, height=event.height), None


def _on_entries_loaded(
    state: MenuState, event: EntriesLoadedEvent, config: MenuConfig
) -> Transition:
    if event.error is not None:
        message = f"Failed to load entries: {_error_text(event.error)}"
        return replace(state, loading=False, message=message), None
    entries = tuple(
        replace(entry, number=number) for number, entry in enumerate(event.entries, start=1)
    )
    return (
        _scrolled(
            state,
            entries=entries,
            loading=False,
            message=f"Loaded {len(entries)} entries",
        ),
        None,
    )


def _on_panel_updated(
    state: MenuState, event: PanelUpdatedEvent, config: MenuConfig
) -> Transition:
    update = event.update
    content = update.content.strip()
    if update.ok:
        message = f"{update.title} ready"
    else:
        message = f"{update.title} failed: {_error_text(update.error)}"
    outcome = MenuResult(
        selected_entry=event.entry,
        action_payload=update.payload,
        message=message,
        success=update.ok,
    )
    state = replace(
        state,
        panel_title=update.title,
        panel_text=content or NO_OUTPUT,
        message=message,
        last_action=outcome,
    )
    return state, (QuitCommand() if update.exit_after else None)


# [LAW:one-source-of-truth] Event kind → handler.
TRANSITIONS: dict[MenuEventKind, Handler] = {
    MenuEventKind.MOVE: _on_move,
    MenuEventKind.DIGIT: _on_digit,
    MenuEventKind.CONFIRM: _on_confirm,
    MenuEventKind.BACK: _on_back,
    MenuEventKind.REFRESH: _on_refresh,
    MenuEventKind.QUIT: _on_quit,
    MenuEventKind.RESIZE: _on_resize,
    MenuEventKind.ENTRIES_LOADED: _on_entries_loaded,
    MenuEventKind.PANEL_UPDATED: _on_panel_updated,
}

_missing = set(MenuEventKind) - set(TRANSITIONS)
if _missing:
    raise RuntimeError(f"menu transitions missing for {sorted(k.value for k in _missing)}")


def transition(state: MenuState, event: MenuEvent, config: MenuConfig) -> Transition:
    """Apply one event. Returns the next state and an optional command."""
    return TRANSITIONS[event.kind](state, event, config)
