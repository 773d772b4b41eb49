"""Selection menu application using Textual.

// [LAW:single-enforcer] The app's message pump is the only place menu state
//   changes: key presses, resizes, and worker completions all arrive as
//   messages and are applied one at a time through state.transition().
// [LAW:locality-or-seam] Thin coordinator. Transitions live in state.py,
//   rendering in rendering.py, key bindings in keymap.py.

Loader and action operations run as Textual workers. Each worker posts
exactly one _MenuMessage when it finishes and never touches state itself.
"""

from __future__ import annotations

import asyncio
import logging

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.css.query import NoMatches
from textual.message import Message
from textual.widgets import Static

from codex_control.io.logging_setup import terminal_owned
from codex_control.tui.menu.events import (
    Command,
    EntriesLoadedEvent,
    LoadEntriesCommand,
    MenuEvent,
    PanelUpdatedEvent,
    QuitCommand,
    QuitEvent,
    ResizeEvent,
    RunActionCommand,
)
from codex_control.tui.menu.keymap import event_for_key
from codex_control.tui.menu.rendering import DEFAULT_THEME, MenuTheme, render_panel, render_view
from codex_control.tui.menu.state import MenuState, initial_state, transition
from codex_control.tui.menu.types import Action, Entry, MenuConfig, MenuResult, PanelUpdate

logger = logging.getLogger(__name__)

LOADER_GROUP = "menu-loader"
ACTION_GROUP = "menu-actions"


class MenuError(Exception):
    """The menu could not run to completion (host or programming failure)."""


class _MenuMessage(Message, bubble=False):
    """Bridge: worker completion → app message pump."""

    def __init__(self, event: MenuEvent) -> None:
        self.event = event
        super().__init__()


class MenuApp(App[MenuResult]):
    """Interactive list → action menu driven by a caller-supplied MenuConfig."""

    ENABLE_COMMAND_PALETTE = False

    # Textual binds ctrl+c and ctrl+q itself as priority bindings. Both are
    # rebound here so every quit goes through the menu and returns a result.
    BINDINGS = [
        Binding("ctrl+c", "menu_quit", show=False, priority=True),
        Binding("ctrl+q", "menu_quit", show=False, priority=True),
    ]

    CSS = """
    #menu-body {
        height: 1fr;
    }

    #menu-view {
        width: 1fr;
        height: auto;
        padding: 0 1;
    }

    #menu-panel {
        width: 50;
        max-width: 45%;
        height: auto;
    }
    """

    def __init__(self, config: MenuConfig, theme: MenuTheme = DEFAULT_THEME):
        super().__init__()
        self._config = config
        self._menu_theme = theme
        self._state: MenuState = initial_state(config)

    @property
    def state(self) -> MenuState:
        return self._state

    @property
    def config(self) -> MenuConfig:
        return self._config

    # ─── Widget accessors ──────────────────────────────────────────────

    def _query_safe(self, selector):
        try:
            return self.query_one(selector)
        except NoMatches:
            return None

    # ─── Lifecycle ─────────────────────────────────────────────────────

    def compose(self) -> ComposeResult:
        with Horizontal(id="menu-body"):
            yield Static(id="menu-view")
            if not self._config.disable_panel:
                yield Static(id="menu-panel")

    def on_mount(self) -> None:
        logger.debug("menu mounted")
        self._dispatch(ResizeEvent(width=self.size.width, height=self.size.height))
        self._execute(LoadEntriesCommand())

    def on_resize(self, event: events.Resize) -> None:
        self._dispatch(ResizeEvent(width=event.size.width, height=event.size.height))

    # ─── Event pipeline ────────────────────────────────────────────────

    async def on_key(self, event: events.Key) -> None:
        """// [LAW:single-enforcer] on_key is the sole key dispatcher."""
        menu_event = event_for_key(event.key)
        if menu_event is None:
            return
        event.prevent_default()
        self._dispatch(menu_event)

    def action_menu_quit(self) -> None:
        self._dispatch(QuitEvent())

    async def action_quit(self) -> None:
        self._dispatch(QuitEvent())

    def on__menu_message(self, message: _MenuMessage) -> None:
        self._dispatch(message.event)

    def _dispatch(self, event: MenuEvent) -> None:
        self._state, command = transition(self._state, event, self._config)
        self._refresh_view()
        if command is not None:
            self._execute(command)

    def _refresh_view(self) -> None:
        view = self._query_safe("#menu-view")
        if view is not None:
            view.update(render_view(self._state, self._config, self._menu_theme))
        panel = self._query_safe("#menu-panel")
        if panel is not None:
            panel.update(render_panel(self._state, self._config, self._menu_theme) or "")

    # ─── Commands ──────────────────────────────────────────────────────

    def _execute(self, command: Command) -> None:
        if isinstance(command, LoadEntriesCommand):
            # exclusive: a refresh supersedes a load still in flight.
            self.run_worker(self._load_entries(), group=LOADER_GROUP, exclusive=True)
        elif isinstance(command, RunActionCommand):
            self.run_worker(
                self._run_action(command.action, command.entry),
                group=ACTION_GROUP,
                exclusive=False,
            )
        elif isinstance(command, QuitCommand):
            self._quit()

    def _quit(self) -> None:
        outstanding = [w for w in self.workers if not w.is_finished]
        if outstanding:
            logger.debug("cancelling %d outstanding workers", len(outstanding))
        self.workers.cancel_all()
        self.exit(self._state.result())

    async def _load_entries(self) -> None:
        timeout = self._config.load_timeout
        try:
            entries = await asyncio.wait_for(self._config.loader(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("menu loader timed out after %gs", timeout)
            event = EntriesLoadedEvent(error=f"timed out after {timeout:g}s")
        except Exception as exc:
            logger.warning("menu loader failed: %s", exc)
            event = EntriesLoadedEvent(error=exc)
        else:
            event = EntriesLoadedEvent(entries=tuple(entries))
        self.post_message(_MenuMessage(event))

    async def _run_action(self, action: Action, entry: Entry) -> None:
        try:
            update = await action.run(entry)
        except Exception as exc:
            logger.warning("menu action %r failed: %s", action.label, exc)
            update = PanelUpdate(title=action.label, content=str(exc), error=exc)
        if not isinstance(update, PanelUpdate):
            # Programming error in the caller: let the worker crash the app.
            raise TypeError(
                f"action {action.label!r} returned {type(update).__name__}, expected PanelUpdate"
            )
        self.post_message(_MenuMessage(PanelUpdatedEvent(update=update, entry=entry)))


def start(config: MenuConfig, theme: MenuTheme = DEFAULT_THEME) -> MenuResult:
    """Run the menu until quit and return the last recorded outcome.

    Load, action, and input failures are shown in the UI and never raised.
    Raises MenuError when the app itself fails.
    """
    app = MenuApp(config, theme=theme)
    try:
        with terminal_owned():
            result = app.run()
    except Exception as exc:
        raise MenuError(f"menu failed to run: {exc}") from exc
    if app.return_code:
        raise MenuError(f"menu exited with status {app.return_code}")
    if not isinstance(result, MenuResult):
        raise MenuError(f"unexpected menu result type {type(result).__name__}")
    return result
