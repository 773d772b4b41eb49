"""Pure render functions for the selection menu.

// [LAW:dataflow-not-control-flow] Styling comes from a MenuTheme value passed
// in by the caller; there is no module-level style state.

Every function here maps (state, config, theme) to a Rich renderable and
has no side effects, so tests can assert on plain text.
"""

from __future__ import annotations

from dataclasses import dataclass

from rich import box
from rich.console import RenderableType
from rich.panel import Panel
from rich.style import Style
from rich.text import Text

from codex_control.tui.menu import viewport
from codex_control.tui.menu.state import DEFAULT_PANEL_TITLE, MenuState
from codex_control.tui.menu.types import Entry, MenuConfig, ViewMode

POINTER_ACTIVE = " › "
POINTER_IDLE = " • "
NO_DESCRIPTION = "(no description)"
DEFAULT_PANEL_PLACEHOLDER = "Select an action to view logs."


@dataclass(frozen=True)
class MenuTheme:
    """Immutable style set for the menu."""

    title: Style = Style(bold=True, color="#C0CAF5")
    message: Style = Style(color="#94A3B8")
    pointer_idle: Style = Style(color="#64748B")
    pointer_active: Style = Style(color="#8EACE3")
    number: Style = Style(bold=True, color="#A5B4FC")
    badge: Style = Style(color="#93C5FD")
    entry_title: Style = Style(bold=True, color="#E5E7EB")
    detail: Style = Style(color="#94A3B8")
    panel_border: Style = Style(color="#64748B")


DEFAULT_THEME = MenuTheme()


def _summary(entry: Entry) -> str:
    return entry.description or entry.subtitle or NO_DESCRIPTION


def _pointer(active: bool, theme: MenuTheme) -> Text:
    if active:
        return Text(POINTER_ACTIVE, style=theme.pointer_active)
    return Text(POINTER_IDLE, style=theme.pointer_idle)


def render_entry_row(entry: Entry, active: bool, theme: MenuTheme = DEFAULT_THEME) -> Text:
    """One list row, plus an indented subtitle line when it adds information."""
    row = Text()
    row.append_text(_pointer(active, theme))
    row.append(" ")
    row.append(f"{entry.number:3d}.", style=theme.number)
    if entry.title:
        row.append(" ")
        row.append(entry.title, style=theme.entry_title)
    for badge in entry.badges:
        row.append(" ")
        row.append(f"[{badge}]", style=theme.badge)
    row.append(" — ")
    row.append(_summary(entry), style=theme.detail)
    if entry.subtitle and entry.subtitle != entry.description:
        row.append("\n      ")
        row.append(entry.subtitle, style=theme.detail)
    return row


def _status_line(state: MenuState, theme: MenuTheme) -> Text:
    return Text(f"Status: {state.message}", style=theme.message)


def render_list(state: MenuState, config: MenuConfig, theme: MenuTheme = DEFAULT_THEME) -> Text:
    lines: list[Text] = [Text(config.list_title or "Entries", style=theme.title)]
    if config.list_help:
        lines.extend(Text(line) for line in config.list_help)
        lines.append(Text(""))
    if state.loading:
        lines.append(Text("Loading entries..."))
        lines.append(Text(""))
    total = len(state.entries)
    if total == 0:
        lines.append(Text("No entries available."))

    rows = viewport.visible_slice(state.list_offset, total, state.window)
    for index in rows:
        lines.append(render_entry_row(state.entries[index], index == state.list_cursor, theme))
    lines.append(Text(""))

    if total > len(rows) > 0:
        lines.append(
            Text(f"Showing {rows.start + 1}-{rows.stop} of {total}", style=theme.message)
        )
    if state.number_input:
        lines.append(Text(f"Pending selection: {state.number_input}", style=theme.message))
    lines.append(_status_line(state, theme))
    return Text("\n").join(lines)


def render_actions(
    state: MenuState, config: MenuConfig, theme: MenuTheme = DEFAULT_THEME
) -> Text:
    lines: list[Text] = [Text(config.actions_title or "Actions", style=theme.title)]
    entry = state.current_entry
    if entry is not None and entry.title:
        detail = entry.subtitle or entry.description
        lines.append(Text(f"Target: {entry.title} — {detail}"))
    lines.extend(Text(line) for line in config.actions_help)
    lines.append(Text(""))
    for index, action in enumerate(config.actions):
        line = _pointer(index == state.action_cursor, theme)
        line.append(" ")
        line.append(action.label)
        lines.append(line)
    lines.append(Text(""))
    lines.append(_status_line(state, theme))
    return Text("\n").join(lines)


def render_panel(
    state: MenuState, config: MenuConfig, theme: MenuTheme = DEFAULT_THEME
) -> RenderableType | None:
    """Side panel, or None when the caller disabled it."""
    if config.disable_panel:
        return None
    title = state.panel_title or DEFAULT_PANEL_TITLE
    content = state.panel_text or config.panel_placeholder or DEFAULT_PANEL_PLACEHOLDER
    body = Text()
    body.append(title, style=theme.title)
    body.append("\n\n")
    body.append(content)
    return Panel(body, box=box.ROUNDED, padding=(1, 2), border_style=theme.panel_border)


def render_view(state: MenuState, config: MenuConfig, theme: MenuTheme = DEFAULT_THEME) -> Text:
    """Main pane for whichever view is active."""
    if state.view is ViewMode.ACTIONS:
        return render_actions(state, config, theme)
    return render_list(state, config, theme)
