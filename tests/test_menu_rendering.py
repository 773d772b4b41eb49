"""Tests for menu render functions (plain-text assertions)."""

from dataclasses import replace

from codex_control.tui.menu.events import ConfirmEvent, EntriesLoadedEvent, ResizeEvent
from codex_control.tui.menu.rendering import (
    DEFAULT_PANEL_PLACEHOLDER,
    NO_DESCRIPTION,
    POINTER_ACTIVE,
    POINTER_IDLE,
    MenuTheme,
    render_actions,
    render_entry_row,
    render_list,
    render_panel,
    render_view,
)
from codex_control.tui.menu.state import initial_state, transition
from codex_control.tui.menu.types import Entry
from tests.harness import echo_action, make_config, make_entries, renderable_text, static_loader


def _state(count, height=40, **config_kwargs):
    config = make_config(static_loader([]), **config_kwargs)
    state = initial_state(config)
    state, _ = transition(state, ResizeEvent(width=100, height=height), config)
    state, _ = transition(state, EntriesLoadedEvent(entries=make_entries(count)), config)
    return state, config


def test_entry_row_layout():
    entry = Entry(title="v1.2", description="3.0 MiB", badges=("ready",), number=7)
    text = render_entry_row(entry, active=True).plain
    assert text == f"{POINTER_ACTIVE}   7. v1.2 [ready] — 3.0 MiB"


def test_entry_row_idle_pointer_and_fallback_description():
    text = render_entry_row(Entry(title="x", number=1), active=False).plain
    assert text.startswith(POINTER_IDLE)
    assert text.endswith(NO_DESCRIPTION)


def test_entry_row_subtitle_line():
    entry = Entry(title="x", subtitle="sub", description="desc", number=1)
    assert render_entry_row(entry, active=False).plain.endswith("desc\n      sub")
    same = Entry(title="x", subtitle="desc", description="desc", number=1)
    assert "\n" not in render_entry_row(same, active=False).plain


def test_list_shows_title_help_and_status():
    state, config = _state(3, list_title="Profiles", list_help=["line one", "line two"])
    text = render_list(state, config).plain
    lines = text.splitlines()
    assert lines[0] == "Profiles"
    assert "line one" in lines and "line two" in lines
    assert lines[-1] == "Status: Loaded 3 entries"
    assert "Showing" not in text


def test_list_default_title_and_empty_message():
    config = make_config(static_loader([]))
    text = render_list(initial_state(config), config).plain
    assert text.startswith("Entries")
    assert "Loading entries..." in text
    assert "No entries available." in text


def test_list_scroll_indicator_and_pending_selection():
    state, config = _state(50, height=20)
    state = replace(state, number_input="12")
    text = render_list(state, config).plain
    assert "Showing 1-10 of 50" in text
    assert "Pending selection: 12" in text
    assert "entry-11" not in text


def test_actions_view_lists_actions_with_pointer():
    state, config = _state(2, actions=[echo_action("Install"), echo_action("Inspect")])
    state, _ = transition(state, ConfirmEvent(), config)
    text = render_view(state, config).plain
    assert text.startswith("Actions")
    assert "Target: entry-1 — description 1" in text
    assert f"{POINTER_ACTIVE} Install" in text
    assert f"{POINTER_IDLE} Inspect" in text
    assert render_actions(state, config).plain == text


def test_panel_placeholder_and_disable():
    state, config = _state(1, panel_placeholder="")
    assert DEFAULT_PANEL_PLACEHOLDER in renderable_text(render_panel(replace(state, panel_text=""), config))
    _, disabled = _state(1, disable_panel=True)
    assert render_panel(state, disabled) is None


def test_panel_shows_title_and_content():
    state, config = _state(1)
    state = replace(state, panel_title="Copy auth", panel_text="Copied a to b")
    text = renderable_text(render_panel(state, config))
    assert "Copy auth" in text
    assert "Copied a to b" in text


def test_custom_theme_changes_styles_only():
    state, config = _state(2)
    theme = MenuTheme()
    assert render_list(state, config, theme).plain == render_list(state, config).plain
