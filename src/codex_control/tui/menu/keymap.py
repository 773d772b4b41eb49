"""Fixed key map for the selection menu.

All keyboard input routes through MenuApp.on_key, which looks the key up
here. Keys are not configurable.
"""

from collections.abc import Callable

from codex_control.tui.menu.events import (
    BackEvent,
    ConfirmEvent,
    DigitEvent,
    MenuEvent,
    MoveEvent,
    QuitEvent,
    RefreshEvent,
)

# [LAW:one-source-of-truth] Textual key name → event factory.
KEYMAP: dict[str, Callable[[], MenuEvent]] = {
    "ctrl+c": QuitEvent,
    "escape": BackEvent,
    "up": lambda: MoveEvent(delta=-1),
    "k": lambda: MoveEvent(delta=-1),
    "down": lambda: MoveEvent(delta=1),
    "j": lambda: MoveEvent(delta=1),
    "enter": ConfirmEvent,
    "r": RefreshEvent,
    "R": RefreshEvent,
    "shift+r": RefreshEvent,
}

DIGITS = frozenset("0123456789")


def event_for_key(key: str) -> MenuEvent | None:
    """Translate a Textual key name into a menu event, or None if unbound."""
    factory = KEYMAP.get(key)
    if factory is not None:
        return factory()
    if key in DIGITS:
        return DigitEvent(digit=key)
    return None

