"""Textual in-process test harness for the codex-control menu.

Re-exports all public API for convenient imports:
    from tests.harness import run_app, press_and_settle, view_text, ...
"""

from tests.harness.app_runner import run_app, static_loader
from tests.harness.interactions import (
    press_and_settle,
    press_sequence,
    resize_and_settle,
    wait_until_loaded,
    settle_workers,
    wait_for_exit,
)
from tests.harness.content import (
    renderable_text,
    view_text,
    panel_text,
)
from tests.harness.messages import MenuEventCapture
from tests.harness.builders import make_entries, make_config, echo_action

__all__ = [
    "run_app",
    "static_loader",
    "press_and_settle",
    "press_sequence",
    "resize_and_settle",
    "wait_until_loaded",
    "settle_workers",
    "wait_for_exit",
    "renderable_text",
    "view_text",
    "panel_text",
    "MenuEventCapture",
    "make_entries",
    "make_config",
    "echo_action",
]
