"""codex-yolo / codex-yolo-resume: run codex with approvals bypassed."""

from __future__ import annotations

import logging

from codex_control.io.output import Printer
from codex_control.yolo import Mode, Runner

logger = logging.getLogger(__name__)

COMMANDS = {Mode.DEFAULT: "codex-yolo", Mode.RESUME: "codex-yolo-resume"}
DEFAULTS = {"verbosity": 1, "codex-binary": "codex"}


def run(mode: Mode, binary: str, args: list[str], printer: Printer) -> int:
    """Run codex and report its status. Returns the child's exit code."""
    runner = Runner(binary=binary or DEFAULTS["codex-binary"], mode=mode)
    result = runner.run(args)
    if result.exit_code != 0:
        logger.error("codex exited with status %d", result.exit_code)
    printer.print(
        {"binary": runner.binary, "mode": mode.value},
        {"command": result.command, "exit_code": result.exit_code},
    )
    return result.exit_code
