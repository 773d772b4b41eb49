"""Proxy a codex invocation with approvals and sandboxing bypassed."""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

BYPASS_FLAG = "--dangerously-bypass-approvals-and-sandbox"


class Mode(Enum):
    DEFAULT = "default"
    RESUME = "resume"


@dataclass(frozen=True)
class RunResult:
    command: list[str]
    exit_code: int


@dataclass(frozen=True)
class Runner:
    binary: str = "codex"
    mode: Mode = Mode.DEFAULT

    def build_args(self, args: list[str]) -> list[str]:
        base = [BYPASS_FLAG]
        if self.mode is Mode.RESUME:
            base.insert(0, "resume")
        return [*base, *args]

    def run(self, args: list[str]) -> RunResult:
        """Run codex with inherited stdio. A binary that cannot start exits 1."""
        command = [self.binary or "codex", *self.build_args(args)]
        logger.info("executing %s", shlex.join(command))
        try:
            completed = subprocess.run(command, check=False)
        except OSError as exc:
            logger.error("cannot execute %s: %s", command[0], exc)
            return RunResult(command=command, exit_code=1)
        code = completed.returncode
        # Killed by signal N: report 128+N like a shell.
        return RunResult(command=command, exit_code=code if code >= 0 else 128 - code)
