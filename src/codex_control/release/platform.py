"""Host platform → release archive name."""

from __future__ import annotations

import platform as _platform
import subprocess
import sys
from dataclasses import dataclass

_ARCHES = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "arm64": "aarch64",
    "aarch64": "aarch64",
}


class PlatformError(Exception):
    pass


def _is_musl() -> bool:
    try:
        completed = subprocess.run(
            ["ldd", "--version"], capture_output=True, text=True, check=False
        )
    except OSError:
        return False
    return "musl" in (completed.stdout + completed.stderr).lower()


@dataclass(frozen=True)
class Platform:
    arch: str
    os: str

    def archive_name(self) -> str:
        return f"codex-{self.arch}-{self.os}.tar.gz"

    @classmethod
    def detect(cls, machine: str | None = None, system: str | None = None) -> Platform:
        machine = (machine if machine is not None else _platform.machine()).lower()
        system = system if system is not None else sys.platform
        arch = _ARCHES.get(machine)
        if arch is None:
            raise PlatformError(f"unsupported architecture: {machine}")
        if system.startswith("linux"):
            os_part = "unknown-linux-musl" if _is_musl() else "unknown-linux-gnu"
        elif system == "darwin":
            os_part = "apple-darwin"
        else:
            raise PlatformError(f"unsupported operating system: {system}")
        return cls(arch=arch, os=os_part)
