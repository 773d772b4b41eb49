"""Centralized logging bootstrap for codex-control commands.

// [LAW:single-enforcer] Logger handler wiring is enforced in this module only.
// [LAW:one-source-of-truth] Runtime log path/level are derived here and returned to callers.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "codex_control"
STREAM_HANDLER_NAME = "codex_control.stderr"


@dataclass(frozen=True)
class LoggingRuntime:
    """Resolved runtime logging configuration."""

    level_name: str
    level: int
    file_path: str


_RUNTIME: LoggingRuntime | None = None


def _parse_level(raw: str) -> tuple[str, int]:
    # getLevelName maps a known name to its number and anything else to a string.
    level = logging.getLevelName(str(raw or "INFO").strip().upper())
    if not isinstance(level, int):
        level = logging.INFO
    return logging.getLevelName(level), level


def _default_log_path(command: str) -> str:
    log_dir = Path(
        os.environ.get(
            "CODEX_CONTROL_LOG_DIR", os.path.expanduser("~/.local/share/codex-control/logs")
        )
    )
    ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return str(log_dir / f"{command}-{ts}-{os.getpid()}.log")


def _make_stream_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.set_name(STREAM_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("[%(name)s] %(levelname)s %(message)s"))
    return handler


def _make_file_handler(level: int, file_path: str) -> logging.Handler:
    handler = RotatingFileHandler(
        file_path,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def configure(command: str = "codex-control") -> LoggingRuntime:
    """Configure the codex_control logger hierarchy with stderr + rotating file handlers.

    Idempotent: repeated calls return the originally configured runtime.
    """
    global _RUNTIME
    if _RUNTIME is not None:
        return _RUNTIME

    level_name, level = _parse_level(os.environ.get("CODEX_CONTROL_LOG_LEVEL", "INFO"))
    file_path = os.environ.get("CODEX_CONTROL_LOG_FILE") or _default_log_path(command)
    Path(file_path).parent.mkdir(parents=True, exist_ok=True)

    # [LAW:single-enforcer] All codex_control module loggers propagate to this one logger.
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False
    logger.handlers.clear()
    logger.addHandler(_make_stream_handler(level))
    logger.addHandler(_make_file_handler(level, file_path))

    # Keep third-party logging quiet unless it is warning+.
    root = logging.getLogger()
    if root.level > logging.WARNING:
        root.setLevel(logging.WARNING)

    logging.captureWarnings(True)

    _RUNTIME = LoggingRuntime(level_name=level_name, level=level, file_path=file_path)
    return _RUNTIME


def get_runtime() -> LoggingRuntime | None:
    """Return configured logging runtime, if configure() has run."""
    return _RUNTIME


def reset() -> None:
    """Drop handlers and forget the configured runtime (tests only)."""
    global _RUNTIME
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    _RUNTIME = None


def _drop_record(record: logging.LogRecord) -> bool:
    return False


@contextmanager
def terminal_owned():
    """Keep records off stderr while a full-screen app owns the terminal.

    The rotating file handler still receives everything.
    """
    # [LAW:dataflow-not-control-flow] Muting is a filter on the handler, not a branch in callers.
    handlers = [
        h for h in logging.getLogger(ROOT_LOGGER).handlers if h.get_name() == STREAM_HANDLER_NAME
    ]
    for handler in handlers:
        handler.addFilter(_drop_record)
    try:
        yield
    finally:
        for handler in handlers:
            handler.removeFilter(_drop_record)
