"""CLI entry points for codex-control."""

import argparse
import logging
import os
import signal
import sys

import codex_control.commands.auth
import codex_control.commands.update
import codex_control.commands.update_select
import codex_control.commands.yolo
import codex_control.io.logging_setup
import codex_control.io.settings
from codex_control.io.output import VERBOSITY_LEVELS, Printer
from codex_control.yolo import Mode

logger = logging.getLogger(__name__)

INTERRUPTED_STATUS = 130


def build_parser(command: str, description: str) -> argparse.ArgumentParser:
    """Parser carrying the options every command shares."""
    parser = argparse.ArgumentParser(prog=command, description=description)
    parser.add_argument(
        "-v",
        "--verbosity",
        type=int,
        choices=VERBOSITY_LEVELS,
        default=None,
        help="Output detail: 0 silent, 1 JSON result, 2 environment + JSON (default: from settings)",
    )
    return parser


def resolve_verbosity(flag: int | None, settings: dict) -> int:
    if flag is not None:
        return flag
    value = settings.get("verbosity", 1)
    if value not in VERBOSITY_LEVELS:
        logger.warning("ignoring invalid verbosity %r in settings", value)
        return 1
    return int(value)


def _raise_interrupt(signum, frame):
    raise KeyboardInterrupt


def _run(command: str, defaults: dict, body) -> int:
    """Configure logging and settings, then run body(settings) to an exit status."""
    # [LAW:single-enforcer] Runtime logger configuration is centralized in io.logging_setup.
    log_runtime = codex_control.io.logging_setup.configure(command)
    logger.debug(
        "logging configured level=%s file=%s",
        log_runtime.level_name,
        log_runtime.file_path,
    )
    previous = signal.signal(signal.SIGTERM, _raise_interrupt)
    try:
        settings = codex_control.io.settings.load(command, defaults)
        return body(settings)
    except codex_control.io.settings.SettingsError as exc:
        logger.error("failed to load config: %s", exc)
        return 1
    except KeyboardInterrupt:
        logger.info("%s interrupted", command)
        return INTERRUPTED_STATUS
    finally:
        signal.signal(signal.SIGTERM, previous)


def auth_main(argv=None):
    command = codex_control.commands.auth.COMMAND
    parser = build_parser(command, "Pick a Codex auth profile and install it as ~/.codex/auth.json")
    parser.add_argument(
        "-a",
        "--auths-path",
        type=str,
        default=None,
        help="Folder containing Codex auth profiles (overrides CODEX_AUTHS_PATH)",
    )
    args = parser.parse_args(argv)

    def body(settings):
        auths_path = (
            args.auths_path or os.environ.get("CODEX_AUTHS_PATH") or str(settings.get("auths-path") or "")
        )
        printer = Printer(resolve_verbosity(args.verbosity, settings))
        return codex_control.commands.auth.run(auths_path, printer)

    sys.exit(_run(command, codex_control.commands.auth.DEFAULTS, body))


def update_main(argv=None):
    command = codex_control.commands.update.COMMAND
    parser = build_parser(command, "Install the latest Codex release")
    args = parser.parse_args(argv)

    def body(settings):
        printer = Printer(resolve_verbosity(args.verbosity, settings))
        return codex_control.commands.update.run(printer, token=str(settings.get("github-token") or ""))

    sys.exit(_run(command, codex_control.commands.update.DEFAULTS, body))


def update_select_main(argv=None):
    command = codex_control.commands.update_select.COMMAND
    parser = build_parser(command, "Choose a Codex release from a menu and install it")
    parser.add_argument(
        "-l",
        "--release-limit",
        type=int,
        default=None,
        help="Maximum number of releases to fetch (default: from settings, 200)",
    )
    args = parser.parse_args(argv)

    def body(settings):
        limit = args.release_limit
        if limit is None:
            limit = settings.get("release-limit", codex_control.commands.update_select.DEFAULT_RELEASE_LIMIT)
        printer = Printer(resolve_verbosity(args.verbosity, settings))
        return codex_control.commands.update_select.run(
            printer,
            token=str(settings.get("github-token") or ""),
            limit=int(limit) if isinstance(limit, int) else 0,
        )

    sys.exit(_run(command, codex_control.commands.update_select.DEFAULTS, body))


def split_passthrough(argv: list[str]) -> tuple[list[str], list[str]]:
    """Split argv at the first "--"; everything after it belongs to codex."""
    if "--" in argv:
        index = argv.index("--")
        return argv[:index], argv[index + 1:]
    return argv, []


def _yolo_main(mode: Mode, argv=None):
    command = codex_control.commands.yolo.COMMANDS[mode]
    parser = build_parser(command, "Run codex with approvals and sandboxing bypassed")
    parser.add_argument(
        "-c",
        "--codex-binary",
        type=str,
        default=None,
        help="Path to the codex executable (default: from settings, codex)",
    )
    own, passthrough = split_passthrough(list(sys.argv[1:] if argv is None else argv))
    args, extra = parser.parse_known_args(own)

    def body(settings):
        binary = args.codex_binary or str(settings.get("codex-binary") or "")
        printer = Printer(resolve_verbosity(args.verbosity, settings))
        return codex_control.commands.yolo.run(mode, binary, [*extra, *passthrough], printer)

    sys.exit(_run(command, codex_control.commands.yolo.DEFAULTS, body))


def yolo_main(argv=None):
    _yolo_main(Mode.DEFAULT, argv)


def yolo_resume_main(argv=None):
    _yolo_main(Mode.RESUME, argv)
