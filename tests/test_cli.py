"""Tests for console entry points."""

import json
import signal

import pytest

import codex_control.cli as cli
import codex_control.commands.auth
import codex_control.commands.update
import codex_control.commands.yolo
import codex_control.io.output
import codex_control.yolo
from codex_control.yolo import Mode


def _exit_code(fn, argv):
    with pytest.raises(SystemExit) as excinfo:
        fn(argv)
    return excinfo.value.code


def test_verbosity_choices():
    parser = cli.build_parser("codex-update", "desc")
    assert parser.parse_args(["-v", "2"]).verbosity == 2
    assert parser.parse_args([]).verbosity is None
    with pytest.raises(SystemExit):
        parser.parse_args(["--verbosity", "5"])


def test_resolve_verbosity():
    assert cli.resolve_verbosity(0, {"verbosity": 2}) == 0
    assert cli.resolve_verbosity(None, {"verbosity": 2}) == 2
    assert cli.resolve_verbosity(None, {"verbosity": "loud"}) == 1
    assert cli.resolve_verbosity(None, {}) == 1


def test_split_passthrough():
    assert cli.split_passthrough(["-v", "0", "--", "-v", "x"]) == (["-v", "0"], ["-v", "x"])
    assert cli.split_passthrough(["exec", "hi"]) == (["exec", "hi"], [])


def test_auth_main_path_precedence(config_home, monkeypatch, tmp_path):
    seen = []
    monkeypatch.setattr(codex_control.commands.auth, "run", lambda path, printer: seen.append((path, printer)) or 0)
    monkeypatch.setenv("CODEX_AUTHS_PATH", "/from/env")

    assert _exit_code(cli.auth_main, ["-a", "/from/flag", "-v", "0"]) == 0
    assert _exit_code(cli.auth_main, []) == 0
    monkeypatch.delenv("CODEX_AUTHS_PATH")
    assert _exit_code(cli.auth_main, []) == 0

    assert [path for path, _ in seen] == ["/from/flag", "/from/env", ""]
    assert seen[0][1].verbosity == 0
    assert seen[1][1].verbosity == 1
    settings_file = config_home / "codex-control" / "codex-auth" / "settings.json"
    assert json.loads(settings_file.read_text(encoding="utf-8")) == {"verbosity": 1, "auths-path": ""}


def test_update_main_uses_settings_token(config_home, monkeypatch):
    settings_file = config_home / "codex-control" / "codex-update" / "settings.json"
    settings_file.parent.mkdir(parents=True)
    settings_file.write_text('{"github-token": "abc", "verbosity": 2}', encoding="utf-8")
    seen = {}

    def fake_run(printer, token=""):
        seen.update(verbosity=printer.verbosity, token=token)
        return 1

    monkeypatch.setattr(codex_control.commands.update, "run", fake_run)
    assert _exit_code(cli.update_main, []) == 1
    assert seen == {"verbosity": 2, "token": "abc"}


def test_corrupt_settings_exit_one(config_home):
    settings_file = config_home / "codex-control" / "codex-update" / "settings.json"
    settings_file.parent.mkdir(parents=True)
    settings_file.write_text("{broken", encoding="utf-8")
    assert _exit_code(cli.update_main, []) == 1


def test_interrupt_exits_130(config_home, monkeypatch):
    def interrupted(printer, token=""):
        raise KeyboardInterrupt

    monkeypatch.setattr(codex_control.commands.update, "run", interrupted)
    assert _exit_code(cli.update_main, []) == 130


def test_sigterm_handler_restored(config_home, monkeypatch):
    before = signal.getsignal(signal.SIGTERM)
    monkeypatch.setattr(codex_control.commands.update, "run", lambda printer, token="": 0)
    assert _exit_code(cli.update_main, []) == 0
    assert signal.getsignal(signal.SIGTERM) == before


@pytest.mark.parametrize("main,mode", [(cli.yolo_main, Mode.DEFAULT), (cli.yolo_resume_main, Mode.RESUME)])
def test_yolo_passthrough(config_home, monkeypatch, main, mode):
    seen = []

    def fake_run(run_mode, binary, args, printer):
        seen.append((run_mode, binary, args, printer.verbosity))
        return 7

    monkeypatch.setattr(codex_control.commands.yolo, "run", fake_run)
    code = _exit_code(main, ["-c", "/opt/codex", "-v", "0", "--model", "o3", "--", "-v", "prompt"])
    assert code == 7
    assert seen == [(mode, "/opt/codex", ["--model", "o3", "-v", "prompt"], 0)]


def test_yolo_command_reports_and_returns_child_status(monkeypatch, capsys):
    class _Runner:
        def __init__(self, binary, mode):
            self.binary = binary

        def run(self, args):
            return codex_control.yolo.RunResult(command=[self.binary, *args], exit_code=2)

    monkeypatch.setattr(codex_control.commands.yolo, "Runner", _Runner)
    printer = codex_control.io.output.Printer(1)
    assert codex_control.commands.yolo.run(Mode.DEFAULT, "", ["exec"], printer) == 2
    assert json.loads(capsys.readouterr().out) == {"command": ["codex", "exec"], "exit_code": 2}
