from __future__ import annotations

import pytest

from service_control import cli


def test_dispatches_to_named_command(monkeypatch):
    seen = []
    monkeypatch.setitem(cli.COMMANDS, "status", lambda argv: seen.append(argv) or 0)

    assert cli.main(["status", "-p", "1"]) == 0
    assert seen == [["-p", "1"]]


@pytest.mark.parametrize("argv", [[], ["restart"]])
def test_unknown_or_missing_command(argv, capsys):
    assert cli.main(argv) == 1
    assert "Usage: python -m service_control" in capsys.readouterr().err


def test_help(capsys):
    assert cli.main(["--help"]) == 0
    assert "{start|status|stop}" in capsys.readouterr().out


def test_console_scripts_exit_with_command_status(monkeypatch):
    monkeypatch.setattr(cli.stop, "main", lambda: 3)

    with pytest.raises(SystemExit) as excinfo:
        cli.main_stop()

    assert excinfo.value.code == 3
