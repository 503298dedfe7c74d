from __future__ import annotations

import pytest

from service_control.cli import start


@pytest.fixture
def wired(monkeypatch, process_table, pid_dir, fast_timings):
    """Route the start command at the fake process table."""
    spawned = []

    def fake_spawn(argv, env=None):
        pid = 600 + len(spawned)
        spawned.append((list(argv), dict(env or {})))
        process_table.add(pid, " ".join(argv))
        return pid

    monkeypatch.setattr(start, "ProcessFinder", lambda: process_table)
    monkeypatch.setattr(start, "spawn_detached", fake_spawn)
    monkeypatch.setenv("JAVA_HOME_13", "/jdk13")
    monkeypatch.setenv("JAVA_HOME_17", "/jdk17")
    return spawned


def test_start_records_pid_and_reports(wired, jar_file, pid_dir, capsys):
    exit_code = start.main(["-f", str(jar_file), "-p", "8080"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert (pid_dir / "demo-app.pid").read_text() == "600\n"
    assert "Starting service with command:" in out
    assert "/jdk13/bin/java" in out
    assert "Service 'demo-app' started with PID: 600" in out
    argv, env = wired[0]
    assert "--server.port=8080" in argv
    assert env["spring.application.name"] == "demo-app"


def test_start_honours_name_and_java_version(wired, jar_file, pid_dir):
    assert start.main(["--java", "17", "--name", "orders", f"--file={jar_file}"]) == 0

    argv, _ = wired[0]
    assert argv[0] == "/jdk17/bin/java"
    assert "--spring.config.name=orders" in argv
    assert (pid_dir / "orders.pid").exists()


def test_second_start_reports_already_running(wired, jar_file, capsys):
    start.main(["-f", str(jar_file)])
    capsys.readouterr()

    assert start.main(["-f", str(jar_file)]) == 0

    assert capsys.readouterr().out.strip() == "Service 'demo-app' is already running with PID 600."
    assert len(wired) == 1


def test_stale_pid_file_is_replaced(wired, jar_file, pid_dir, capsys):
    pid_dir.mkdir()
    (pid_dir / "demo-app.pid").write_text("999999\n")

    assert start.main(["-f", str(jar_file)]) == 0

    assert "Found stale PID file. Removing..." in capsys.readouterr().out
    assert (pid_dir / "demo-app.pid").read_text() == "600\n"


def test_missing_file_option(wired, capsys):
    assert start.main(["-p", "8080"]) == 1

    err = capsys.readouterr().err
    assert "Error: The --file parameter is mandatory." in err
    assert "usage: service-start" in err


def test_nonexistent_jar(wired, tmp_path, pid_dir, capsys):
    missing = tmp_path / "nope.jar"

    assert start.main(["-f", str(missing)]) == 1

    assert f"Error: Jar file '{missing}' does not exist." in capsys.readouterr().err
    assert wired == []
    assert not pid_dir.exists()


@pytest.mark.parametrize("port", ["99999", "http"])
def test_invalid_port(wired, jar_file, port, capsys):
    assert start.main(["-f", str(jar_file), "-p", port]) == 1
    assert "Port must be a numeric value" in capsys.readouterr().err


def test_unsupported_java(wired, jar_file, capsys):
    assert start.main(["-j", "11", "-f", str(jar_file)]) == 1
    assert "Error: Java version must be 13 or 17." in capsys.readouterr().err


def test_unknown_parameter(wired, jar_file, capsys):
    assert start.main(["-f", str(jar_file), "--bogus"]) == 1
    assert "Error: Unknown parameter: --bogus" in capsys.readouterr().err
    assert wired == []


def test_spawned_process_not_found(monkeypatch, wired, process_table, jar_file, pid_dir, capsys):
    monkeypatch.setattr(start, "spawn_detached", lambda argv, env=None: 700)

    assert start.main(["-f", str(jar_file)]) == 1

    assert "Error: Failed to start service." in capsys.readouterr().err
    assert not (pid_dir / "demo-app.pid").exists()


def test_no_arguments_prints_help(capsys):
    assert start.main([]) == 1
    assert "usage: service-start" in capsys.readouterr().out


def test_help_flag(capsys):
    assert start.main(["-h"]) == 0
    out = capsys.readouterr().out
    assert "--config-dir" in out
    assert "Example:" in out


def test_logging_configured_for_command(wired, jar_file, quiet_logging):
    start.main(["-f", str(jar_file)])

    assert quiet_logging == [(("service-start",), {"log_dir": None, "verbose": False})]


def test_empty_java_option_is_rejected(wired, jar_file, capsys):
    assert start.main(["--java=", "-f", str(jar_file)]) == 1
    assert "Error: Java version must be 13 or 17." in capsys.readouterr().err
    assert wired == []


def test_missing_jdk_reports_launch_failure(monkeypatch, process_table, pid_dir, fast_timings, jar_file, tmp_path, capsys):
    monkeypatch.setattr(start, "ProcessFinder", lambda: process_table)
    missing_jdk = tmp_path / "no-such-jdk"
    monkeypatch.setenv("JAVA_HOME_13", str(missing_jdk))

    assert start.main(["-f", str(jar_file), "-n", "demo"]) == 1

    err = capsys.readouterr().err
    assert f"Error: Failed to start service: cannot execute '{missing_jdk / 'bin' / 'java'}'" in err
    assert not (pid_dir / "demo.pid").exists()


def test_pid_directory_below_a_file_reports_error(monkeypatch, wired, jar_file, tmp_path, capsys):
    blocker = tmp_path / "plain-file"
    blocker.write_text("")
    monkeypatch.setenv("SERVICE_CONTROL_PID_DIR", str(blocker / "sub"))

    assert start.main(["-f", str(jar_file)]) == 1

    assert "Error: Cannot open launch lock" in capsys.readouterr().err
    assert wired == []
