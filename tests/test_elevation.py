import os
import subprocess
import sys
from pathlib import Path

import pytest

from oosu_cli.system.elevation import (
    ElevationStatus,
    PrivilegeGuard,
    build_relaunch_command,
    forward_arguments,
    relaunch_elevated,
)


def test_elevated_process_is_not_relaunched():
    relaunches = []
    guard = PrivilegeGuard(check=lambda: True, relaunch=relaunches.append)

    assert guard.ensure_elevated(["--default"]) is ElevationStatus.ELEVATED
    assert relaunches == []


def test_relaunch_receives_the_same_arguments():
    relaunches = []

    def relaunch(argv):
        relaunches.append(list(argv))
        return True

    guard = PrivilegeGuard(check=lambda: False, relaunch=relaunch)

    assert guard.ensure_elevated(["--recommended", "-v"]) is ElevationStatus.RELAUNCHED
    assert relaunches == [["--recommended", "-v"]]


def test_relaunch_failure_is_reported():
    guard = PrivilegeGuard(check=lambda: False, relaunch=lambda argv: False)

    assert guard.ensure_elevated([]) is ElevationStatus.RELAUNCH_FAILED


def test_relaunch_command_reenters_the_package(monkeypatch):
    monkeypatch.delattr(sys, "frozen", raising=False)

    command = build_relaunch_command(["--customize", "--log"])

    assert command == [sys.executable, "-m", "oosu_cli", "--customize", "--log"]


def test_relaunch_command_for_frozen_builds(monkeypatch):
    monkeypatch.setattr(sys, "frozen", True, raising=False)

    assert build_relaunch_command(["--default"]) == [sys.executable, "--default"]


def test_forward_arguments_pins_script_dir(tmp_path):
    script_dir = tmp_path / "bin"

    forwarded = forward_arguments(["--recommended"], script_dir=script_dir, cwd=tmp_path)

    assert forwarded == ["--recommended", "--script-dir", str(script_dir)]


def test_forward_arguments_makes_path_options_absolute(tmp_path):
    forwarded = forward_arguments(
        ["--default", "--config-file", "settings.ini", "-v"],
        script_dir=Path("bin"),
        log_path=Path("logs/run.log"),
        cwd=tmp_path,
    )

    assert forwarded == [
        "--default",
        "--config-file",
        str(tmp_path / "settings.ini"),
        "-v",
        "--script-dir",
        str(tmp_path / "bin"),
        "--log-path",
        str(tmp_path / "logs" / "run.log"),
    ]


def test_forward_arguments_handles_inline_values(tmp_path):
    forwarded = forward_arguments(
        ["--customize", "--config-file=conf/settings.ini", "--log-path=old.log"],
        script_dir=tmp_path / "bin",
        log_path=tmp_path / "run.log",
        cwd=tmp_path,
    )

    assert forwarded == [
        "--customize",
        "--config-file",
        str(tmp_path / "conf" / "settings.ini"),
        "--script-dir",
        str(tmp_path / "bin"),
        "--log-path",
        str(tmp_path / "run.log"),
    ]


def test_forward_arguments_replaces_pinned_options(tmp_path):
    forwarded = forward_arguments(
        ["--default", "--script-dir", "elsewhere", "--log-path", "other.log", "--log"],
        script_dir=tmp_path / "bin",
        cwd=tmp_path,
    )

    assert forwarded == ["--default", "--log", "--script-dir", str(tmp_path / "bin")]
    assert "elsewhere" not in " ".join(forwarded)


@pytest.mark.skipif(os.name == "nt", reason="relaunches through sudo")
def test_relaunch_starts_in_the_current_directory(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    runs = []

    def fake_run(command, check, cwd):
        runs.append((command, cwd))

    monkeypatch.setattr(subprocess, "run", fake_run)

    assert relaunch_elevated(["--default", "--script-dir", str(tmp_path)]) is True
    [(command, cwd)] = runs
    assert command[0] == "sudo"
    assert command[-3:] == ["--default", "--script-dir", str(tmp_path)]
    assert cwd == os.getcwd()
