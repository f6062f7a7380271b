"""
Checks for administrative rights and relaunches the process elevated.

The guard reports what happened and never exits the process itself; the
caller decides the exit status.
"""

import logging
import os
import subprocess
import sys
from collections.abc import Callable, Sequence
from enum import Enum
from pathlib import Path

log = logging.getLogger(__name__)


class ElevationStatus(Enum):
    """Outcome of the privilege check."""

    ELEVATED = "elevated"
    RELAUNCHED = "relaunched"
    RELAUNCH_FAILED = "relaunch_failed"


def is_elevated() -> bool:
    """Returns True when the process holds administrative rights."""
    if os.name == "nt":
        import ctypes

        try:
            return bool(ctypes.windll.shell32.IsUserAnAdmin())
        except (AttributeError, OSError):
            return False
    return os.geteuid() == 0


# Options whose value is a path; relative values are resolved before relaunch.
PATH_OPTIONS = ("--log-path", "--config-file", "--script-dir")
# Options re-added by forward_arguments with values fixed in this process.
PINNED_OPTIONS = ("--log-path", "--script-dir")


def forward_arguments(
    argv: Sequence[str],
    *,
    script_dir: Path,
    log_path: Path | None = None,
    cwd: Path | None = None,
) -> list[str]:
    """
    Builds the switches for the elevated process.

    The elevated copy runs from another interpreter entry point, may start in
    another directory and may see another home directory. Everything that
    depends on those is therefore settled here: path options become absolute,
    the script directory is pinned with ``--script-dir``, and the transcript
    location with ``--log-path``.
    """
    cwd = cwd or Path.cwd()
    forwarded: list[str] = []
    args = list(argv)
    i = 0
    while i < len(args):
        arg = args[i]
        name, sep, inline = arg.partition("=")
        if name in PATH_OPTIONS:
            if sep:
                value = inline
                i += 1
            else:
                value = args[i + 1] if i + 1 < len(args) else ""
                i += 2
            if name not in PINNED_OPTIONS:
                forwarded += [name, str(cwd / value)]
            continue
        forwarded.append(arg)
        i += 1

    forwarded += ["--script-dir", str(cwd / script_dir)]
    if log_path is not None:
        forwarded += ["--log-path", str(cwd / log_path)]
    return forwarded


def build_relaunch_command(argv: Sequence[str]) -> list[str]:
    """Rebuilds an equivalent invocation of this program with the same switches."""
    if getattr(sys, "frozen", False):
        return [sys.executable, *argv]
    return [sys.executable, "-m", "oosu_cli", *argv]


def relaunch_elevated(argv: Sequence[str]) -> bool:
    """
    Starts an elevated copy of the current invocation in the current directory.

    Returns:
        True if the elevated process was started, False otherwise.
    """
    command = build_relaunch_command(argv)
    cwd = os.getcwd()
    if os.name == "nt":
        import ctypes

        params = subprocess.list2cmdline(command[1:])
        try:
            result = ctypes.windll.shell32.ShellExecuteW(
                None, "runas", command[0], params, cwd, 1
            )
        except (AttributeError, OSError) as e:
            log.debug(f"ShellExecuteW failed: {e}")
            return False
        # ShellExecuteW returns a value greater than 32 on success.
        return int(result) > 32

    try:
        subprocess.run(["sudo", *command], check=False, cwd=cwd)
    except OSError as e:
        log.debug(f"Could not start sudo: {e}")
        return False
    return True


class PrivilegeGuard:
    """One-shot guard that hands the run over to an elevated process."""

    def __init__(
        self,
        check: Callable[[], bool] = is_elevated,
        relaunch: Callable[[Sequence[str]], bool] = relaunch_elevated,
    ):
        self._check = check
        self._relaunch = relaunch

    def ensure_elevated(self, argv: Sequence[str]) -> ElevationStatus:
        if self._check():
            return ElevationStatus.ELEVATED

        log.info("[yellow]Administrator rights required, relaunching...[/yellow]")
        if self._relaunch(argv):
            return ElevationStatus.RELAUNCHED
        return ElevationStatus.RELAUNCH_FAILED
