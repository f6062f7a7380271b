import os
import sys
from pathlib import Path

import pytest

from oosu_cli.system.launcher import ProcessLauncher


def _recording_tool(tmp_path: Path) -> tuple[Path, Path]:
    """Shell script that writes its argument count and arguments, one per line."""
    record = tmp_path / "arguments.txt"
    tool = tmp_path / "OOSU10"
    tool.write_text(
        "#!/bin/sh\n"
        f'echo "$#" > "{record}"\n'
        f'for arg in "$@"; do echo "$arg" >> "{record}"; done\n',
        encoding="utf-8",
    )
    tool.chmod(0o755)
    return tool, record


async def test_returns_the_tool_exit_status():
    launcher = ProcessLauncher(Path(sys.executable))

    status = await launcher.launch(["-c", "import sys; sys.exit(3)"])

    assert status == 3


@pytest.mark.skipif(os.name == "nt", reason="uses a POSIX shell script")
async def test_interactive_launch_passes_no_arguments(tmp_path):
    tool, record = _recording_tool(tmp_path)

    status = await ProcessLauncher(tool).launch([])

    assert status == 0
    assert record.read_text().splitlines() == ["0"]


@pytest.mark.skipif(os.name == "nt", reason="uses a POSIX shell script")
async def test_silent_launch_passes_config_and_flag(tmp_path):
    tool, record = _recording_tool(tmp_path)
    config = tmp_path / "work dir" / "OOSU10.cfg"

    status = await ProcessLauncher(tool).launch([str(config), "/quiet"])

    assert status == 0
    assert record.read_text().splitlines() == ["2", str(config), "/quiet"]


async def test_missing_executable_raises_oserror(tmp_path):
    launcher = ProcessLauncher(tmp_path / "OOSU10.exe")

    with pytest.raises(OSError):
        await launcher.launch([])
