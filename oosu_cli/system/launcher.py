"""
Runs the staged settings tool as a child process and waits for it to exit.
"""

import asyncio
import logging
from pathlib import Path
from typing import Protocol

log = logging.getLogger(__name__)


class ToolLauncher(Protocol):
    """Narrow interface to the external settings tool."""

    async def launch(self, args: list[str]) -> int: ...


class ProcessLauncher:
    """Launches an executable and blocks until it exits, with no timeout."""

    def __init__(self, executable: Path):
        self.executable = executable

    async def launch(self, args: list[str]) -> int:
        """
        Starts the executable with ``args`` and waits for it.

        Returns:
            The child's exit status.

        Raises:
            OSError: If the process cannot be started.
        """
        log.debug(f"Launching '{self.executable}' with arguments {args}.")
        process = await asyncio.create_subprocess_exec(str(self.executable), *args)
        return await process.wait()
