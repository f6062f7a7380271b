"""
The main orchestrator: stages the settings tool and its configuration in a
private working directory, runs the tool, and always cleans up afterwards.
"""

import asyncio
import logging
import signal
from collections.abc import Callable
from pathlib import Path

from oosu_cli.exceptions import DownloadError
from oosu_cli.models.config import QUIET_FLAG, TOOL_FILENAME, Mode, OosuSettings
from oosu_cli.system.launcher import ProcessLauncher, ToolLauncher
from oosu_cli.transfer import Downloader

from .config_resolver import ConfigResolver
from .workspace import working_directory

log = logging.getLogger(__name__)


class Orchestrator:
    """Drives a single run from staging to cleanup."""

    def __init__(
        self,
        mode: Mode,
        settings: OosuSettings,
        downloader: Downloader,
        resolver: ConfigResolver | None = None,
        launcher_factory: Callable[[Path], ToolLauncher] = ProcessLauncher,
        workdir_base: Path | None = None,
    ):
        self.mode = mode
        self.settings = settings
        self.downloader = downloader
        self.resolver = resolver or ConfigResolver(downloader)
        self.launcher_factory = launcher_factory
        self.workdir_base = workdir_base
        self.workdir: Path | None = None

    async def run(self) -> None:
        """
        Executes the run.

        Raises:
            WorkspaceError: If the working directory cannot be created.
            DownloadError: If the settings tool cannot be downloaded.
            StagingError: If the configuration file cannot be staged.
        """
        remove_handler = self._cancel_on_sigterm()
        try:
            with working_directory(self.workdir_base) as workdir:
                self.workdir = workdir
                executable = await self._stage_executable(workdir)
                args = await self._stage_config(workdir)
                await self._execute(self.launcher_factory(executable), args)
        finally:
            remove_handler()

    async def _stage_executable(self, workdir: Path) -> Path:
        executable = workdir / TOOL_FILENAME
        log.info(f"Downloading [cyan]{TOOL_FILENAME}[/cyan]...")
        if not await self.downloader.fetch(self.settings.tool_url, executable):
            raise DownloadError(
                f"Could not download {TOOL_FILENAME} from {self.settings.tool_url}."
            )
        log.info(f"[green]✓ Downloaded {TOOL_FILENAME}.[/green]")
        return executable

    async def _stage_config(self, workdir: Path) -> list[str]:
        """Stages the mode's configuration file and returns the tool arguments."""
        if not self.mode.requires_config:
            return []

        filename = self.mode.config_filename
        config_path = workdir / filename
        await self.resolver.resolve(
            config_path, filename, self.settings.config_url_for(self.mode)
        )
        return [str(config_path), QUIET_FLAG]

    async def _execute(self, launcher: ToolLauncher, args: list[str]) -> None:
        """Runs the tool. A launch failure is reported but does not fail the run."""
        if args:
            log.info("Applying settings silently...")
        else:
            log.info("Opening the settings tool, close it to finish...")

        try:
            status = await launcher.launch(args)
        except OSError as e:
            log.error(f"[red]✗ Failed to launch {TOOL_FILENAME}: {e}[/red]")
            return

        log.debug(f"{TOOL_FILENAME} exited with status {status}.")
        log.info(f"[green]✓ {TOOL_FILENAME} finished.[/green]")

    def _cancel_on_sigterm(self) -> Callable[[], None]:
        """
        Turns SIGTERM into cancellation of the running task so the working
        directory is still removed. Returns a callable that undoes it.
        """
        loop = asyncio.get_running_loop()
        task = asyncio.current_task()
        try:
            loop.add_signal_handler(signal.SIGTERM, task.cancel)
        except (NotImplementedError, RuntimeError, ValueError, AttributeError):
            # Windows event loops and non-main threads cannot trap signals.
            return lambda: None

        def remove() -> None:
            loop.remove_signal_handler(signal.SIGTERM)

        return remove
