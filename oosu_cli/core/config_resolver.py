"""
Stages the configuration artifact, preferring a local override next to the
script over a download.
"""

import asyncio
import logging
import shutil
from pathlib import Path

from oosu_cli.exceptions import StagingError
from oosu_cli.transfer import Downloader
from oosu_cli.utils.path import get_script_dir

log = logging.getLogger(__name__)


class ConfigResolver:
    """Produces a usable configuration file at a target path."""

    def __init__(self, downloader: Downloader, search_dir: Path | None = None):
        self.downloader = downloader
        self.search_dir = search_dir if search_dir is not None else get_script_dir()

    def local_override(self, local_file_name: str) -> Path:
        return self.search_dir / local_file_name

    async def resolve(
        self, dest_path: Path, local_file_name: str, download_url: str
    ) -> None:
        """
        Places the configuration file at ``dest_path``.

        A file named ``local_file_name`` in the script directory is copied
        as-is. Otherwise the file is downloaded from ``download_url``.

        Raises:
            StagingError: If the copy or the download fails.
        """
        local_path = self.local_override(local_file_name)
        if local_path.is_file():
            log.info(f"Using local configuration [cyan]{local_path}[/cyan]")
            try:
                await asyncio.to_thread(shutil.copyfile, local_path, dest_path)
            except OSError as e:
                raise StagingError(
                    f"Could not copy local configuration '{local_path}': {e}"
                ) from e
            return

        log.info(f"Downloading configuration [cyan]{local_file_name}[/cyan]...")
        if not await self.downloader.fetch(download_url, dest_path):
            raise StagingError(
                f"Could not download configuration '{local_file_name}' "
                f"from {download_url}."
            )
        log.info(f"[green]✓ Downloaded {local_file_name}.[/green]")
