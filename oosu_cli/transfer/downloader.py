"""
Handles resilient downloading of single files by retrying each transport
strategy a fixed number of times before falling back to the next one.
"""

import asyncio
import logging
from pathlib import Path

from oosu_cli.models.config import OosuSettings

from .transports import Transport, build_transports

log = logging.getLogger(__name__)


class Downloader:
    """A file downloader with per-strategy retries and ordered fallback."""

    def __init__(
        self,
        transports: list[Transport],
        max_attempts: int = 3,
        retry_delay: float = 0.0,
    ):
        if not transports:
            raise ValueError("Downloader needs at least one transport.")
        self.transports = transports
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay

    @classmethod
    def from_settings(cls, settings: OosuSettings) -> "Downloader":
        """Builds a downloader following the configured strategy order."""
        return cls(
            build_transports(settings.strategies),
            max_attempts=settings.max_attempts,
            retry_delay=settings.retry_delay,
        )

    async def fetch(self, url: str, destination: Path) -> bool:
        """
        Downloads ``url`` to ``destination``.

        Every strategy gets ``max_attempts`` tries, in order. The first
        successful attempt ends the call; no later attempt or strategy runs.

        Returns:
            True if any attempt succeeded, False once all are exhausted.
        """
        name = destination.name
        for transport in self.transports:
            for attempt in range(1, self.max_attempts + 1):
                try:
                    await transport.fetch(url, destination)
                except Exception as e:  # noqa: BLE001
                    log.debug(
                        f"Download attempt {attempt}/{self.max_attempts} for "
                        f"'{name}' via {transport.name} failed: {e}"
                    )
                    _discard_partial(destination)
                    if attempt < self.max_attempts and self.retry_delay:
                        await asyncio.sleep(self.retry_delay)
                    continue

                log.debug(
                    f"Downloaded '{name}' via {transport.name} "
                    f"(attempt {attempt}/{self.max_attempts})."
                )
                return True

            log.debug(
                f"Strategy {transport.name} exhausted for '{name}', "
                "falling back to the next one."
            )

        log.error(f"[red]✗ All download strategies failed for '{name}'.[/red]")
        return False


def _discard_partial(destination: Path) -> None:
    """Removes a partially written file left behind by a failed attempt."""
    try:
        destination.unlink(missing_ok=True)
    except OSError as e:
        log.debug(f"Could not remove partial download '{destination}': {e}")
