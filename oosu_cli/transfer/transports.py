"""
Independent transport strategies for fetching a single remote file to disk.

Each transport performs exactly one attempt per call and raises on failure;
retrying and falling back between transports is the Downloader's job.
"""

import asyncio
import logging
import os
import shutil
from pathlib import Path
from typing import Protocol

import aiofiles
import aiohttp
import httpx

from oosu_cli.exceptions import TransportError

log = logging.getLogger(__name__)

CHUNK_SIZE = 262144  # 256 KB
USER_AGENT = "oosu-cli"


class Transport(Protocol):
    """One mechanism for retrieving a remote resource."""

    name: str

    async def fetch(self, url: str, destination: Path) -> None: ...


class AiohttpTransport:
    """Direct streaming HTTP GET through an aiohttp session."""

    name = "aiohttp"

    def __init__(self, connect_timeout: float = 15, read_timeout: float = 90):
        self.timeout = aiohttp.ClientTimeout(
            total=None, sock_connect=connect_timeout, sock_read=read_timeout
        )

    async def fetch(self, url: str, destination: Path) -> None:
        async with (
            aiohttp.ClientSession(
                timeout=self.timeout, headers={"User-Agent": USER_AGENT}
            ) as session,
            session.get(url, allow_redirects=True) as response,
        ):
            response.raise_for_status()
            async with aiofiles.open(destination, "wb") as f:
                async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                    await f.write(chunk)


class HttpxTransport:
    """Generic HTTP client transport, useful when aiohttp trips over a proxy."""

    name = "httpx"

    def __init__(self, timeout: float = 60):
        self.timeout = httpx.Timeout(timeout)

    async def fetch(self, url: str, destination: Path) -> None:
        async with (
            httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                headers={"User-Agent": USER_AGENT},
            ) as client,
            client.stream("GET", url) as response,
        ):
            response.raise_for_status()
            async with aiofiles.open(destination, "wb") as f:
                async for chunk in response.aiter_bytes(CHUNK_SIZE):
                    await f.write(chunk)


class BitsTransport:
    """
    Windows Background Intelligent Transfer Service, driven through PowerShell.

    BITS survives throttling and flaky connections that defeat plain HTTP
    clients. On hosts without PowerShell every attempt fails immediately.
    """

    name = "bits"

    def __init__(self, powershell: str | None = None):
        self.powershell = powershell or shutil.which("powershell") or shutil.which(
            "pwsh"
        )

    async def fetch(self, url: str, destination: Path) -> None:
        if os.name != "nt" or not self.powershell:
            raise TransportError("BITS is not available on this host.")

        command = (
            "Start-BitsTransfer -ErrorAction Stop "
            f"-Source '{_ps_quote(url)}' -Destination '{_ps_quote(str(destination))}'"
        )
        process = await asyncio.create_subprocess_exec(
            self.powershell,
            "-NoProfile",
            "-NonInteractive",
            "-Command",
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        _, stderr = await process.communicate()
        if process.returncode != 0:
            message = stderr.decode(errors="replace").strip() or "unknown error"
            raise TransportError(
                f"Start-BitsTransfer exited with {process.returncode}: {message}"
            )
        if not destination.is_file():
            raise TransportError("Start-BitsTransfer reported success but no file.")


def _ps_quote(value: str) -> str:
    """Escapes a value for a single-quoted PowerShell string."""
    return value.replace("'", "''")


TRANSPORTS: dict[str, type] = {
    AiohttpTransport.name: AiohttpTransport,
    HttpxTransport.name: HttpxTransport,
    BitsTransport.name: BitsTransport,
}


def build_transports(names: list[str]) -> list[Transport]:
    """Instantiates the transports named in ``names``, preserving order."""
    try:
        return [TRANSPORTS[name]() for name in names]
    except KeyError as e:
        raise ValueError(f"Unknown download strategy: {e.args[0]}") from e
