import functools
import os

import aiohttp
import httpx
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from oosu_cli.exceptions import TransportError
from oosu_cli.transfer import transports
from oosu_cli.transfer.transports import (
    AiohttpTransport,
    BitsTransport,
    HttpxTransport,
    build_transports,
)

URL = "https://example.test/OOSU10.exe"


def _mock_httpx(monkeypatch, handler):
    real_client = httpx.AsyncClient
    monkeypatch.setattr(
        transports.httpx,
        "AsyncClient",
        functools.partial(real_client, transport=httpx.MockTransport(handler)),
    )


async def test_httpx_transport_streams_body_to_disk(tmp_path, monkeypatch):
    _mock_httpx(monkeypatch, lambda request: httpx.Response(200, content=b"MZ" * 10))
    destination = tmp_path / "OOSU10.exe"

    await HttpxTransport().fetch(URL, destination)

    assert destination.read_bytes() == b"MZ" * 10


async def test_httpx_transport_raises_on_error_status(tmp_path, monkeypatch):
    _mock_httpx(monkeypatch, lambda request: httpx.Response(404))

    with pytest.raises(httpx.HTTPStatusError):
        await HttpxTransport().fetch(URL, tmp_path / "OOSU10.exe")


def _tool_server():
    async def tool(request):
        return web.Response(body=b"MZ" * 1024)

    async def moved(request):
        raise web.HTTPFound("/tool")

    application = web.Application()
    application.router.add_get("/tool", tool)
    application.router.add_get("/moved", moved)
    return TestServer(application)


async def test_aiohttp_transport_streams_body_to_disk(tmp_path):
    destination = tmp_path / "OOSU10.exe"

    async with _tool_server() as server:
        await AiohttpTransport().fetch(str(server.make_url("/tool")), destination)

    assert destination.read_bytes() == b"MZ" * 1024


async def test_aiohttp_transport_follows_redirects(tmp_path):
    destination = tmp_path / "OOSU10.exe"

    async with _tool_server() as server:
        await AiohttpTransport().fetch(str(server.make_url("/moved")), destination)

    assert destination.read_bytes() == b"MZ" * 1024


async def test_aiohttp_transport_raises_on_error_status(tmp_path):
    destination = tmp_path / "OOSU10.exe"

    async with _tool_server() as server:
        with pytest.raises(aiohttp.ClientResponseError) as excinfo:
            await AiohttpTransport().fetch(str(server.make_url("/missing")), destination)

    assert excinfo.value.status == 404
    assert not destination.exists()


@pytest.mark.skipif(os.name == "nt", reason="BITS exists on Windows")
async def test_bits_transport_unavailable_off_windows(tmp_path):
    with pytest.raises(TransportError):
        await BitsTransport().fetch(URL, tmp_path / "OOSU10.exe")


def test_build_transports_preserves_order():
    built = build_transports(["httpx", "bits", "aiohttp"])
    assert [t.name for t in built] == ["httpx", "bits", "aiohttp"]
    assert isinstance(built[2], AiohttpTransport)


def test_build_transports_rejects_unknown_name():
    with pytest.raises(ValueError, match="curl"):
        build_transports(["curl"])
