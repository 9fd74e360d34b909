import aiohttp
import pytest

from node_release_info.errors import HttpStatusError, NetworkError
from node_release_info.utils.fetching import fetch_text, session_fetcher

MANIFEST_PATH = "/download/release/v20.6.1/SHASUMS256.txt"


@pytest.mark.asyncio
async def test_fetch_text(release_server, manifest_body):
    url = release_server.urls.base_url + "/v20.6.1/SHASUMS256.txt"
    assert await fetch_text(url) == manifest_body
    assert release_server.requests == [MANIFEST_PATH]


@pytest.mark.asyncio
async def test_fetch_text_with_caller_session(release_server, manifest_body):
    """A caller-owned session is reused and left open"""
    url = release_server.urls.base_url + "/v20.6.1/SHASUMS256.txt"
    async with aiohttp.ClientSession() as session:
        fetch = session_fetcher(session)
        assert await fetch(url) == manifest_body
        assert await fetch(url) == manifest_body
        assert not session.closed
    assert len(release_server.requests) == 2


@pytest.mark.asyncio
async def test_fetch_text_http_status(release_server):
    url = release_server.urls.base_url + "/v0.0.0/SHASUMS256.txt"
    with pytest.raises(HttpStatusError) as exc_info:
        await fetch_text(url)
    assert exc_info.value.status == 404
    assert exc_info.value.details["url"] == url


@pytest.mark.asyncio
async def test_fetch_text_network_error():
    """Connection failures are reported as NetworkError"""
    url = "http://127.0.0.1:1/download/release/v20.6.1/SHASUMS256.txt"
    with pytest.raises(NetworkError) as exc_info:
        await fetch_text(url)
    assert exc_info.value.details["url"] == url
    assert isinstance(exc_info.value.__cause__, aiohttp.ClientError)
