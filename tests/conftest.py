import pytest
import pytest_asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from aiohttp import web
from aiohttp.test_utils import TestServer

from node_release_info.urls import ReleaseURLFormatter

RELEASES_DIR = Path(__file__).parent.parent / "fixtures_data" / "releases"
VERSION = "20.6.1"


@dataclass
class ReleaseServer:
    """Local stand-in for the Node.js release server"""
    urls: ReleaseURLFormatter
    requests: List[str] = field(default_factory=list)


class CountingFetcher:
    """In-memory TextFetcher that records every URL it is asked for"""

    def __init__(self, body: Optional[str] = None, error: Optional[Exception] = None):
        self.body = body
        self.error = error
        self.urls: List[str] = []

    async def __call__(self, url: str) -> str:
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.body

    @property
    def calls(self) -> int:
        return len(self.urls)


@pytest.fixture
def manifest_body() -> str:
    """Real SHASUMS256.txt published for v20.6.1"""
    return (RELEASES_DIR / f"v{VERSION}" / "SHASUMS256.txt").read_text()


@pytest.fixture
def fetcher(manifest_body: str) -> CountingFetcher:
    return CountingFetcher(body=manifest_body)


@pytest.fixture
def make_fetcher():
    """Factory for fetchers with a custom body or error"""
    return CountingFetcher


@pytest_asyncio.fixture
async def release_server():
    """Serve fixtures_data/releases over HTTP"""
    requests: List[str] = []

    async def manifest(request: web.Request) -> web.Response:
        requests.append(request.path)
        path = RELEASES_DIR / request.match_info["folder"] / "SHASUMS256.txt"
        if not path.exists():
            raise web.HTTPNotFound()
        return web.Response(text=path.read_text())

    app = web.Application()
    app.router.add_get("/download/release/{folder}/SHASUMS256.txt", manifest)

    server = TestServer(app)
    await server.start_server()
    try:
        yield ReleaseServer(
            urls=ReleaseURLFormatter(str(server.make_url("/download/release"))),
            requests=requests,
        )
    finally:
        await server.close()
