import asyncio
from typing import Awaitable, Callable, Optional

import aiohttp

from node_release_info.errors import HttpStatusError, ManifestParseError, NetworkError
from node_release_info.logging import get_logger

logger = get_logger(__name__)

TextFetcher = Callable[[str], Awaitable[str]]


async def fetch_text(url: str, session: Optional[aiohttp.ClientSession] = None) -> str:
    """Fetch a URL and return its body as text.

    Timeouts and connection reuse belong to the session; pass one in to
    control them. Without a session a new one is opened for this request.

    Raises:
        NetworkError: If the request could not be completed
        HttpStatusError: If the server answered with a status >= 400
        ManifestParseError: If the body cannot be decoded as text
    """
    if session is None:
        async with aiohttp.ClientSession() as own_session:
            return await _get_text(own_session, url)
    return await _get_text(session, url)


async def _get_text(session: aiohttp.ClientSession, url: str) -> str:
    logger.debug("fetch_text", url=url)
    try:
        async with session.get(url) as response:
            if response.status >= 400:
                logger.debug("fetch_text_failed", url=url, status=response.status)
                raise HttpStatusError(url, response.status)
            try:
                return await response.text()
            except UnicodeDecodeError as e:
                raise ManifestParseError(f"Response from {url} is not valid text") from e
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise NetworkError(url, str(e) or e.__class__.__name__) from e


def session_fetcher(session: aiohttp.ClientSession) -> TextFetcher:
    """Bind `fetch_text` to a caller-owned session."""
    async def fetch(url: str) -> str:
        return await fetch_text(url, session=session)
    return fetch
