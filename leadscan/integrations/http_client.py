"""aiohttp-backed page fetching and link-existence probing.

Both capabilities are best-effort: they never raise for network problems,
they report absence instead.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import aiohttp

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "LeadScanBot/1.0"


@dataclass
class ProbeResult:
    """Outcome of a single existence probe."""
    url: str
    status_code: Optional[int] = None
    timed_out: bool = False
    error: Optional[str] = None


class PageFetcher(Protocol):
    async def fetch(self, url: str, timeout: float = 5.0) -> Optional[str]: ...


class LinkProbe(Protocol):
    async def probe(self, url: str, timeout: float = 5.0) -> ProbeResult: ...


class AiohttpPageFetcher:
    """Fetch page markup; resolves to ``None`` on any failure or non-2xx status."""

    def __init__(self, user_agent: str = DEFAULT_USER_AGENT, verify_ssl: bool = True) -> None:
        self._user_agent = user_agent
        self._verify_ssl = verify_ssl

    async def fetch(self, url: str, timeout: float = 5.0) -> Optional[str]:
        logger.debug("Fetching %s", url)
        try:
            client_timeout = aiohttp.ClientTimeout(total=timeout)
            async with aiohttp.ClientSession(timeout=client_timeout) as session:
                async with session.get(
                    url,
                    headers={"User-Agent": self._user_agent},
                    ssl=None if self._verify_ssl else False,
                    allow_redirects=True,
                ) as resp:
                    if not 200 <= resp.status < 300:
                        logger.debug("Fetch %s returned status %s", url, resp.status)
                        return None
                    return await resp.text(errors="replace")
        except asyncio.TimeoutError:
            logger.debug("Timeout fetching %s", url)
            return None
        except (aiohttp.ClientError, ValueError, LookupError) as exc:
            # LookupError: the server declared a charset Python does not know
            logger.debug("Error fetching %s: %s", url, exc)
            return None


class AiohttpLinkProbe:
    """Issue a GET and report the status, a timeout, or another error."""

    def __init__(self, user_agent: str = DEFAULT_USER_AGENT) -> None:
        self._user_agent = user_agent

    async def probe(self, url: str, timeout: float = 5.0) -> ProbeResult:
        try:
            client_timeout = aiohttp.ClientTimeout(total=timeout)
            async with aiohttp.ClientSession(timeout=client_timeout) as session:
                async with session.get(
                    url,
                    headers={"User-Agent": self._user_agent},
                    ssl=False,
                    allow_redirects=True,
                ) as resp:
                    return ProbeResult(url=url, status_code=resp.status)
        except asyncio.TimeoutError:
            return ProbeResult(url=url, timed_out=True, error="timeout")
        except (aiohttp.ClientError, ValueError) as exc:
            return ProbeResult(url=url, error=str(exc) or type(exc).__name__)
