"""Concurrent broken-link probing for a page's internal links."""

import asyncio
import logging
from typing import Iterable

from leadscan.integrations.http_client import LinkProbe, ProbeResult
from leadscan.models.seo import BrokenLinkReport
from leadscan.utils.concurrency import settle_all

logger = logging.getLogger(__name__)

# Rate limiting, bot walls and auth gates are not breakage.
IGNORED_STATUS_CODES = frozenset({401, 403, 429, 999})
BROKEN_STATUS_FLOOR = 500
SUPPRESS_LIST_AT = 20
DEFAULT_CONCURRENCY = 10


def is_broken(result: ProbeResult) -> bool:
    """A link is broken only on a definite server error; timeouts are inconclusive."""
    if result.timed_out or result.status_code is None:
        return False
    status = result.status_code
    return status >= BROKEN_STATUS_FLOOR and status not in IGNORED_STATUS_CODES


class BrokenLinkProber:
    """Probe every href concurrently and report the broken ones.

    At most *concurrency* probes are in flight at once, across every page
    audited with this prober.
    """

    def __init__(self, probe: LinkProbe, timeout: float = 5.0, concurrency: int = DEFAULT_CONCURRENCY) -> None:
        self._probe = probe
        self._timeout = timeout
        self._semaphore = asyncio.Semaphore(max(1, concurrency))

    async def _probe_one(self, href: str) -> ProbeResult:
        async with self._semaphore:
            return await self._probe.probe(href, timeout=self._timeout)

    async def probe_all(self, hrefs: Iterable[str]) -> BrokenLinkReport:
        hrefs = list(hrefs)
        if not hrefs:
            return BrokenLinkReport()

        settled = await settle_all(self._probe_one(href) for href in hrefs)

        broken: list[str] = []
        inconclusive = 0
        for href, outcome in zip(hrefs, settled):
            if not outcome.ok:
                logger.debug("Probe for %s raised: %s", href, outcome.error)
                inconclusive += 1
                continue
            result = outcome.value
            if result.timed_out or result.status_code is None:
                inconclusive += 1
            elif is_broken(result):
                logger.debug("Broken link %s (%s)", href, result.status_code)
                broken.append(href)

        report = BrokenLinkReport(
            count=len(broken),
            links=broken if len(broken) < SUPPRESS_LIST_AT else None,
            probed=len(hrefs),
            inconclusive=inconclusive,
        )
        if report.links is None:
            logger.info("%d broken links found, list suppressed", report.count)
        return report
