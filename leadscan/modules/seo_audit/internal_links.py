"""Re-run the SEO audit over a page's internal links."""

import asyncio
import logging
from typing import Iterable, Optional

from leadscan.config import DEFAULT_MEDIA_FILE_EXTENSIONS
from leadscan.integrations.http_client import PageFetcher
from leadscan.models.seo import SEOAuditResult
from leadscan.modules.seo_audit.auditor import SEOAuditor
from leadscan.modules.seo_audit.link_prober import DEFAULT_CONCURRENCY
from leadscan.utils.concurrency import settle_all

logger = logging.getLogger(__name__)


class InternalLinkAuditor:
    """Fetch and audit each internal link, gated by a link-count ceiling."""

    def __init__(
        self,
        seo_auditor: SEOAuditor,
        fetcher: PageFetcher,
        limit: int = 50,
        media_extensions: Optional[Iterable[str]] = None,
        timeout: float = 5.0,
        concurrency: int = DEFAULT_CONCURRENCY,
    ) -> None:
        self._seo = seo_auditor
        self._fetcher = fetcher
        self._limit = limit
        self._media_extensions = tuple(
            DEFAULT_MEDIA_FILE_EXTENSIONS if media_extensions is None else media_extensions
        )
        self._timeout = timeout
        self._semaphore = asyncio.Semaphore(max(1, concurrency))

    def is_media(self, href: str) -> bool:
        lowered = href.lower()
        return any(ext in lowered for ext in self._media_extensions)

    async def audit(self, hrefs: Iterable[str], domain: str) -> list[SEOAuditResult]:
        hrefs = list(hrefs)
        if len(hrefs) >= self._limit:
            logger.info(
                "Skipping internal-link audit for %s: %d links (limit %d)",
                domain, len(hrefs), self._limit,
            )
            return []

        targets = [h for h in hrefs if not self.is_media(h)]
        logger.info("Auditing %d internal links for %s", len(targets), domain)
        settled = await settle_all(self._audit_one(href, domain) for href in targets)

        results: list[SEOAuditResult] = []
        for href, outcome in zip(targets, settled):
            if not outcome.ok:
                logger.warning("Internal-link audit failed for %s: %s", href, outcome.error)
            elif isinstance(outcome.value, SEOAuditResult):
                results.append(outcome.value)
        return results

    async def _audit_one(self, href: str, domain: str) -> Optional[SEOAuditResult]:
        async with self._semaphore:
            markup = await self._fetcher.fetch(href, timeout=self._timeout)
        if not markup:
            logger.debug("No markup for internal link %s", href)
            return None
        return await self._seo.audit(href, markup, domain)
