"""Page-level SEO auditor.

Extracts the on-page SEO signals from raw markup, probes internal links for
breakage and produces a 0-100 style score (it can go below zero).
"""

import logging
import math
from typing import Optional, Union
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from leadscan.models.seo import SEOAuditResult
from leadscan.modules.seo_audit.link_prober import BrokenLinkProber

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Limits and penalties
# ---------------------------------------------------------------------------

TITLE_MAX_LENGTH = 70
DESCRIPTION_MAX_LENGTH = 155
KEYWORDS_MAX_LENGTH = 255
H1_MAX_LENGTH = 60
MIN_INTERNAL_EXTERNAL_RATIO = 0.5

MISSING_FIELD_PENALTY = 20
OVERLENGTH_PENALTY = 10
MISSING_H1_PENALTY = 10
LONG_H1_PENALTY = 5
MISSING_CANONICAL_PENALTY = 10
LINK_RATIO_PENALTY = 10
ALT_PENALTY_SCALE = 15
BROKEN_LINK_PENALTY = 5


# ---------------------------------------------------------------------------
# Link classification
# ---------------------------------------------------------------------------

def is_internal_href(href: str, domain: str) -> bool:
    if href.startswith("/"):
        return True
    if not domain:
        return False
    prefixes = tuple(
        f"{scheme}://{www}{domain}"
        for scheme in ("http", "https")
        for www in ("", "www.")
    )
    return href.startswith(prefixes)


def is_external_href(href: str, domain: str) -> bool:
    return href.startswith(("http://", "https://")) and not (domain and domain in href)


def normalize_href(href: str, page_url: str) -> Optional[str]:
    """Make an internal href absolute against *page_url*.

    Returns ``None`` for ``mailto:``/``tel:`` links.

    Examples:
        >>> normalize_href("/about", "https://acme.com/")
        'https://acme.com/about'
        >>> normalize_href("/contact", "https://acme.com/services")
        'https://acme.com/contact'
        >>> normalize_href("//cdn.acme.com/x", "https://acme.com")
        'https://cdn.acme.com/x'
    """
    href = href.strip()
    if not href or href.startswith(("mailto:", "tel:")):
        return None
    scheme = urlparse(page_url).scheme or "https"

    if href.startswith("//"):
        return f"{scheme}:{href}"
    if href.startswith(("http://", "https://")):
        return href
    if href.startswith("www."):
        return f"{scheme}://{href}"
    if href.startswith("/"):
        return urljoin(page_url, href)
    return "/" + href


# ---------------------------------------------------------------------------
# SEOAuditor
# ---------------------------------------------------------------------------

class SEOAuditor:
    """Score a single page's on-page SEO."""

    def __init__(self, prober: BrokenLinkProber) -> None:
        self._prober = prober

    async def audit(
        self,
        url: str,
        markup: Optional[str],
        domain: str,
        simply_score: bool = False,
    ) -> Optional[Union[SEOAuditResult, int]]:
        if not markup:
            return None
        try:
            result = self._extract(url, markup, domain)
        except Exception as exc:
            logger.warning("SEO audit failed to parse %s: %s", url, exc)
            return None

        report = await self._prober.probe_all(result.inter_link_href)
        result.broken_links = report.count
        result.all_broken_links = report.links
        if report.count:
            result.score -= BROKEN_LINK_PENALTY

        logger.info("SEO score for %s: %d", url, result.score)
        return result.score if simply_score else result

    # ------------------------------------------------------------------
    # Extraction and static scoring
    # ------------------------------------------------------------------

    def _extract(self, url: str, markup: str, domain: str) -> SEOAuditResult:
        soup = BeautifulSoup(markup, "html.parser")
        res = SEOAuditResult(url=url)

        title_tag = soup.find("title")
        res.title = title_tag.get_text() if title_tag else ""
        res.title_length = len(res.title)

        desc_tag = soup.find("meta", attrs={"name": "description"})
        res.description = desc_tag.get("content") if desc_tag else None
        res.description_length = len(res.description or "")

        kw_tag = soup.find("meta", attrs={"name": "keywords"})
        res.keywords = kw_tag.get("content") if kw_tag else None
        res.keywords_length = len(res.keywords or "")

        h1_tags = soup.find_all("h1")
        res.h1 = h1_tags[0].get_text() if h1_tags else ""
        if res.h1:
            res.h1_tag_total_amount = len(h1_tags)
            res.h1_tag_content = res.h1
            res.h1_first_tag_length = len(res.h1)

        canonical = soup.find("link", rel="canonical")
        res.canonical = canonical.get("href") if canonical else None

        images = soup.find_all("img")
        res.number_of_images = len(images)
        res.number_of_images_missing_alt = sum(1 for img in images if not img.get("alt"))
        res.missing_img_alt = res.number_of_images_missing_alt > 0

        hrefs = [a["href"] for a in soup.find_all("a", href=True)]
        internal = [h for h in hrefs if is_internal_href(h, domain)]
        external = [h for h in hrefs if is_external_href(h, domain)]
        res.internal_links = len(internal)
        res.external_links = len(external)
        res.inter_link_href = [n for n in (normalize_href(h, url) for h in internal) if n]

        res.score = 100 - self._static_penalty(res)
        return res

    @staticmethod
    def _static_penalty(res: SEOAuditResult) -> int:
        penalty = 0

        for value in (res.title, res.description, res.keywords):
            if not value:
                penalty += MISSING_FIELD_PENALTY

        if res.title:
            res.title_length_over_60 = res.title_length > TITLE_MAX_LENGTH
            penalty += OVERLENGTH_PENALTY if res.title_length_over_60 else 0
        if res.description:
            res.description_length_over_155 = res.description_length > DESCRIPTION_MAX_LENGTH
            penalty += OVERLENGTH_PENALTY if res.description_length_over_155 else 0
        if res.keywords:
            res.keywords_length_over_255 = res.keywords_length > KEYWORDS_MAX_LENGTH
            penalty += OVERLENGTH_PENALTY if res.keywords_length_over_255 else 0

        if not res.h1:
            penalty += MISSING_H1_PENALTY
        elif len(res.h1) > H1_MAX_LENGTH:
            penalty += LONG_H1_PENALTY

        if not res.canonical:
            penalty += MISSING_CANONICAL_PENALTY

        # No external links means no ratio to judge.
        if res.external_links and res.internal_links / res.external_links < MIN_INTERNAL_EXTERNAL_RATIO:
            penalty += LINK_RATIO_PENALTY

        if res.number_of_images:
            penalty += math.ceil(ALT_PENALTY_SCALE * res.number_of_images_missing_alt / res.number_of_images)

        return penalty
