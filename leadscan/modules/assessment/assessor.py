"""Site assessor: the public entry point that runs the whole pipeline.

Data flow for one site:

    fetch -> parse -> markup checks -> HTTPS + contact checks
          -> SEO audit -> internal-link audit
    (accessibility audit and mobile probe run alongside the above)
          -> narrative summary
"""

import logging
import random
from functools import partial
from typing import Callable, Optional, Union

from bs4 import BeautifulSoup

from leadscan.config import AssessmentSettings
from leadscan.integrations.accessibility_engine import AccessibilityEngine, PlaywrightAccessibilityEngine
from leadscan.integrations.browser import HeadlessBrowser, PlaywrightBrowser
from leadscan.integrations.http_client import (
    AiohttpLinkProbe,
    AiohttpPageFetcher,
    LinkProbe,
    PageFetcher,
)
from leadscan.models.accessibility import AccessibilityResult
from leadscan.models.assessment import AssessmentRecord, CheckOutcome
from leadscan.models.seo import SEOAuditResult
from leadscan.modules.accessibility.auditor import AccessibilityAuditor
from leadscan.modules.checks import (
    check_analytics_tools,
    check_cms,
    check_contact_info,
    check_facebook_pixel,
    check_footer,
    check_framework,
    check_html_in_slug,
    check_img_alt,
    check_insecure,
    check_language,
    check_meta,
    check_page_count,
    check_relevance,
    check_title,
    is_site_blacklisted,
    is_site_relevant_to_keyword,
    is_unwanted_site,
)
from leadscan.modules.mobile.prober import MobileFriendlinessProber
from leadscan.modules.narrative.generator import NarrativeGenerator
from leadscan.modules.scoring.scorer import CompositeScorer
from leadscan.modules.seo_audit.auditor import SEOAuditor
from leadscan.modules.seo_audit.internal_links import InternalLinkAuditor
from leadscan.modules.seo_audit.link_prober import BrokenLinkProber
from leadscan.utils.concurrency import settle_all
from leadscan.utils.helpers import domain_from_url, extract_domain, normalize_url, trim_url

logger = logging.getLogger(__name__)

FETCH_FAILED = "fetch failed"
FILTERED_SITE = "filtered site"

MarkupCheck = Callable[[str, BeautifulSoup, AssessmentRecord], CheckOutcome]


class SiteAssessor:
    """Wire the checks, auditors and narrative generator around shared capabilities.

    Every capability can be injected; defaults are the aiohttp fetcher and
    probe, and a Playwright browser shared by the accessibility engine and
    the mobile prober (each call opens its own session).
    """

    def __init__(
        self,
        settings: Optional[AssessmentSettings] = None,
        fetcher: Optional[PageFetcher] = None,
        probe: Optional[LinkProbe] = None,
        browser: Optional[HeadlessBrowser] = None,
        accessibility_engine: Optional[AccessibilityEngine] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings or AssessmentSettings()
        s = self.settings

        self.fetcher = fetcher or AiohttpPageFetcher(user_agent=s.user_agent)
        probe = probe or AiohttpLinkProbe(user_agent=s.user_agent)
        browser = browser or PlaywrightBrowser(user_agent=s.user_agent)
        engine = accessibility_engine or PlaywrightAccessibilityEngine(browser)

        self.scorer = CompositeScorer()
        self.seo_auditor = SEOAuditor(BrokenLinkProber(probe, timeout=s.fetch_timeout, concurrency=s.concurrency))
        self.internal_link_auditor = InternalLinkAuditor(
            self.seo_auditor,
            self.fetcher,
            limit=s.seo_internal_links_limit,
            media_extensions=s.media_file_extensions,
            timeout=s.fetch_timeout,
            concurrency=s.concurrency,
        )
        self.accessibility_auditor = AccessibilityAuditor(engine, timeout=s.accessibility_timeout)
        self.mobile_prober = MobileFriendlinessProber(browser, viewport=s.mobile_viewport)
        self.narrative = NarrativeGenerator(rng=rng)

    # ------------------------------------------------------------------
    # Full assessment
    # ------------------------------------------------------------------

    async def run_assessment(
        self,
        url: str,
        markup: Optional[str] = None,
        domain: Optional[str] = None,
        *,
        keyword: Optional[str] = None,
        quick: bool = False,
        summarize: bool = True,
        skip_filtered: bool = True,
    ) -> AssessmentRecord:
        """Assess one site and return its filled-in record.

        ``quick`` skips the slow stages: contact-page fetches, the
        internal-link audit, accessibility and mobile. Network and markup
        problems never raise; a failed fetch sets ``record.error``. Directory
        and social sites, and blacklisted ones, are skipped before any fetch
        unless ``skip_filtered`` is False.
        """
        url = normalize_url(url)
        domain = domain or extract_domain(url)
        record = AssessmentRecord(domain=domain, site_url=url, keyword=keyword)
        if skip_filtered and self.is_filtered(url):
            logger.info("Skipping filtered site %s", url)
            record.error = FILTERED_SITE
            return record
        logger.info("Assessing %s%s", url, " (quick)" if quick else "")

        if markup is None:
            markup = await self.fetcher.fetch(url, timeout=self.settings.fetch_timeout)
        if not markup:
            logger.warning("Could not fetch %s", url)
            record.error = FETCH_FAILED
            return record

        stages = [self._assess_markup(record, markup, quick)]
        if not quick:
            stages.append(self.audit_accessibility(url))
            stages.append(self.check_mobile_friendliness(url))
        settled = await settle_all(stages)

        if not settled[0].ok:
            logger.error("Markup assessment failed for %s: %s", url, settled[0].error)
        if not quick:
            access, mobile = settled[1], settled[2]
            record.accessibility = access.value if access.ok else AccessibilityResult.unavailable(url)
            record.is_mobile_friendly = bool(mobile.value) if mobile.ok else False

        if summarize:
            record.summary = self.generate_summary(record)
        logger.info("Finished %s: score %d", url, record.score)
        return record

    async def _assess_markup(self, record: AssessmentRecord, markup: str, quick: bool) -> AssessmentRecord:
        soup = BeautifulSoup(markup, "html.parser")

        outcomes: list[CheckOutcome] = []
        for name, check in self._markup_checks():
            try:
                outcomes.append(check(markup, soup, record))
            except Exception as exc:
                logger.warning("Check %s failed for %s: %s", name, record.domain, exc)

        network_checks = [check_insecure(record, self.fetcher, timeout=self.settings.fetch_timeout)]
        if not quick:
            network_checks.append(check_contact_info(
                markup, soup, record, self.fetcher,
                paths=self.settings.contact_paths,
                timeout=self.settings.fetch_timeout,
            ))
        for result in await settle_all(network_checks):
            if result.ok:
                outcomes.append(result.value)
            else:
                logger.warning("Network check failed for %s: %s", record.domain, result.error)

        self.scorer.apply(outcomes, record)

        seo = await self.audit_seo(record.site_url, markup, record.domain)
        if isinstance(seo, SEOAuditResult):
            record.seo = seo
            if not quick:
                record.seo_data = await self.audit_internal_links(record)
        return record

    def _markup_checks(self) -> list[tuple[str, MarkupCheck]]:
        s = self.settings
        return [
            ("title", check_title),
            ("img_alt", check_img_alt),
            ("meta", check_meta),
            ("footer", check_footer),
            ("facebook_pixel", check_facebook_pixel),
            ("cms", partial(check_cms, signatures=s.cms_signatures)),
            ("framework", partial(check_framework, frameworks=s.framework_signatures)),
            ("analytics_tools", partial(check_analytics_tools, tools=s.analytics_tools)),
            ("html_in_slug", check_html_in_slug),
            ("page_count", check_page_count),
            ("relevance", check_relevance),
            ("language", check_language),
        ]

    # ------------------------------------------------------------------
    # Individual entry points
    # ------------------------------------------------------------------

    async def audit_seo(
        self,
        url: str,
        markup: Optional[str],
        domain: Optional[str] = None,
        simply_score: bool = False,
    ) -> Optional[Union[SEOAuditResult, int]]:
        url = normalize_url(url)
        return await self.seo_auditor.audit(url, markup, domain or extract_domain(url), simply_score=simply_score)

    async def audit_internal_links(
        self,
        record_or_hrefs: Union[AssessmentRecord, list[str]],
        domain: Optional[str] = None,
    ) -> list[SEOAuditResult]:
        if isinstance(record_or_hrefs, AssessmentRecord):
            hrefs = record_or_hrefs.internal_links_raw
            domain = domain or record_or_hrefs.domain
        else:
            hrefs = list(record_or_hrefs)
        return await self.internal_link_auditor.audit(hrefs, domain or "")

    async def audit_accessibility(self, url: str) -> AccessibilityResult:
        return await self.accessibility_auditor.audit(normalize_url(url) if url else url)

    async def check_mobile_friendliness(self, url: str) -> bool:
        return await self.mobile_prober.check(normalize_url(url))

    def is_filtered(self, url: str) -> bool:
        """True for directory/social sites and for configured blacklist entries."""
        words = self.settings.sites_to_filter
        site_name = domain_from_url(trim_url(url) or url)
        return is_site_blacklisted(url=url, words=words) or is_unwanted_site(
            site_name, self.settings.blacklist, words=words,
        )

    def check_relevance(self, keyword: str, markup: str) -> bool:
        return is_site_relevant_to_keyword(keyword, markup)

    def generate_summary(self, record: AssessmentRecord) -> str:
        try:
            return self.narrative.generate_summary(record)
        except Exception as exc:
            logger.error("Summary generation failed for %s: %s", record.domain, exc)
            return ""
