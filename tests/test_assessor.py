"""End-to-end tests for SiteAssessor with fake capabilities."""

import random

import pytest

from conftest import (
    DESKTOP_ONLY_LAYOUT,
    FakeAccessibilityEngine,
    FakeBrowser,
    FakeFetcher,
    FakeProbe,
    make_audit,
)
from leadscan.config import AssessmentSettings
from leadscan.models.assessment import AssessmentRecord
from leadscan.models.seo import SEOAuditResult
from leadscan.modules.assessment import SiteAssessor


def _assessor(pages=None, probe=None, browser=None, engine=None, settings=None, seed=0, fail=None):
    fetcher = FakeFetcher(pages or {}, fail=fail)
    return SiteAssessor(
        settings=settings or AssessmentSettings(),
        fetcher=fetcher,
        probe=probe or FakeProbe(),
        browser=browser or FakeBrowser(layout=DESKTOP_ONLY_LAYOUT),
        accessibility_engine=engine or FakeAccessibilityEngine(result=make_audit(errors=4, warnings=6)),
        rng=random.Random(seed),
    ), fetcher


class TestRunAssessment:
    """The full pipeline over canned pages."""

    @pytest.mark.asyncio
    async def test_good_site(self, good_html):
        pages = {
            "https://acme.com": good_html,
            "https://acme.com/about": "<html><head><title>About</title></head><body>About us</body></html>",
            "https://acme.com/contact": "<body>Write to owner@acme.com</body>",
        }
        assessor, _ = _assessor(pages)
        record = await assessor.run_assessment("acme.com", keyword="roofing")

        assert record.error is None
        assert record.domain == "acme.com"
        assert record.title.startswith("Acme Roofing")
        assert record.img_alt_check is True
        assert record.has_footer == "Has a footer with the current year."
        assert record.insecure_site is False
        assert record.analytics_tools == ["Google Tag Manager"]
        # the main page is scanned last, so its address wins
        assert record.domain_email_address == "hello@acme.com"
        assert record.relevant is True
        # img alt -3, everything else clean
        assert record.score == -3

        assert isinstance(record.seo, SEOAuditResult)
        assert record.seo.internal_links == 3
        assert [s.url for s in record.seo_data] == ["https://acme.com/about", "https://acme.com/contact"]

        assert record.accessibility.score == 9
        assert record.is_mobile_friendly is False
        assert record.summary.endswith("\n")

    @pytest.mark.asyncio
    async def test_bare_site_score(self, bare_html):
        assessor, _ = _assessor()
        record = await assessor.run_assessment("http://bare.com", markup=bare_html, summarize=False)
        # title +5, img alt none +5, footer +5, https +10; no <meta> so meta is a no-op
        assert record.score == 25
        assert record.insecure_site is True
        assert record.summary == ""
        assert [o.check for o in record.outcomes][:3] == ["title", "img_alt", "meta"]

    @pytest.mark.asyncio
    async def test_outcome_deltas_sum_to_score(self, bare_html):
        assessor, _ = _assessor({"https://bare.com": bare_html})
        record = await assessor.run_assessment("https://bare.com")
        assert sum(o.delta for o in record.outcomes) == record.score

    @pytest.mark.asyncio
    async def test_fetch_failure_sets_error(self):
        assessor, _ = _assessor({})
        record = await assessor.run_assessment("https://down.com")
        assert record.error == "fetch failed"
        assert record.score == 0
        assert record.seo is None

    @pytest.mark.asyncio
    async def test_supplied_markup_skips_main_fetch(self, bare_html):
        assessor, fetcher = _assessor({})
        record = await assessor.run_assessment("https://bare.com", markup=bare_html, quick=True)
        assert record.error is None
        # only the HTTPS probe touches the network
        assert fetcher.calls == ["https://bare.com", "https://www.bare.com"]

    @pytest.mark.asyncio
    async def test_quick_mode_skips_slow_stages(self, good_html):
        engine = FakeAccessibilityEngine(result=make_audit(1, 0))
        browser = FakeBrowser(layout=DESKTOP_ONLY_LAYOUT)
        assessor, fetcher = _assessor({"https://acme.com": good_html}, engine=engine, browser=browser)
        record = await assessor.run_assessment("https://acme.com", quick=True)

        assert record.accessibility is None
        assert record.is_mobile_friendly is None
        assert record.seo_data == []
        assert engine.configs == []
        assert browser.sessions == []
        assert not any(url.endswith("/contact") for url in fetcher.calls)

    @pytest.mark.asyncio
    async def test_browser_failures_do_not_abort(self, good_html):
        engine = FakeAccessibilityEngine(error=RuntimeError("chrome"))
        browser = FakeBrowser(error=RuntimeError("chrome"))
        assessor, _ = _assessor({"https://acme.com": good_html}, engine=engine, browser=browser)
        record = await assessor.run_assessment("https://acme.com")
        assert record.accessibility.score is None
        assert record.is_mobile_friendly is False
        assert record.seo is not None

    @pytest.mark.asyncio
    async def test_internal_link_ceiling(self, good_html):
        settings = AssessmentSettings(seo_internal_links_limit=2)
        assessor, _ = _assessor({"https://acme.com": good_html}, settings=settings)
        record = await assessor.run_assessment("https://acme.com")
        assert record.seo.internal_links == 3
        assert record.seo_data == []

    @pytest.mark.asyncio
    async def test_seeded_summary_is_reproducible(self, bare_html):
        first, _ = _assessor({"https://bare.com": bare_html}, seed=9)
        second, _ = _assessor({"https://bare.com": bare_html}, seed=9)
        a = await first.run_assessment("https://bare.com")
        b = await second.run_assessment("https://bare.com")
        assert a.summary == b.summary


class TestEntryPoints:
    @pytest.mark.asyncio
    async def test_audit_seo_simply_score(self):
        assessor, _ = _assessor()
        score = await assessor.audit_seo("https://acme.com", "<html></html>", "acme.com", simply_score=True)
        assert score == 20

    @pytest.mark.asyncio
    async def test_audit_internal_links_from_record(self):
        page = "<title>A</title>"
        assessor, _ = _assessor({"https://acme.com/a": page})
        record = AssessmentRecord(domain="acme.com", site_url="https://acme.com")
        record.seo = SEOAuditResult(url="https://acme.com", inter_link_href=["https://acme.com/a"])
        results = await assessor.audit_internal_links(record)
        assert [r.url for r in results] == ["https://acme.com/a"]

    @pytest.mark.asyncio
    async def test_audit_accessibility(self):
        assessor, _ = _assessor()
        result = await assessor.audit_accessibility("acme.com")
        assert result.score == 9

    @pytest.mark.asyncio
    async def test_check_mobile_friendliness(self):
        assessor, _ = _assessor()
        assert await assessor.check_mobile_friendliness("acme.com") is False

    def test_check_relevance(self):
        assessor, _ = _assessor()
        assert assessor.check_relevance("Roof", "<body>roof repair</body>")
        assert not assessor.check_relevance("plumbing", "<body>roof repair</body>")

    def test_generate_summary(self):
        assessor, _ = _assessor()
        summary = assessor.generate_summary(AssessmentRecord(domain="a.com", site_url="https://a.com"))
        assert summary.endswith("\n")


class TestSiteFiltering:
    """Directory, social and blacklisted sites are skipped before any fetch."""

    @pytest.mark.asyncio
    async def test_directory_site_is_skipped(self, good_html):
        assessor, fetcher = _assessor({"https://www.yelp.com/biz/acme": good_html})
        record = await assessor.run_assessment("https://www.yelp.com/biz/acme")
        assert record.error == "filtered site"
        assert fetcher.calls == []
        assert record.outcomes == []

    @pytest.mark.asyncio
    async def test_configured_blacklist(self, good_html):
        settings = AssessmentSettings(blacklist=[{"name": "rivalroofs"}])
        assessor, fetcher = _assessor({"https://rivalroofs.com": good_html}, settings=settings)
        record = await assessor.run_assessment("rivalroofs.com/services")
        assert record.error == "filtered site"
        assert fetcher.calls == []

    def test_custom_filter_words_replace_defaults(self, good_html):
        settings = AssessmentSettings(sites_to_filter=["acme"])
        assessor, _ = _assessor({"https://www.yelp.com": good_html}, settings=settings)
        assert assessor.is_filtered("https://acme.com")
        assert not assessor.is_filtered("https://www.yelp.com")

    @pytest.mark.asyncio
    async def test_skip_filtered_false_assesses_anyway(self, good_html):
        assessor, _ = _assessor({"https://www.yelp.com": good_html})
        record = await assessor.run_assessment("https://www.yelp.com", quick=True, skip_filtered=False)
        assert record.error is None
        assert record.title.startswith("Acme Roofing")


class TestLanguageInPipeline:
    @pytest.mark.asyncio
    async def test_is_english_set_without_score_change(self):
        html = (
            "<html><head><title>Acme</title></head><body><p>We are a family owned roofing company "
            "serving the greater Denver area. Our crew repairs storm damage and replaces old "
            "shingles for homes and small businesses.</p><footer>&copy; 2001</footer></body></html>"
        )
        assessor, _ = _assessor({"https://acme.com": html})
        record = await assessor.run_assessment("https://acme.com", quick=True)
        assert record.is_english is True
        language = [o for o in record.outcomes if o.check == "language"]
        assert len(language) == 1
        assert language[0].delta == 0
