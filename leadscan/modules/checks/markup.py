"""Structural checks over a page's parsed markup.

Every check takes ``(markup, soup, record)`` and returns a ``CheckOutcome``.
None of them mutate the record; ``CompositeScorer`` applies the result.
"""

import logging
import re
from datetime import datetime
from typing import Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from leadscan.models.assessment import AssessmentRecord, CheckOutcome

logger = logging.getLogger(__name__)

FACEBOOK_PIXEL_PATTERN = "connect.facebook.net"

FOOTER_ABSENT = "Does not have a footer."
FOOTER_PRESENT = "Has a footer."
FOOTER_RECENT = "Has a footer with a date in the past five years."
FOOTER_CURRENT = "Has a footer with the current year."

_HTML_SLUG_RE = re.compile(r"\.html?$", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Title
# ---------------------------------------------------------------------------

def check_title(markup: str, soup: BeautifulSoup, record: AssessmentRecord) -> CheckOutcome:
    tag = soup.find("title")
    if tag is None:
        return CheckOutcome("title", passed=False, fields={"title_check": False}, delta=5)
    text = tag.get_text()
    if not text:
        return CheckOutcome(
            "title",
            passed=False,
            fields={"title": f"Has title but appears empty, it is: {text}", "title_check": False},
            delta=1,
        )
    return CheckOutcome("title", passed=True, fields={"title": text, "title_check": True})


# ---------------------------------------------------------------------------
# Image alt coverage
# ---------------------------------------------------------------------------

def check_img_alt(markup: str, soup: BeautifulSoup, record: AssessmentRecord) -> CheckOutcome:
    """Score alt-text coverage: all present -3, some missing +3, none +5."""
    imgs = soup.find_all("img")
    if not imgs:
        return CheckOutcome("img_alt")

    with_alt = [img for img in imgs if img.get("alt")]
    if len(with_alt) == len(imgs):
        return CheckOutcome(
            "img_alt",
            passed=True,
            fields={"img_alt": "All imgs have alt tags attributed to them.", "img_alt_check": True},
            delta=-3,
        )
    if with_alt:
        return CheckOutcome(
            "img_alt",
            passed=False,
            fields={"img_alt": "Some of the images do not have alt tags.", "img_alt_check": False},
            delta=3,
        )
    return CheckOutcome(
        "img_alt",
        passed=False,
        fields={"img_alt": "No images have any alt tags attributed to them.", "img_alt_check": False},
        delta=5,
    )


# ---------------------------------------------------------------------------
# Meta description / keywords
# ---------------------------------------------------------------------------

def check_meta(markup: str, soup: BeautifulSoup, record: AssessmentRecord) -> CheckOutcome:
    metas = soup.find_all("meta")
    if not metas:
        return CheckOutcome("meta")

    fields: dict = {}
    for meta in metas:
        name = meta.get("name")
        content = meta.get("content")
        if name == "description":
            fields["meta_description_check"] = bool(content)
            fields["meta_description"] = content or "Does not have meta description"
        elif name == "keywords":
            fields["meta_keywords_check"] = bool(content)
            fields["meta_keywords"] = content or "Does not have meta keywords"

    delta = 0
    if "meta_description_check" not in fields:
        fields["meta_description"] = "Does not have meta description"
        fields["meta_description_check"] = False
        delta += 5
    if "meta_keywords_check" not in fields:
        fields["meta_keywords"] = "Does not have meta keywords"
        fields["meta_keywords_check"] = False
        delta += 5

    passed = fields["meta_description_check"] and fields["meta_keywords_check"]
    return CheckOutcome("meta", passed=passed, fields=fields, delta=delta)


# ---------------------------------------------------------------------------
# Footer freshness
# ---------------------------------------------------------------------------

def check_footer(
    markup: str,
    soup: BeautifulSoup,
    record: AssessmentRecord,
    now: Optional[datetime] = None,
) -> CheckOutcome:
    footer = soup.find("footer")
    if footer is None:
        return CheckOutcome(
            "footer",
            passed=False,
            fields={"has_footer": FOOTER_ABSENT, "has_footer_check": True, "footer_outdated": False},
            delta=5,
        )

    current_year = (now or datetime.now()).year
    recent_years = [str(current_year - i) for i in range(5)]
    text = str(footer)

    message = FOOTER_PRESENT
    if any(year in text for year in recent_years):
        message = FOOTER_RECENT
    if str(current_year) in text:
        message = FOOTER_CURRENT

    return CheckOutcome(
        "footer",
        passed=True,
        fields={
            "has_footer": message,
            "has_footer_check": True,
            "footer_outdated": message == FOOTER_PRESENT,
        },
    )


# ---------------------------------------------------------------------------
# Facebook pixel
# ---------------------------------------------------------------------------

def check_facebook_pixel(markup: str, soup: BeautifulSoup, record: AssessmentRecord) -> CheckOutcome:
    if FACEBOOK_PIXEL_PATTERN in (markup or ""):
        return CheckOutcome(
            "facebook_pixel",
            passed=True,
            fields={"facebook_pixel": "Has facebook pixel", "facebook_pixel_check": True},
        )
    return CheckOutcome(
        "facebook_pixel",
        passed=False,
        fields={"facebook_pixel": "Does not have facebook pixel", "facebook_pixel_check": False},
    )


# ---------------------------------------------------------------------------
# HTML in slug
# ---------------------------------------------------------------------------

def _has_html_slug(url: str) -> bool:
    return bool(_HTML_SLUG_RE.search(urlparse(url).path))


def check_html_in_slug(markup: str, soup: BeautifulSoup, record: AssessmentRecord) -> CheckOutcome:
    """Flag sites whose own URLs end in ``.html``/``.htm``. Informational."""
    domain = (record.domain or "").lower()
    candidates = [record.site_url or ""]
    for a in soup.find_all("a", href=True):
        href = a["href"].strip()
        if href.startswith("/") and not href.startswith("//"):
            candidates.append(href)
        elif domain and domain in (urlparse(href).hostname or "").lower():
            candidates.append(href)

    found = any(_has_html_slug(c) for c in candidates if c)
    return CheckOutcome("html_in_slug", passed=not found, fields={"html_in_slug": found})


# ---------------------------------------------------------------------------
# Page count
# ---------------------------------------------------------------------------

def count_pages(soup: BeautifulSoup) -> int:
    """Anchors plus pagination/listing hints, as a rough page-count estimate."""
    hints = [
        soup.find_all("a"),
        soup.find_all("a", string=re.compile(r"next", re.IGNORECASE)),
        soup.find_all("a", string=re.compile(r"prev", re.IGNORECASE)),
        soup.find_all("a", href=re.compile(r"page\d+")),
        soup.find_all("a", string=re.compile(r"load more", re.IGNORECASE)),
        soup.find_all("div", class_="infinite-scroll"),
        soup.find_all("div", class_="search-results"),
        soup.find_all("ul", class_="sitemap"),
    ]
    return sum(len(found) for found in hints)


def check_page_count(markup: str, soup: BeautifulSoup, record: AssessmentRecord) -> CheckOutcome:
    total = count_pages(soup)
    logger.debug("Page count for %s is %d", record.domain, total)
    return CheckOutcome("page_count", fields={"page_count": total})
