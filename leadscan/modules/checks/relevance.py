"""Keyword relevance: a literal, case-insensitive substring test."""

import logging
from typing import Optional

from bs4 import BeautifulSoup

from leadscan.models.assessment import AssessmentRecord, CheckOutcome

logger = logging.getLogger(__name__)


def is_site_relevant_to_keyword(keyword: str, markup: Optional[str] = None, soup: Optional[BeautifulSoup] = None) -> bool:
    """True when *keyword* occurs in the title, body/alt/script text, or any meta content."""
    if not keyword or (markup is None and soup is None):
        return False
    soup = soup if soup is not None else BeautifulSoup(markup, "html.parser")
    needle = keyword.lower()

    title = soup.title.get_text() if soup.title else ""
    if needle in title.lower():
        return True

    parts: list[str] = []
    if soup.body:
        parts.append(soup.body.get_text(" "))
    parts.extend(img.get("alt") or "" for img in soup.find_all("img"))
    parts.extend(script.get_text() for script in soup.find_all("script"))
    if needle in " ".join(parts).lower():
        return True

    return any(needle in (meta.get("content") or "").lower() for meta in soup.find_all("meta"))


def check_relevance(markup: str, soup: BeautifulSoup, record: AssessmentRecord) -> CheckOutcome:
    if not record.keyword:
        return CheckOutcome("relevance")
    relevant = is_site_relevant_to_keyword(record.keyword, markup, soup)
    logger.info("%s relevant to %r: %s", record.domain, record.keyword, relevant)
    return CheckOutcome("relevance", passed=relevant, fields={"relevant": relevant})
