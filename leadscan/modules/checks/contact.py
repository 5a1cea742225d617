"""Contact-information extraction from the main page and common contact pages."""

import logging
import re
from typing import Iterable, Optional

from bs4 import BeautifulSoup

from leadscan.config import DEFAULT_CONTACT_PATHS
from leadscan.integrations.http_client import PageFetcher
from leadscan.models.assessment import AssessmentRecord, CheckOutcome
from leadscan.utils.concurrency import settle_all, successful
from leadscan.utils.helpers import collapse_whitespace, site_root

logger = logging.getLogger(__name__)

# email | phone | street address
CONTACT_INFO_RE = re.compile(
    r"(\b[A-Za-z0-9._%+-]+@(?!.*\.\.)[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)*\.[A-Za-z]{2,}\b)"
    r"|(\b(?:(?:\+\d{1,2}\s)?(?:\d{3}|\(\d{3}\))[-.\s]?)?\d{3}[-.\s]?\d{4}\b)"
    r"|(\b\d{1,5}\s+[A-Za-z0-9'#.,]+\s+(?:(?:Ave|St|Rd|Blvd|Dr)\b"
    r"|[A-Za-z]+\s*,?\s+[A-Z]{2}\s+\d{5}(?:-\d{4})?)\b)"
)
EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_RE = re.compile(r"\b(?:(?:\+\d{1,2}\s)?(?:\d{3}|\(\d{3}\))[-.\s]?)?\d{3}[-.\s]?\d{4}\b")

MIN_PHONE_LENGTH = 10


def _body_text(markup: str) -> str:
    soup = BeautifulSoup(markup, "html.parser")
    body = soup.body or soup
    return body.get_text(" ")


def extract_contact_info(texts: Iterable[str], domain: str) -> dict[str, Optional[str]]:
    """Classify every contact-shaped match in *texts*; later matches win."""
    found: dict[str, Optional[str]] = {
        "domain_email_address": None,
        "phone_number": None,
        "address": None,
    }
    domain = (domain or "").lower()
    for text in texts:
        for match in CONTACT_INFO_RE.finditer(text):
            value = match.group(0)
            if EMAIL_RE.search(value):
                if value.split("@", 1)[1].lower() == domain:
                    found["domain_email_address"] = value
            elif PHONE_RE.search(value):
                if len(value) >= MIN_PHONE_LENGTH:
                    found["phone_number"] = value
            else:
                found["address"] = collapse_whitespace(value)
    return found


async def check_contact_info(
    markup: str,
    soup: BeautifulSoup,
    record: AssessmentRecord,
    fetcher: PageFetcher,
    paths: Optional[Iterable[str]] = None,
    timeout: float = 5.0,
) -> CheckOutcome:
    """Fetch the usual contact/about pages concurrently and scan them with the main page."""
    if not markup or not record.domain:
        return CheckOutcome("contact_info")

    root = site_root(record.site_url or record.domain)
    paths = list(DEFAULT_CONTACT_PATHS if paths is None else paths)
    settled = await settle_all(fetcher.fetch(f"{root}{path}", timeout=timeout) for path in paths)
    for path, result in zip(paths, settled):
        if not result.ok:
            logger.warning("Fetching %s%s failed: %s", root, path, result.error)

    texts = [_body_text(page) for page in successful(settled)]
    body = soup.body or soup
    texts.append(body.get_text(" "))

    fields = extract_contact_info(texts, record.domain)
    logger.debug("Contact info for %s: %s", record.domain, fields)
    return CheckOutcome("contact_info", passed=any(fields.values()), fields=fields)
