"""Page language detection."""

import logging
from typing import Optional

from bs4 import BeautifulSoup, Comment
from langdetect import DetectorFactory, LangDetectException, detect

from leadscan.models.assessment import AssessmentRecord, CheckOutcome

logger = logging.getLogger(__name__)

# langdetect is probabilistic; a fixed seed keeps repeated runs identical.
DetectorFactory.seed = 0

SAMPLE_CHARS = 2000
_HIDDEN_TAGS = {"script", "style", "noscript", "template"}


def detect_language(text: str) -> Optional[str]:
    """ISO 639-1 code of *text*, or ``None`` when there is nothing to detect."""
    sample = (text or "").strip()[:SAMPLE_CHARS]
    if not sample:
        return None
    try:
        return detect(sample)
    except LangDetectException as exc:
        logger.debug("Language detection failed: %s", exc)
        return None


def check_language(markup: str, soup: BeautifulSoup, record: AssessmentRecord) -> CheckOutcome:
    """Flag whether the visible page text is English. Informational only."""
    body = soup.body or soup
    visible = (
        s.strip() for s in body.find_all(string=True)
        if not isinstance(s, Comment) and s.parent.name not in _HIDDEN_TAGS
    )
    language = detect_language(" ".join(s for s in visible if s))
    if language is None:
        return CheckOutcome("language")
    logger.info("Content on %s is in %s", record.domain, language)
    is_english = language == "en"
    return CheckOutcome("language", passed=is_english, fields={"is_english": is_english})
