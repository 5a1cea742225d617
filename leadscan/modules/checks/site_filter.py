"""Lead filtering: directory/social sites and user blacklists."""

import logging
import re
from typing import Any, Iterable, Optional

from leadscan.config import DEFAULT_SITES_TO_FILTER

logger = logging.getLogger(__name__)


def _mentions(word: str, text: Optional[str]) -> bool:
    return bool(text) and re.search(re.escape(word), text, re.IGNORECASE) is not None


def is_site_blacklisted(
    url: Optional[str] = None,
    site_name: Optional[str] = None,
    words: Optional[Iterable[str]] = None,
) -> bool:
    """True when the URL or site name mentions any filter word."""
    words = DEFAULT_SITES_TO_FILTER if words is None else words
    for word in words:
        if _mentions(word, url) or _mentions(word, site_name):
            logger.info("Filtered out by sites_to_filter: %s", url or site_name)
            return True
    return False


def is_unwanted_site(
    site_name: str,
    blacklist: Iterable[Any] = (),
    words: Optional[Iterable[str]] = None,
) -> bool:
    """Check a site against user blacklist entries, then the filter words.

    Blacklist entries may be plain names or mappings with a ``name`` key;
    they match case-sensitively.
    """
    for entry in blacklist:
        name = entry.get("name") if isinstance(entry, dict) else entry
        if name and re.search(re.escape(name), site_name or ""):
            return True
    return is_site_blacklisted(site_name=site_name, words=words)
