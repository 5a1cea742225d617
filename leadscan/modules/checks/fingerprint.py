"""Technology fingerprints: CMS, front-end framework and analytics tools.

All three are informational and never move the score.
"""

import logging
from typing import Any, Iterable, Mapping, Optional

from bs4 import BeautifulSoup

from leadscan.config import (
    DEFAULT_ANALYTICS_TOOLS,
    DEFAULT_CMS_SIGNATURES,
    DEFAULT_FRAMEWORK_SIGNATURES,
)
from leadscan.models.assessment import AssessmentRecord, CheckOutcome

logger = logging.getLogger(__name__)


def determine_cms(markup: str, signatures: Optional[Mapping[str, list[str]]] = None) -> str:
    """Name of the first CMS whose signature pair occurs in *markup*, else ``""``."""
    if not markup or not isinstance(markup, str):
        return ""
    signatures = DEFAULT_CMS_SIGNATURES if signatures is None else signatures
    for cms, pair in signatures.items():
        if any(sig and sig in markup for sig in pair[:2]):
            logger.info("%s is used on this website", cms)
            return cms
    return ""


def determine_framework(markup: str, frameworks: Optional[Iterable[Mapping[str, Any]]] = None) -> str:
    if not markup:
        return ""
    frameworks = DEFAULT_FRAMEWORK_SIGNATURES if frameworks is None else frameworks
    for framework in frameworks:
        for signature in framework.get("signatures", []):
            if signature and signature in markup:
                logger.info("%s is used", framework["name"])
                return framework["name"]
    return ""


def detect_analytics_tools(
    soup: BeautifulSoup,
    tools: Optional[Iterable[Mapping[str, str]]] = None,
) -> list[str]:
    """Every configured tool whose pattern appears in a script ``src`` or body.

    Order follows the tool table; duplicates are dropped.
    """
    tools = DEFAULT_ANALYTICS_TOOLS if tools is None else tools
    scripts = soup.find_all("script")
    found: list[str] = []
    for tool in tools:
        pattern = tool.get("pattern", "")
        if not pattern or tool["name"] in found:
            continue
        for script in scripts:
            src = script.get("src") or ""
            if pattern in src or pattern in script.get_text():
                found.append(tool["name"])
                break
    return found


# ---------------------------------------------------------------------------
# Check adapters
# ---------------------------------------------------------------------------

def check_cms(
    markup: str,
    soup: BeautifulSoup,
    record: AssessmentRecord,
    signatures: Optional[Mapping[str, list[str]]] = None,
) -> CheckOutcome:
    return CheckOutcome("cms", fields={"cms": determine_cms(markup, signatures)})


def check_framework(
    markup: str,
    soup: BeautifulSoup,
    record: AssessmentRecord,
    frameworks: Optional[Iterable[Mapping[str, Any]]] = None,
) -> CheckOutcome:
    return CheckOutcome("framework", fields={"framework": determine_framework(markup, frameworks)})


def check_analytics_tools(
    markup: str,
    soup: BeautifulSoup,
    record: AssessmentRecord,
    tools: Optional[Iterable[Mapping[str, str]]] = None,
) -> CheckOutcome:
    return CheckOutcome("analytics_tools", fields={"analytics_tools": detect_analytics_tools(soup, tools)})
