"""Assessment checks: pure functions from markup to ``CheckOutcome``."""

from leadscan.modules.checks.contact import check_contact_info, extract_contact_info
from leadscan.modules.checks.fingerprint import (
    check_analytics_tools,
    check_cms,
    check_framework,
    detect_analytics_tools,
    determine_cms,
    determine_framework,
)
from leadscan.modules.checks.language import check_language, detect_language
from leadscan.modules.checks.markup import (
    check_facebook_pixel,
    check_footer,
    check_html_in_slug,
    check_img_alt,
    check_meta,
    check_page_count,
    check_title,
    count_pages,
)
from leadscan.modules.checks.relevance import check_relevance, is_site_relevant_to_keyword
from leadscan.modules.checks.security import check_insecure
from leadscan.modules.checks.site_filter import is_site_blacklisted, is_unwanted_site

__all__ = [
    "check_analytics_tools",
    "check_cms",
    "check_contact_info",
    "check_facebook_pixel",
    "check_footer",
    "check_framework",
    "check_html_in_slug",
    "check_img_alt",
    "check_insecure",
    "check_language",
    "check_meta",
    "check_page_count",
    "check_relevance",
    "check_title",
    "count_pages",
    "detect_analytics_tools",
    "detect_language",
    "determine_cms",
    "determine_framework",
    "extract_contact_info",
    "is_site_blacklisted",
    "is_site_relevant_to_keyword",
    "is_unwanted_site",
]
