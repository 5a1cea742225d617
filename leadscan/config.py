"""Static lookup tables and tunables for the assessment pipeline.

Values come from ``config/settings.yaml``; anything missing falls back to the
built-in defaults below.
"""

import logging
from dataclasses import dataclass, field, fields
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/settings.yaml"

# ---------------------------------------------------------------------------
# Built-in signature tables
# ---------------------------------------------------------------------------

DEFAULT_ANALYTICS_TOOLS: list[dict[str, str]] = [
    {"name": "Google Analytics", "pattern": "google-analytics.com"},
    {"name": "Google Tag Manager", "pattern": "googletagmanager.com"},
    {"name": "Facebook Pixel", "pattern": "connect.facebook.net"},
    {"name": "Hotjar", "pattern": "static.hotjar.com"},
    {"name": "HubSpot", "pattern": "js.hs-scripts.com"},
    {"name": "Matomo", "pattern": "matomo.js"},
    {"name": "Mixpanel", "pattern": "cdn.mxpnl.com"},
    {"name": "Segment", "pattern": "cdn.segment.com"},
]

DEFAULT_CMS_SIGNATURES: dict[str, list[str]] = {
    "wordpress": ["wp-content", "wp-includes"],
    "drupal": ["sites/all/", "Drupal.settings"],
    "joomla": ["/media/jui/", "com_content"],
    "wix": ["static.wixstatic.com", "wix-image"],
    "squarespace": ["static1.squarespace.com", "squarespace-cdn"],
    "shopify": ["cdn.shopify.com", "Shopify.theme"],
    "weebly": ["editmysite.com", "weebly-footer"],
    "godaddy": ["img1.wsimg.com", "godaddy-sites"],
}

DEFAULT_FRAMEWORK_SIGNATURES: list[dict[str, Any]] = [
    {"name": "Next.js", "signatures": ["__NEXT_DATA__", "/_next/static/"]},
    {"name": "Nuxt", "signatures": ["__NUXT__", "/_nuxt/"]},
    {"name": "Gatsby", "signatures": ["___gatsby", "gatsby-"]},
    {"name": "Angular", "signatures": ["ng-version", "ng-app"]},
    {"name": "React", "signatures": ["data-reactroot", "react-dom"]},
    {"name": "Vue", "signatures": ["data-v-", "vue.min.js"]},
    {"name": "Svelte", "signatures": ["svelte-"]},
    {"name": "Bootstrap", "signatures": ["bootstrap.min.css", "bootstrap.min.js"]},
    {"name": "jQuery", "signatures": ["jquery.min.js", "jquery.js"]},
]

DEFAULT_SITES_TO_FILTER: list[str] = [
    "yelp",
    "facebook",
    "yellowpages",
    "angi",
    "thumbtack",
    "houzz",
    "bbb.org",
    "linkedin",
    "instagram",
    "wikipedia",
]

DEFAULT_MEDIA_FILE_EXTENSIONS: list[str] = [
    ".jpg", ".jpeg", ".png", ".gif", ".svg", ".webp", ".ico",
    ".pdf", ".zip", ".mp3", ".mp4", ".mov", ".avi", ".doc", ".docx",
    ".xls", ".xlsx", ".ppt", ".pptx",
]

DEFAULT_CONTACT_PATHS: list[str] = [
    "/contact",
    "/about",
    "/about-us",
    "/aboutus",
    "/contact-us",
    "/contactus",
]


@dataclass
class AssessmentSettings:
    """Tunables and lookup tables consumed by the checks and auditors."""
    analytics_tools: list[dict[str, str]] = field(
        default_factory=lambda: [dict(t) for t in DEFAULT_ANALYTICS_TOOLS]
    )
    cms_signatures: dict[str, list[str]] = field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_CMS_SIGNATURES.items()}
    )
    framework_signatures: list[dict[str, Any]] = field(
        default_factory=lambda: [dict(f) for f in DEFAULT_FRAMEWORK_SIGNATURES]
    )
    sites_to_filter: list[str] = field(default_factory=lambda: list(DEFAULT_SITES_TO_FILTER))
    blacklist: list[Any] = field(default_factory=list)
    seo_internal_links_limit: int = 50
    concurrency: int = 10
    media_file_extensions: list[str] = field(
        default_factory=lambda: list(DEFAULT_MEDIA_FILE_EXTENSIONS)
    )
    contact_paths: list[str] = field(default_factory=lambda: list(DEFAULT_CONTACT_PATHS))
    fetch_timeout: float = 5.0
    accessibility_timeout: float = 10.0
    user_agent: str = "LeadScanBot/1.0"
    mobile_viewport: dict[str, Any] = field(
        default_factory=lambda: {"width": 375, "height": 667, "is_mobile": True}
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AssessmentSettings":
        """Build settings from a parsed YAML mapping, ignoring unknown keys."""
        if not isinstance(data, dict):
            raise ValueError(f"Settings must be a mapping, got {type(data).__name__}")
        data = dict(data)
        timeouts = data.pop("timeouts", None) or {}
        if not isinstance(timeouts, dict):
            raise ValueError("'timeouts' must be a mapping")
        if "fetch_seconds" in timeouts:
            data["fetch_timeout"] = float(timeouts["fetch_seconds"])
        if "accessibility_seconds" in timeouts:
            data["accessibility_timeout"] = float(timeouts["accessibility_seconds"])

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown settings keys: %s", ", ".join(unknown))
        kwargs = {k: v for k, v in data.items() if k in known and v is not None}

        for name in ("seo_internal_links_limit", "concurrency"):
            if name in kwargs:
                kwargs[name] = int(kwargs[name])
        if "cms_signatures" in kwargs and not isinstance(kwargs["cms_signatures"], dict):
            raise ValueError("'cms_signatures' must map CMS name to a list of signatures")
        return cls(**kwargs)
