"""Assessment record and check outcome models."""

from dataclasses import asdict, dataclass, field
from typing import Any, Optional

from leadscan.models.accessibility import AccessibilityResult
from leadscan.models.seo import SEOAuditResult


@dataclass
class CheckOutcome:
    """Pure result of one check: descriptive field updates plus a score delta.

    ``passed`` is ``None`` when the check did not apply (e.g. no images).
    """
    check: str
    passed: Optional[bool] = None
    fields: dict[str, Any] = field(default_factory=dict)
    delta: int = 0


@dataclass
class AssessmentRecord:
    """Everything learned about one site in one assessment run."""
    domain: str
    site_url: str
    score: int = 0

    # Markup checks
    title: Optional[str] = None
    title_check: Optional[bool] = None
    meta_description: Optional[str] = None
    meta_description_check: Optional[bool] = None
    meta_keywords: Optional[str] = None
    meta_keywords_check: Optional[bool] = None
    img_alt: Optional[str] = None
    img_alt_check: Optional[bool] = None
    has_footer: Optional[str] = None
    has_footer_check: Optional[bool] = None
    footer_outdated: bool = False
    facebook_pixel: Optional[str] = None
    facebook_pixel_check: Optional[bool] = None

    # Fingerprints
    cms: str = ""
    framework: str = ""
    analytics_tools: list[str] = field(default_factory=list)

    # Contact info
    domain_email_address: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None

    insecure_site: Optional[bool] = None
    html_in_slug: bool = False
    page_count: Optional[int] = None
    keyword: Optional[str] = None
    relevant: Optional[bool] = None
    is_english: Optional[bool] = None

    # Audits
    seo: Optional[SEOAuditResult] = None
    seo_data: list[SEOAuditResult] = field(default_factory=list)
    accessibility: Optional[AccessibilityResult] = None
    accessibility_all: list[AccessibilityResult] = field(default_factory=list)
    is_mobile_friendly: Optional[bool] = None

    outcomes: list[CheckOutcome] = field(default_factory=list)
    error: Optional[str] = None
    summary: str = ""

    # ------------------------------------------------------------------
    # Main-page SEO facts, flattened for the narrative
    # ------------------------------------------------------------------

    @property
    def keywords_length(self) -> int:
        return self.seo.keywords_length if self.seo else 0

    @property
    def title_length_over_60(self) -> bool:
        return bool(self.seo and self.seo.title_length_over_60)

    @property
    def description_length_over_155(self) -> bool:
        return bool(self.seo and self.seo.description_length_over_155)

    @property
    def internal_links_raw(self) -> list[str]:
        return list(self.seo.inter_link_href) if self.seo else []

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        if self.accessibility is not None:
            data["accessibility"] = self.accessibility.to_dict()
        data["accessibility_all"] = [a.to_dict() for a in self.accessibility_all]
        return data
