"""Data models for assessments, SEO audits, and accessibility audits."""

from leadscan.models.accessibility import (
    AccessibilityIssue,
    AccessibilityResult,
)
from leadscan.models.assessment import (
    AssessmentRecord,
    CheckOutcome,
)
from leadscan.models.seo import (
    BrokenLinkReport,
    SEOAuditResult,
)

__all__ = [
    "AccessibilityIssue",
    "AccessibilityResult",
    "AssessmentRecord",
    "CheckOutcome",
    "BrokenLinkReport",
    "SEOAuditResult",
]
