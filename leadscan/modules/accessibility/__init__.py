"""Accessibility audit module."""

from leadscan.modules.accessibility.auditor import (
    AccessibilityAuditor,
    guideline_name,
    score_accessibility,
)

__all__ = ["AccessibilityAuditor", "guideline_name", "score_accessibility"]
