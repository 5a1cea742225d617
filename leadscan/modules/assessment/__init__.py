"""Assessment orchestration."""

from leadscan.modules.assessment.assessor import SiteAssessor

__all__ = ["SiteAssessor"]
