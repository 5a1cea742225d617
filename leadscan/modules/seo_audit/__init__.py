"""SEO audit module: page scoring, broken-link probing and internal-link audits."""

from leadscan.modules.seo_audit.auditor import SEOAuditor, normalize_href
from leadscan.modules.seo_audit.internal_links import InternalLinkAuditor
from leadscan.modules.seo_audit.link_prober import BrokenLinkProber, is_broken

__all__ = [
    "BrokenLinkProber",
    "InternalLinkAuditor",
    "SEOAuditor",
    "is_broken",
    "normalize_href",
]
