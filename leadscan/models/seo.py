"""SEO audit result models."""

from dataclasses import asdict, dataclass, field
from typing import Any, Optional


@dataclass
class BrokenLinkReport:
    """Outcome of probing a page's internal links."""
    count: int = 0
    links: Optional[list[str]] = field(default_factory=list)  # None once suppressed
    probed: int = 0
    inconclusive: int = 0


@dataclass
class SEOAuditResult:
    """Page-level SEO score and structural facts for one URL."""
    url: str
    score: int = 100
    title: str = ""
    title_length: int = 0
    title_length_over_60: Optional[bool] = None  # set when title > 70 chars
    description: Optional[str] = None
    description_length: int = 0
    description_length_over_155: Optional[bool] = None
    keywords: Optional[str] = None
    keywords_length: int = 0
    keywords_length_over_255: Optional[bool] = None
    h1: str = ""
    h1_tag_total_amount: int = 0
    h1_tag_content: Optional[str] = None
    h1_first_tag_length: int = 0
    canonical: Optional[str] = None
    number_of_images: int = 0
    number_of_images_missing_alt: int = 0
    missing_img_alt: bool = False
    internal_links: int = 0
    external_links: int = 0
    inter_link_href: list[str] = field(default_factory=list)
    broken_links: int = 0
    all_broken_links: Optional[list[str]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
