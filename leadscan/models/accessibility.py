"""Accessibility audit models."""

from dataclasses import asdict, dataclass, field
from typing import Any, Optional


@dataclass
class AccessibilityIssue:
    """A single WCAG finding (or pass) reported by the audit engine."""
    code: str
    context: str = ""
    message: str = ""
    selector: str = ""
    type: str = "error"  # error | warning | notice | pass
    guideline_name: str = ""


@dataclass
class AccessibilityResult:
    """Scored accessibility audit for one live URL.

    A result with ``score=None`` is the sentinel returned when the audit
    engine produced nothing or failed.
    """
    url: str = ""
    score: Optional[int] = None
    issues_count: int = 0
    error_count: int = 0
    warning_count: int = 0
    pass_count: int = 0
    issues: Optional[str] = None  # JSON-serialised list of issues
    good_features: Optional[str] = None  # JSON-serialised list of passes
    issue_list: list[AccessibilityIssue] = field(default_factory=list, repr=False)

    @classmethod
    def unavailable(cls, url: str = "") -> "AccessibilityResult":
        return cls(url=url, score=None, issues=None, good_features=None)

    @property
    def available(self) -> bool:
        return self.score is not None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data.pop("issue_list", None)
        return data
