"""Accessibility auditor: runs a WCAG2AA audit and scores the findings."""

import asyncio
import json
import logging
import math
from typing import Any, Optional

from leadscan.integrations.accessibility_engine import WCAG2AA_STANDARD, AccessibilityEngine
from leadscan.models.accessibility import AccessibilityIssue, AccessibilityResult

logger = logging.getLogger(__name__)

MAX_SCORE = 100


def guideline_name(code: str) -> str:
    """Readable guideline label for a WCAG issue code.

    Examples:
        >>> guideline_name("WCAG2AA.Principle1.Guideline1_1.1_1_1.H37")
        'Guideline 1.1 (Principle1)'
    """
    parts = (code or "").split(".")
    if len(parts) < 3 or not parts[2].startswith("Guideline"):
        return ""
    number = parts[2][len("Guideline"):].replace("_", ".", 1)
    return f"Guideline {number} ({parts[1]})"


def score_accessibility(issues_count: int, error_count: int) -> int:
    """Turn issue counts into a score in ``[0, 100]``.

    Each severity is weighted by how dominant it is, capped at
    ``max(1, N/10)``. A severity with no issues takes the cap, which has no
    effect since its count is zero.
    """
    n = issues_count
    warnings = n - error_count
    max_weight = max(1, n / 10)

    def weight(count: int) -> float:
        if n == 0 or count == 0:
            return max_weight
        return min(max_weight, math.ceil(n / (2 * count)))

    weighted = weight(error_count) * error_count + weight(warnings) * warnings
    return max(0, math.floor(MAX_SCORE * (1 - weighted / (n + 1))))


def _to_issue(raw: dict[str, Any], kind: Optional[str] = None) -> AccessibilityIssue:
    code = raw.get("code", "")
    return AccessibilityIssue(
        code=code,
        context=raw.get("context") or "",
        message=raw.get("message") or "",
        selector=raw.get("selector") or "",
        type=kind or raw.get("type") or "error",
        guideline_name=guideline_name(code) if kind is None else "",
    )


class AccessibilityAuditor:
    """Wrap an ``AccessibilityEngine`` and convert its output into a result."""

    def __init__(self, engine: AccessibilityEngine, timeout: float = 10.0) -> None:
        self._engine = engine
        self._timeout = timeout

    @property
    def audit_config(self) -> dict[str, Any]:
        return {
            "standard": WCAG2AA_STANDARD,
            "include_notices": False,
            "include_warnings": True,
            "include_errors": True,
            "timeout": self._timeout,
        }

    async def audit(self, url: str) -> AccessibilityResult:
        if not url:
            return AccessibilityResult.unavailable(url)
        try:
            raw = await asyncio.wait_for(self._engine.audit(url, self.audit_config), timeout=self._timeout)
        except asyncio.TimeoutError:
            logger.warning("Accessibility audit timed out for %s after %.0fs", url, self._timeout)
            return AccessibilityResult.unavailable(url)
        except Exception as exc:
            logger.error("Accessibility audit failed for %s: %s", url, exc)
            return AccessibilityResult.unavailable(url)

        if not raw:
            return AccessibilityResult.unavailable(url)
        return self.build_result(url, raw)

    @staticmethod
    def build_result(url: str, raw: dict[str, Any]) -> AccessibilityResult:
        issues = [_to_issue(i) for i in raw.get("issues") or []]
        passes = [_to_issue(p, kind="pass") for p in raw.get("passes") or []]

        errors = sum(1 for i in issues if i.type == "error")
        warnings = sum(1 for i in issues if i.type == "warning")
        score = score_accessibility(len(issues), errors)
        logger.info("Accessibility score for %s: %d (%d issues)", url, score, len(issues))

        return AccessibilityResult(
            url=url,
            score=score,
            issues_count=len(issues),
            error_count=errors,
            warning_count=warnings,
            pass_count=len(passes),
            issues=json.dumps([vars(i) for i in issues]),
            good_features=json.dumps([
                {k: v for k, v in vars(p).items() if k != "guideline_name"} for p in passes
            ]),
            issue_list=issues,
        )
