"""Mobile-friendliness prober: loads the page at a phone viewport."""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Optional

from leadscan.integrations.browser import HeadlessBrowser, scoped_session

logger = logging.getLogger(__name__)

RESPONSIVE_TOLERANCE_PX = 20
MIN_FONT_SIZE_PX = 12
MIN_TAP_TARGET_PX = 40
DEFAULT_VIEWPORT = {"width": 375, "height": 667, "is_mobile": True}


@dataclass
class MobileSignals:
    """Layout signals observed at the mobile viewport."""
    has_viewport_meta: bool = False
    is_responsive: bool = False
    uses_media_queries: bool = False
    is_legible: bool = False
    has_sized_tap_targets: bool = False
    is_unzoomed: bool = False

    @property
    def is_mobile_friendly(self) -> bool:
        return self.is_responsive or self.uses_media_queries

    @classmethod
    def from_layout(cls, layout: dict[str, Any]) -> "MobileSignals":
        viewport_width = layout.get("viewportWidth") or 0
        document_width = layout.get("documentWidth") or 0
        min_font = layout.get("minFontSize")
        min_target = layout.get("minTapTarget")
        return cls(
            has_viewport_meta=bool(layout.get("hasViewportMeta")),
            is_responsive=abs(viewport_width - document_width) <= RESPONSIVE_TOLERANCE_PX,
            uses_media_queries=bool(layout.get("usesMediaQueries")),
            is_legible=min_font is None or min_font >= MIN_FONT_SIZE_PX,
            has_sized_tap_targets=min_target is None or min_target >= MIN_TAP_TARGET_PX,
            is_unzoomed=layout.get("zoom", "") == "",
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["is_mobile_friendly"] = self.is_mobile_friendly
        return data


class MobileFriendlinessProber:
    """Evaluate responsive-layout signals in a freshly opened browser session."""

    def __init__(self, browser: HeadlessBrowser, viewport: Optional[dict[str, Any]] = None) -> None:
        self._browser = browser
        self._viewport = dict(viewport or DEFAULT_VIEWPORT)

    async def evaluate_mobile_signals(self, url: str) -> Optional[MobileSignals]:
        """Full signal set for *url*, or ``None`` when the page could not be evaluated."""
        try:
            async with scoped_session(self._browser) as session:
                layout = await session.navigate(url, self._viewport)
        except Exception as exc:
            logger.error("Error checking mobile friendliness for %s: %s", url, exc)
            return None
        if not isinstance(layout, dict):
            return None
        return MobileSignals.from_layout(layout)

    async def check(self, url: str) -> bool:
        signals = await self.evaluate_mobile_signals(url)
        friendly = bool(signals and signals.is_mobile_friendly)
        logger.info("Mobile friendly %s: %s", url, friendly)
        return friendly
