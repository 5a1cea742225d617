"""Render a human-readable summary of a finished assessment record."""

import logging
import random
from dataclasses import dataclass
from typing import Mapping, Optional

from leadscan.models.assessment import AssessmentRecord
from leadscan.modules.checks.markup import FOOTER_ABSENT
from leadscan.modules.narrative.templates import TEMPLATE_BANKS
from leadscan.utils.helpers import pluralize

logger = logging.getLogger(__name__)

HIGH_SCORE_THRESHOLD = 20


@dataclass
class RolledUpTotals:
    """Counts summed over the main page and every audited internal link."""
    accessibility_errors: int = 0
    accessibility_issues: int = 0
    accessibility_warnings: int = 0
    images: int = 0
    images_missing_alt: int = 0
    broken_links: int = 0


def roll_up(record: AssessmentRecord) -> RolledUpTotals:
    totals = RolledUpTotals()

    access = [a for a in [record.accessibility, *record.accessibility_all] if a is not None]
    for result in access:
        totals.accessibility_errors += result.error_count
        totals.accessibility_issues += result.issues_count
        totals.accessibility_warnings += result.warning_count

    pages = [s for s in [record.seo, *record.seo_data] if s is not None]
    for page in pages:
        totals.images += page.number_of_images
        totals.images_missing_alt += page.number_of_images_missing_alt
        totals.broken_links += page.broken_links or 0
    return totals


class NarrativeGenerator:
    """Pick one sentence per applicable topic from the template banks.

    The random source is injected so a seeded generator yields a
    reproducible summary.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        banks: Optional[Mapping[str, list[str]]] = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._banks = banks or TEMPLATE_BANKS

    def _pick(self, topic: str, **values) -> str:
        return self._rng.choice(self._banks[topic]).format(**values) + "\n"

    def generate_summary(self, record: AssessmentRecord) -> str:
        totals = roll_up(record)
        sentences: list[str] = []

        if record.score > HIGH_SCORE_THRESHOLD:
            sentences.append(self._pick("score_high", score=record.score))
        else:
            sentences.append(self._pick("score_low", score=record.score))

        if record.is_mobile_friendly is False:
            sentences.append(self._pick("mobile"))

        if record.keywords_length > 0:
            sentences.append(self._pick("keywords_found"))
        else:
            sentences.append(self._pick("keywords_missing"))

        if record.insecure_site:
            sentences.append(self._pick("security"))

        if totals.accessibility_errors > 0:
            sentences.append(self._pick(
                "accessibility",
                errors=totals.accessibility_errors,
                issues=totals.accessibility_issues,
                warnings=totals.accessibility_warnings,
            ))

        if totals.images_missing_alt > 0:
            sentences.append(self._pick(
                "missing_alt",
                missing_alt=pluralize(totals.images_missing_alt, "image"),
                images=pluralize(totals.images, "image"),
            ))

        if totals.broken_links > 0:
            sentences.append(self._pick("broken_links", broken=pluralize(totals.broken_links, "broken link")))

        if record.has_footer_check and record.has_footer == FOOTER_ABSENT:
            sentences.append(self._pick("missing_footer"))
        if record.footer_outdated:
            sentences.append(self._pick("outdated_footer"))
        if record.html_in_slug:
            sentences.append(self._pick("html_in_slug"))
        if record.title_length_over_60:
            sentences.append(self._pick("long_title"))
        if record.description_length_over_155:
            sentences.append(self._pick("long_description"))

        logger.debug("Summary for %s has %d sentences", record.domain, len(sentences))
        return "".join(sentences)


def generate_summary(record: AssessmentRecord, rng: Optional[random.Random] = None) -> str:
    return NarrativeGenerator(rng=rng).generate_summary(record)
