"""Composite scorer: folds check outcomes into an assessment record.

The score is an unbounded integer. Higher means more issues, so a lead is
more likely to need work. It is never clamped.
"""

import logging
from typing import Iterable

from leadscan.models.assessment import AssessmentRecord, CheckOutcome

logger = logging.getLogger(__name__)


def apply_delta(delta: int, record: AssessmentRecord) -> int:
    """Add *delta* to the record's running score and return the new total."""
    record.score += int(delta)
    return record.score


class CompositeScorer:
    """Apply check outcomes to a record, one delta per outcome."""

    def apply(self, outcomes: Iterable[CheckOutcome], record: AssessmentRecord) -> AssessmentRecord:
        for outcome in outcomes:
            for name, value in outcome.fields.items():
                if not hasattr(record, name):
                    logger.warning("Check %s set unknown field %r", outcome.check, name)
                    continue
                setattr(record, name, value)
            apply_delta(outcome.delta, record)
            record.outcomes.append(outcome)
            logger.debug(
                "Applied %s (passed=%s, delta=%+d) -> score %d",
                outcome.check, outcome.passed, outcome.delta, record.score,
            )
        return record

    @staticmethod
    def total(outcomes: Iterable[CheckOutcome]) -> int:
        return sum(o.delta for o in outcomes)
