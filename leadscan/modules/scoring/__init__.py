"""Score accumulation for assessment records."""

from leadscan.modules.scoring.scorer import CompositeScorer, apply_delta

__all__ = ["CompositeScorer", "apply_delta"]
