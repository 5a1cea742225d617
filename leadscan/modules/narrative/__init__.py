"""Narrative summary module."""

from leadscan.modules.narrative.generator import NarrativeGenerator, generate_summary, roll_up
from leadscan.modules.narrative.templates import TEMPLATE_BANKS

__all__ = ["NarrativeGenerator", "TEMPLATE_BANKS", "generate_summary", "roll_up"]
