"""Mobile-friendliness module."""

from leadscan.modules.mobile.prober import MobileFriendlinessProber, MobileSignals

__all__ = ["MobileFriendlinessProber", "MobileSignals"]
