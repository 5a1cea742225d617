"""LeadScan: website quality/risk assessment for outreach lead ranking."""

__version__ = "1.0.0"
