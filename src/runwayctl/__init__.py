"""runwayctl — headcount timeline scheduling and cash-runway projection."""

__version__ = "0.1.0"
