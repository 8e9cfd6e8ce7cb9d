"""FinTrack asset hierarchy valuation API"""

__version__ = "1.0.0"
