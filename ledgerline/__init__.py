"""
Ledgerline: financial item tracking with exact decimal analytics.
"""

__version__ = "1.0.0"
