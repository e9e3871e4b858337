"""
Discord bot for stock quote lookups and price-threshold alerts.
"""

__version__ = "0.1.0"
