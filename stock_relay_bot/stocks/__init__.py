"""
Stock quote commands package.
"""

from .cog import StockCommands

__all__ = ["StockCommands"]
