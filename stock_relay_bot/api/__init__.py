"""
Market data API clients.
"""

from .request_utilities import APIError
from .base import AsyncBaseAPI
from .alpha_vantage import (
    AsyncAlphaVantageAPI,
    Quote,
    QuoteError,
    QuoteNotFound,
    MalformedQuote,
    normalize_symbol,
)

__all__ = [
    "APIError",
    "AsyncBaseAPI",
    "AsyncAlphaVantageAPI",
    "Quote",
    "QuoteError",
    "QuoteNotFound",
    "MalformedQuote",
    "normalize_symbol",
]
