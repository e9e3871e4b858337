"""
Asynchronous client for the Alpha Vantage quote endpoint.
Fetches GLOBAL_QUOTE data and projects price, change and change percent out of it.
"""

import math
from dataclasses import dataclass
from typing import Dict, Any
from loguru import logger

from .base import AsyncBaseAPI

DEFAULT_BASE_URL = "https://www.alphavantage.co"

QUOTE_KEY = "Global Quote"
PRICE_FIELD = "05. price"
CHANGE_FIELD = "09. change"
CHANGE_PERCENT_FIELD = "10. change percent"

# Keys Alpha Vantage uses for error, throttling and info payloads
NOTICE_KEYS = ("Error Message", "Note", "Information")


class QuoteError(Exception):
    """Base exception for quote lookups that returned no usable data."""

    def __init__(self, symbol: str, message: str):
        self.symbol = symbol
        self.message = message
        super().__init__(message)


class QuoteNotFound(QuoteError):
    """The response carried no quote for the symbol."""


class MalformedQuote(QuoteError):
    """The quote was present but its price is not a number."""


@dataclass(frozen=True)
class Quote:
    """A single price snapshot for a symbol"""
    symbol: str
    price: float
    change: str
    change_percent: str


def normalize_symbol(symbol: str) -> str:
    """Normalize a ticker symbol for lookups and storage"""
    return symbol.strip().upper()


class AsyncAlphaVantageAPI(AsyncBaseAPI):
    """
    Asynchronous client for the Alpha Vantage GLOBAL_QUOTE endpoint.
    One request per lookup, no retries and no caching.
    """
    
    def __init__(self, api_key: str, base_url: str = DEFAULT_BASE_URL, timeout: int = 10):
        """
        Initialize the Alpha Vantage client.
        
        Args:
            api_key: Alpha Vantage API key, sent as the ``apikey`` query parameter
            base_url: Base URL of the API
            timeout: Request timeout in seconds
        """
        super().__init__(base_url=base_url, timeout=timeout)
        self.api_key = api_key
        logger.debug(f"Initialized AsyncAlphaVantageAPI for {base_url}")
    
    async def get_quote(self, symbol: str) -> Quote:
        """
        Get the latest quote for a symbol.
        
        Args:
            symbol: Stock ticker symbol
            
        Returns:
            Parsed quote
            
        Raises:
            QuoteNotFound: If the response has no quote object
            MalformedQuote: If the price cannot be parsed
            APIError: If the HTTP request fails
        """
        symbol = normalize_symbol(symbol)
        params = {
            "function": "GLOBAL_QUOTE",
            "symbol": symbol,
            "apikey": self.api_key,
        }
        response = await self.get("query", params=params)
        return self.parse_quote(symbol, response)
    
    async def get_price(self, symbol: str) -> float:
        """Get the current price for a symbol"""
        quote = await self.get_quote(symbol)
        return quote.price
    
    @staticmethod
    def parse_quote(symbol: str, response: Dict[str, Any]) -> Quote:
        """
        Project a GLOBAL_QUOTE response body into a Quote.
        
        Args:
            symbol: Normalized symbol the request was made for
            response: Decoded JSON body
            
        Returns:
            Parsed quote
        """
        data = response.get(QUOTE_KEY) if isinstance(response, dict) else None
        
        if not isinstance(data, dict) or not data:
            notices = {k: response[k] for k in NOTICE_KEYS if isinstance(response, dict) and k in response}
            if notices:
                logger.warning(f"Alpha Vantage returned no quote for {symbol}: {notices}")
            else:
                logger.warning(f"Missing or empty '{QUOTE_KEY}' for {symbol}")
            raise QuoteNotFound(symbol, f"No quote data for {symbol}")
        
        raw_price = data.get(PRICE_FIELD)
        try:
            price = float(raw_price)
        except (TypeError, ValueError):
            logger.warning(f"Unparseable price for {symbol}: {raw_price!r}")
            raise MalformedQuote(symbol, f"Invalid price for {symbol}: {raw_price!r}")
        
        if not math.isfinite(price):
            logger.warning(f"Non-finite price for {symbol}: {raw_price!r}")
            raise MalformedQuote(symbol, f"Invalid price for {symbol}: {raw_price!r}")
        
        return Quote(
            symbol=symbol,
            price=price,
            change=str(data.get(CHANGE_FIELD, "N/A")),
            change_percent=str(data.get(CHANGE_PERCENT_FIELD, "N/A")),
        )
