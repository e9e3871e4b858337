"""
Base class for asynchronous API clients.
"""

import asyncio
from abc import ABC
from typing import Dict, Any
from loguru import logger

from .request_utilities import async_get, APIError


class AsyncBaseAPI(ABC):
    """Base class for asynchronous GET-only API clients"""
    
    def __init__(self, base_url: str, timeout: int = 10):
        """
        Initialize the async API client.
        
        Args:
            base_url: Base URL for API requests
            timeout: Request timeout in seconds
        """
        self.base_url = base_url
        self.timeout = timeout
    
    def build_url(self, endpoint: str) -> str:
        """Join the base URL and an endpoint with exactly one slash"""
        return f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"
    
    async def get(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Make a GET request to the API.
        
        Raises:
            APIError: On request failure
        """
        # Query parameters may carry credentials, log the endpoint only
        logger.debug(f"API Request: GET {endpoint}")
        
        loop = asyncio.get_running_loop()
        start_time = loop.time()
        try:
            response = await async_get(self.build_url(endpoint), params, timeout=self.timeout)
        except APIError as e:
            logger.error(f"API Error: {e.message} (Status: {e.status_code})")
            raise
        
        logger.debug(f"API Response received in {loop.time() - start_time:.2f}s")
        return response
