"""
HTTP helper for the market data clients.
Runs blocking requests calls off the event loop and maps failures to APIError.
"""

import requests
import asyncio
from typing import Dict, Any, Optional


class APIError(Exception):
    """Exception raised for API errors."""
    
    def __init__(self, message: str, status_code: Optional[int] = None, response: Any = None):
        self.message = message
        self.status_code = status_code
        self.response = response
        super().__init__(self.message)


async def async_get(url: str, params: Dict[str, Any], timeout: int = 10) -> Dict[str, Any]:
    """
    Make a single GET request in the default executor and decode its JSON body.
    
    Args:
        url: URL to request, without query string
        params: Query parameters
        timeout: Request timeout in seconds
        
    Returns:
        Parsed JSON response
        
    Raises:
        APIError: On transport failure, an HTTP error status or a non-JSON body
    """
    def make_request():
        try:
            response = requests.get(url, params=params, timeout=timeout)
            response.raise_for_status()
            return response.json()
            
        except requests.exceptions.RequestException as e:
            status_code = None
            error_response = None
            if getattr(e, "response", None) is not None:
                status_code = e.response.status_code
                error_response = e.response.text
            
            # The exception text can echo the query string, which holds the key
            raise APIError(
                message=f"Request failed: {type(e).__name__}",
                status_code=status_code,
                response=error_response
            ) from e
            
        except ValueError as e:
            raise APIError(message="Response body is not valid JSON") from e
    
    return await asyncio.get_running_loop().run_in_executor(None, make_request)
