import pytest
import requests
from unittest.mock import MagicMock, patch

from stock_relay_bot.api.base import AsyncBaseAPI
from stock_relay_bot.api.request_utilities import APIError, async_get


@pytest.mark.parametrize("base_url, endpoint", [
    ("https://example.test", "query"),
    ("https://example.test/", "query"),
    ("https://example.test/", "/query"),
    ("https://example.test", "/query"),
])
def test_build_url_joins_with_single_slash(base_url, endpoint):
    assert AsyncBaseAPI(base_url).build_url(endpoint) == "https://example.test/query"


async def test_get_passes_params_and_timeout():
    response = MagicMock()
    response.raise_for_status.return_value = None
    response.json.return_value = {"ok": True}

    with patch("stock_relay_bot.api.request_utilities.requests.get", return_value=response) as get:
        result = await async_get("https://example.test/query", {"symbol": "BRK.B"}, timeout=5)

    assert result == {"ok": True}
    get.assert_called_once_with("https://example.test/query", params={"symbol": "BRK.B"}, timeout=5)


async def test_http_error_carries_status_code():
    error_response = MagicMock()
    error_response.status_code = 503
    error_response.text = "Service Unavailable"
    response = MagicMock()
    response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=error_response)

    with patch("stock_relay_bot.api.request_utilities.requests.get", return_value=response):
        with pytest.raises(APIError) as exc_info:
            await async_get("https://example.test/query", {})

    assert exc_info.value.status_code == 503
    assert exc_info.value.response == "Service Unavailable"


async def test_non_json_body_raises_api_error():
    response = MagicMock()
    response.raise_for_status.return_value = None
    response.json.side_effect = ValueError("Expecting value")

    with patch("stock_relay_bot.api.request_utilities.requests.get", return_value=response):
        with pytest.raises(APIError):
            await async_get("https://example.test/query", {})


async def test_error_message_does_not_echo_query_string():
    with patch("stock_relay_bot.api.request_utilities.requests.get",
               side_effect=requests.exceptions.ConnectionError("https://example.test/query?apikey=secret")):
        with pytest.raises(APIError) as exc_info:
            await async_get("https://example.test/query", {"apikey": "secret"})

    assert "secret" not in exc_info.value.message
