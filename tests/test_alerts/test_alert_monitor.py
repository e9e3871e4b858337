import discord
import pytest
from unittest.mock import AsyncMock, MagicMock

from stock_relay_bot.alerts.alert_model import Direction, PriceAlert
from stock_relay_bot.alerts.alert_monitor import AlertMonitor
from stock_relay_bot.api import APIError, QuoteNotFound


def alert(owner_id="1", symbol="AAPL", price=150.0, direction=Direction.ABOVE):
    return PriceAlert(owner_id=owner_id, symbol=symbol, price=price, direction=direction)


def prices(mapping):
    """get_price side effect returning prices, or raising exceptions, per symbol"""
    async def get_price(symbol):
        result = mapping[symbol]
        if isinstance(result, Exception):
            raise result
        return result
    return get_price


@pytest.fixture
def monitor(mock_client, storage, quote_api):
    return AlertMonitor(mock_client, storage, quote_api)


async def test_no_alerts_makes_no_requests(monitor, quote_api):
    assert await monitor.run_sweep() == 0
    quote_api.get_price.assert_not_awaited()


async def test_above_alert_triggers_once_and_is_removed(monitor, mock_client, storage, quote_api):
    user = mock_client.add_user(1)
    await storage.add(alert())
    quote_api.get_price.side_effect = prices({"AAPL": 151.0})

    assert await monitor.run_sweep() == 1

    user.send.assert_awaited_once()
    embed = user.send.call_args.kwargs["embed"]
    assert "AAPL" in embed.title
    assert "$151.00" in embed.description
    assert storage.list_alerts("1") == []

    # Nothing left to fire on the next tick
    assert await monitor.run_sweep() == 0
    user.send.assert_awaited_once()


@pytest.mark.parametrize("direction", [Direction.ABOVE, Direction.BELOW])
async def test_price_equal_to_threshold_triggers(monitor, mock_client, storage, quote_api, direction):
    user = mock_client.add_user(1)
    await storage.add(alert(direction=direction))
    quote_api.get_price.side_effect = prices({"AAPL": 150.0})

    assert await monitor.run_sweep() == 1
    user.send.assert_awaited_once()


async def test_untriggered_alerts_stay(monitor, mock_client, storage, quote_api):
    user = mock_client.add_user(1)
    await storage.add(alert(direction=Direction.ABOVE, price=150.0))
    await storage.add(alert(symbol="TSLA", direction=Direction.BELOW, price=100.0))
    quote_api.get_price.side_effect = prices({"AAPL": 149.0, "TSLA": 101.0})

    assert await monitor.run_sweep() == 0
    user.send.assert_not_awaited()
    assert storage.count() == 2


async def test_fetch_failure_does_not_stop_other_symbols(monitor, mock_client, storage, quote_api):
    user = mock_client.add_user(1)
    await storage.add(alert(symbol="BAD1"))
    await storage.add(alert(symbol="BAD2"))
    await storage.add(alert(symbol="BAD3"))
    await storage.add(alert(symbol="AAPL"))
    quote_api.get_price.side_effect = prices({
        "BAD1": QuoteNotFound("BAD1", "No quote data for BAD1"),
        "BAD2": APIError("timeout"),
        "BAD3": RuntimeError("unexpected"),
        "AAPL": 200.0,
    })

    assert await monitor.run_sweep() == 1
    user.send.assert_awaited_once()
    assert [a.symbol for a in storage.list_alerts("1")] == ["BAD1", "BAD2", "BAD3"]


async def test_symbol_fetched_once_per_sweep(monitor, mock_client, storage, quote_api):
    first = mock_client.add_user(1)
    second = mock_client.add_user(2)
    await storage.add(alert(owner_id="1"))
    await storage.add(alert(owner_id="2", direction=Direction.BELOW, price=100.0))
    quote_api.get_price.side_effect = prices({"AAPL": 160.0})

    assert await monitor.run_sweep() == 1

    quote_api.get_price.assert_awaited_once_with("AAPL")
    first.send.assert_awaited_once()
    second.send.assert_not_awaited()
    assert storage.list_alerts("2") == [alert(owner_id="2", direction=Direction.BELOW, price=100.0)]


async def test_alert_removed_during_fetch_is_not_notified(monitor, mock_client, storage, quote_api):
    user = mock_client.add_user(1)
    await storage.add(alert())

    async def get_price(symbol):
        # The owner runs !alert remove while the quote is in flight
        await storage.remove("1", symbol)
        return 999.0

    quote_api.get_price.side_effect = get_price

    assert await monitor.run_sweep() == 0
    user.send.assert_not_awaited()


async def test_alert_replaced_during_fetch_is_kept(monitor, mock_client, storage, quote_api):
    user = mock_client.add_user(1)
    await storage.add(alert(price=150.0))
    replacement = alert(price=500.0)

    async def get_price(symbol):
        await storage.add(replacement)
        return 200.0

    quote_api.get_price.side_effect = get_price

    assert await monitor.run_sweep() == 0
    user.send.assert_not_awaited()
    assert storage.list_alerts("1") == [replacement]


async def test_uncached_user_is_fetched(monitor, mock_client, storage, quote_api):
    await storage.add(alert(owner_id="77"))
    quote_api.get_price.side_effect = prices({"AAPL": 150.0})

    assert await monitor.run_sweep() == 1

    mock_client.fetch_user.assert_awaited_once_with(77)
    mock_client.users[77].send.assert_awaited_once()


async def test_undeliverable_dm_still_removes_alert(monitor, mock_client, storage, quote_api):
    user = mock_client.add_user(1)
    response = MagicMock(status=403, reason="Forbidden")
    user.send = AsyncMock(side_effect=discord.Forbidden(response, "Cannot send messages to this user"))
    await storage.add(alert())
    quote_api.get_price.side_effect = prices({"AAPL": 150.0})

    assert await monitor.run_sweep() == 1
    assert storage.count() == 0
