import pytest
from unittest.mock import AsyncMock, MagicMock
import os
from loguru import logger

from stock_relay_bot.alerts.alert_storage import AlertStorage

# Configure logging for tests
logger.remove()
logger.add(lambda msg: print(msg, end=""), level="DEBUG")


class MockUser:
    """Mock Discord user that records direct messages"""

    def __init__(self, user_id=987654321, name="TestUser"):
        self.id = user_id
        self.name = name
        self.bot = False
        self.send = AsyncMock(return_value=MagicMock())

    def __str__(self):
        return self.name


class MockDiscordClient:
    """Mock Discord client for testing"""

    def __init__(self):
        self.user = MagicMock()
        self.user.name = "TestBot"
        self.user.id = 123456789
        self.users = {}
        self.fetch_user = AsyncMock(side_effect=self._fetch_user)

    def add_user(self, user_id):
        user = MockUser(user_id=user_id, name=f"user-{user_id}")
        self.users[user_id] = user
        return user

    def get_user(self, user_id):
        """Mock get_user method, cache lookup only"""
        return self.users.get(user_id)

    async def _fetch_user(self, user_id):
        return self.users.setdefault(user_id, MockUser(user_id=user_id))

    async def wait_until_ready(self):
        return True


class MockContext:
    """Mock Discord Context for testing"""

    def __init__(self, author_id=987654321):
        self.bot = MockDiscordClient()
        self.author = MockUser(user_id=author_id)
        self.channel = MagicMock()
        self.channel.id = 12345
        self.message = MagicMock()
        self.message.author = self.author
        self.reply = AsyncMock(return_value=MagicMock())
        self.send = AsyncMock(return_value=MagicMock())

    @property
    def replies(self):
        """Text content of every reply sent, in order"""
        return [call.args[0] for call in self.reply.call_args_list if call.args]


@pytest.fixture
def mock_client():
    """Fixture for a mock Discord client"""
    return MockDiscordClient()


@pytest.fixture
def mock_context():
    """Fixture for a mock Discord context"""
    return MockContext()


@pytest.fixture
def make_context():
    """Factory for contexts with distinct authors"""
    return MockContext


@pytest.fixture
def alerts_file(tmp_path):
    return str(tmp_path / "stock_alerts.json")


@pytest.fixture
def storage(alerts_file):
    """Empty alert storage backed by a temporary file"""
    store = AlertStorage(alerts_file)
    store.load()
    return store


@pytest.fixture
def quote_api():
    """Quote client double with async get_price/get_quote"""
    api = MagicMock()
    api.get_price = AsyncMock()
    api.get_quote = AsyncMock()
    return api


@pytest.fixture(autouse=True)
def setup_environment(monkeypatch):
    """Set up environment variables for testing"""
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "test_discord_token")
    monkeypatch.setenv("ALPHA_VANTAGE_API_KEY", "test_api_key")
    yield
