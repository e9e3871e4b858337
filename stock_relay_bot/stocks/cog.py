"""
Discord cog for stock quote commands.
Registers commands and routes them to handlers.
"""

from typing import Optional
from discord.ext import commands
from loguru import logger

from ..api import AsyncAlphaVantageAPI
from .commands import QuoteCommands


class StockCommands(commands.Cog):
    """Discord commands for looking up stock quotes"""

    def __init__(self, bot: commands.Bot, quote_api: AsyncAlphaVantageAPI):
        """Initialize the cog with command handlers"""
        self.bot = bot
        self.commands = QuoteCommands(quote_api)
        logger.info("Stock commands initialized")

    @commands.command(name="stock")
    async def stock_quote(self, ctx, symbol: Optional[str] = None):
        """Get the latest price for a stock

        Usage:
        !stock AAPL - Get latest price for Apple
        """
        await self.commands.handle_stock(ctx, symbol)

    @commands.command(name="help")
    async def show_help(self, ctx):
        """Show available commands"""
        await self.commands.handle_help(ctx)
