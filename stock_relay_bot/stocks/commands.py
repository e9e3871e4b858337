"""
Command handlers for stock quote commands.
Coordinates the quote client and formatters to process user commands.
"""

from typing import Optional
from discord.ext import commands
from loguru import logger

from ..api import AsyncAlphaVantageAPI, APIError, QuoteError, QuoteNotFound, normalize_symbol
from ..utils.embed_utilities import create_quote_embed
from ..utils.validation_utilities import validate_symbol

STOCK_USAGE = "Please provide a stock symbol. Example: `!stock AAPL`"
GENERIC_ERROR = "An error occurred while fetching stock data. Please try again later."

HELP_TEXT = (
    "**Stock bot commands**\n"
    "`!stock <symbol>` - Get the latest price and daily change, e.g. `!stock AAPL`\n"
    "`!alert add <symbol> <condition> <price>` - DM me when the price crosses a threshold. "
    "Condition is `>` (at or above) or `<` (at or below), e.g. `!alert add AAPL > 150`\n"
    "`!alert remove <symbol>` - Remove your alert for a symbol\n"
    "`!alert list` - Show your active alerts\n"
    "`!help` - Show this message"
)


class QuoteCommands:
    """Command handlers for stock quotes"""
    
    def __init__(self, quote_api: AsyncAlphaVantageAPI):
        """
        Initialize the handlers.
        
        Args:
            quote_api: Client used to fetch quotes
        """
        self.quote_api = quote_api
        logger.debug("Initialized QuoteCommands")
    
    async def handle_stock(self, ctx: commands.Context, symbol: Optional[str]) -> None:
        """
        Handle the stock quote command.
        
        Args:
            ctx: Discord context
            symbol: Stock ticker symbol, None when omitted
        """
        if not symbol:
            await ctx.reply(STOCK_USAGE)
            return
        
        symbol = normalize_symbol(symbol)
        valid, error = validate_symbol(symbol)
        if not valid:
            await ctx.reply(f"{error}\n{STOCK_USAGE}")
            return
        
        try:
            quote = await self.quote_api.get_quote(symbol)
        except QuoteNotFound:
            await ctx.reply(f"Could not find data for symbol: {symbol}")
            return
        except (QuoteError, APIError) as e:
            logger.error(f"Error fetching stock data for {symbol}: {e}")
            await ctx.reply(GENERIC_ERROR)
            return
        
        await ctx.reply(embed=create_quote_embed(quote))
        logger.info(f"Successfully sent quote for {symbol}")
    
    async def handle_help(self, ctx: commands.Context) -> None:
        """Reply with the static usage text"""
        await ctx.reply(HELP_TEXT)
