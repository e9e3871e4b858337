"""
Discord cog for stock price alerts functionality.
Registers the !alert command group and runs the periodic alert sweep.
"""

from typing import Optional
from discord.ext import commands, tasks
from loguru import logger

from ..api import AsyncAlphaVantageAPI
from ..config import DEFAULT_CHECK_INTERVAL
from .alert_commands import AlertCommands, ALERT_USAGE
from .alert_monitor import AlertMonitor
from .alert_storage import AlertStorage


class StockAlerts(commands.Cog):
    """Discord cog for managing price alerts and sending notifications"""
    
    def __init__(
        self,
        bot: commands.Bot,
        storage: AlertStorage,
        quote_api: AsyncAlphaVantageAPI,
        check_interval: float = DEFAULT_CHECK_INTERVAL
    ):
        """Initialize the stock alerts cog"""
        self.bot = bot
        logger.info("Initializing StockAlerts cog")
        
        self.storage = storage
        self.commands = AlertCommands(storage)
        self.monitor = AlertMonitor(bot, storage, quote_api)
        self.check_interval = check_interval
        self.check_price_alerts.change_interval(seconds=check_interval)
    
    async def cog_load(self):
        """Start the price checker once the cog is registered"""
        self.check_price_alerts.start()
        logger.info(f"Started price alert checker every {self.check_interval}s")
    
    async def cog_unload(self):
        """Clean up when the cog is unloaded"""
        logger.info("Unloading StockAlerts cog")
        self.check_price_alerts.cancel()
    
    @commands.group(name="alert", invoke_without_command=True)
    async def alert(self, ctx):
        """Command group for stock price alerts"""
        logger.debug(f"Alert command invoked by {ctx.author}")
        await ctx.reply(ALERT_USAGE)
    
    @alert.command(name="add")
    async def add_alert(
        self,
        ctx,
        symbol: Optional[str] = None,
        condition: Optional[str] = None,
        price: Optional[str] = None
    ):
        """Add a stock price alert
        
        Example:
        !alert add AAPL > 150    - DM me when AAPL is at or above $150
        !alert add TSLA < 200    - DM me when TSLA is at or below $200
        """
        await self.commands.add_alert(ctx, symbol, condition, price)
    
    @alert.command(name="remove")
    async def remove_alert(self, ctx, symbol: Optional[str] = None):
        """Remove your alert for a symbol
        
        Example:
        !alert remove AAPL
        """
        await self.commands.remove_alert(ctx, symbol)
    
    @alert.command(name="list")
    async def list_alerts(self, ctx):
        """List your active stock price alerts"""
        await self.commands.list_alerts(ctx)
    
    @tasks.loop(seconds=DEFAULT_CHECK_INTERVAL)
    async def check_price_alerts(self):
        """Check current prices against alerts periodically"""
        logger.debug("Running periodic price alert check")
        try:
            await self.monitor.run_sweep()
        except Exception:
            # Keep the loop alive; the next tick retries
            logger.exception("Price alert sweep failed")
    
    @check_price_alerts.before_loop
    async def before_check_price_alerts(self):
        """Wait until the bot is ready before starting the alert loop"""
        logger.debug("Waiting for bot to be ready before starting alert loop")
        await self.bot.wait_until_ready()
        logger.debug("Bot is ready, alert checker starting")
