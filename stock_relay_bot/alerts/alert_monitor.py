"""
Price monitoring for stock alerts.
Handles checking current prices against alert conditions and notifying owners.
"""

from typing import Dict, List, Tuple
import discord
from discord.ext import commands
from loguru import logger

from ..api import AsyncAlphaVantageAPI, APIError, QuoteError
from ..utils.embed_utilities import create_triggered_alert_embed
from .alert_model import PriceAlert
from .alert_storage import AlertStorage


class AlertMonitor:
    """Monitor stock prices and trigger alerts"""
    
    def __init__(self, bot: commands.Bot, storage: AlertStorage, quote_api: AsyncAlphaVantageAPI):
        """
        Initialize the alert monitor.
        
        Args:
            bot: Discord bot instance, used to reach alert owners
            storage: Alert storage instance
            quote_api: Client used to fetch current prices
        """
        self.bot = bot
        self.storage = storage
        self.quote_api = quote_api
        logger.info("Initialized AlertMonitor")
    
    async def check_alerts(self) -> List[Tuple[PriceAlert, float]]:
        """
        Check all alerts against current prices.
        
        Returns:
            List of (alert, current_price) tuples for triggered alerts
        """
        alerts = self.storage.snapshot()
        if not alerts:
            return []
            
        triggered = []
        
        # Group alerts by symbol to fetch each price once per sweep
        symbol_alerts: Dict[str, List[PriceAlert]] = {}
        for alert in alerts:
            symbol_alerts.setdefault(alert.symbol, []).append(alert)
        
        for symbol, alert_list in symbol_alerts.items():
            try:
                current_price = await self.quote_api.get_price(symbol)
            except (QuoteError, APIError) as e:
                logger.warning(f"Could not get current price for {symbol}: {e}")
                continue
            except Exception:
                logger.exception(f"Unexpected error checking alerts for {symbol}")
                continue
                
            logger.debug(f"Current price for {symbol}: ${current_price}")
            
            for alert in alert_list:
                if alert.check_triggered(current_price):
                    triggered.append((alert, current_price))
        
        return triggered
    
    async def handle_triggered_alerts(self, triggered_alerts: List[Tuple[PriceAlert, float]]) -> int:
        """
        Notify owners of triggered alerts and remove them.
        
        Returns:
            Number of alerts removed from storage
        """
        removed = 0
        for alert, current_price in triggered_alerts:
            # Skip alerts the owner removed or replaced while prices were fetched
            if self.storage.get_alert(alert.owner_id, alert.symbol) != alert:
                logger.debug(f"Alert {alert.symbol} for {alert.owner_id} no longer stored, skipping")
                continue
            
            await self._send_alert_notification(alert, current_price)
            
            if await self.storage.discard(alert):
                removed += 1
                
        return removed
    
    async def run_sweep(self) -> int:
        """Run one sweep: check every alert and handle the ones that fired"""
        triggered = await self.check_alerts()
        if triggered:
            logger.info(f"{len(triggered)} price alerts triggered")
        return await self.handle_triggered_alerts(triggered)
    
    async def _send_alert_notification(self, alert: PriceAlert, current_price: float) -> bool:
        """Send a direct message to the owner of a triggered alert"""
        embed = create_triggered_alert_embed(alert, current_price)
        
        try:
            user = self.bot.get_user(int(alert.owner_id))
            if user is None:
                user = await self.bot.fetch_user(int(alert.owner_id))
            
            await user.send(embed=embed)
            logger.info(f"Sent alert notification for {alert.symbol} to user {alert.owner_id}")
            return True
            
        except (discord.HTTPException, ValueError) as e:
            logger.error(f"Could not notify user {alert.owner_id} about {alert.symbol}: {e}")
            return False
