"""
Discord command handlers for managing stock price alerts.
Handles user interactions for creating, viewing, and removing alerts.
"""

from typing import List, Optional, Tuple
from discord.ext import commands
from loguru import logger

from ..api import normalize_symbol
from ..utils.format_utilities import format_price
from ..utils.validation_utilities import (
    ValidationError,
    validate_choice,
    validate_positive_number,
    validate_symbol,
)
from .alert_model import PriceAlert, Direction
from .alert_storage import AlertStorage

ALERT_USAGE = "Use `!alert add`, `!alert remove` or `!alert list` to manage your stock alerts."
ADD_USAGE = (
    "Usage: `!alert add <symbol> <condition> <price>` where condition is `>` or `<`. "
    "Example: `!alert add AAPL > 150`"
)
REMOVE_USAGE = "Usage: `!alert remove <symbol>`. Example: `!alert remove AAPL`"
LIST_HEADER = "**Your active alerts:**"

# Discord rejects messages longer than this
MESSAGE_LIMIT = 2000


def parse_alert_args(
    symbol: Optional[str],
    condition: Optional[str],
    price: Optional[str]
) -> Tuple[str, Direction, float]:
    """
    Validate the arguments of ``!alert add``.
    
    Returns:
        Tuple of (symbol, direction, price)
        
    Raises:
        ValidationError: If any argument is missing or invalid
    """
    if not symbol or not condition or not price:
        raise ValidationError(ADD_USAGE)
    
    symbol = normalize_symbol(symbol)
    valid, error = validate_symbol(symbol)
    if not valid:
        raise ValidationError(f"{error}\n{ADD_USAGE}")
    
    valid, error = validate_choice(condition, [d.value for d in Direction])
    if not valid:
        raise ValidationError(f"{error}\n{ADD_USAGE}")
    
    valid, error = validate_positive_number(price)
    if not valid:
        raise ValidationError(f"{error}\n{ADD_USAGE}")
    
    return symbol, Direction(condition), float(price)


def split_message(header: str, lines: List[str], limit: int = MESSAGE_LIMIT) -> List[str]:
    """Join lines under a header, starting a new message whenever one would exceed the limit"""
    messages = []
    current = header
    for line in lines:
        if len(current) + 1 + len(line) > limit:
            messages.append(current)
            current = line
        else:
            current = f"{current}\n{line}"
    messages.append(current)
    return messages


class AlertCommands:
    """Command handlers for stock price alerts"""
    
    def __init__(self, storage: AlertStorage):
        """
        Initialize alert commands.
        
        Args:
            storage: Alert storage instance
        """
        self.storage = storage
        logger.debug("Initialized AlertCommands")
    
    async def add_alert(
        self,
        ctx: commands.Context,
        symbol: Optional[str],
        condition: Optional[str],
        price: Optional[str]
    ) -> None:
        """Add or replace the caller's alert for a symbol"""
        logger.info(f"{ctx.author} adding alert: {symbol} {condition} {price}")
        
        try:
            symbol, direction, threshold = parse_alert_args(symbol, condition, price)
        except ValidationError as e:
            logger.debug(f"Rejected alert add from {ctx.author}: {e}")
            await ctx.reply(str(e))
            return
        
        alert = PriceAlert(
            owner_id=str(ctx.author.id),
            symbol=symbol,
            price=threshold,
            direction=direction,
        )
        await self.storage.add(alert)
        logger.info(f"Alert added for {symbol} by user {alert.owner_id}")
        
        await ctx.reply(
            f"✅ Alert set: you'll get a DM when {symbol} goes {direction.label} ${format_price(threshold)}"
        )
    
    async def remove_alert(self, ctx: commands.Context, symbol: Optional[str]) -> None:
        """Remove the caller's alert for a symbol"""
        logger.debug(f"{ctx.author} attempting to remove alert for {symbol}")
        
        if not symbol:
            await ctx.reply(REMOVE_USAGE)
            return
        
        symbol = normalize_symbol(symbol)
        owner_id = str(ctx.author.id)
        
        if await self.storage.remove(owner_id, symbol):
            logger.info(f"Removed alert for {symbol} of user {owner_id}")
            await ctx.reply(f"🗑️ Removed your alert for {symbol}.")
        else:
            logger.debug(f"No alert for {symbol} of user {owner_id}")
            await ctx.reply(f"No alert found for {symbol}.")
    
    async def list_alerts(self, ctx: commands.Context) -> None:
        """List the caller's alerts"""
        logger.debug(f"{ctx.author} listing alerts")
        
        alerts = self.storage.list_alerts(str(ctx.author.id))
        if not alerts:
            await ctx.reply("You have no active alerts.")
            return
        
        lines = [alert.describe() for alert in alerts]
        for message in split_message(LIST_HEADER, lines):
            await ctx.reply(message)
