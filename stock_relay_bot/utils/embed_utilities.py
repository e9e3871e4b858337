"""
Utility functions for creating standardized Discord embeds across the bot.
"""

import discord
from datetime import datetime
from typing import List, Tuple

from .format_utilities import format_price

from ..api.alpha_vantage import Quote
from ..alerts.alert_model import PriceAlert, Direction


def create_quote_embed(quote: Quote, timestamp: bool = True) -> discord.Embed:
    """
    Create an embed for a stock quote.
    
    Args:
        quote: Quote to display
        timestamp: Whether to add the current timestamp to the embed
        
    Returns:
        Embed with price, change and change percent, colored by change direction
    """
    color = discord.Color.blue()
    try:
        color = discord.Color.green() if float(quote.change) >= 0 else discord.Color.red()
    except ValueError:
        pass
    
    embed = discord.Embed(
        title=quote.symbol,
        color=color,
        timestamp=datetime.now() if timestamp else None
    )
    embed.add_field(name="Price", value=f"${format_price(quote.price)}", inline=True)
    embed.add_field(
        name="Change",
        value=f"{quote.change} ({quote.change_percent})",
        inline=True
    )
    return embed


def create_alert_embed(
    title: str,
    description: str,
    fields: List[Tuple[str, str, bool]] = None,
    color: discord.Color = None,
    timestamp: bool = True,
    footer_text: str = None
) -> discord.Embed:
    """
    Create a standardized alert/notification embed.
    
    Args:
        title: Title for the embed
        description: Description text
        fields: List of (name, value, inline) tuples for fields
        color: Discord color for the embed (defaults to blue)
        timestamp: Whether to add the current timestamp
        footer_text: Optional footer text
        
    Returns:
        Formatted Discord embed for alerts and notifications
    """
    embed = discord.Embed(
        title=title,
        description=description,
        color=color or discord.Color.blue(),
        timestamp=datetime.now() if timestamp else None
    )
    
    if fields:
        for name, value, inline in fields:
            embed.add_field(name=name, value=value, inline=inline)
    
    if footer_text:
        embed.set_footer(text=footer_text)
    
    return embed


def create_triggered_alert_embed(alert: PriceAlert, current_price: float) -> discord.Embed:
    """Create the direct-message embed for an alert that fired"""
    if alert.direction is Direction.ABOVE:
        title = f"📈 {alert.symbol} Price Alert Triggered!"
        color = discord.Color.green()
    else:
        title = f"📉 {alert.symbol} Price Alert Triggered!"
        color = discord.Color.red()
    
    return create_alert_embed(
        title=title,
        description=(
            f"{alert.symbol} is now ${format_price(current_price)} "
            f"(alert: {alert.direction.label} ${format_price(alert.price)})"
        ),
        fields=[
            ("Current Price", f"${format_price(current_price)}", True),
            ("Condition", f"{alert.direction.value} ${format_price(alert.price)}", True),
        ],
        color=color,
        footer_text="This alert has been removed. Use !alert add to set a new one."
    )
