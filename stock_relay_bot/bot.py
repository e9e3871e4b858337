"""
Main Discord bot application.
Builds the bot from settings, wires its components and runs it.
"""

import sys
import discord
from discord.ext import commands

from .api import AsyncAlphaVantageAPI
from .alerts import AlertStorage, AlertStorageError
from .alerts.cog import StockAlerts
from .config import ConfigError, Settings, load_settings
from .logging_setup import get_logger, setup_logging
from .stocks import StockCommands

# Create module logger
logger = get_logger("bot")


class StockRelayBot(commands.Bot):
    """Bot that answers quote commands and delivers price alerts"""

    def __init__(self, settings: Settings, storage: AlertStorage):
        # Setup bot with intents
        intents = discord.Intents.default()
        intents.message_content = True
        super().__init__(command_prefix="!", intents=intents, help_command=None)

        self.settings = settings
        self.storage = storage
        self.quote_api = AsyncAlphaVantageAPI(
            api_key=settings.alpha_vantage_api_key,
            base_url=settings.alpha_vantage_base_url,
        )

    async def setup_hook(self):
        """Register cogs before connecting to the gateway"""
        logger.debug("Loading cogs...")
        await self.add_cog(StockCommands(self, self.quote_api))
        logger.info("Stock commands loaded!")
        await self.add_cog(
            StockAlerts(self, self.storage, self.quote_api, self.settings.check_interval)
        )
        logger.info("Stock alerts loaded!")

    async def on_ready(self):
        """Called when bot is ready and connected to Discord"""
        logger.info(f"Bot is connected! Logged in as {self.user}")
        logger.info(f"Bot is in {len(self.guilds)} servers")
        for guild in self.guilds:
            logger.info(f"- {guild.name} (id: {guild.id})")

    async def on_command_error(self, ctx, error):
        """Log command failures and keep technical detail out of the chat"""
        if isinstance(error, commands.CommandNotFound):
            logger.debug(f"Ignoring unknown command from {ctx.author}: {ctx.message.content!r}")
            return
        if isinstance(error, commands.UserInputError):
            logger.debug(f"Bad input from {ctx.author}: {error}")
            await ctx.reply("Sorry, I couldn't understand that command. Type `!help` for usage.")
            return

        logger.opt(exception=error).error(f"Error in command {ctx.command} from {ctx.author}")
        await ctx.reply("Something went wrong while handling that command. Please try again later.")


def create_bot(settings: Settings) -> StockRelayBot:
    """
    Build the bot and load persisted alerts.

    Raises:
        AlertStorageError: If the alerts file exists but cannot be loaded
    """
    storage = AlertStorage(settings.alerts_file)
    storage.load()
    return StockRelayBot(settings, storage)


def main() -> None:
    try:
        settings = load_settings()
    except ConfigError as e:
        logger.critical(f"ERROR: {e}")
        sys.exit(1)

    setup_logging(settings.log_dir, settings.log_level)

    try:
        bot = create_bot(settings)
    except AlertStorageError as e:
        logger.critical(f"Refusing to start with a corrupt alerts file: {e}")
        sys.exit(1)

    logger.info("Starting bot...")
    try:
        bot.run(settings.discord_token)
    except discord.LoginFailure as e:
        logger.critical(f"Failed to start bot: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
