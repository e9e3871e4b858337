"""
Process configuration for the bot.
Values come from the environment, with a local .env file loaded first.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv
from loguru import logger

from .api.alpha_vantage import DEFAULT_BASE_URL

# Check interval in seconds
DEFAULT_CHECK_INTERVAL = 30.0

DEFAULT_ALERTS_FILE = "stock_alerts.json"


class ConfigError(ValueError):
    """Raised when required configuration is missing or invalid."""
    pass


def get_env_var(key: str, default: str = "", required: bool = False) -> str:
    """
    Get environment variable with validation.
    
    Args:
        key: Environment variable name
        default: Default value if not set
        required: Whether the variable is required
        
    Returns:
        Environment variable value or default
        
    Raises:
        ConfigError: If the variable is required but not set
    """
    value = os.getenv(key, default)
    if required and not value:
        logger.error(f"Required environment variable {key} is not set!")
        raise ConfigError(f"Required environment variable {key} is not set!")
    return value


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the bot"""
    discord_token: str
    alpha_vantage_api_key: str
    alpha_vantage_base_url: str = DEFAULT_BASE_URL
    alerts_file: str = DEFAULT_ALERTS_FILE
    check_interval: float = DEFAULT_CHECK_INTERVAL
    log_dir: str = "logs"
    log_level: str = "INFO"


def load_settings(dotenv: bool = True) -> Settings:
    """
    Build settings from the environment.
    
    Args:
        dotenv: Whether to load a .env file into the environment first
        
    Returns:
        Populated settings
        
    Raises:
        ConfigError: If the token or API key is missing, or the interval is invalid
    """
    if dotenv:
        # Load variables from .env file into environment variables
        load_dotenv()
    
    raw_interval = get_env_var("ALERT_CHECK_INTERVAL", str(DEFAULT_CHECK_INTERVAL))
    try:
        check_interval = float(raw_interval)
    except ValueError:
        raise ConfigError(f"ALERT_CHECK_INTERVAL must be a number, got {raw_interval!r}")
    if not check_interval > 0:
        raise ConfigError(f"ALERT_CHECK_INTERVAL must be positive, got {raw_interval!r}")
    
    return Settings(
        discord_token=get_env_var("DISCORD_BOT_TOKEN", required=True),
        alpha_vantage_api_key=get_env_var("ALPHA_VANTAGE_API_KEY", required=True),
        alpha_vantage_base_url=get_env_var("ALPHA_VANTAGE_BASE_URL", DEFAULT_BASE_URL),
        alerts_file=get_env_var("ALERTS_FILE", DEFAULT_ALERTS_FILE),
        check_interval=check_interval,
        log_dir=get_env_var("LOG_DIR", "logs"),
        log_level=get_env_var("LOG_LEVEL", "INFO").upper(),
    )
