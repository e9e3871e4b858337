from loguru import logger
import sys
import os


def setup_logging(log_dir: str = "logs", level: str = "INFO") -> None:
    """Configure loguru sinks for the bot process"""
    # Create logs directory if it doesn't exist
    os.makedirs(log_dir, exist_ok=True)

    logger.remove()  # Remove default handler

    # Console handler at the configured level
    logger.add(sys.stderr, level=level)

    # File handler with more verbosity for debugging
    logger.add(
        os.path.join(log_dir, "bot_{time:YYYY-MM-DD}.log"),
        rotation="1 day",    # New file is created each day
        retention="1 week",  # Logs are kept for 1 week
        level="DEBUG",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} - {message}",
        backtrace=True,
        diagnose=True
    )


def get_logger(name):
    """Get a logger with the specified name"""
    return logger.bind(name=name)
