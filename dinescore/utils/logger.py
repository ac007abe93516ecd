"""
Logging configuration for the DineScore service.
"""
import sys
import os
import logging
from dinescore.utils.config import get_settings


def setup_logger():
    """Configure the application logger using Python's standard logging."""
    settings = get_settings()

    # Resolve log level
    log_level = getattr(logging, str(settings.log_level).upper(), logging.INFO)

    logger = logging.getLogger("dinescore")
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplicate logs
    logger.handlers.clear()
    logger.propagate = False

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    # File handler for production
    if settings.environment == "production":
        try:
            os.makedirs("logs", exist_ok=True)
            file_handler = logging.FileHandler("logs/app.log")
        except OSError as e:
            logger.warning(f"File logging unavailable, continuing with console only: {e}")
        else:
            file_handler.setLevel(log_level)
            file_handler.setFormatter(console_formatter)
            logger.addHandler(file_handler)

    return logger


# Initialize logger
app_logger = setup_logger()
