from __future__ import annotations
from loguru import logger
from .config import config
import sys

# Remove default and set structured sinks
logger.remove()
logger.configure(extra={"component": "app"})
logger.add(
    sys.stdout,
    level=config.log_level,
    backtrace=False,
    diagnose=False,
    colorize=True,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level}</level> | {extra[component]} | {message}",
)
logger.add(
    config.log_file,
    rotation="10 MB",
    retention="7 days",
    compression="zip",
    level=config.log_level,
    enqueue=True,
    serialize=True,  # JSON lines, one record per event
)

def get_logger(name: str = "app"):
    return logger.bind(component=name)
