"""
Logging configuration.
"""
import logging
import sys

from inboxaudit.config import settings

logger = logging.getLogger("inboxaudit")
logger.setLevel(settings.LOG_LEVEL)

console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(settings.LOG_LEVEL)

formatter = logging.Formatter(
    "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
console_handler.setFormatter(formatter)

if not logger.handlers:
    logger.addHandler(console_handler)
