"""
Logger Setup Module
Console logging shared by the server and CLI mode
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(level="INFO"):
    """
    Configure the application logger
    Modules log through children of "ipwhere" (ipwhere.geo, ipwhere.api, ...)

    Args:
        level: Level name or number

    Returns:
        The application logger
    """
    logger = logging.getLogger("ipwhere")
    logger.setLevel(level if isinstance(level, int) else str(level).upper())

    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(console_handler)

    return logger
