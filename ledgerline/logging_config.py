"""Logging configuration for Ledgerline.

Sets up console logging for the ``ledgerline`` logger hierarchy.
"""

import logging


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Set up application logging with a console handler.

    Args:
        level: Log level name, e.g. "INFO" or "DEBUG".

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger("ledgerline")
    logger.setLevel(level.upper())

    # Clear any existing handlers (in case this is called multiple times)
    logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level.upper())
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger
