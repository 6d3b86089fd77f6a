"""
Logging configuration for the application.

``setup_logging`` attaches a console handler to the root logger. It only
does so once, so calling ``create_app`` repeatedly (as the tests do) does
not duplicate output.
"""

import logging


def setup_logging(level="INFO"):
    """Configure the root logger at ``level`` (a level name, any case)."""
    logger = logging.getLogger()
    if logger.handlers:
        return

    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)
