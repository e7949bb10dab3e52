"""Logging setup for the ``certgate`` command.

Library code only calls ``logging.getLogger("certgate.<area>")``. The CLI
attaches one stream handler to the ``certgate`` logger so startup banners,
API request lines, and collaborator tracebacks reach the terminal.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER_NAME = "certgate-cli"


def configure_logging(level: str | int = "info") -> logging.Logger:
    """Attach the CLI stream handler to the ``certgate`` logger.

    Calling it again only updates the level.
    """
    if isinstance(level, str):
        level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)

    logger = logging.getLogger("certgate")
    logger.setLevel(level)
    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
