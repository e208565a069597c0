"""Shared application logger."""
import logging
import sys
from typing import Optional

LOGGER_NAME = "arithmetic_calculator"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger: logging.Logger = logging.getLogger(LOGGER_NAME)

_handler: Optional[logging.Handler] = None


def configure_logging(verbose: bool = False) -> None:
    """
    Send the shared logger's records to the current sys.stderr.

    Calling this again replaces the handler installed by the previous call.

    :param bool verbose: Emit DEBUG records (diagnostic trace) when True
    """
    global _handler

    level = logging.DEBUG if verbose else logging.WARNING
    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    _handler.setLevel(level)
    logger.addHandler(_handler)
    logger.setLevel(level)
