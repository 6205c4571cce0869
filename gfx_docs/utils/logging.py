"""Logging for gfxdoc runs.

All modules log under the ``gfx_docs`` logger tree. Console output goes
to stderr because ``gfxdoc generate`` writes JSON to stdout by default.
"""

import logging
import sys
from typing import Optional

LOGGER_NAME = "gfx_docs"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _add_handler(
    logger: logging.Logger,
    handler: logging.Handler,
    level: int,
    formatter: logging.Formatter,
) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def setup_logging(
    level: str = "INFO",
    log_format: str = DEFAULT_LOG_FORMAT,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Point the ``gfx_docs`` logger at stderr and, optionally, a file.

    Called once by the CLI group and again by ``generate --verbose``, so
    earlier handlers are dropped before new ones are added.

    Args:
        level: Level name from the config's ``logging.level``. Unknown
            names fall back to INFO.
        log_format: Format string from the config's ``logging.format``.
        log_file: Extra log file from the config's ``logging.file``.

    Returns:
        The ``gfx_docs`` logger.
    """
    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.handlers.clear()

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    package_logger.setLevel(numeric_level)
    formatter = logging.Formatter(log_format)

    _add_handler(
        package_logger, logging.StreamHandler(sys.stderr), numeric_level, formatter
    )
    if log_file:
        _add_handler(
            package_logger, logging.FileHandler(log_file), numeric_level, formatter
        )

    package_logger.debug("gfxdoc logging at %s", logging.getLevelName(numeric_level))
    return package_logger
