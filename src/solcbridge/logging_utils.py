"""Logging setup for command-line use.

Library modules only create loggers; handlers are attached here, by the
CLI, so embedding applications keep control of their own logging.
"""

import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV_VAR = "SOLCBRIDGE_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a stderr handler to the solcbridge logger.

    Level comes from the argument, then $SOLCBRIDGE_LOG_LEVEL, then WARNING.
    Calling this twice does not add a second handler.
    """
    level_name = (level or os.getenv(LOG_LEVEL_ENV_VAR) or "WARNING").upper()
    logger = logging.getLogger("solcbridge")
    logger.setLevel(getattr(logging, level_name, logging.WARNING))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
        logger.addHandler(handler)
    return logger
