"""Logging setup shared by the web app and the command line.

The level comes from the NGRAM_DRILL_LOG_LEVEL environment variable unless
one is passed explicitly. Defaults to INFO.
"""

import logging
import os
from typing import Optional, Union

LOG_LEVEL_ENV = "NGRAM_DRILL_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_NAME = "ngram_drill"


def resolve_level(level: Optional[Union[str, int]] = None) -> int:
    """Turn a level name or number into a logging level, INFO when invalid."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Attach a single stream handler to the root logger.

    Calling it again only updates the level.
    """
    root = logging.getLogger()
    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(handler)
    root.setLevel(resolve_level(level))
    return root
