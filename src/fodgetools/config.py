from __future__ import annotations

import logging
import os
from typing import Optional

# Width of the momentum bitmasks. Diagrams with more legs are refused.
FODGE_MAX_LEGS = int(os.environ.get("FODGE_MAX_LEGS", "32"))
FODGE_LOG_LEVEL = os.environ.get("FODGE_LOG_LEVEL", "WARNING")
FODGE_CACHE_GENERATION = os.environ.get("FODGE_CACHE_GENERATION", "1") != "0"


def configure_logging(level: Optional[str | int] = None) -> None:
    """
    Attach a stderr handler to the fodgetools logger.

    level defaults to $FODGE_LOG_LEVEL. Calling this twice does not add a
    second handler.
    """
    if level is None:
        level = FODGE_LOG_LEVEL
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger("fodgetools")
    logger.setLevel(level)
    if not any(getattr(h, "_fodgetools", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        handler._fodgetools = True
        logger.addHandler(handler)
