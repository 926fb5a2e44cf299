"""
log_utils.py
Shared logger setup for the subscription manager.
"""

from __future__ import annotations

import logging
import os

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def get_logger(name: str, level: str | None = None) -> logging.Logger:
    """
    Return a logger with a single stream handler attached.
    The level comes from SUBMGR_LOG_LEVEL unless given explicitly.
    """
    logger = logging.getLogger(name)

    # Only add handler once (Streamlit re-imports on every rerun)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    try:
        logger.setLevel((level or os.getenv("SUBMGR_LOG_LEVEL", "INFO")).upper())
    except ValueError:
        # unknown level name
        logger.setLevel(logging.INFO)
    return logger
