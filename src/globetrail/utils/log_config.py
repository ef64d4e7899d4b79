# SPDX-License-Identifier: Apache-2.0
"""Logging configuration driven by ``GLOBETRAIL_VERBOSITY``."""

from __future__ import annotations

import logging
import os

VERBOSITY_ENV = "GLOBETRAIL_VERBOSITY"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "quiet": logging.ERROR,
}


def configure_logging_from_env(default: str = "info") -> int:
    """Configure the ``globetrail`` logger from the environment.

    Accepts ``debug``, ``info`` or ``quiet``; unknown values fall back to
    ``default``. Returns the level that was applied.
    """
    verbosity = (os.environ.get(VERBOSITY_ENV) or default).strip().lower()
    level = _LEVELS.get(verbosity, _LEVELS.get(default, logging.INFO))
    logger = logging.getLogger("globetrail")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    return level
