"""
Root logger setup.

Modules log through `logging.getLogger(__name__)` with `key=value` messages;
this only decides the level and format once per process.
"""

from __future__ import annotations

import logging

from . import config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=(level or config.log_level()), format=LOG_FORMAT)
