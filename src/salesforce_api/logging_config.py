from __future__ import annotations

import logging
from typing import Optional

PACKAGE_LOGGER = "salesforce_api"

_FMT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"


def configure_logging(level: Optional[int]) -> None:
    """Show this package's log records at ``level`` (WARNING when None).

    A stderr handler is installed on the root logger only when nothing
    else has configured logging; an embedding application keeps its own
    handlers and root level, and only the package logger is adjusted.
    """
    lvl = level if level is not None else logging.WARNING

    if not logging.getLogger().handlers:
        logging.basicConfig(format=_FMT, datefmt=_DATEFMT)

    logging.getLogger(PACKAGE_LOGGER).setLevel(lvl)

    # dispatch already logs method and URL; urllib3 would repeat them per request
    logging.getLogger("urllib3").setLevel(max(lvl, logging.WARNING))
