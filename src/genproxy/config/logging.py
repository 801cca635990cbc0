"""Logging setup for the command line."""

from __future__ import annotations

import logging
from typing import Final

LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
# httpx and httpcore log every request at INFO/DEBUG
NOISY_LOGGERS: Final[tuple[str, ...]] = ("httpx", "httpcore")


def configure_logging(*, verbose: bool = False, force: bool = False) -> None:
    """Route log records to stderr.

    ``verbose`` lowers the threshold to DEBUG for genproxy itself; HTTP client
    libraries stay at WARNING either way.
    """

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
