"""Package-local logging utilities.

The package emits no logs unless the host application configures logging.
The CLI opts in through ``--log-level`` or ``WLLS_LOG_LEVEL``.
"""

import logging
import os
from typing import Optional

LOGGER_NAME = "wlls"
LOG_LEVEL_ENV = "WLLS_LOG_LEVEL"

logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())


def configure_logging(level: Optional[str] = None, default: str = "") -> None:
    """Configure package logging for CLI diagnostics.

    The level is taken from ``level``, then ``WLLS_LOG_LEVEL``, then
    ``default``. If none is set, the package logger stays silent.
    """
    env_level = os.getenv(LOG_LEVEL_ENV, "")
    raw_level = level or env_level or default
    resolved_level = raw_level.strip()
    pkg_logger = logging.getLogger(LOGGER_NAME)
    # Reset handlers so repeated CLI calls never write to a stale stream.
    pkg_logger.handlers = []

    if not resolved_level:
        pkg_logger.addHandler(logging.NullHandler())
        pkg_logger.setLevel(logging.NOTSET)
        pkg_logger.propagate = False
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(getattr(logging, resolved_level.upper(), logging.WARNING))
    pkg_logger.propagate = False
