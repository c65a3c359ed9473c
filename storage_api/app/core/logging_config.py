"""
Logging setup for the Storage API.

Application modules log through ``logging.getLogger(__name__)`` under
the ``storage_api`` namespace.  ``setup_logging`` attaches the console
(and optional file) handler to the root logger once, then applies the
per‑logger levels that keep the MongoDB driver and the uvicorn access
log from drowning out request‑level messages.  Those levels are
re‑applied on every call so tests and reloads see the configured
values.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Loggers owned by libraries that talk to MongoDB.
DRIVER_LOGGERS = ("pymongo", "motor")
ACCESS_LOGGER = "uvicorn.access"


def _level(name: str, default: int = logging.INFO) -> int:
    return getattr(logging, str(name).upper(), default)


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    driver_level: str = "WARNING",
    access_log: bool = True,
) -> Dict[str, int]:
    """Configure application, driver and access logging.

    Parameters
    ----------
    level : str
        Level for the root logger and the ``storage_api`` package.
    logfile : Optional[str]
        Also write records to this file when given.
    driver_level : str
        Level for the ``pymongo``/``motor`` loggers; their command and
        connection‑pool events are noisy below ``WARNING``.
    access_log : bool
        When false the uvicorn access log is silenced.

    Returns the effective level per configured logger name.
    """
    root = logging.getLogger()
    app_level = _level(level)

    if not root.handlers:
        root.setLevel(app_level)
        formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)
        if logfile:
            file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

    levels = {"storage_api": app_level}
    for name in DRIVER_LOGGERS:
        levels[name] = _level(driver_level, logging.WARNING)
    levels[ACCESS_LOGGER] = app_level if access_log else logging.CRITICAL + 1

    for name, value in levels.items():
        logging.getLogger(name).setLevel(value)
    return levels
