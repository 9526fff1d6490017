"""Logging setup shared by sheet_records entrypoints."""

from __future__ import annotations

import logging
import logging.config
import os

from sheet_records.paths import repo_file

# googleapiclient logs every discovery fetch at DEBUG
NOISY_LIBRARY_LOGGERS = ("googleapiclient.discovery", "googleapiclient.discovery_cache", "urllib3")
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_LEVEL = "INFO"


def resolve_level(level: str | None = None) -> int:
    """An explicit level wins over LOG_LEVEL; unknown names fall back to INFO."""
    name = (level or os.getenv("LOG_LEVEL") or DEFAULT_LEVEL).strip().upper()
    value = logging.getLevelName(name)
    if isinstance(value, int):
        return value
    logging.getLogger(__name__).warning("Unknown log level %r, using %s", name, DEFAULT_LEVEL)
    return logging.INFO


def quiet_library_loggers(floor: int = logging.INFO) -> None:
    for name in NOISY_LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(max(floor, logging.INFO))


def configure_logging(level: str | None = None) -> logging.Logger:
    """Configure the root logger from logging.ini, or a stderr handler without one."""
    root = logging.getLogger()
    ini_path = repo_file("logging.ini")
    if ini_path.is_file():
        logging.config.fileConfig(str(ini_path), disable_existing_loggers=False)
    elif not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    resolved = resolve_level(level)
    root.setLevel(resolved)
    quiet_library_loggers(resolved)
    return root
