"""Application settings used by the catalog core.

Values are resolved in this order: environment variables, then an optional
``airfleet.ini`` in the data directory, then built-in defaults.  Everything is
read at call time so tests can override the environment with ``monkeypatch``.

The INI may contain::

    [database]
    path = /var/lib/airfleet/airfleet.db

    [logging]
    level = DEBUG
"""

from __future__ import annotations

import configparser
import logging
import os
from pathlib import Path
from typing import Optional

DEFAULT_DATA_DIR = "data"
DEFAULT_DB_NAME = "airfleet.db"
INI_NAME = "airfleet.ini"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def data_dir() -> Path:
    return Path(os.environ.get("AIRFLEET_DATA_DIR", DEFAULT_DATA_DIR))


def _read_ini_value(section: str, key: str) -> Optional[str]:
    ini_path = data_dir() / INI_NAME
    if not ini_path.exists():
        return None
    cp = configparser.ConfigParser()
    try:
        cp.read(ini_path)
    except configparser.Error:
        return None
    raw = cp.get(section, key, fallback="").strip()
    return raw or None


def database_path() -> Path:
    """Return the SQLite file backing the catalog."""
    explicit = os.environ.get("AIRFLEET_DB_PATH", "").strip()
    if explicit:
        return Path(explicit)
    from_ini = _read_ini_value("database", "path")
    if from_ini:
        return Path(from_ini)
    return data_dir() / DEFAULT_DB_NAME


def log_level() -> int:
    raw = os.environ.get("AIRFLEET_LOG_LEVEL", "").strip() or _read_ini_value("logging", "level") or "INFO"
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: Optional[int] = None) -> None:
    """Install the root handler used by both front ends."""
    logging.basicConfig(level=level if level is not None else log_level(), format=LOG_FORMAT)


__all__ = ["data_dir", "database_path", "log_level", "configure_logging"]
