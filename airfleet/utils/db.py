"""Light weight SQLite connection helpers.

Every caller gets a fresh connection and is responsible for closing it; no
handle is shared between calls.  ``open_connection`` wraps that pattern in a
context manager so the handle is released on every exit path.
"""
from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from . import app_settings

logger = logging.getLogger(__name__)


def connect(path: Optional[Path] = None) -> sqlite3.Connection:
    """Create a SQLite connection with row factory configured."""
    target = Path(path) if path is not None else app_settings.database_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(target))
    conn.row_factory = sqlite3.Row
    logger.debug("Opened SQLite connection: %s", target)
    return conn


@contextmanager
def open_connection(path: Optional[Path] = None) -> Iterator[sqlite3.Connection]:
    conn = connect(path)
    try:
        yield conn
    finally:
        conn.close()


__all__ = ["connect", "open_connection"]
