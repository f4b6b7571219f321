"""SQLite-backed repository for aircraft catalog records.

Each public method opens its own connection, runs its statement and closes the
handle before returning.  Storage errors never escape: they are logged and
turned into an empty list, ``None`` or ``False`` so an interactive front end
keeps running.
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from airfleet.utils.db import open_connection

from .factory import create_aircraft, revalidate
from .models import Aircraft

logger = logging.getLogger(__name__)

# Row conversion faults count as storage faults, as do I/O errors while
# preparing the database file.
STORAGE_ERRORS = (sqlite3.Error, OSError)
ROW_ERRORS = (KeyError, IndexError, TypeError, ValueError)

COLUMNS: List[str] = [
    "variant",
    "model",
    "passenger_capacity",
    "cargo_capacity",
    "range_km",
    "fuel_consumption",
    "cruising_speed",
    "max_speed",
    "service_ceiling",
    "image_reference",
]


def _row_to_aircraft(row: sqlite3.Row) -> Aircraft:
    data: Dict[str, Any] = dict(row)
    aircraft = create_aircraft(
        data["variant"],
        data["model"] or "",
        data["passenger_capacity"] or 0,
        data["cargo_capacity"] or 0.0,
        data["range_km"] or 0,
        data["fuel_consumption"] or 0.0,
        data["cruising_speed"] or 0.0,
        data["max_speed"] or 0.0,
        data["service_ceiling"] or 0,
        image_reference=data["image_reference"],
    )
    return replace(aircraft, id=int(data["id"]))


class AircraftRepository:
    """Persistence helper owning the authoritative aircraft collection."""

    def __init__(self, db_path: Optional[str | Path] = None) -> None:
        self._db_path = Path(db_path) if db_path else None
        self._ensure_schema()

    @property
    def db_path(self) -> Optional[Path]:
        return self._db_path

    # ------------------------------------------------------------------
    # Schema management
    # ------------------------------------------------------------------
    def _ensure_schema(self) -> None:
        try:
            with open_connection(self._db_path) as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS aircraft (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        variant TEXT NOT NULL,
                        model TEXT NOT NULL,
                        passenger_capacity INTEGER DEFAULT 0,
                        cargo_capacity REAL DEFAULT 0,
                        range_km INTEGER DEFAULT 0,
                        fuel_consumption REAL DEFAULT 0,
                        cruising_speed REAL DEFAULT 0,
                        max_speed REAL DEFAULT 0,
                        service_ceiling INTEGER DEFAULT 0,
                        image_reference TEXT
                    )
                    """
                )
                conn.commit()
            logger.info("Checked/created 'aircraft' table in %s", self._db_path or "default database")
        except STORAGE_ERRORS:
            logger.exception("Error creating aircraft table in %s", self._db_path or "default database")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def list_all(self) -> List[Aircraft]:
        """Return every stored record in storage order, freshly read."""
        try:
            with open_connection(self._db_path) as conn:
                rows = conn.execute("SELECT * FROM aircraft ORDER BY id").fetchall()
            planes = [_row_to_aircraft(row) for row in rows]
        except STORAGE_ERRORS:
            logger.exception("Error reading aircraft from DB")
            return []
        except ROW_ERRORS:
            logger.exception("Malformed aircraft row in DB")
            return []
        logger.debug("Loaded %d aircraft from DB", len(planes))
        return planes

    def get(self, aircraft_id: int) -> Optional[Aircraft]:
        try:
            with open_connection(self._db_path) as conn:
                row = conn.execute(
                    "SELECT * FROM aircraft WHERE id = ?", (int(aircraft_id),)
                ).fetchone()
            return _row_to_aircraft(row) if row else None
        except STORAGE_ERRORS:
            logger.exception("Error reading aircraft ID %s from DB", aircraft_id)
        except ROW_ERRORS:
            logger.exception("Malformed aircraft row for ID %s", aircraft_id)
        return None

    def count(self) -> int:
        try:
            with open_connection(self._db_path) as conn:
                return int(conn.execute("SELECT COUNT(*) FROM aircraft").fetchone()[0])
        except STORAGE_ERRORS:
            logger.exception("Error counting aircraft in DB")
            return 0

    def find_id_by_model(self, model: str) -> Optional[int]:
        """Return the id of the first record whose model matches, ignoring case.

        Model names are not unique; only the first match in storage order is
        reported.
        """
        wanted = (model or "").casefold()
        try:
            with open_connection(self._db_path) as conn:
                rows = conn.execute("SELECT id, model FROM aircraft ORDER BY id").fetchall()
        except STORAGE_ERRORS:
            logger.exception("Error looking up aircraft model '%s'", model)
            return None
        for row in rows:
            if (row["model"] or "").casefold() == wanted:
                return int(row["id"])
        return None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def _checked(self, aircraft: Aircraft) -> Optional[Aircraft]:
        """Re-run factory validation so every stored row can be read back."""
        try:
            return revalidate(aircraft)
        except ValueError as exc:
            logger.warning("Rejected aircraft '%s': %s", aircraft.model, exc)
            return None

    def add(self, aircraft: Aircraft) -> Optional[Aircraft]:
        """Persist ``aircraft`` as a new record and return it with its new id.

        Any ``id`` already set on the input is ignored.  Returns ``None``
        without writing if the record fails validation, or if storage fails.
        """
        checked = self._checked(aircraft)
        if checked is None:
            return None
        aircraft = checked
        payload = aircraft.to_record()
        placeholders = ", ".join("?" for _ in COLUMNS)
        try:
            with open_connection(self._db_path) as conn:
                cur = conn.execute(
                    f"INSERT INTO aircraft ({', '.join(COLUMNS)}) VALUES ({placeholders})",
                    [payload.get(col) for col in COLUMNS],
                )
                aircraft_id = cur.lastrowid
                conn.commit()
        except STORAGE_ERRORS:
            logger.exception("Error adding aircraft '%s' to DB", aircraft.model)
            return None
        logger.info(
            "Aircraft '%s' added to DB (type: %s, ID: %s)",
            aircraft.model,
            aircraft.variant_label,
            aircraft_id,
        )
        return replace(aircraft, id=int(aircraft_id))

    def create(self, aircraft: Aircraft) -> bool:
        return self.add(aircraft) is not None

    def update(self, aircraft: Aircraft) -> bool:
        """Overwrite every field of the record addressed by ``aircraft.id``.

        Returns ``False`` without touching storage when the id is unknown or
        the record fails validation.
        """
        if aircraft.id is None:
            logger.warning("Update attempted for unsaved aircraft '%s'", aircraft.model)
            return False
        checked = self._checked(aircraft)
        if checked is None:
            return False
        aircraft = checked
        payload = aircraft.to_record()
        assignments = ", ".join(f"{col} = ?" for col in COLUMNS)
        values = [payload.get(col) for col in COLUMNS]
        values.append(int(aircraft.id))
        try:
            with open_connection(self._db_path) as conn:
                cur = conn.execute(f"UPDATE aircraft SET {assignments} WHERE id = ?", values)
                affected = cur.rowcount
                conn.commit()
        except STORAGE_ERRORS:
            logger.exception("Error updating aircraft '%s' (ID: %s) in DB", aircraft.model, aircraft.id)
            return False
        if affected > 0:
            logger.info("Aircraft '%s' (ID: %s) updated in DB", aircraft.model, aircraft.id)
            return True
        logger.warning("Update attempted for non-existent aircraft ID: %s", aircraft.id)
        return False

    def delete(self, aircraft_id: int) -> bool:
        """Remove a record permanently.  ``True`` only if a row was deleted."""
        try:
            with open_connection(self._db_path) as conn:
                cur = conn.execute("DELETE FROM aircraft WHERE id = ?", (int(aircraft_id),))
                affected = cur.rowcount
                conn.commit()
        except STORAGE_ERRORS:
            logger.exception("Error deleting aircraft ID %s from DB", aircraft_id)
            return False
        if affected > 0:
            logger.info("Aircraft with ID %s deleted from DB", aircraft_id)
            return True
        logger.warning("Delete attempted for non-existent aircraft ID: %s", aircraft_id)
        return False


__all__ = ["AircraftRepository", "COLUMNS"]
