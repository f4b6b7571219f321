"""Service layer shared by the console and windowed front ends."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .factory import available_variants, create_aircraft
from .models import Aircraft
from .query import AircraftFilters, Bound, FilterArg, SortSpec, derive_bounds, query
from .repository import AircraftRepository

logger = logging.getLogger(__name__)

_EDITABLE = (
    "model",
    "passenger_capacity",
    "cargo_capacity",
    "range_km",
    "fuel_consumption",
    "cruising_speed",
    "max_speed",
    "service_ceiling",
)


class FleetService:
    """High-level API consumed by front ends."""

    def __init__(
        self,
        db_path: Optional[str | Path] = None,
        *,
        repository: Optional[AircraftRepository] = None,
    ) -> None:
        self.repository = repository or AircraftRepository(db_path)

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------
    def planes(self) -> List[Aircraft]:
        return self.repository.list_all()

    def variants(self) -> List[str]:
        return available_variants()

    def add_plane(self, aircraft: Aircraft) -> Optional[Aircraft]:
        return self.repository.add(aircraft)

    def register_plane(self, variant_name: str, model: str, **attributes: Any) -> Optional[Aircraft]:
        """Build through the factory and store in one step."""
        aircraft = create_aircraft(
            variant_name,
            model,
            attributes.get("passenger_capacity", 0),
            attributes.get("cargo_capacity", 0.0),
            attributes.get("range_km", 0),
            attributes.get("fuel_consumption", 0.0),
            attributes.get("cruising_speed", 0.0),
            attributes.get("max_speed", 0.0),
            attributes.get("service_ceiling", 0),
            image_reference=attributes.get("image_reference"),
        )
        return self.repository.add(aircraft)

    def update_plane(self, aircraft: Aircraft) -> bool:
        return self.repository.update(aircraft)

    def edit_plane(self, aircraft_id: int, **changes: Any) -> Optional[Aircraft]:
        """Apply ``changes`` to a stored record and persist it.

        The record is rebuilt through the factory so changing the variant
        re-applies the passenger rule.  Returns ``None`` when the id is unknown
        or the write fails.
        """
        current = self.repository.get(aircraft_id)
        if current is None:
            logger.warning("Edit requested for non-existent aircraft ID: %s", aircraft_id)
            return None
        unknown = set(changes) - set(_EDITABLE) - {"variant", "image_reference"}
        if unknown:
            raise TypeError(f"Unsupported aircraft fields: {', '.join(sorted(unknown))}")
        merged: Dict[str, Any] = {name: getattr(current, name) for name in _EDITABLE}
        merged.update({k: v for k, v in changes.items() if k in _EDITABLE})
        rebuilt = create_aircraft(
            changes.get("variant", current.variant_kind),
            merged["model"],
            merged["passenger_capacity"],
            merged["cargo_capacity"],
            merged["range_km"],
            merged["fuel_consumption"],
            merged["cruising_speed"],
            merged["max_speed"],
            merged["service_ceiling"],
            image_reference=changes.get("image_reference", current.image_reference),
        )
        rebuilt = replace(rebuilt, id=current.id)
        return rebuilt if self.repository.update(rebuilt) else None

    def remove_plane(self, aircraft_id: int) -> bool:
        return self.repository.delete(aircraft_id)

    # ------------------------------------------------------------------
    # Lookups and aggregates
    # ------------------------------------------------------------------
    def plane_id_by_model(self, model: str) -> Optional[int]:
        return self.repository.find_id_by_model(model)

    def find_plane_by_model(self, model: str) -> Optional[Aircraft]:
        wanted = (model or "").casefold()
        for plane in self.planes():
            if plane.model.casefold() == wanted:
                return plane
        return None

    def total_capacity(self) -> int:
        return sum(plane.passenger_capacity for plane in self.planes())

    def total_cargo_capacity(self) -> float:
        return sum((plane.cargo_capacity for plane in self.planes()), 0.0)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def search(self, filters: FilterArg = None, sort: Optional[SortSpec] = None) -> List[Aircraft]:
        return query(self.planes(), filters, sort)

    def search_by_model(self, keyword: str) -> List[Aircraft]:
        return self.search(AircraftFilters(model_contains=keyword))

    def suggest_bounds(self, variant_kinds: Iterable[Any] = ()) -> Dict[str, Bound]:
        return derive_bounds(self.planes(), variant_kinds)


__all__ = ["FleetService"]
