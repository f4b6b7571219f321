"""Aircraft catalog core: entity, variant factory, repository and queries."""

from .factory import AVAILABLE_VARIANTS, available_variants, create_aircraft, revalidate
from .models import Aircraft, InvalidAttributeError, UnknownVariantError, VariantKind
from .query import AircraftFilters, Bound, SortSpec, derive_bounds, query
from .repository import AircraftRepository
from .services import FleetService

__all__ = [
    "AVAILABLE_VARIANTS",
    "Aircraft",
    "AircraftFilters",
    "AircraftRepository",
    "Bound",
    "FleetService",
    "InvalidAttributeError",
    "SortSpec",
    "UnknownVariantError",
    "VariantKind",
    "available_variants",
    "create_aircraft",
    "derive_bounds",
    "query",
    "revalidate",
]
