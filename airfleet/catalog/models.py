"""Domain model for the aircraft catalog.

A single :class:`Aircraft` shape covers every variant; the behaviour that used
to live in per-type subclasses is keyed off :class:`VariantKind` instead.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class VariantKind(str, Enum):
    """Closed set of aircraft variants.  Values are the display labels."""

    PASSENGER = "Passenger"
    CARGO = "Cargo"
    BUSINESS_JET = "Business Jet"
    LIGHT_PLANE = "Light Plane"
    FIGHTER = "Fighter"
    BOMBER = "Bomber"
    ATTACK_AIRCRAFT = "Attack Aircraft"
    INTERCEPTOR = "Interceptor"

    @property
    def label(self) -> str:
        return self.value

    @property
    def carries_passengers(self) -> bool:
        match self:
            case VariantKind.PASSENGER | VariantKind.BUSINESS_JET | VariantKind.LIGHT_PLANE:
                return True
            case (
                VariantKind.CARGO
                | VariantKind.FIGHTER
                | VariantKind.BOMBER
                | VariantKind.ATTACK_AIRCRAFT
                | VariantKind.INTERCEPTOR
            ):
                return False
            case _:
                raise UnknownVariantError(self)

    @classmethod
    def parse(cls, name: Any) -> "VariantKind":
        """Resolve ``name`` case-insensitively.

        Accepts the display label ("Business Jet"), the compact tag
        ("BusinessJet") and the member name ("BUSINESS_JET").
        """
        if isinstance(name, cls):
            return name
        key = _variant_key(name)
        kind = _LOOKUP.get(key) if key else None
        if kind is None:
            raise UnknownVariantError(name)
        return kind


def _variant_key(name: Any) -> str:
    if not isinstance(name, str):
        return ""
    return name.strip().casefold()


# Label ("business jet"), compact tag ("businessjet") and member name
# ("business_jet"); nothing else is normalised.
_LOOKUP: Dict[str, VariantKind] = {}
for _kind in VariantKind:
    _LOOKUP[_kind.value.casefold()] = _kind
    _LOOKUP[_kind.value.replace(" ", "").casefold()] = _kind
    _LOOKUP[_kind.name.casefold()] = _kind
del _kind


class UnknownVariantError(ValueError):
    """Raised when a variant name is outside the supported set."""

    def __init__(self, name: Any) -> None:
        self.name = name
        super().__init__(f"Unknown aircraft variant: {name!r}")


class InvalidAttributeError(ValueError):
    """Raised when a numeric attribute cannot be accepted."""

    def __init__(self, field: str, value: Any, reason: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field} {value!r}: {reason}")


INT_FIELDS: Tuple[str, ...] = ("passenger_capacity", "range_km", "service_ceiling")
FLOAT_FIELDS: Tuple[str, ...] = ("cargo_capacity", "fuel_consumption", "cruising_speed", "max_speed")

# Order matches the sort menu of the front ends.
NUMERIC_FIELDS: Tuple[str, ...] = (
    "passenger_capacity",
    "cargo_capacity",
    "range_km",
    "fuel_consumption",
    "cruising_speed",
    "max_speed",
    "service_ceiling",
)


@dataclass(slots=True, frozen=True)
class Aircraft:
    """One catalog record.  ``id`` stays ``None`` until the repository stores it."""

    variant_kind: VariantKind
    model: str
    passenger_capacity: int = 0
    cargo_capacity: float = 0.0
    range_km: int = 0
    fuel_consumption: float = 0.0
    cruising_speed: float = 0.0
    max_speed: float = 0.0
    service_ceiling: int = 0
    image_reference: Optional[str] = None
    id: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.variant_kind, VariantKind):
            object.__setattr__(self, "variant_kind", VariantKind.parse(self.variant_kind))
        # Cargo and military variants never carry passengers, however built.
        if not self.variant_kind.carries_passengers and self.passenger_capacity != 0:
            object.__setattr__(self, "passenger_capacity", 0)

    @property
    def variant_label(self) -> str:
        return self.variant_kind.label

    def to_record(self) -> Dict[str, Any]:
        """Return a mapping keyed by column name, ready for SQLite."""
        payload = asdict(self)
        # ``id`` is assigned by storage and bound separately
        payload.pop("id", None)
        payload.pop("variant_kind", None)
        payload["variant"] = self.variant_kind.label
        return payload


__all__ = [
    "Aircraft",
    "VariantKind",
    "UnknownVariantError",
    "InvalidAttributeError",
    "INT_FIELDS",
    "FLOAT_FIELDS",
    "NUMERIC_FIELDS",
]
