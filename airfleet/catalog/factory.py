"""Variant factory for :class:`~airfleet.catalog.models.Aircraft`.

Front ends hand over the raw values collected from a form or prompt; this
module resolves the variant, coerces the numbers and applies the
variant-specific passenger rule before any entity exists.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Any, List, Optional, Tuple

from .models import (
    Aircraft,
    InvalidAttributeError,
    VariantKind,
)

logger = logging.getLogger(__name__)

AVAILABLE_VARIANTS: Tuple[str, ...] = tuple(kind.label for kind in VariantKind)


def available_variants() -> List[str]:
    """Return the supported variant labels in menu order."""
    return list(AVAILABLE_VARIANTS)


def carries_passengers(kind: VariantKind) -> bool:
    return VariantKind.parse(kind).carries_passengers


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------

# SQLite INTEGER columns hold signed 64-bit values.
INT_MIN = -(2**63)
INT_MAX = 2**63 - 1


def _coerce_float(field: str, value: Any, *, non_negative: bool = False) -> float:
    if isinstance(value, bool):
        raise InvalidAttributeError(field, value, "expected a number")
    try:
        number = float(value.strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidAttributeError(field, value, "expected a number") from None
    if not math.isfinite(number):
        raise InvalidAttributeError(field, value, "must be finite")
    if non_negative and number < 0:
        raise InvalidAttributeError(field, value, "must not be negative")
    return number


def _coerce_int(field: str, value: Any, *, non_negative: bool = False) -> int:
    if isinstance(value, bool):
        raise InvalidAttributeError(field, value, "expected a whole number")
    if isinstance(value, int):
        number = value
    else:
        try:
            number = int(value.strip()) if isinstance(value, str) else None
        except ValueError:
            number = None
        if number is None:
            as_float = _coerce_float(field, value, non_negative=non_negative)
            if not as_float.is_integer():
                raise InvalidAttributeError(field, value, "expected a whole number")
            number = int(as_float)
    if non_negative and number < 0:
        raise InvalidAttributeError(field, value, "must not be negative")
    if not INT_MIN <= number <= INT_MAX:
        raise InvalidAttributeError(field, value, "out of range")
    return number


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


def create_aircraft(
    variant_name: Any,
    model: str,
    passenger_capacity: Any,
    cargo_capacity: Any,
    range_km: Any,
    fuel_consumption: Any,
    cruising_speed: Any,
    max_speed: Any,
    service_ceiling: Any,
    image_reference: Optional[str] = None,
) -> Aircraft:
    """Build an unidentified :class:`Aircraft` of the named variant.

    ``variant_name`` is matched case-insensitively.  Cargo and military
    variants always get ``passenger_capacity == 0`` whatever was requested.

    Raises :class:`UnknownVariantError` for an unsupported name and
    :class:`InvalidAttributeError` for malformed numbers.
    """
    kind = VariantKind.parse(variant_name)
    if carries_passengers(kind):
        passengers = _coerce_int("passenger_capacity", passenger_capacity, non_negative=True)
    else:
        if passenger_capacity not in (None, 0, "", "0"):
            logger.debug(
                "Ignoring passenger capacity %r for %s '%s'", passenger_capacity, kind.label, model
            )
        passengers = 0
    return Aircraft(
        variant_kind=kind,
        model="" if model is None else str(model),
        passenger_capacity=passengers,
        cargo_capacity=_coerce_float("cargo_capacity", cargo_capacity, non_negative=True),
        range_km=_coerce_int("range_km", range_km, non_negative=True),
        fuel_consumption=_coerce_float("fuel_consumption", fuel_consumption, non_negative=True),
        cruising_speed=_coerce_float("cruising_speed", cruising_speed),
        max_speed=_coerce_float("max_speed", max_speed),
        service_ceiling=_coerce_int("service_ceiling", service_ceiling),
        image_reference=image_reference,
    )


def revalidate(aircraft: Aircraft) -> Aircraft:
    """Run an already built record back through the factory, keeping its id.

    Raises the same errors as :func:`create_aircraft`.
    """
    rebuilt = create_aircraft(
        aircraft.variant_kind,
        aircraft.model,
        aircraft.passenger_capacity,
        aircraft.cargo_capacity,
        aircraft.range_km,
        aircraft.fuel_consumption,
        aircraft.cruising_speed,
        aircraft.max_speed,
        aircraft.service_ceiling,
        image_reference=aircraft.image_reference,
    )
    return replace(rebuilt, id=aircraft.id)


__all__ = [
    "AVAILABLE_VARIANTS",
    "available_variants",
    "carries_passengers",
    "create_aircraft",
    "revalidate",
]
