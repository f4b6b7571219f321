"""Stateless filtering, sorting and range suggestion over aircraft collections.

Nothing here touches storage.  Front ends fetch a collection from the
repository and call :func:`query` every time their search parameters change.

Sort ties on the chosen field are broken by ``id`` ascending (unsaved records
last, in input order), independent of the sort direction.
"""

from __future__ import annotations

import math
from typing import (
    Any,
    Callable,
    Dict,
    FrozenSet,
    Iterable,
    List,
    Literal,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .models import INT_FIELDS, NUMERIC_FIELDS, Aircraft, VariantKind

Number = Union[int, float]
Predicate = Callable[[Aircraft], bool]
SortField = Literal[
    "model",
    "passenger_capacity",
    "cargo_capacity",
    "range_km",
    "fuel_consumption",
    "cruising_speed",
    "max_speed",
    "service_ceiling",
]


class Bound(BaseModel):
    """Inclusive ``[min, max]`` range; ``None`` leaves that side open."""

    model_config = ConfigDict(frozen=True)

    min: Optional[Number] = None
    max: Optional[Number] = None

    @model_validator(mode="before")
    @classmethod
    def from_pair(cls, value: Any) -> Any:
        if isinstance(value, (tuple, list)):
            if len(value) != 2:
                raise ValueError("bound must be a (min, max) pair")
            return {"min": value[0], "max": value[1]}
        return value

    @field_validator("min", "max")
    @classmethod
    def finite(cls, value: Optional[Number]) -> Optional[Number]:
        if value is not None and math.isnan(value):
            raise ValueError("bound must not be NaN")
        return value

    @property
    def is_open(self) -> bool:
        return self.min is None and self.max is None

    def contains(self, value: Number) -> bool:
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True


class AircraftFilters(BaseModel):
    """Search parameters.  Every unset option matches everything."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_contains: Optional[str] = None
    passenger_capacity: Bound = Bound()
    cargo_capacity: Bound = Bound()
    range_km: Bound = Bound()
    fuel_consumption: Bound = Bound()
    cruising_speed: Bound = Bound()
    max_speed: Bound = Bound()
    service_ceiling: Bound = Bound()
    # Empty means every variant, not none.
    variant_kinds: FrozenSet[VariantKind] = frozenset()

    @field_validator("variant_kinds", mode="before")
    @classmethod
    def parse_variants(cls, value: Any) -> Any:
        if value is None:
            return frozenset()
        if isinstance(value, (str, VariantKind)):
            value = [value]
        return frozenset(VariantKind.parse(item) for item in value)

    @classmethod
    def from_console(
        cls,
        model_contains: str = "",
        variant_kinds: Iterable[Any] = (),
        **bounds: Tuple[Number, Number],
    ) -> "AircraftFilters":
        """Build filters from console input where ``-1`` (any negative) means unset."""
        cleaned: Dict[str, Bound] = {}
        for name, (low, high) in bounds.items():
            cleaned[name] = Bound(
                min=None if low is None or low < 0 else low,
                max=None if high is None or high < 0 else high,
            )
        return cls(model_contains=model_contains or None, variant_kinds=variant_kinds, **cleaned)

    def predicates(self) -> List[Predicate]:
        """Return one predicate per option, each passing when its option is unset."""
        needle = (self.model_contains or "").casefold()
        checks: List[Predicate] = [lambda plane: needle in plane.model.casefold()]
        for name in NUMERIC_FIELDS:
            bound: Bound = getattr(self, name)
            checks.append(lambda plane, name=name, bound=bound: bound.contains(getattr(plane, name)))
        kinds = self.variant_kinds
        checks.append(lambda plane: not kinds or plane.variant_kind in kinds)
        return checks

    def matches(self, aircraft: Aircraft) -> bool:
        return all(check(aircraft) for check in self.predicates())


class SortSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: SortField = "model"
    direction: Literal["asc", "desc"] = "asc"

    @field_validator("direction", mode="before")
    @classmethod
    def normalise_direction(cls, value: Any) -> Any:
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in {"ascending", "up"}:
                return "asc"
            if lowered in {"descending", "down"}:
                return "desc"
            return lowered
        return value

    @property
    def descending(self) -> bool:
        return self.direction == "desc"

    def key(self, aircraft: Aircraft) -> Any:
        if self.field == "model":
            return aircraft.model.casefold()
        return getattr(aircraft, self.field)


FilterArg = Union[AircraftFilters, Iterable[AircraftFilters], None]


def _as_filter_list(filters: FilterArg) -> List[AircraftFilters]:
    if filters is None:
        return []
    if isinstance(filters, AircraftFilters):
        return [filters]
    return list(filters)


def _tie_key(indexed: Tuple[int, Aircraft]) -> Tuple[int, int, int]:
    position, plane = indexed
    if plane.id is None:
        return (1, 0, position)
    return (0, plane.id, position)


def query(
    entities: Iterable[Aircraft],
    filters: FilterArg = None,
    sort: Optional[SortSpec] = None,
) -> List[Aircraft]:
    """Return the entities passing every filter, ordered by ``sort``.

    ``filters`` may be a single :class:`AircraftFilters` or several, which are
    combined by logical AND.  Without ``sort`` the input order is kept.
    """
    checks: List[Predicate] = []
    for item in _as_filter_list(filters):
        checks.extend(item.predicates())
    selected = [plane for plane in entities if all(check(plane) for check in checks)]
    if sort is None:
        return selected
    ordered = sorted(enumerate(selected), key=_tie_key)
    # list.sort stays stable with reverse=True, so the id order survives ties
    ordered.sort(key=lambda pair: sort.key(pair[1]), reverse=sort.descending)
    return [plane for _, plane in ordered]


def derive_bounds(
    entities: Iterable[Aircraft],
    variant_kinds: Iterable[Any] = (),
) -> Dict[str, Bound]:
    """Observed ``[min, max]`` per numeric field for the selected variants.

    An empty selection covers every variant; an empty subset yields zero
    bounds.
    """
    kinds = AircraftFilters(variant_kinds=variant_kinds).variant_kinds
    subset: Sequence[Aircraft] = [p for p in entities if not kinds or p.variant_kind in kinds]
    bounds: Dict[str, Bound] = {}
    for name in NUMERIC_FIELDS:
        if not subset:
            zero: Number = 0 if name in INT_FIELDS else 0.0
            bounds[name] = Bound(min=zero, max=zero)
            continue
        values = [getattr(p, name) for p in subset]
        bounds[name] = Bound(min=min(values), max=max(values))
    return bounds


__all__ = ["Bound", "AircraftFilters", "SortSpec", "query", "derive_bounds"]
