from __future__ import annotations

import itertools
from dataclasses import replace

import pytest
from pydantic import ValidationError

from airfleet.catalog.factory import create_aircraft
from airfleet.catalog.models import Aircraft, VariantKind
from airfleet.catalog.query import AircraftFilters, Bound, SortSpec, derive_bounds, query


def _plane(variant: str, model: str, passengers: int, cargo: float, range_km: int, ident: int | None) -> Aircraft:
    plane = create_aircraft(variant, model, passengers, cargo, range_km, 2.5, 800, 900, 11000)
    return replace(plane, id=ident)


@pytest.fixture()
def fleet() -> list[Aircraft]:
    return [
        _plane("Passenger", "Boeing 737", 180, 20, 3500, 1),
        _plane("Cargo", "Antonov AN-124", 0, 150, 4800, 2),
        _plane("Passenger", "Embraer E175", 100, 5, 3700, 3),
        _plane("Business Jet", "Gulfstream G650", 19, 3, 12960, 4),
        _plane("Fighter", "F-16", 0, 7.7, 4220, 5),
        _plane("Light Plane", "cessna 172", 4, 0.1, 1289, 6),
    ]


def test_no_filters_returns_everything_in_order(fleet: list[Aircraft]) -> None:
    assert query(fleet) == fleet
    assert query(fleet, AircraftFilters()) == fleet


def test_empty_variant_set_matches_all(fleet: list[Aircraft]) -> None:
    assert query(fleet, AircraftFilters(variant_kinds=set())) == fleet


def test_scenario_passenger_range_and_variant() -> None:
    passenger = _plane("Passenger", "Embraer E175", 100, 5, 3700, 1)
    cargo = _plane("Cargo", "Antonov AN-124", 0, 150, 4800, 2)
    filters = AircraftFilters(passenger_capacity=(50, 150), variant_kinds={"Passenger"})
    assert query([passenger, cargo], filters) == [passenger]


def test_model_contains_is_case_insensitive(fleet: list[Aircraft]) -> None:
    result = query(fleet, AircraftFilters(model_contains="CESSNA"))
    assert [p.model for p in result] == ["cessna 172"]
    assert query(fleet, AircraftFilters(model_contains="")) == fleet


def test_bounds_are_inclusive_and_open_sided(fleet: list[Aircraft]) -> None:
    exact = query(fleet, AircraftFilters(range_km=Bound(min=3500, max=3700)))
    assert [p.id for p in exact] == [1, 3]
    lower_only = query(fleet, AircraftFilters(cargo_capacity=Bound(min=20)))
    assert [p.id for p in lower_only] == [1, 2]
    upper_only = query(fleet, AircraftFilters(cargo_capacity=(None, 3)))
    assert [p.id for p in upper_only] == [4, 6]


def test_inverted_bound_matches_nothing(fleet: list[Aircraft]) -> None:
    assert query(fleet, AircraftFilters(range_km=(5000, 1000))) == []


def test_variant_kinds_accept_labels_and_members(fleet: list[Aircraft]) -> None:
    filters = AircraftFilters(variant_kinds=["business jet", VariantKind.FIGHTER])
    assert filters.variant_kinds == frozenset({VariantKind.BUSINESS_JET, VariantKind.FIGHTER})
    assert [p.id for p in query(fleet, filters)] == [4, 5]


def test_unknown_variant_in_filters_is_rejected() -> None:
    with pytest.raises(ValidationError):
        AircraftFilters(variant_kinds=["UFO"])


def test_filter_composition_is_order_independent(fleet: list[Aircraft]) -> None:
    candidates = [
        AircraftFilters(model_contains="e"),
        AircraftFilters(passenger_capacity=(1, 150)),
        AircraftFilters(variant_kinds={"Passenger", "Light Plane"}),
        AircraftFilters(range_km=(1000, 4000), cargo_capacity=(None, 10)),
    ]
    for p, q in itertools.permutations(candidates, 2):
        combined = query(fleet, [p, q])
        assert combined == query(query(fleet, p), q)
        assert combined == query(query(fleet, q), p)
        assert combined == query(fleet, [q, p])


def test_console_sentinels_mean_unbounded(fleet: list[Aircraft]) -> None:
    filters = AircraftFilters.from_console(
        model_contains="",
        passenger_capacity=(-1, 150),
        range_km=(3600, -1),
        variant_kinds=[],
    )
    assert filters.passenger_capacity == Bound(min=None, max=150)
    assert filters.range_km == Bound(min=3600, max=None)
    assert [p.id for p in query(fleet, filters)] == [2, 3, 4, 5]


@pytest.mark.parametrize(
    "field, expected",
    [
        ("model", [2, 1, 6, 3, 5, 4]),
        ("passenger_capacity", [2, 5, 6, 4, 3, 1]),
        ("cargo_capacity", [6, 4, 3, 5, 1, 2]),
        ("range_km", [6, 1, 3, 5, 2, 4]),
    ],
)
def test_sort_ascending(fleet: list[Aircraft], field: str, expected: list[int]) -> None:
    result = query(fleet, sort=SortSpec(field=field))
    assert [p.id for p in result] == expected


def test_sort_descending_keeps_id_tie_break(fleet: list[Aircraft]) -> None:
    result = query(fleet, sort=SortSpec(field="passenger_capacity", direction="descending"))
    assert [p.id for p in result] == [1, 3, 4, 6, 2, 5]


def test_sort_ties_fall_back_to_id(fleet: list[Aircraft]) -> None:
    shuffled = list(reversed(fleet))
    result = query(shuffled, sort=SortSpec(field="max_speed"))
    assert [p.id for p in result] == [1, 2, 3, 4, 5, 6]
    result = query(shuffled, sort=SortSpec(field="max_speed", direction="desc"))
    assert [p.id for p in result] == [1, 2, 3, 4, 5, 6]


def test_unsaved_records_sort_after_saved_ties() -> None:
    saved = _plane("Passenger", "A", 10, 1, 100, 9)
    draft_one = _plane("Passenger", "B", 10, 1, 100, None)
    draft_two = _plane("Passenger", "C", 10, 1, 100, None)
    result = query([draft_one, saved, draft_two], sort=SortSpec(field="range_km"))
    assert result == [saved, draft_one, draft_two]


def test_invalid_sort_field_is_rejected() -> None:
    with pytest.raises(ValidationError):
        SortSpec(field="image_reference")


def test_query_does_not_mutate_input(fleet: list[Aircraft]) -> None:
    snapshot = list(fleet)
    query(fleet, AircraftFilters(model_contains="boeing"), SortSpec(field="range_km", direction="desc"))
    assert fleet == snapshot


def test_derive_bounds_for_selected_variants(fleet: list[Aircraft]) -> None:
    bounds = derive_bounds(fleet, ["Passenger"])
    assert bounds["passenger_capacity"] == Bound(min=100, max=180)
    assert bounds["range_km"] == Bound(min=3500, max=3700)
    assert bounds["cargo_capacity"] == Bound(min=5.0, max=20.0)


def test_derive_bounds_without_selection_covers_all(fleet: list[Aircraft]) -> None:
    bounds = derive_bounds(fleet)
    assert bounds["range_km"] == Bound(min=1289, max=12960)
    assert set(bounds) == {
        "passenger_capacity",
        "cargo_capacity",
        "range_km",
        "fuel_consumption",
        "cruising_speed",
        "max_speed",
        "service_ceiling",
    }


def test_derive_bounds_of_empty_subset_are_zero(fleet: list[Aircraft]) -> None:
    bounds = derive_bounds(fleet, ["Bomber"])
    assert all(bound == Bound(min=0, max=0) for bound in bounds.values())
    assert derive_bounds([])["service_ceiling"] == Bound(min=0, max=0)


def test_derived_bounds_feed_back_into_filters(fleet: list[Aircraft]) -> None:
    bounds = derive_bounds(fleet, ["Passenger"])
    filters = AircraftFilters(variant_kinds={"Passenger"}, **bounds)
    assert [p.id for p in query(fleet, filters)] == [1, 3]


def test_model_contains_whitespace_is_a_plain_substring(fleet: list[Aircraft]) -> None:
    result = query(fleet, AircraftFilters(model_contains=" "))
    assert [p.id for p in result] == [1, 2, 3, 4, 6]
    assert query(fleet, AircraftFilters(model_contains=" 7")) == [fleet[0]]
