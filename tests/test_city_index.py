from __future__ import annotations

import dataclasses
import random

import pytest

from core.models import City
from core.services.city_index import CityIndex, expected_depth, linear_nearest
from infrastructure.city_repository import CsvCityRepository

from conftest import BUNDLED_CITIES


def random_cities(rng: random.Random, count: int) -> list[City]:
    return [
        City(f"City {i}", "Nowhere", rng.uniform(-85.0, 85.0), rng.uniform(-180.0, 179.999))
        for i in range(count)
    ]


def test_empty_index() -> None:
    index = CityIndex.build([])
    assert len(index) == 0
    assert index.depth() == 0
    assert index.nearest(10.0, 10.0) is None


@pytest.mark.parametrize("size", [1, 2, 3, 7, 8, 100, 1000])
def test_tree_is_balanced(size: int) -> None:
    index = CityIndex.build(random_cities(random.Random(size), size))
    assert len(index) == size
    assert index.depth() == expected_depth(size)


def test_root_is_latitude_median_and_children_split_on_longitude() -> None:
    cities = [
        City("South", "X", -10.0, 0.0),
        City("Middle", "X", 0.0, 50.0),
        City("North", "X", 10.0, -50.0),
        City("Far north", "X", 20.0, 5.0),
        City("Far south", "X", -20.0, 7.0),
    ]
    root = CityIndex.build(cities).root
    assert root.city.name == "Middle"
    # Left half (South, Far south) is split on longitude: 0.0 < 7.0
    assert root.left.city.name == "Far south"
    assert root.left.left.city.name == "South"


def test_build_does_not_reorder_callers_list() -> None:
    cities = random_cities(random.Random(3), 20)
    before = list(cities)
    CityIndex.build(cities)
    assert cities == before


def test_tree_nodes_are_immutable(tokyo: City) -> None:
    root = CityIndex.build([tokyo]).root
    with pytest.raises(dataclasses.FrozenInstanceError):
        root.left = root  # type: ignore[misc]


def test_query_at_city_returns_it_with_zero_distance(tokyo: City, singapore: City) -> None:
    index = CityIndex.build([tokyo, singapore])
    found = index.nearest(singapore.latitude, singapore.longitude)
    assert found.city == singapore
    assert found.distance_km == pytest.approx(0.0, abs=1e-6)


def test_tokyo_example(tokyo: City, singapore: City) -> None:
    found = CityIndex.build([tokyo, singapore]).nearest(35.6937, 139.7013)
    assert found.label == "Tokyo, Japan"
    assert found.distance_km < 2.0


def test_matches_linear_scan_on_random_points() -> None:
    rng = random.Random(1234)
    cities = random_cities(rng, 400)
    index = CityIndex.build(cities)
    for _ in range(500):
        lat, lon = rng.uniform(-90.0, 90.0), rng.uniform(-180.0, 180.0)
        tree = index.nearest(lat, lon)
        brute = linear_nearest(cities, lat, lon)
        assert tree.distance_km == pytest.approx(brute.distance_km, abs=1e-9)


def test_matches_linear_scan_near_antimeridian_and_poles() -> None:
    rng = random.Random(99)
    cities = random_cities(rng, 60)
    index = CityIndex.build(cities)
    queries = [(lat, lon) for lat in (-89.0, -70.0, 0.0, 70.0, 89.0) for lon in (-179.9, 179.9)]
    for lat, lon in queries:
        tree = index.nearest(lat, lon)
        brute = linear_nearest(cities, lat, lon)
        assert tree.distance_km == pytest.approx(brute.distance_km, abs=1e-9)


def test_wraps_across_antimeridian() -> None:
    cities = [City("East edge", "X", 0.0, 179.5), City("Inland", "X", 0.0, 170.0)]
    cities += [City(f"West {i}", "X", 0.0, -100.0 + i) for i in range(5)]
    found = CityIndex.build(cities).nearest(0.0, -179.5)
    assert found.city.name == "East edge"


def test_bundled_dataset_agrees_with_linear_scan() -> None:
    cities = CsvCityRepository().load(BUNDLED_CITIES)
    index = CityIndex.build(cities)
    rng = random.Random(7)
    for _ in range(200):
        lat, lon = rng.uniform(-60.0, 70.0), rng.uniform(-180.0, 180.0)
        assert index.nearest(lat, lon).distance_km == pytest.approx(
            linear_nearest(cities, lat, lon).distance_km, abs=1e-9
        )
