"""Immutable 2-D k-d tree over reference cities with nearest-city search.

Nodes split on latitude at even depths and on longitude at odd depths. The
tree is built once from the full city list and never modified, so a single
instance can be shared between any number of readers.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import math

from core.geo_math import haversine_km, meridian_gap_km, parallel_gap_km
from core.models import City

LATITUDE_AXIS = 0
LONGITUDE_AXIS = 1


@dataclass(frozen=True)
class CityNode:
    """One tree node: a city plus the subtrees on each side of its split."""

    city: City
    left: CityNode | None = None
    right: CityNode | None = None


@dataclass(frozen=True)
class NearestCity:
    """Result of a nearest-city query."""

    city: City
    distance_km: float

    @property
    def label(self) -> str:
        """Place name formatted as `<city name>, <country>`."""
        return self.city.label


def _axis_value(city: City, axis: int) -> float:
    return city.latitude if axis == LATITUDE_AXIS else city.longitude


def _normalize_longitude(longitude: float) -> float:
    """Map any longitude into [-180, 180)."""
    if -180.0 <= longitude < 180.0:
        return longitude
    return (longitude + 180.0) % 360.0 - 180.0


def _build(cities: list[City], depth: int) -> CityNode | None:
    if not cities:
        return None
    axis = depth % 2
    ordered = sorted(cities, key=lambda c: _axis_value(c, axis))
    median = len(ordered) // 2
    return CityNode(
        city=ordered[median],
        left=_build(ordered[:median], depth + 1),
        right=_build(ordered[median + 1 :], depth + 1),
    )


def _far_side_bound_km(node: CityNode, axis: int, lat: float, lon: float) -> float:
    """Smallest possible distance from the query to any city beyond the node's split."""
    if axis == LATITUDE_AXIS:
        return parallel_gap_km(lat - node.city.latitude)
    split = node.city.longitude
    if lon < split:
        # Far side spans [split, 180]; it can also be reached westwards across the antimeridian.
        gap = min(split - lon, lon + 180.0)
    else:
        gap = min(lon - split, 180.0 - lon)
    return meridian_gap_km(lat, gap)


class CityIndex:
    """Balanced k-d tree answering nearest-city queries in logarithmic time."""

    def __init__(self, root: CityNode | None, size: int) -> None:
        self._root = root
        self._size = size

    @classmethod
    def build(cls, cities: Iterable[City]) -> CityIndex:
        """Build the tree by recursive median split on alternating axes."""
        city_list = list(cities)
        return cls(_build(city_list, 0), len(city_list))

    @property
    def root(self) -> CityNode | None:
        """Root node, or None for an empty index."""
        return self._root

    def __len__(self) -> int:
        return self._size

    def depth(self) -> int:
        """Number of levels in the tree (0 when empty)."""

        def _depth(node: CityNode | None) -> int:
            if node is None:
                return 0
            return 1 + max(_depth(node.left), _depth(node.right))

        return _depth(self._root)

    def nearest(self, latitude: float, longitude: float) -> NearestCity | None:
        """Return the city closest to the given point by haversine distance.

        Ties keep the first city found in traversal order. Returns None when
        the index is empty.
        """
        if self._root is None:
            return None
        lat = float(latitude)
        lon = _normalize_longitude(float(longitude))
        best_city = self._root.city
        best_dist = haversine_km(lat, lon, best_city.latitude, best_city.longitude)

        def _search(node: CityNode | None, depth: int) -> None:
            nonlocal best_city, best_dist
            if node is None:
                return
            dist = haversine_km(lat, lon, node.city.latitude, node.city.longitude)
            if dist < best_dist:
                best_city, best_dist = node.city, dist

            axis = depth % 2
            query_value = lat if axis == LATITUDE_AXIS else lon
            if query_value < _axis_value(node.city, axis):
                near, far = node.left, node.right
            else:
                near, far = node.right, node.left

            _search(near, depth + 1)
            if far is not None and _far_side_bound_km(node, axis, lat, lon) < best_dist:
                _search(far, depth + 1)

        _search(self._root, 0)
        return NearestCity(city=best_city, distance_km=best_dist)


def linear_nearest(cities: Iterable[City], latitude: float, longitude: float) -> NearestCity | None:
    """Brute-force nearest city; the reference the tree search must agree with."""
    best: NearestCity | None = None
    for city in cities:
        dist = haversine_km(latitude, longitude, city.latitude, city.longitude)
        if best is None or dist < best.distance_km:
            best = NearestCity(city=city, distance_km=dist)
    return best


def expected_depth(size: int) -> int:
    """Depth of a perfectly balanced tree holding `size` nodes."""
    return math.ceil(math.log2(size + 1)) if size > 0 else 0
