"""Great-circle math on a spherical Earth."""

from __future__ import annotations

import math

EARTH_RADIUS_KM = 6371.0
KM_PER_DEGREE = math.pi * EARTH_RADIUS_KM / 180.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres between two points in degrees.

    >>> round(haversine_km(35.6895, 139.6917, 35.6895, 139.6917), 6)
    0.0
    >>> round(haversine_km(0.0, 0.0, 0.0, 1.0), 2)
    111.19
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    a = min(1.0, max(0.0, a))
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def parallel_gap_km(lat_delta: float) -> float:
    """Lower bound on the distance between points `lat_delta` degrees apart in latitude."""
    return abs(lat_delta) * KM_PER_DEGREE


def meridian_gap_km(latitude: float, lon_delta: float) -> float:
    """Lower bound on the distance from a point to any point `lon_delta` degrees away in longitude.

    This is the cos(latitude)-corrected longitude gap measured on the sphere:
    the cross-track distance to the meridian, or the distance to the nearest
    pole once the gap exceeds a quarter turn.
    """
    gap = min(abs(lon_delta), 180.0)
    if gap >= 90.0:
        return (90.0 - abs(latitude)) * KM_PER_DEGREE
    cross = math.sin(math.radians(gap)) * math.cos(math.radians(latitude))
    return EARTH_RADIUS_KM * math.asin(min(1.0, abs(cross)))
