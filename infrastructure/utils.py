"""Utilities for record datetime and coordinate formatting.

This module centralizes how values are rendered into and parsed back from the
diary file so that the writer and the reader can depend on a single behavior.
Parsers raise `ValueError` on malformed input; callers decide whether that is
fatal.
"""

from __future__ import annotations

from datetime import datetime

RECORD_DT_FMT = "%Y-%m-%d %H:%M:%S"

# Old diary files stored (0, 0) when a photo had no GPS fix.
LEGACY_NO_COORDINATES = (0.0, 0.0)


def parse_record_datetime(value: str | None) -> datetime | None:
    """Parse a timestamp written with RECORD_DT_FMT; empty means no timestamp.

    Raises:
        ValueError: the value is not empty and does not match the pattern.
    """
    if value is None or not value.strip():
        return None
    return datetime.strptime(value.strip(), RECORD_DT_FMT)


def format_record_datetime(dt: datetime | None) -> str:
    """Format datetime for the diary file; empty string when None."""
    return dt.strftime(RECORD_DT_FMT) if dt else ""


def parse_record_coordinates(
    latitude: str | None, longitude: str | None
) -> tuple[float, float] | None:
    """Parse a stored latitude/longitude pair.

    Returns None when either field is missing or empty, and for the legacy
    (0, 0) "no fix" marker.

    Raises:
        ValueError: a field is present but not a number.
    """
    if not latitude or not longitude or not latitude.strip() or not longitude.strip():
        return None
    coords = (float(latitude), float(longitude))
    if coords == LEGACY_NO_COORDINATES:
        return None
    return coords


def format_record_coordinate(value: float | None) -> str:
    """Render one coordinate with full float precision; empty when absent."""
    return "" if value is None else repr(float(value))
