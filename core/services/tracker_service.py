"""Chronology and distance helpers for the photos of an album.

Photos without a timestamp sort after dated ones; distances are only
reported between photos that both carry coordinates.
"""

from __future__ import annotations

from datetime import datetime

from core.geo_math import haversine_km
from core.models import Album, Photo

PERIOD_FMT = "%Y-%m-%d %I:%M%p"


def _date_key(photo: Photo) -> tuple[int, datetime]:
    if photo.datetime is None:
        return (1, datetime.min)
    return (0, photo.datetime)


class TrackerService:
    """Provides ordering and travel-distance utilities for albums."""

    def sort_photos_by_date(self, photos: list[Photo]) -> None:
        """Sort `photos` in place by capture time, keeping ties in insertion order."""
        photos.sort(key=_date_key)

    def distance_km(self, first: Photo, second: Photo) -> float | None:
        """Great-circle distance between two photos, rounded to 0.1 km."""
        a, b = first.location, second.location
        if not (a.has_coordinates and b.has_coordinates):
            return None
        return round(haversine_km(a.latitude, a.longitude, b.latitude, b.longitude), 1)

    def travel_legs(self, album: Album) -> list[tuple[Photo, Photo, float | None]]:
        """Consecutive (from, to, km) legs through the album in chronological order."""
        ordered = sorted(album.photos, key=_date_key)
        return [(a, b, self.distance_km(a, b)) for a, b in zip(ordered, ordered[1:])]

    def total_distance_km(self, album: Album) -> float:
        """Sum of all known leg distances."""
        return round(sum(d for _, _, d in self.travel_legs(album) if d is not None), 1)

    def album_period(self, album: Album) -> tuple[str, str] | None:
        """Earliest and latest capture times formatted for display.

        Returns None when no photo in the album is dated.
        """
        dates = sorted(p.datetime for p in album.photos if p.datetime is not None)
        if not dates:
            return None
        return (_format_period(dates[0]), _format_period(dates[-1]))


def _format_period(value: datetime) -> str:
    # 12-hour clock without a leading zero on the hour, e.g. 2024-11-17 1:16PM
    text = value.strftime(PERIOD_FMT)
    date_part, time_part = text.split(" ")
    return f"{date_part} {time_part.lstrip('0')}"
