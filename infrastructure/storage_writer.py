"""Serialize trips, albums and photos into the line-oriented diary format.

Layout, one record per line::

    T | <name> | <description>
    A | <trip name>
    P | <file path> | <name> | <caption> | <datetime> | <location name> | <lat> | <lon>
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TextIO

from core.errors import PhotoSaveError
from core.models import NO_CAPTION, Photo, Trip
from infrastructure.record_codec import encode, join_fields
from infrastructure.utils import format_record_coordinate, format_record_datetime

TRIP_MARKER = "T"
ALBUM_MARKER = "A"
PHOTO_MARKER = "P"


def format_trip_line(trip: Trip) -> str:
    """Return the `T` record for `trip`."""
    return join_fields(TRIP_MARKER, encode(trip.name), encode(trip.description or ""))


def format_album_line(trip: Trip) -> str:
    """Return the `A` record; the trip name is a label only."""
    return join_fields(ALBUM_MARKER, encode(trip.name))


def format_photo_line(photo: Photo) -> str:
    """Return the `P` record for `photo`."""
    location = photo.location
    if location.has_coordinates:
        name = location.location_name or ""
        lat, lon = location.latitude, location.longitude
    else:
        name, lat, lon = "", None, None
    caption = "" if photo.caption in (None, NO_CAPTION) else photo.caption
    return join_fields(
        PHOTO_MARKER,
        encode(photo.file_path),
        encode(photo.photo_name),
        encode(caption),
        format_record_datetime(photo.datetime),
        encode(name),
        format_record_coordinate(lat),
        format_record_coordinate(lon),
    )


class DiaryWriter:
    """Writes trip records to a text stream."""

    def __init__(self, file_path: str) -> None:
        self._file_path = file_path

    def iter_lines(self, trips: Iterable[Trip]) -> Iterable[str]:
        """Yield every record line for `trips` in order."""
        for trip in trips:
            yield format_trip_line(trip)
            if trip.album is None:
                continue
            yield format_album_line(trip)
            for photo in trip.album.photos:
                try:
                    line = format_photo_line(photo)
                except (AttributeError, TypeError, ValueError) as ex:
                    raise PhotoSaveError(
                        getattr(photo, "photo_name", "unknown"), self._file_path
                    ) from ex
                yield line

    def write(self, stream: TextIO, trips: Iterable[Trip]) -> int:
        """Write all records to `stream`; return the number of lines written."""
        count = 0
        for line in self.iter_lines(trips):
            stream.write(line)
            stream.write("\n")
            count += 1
        return count
