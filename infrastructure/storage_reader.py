"""Resilient parser for the line-oriented diary format.

The reader walks the file once with an explicit state machine:

* `NO_CURRENT_TRIP` until the first trip record is seen,
* `TRIP_ACTIVE` while album and photo records attach to the current trip,
* `TRIP_CORRUPTED` after a trip record could not be turned into a trip; every
  following non-trip line is skipped until the next trip record.

A damaged trip record therefore only loses its own children. Lines that are
not in the diary format at all (unknown markers, records missing their
required fields, photos outside an album) abort the whole load with a
`FileFormatError`. Photo lines whose values are malformed are reported as
diagnostics and skipped without touching the enclosing trip.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from loguru import logger

from core.errors import FileFormatError, PhotoError, TripError
from core.models import NO_CAPTION, Trip
from core.services.interfaces import (
    SEVERITY_ERROR,
    SEVERITY_WARNING,
    Diagnostic,
    LoadResult,
)
from core.services.photo_service import PhotoService
from core.services.trip_service import TripService
from infrastructure.record_codec import decode, split_fields
from infrastructure.storage_writer import ALBUM_MARKER, PHOTO_MARKER, TRIP_MARKER
from infrastructure.utils import parse_record_coordinates, parse_record_datetime

MIN_TRIP_FIELDS = 3
MIN_ALBUM_FIELDS = 2
MIN_PHOTO_FIELDS = 4


class ReaderState(Enum):
    """Where the parser stands relative to the current trip record."""

    NO_CURRENT_TRIP = "no-current-trip"
    TRIP_ACTIVE = "trip-active"
    TRIP_CORRUPTED = "trip-corrupted"


class DiaryReader:
    """Parses diary lines into trips while collecting non-fatal diagnostics."""

    def __init__(self, file_path: str, photo_service: PhotoService | None = None) -> None:
        self._file_path = file_path
        self._photos = photo_service or PhotoService()
        self._reset()

    def _reset(self) -> None:
        self.state = ReaderState.NO_CURRENT_TRIP
        self._trip_service = TripService()
        self._current: Trip | None = None
        self._album_open = False
        self._corrupted_at: Diagnostic | None = None
        self._skipped = 0
        self._result = LoadResult()

    def parse(self, lines: Iterable[str]) -> LoadResult:
        """Parse `lines` and return the trips found plus diagnostics.

        Raises:
            FileFormatError: a structural error makes the file unreadable.
        """
        self._reset()
        for line_number, raw in enumerate(lines, start=1):
            line = raw.rstrip("\r\n")
            if not line.strip():
                continue
            self._handle_line(line, line_number)
        self._flush()
        self._close_corruption()
        return self._result

    # State transitions -------------------------------------------------

    def _handle_line(self, line: str, line_number: int) -> None:
        parts = split_fields(line)
        marker = parts[0]

        if marker == TRIP_MARKER:
            self._on_trip(parts, line, line_number)
            return
        if marker not in (ALBUM_MARKER, PHOTO_MARKER):
            raise FileFormatError(
                self._file_path, line, line_number, reason=f"Unknown marker: {marker}"
            )
        if self.state is ReaderState.TRIP_CORRUPTED:
            self._skipped += 1
            return
        if marker == ALBUM_MARKER:
            self._on_album(parts, line, line_number)
        else:
            self._on_photo(parts, line, line_number)

    def _on_trip(self, parts: list[str], line: str, line_number: int) -> None:
        self._flush()
        self._close_corruption()

        if len(parts) < MIN_TRIP_FIELDS:
            self._corrupt(line, line_number, "Trip record is missing required fields")
            return
        name = decode(parts[1])
        description = decode(parts[2])
        try:
            trip = self._trip_service.create_trip(name, description)
        except TripError as ex:
            self._corrupt(line, line_number, f"Failed to load trip '{name}': {ex}")
            return

        self._current = trip
        self._album_open = False
        self.state = ReaderState.TRIP_ACTIVE

    def _on_album(self, parts: list[str], line: str, line_number: int) -> None:
        if self.state is not ReaderState.TRIP_ACTIVE:
            raise FileFormatError(
                self._file_path, line, line_number, reason="Album marker found without a trip"
            )
        if len(parts) < MIN_ALBUM_FIELDS:
            raise FileFormatError(
                self._file_path, line, line_number, reason="Album record is missing its label"
            )
        self._album_open = True

    def _on_photo(self, parts: list[str], line: str, line_number: int) -> None:
        if self.state is not ReaderState.TRIP_ACTIVE:
            raise FileFormatError(
                self._file_path, line, line_number, reason="Photo marker found without a trip"
            )
        if not self._album_open or self._current is None or self._current.album is None:
            raise FileFormatError(
                self._file_path, line, line_number, reason="Photo marker found without an album"
            )
        if len(parts) < MIN_PHOTO_FIELDS:
            raise FileFormatError(
                self._file_path, line, line_number, reason="Photo record is missing required fields"
            )

        fields = [decode(p) for p in parts[1:4]]
        file_path, photo_name, caption = fields
        raw_time = parts[4] if len(parts) > 4 else ""
        raw_name = parts[5] if len(parts) > 5 else ""
        raw_lat = parts[6] if len(parts) > 6 else ""
        raw_lon = parts[7] if len(parts) > 7 else ""
        try:
            taken_at = parse_record_datetime(raw_time)
            coords = parse_record_coordinates(raw_lat, raw_lon)
            photo = self._photos.create_photo(file_path, photo_name, caption or NO_CAPTION)
        except ValueError as ex:
            self._report(line, line_number, f"Invalid photo record: {ex}")
            return
        except PhotoError as ex:
            self._report(line, line_number, str(ex))
            return

        photo.datetime = taken_at
        if coords is not None:
            photo.location = self._photos.build_location(coords[0], coords[1], decode(raw_name))
        self._current.album.add_photo(photo)

    # Bookkeeping -------------------------------------------------------

    def _flush(self) -> None:
        if self._current is not None:
            self._result.trips.append(self._current)
        self._current = None
        self._album_open = False
        self.state = ReaderState.NO_CURRENT_TRIP

    def _corrupt(self, line: str, line_number: int, message: str) -> None:
        self.state = ReaderState.TRIP_CORRUPTED
        self._corrupted_at = Diagnostic(line_number, line, message, SEVERITY_WARNING)
        self._skipped = 0

    def _close_corruption(self) -> None:
        diag = self._corrupted_at
        if diag is None:
            return
        if self._skipped:
            diag.message += f" ({self._skipped} dependent line(s) skipped)"
        logger.warning("{}:{} {}", self._file_path, diag.line_number, diag.message)
        self._result.diagnostics.append(diag)
        self._corrupted_at = None
        self._skipped = 0

    def _report(self, line: str, line_number: int, message: str) -> None:
        logger.error("{}:{} {}", self._file_path, line_number, message)
        self._result.diagnostics.append(Diagnostic(line_number, line, message, SEVERITY_ERROR))
