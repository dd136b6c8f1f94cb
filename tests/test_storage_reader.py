from __future__ import annotations

from datetime import datetime

import pytest

from core.errors import FileFormatError
from core.models import NO_CAPTION
from core.services.interfaces import SEVERITY_ERROR, SEVERITY_WARNING
from core.services.photo_service import PhotoService
from infrastructure.geocoder import OfflineReverseGeocoder
from infrastructure.storage_reader import DiaryReader, ReaderState


def parse(text: str, photo_service: PhotoService | None = None):
    return DiaryReader("trips.txt", photo_service).parse(text.splitlines(keepends=True))


def test_valid_file() -> None:
    result = parse(
        "T | Test Trip | Test Description\n"
        "A | Test Trip\n"
        "P | test.jpg | Photo Name | Caption | 2023-01-01 12:00:00\n"
    )
    assert [t.name for t in result.trips] == ["Test Trip"]
    trip = result.trips[0]
    assert trip.description == "Test Description"
    photo = trip.album.photos[0]
    assert photo.photo_name == "Photo Name"
    assert photo.caption == "Caption"
    assert photo.datetime == datetime(2023, 1, 1, 12, 0, 0)
    assert not photo.location.has_coordinates
    assert result.diagnostics == []


def test_escaped_delimiters() -> None:
    result = parse("T | Trip\\|With\\|Pipes | Description\\|With\\|Pipes\nA | Trip\\|With\\|Pipes\n")
    trip = result.trips[0]
    assert trip.name == "Trip|With|Pipes"
    assert trip.description == "Description|With|Pipes"


def test_trip_without_album_line_still_gets_empty_album() -> None:
    result = parse("T | Solo | none\n")
    assert result.trips[0].album is not None
    assert len(result.trips[0].album) == 0


def test_malformed_trip_between_valid_trips_is_isolated() -> None:
    result = parse(
        "T | One | first\n"
        "A | One\n"
        "P | one.jpg | One photo | c\n"
        "T | broken\n"
        "A | broken\n"
        "P | lost.jpg | Lost | c\n"
        "T | Two | second\n"
        "A | Two\n"
    )
    assert [t.name for t in result.trips] == ["One", "Two"]
    assert [p.photo_name for p in result.trips[0].album.photos] == ["One photo"]
    assert len(result.trips[1].album) == 0
    assert result.corrupted_trip_count == 1
    diag = result.diagnostics[0]
    assert diag.line_number == 4
    assert diag.severity == SEVERITY_WARNING
    assert "2 dependent line(s) skipped" in diag.message


def test_duplicate_trip_name_corrupts_only_the_duplicate() -> None:
    result = parse(
        "T | Japan | first\n"
        "A | Japan\n"
        "T | Japan | again\n"
        "A | Japan\n"
        "P | dup.jpg | Dup | c\n"
        "T | Korea | next\n"
    )
    assert [t.description for t in result.trips] == ["first", "next"]
    assert len(result.trips[0].album) == 0
    assert result.corrupted_trip_count == 1


def test_empty_trip_name_is_corruption() -> None:
    result = parse("T |  | no name\nA | \nT | Fine | ok\n")
    assert [t.name for t in result.trips] == ["Fine"]
    assert result.corrupted_trip_count == 1


def test_corruption_at_end_of_file_is_reported() -> None:
    result = parse("T | Good | ok\nT | bad\n")
    assert [t.name for t in result.trips] == ["Good"]
    assert result.diagnostics[0].line_number == 2


def test_photo_before_album_marker_is_fatal() -> None:
    with pytest.raises(FileFormatError) as info:
        parse("T | Test Trip | Test Description\nP | test.jpg | Photo Name | Caption\n")
    assert info.value.line_number == 2
    assert info.value.file_path == "trips.txt"


def test_album_without_trip_is_fatal() -> None:
    with pytest.raises(FileFormatError):
        parse("A | Album Name\n")


def test_album_without_label_is_fatal() -> None:
    with pytest.raises(FileFormatError):
        parse("T | Trip | d\nA\n")


def test_photo_with_too_few_fields_is_fatal() -> None:
    with pytest.raises(FileFormatError):
        parse("T | Trip | d\nA | Trip\nP | only.jpg | name\n")


def test_unknown_marker_is_fatal_even_inside_corrupted_trip() -> None:
    with pytest.raises(FileFormatError) as info:
        parse("T | broken\nX | what\n")
    assert "Unknown marker: X" in str(info.value)
    assert info.value.line == "X | what"


def test_bad_timestamp_skips_photo_but_keeps_trip() -> None:
    result = parse(
        "T | Trip | d\n"
        "A | Trip\n"
        "P | a.jpg | A | c | yesterday\n"
        "P | b.jpg | B | c | 2024-05-06 07:08:09\n"
    )
    trip = result.trips[0]
    assert [p.photo_name for p in trip.album.photos] == ["B"]
    assert result.corrupted_trip_count == 0
    diag = result.diagnostics[0]
    assert diag.severity == SEVERITY_ERROR
    assert diag.line_number == 3


def test_bad_coordinates_skip_photo() -> None:
    result = parse("T | Trip | d\nA | Trip\nP | a.jpg | A | c |  | x | north | east\n")
    assert len(result.trips[0].album) == 0
    assert result.diagnostics[0].severity == SEVERITY_ERROR


def test_empty_photo_name_is_reported() -> None:
    result = parse("T | Trip | d\nA | Trip\nP | a.jpg |  | c\n")
    assert len(result.trips[0].album) == 0
    assert len(result.diagnostics) == 1


def test_empty_caption_becomes_sentinel() -> None:
    result = parse("T | Trip | d\nA | Trip\nP | a.jpg | A | \n")
    assert result.trips[0].album.photos[0].caption == NO_CAPTION


def test_blank_lines_and_crlf_are_tolerated() -> None:
    result = parse("T | Trip | d\r\n\r\nA | Trip\r\n\n")
    assert [t.name for t in result.trips] == ["Trip"]
    assert result.trips[0].description == "d"


def test_legacy_zero_coordinates_mean_no_fix() -> None:
    result = parse("T | Trip | d\nA | Trip\nP | a.jpg | A | c |  | Location not found | 0.0 | 0.0\n")
    location = result.trips[0].album.photos[0].location
    assert not location.has_coordinates
    assert location.location_name is None


def test_missing_location_name_is_resolved_from_coordinates(two_city_geocoder) -> None:
    service = PhotoService(two_city_geocoder)
    result = parse(
        "T | Trip | d\nA | Trip\nP | a.jpg | A | c |  |  | 35.6937 | 139.7013\n", service
    )
    location = result.trips[0].album.photos[0].location
    assert location.location_name == "Tokyo, Japan"
    assert location.latitude == pytest.approx(35.6937)


def test_stored_location_name_is_kept(two_city_geocoder: OfflineReverseGeocoder) -> None:
    service = PhotoService(two_city_geocoder)
    result = parse(
        "T | Trip | d\nA | Trip\nP | a.jpg | A | c |  | Shibuya | 35.6937 | 139.7013\n", service
    )
    assert result.trips[0].album.photos[0].location.location_name == "Shibuya"


def test_reader_ends_without_current_trip() -> None:
    reader = DiaryReader("trips.txt")
    reader.parse(["T | Trip | d\n"])
    assert reader.state is ReaderState.NO_CURRENT_TRIP
