"""Core domain models for trips, albums, photos and reference cities."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

NO_CAPTION = "no caption"
LOCATION_NOT_FOUND = "Location not found"


@dataclass
class Location:
    """Where a photo was taken.

    Coordinates are present only when both `latitude` and `longitude` are set.
    `location_name` is derived from the coordinates and is ignored without them.
    """

    latitude: float | None = None
    longitude: float | None = None
    location_name: str | None = None

    @property
    def has_coordinates(self) -> bool:
        """True when both coordinates are known."""
        return self.latitude is not None and self.longitude is not None

    @property
    def has_location_name(self) -> bool:
        """True when a resolved, non-sentinel name is attached to real coordinates."""
        return (
            self.has_coordinates
            and bool(self.location_name)
            and self.location_name != LOCATION_NOT_FOUND
        )

    def __str__(self) -> str:
        if self.has_location_name:
            return str(self.location_name)
        if self.has_coordinates:
            return f"({self.latitude:.6f}, {self.longitude:.6f})"
        return LOCATION_NOT_FOUND


@dataclass
class Photo:
    """A single photo entry inside an album."""

    file_path: str
    photo_name: str
    caption: str = NO_CAPTION
    datetime: datetime | None = None
    location: Location = field(default_factory=Location)

    def __str__(self) -> str:
        when = self.datetime.strftime("%Y-%m-%d %I:%M%p") if self.datetime else "undated"
        return f"{self.photo_name} ({self.location}) {when}\n\t\t{self.caption}"


@dataclass
class Album:
    """Ordered photos of a trip; insertion order is display order."""

    photos: list[Photo] = field(default_factory=list)

    def add_photo(self, photo: Photo) -> None:
        """Append `photo` at the end of the album."""
        self.photos.append(photo)

    def __len__(self) -> int:
        return len(self.photos)


@dataclass
class Trip:
    """A named trip owning at most one album."""

    name: str
    description: str
    album: Album | None = field(default_factory=Album)

    def __str__(self) -> str:
        return f"{self.name} - {self.description}"


@dataclass(frozen=True)
class City:
    """Read-only reference city used for reverse geocoding."""

    name: str
    country: str
    latitude: float
    longitude: float

    @property
    def label(self) -> str:
        """Human readable place name, e.g. `Tokyo, Japan`."""
        return f"{self.name}, {self.country}"
