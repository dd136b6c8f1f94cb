"""Build `Photo` values from user input and image metadata.

Location names are derived data: they are looked up from the coordinates
through the injected geocoder and never kept for a photo without coordinates.
"""

from __future__ import annotations

from datetime import datetime

from loguru import logger

from core.errors import PhotoError
from core.models import NO_CAPTION, Location, Photo
from core.services.interfaces import Geocoder, PhotoMetadata


class PhotoService:
    """Creates photos and resolves their location names."""

    def __init__(self, geocoder: Geocoder | None = None) -> None:
        self._geocoder = geocoder

    def build_location(
        self,
        latitude: float | None,
        longitude: float | None,
        location_name: str | None = None,
    ) -> Location:
        """Return a Location, looking the name up when coordinates are known but unnamed."""
        if latitude is None or longitude is None:
            return Location()
        if not location_name and self._geocoder is not None:
            city = self._geocoder.nearest_city(latitude, longitude)
            location_name = city.label if city is not None else None
        return Location(latitude=latitude, longitude=longitude, location_name=location_name or None)

    def create_photo(
        self,
        file_path: str,
        photo_name: str,
        caption: str | None = None,
        metadata: PhotoMetadata | None = None,
        taken_at: datetime | None = None,
    ) -> Photo:
        """Create a photo; missing GPS data or timestamp never fails creation.

        Args:
            file_path: Path of the image on disk.
            photo_name: Display name of the photo.
            caption: Optional caption; empty means no caption.
            metadata: Optional (latitude, longitude, timestamp) from the image.
            taken_at: Explicit timestamp overriding the metadata one.

        Raises:
            PhotoError: `file_path` or `photo_name` is empty.
        """
        if not file_path:
            raise PhotoError("Photo file path cannot be empty.")
        if not photo_name:
            raise PhotoError("Photo name cannot be empty.")

        meta = metadata or PhotoMetadata()
        location = self.build_location(meta.latitude, meta.longitude)
        if not location.has_coordinates:
            logger.debug("No GPS data for {}", file_path)

        return Photo(
            file_path=file_path,
            photo_name=photo_name,
            caption=caption or NO_CAPTION,
            datetime=taken_at or meta.timestamp,
            location=location,
        )
