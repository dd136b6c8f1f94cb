"""ViewModel for orchestrating diary IO, trip/photo creation and geocoding."""

from __future__ import annotations

from loguru import logger

from core.errors import DiaryError
from core.models import Photo, Trip
from core.services.interfaces import (
    Diagnostic,
    Geocoder,
    LoadResult,
    MetadataReader,
    PhotoMetadata,
)
from core.services.photo_service import PhotoService
from core.services.tracker_service import TrackerService
from core.services.trip_service import TripService
from infrastructure.diary_repository import TextDiaryRepository


class DiaryVM:
    """Main diary view-model.

    This is the surface the command layer talks to: it owns the in-memory
    trips and mediates between the repository and the geocoder.
    """

    def __init__(
        self,
        data_path: str,
        geocoder: Geocoder,
        repo: TextDiaryRepository | None = None,
        tracker: TrackerService | None = None,
        metadata_reader: MetadataReader | None = None,
    ) -> None:
        """Create a DiaryVM.

        Args:
            data_path: Diary file used by `load` and `save`.
            geocoder: Shared reverse geocoder, built once by the caller.
            repo: Repository with `load(path)` and `save(path, trips)` methods.
            tracker: Chronology helper (defaults to `TrackerService`).
            metadata_reader: Reads GPS position and capture time from image files
                when `add_photo` is not given metadata.
        """
        self._data_path = data_path
        self._geocoder = geocoder
        self._photos = PhotoService(geocoder)
        self._repo = repo or TextDiaryRepository(self._photos)
        self._tracker = tracker or TrackerService()
        self._metadata_reader = metadata_reader
        self._trip_service = TripService()
        self.trips: list[Trip] = []
        self.last_diagnostics: list[Diagnostic] = []

    @property
    def data_path(self) -> str:
        """Diary file path."""
        return self._data_path

    def load(self) -> LoadResult:
        """Replace current trips with the diary file contents."""
        result = self._repo.load(self._data_path)
        self.trips = list(result.trips)
        self._trip_service = TripService(self.trips)
        self.last_diagnostics = list(result.diagnostics)
        if result.corrupted_trip_count:
            logger.warning(
                "{} corrupted trip record(s) skipped in {}",
                result.corrupted_trip_count,
                self._data_path,
            )
        return result

    def save(self) -> None:
        """Write all trips to the diary file."""
        self._repo.save(self._data_path, self.trips)

    def resolve_location(self, latitude: float, longitude: float) -> str:
        """Place name for the coordinates, or a fallback string."""
        return self._geocoder.resolve_location(latitude, longitude)

    def add_trip(self, name: str, description: str) -> Trip:
        """Create and append a trip."""
        trip = self._trip_service.create_trip(name, description)
        self.trips.append(trip)
        logger.info("Trip added: {}", name)
        return trip

    def delete_trip(self, name: str) -> bool:
        """Remove the trip called `name`; return False when there is none."""
        trip = self.find_trip(name)
        if trip is None:
            logger.warning("Trip {} not found", name)
            return False
        self.trips.remove(trip)
        self._trip_service.forget(name)
        logger.info("Trip deleted: {}", name)
        return True

    def find_trip(self, name: str) -> Trip | None:
        """Return the trip called `name`, if any."""
        return next((t for t in self.trips if t.name == name), None)

    def add_photo(
        self,
        trip_name: str,
        file_path: str,
        photo_name: str,
        caption: str | None = None,
        metadata: PhotoMetadata | None = None,
    ) -> Photo:
        """Create a photo from its metadata and append it to the trip's album.

        Without explicit `metadata`, the configured metadata reader is asked.

        Raises:
            DiaryError: the trip does not exist.
            PhotoError: the photo fields are invalid.
        """
        trip = self.find_trip(trip_name)
        if trip is None:
            raise DiaryError(f"No trip named '{trip_name}'.")
        if trip.album is None:
            raise DiaryError(f"Trip '{trip_name}' has no album.")
        if metadata is None and self._metadata_reader is not None:
            metadata = self._metadata_reader.read(file_path)
        photo = self._photos.create_photo(file_path, photo_name, caption, metadata)
        trip.album.add_photo(photo)
        logger.info("Photo {} added to {} ({})", photo_name, trip_name, photo.location)
        return photo

    def album_summary(self, trip_name: str) -> list[str]:
        """Chronological photo lines with the distance travelled between them."""
        trip = self.find_trip(trip_name)
        if trip is None or trip.album is None:
            return []
        legs = self._tracker.travel_legs(trip.album)
        if not legs:
            return [str(p) for p in trip.album.photos]
        lines = [str(legs[0][0])]
        for _, to_photo, km in legs:
            lines.append(f"| {km} km" if km is not None else "| ? km")
            lines.append(str(to_photo))
        return lines

    @property
    def trip_count(self) -> int:
        """Number of trips currently loaded."""
        return len(self.trips)
