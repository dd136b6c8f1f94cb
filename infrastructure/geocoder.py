"""Offline reverse geocoding against the bundled city dataset.

The city index is built exactly once. Callers normally build it eagerly at
startup with `load()`; a first query made before that builds it under a lock
so concurrent first queries cannot race.
"""

from __future__ import annotations

import csv
from pathlib import Path
import threading

from loguru import logger

from core.models import LOCATION_NOT_FOUND, City
from core.services.city_index import CityIndex, NearestCity
from infrastructure.city_repository import CsvCityRepository


class OfflineReverseGeocoder:
    """Resolves coordinates to the nearest city of a static dataset."""

    def __init__(
        self,
        cities_path: str | Path | None = None,
        repository: CsvCityRepository | None = None,
        index: CityIndex | None = None,
    ) -> None:
        self._cities_path = Path(cities_path) if cities_path is not None else None
        self._repo = repository or CsvCityRepository()
        self._index = index
        self._error: str | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_cities(cls, cities: list[City]) -> OfflineReverseGeocoder:
        """Create a geocoder over an in-memory city list."""
        return cls(index=CityIndex.build(cities))

    @property
    def is_loaded(self) -> bool:
        """True once the index has been built."""
        return self._index is not None

    @property
    def load_error(self) -> str | None:
        """Why the dataset could not be loaded, if it could not."""
        return self._error

    def load(self) -> CityIndex | None:
        """Build the index if needed; return None when the dataset is unavailable."""
        if self._index is not None:
            return self._index
        with self._lock:
            if self._index is None and self._error is None:
                self._index = self._build()
        return self._index

    def _build(self) -> CityIndex | None:
        if self._cities_path is None:
            self._error = "no city dataset configured"
            logger.warning("Reverse geocoding disabled: {}", self._error)
            return None
        try:
            cities = self._repo.load(self._cities_path)
        except (OSError, UnicodeDecodeError, csv.Error) as ex:
            self._error = str(ex)
            logger.error("Error loading city data from {}: {}", self._cities_path, ex)
            return None
        index = CityIndex.build(cities)
        logger.info("City index built: {} cities, depth {}", len(index), index.depth())
        return index

    def nearest(self, latitude: float, longitude: float) -> NearestCity | None:
        """Nearest city with its distance, or None when no data is available."""
        index = self.load()
        if index is None:
            return None
        return index.nearest(latitude, longitude)

    def nearest_city(self, latitude: float, longitude: float) -> City | None:
        """Nearest city, or None when no data is available."""
        found = self.nearest(latitude, longitude)
        return found.city if found is not None else None

    def resolve_location(self, latitude: float, longitude: float) -> str:
        """Return `"<city>, <country>"` or a descriptive fallback; never raises."""
        found = self.nearest(latitude, longitude)
        if found is not None:
            return found.label
        if self._error:
            return f"Error loading city data: {self._error}"
        return LOCATION_NOT_FOUND
