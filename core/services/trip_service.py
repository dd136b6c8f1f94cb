"""Trip creation rules shared by the storage reader and the diary view-model."""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from core.errors import DuplicateNameError, MissingParameterError
from core.models import Album, Trip


class TripService:
    """Creates trips, rejecting missing names and duplicate names."""

    def __init__(self, existing: Iterable[Trip] | None = None) -> None:
        self._names: set[str] = {t.name for t in existing or []}

    def create_trip(self, name: str | None, description: str | None) -> Trip:
        """Return a new trip with an empty album.

        Raises:
            MissingParameterError: `name` is empty or `description` is None.
            DuplicateNameError: a trip with `name` was already created.
        """
        if not name or not name.strip():
            raise MissingParameterError("name")
        if description is None:
            raise MissingParameterError("description")
        if name in self:
            raise DuplicateNameError("trip", name)
        self._names.add(name)
        logger.debug("Trip created: {}", name)
        return Trip(name=name, description=description, album=Album())

    def forget(self, name: str) -> None:
        """Release `name` so that a new trip may use it again."""
        self._names.discard(name)

    def __contains__(self, name: object) -> bool:
        return name in self._names
