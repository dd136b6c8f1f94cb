"""Core service interfaces and shared data structures.

This module defines the dataclasses exchanged between the storage layer and
its callers, and the protocols the core expects from its collaborators.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from core.models import City, Trip

SEVERITY_WARNING = "warning"
SEVERITY_ERROR = "error"


@dataclass
class Diagnostic:
    """A non-fatal problem found while loading the diary file.

    Attributes:
        line_number: 1-based line number in the file.
        line: Raw content of the offending line.
        message: Human readable description.
        severity: `warning` for skipped trips, `error` for skipped lines.
    """

    line_number: int
    line: str
    message: str
    severity: str = SEVERITY_ERROR


@dataclass
class LoadResult:
    """Outcome of a load operation.

    Attributes:
        trips: Trips parsed successfully, in file order.
        diagnostics: Non-fatal problems encountered along the way.
    """

    trips: list[Trip] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def corrupted_trip_count(self) -> int:
        """Number of trip records dropped because they could not be created."""
        return sum(1 for d in self.diagnostics if d.severity == SEVERITY_WARNING)


@dataclass(frozen=True)
class PhotoMetadata:
    """What the image metadata reader knows about a photo; every part is optional."""

    latitude: float | None = None
    longitude: float | None = None
    timestamp: datetime | None = None


class MetadataReader(Protocol):
    """Extracts GPS position and capture time from an image file."""

    def read(self, file_path: str) -> PhotoMetadata | None:
        """Return metadata for `file_path`, or None if the file carries none."""
        raise NotImplementedError


class Geocoder(Protocol):
    """Maps coordinates to reference cities."""

    def nearest_city(self, latitude: float, longitude: float) -> City | None:
        """Return the closest known city, or None when no data is available."""
        raise NotImplementedError

    def resolve_location(self, latitude: float, longitude: float) -> str:
        """Return a place label or a descriptive fallback string."""
        raise NotImplementedError
