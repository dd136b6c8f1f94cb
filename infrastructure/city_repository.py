"""Loader for the semicolon-delimited reference city dataset.

The dataset has a header row. Each row carries the city name in column 1,
the English country name in column 7 and a `"<lat>, <lon>"` pair in column
19. Short rows and rows with unreadable coordinates are skipped.
"""

from __future__ import annotations

from collections.abc import Iterator
import csv
from pathlib import Path

from loguru import logger

from core.models import City

NAME_COLUMN = 1
COUNTRY_COLUMN = 7
COORDINATES_COLUMN = 19
MIN_COLUMNS = COORDINATES_COLUMN + 1


def _parse_coordinates(value: str) -> tuple[float, float] | None:
    """Parse `"lat, lon"`; return None if invalid."""
    parts = value.split(",")
    if len(parts) < 2:
        return None
    try:
        return float(parts[0].strip()), float(parts[1].strip())
    except ValueError:
        return None


class CsvCityRepository:
    """Reads reference cities from the dataset file."""

    def iter_cities(self, csv_path: str | Path) -> Iterator[City]:
        """Yield `City` rows from `csv_path`, skipping malformed ones.

        Raises:
            OSError: the file cannot be opened.
            csv.Error: the file is not valid delimited text.
        """
        path = Path(csv_path)
        with path.open("r", encoding="utf-8", newline="") as f:
            reader = csv.reader(f, delimiter=";")
            next(reader, None)
            for row_number, row in enumerate(reader, start=2):
                if len(row) < MIN_COLUMNS:
                    logger.debug("City row {} skipped: {} column(s)", row_number, len(row))
                    continue
                coords = _parse_coordinates(row[COORDINATES_COLUMN])
                if coords is None:
                    logger.debug("City row {} skipped: bad coordinates", row_number)
                    continue
                yield City(
                    name=row[NAME_COLUMN].strip(),
                    country=row[COUNTRY_COLUMN].strip(),
                    latitude=coords[0],
                    longitude=coords[1],
                )

    def load(self, csv_path: str | Path) -> list[City]:
        """Return every valid city in the dataset."""
        cities = list(self.iter_cities(csv_path))
        logger.info("Loaded {} reference cities from {}", len(cities), csv_path)
        return cities
