from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from core.models import Album, City, Location, Photo, Trip
from infrastructure.geocoder import OfflineReverseGeocoder

REPO_ROOT = Path(__file__).resolve().parent.parent
BUNDLED_CITIES = REPO_ROOT / "data" / "cities.csv"

HEADER = (
    "Geoname ID;Name;ASCII Name;Alternate Names;Feature Class;Feature Code;Country Code;"
    "Country name EN;Country Code 2;Admin1 Code;Admin2 Code;Admin3 Code;Admin4 Code;"
    "Population;Elevation;DIgital Elevation Model;Timezone;Modification date;LABEL EN;Coordinates"
)


def city_row(name: str, country: str, coords: str) -> str:
    """Build one dataset row with the name, country and coordinates in their columns."""
    cols = [""] * 20
    cols[0] = "1"
    cols[1] = name
    cols[7] = country
    cols[19] = coords
    return ";".join(cols)


@pytest.fixture
def tokyo() -> City:
    return City("Tokyo", "Japan", 35.6895, 139.6917)


@pytest.fixture
def singapore() -> City:
    return City("Singapore", "Singapore", 1.3521, 103.8198)


@pytest.fixture
def two_city_geocoder(tokyo: City, singapore: City) -> OfflineReverseGeocoder:
    return OfflineReverseGeocoder.from_cities([tokyo, singapore])


@pytest.fixture
def cities_csv(tmp_path: Path) -> Path:
    path = tmp_path / "cities.csv"
    rows = [
        HEADER,
        city_row("Tokyo", "Japan", "35.6895, 139.6917"),
        city_row("Singapore", "Singapore", "1.3521, 103.8198"),
        city_row("Paris", "France", "48.85341, 2.3488"),
    ]
    path.write_text("\n".join(rows) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def sample_trips() -> list[Trip]:
    japan = Trip("Japan 2024", "Spring | cherry blossoms\nand ramen")
    japan.album.add_photo(
        Photo(
            file_path="photos/tokyo_tower.jpg",
            photo_name="Tower",
            caption="Tokyo at night",
            datetime=datetime(2024, 4, 1, 19, 30, 5),
            location=Location(35.6586, 139.7454, "Tokyo, Japan"),
        )
    )
    japan.album.add_photo(
        Photo(
            file_path="photos\\no_gps.jpg",
            photo_name="Ramen",
        )
    )
    empty = Trip("Weekend", "", album=Album())
    no_album = Trip("Plans", "someday", album=None)
    return [japan, empty, no_album]
