from __future__ import annotations

from pathlib import Path
import sys

from loguru import logger

from app.viewmodels.diary_vm import DiaryVM
from core.errors import StorageError
from infrastructure.geocoder import OfflineReverseGeocoder
from infrastructure.logging import init_logging
from infrastructure.settings import JsonSettings

BASE_DIR = Path(__file__).parent


def build_diary(settings: JsonSettings) -> DiaryVM:
    """Wire the diary view-model from settings, building the city index up front."""
    geocoder = OfflineReverseGeocoder(settings.get_path("geocoding.cities_file"))
    if settings.get("geocoding.eager_load", True):
        geocoder.load()
    data_path = settings.get_path("storage.data_file", "data/travel_diary.txt")
    return DiaryVM(str(data_path), geocoder)


def main() -> int:
    settings = JsonSettings(BASE_DIR / "settings.json")
    log_dir = settings.get_path("logging.dir")
    init_logging(str(log_dir) if log_dir else None)

    diary = build_diary(settings)
    try:
        result = diary.load()
    except StorageError as ex:
        logger.error("Diary load failed: {}", ex)
        print(ex, file=sys.stderr)
        return 1
    logger.info("Diary ready: {} trip(s)", diary.trip_count)

    for trip in result.trips:
        photos = len(trip.album) if trip.album is not None else 0
        print(f"{trip} [{photos} photo(s)]")
    for diag in result.diagnostics:
        print(f"line {diag.line_number}: {diag.severity}: {diag.message}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
