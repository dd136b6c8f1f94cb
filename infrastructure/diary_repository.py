"""File persistence for the travel diary.

Provides load/save of trips in the line-oriented diary format. A missing file
loads as an empty diary. Records are formatted and encoded before the target
is opened, so a photo that cannot be saved leaves the previous file untouched.
"""

from __future__ import annotations

from collections.abc import Iterable
import io
from pathlib import Path

from loguru import logger

from core.errors import FileReadError, FileWriteError
from core.models import Trip
from core.services.interfaces import LoadResult
from core.services.photo_service import PhotoService
from infrastructure.storage_reader import DiaryReader
from infrastructure.storage_writer import DiaryWriter


class TextDiaryRepository:
    """Load and save trips in the diary text format."""

    def __init__(self, photo_service: PhotoService | None = None) -> None:
        self._photo_service = photo_service or PhotoService()

    def load(self, data_path: str) -> LoadResult:
        """Read trips from `data_path`.

        Raises:
            FileFormatError: the file is not in the diary format.
            FileReadError: the file exists but cannot be read.
        """
        path = Path(data_path)
        if not path.exists():
            logger.info("No diary file at {}, starting empty", path)
            return LoadResult()

        try:
            with path.open("r", encoding="utf-8", newline="") as f:
                lines = f.readlines()
        except (OSError, UnicodeDecodeError) as ex:
            logger.error("Read failed for {}: {}", path, ex)
            raise FileReadError(str(path)) from ex

        result = DiaryReader(str(path), self._photo_service).parse(lines)
        logger.info(
            "Loaded {} trip(s) from {} ({} diagnostic(s))",
            len(result.trips),
            path,
            len(result.diagnostics),
        )
        return result

    def save(self, data_path: str, trips: Iterable[Trip]) -> None:
        """Write `trips` to `data_path`, creating parent directories as needed.

        Raises:
            FileWriteError: wrapping the underlying I/O or encoding failure.
            PhotoSaveError: a photo could not be formatted.
        """
        path = Path(data_path)
        buffer = io.StringIO()
        count = DiaryWriter(str(path)).write(buffer, trips)
        try:
            payload = buffer.getvalue().encode("utf-8")
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(payload)
        except (OSError, UnicodeEncodeError) as ex:
            logger.error("Write failed for {}: {}", path, ex)
            raise FileWriteError(str(path)) from ex
        logger.info("Saved {} record line(s) to {}", count, path)
