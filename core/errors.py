"""Exception hierarchy shared by the storage and geocoding layers."""

from __future__ import annotations


class DiaryError(Exception):
    """Base class for every error raised by the diary core."""


class StorageError(DiaryError):
    """Base class for failures reading or writing the diary file."""


class FileFormatError(StorageError):
    """The diary file is not in the expected line format."""

    def __init__(
        self,
        file_path: str,
        line: str | None = None,
        line_number: int | None = None,
        reason: str | None = None,
    ) -> None:
        self.file_path = file_path
        self.line = line
        self.line_number = line_number
        self.reason = reason
        message = f"Invalid file format in: {file_path}"
        if line_number is not None:
            message += f" at line {line_number}"
        if reason:
            message += f". {reason}"
        if line is not None:
            message += f'. Error parsing line: "{line}"'
        super().__init__(message)


class FileReadError(StorageError):
    """The diary file exists but could not be read."""

    def __init__(self, file_path: str) -> None:
        self.file_path = file_path
        super().__init__(f"Failed to read file: {file_path}. Check file permissions or format.")


class FileWriteError(StorageError):
    """Writing the diary file failed; partial output on disk is undefined."""

    def __init__(self, file_path: str) -> None:
        self.file_path = file_path
        super().__init__(
            f"Failed to write to file: {file_path}. Check disk space and file permissions."
        )


class PhotoSaveError(StorageError):
    """A single photo could not be formatted for storage."""

    def __init__(self, photo_name: str, file_path: str) -> None:
        self.photo_name = photo_name
        self.file_path = file_path
        super().__init__(f"Failed to save photo '{photo_name}' to {file_path}.")


class TripError(DiaryError):
    """Base class for trip creation failures."""


class MissingParameterError(TripError):
    """A compulsory trip field is missing or empty."""

    def __init__(self, parameter: str) -> None:
        self.parameter = parameter
        super().__init__(f"Missing compulsory parameter: {parameter}")


class DuplicateNameError(TripError):
    """A trip with the same name already exists."""

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f"A {kind} named '{name}' already exists.")


class PhotoError(DiaryError):
    """A photo could not be created from the given fields."""
