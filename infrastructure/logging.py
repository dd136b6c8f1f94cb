"""Logging initialization utilities using loguru."""

from __future__ import annotations

from pathlib import Path

from loguru import logger


def get_log_directory() -> str:
    """Get the default log directory path."""
    return str(Path.home() / ".travel_diary" / "logs")


def init_logging(log_dir: str | Path | None = None, level: str = "INFO") -> Path:
    """Initialize rotating file logging under the given directory.

    Returns the directory the log files are written to.
    """
    log_path = Path(log_dir) if log_dir is not None else Path(get_log_directory())
    log_path.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.add(
        str(log_path / "diary_{time:YYYYMMDD}.log"),
        rotation="10 MB",
        retention="10 days",
        compression="zip",
        enqueue=True,
        backtrace=False,
        diagnose=False,
        level=level,
    )
    return log_path


def find_latest_log_file(log_dir: str | None = None) -> Path | None:
    """Find the latest log file in the specified directory."""
    if log_dir is None:
        log_dir = get_log_directory()

    try:
        log_path = Path(log_dir)
        if not log_path.exists():
            return None

        log_files = list(log_path.glob("diary_*.log"))
        if not log_files:
            return None

        return max(log_files, key=lambda p: p.stat().st_mtime)
    except (OSError, ValueError):
        return None
