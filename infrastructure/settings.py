"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


class JsonSettings:
    """JSON settings reader with dotted-key access and path resolution."""

    def __init__(self, settings_path: str | Path) -> None:
        self._path = Path(settings_path)
        if not self._path.exists():
            raise FileNotFoundError(f"settings.json not found: {self._path}")
        with self._path.open("r", encoding="utf-8") as f:
            self._data = json.load(f)

    @property
    def base_dir(self) -> Path:
        """Directory containing the settings file."""
        return self._path.parent

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        node: Any = self._data
        for part in key.split("."):
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node

    def get_path(self, key: str, default: str | None = None) -> Path | None:
        """Return dotted `key` as a path, relative values resolved against `base_dir`."""
        value = self.get(key, default)
        if not value:
            return None
        path = Path(str(value)).expanduser()
        return path if path.is_absolute() else self.base_dir / path
