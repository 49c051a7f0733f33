"""JSON file storage for app state keys (one file per key)."""

from dataclasses import dataclass
from pathlib import Path

from nutriscan.services.state import StateStore


@dataclass
class FileStateStore(StateStore):
    """Local key-value store persisted under a directory."""

    root: Path

    def get(self, key: str) -> str | None:
        """Return the stored value for a key, if present."""
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        """Write a value, replacing the previous file atomically."""
        self.root.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)

    def delete(self, key: str) -> None:
        """Remove a key's file if present."""
        self._path(key).unlink(missing_ok=True)

    def _path(self, key: str) -> Path:
        if not key or "/" in key or key.startswith("."):
            raise ValueError(f"Invalid state key: {key!r}")
        return self.root / f"{key}.json"
