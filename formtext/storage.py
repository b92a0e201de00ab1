"""
Storage - Persistent key-value capabilities
Capacidades de almacenamiento clave-valor persistente
"""

import logging
import re
from pathlib import Path
from typing import Dict, Optional, Protocol, runtime_checkable

from .errors import PersistenceFailure

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "formData"


@runtime_checkable
class KeyValueStore(Protocol):
    """Persistent store holding serialized snapshots by key"""

    def read(self, key: str) -> Optional[str]:
        ...

    def write(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class MemoryStore:
    """In-process store / Almacen en memoria"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class JsonFileStore:
    """
    One file per key under a directory
    Un archivo por clave dentro de un directorio
    """

    def __init__(self, base_path: Path):
        self.base_path = Path(base_path)

    def _path_for(self, key: str) -> Path:
        safe_key = re.sub(r"[^A-Za-z0-9_.-]", "_", key)
        return self.base_path / f"{safe_key}.json"

    def read(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceFailure(f"Cannot read key '{key}' from {path}: {e}") from e

    def write(self, key: str, value: str) -> None:
        path = self._path_for(key)
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
            path.write_text(value, encoding="utf-8")
        except OSError as e:
            raise PersistenceFailure(f"Cannot write key '{key}' to {path}: {e}") from e
        logger.debug("Stored key %s at %s", key, path)

    def remove(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceFailure(f"Cannot remove key '{key}' at {path}: {e}") from e
