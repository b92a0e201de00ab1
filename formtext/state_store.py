"""
State Store - Field value tracking synchronized with persistent storage
Seguimiento de valores de campos sincronizado con almacenamiento persistente
"""

import json
import logging
from typing import Any, Callable, Dict, Iterator, List, Optional

from .storage import DEFAULT_STORAGE_KEY, KeyValueStore

logger = logging.getLogger(__name__)

SyncCallback = Callable[[str, Any], None]


def _copy_value(value: Any) -> Any:
    if isinstance(value, list):
        return list(value)
    return value


class StateStore:
    """
    Mapping from field name to current value
    Mapa de nombre de campo a valor actual
    """

    def __init__(self):
        self._data: Dict[str, Any] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def names(self) -> List[str]:
        return list(self._data)

    def get(self, name: str, default: Any = None) -> Any:
        """
        Get field value
        Obtener valor de campo

        Args:
            name: Name of the field
            default: Default value if not tracked

        Returns:
            Field value or default
        """
        return self._data.get(name, default)

    def set(self, name: str, value: Any) -> None:
        """
        Set field value
        Establecer valor de campo

        Args:
            name: Name of the field
            value: String, boolean or list of strings
        """
        self._data[name] = value

    def remove(self, name: str) -> None:
        self._data.pop(name, None)

    def snapshot_all(self) -> Dict[str, Any]:
        """Detached copy of the whole map / Copia independiente del mapa"""
        return {name: _copy_value(value) for name, value in self._data.items()}

    def restore_all(self, data: Dict[str, Any], sync: Optional[SyncCallback] = None) -> None:
        """
        Replace the whole map and re-sync live controls
        Reemplazar todo el mapa y resincronizar los controles

        Args:
            data: New name -> value map
            sync: Called once per restored entry so the owner can push the
                  value into a matching control; unknown names are the
                  callback's to ignore
        """
        self._data = {name: _copy_value(value) for name, value in data.items()}
        if sync is not None:
            for name, value in self._data.items():
                sync(name, value)

    def clear(self) -> None:
        """Clear all values / Limpiar todos los valores"""
        self._data = {}

    def save(self, store: KeyValueStore, key: str = DEFAULT_STORAGE_KEY) -> bool:
        """
        Persist a serialized snapshot
        Guardar una instantanea serializada

        Returns:
            True if written, False if the store refused it (logged, not raised)
        """
        try:
            payload = json.dumps(self.snapshot_all(), ensure_ascii=False)
            store.write(key, payload)
        except Exception as e:
            logger.warning("Could not save form data under key %r: %s", key, e)
            return False

        logger.info("Form data saved under key %r (%d fields)", key, len(self._data))
        return True

    def load(
        self,
        store: KeyValueStore,
        key: str = DEFAULT_STORAGE_KEY,
        sync: Optional[SyncCallback] = None,
    ) -> bool:
        """
        Restore state from a persisted snapshot
        Restaurar el estado desde una instantanea guardada

        An absent key leaves state unchanged. Unreadable or malformed
        payloads reset state to empty and log a warning.

        Returns:
            True if a snapshot was restored
        """
        try:
            payload = store.read(key)
        except Exception as e:
            logger.warning("Could not read form data under key %r: %s", key, e)
            self.clear()
            return False

        if not payload:
            return False

        try:
            data = json.loads(payload)
        except (TypeError, ValueError) as e:
            logger.warning("Stored form data under key %r is not valid JSON: %s", key, e)
            self.clear()
            return False

        if not isinstance(data, dict):
            logger.warning(
                "Stored form data under key %r is %s, expected an object",
                key, type(data).__name__,
            )
            self.clear()
            return False

        self.restore_all(data, sync)
        logger.info("Form data loaded from key %r (%d fields)", key, len(data))
        return True
