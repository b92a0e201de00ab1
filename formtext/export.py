"""
Export - Serialize, format, copy and persist form text
Serializar, formatear, copiar y guardar el texto del formulario
"""

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from .errors import ExportFailure
from .state_store import StateStore
from .storage import DEFAULT_STORAGE_KEY, KeyValueStore
from .text_formatter import format_text
from .text_serializer import serialize
from .tree import Node

logger = logging.getLogger(__name__)

COPY_SUCCESS_MESSAGE = "Text copied to clipboard"
COPY_ERROR_MESSAGE = "Error copying text"


class Clipboard(Protocol):
    """Asynchronous clipboard capability"""

    async def write_text(self, text: str) -> None:
        ...


class Notifier(Protocol):
    """Pass/fail alert surface / Superficie de avisos"""

    def success(self, message: str) -> None:
        ...

    def failure(self, message: str, error: Optional[BaseException] = None) -> None:
        ...


class MemoryClipboard:
    """Clipboard keeping every written text / Portapapeles en memoria"""

    def __init__(self):
        self.history: List[str] = []

    @property
    def text(self) -> Optional[str]:
        return self.history[-1] if self.history else None

    async def write_text(self, text: str) -> None:
        self.history.append(text)


class LoggingNotifier:
    """Notifier that only logs / Notificador que solo registra"""

    def success(self, message: str) -> None:
        logger.info(message)

    def failure(self, message: str, error: Optional[BaseException] = None) -> None:
        logger.error("%s: %s", message, error)


@dataclass
class ExportResult:
    """Result of an export run / Resultado de una exportacion"""
    success: bool
    trace_id: str
    text: Optional[str] = None
    error: Optional[str] = None
    step: Optional[str] = None
    saved: bool = False
    duration_ms: int = 0
    steps_completed: List[str] = field(default_factory=list)


class ExportFacade:
    """
    Orchestrates serialize -> format -> clipboard -> persist -> notify
    Orquesta serializar -> formatear -> portapapeles -> guardar -> avisar
    """

    def __init__(
        self,
        root: Node,
        state: StateStore,
        clipboard: Clipboard,
        store: KeyValueStore,
        notifier: Notifier,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ):
        self.root = root
        self.state = state
        self.clipboard = clipboard
        self.store = store
        self.notifier = notifier
        self.storage_key = storage_key

    async def export_and_copy(self) -> ExportResult:
        """
        Run the export pipeline, halting at the first failing step
        Ejecutar la exportacion, deteniendose en el primer paso fallido

        Returns:
            ExportResult; failures are reported, never raised
        """
        start_time = time.time()
        result = ExportResult(success=False, trace_id=str(uuid.uuid4()))
        step = "serialize"

        try:
            raw_text = serialize(self.root)
            result.steps_completed.append(step)

            step = "format"
            text = format_text(raw_text)
            result.steps_completed.append(step)

            step = "clipboard"
            await self.clipboard.write_text(text)
            result.steps_completed.append(step)
            result.text = text

        except Exception as e:
            failure = ExportFailure(step, e)
            logger.error("Export %s failed: %s", result.trace_id[:8], failure)
            result.error = str(failure)
            result.step = step
            result.duration_ms = int((time.time() - start_time) * 1000)
            self.notifier.failure(COPY_ERROR_MESSAGE, failure)
            return result

        result.saved = self.state.save(self.store, self.storage_key)
        result.success = True
        result.duration_ms = int((time.time() - start_time) * 1000)
        logger.info("Export %s copied %d characters", result.trace_id[:8], len(result.text))
        self.notifier.success(COPY_SUCCESS_MESSAGE)
        return result
