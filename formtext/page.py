"""
Page - Form instance tying structure, state, storage and export together
Instancia de formulario que une estructura, estado, almacenamiento y exportacion
"""

import logging
from typing import Any, Dict, List, Optional

from .container_builder import ContainerBuilder, PageConfig, validate_config
from .export import Clipboard, ExportFacade, ExportResult, LoggingNotifier, MemoryClipboard, Notifier
from .field_factory import DescriptorInput, FieldFactory
from .state_store import StateStore
from .storage import KeyValueStore, MemoryStore
from .text_formatter import format_text
from .text_serializer import serialize
from .tree import Control, Node

logger = logging.getLogger(__name__)

STORAGE_CLEARED_MESSAGE = "Form data removed from storage"


class Page:
    """
    A live form: display tree, tracked values and the capabilities it uses
    Un formulario vivo: arbol, valores y capacidades que utiliza
    """

    def __init__(
        self,
        host: Optional[Node] = None,
        config: Optional[Dict[str, Any]] = None,
        store: Optional[KeyValueStore] = None,
        clipboard: Optional[Clipboard] = None,
        notifier: Optional[Notifier] = None,
    ):
        self.config: PageConfig = validate_config(config)
        self.host = host if host is not None else Node("div", classes=["form-container"])
        self.store = store if store is not None else MemoryStore()
        self.clipboard = clipboard if clipboard is not None else MemoryClipboard()
        self.notifier = notifier if notifier is not None else LoggingNotifier()

        self.state = StateStore()
        self.builder = ContainerBuilder(self.host, self.config)
        self.form = self.builder.form
        self.fields = FieldFactory(self.form, self.state)

    @property
    def storage_key(self) -> str:
        return self.config.storage_key

    # Structure

    def add_field(self, descriptor: Optional[DescriptorInput] = None, **params: Any) -> Control:
        """
        Add a field from a descriptor or keyword parameters
        Anadir un campo desde un descriptor o parametros con nombre
        """
        if descriptor is None:
            descriptor = params
        return self.fields.create_field(descriptor)

    def add_header(self, text: str, level: int = 2, container: Optional[Node] = None) -> Node:
        return self.builder.add_header(text, level, container)

    def add_separator(self, parent: Optional[Node] = None) -> Node:
        return self.builder.add_separator(parent)

    def add_spacer(self, parent: Optional[Node] = None) -> Node:
        return self.builder.add_spacer(parent)

    def add_div(self, class_name: str, parent: Optional[Node] = None, **options: Any) -> Node:
        return self.builder.add_div(class_name, parent, **options)

    def create_element(self, tag: str, **options: Any) -> Node:
        return self.builder.create_element(tag, **options)

    def create_input_list(
        self,
        name: str,
        values: Optional[List[str]] = None,
        container: Optional[Node] = None,
    ) -> Node:
        return self.fields.create_input_list(name, values, container)

    def remove_field(self, name: str) -> bool:
        return self.fields.remove_field(name)

    def clear_form(self) -> None:
        """Remove every node and value / Eliminar todos los nodos y valores"""
        self.form.clear()
        self.state.clear()
        self.fields.reset()

    # Events

    def handle_input(self, name: str, value: Any) -> None:
        self.fields.handle_input(name, value)

    def handle_blur(self, name: str) -> bool:
        return self.fields.handle_blur(name)

    # Data

    def get_form_data(self) -> Dict[str, Any]:
        """
        Live control values for every tracked name
        Valores actuales de los controles para cada nombre seguido
        """
        data: Dict[str, Any] = {}
        list_names = set(self.fields.list_names())
        for name in self.state:
            if name in list_names:
                data[name] = self.fields.list_values(name)
                continue
            control = self.fields.get_control(name)
            if control is not None:
                data[name] = control.checked if control.input_type == "checkbox" else control.value
        return data

    def save_to_storage(self, key: Optional[str] = None) -> bool:
        return self.state.save(self.store, key or self.storage_key)

    def load_from_storage(self, key: Optional[str] = None) -> bool:
        """Restore values and re-sync live controls / Restaurar valores"""
        return self.state.load(self.store, key or self.storage_key, sync=self.fields.sync_value)

    def clear_storage(self, key: Optional[str] = None) -> bool:
        """
        Remove the stored snapshot and tell the user
        Eliminar la instantanea guardada y avisar al usuario

        The host is expected to rebuild the page afterwards.
        """
        key = key or self.storage_key
        try:
            self.store.remove(key)
        except Exception as e:
            logger.warning("Could not remove form data under key %r: %s", key, e)
            self.notifier.failure("Could not remove form data from storage", e)
            return False

        logger.info("Form data removed from key %r", key)
        self.notifier.success(STORAGE_CLEARED_MESSAGE)
        return True

    # Text export

    def get_form_text(self) -> str:
        return serialize(self.form)

    def format_text(self, text: str) -> str:
        return format_text(text)

    def exporter(self) -> ExportFacade:
        return ExportFacade(
            root=self.form,
            state=self.state,
            clipboard=self.clipboard,
            store=self.store,
            notifier=self.notifier,
            storage_key=self.storage_key,
        )

    async def copy_form_text(self) -> ExportResult:
        return await self.exporter().export_and_copy()
