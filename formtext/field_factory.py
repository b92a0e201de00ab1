"""
Field Factory - Builds input controls from field descriptors
Construye controles de entrada a partir de descriptores de campo
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from .descriptors import FieldDescriptor, FieldType, parse_descriptor
from .errors import InvalidDescriptor
from .state_store import StateStore
from .tree import ERROR_MESSAGE, FIELD_GROUP, SUB_TEXT, Control, Node, OptionNode

logger = logging.getLogger(__name__)

INPUT_LIST_CONTAINER = "input-list-container"
INPUT_LIST_ITEM = "input-list-item"

DescriptorInput = Union[FieldDescriptor, Mapping[str, Any]]


def group_class(name: str) -> str:
    """Deterministic class carried by a field's wrapping group"""
    return f"{name}-group"


class FieldFactory:
    """
    Creates field groups wired to a shared state store
    Crea grupos de campos conectados a un almacen de estado compartido
    """

    def __init__(self, form: Node, state: StateStore):
        self.form = form
        self.state = state
        self._controls: Dict[str, Control] = {}
        self._groups: Dict[str, Node] = {}
        self._error_slots: Dict[str, Node] = {}
        self._messages: Dict[str, str] = {}
        self._lists: Dict[str, Node] = {}

    # Construction

    def create_field(self, descriptor: DescriptorInput) -> Control:
        """
        Build one field group and its typed control
        Construir un grupo de campo y su control tipado

        Args:
            descriptor: FieldDescriptor or raw mapping

        Returns:
            The created control

        Raises:
            InvalidDescriptor: If the name is missing/blank or the type is unknown
        """
        descriptor = parse_descriptor(descriptor)
        name = descriptor.name
        container = descriptor.container or self.form

        group = Node("div")
        group.add_class(f"{FIELD_GROUP} {group_class(name)} {descriptor.class_name}")
        if descriptor.required:
            group.add_class("required-field")

        error_slot = Node("div", classes=[ERROR_MESSAGE])
        error_slot.hidden = True

        if descriptor.label:
            group.append(Node("label", text=descriptor.label, attrs={"for": name}))

        control = self._build_control(descriptor, group)
        group.insert_before(control, group.find_by_class("datalist-options"))
        group.append(error_slot)

        if descriptor.sub_text:
            group.append(Node("span", classes=[SUB_TEXT], text=descriptor.sub_text))

        container.append(group)

        if name in self._controls:
            logger.debug("Field name %r reused; previous field is no longer tracked", name)
        self._controls[name] = control
        self._groups[name] = group
        self._error_slots[name] = error_slot
        self._messages[name] = descriptor.validation_message

        self.state.set(name, control.current_value())
        return control

    def _build_control(self, descriptor: FieldDescriptor, group: Node) -> Control:
        field_type = descriptor.type
        name = descriptor.name
        value = descriptor.value

        if field_type.is_checkable:
            control = Control("input", name, input_type=field_type.value, required=descriptor.required)
            control.checked = descriptor.checked
            control.value = str(value)

        elif field_type == FieldType.SELECT:
            control = Control("select", name, required=descriptor.required)
            for option in descriptor.options:
                control.add_option(option.value, option.text)
            self._select_initial(control, value)

        elif field_type == FieldType.DATALIST:
            control = Control("input", name, input_type="text", required=descriptor.required)
            control.list_id = f"{name}-options"
            control.attrs["list"] = control.list_id
            control.value = str(value)
            datalist = Node("datalist", classes=["datalist-options"], attrs={"id": control.list_id})
            for option in descriptor.options:
                datalist.append(OptionNode(option.text, option.text))
            group.append(datalist)

        elif field_type == FieldType.TEXTAREA:
            control = Control("textarea", name, required=descriptor.required)
            control.attrs["rows"] = 4
            control.value = str(value)

        elif field_type.is_text_like:
            control = Control("input", name, input_type=field_type.value, required=descriptor.required)
            control.value = str(value)

        else:
            raise InvalidDescriptor(f"Unsupported field type: {field_type}")

        return control

    @staticmethod
    def _select_initial(control: Control, value: Union[int, str]) -> None:
        """Select by index, then by option value, else the first option"""
        options = control.options
        if not options:
            return

        if isinstance(value, int):
            control.select_index(value if 0 <= value < len(options) else 0)
        elif value == "" or not control.select_value(value):
            control.select_index(0)

    # Reactive contract

    def get_control(self, name: str) -> Optional[Control]:
        return self._controls.get(name)

    def handle_input(self, name: str, value: Any) -> None:
        """
        Apply an input event: update the control, the state and clear errors
        Aplicar un evento de entrada: actualizar control, estado y errores
        """
        control = self._controls.get(name)
        if control is None:
            logger.warning("Input event for unknown field %r ignored", name)
            return

        if control.is_checkable:
            control.checked = bool(value)
        elif control.is_select:
            if isinstance(value, int) and not isinstance(value, bool):
                control.select_index(value)
            else:
                control.select_value(str(value))
        else:
            control.value = "" if value is None else str(value)

        self.state.set(name, control.current_value())
        self._hide_error(name)

    def handle_blur(self, name: str) -> bool:
        """
        Apply a focus-loss event: flag required fields left empty
        Aplicar perdida de foco: marcar campos requeridos vacios

        Returns:
            True if the field is now flagged
        """
        control = self._controls.get(name)
        if control is None:
            logger.warning("Blur event for unknown field %r ignored", name)
            return False

        if control.required and control.is_empty():
            error_slot = self._error_slots[name]
            error_slot.text = self._messages[name]
            error_slot.hidden = False
            control.flagged = True
            return True

        self._hide_error(name)
        return False

    def _hide_error(self, name: str) -> None:
        error_slot = self._error_slots.get(name)
        if error_slot is not None and not error_slot.hidden:
            error_slot.hidden = True
        control = self._controls.get(name)
        if control is not None:
            control.flagged = False

    def errors(self) -> Dict[str, str]:
        """Visible validation messages by field name"""
        return {
            name: slot.text
            for name, slot in self._error_slots.items()
            if not slot.hidden
        }

    def sync_value(self, name: str, value: Any) -> bool:
        """
        Push a stored value into the matching live control
        Volcar un valor guardado en el control correspondiente

        Returns:
            False when no live control or list carries this name
        """
        if name in self._lists:
            values = value if isinstance(value, list) else [value]
            self._rebuild_list(name, [str(v) for v in values])
            return True

        control = self._controls.get(name)
        if control is None:
            return False

        if control.is_checkable:
            control.checked = bool(value)
        elif control.is_select:
            control.select_value(str(value))
        else:
            control.value = "" if value is None else str(value)
        return True

    # Input lists

    def create_input_list(
        self,
        name: str,
        values: Optional[List[str]] = None,
        container: Optional[Node] = None,
    ) -> Node:
        """
        Create a growable list of text entries under one base name
        Crear una lista ampliable de entradas bajo un nombre base

        Args:
            name: Base name; entries are named <name>[]
            values: Initial entries (one empty entry by default)
            container: Parent node (defaults to the form root)

        Returns:
            The list container node
        """
        if not name or not name.strip():
            raise InvalidDescriptor('Parameter "name" is required for an input list')

        list_container = Node("div", classes=[INPUT_LIST_CONTAINER], attrs={"data-name": name})
        add_button = Node("button", classes=["add-input-item"], text="+ Add", attrs={"type": "button"})

        parent = container or self.form
        parent.append(list_container)
        parent.append(add_button)
        self._lists[name] = list_container

        for value in values if values is not None else [""]:
            self._append_list_item(list_container, name, value)

        self._refresh_list_state(name)
        return list_container

    def add_list_item(self, name: str, value: str = "") -> Control:
        list_container = self._get_list(name)
        control = self._append_list_item(list_container, name, value)
        self._refresh_list_state(name)
        return control

    def remove_list_item(self, name: str, item_id: int) -> bool:
        """Remove one entry by item id / Eliminar una entrada por id"""
        list_container = self._get_list(name)
        for item in list_container.children:
            if item.attrs.get("data-id") == item_id:
                item.remove()
                self._refresh_list_state(name)
                return True
        return False

    def handle_list_input(self, name: str, item_id: int, value: str) -> None:
        list_container = self._get_list(name)
        for item in list_container.children:
            if item.attrs.get("data-id") == item_id:
                control = item.find_first(lambda n: isinstance(n, Control))
                control.value = "" if value is None else str(value)
                break
        else:
            logger.warning("Input event for unknown item %r of list %r ignored", item_id, name)
            return
        self._refresh_list_state(name)

    def list_items(self, name: str) -> List[Control]:
        list_container = self._get_list(name)
        return [
            item.find_first(lambda n: isinstance(n, Control))
            for item in list_container.children
        ]

    def list_values(self, name: str) -> List[str]:
        """Non-blank entries in order / Entradas no vacias en orden"""
        return [control.value for control in self.list_items(name) if control.value.strip()]

    def list_names(self) -> List[str]:
        return list(self._lists)

    def _get_list(self, name: str) -> Node:
        try:
            return self._lists[name]
        except KeyError:
            raise KeyError(f"No input list named {name!r}") from None

    def _append_list_item(self, list_container: Node, name: str, value: str) -> Control:
        item = Node("div", classes=[INPUT_LIST_ITEM])
        item.attrs["data-id"] = item.node_id

        control = Control("input", f"{name}[]", input_type="text", required=False)
        control.value = "" if value is None else str(value)
        control.attrs["data-id"] = item.node_id

        item.append(control)
        item.append(Node("button", classes=["remove-input-item"], text="×", attrs={"type": "button"}))
        list_container.append(item)
        return control

    def _rebuild_list(self, name: str, values: List[str]) -> None:
        list_container = self._lists[name]
        list_container.clear()
        for value in values:
            self._append_list_item(list_container, name, value)

    def _refresh_list_state(self, name: str) -> None:
        self.state.set(name, self.list_values(name))

    # Removal

    def remove_field(self, name: str) -> bool:
        """
        Remove a field group and stop tracking it
        Eliminar un grupo de campo y dejar de seguirlo
        """
        group = self._groups.pop(name, None) or self.form.find_by_class(group_class(name))
        if group is None:
            return False

        group.remove()
        self._controls.pop(name, None)
        self._error_slots.pop(name, None)
        self._messages.pop(name, None)
        self.state.remove(name)
        return True

    def reset(self) -> None:
        """Forget every tracked field / Olvidar todos los campos"""
        self._controls.clear()
        self._groups.clear()
        self._error_slots.clear()
        self._messages.clear()
        self._lists.clear()
