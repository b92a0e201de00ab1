"""
Text Serializer - Walks the built form and emits raw text lines
Recorre el formulario construido y emite lineas de texto sin formato
"""

import re
from typing import List

from .container_builder import RULE
from .text_formatter import ensure_ends_with_dot
from .tree import (
    FORM_HEADER,
    LINE_SPACER,
    PROC_PREFIX,
    SEPARATOR,
    SUB_TEXT,
    Control,
    Node,
    is_control,
    is_field_group,
)

_TRAILING_COLON = re.compile(r":$")


def serialize(root: Node) -> str:
    """
    Serialize the structural tree below root into raw text
    Serializar el arbol estructural bajo root en texto sin formato

    Only separators, line spacers, form headers, proc-* passthrough
    elements and field groups produce text. Everything else is traversed.

    Args:
        root: Form root node (its own classes are not interpreted)

    Returns:
        Concatenated fragments, trimmed
    """
    fragments: List[str] = []
    _process_container(root, fragments)
    return "".join(fragments).strip()


def _process_container(container: Node, fragments: List[str]) -> None:
    for node in container.children:
        text, descend = _process_element(node)
        fragments.append(text)
        if descend:
            _process_container(node, fragments)


def _process_element(node: Node):
    """Text for one node and whether to descend into its children"""
    if node.has_class(SEPARATOR):
        return "\n" + RULE + "\n", True

    if node.has_class(LINE_SPACER):
        return RULE + "\n", True

    if node.has_class(FORM_HEADER):
        header = node.text_content().strip()
        return (header + ":\n" if header else ""), True

    if node.has_class_prefix(PROC_PREFIX + "-"):
        return node.text_content().strip() + "\n", False

    if is_field_group(node):
        line = field_group_line(node)
        if line is not None:
            return line + "\n", False

    return "", True


def field_group_line(group: Node):
    """
    Compose the punctuated line of a field group
    Componer la linea puntuada de un grupo de campo

    Returns:
        The line, or None when the group holds no control
    """
    label_node = _find_in_group(group, lambda n: n.tag == "label")
    control = _find_in_group(group, is_control)
    sub_text_node = _find_in_group(group, lambda n: n.has_class(SUB_TEXT))

    if control is None:
        return None

    label = _TRAILING_COLON.sub("", label_node.text_content()).strip() if label_node else ""
    value = control_text(control)
    sub_text = sub_text_node.text_content().strip() if sub_text_node else ""

    if label:
        line = f"{label}: {value}{' ' + sub_text if sub_text else ''}"
    else:
        line = value

    return ensure_ends_with_dot(line)


def control_text(control: Control) -> str:
    """Display text of a control: option text for selects, trimmed value otherwise"""
    if control.is_select:
        return control.selected_text().strip()
    if control.is_checkable and not control.checked:
        return ""
    return str(control.value).strip()


def _find_in_group(group: Node, predicate):
    """First match inside the group, not below nested field groups"""
    return group.find_first(predicate, skip=is_field_group)
