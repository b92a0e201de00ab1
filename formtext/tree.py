"""
Tree - Structural display tree for built forms
Arbol estructural de visualizacion para formularios construidos
"""

import itertools
from typing import Any, Callable, Dict, Iterator, List, Optional


# Structural classes recognised by the text serializer
FIELD_GROUP = "field-group"
SEPARATOR = "separator"
LINE_SPACER = "line-spacer"
FORM_HEADER = "form-header"
SUB_TEXT = "sub-text"
ERROR_MESSAGE = "error-message"
PROC_PREFIX = "proc"

CONTROL_TAGS = frozenset({"input", "select", "textarea"})

_node_ids = itertools.count(1)


class Node:
    """
    Element of the display tree with stable identity
    Elemento del arbol de visualizacion con identidad estable
    """

    def __init__(
        self,
        tag: str,
        classes: Optional[List[str]] = None,
        text: str = "",
        attrs: Optional[Dict[str, Any]] = None,
    ):
        self.node_id = next(_node_ids)
        self.tag = tag
        self.classes: List[str] = list(classes or [])
        self.text = text
        self.attrs: Dict[str, Any] = dict(attrs or {})
        self.children: List["Node"] = []
        self.parent: Optional["Node"] = None
        self.hidden = False

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.tag} #{self.node_id} {' '.join(self.classes)!r}>"

    # Classes

    def add_class(self, class_name: str) -> None:
        for name in class_name.split():
            if name not in self.classes:
                self.classes.append(name)

    def has_class(self, class_name: str) -> bool:
        return class_name in self.classes

    def has_class_prefix(self, prefix: str) -> bool:
        return any(c.startswith(prefix) for c in self.classes)

    # Structure

    def append(self, child: "Node") -> "Node":
        """Append child, moving it if already attached / Anadir hijo"""
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def insert_before(self, child: "Node", reference: Optional["Node"]) -> "Node":
        """Insert child before reference (append if reference is None)"""
        if reference is None or reference not in self.children:
            return self.append(child)
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        self.children.insert(self.children.index(reference), child)
        return child

    def remove(self) -> None:
        """Detach this node from its parent / Separar este nodo de su padre"""
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None

    def clear(self) -> None:
        for child in list(self.children):
            child.remove()

    # Traversal

    def iter(self) -> Iterator["Node"]:
        """Pre-order, document-order traversal including self"""
        yield self
        for child in self.children:
            yield from child.iter()

    def find_first(
        self,
        predicate: Callable[["Node"], bool],
        skip: Optional[Callable[["Node"], bool]] = None,
    ) -> Optional["Node"]:
        """
        Find first descendant matching predicate in document order
        Buscar primer descendiente que cumpla el predicado

        Args:
            predicate: Match test
            skip: Nodes for which this returns True are neither matched
                  nor descended into

        Returns:
            Matching node or None
        """
        for child in self.children:
            if skip is not None and skip(child):
                continue
            if predicate(child):
                return child
            found = child.find_first(predicate, skip)
            if found is not None:
                return found
        return None

    def find_all(self, predicate: Callable[["Node"], bool]) -> List["Node"]:
        return [node for node in self.iter() if node is not self and predicate(node)]

    def find_by_class(self, class_name: str) -> Optional["Node"]:
        return self.find_first(lambda n: n.has_class(class_name))

    def find_by_name(self, name: str) -> Optional["Control"]:
        """First control whose name matches / Primer control con ese nombre"""
        return self.find_first(lambda n: isinstance(n, Control) and n.name == name)

    def text_content(self) -> str:
        """Own text followed by all descendants' text"""
        return self.text + "".join(child.text_content() for child in self.children)


class OptionNode(Node):
    """Option of a select or datalist / Opcion de un select o datalist"""

    def __init__(self, value: str, text: str):
        super().__init__("option", text=text, attrs={"value": value})

    @property
    def value(self) -> str:
        return self.attrs["value"]


class Control(Node):
    """
    Value-bearing input control
    Control de entrada con valor
    """

    def __init__(
        self,
        tag: str,
        name: str,
        input_type: Optional[str] = None,
        required: bool = True,
    ):
        super().__init__(tag, attrs={"id": name, "name": name})
        self.name = name
        self.input_type = input_type
        self.required = required
        self.value = ""
        self.checked = False
        self.flagged = False
        self.selected_index = -1
        self.list_id: Optional[str] = None

    @property
    def is_select(self) -> bool:
        return self.tag == "select"

    @property
    def is_checkable(self) -> bool:
        return self.input_type in ("checkbox", "radio")

    @property
    def options(self) -> List[OptionNode]:
        return [child for child in self.children if isinstance(child, OptionNode)]

    def add_option(self, value: str, text: str) -> OptionNode:
        return self.append(OptionNode(value, text))

    def select_index(self, index: int) -> None:
        options = self.options
        if 0 <= index < len(options):
            self.selected_index = index
            self.value = options[index].value

    def select_value(self, value: Any) -> bool:
        """Select the option whose value matches; False when none does"""
        for index, option in enumerate(self.options):
            if option.value == value:
                self.select_index(index)
                return True
        return False

    def selected_text(self) -> str:
        options = self.options
        if 0 <= self.selected_index < len(options):
            return options[self.selected_index].text
        return ""

    def current_value(self) -> Any:
        """Value as tracked in state: checked flag for checkables"""
        if self.is_checkable:
            return self.checked
        return self.value

    def is_empty(self) -> bool:
        if self.is_checkable:
            return not self.checked
        return not str(self.value).strip()


def is_control(node: Node) -> bool:
    return node.tag in CONTROL_TAGS and isinstance(node, Control)


def is_field_group(node: Node) -> bool:
    return node.has_class(FIELD_GROUP)
