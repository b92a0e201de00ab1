"""
Container Builder - Root form container and structural helpers
Contenedor raiz del formulario y utilidades estructurales
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError, field_validator

from .errors import InvalidDescriptor
from .storage import DEFAULT_STORAGE_KEY
from .tree import FORM_HEADER, LINE_SPACER, PROC_PREFIX, SEPARATOR, Node

RULE_WIDTH = 120
RULE = "-" * RULE_WIDTH


class ContainerType(str, Enum):
    """Allowed root container kinds / Tipos de contenedor permitidos"""
    FORM = "form"
    DIV = "div"
    SECTION = "section"
    ARTICLE = "article"


class PageConfig(BaseModel):
    """Runtime configuration of a form page / Configuracion de la pagina"""
    form_class: str = "form-group"
    init_type: ContainerType = ContainerType.FORM
    storage_key: str = DEFAULT_STORAGE_KEY

    @field_validator("form_class")
    @classmethod
    def _form_class_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("container class must be a non-empty string")
        return value


def validate_config(config: Optional[Dict[str, Any]] = None) -> PageConfig:
    """
    Validate page configuration
    Validar configuracion de pagina

    Raises:
        InvalidDescriptor: On an unsupported container kind or blank class
    """
    if isinstance(config, PageConfig):
        return config
    try:
        return PageConfig.model_validate(config or {})
    except ValidationError as e:
        allowed = ", ".join(t.value for t in ContainerType)
        raise InvalidDescriptor(
            f"Invalid page configuration (container kinds: {allowed}): {e.errors()[0]['msg']}"
        ) from e


class ContainerBuilder:
    """
    Resolves the form root and adds structural nodes
    Resuelve la raiz del formulario y anade nodos estructurales
    """

    def __init__(self, host: Node, config: PageConfig):
        self.host = host
        self.config = config
        self._factories = {
            ContainerType.FORM: lambda: self._create_container("form"),
            ContainerType.DIV: lambda: self._create_container("div"),
            ContainerType.SECTION: lambda: self._create_container("section"),
            ContainerType.ARTICLE: lambda: self._create_container("article"),
        }
        self.form = self.init_container()

    def init_container(self) -> Node:
        """Reuse an existing root container or create one / Reutilizar o crear"""
        existing = self.host.find_by_class(self.config.form_class)
        if existing is not None:
            return existing

        container = self.create_container_by_type(self.config.init_type)
        self.host.append(container)
        return container

    def create_container_by_type(self, container_type: Any) -> Node:
        try:
            factory = self._factories[ContainerType(container_type)]
        except ValueError:
            raise InvalidDescriptor(f"Unsupported container type: {container_type}") from None
        return factory()

    def _create_container(self, tag: str) -> Node:
        return Node(tag, classes=[self.config.form_class])

    def create_element(
        self,
        tag: str,
        name: Optional[str] = None,
        text: str = "",
        parent: Optional[Node] = None,
        class_name: str = "",
        auto_proc: bool = True,
    ) -> Node:
        """
        Add an arbitrary element, tagged for verbatim text export
        Anadir un elemento arbitrario, marcado para exportacion literal

        Args:
            tag: Element tag
            name: Used to build the proc-<name> class
            text: Element text
            parent: Parent node (defaults to the form root)
            class_name: Extra classes
            auto_proc: Add the proc-<name> class when a name is given

        Returns:
            Created node
        """
        element = Node(tag, text=text)
        if class_name:
            element.add_class(class_name)
        if auto_proc and name:
            element.add_class(f"{PROC_PREFIX}-{name}")

        (parent or self.form).append(element)
        return element

    def add_div(
        self,
        class_name: str,
        parent: Optional[Node] = None,
        element_id: Optional[str] = None,
        attrs: Optional[Dict[str, Any]] = None,
    ) -> Node:
        div = Node("div", attrs=attrs)
        div.add_class(class_name)
        if element_id:
            div.attrs["id"] = element_id
        (parent or self.form).append(div)
        return div

    def add_header(self, text: str, level: int = 2, container: Optional[Node] = None) -> Node:
        """
        Add a heading to a container, or before the form root
        Anadir un titulo a un contenedor, o antes de la raiz del formulario

        Raises:
            InvalidDescriptor: If level is outside 1..6
        """
        if not isinstance(level, int) or level < 1 or level > 6:
            raise InvalidDescriptor("Header level must be between 1 and 6")

        header = Node(f"h{level}", classes=[FORM_HEADER, f"{FORM_HEADER}--{level}"], text=text)
        if container is not None:
            container.append(header)
        else:
            self.host.insert_before(header, self.form)
        return header

    def add_separator(self, parent: Optional[Node] = None) -> Node:
        separator = Node("div", classes=[SEPARATOR])
        separator.append(Node("hr"))
        (parent or self.form).append(separator)
        return separator

    def add_spacer(self, parent: Optional[Node] = None) -> Node:
        spacer = Node("div", classes=[LINE_SPACER], text=RULE)
        (parent or self.form).append(spacer)
        return spacer
