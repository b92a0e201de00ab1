"""
Descriptors - Declarative field descriptions
Descripciones declarativas de campos
"""

from enum import Enum
from typing import Any, List, Mapping, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidDescriptor
from .tree import Node


DEFAULT_VALIDATION_MESSAGE = "This field is required"


class FieldType(str, Enum):
    """Field type tags / Tipos de campo"""
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    TIME = "time"
    EMAIL = "email"
    TEL = "tel"
    SELECT = "select"
    DATALIST = "datalist"
    TEXTAREA = "textarea"
    CHECKBOX = "checkbox"
    RADIO = "radio"

    @property
    def is_text_like(self) -> bool:
        return self in TEXT_LIKE_TYPES

    @property
    def is_checkable(self) -> bool:
        return self in (FieldType.CHECKBOX, FieldType.RADIO)


TEXT_LIKE_TYPES = frozenset({
    FieldType.TEXT, FieldType.NUMBER, FieldType.DATE,
    FieldType.TIME, FieldType.EMAIL, FieldType.TEL,
})


class FieldOption(BaseModel):
    """Option of a select or datalist field / Opcion de campo"""
    value: str
    text: str


class FieldDescriptor(BaseModel):
    """
    Structured description of one form field
    Descripcion estructurada de un campo del formulario
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    type: FieldType = FieldType.TEXT
    name: str
    label: str = ""
    value: Union[int, str] = Field(
        default="", validation_alias=AliasChoices("value", "initialValue", "initial_value")
    )
    options: List[FieldOption] = Field(default_factory=list)
    required: bool = True
    sub_text: str = Field(default="", validation_alias=AliasChoices("sub_text", "subText"))
    checked: bool = False
    class_name: str = Field(default="", validation_alias=AliasChoices("class_name", "className"))
    validation_message: str = Field(
        default=DEFAULT_VALIDATION_MESSAGE,
        validation_alias=AliasChoices("validation_message", "validationMessage"),
    )
    container: Optional[Node] = Field(
        default=None,
        exclude=True,
        validation_alias=AliasChoices("container", "targetContainer", "target_container"),
    )

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("field name must be a non-empty string")
        return value

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, bool) or isinstance(value, float):
            return str(value)
        return value

    @field_validator("label", "sub_text", "class_name", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("options", mode="before")
    @classmethod
    def _normalize_options(cls, options: Any) -> Any:
        if options is None:
            return []
        normalized = []
        for opt in options:
            if isinstance(opt, FieldOption):
                normalized.append(opt)
            elif isinstance(opt, Mapping):
                value = opt.get("value", opt.get("text"))
                text = opt.get("text", value)
                normalized.append({"value": str(value), "text": str(text)})
            else:
                normalized.append({"value": str(opt), "text": str(opt)})
        return normalized


def parse_descriptor(data: Union[FieldDescriptor, Mapping[str, Any]]) -> FieldDescriptor:
    """
    Build a descriptor from a raw mapping
    Construir un descriptor desde un diccionario

    Args:
        data: Descriptor instance or mapping (YAML/dict shape)

    Returns:
        Validated FieldDescriptor

    Raises:
        InvalidDescriptor: If the name is missing or blank, or the type is unknown
    """
    if isinstance(data, FieldDescriptor):
        return data

    if not isinstance(data, Mapping):
        raise InvalidDescriptor(f"Field descriptor must be a mapping, got {type(data).__name__}")

    if not data.get("name"):
        raise InvalidDescriptor('Parameter "name" is required for an input field')

    try:
        return FieldDescriptor.model_validate(dict(data))
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise InvalidDescriptor(f"Invalid descriptor for field '{data.get('name')}': {problems}") from e
