"""
Layout Validator - Static checks of YAML form layouts
Validador de disenos - Comprobaciones estaticas de disenos YAML
"""

from dataclasses import dataclass, field
from typing import Any, List, Set

from .container_builder import ContainerType
from .descriptors import FieldType
from .layout_loader import DEFAULT_PROVIDERS, ITEM_KINDS, LayoutPack


@dataclass
class ValidationIssue:
    """Single validation finding / Hallazgo de validacion individual"""
    path: str
    message: str
    code: str
    value: Any = None


@dataclass
class ValidationResult:
    """Result of validation / Resultado de la validacion"""
    is_valid: bool
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    def add_error(self, path: str, message: str, code: str, value: Any = None):
        self.errors.append(ValidationIssue(path=path, message=message, code=code, value=value))
        self.is_valid = False

    def add_warning(self, path: str, message: str, code: str, value: Any = None):
        self.warnings.append(ValidationIssue(path=path, message=message, code=code, value=value))


class LayoutValidator:
    """
    Walks a layout's items and reports problems without building a page
    Recorre los elementos de un diseno y reporta problemas sin construir la pagina
    """

    FIELD_TYPES = frozenset(t.value for t in FieldType)
    CONTAINER_TYPES = frozenset(t.value for t in ContainerType)

    def __init__(self, layout: LayoutPack):
        self.layout = layout

    def validate(self) -> ValidationResult:
        result = ValidationResult(is_valid=True)

        manifest = self.layout.manifest
        for key in ("layout_id", "name", "version"):
            if key not in manifest:
                result.add_error("manifest", f"Manifest missing required field: {key}", "manifest")

        init_type = self.layout.get_config().get("init_type", "form")
        if init_type not in self.CONTAINER_TYPES:
            result.add_error("config.init_type", f"Unsupported container type: {init_type}", "container", init_type)

        items = self.layout.get_items()
        if not items:
            result.add_warning("items", "Layout defines no items", "empty")

        self._validate_items(items, "items", set(), result)
        return result

    def _validate_items(self, items: List[dict], path: str, names: Set[str], result: ValidationResult):
        for index, item in enumerate(items):
            item_path = f"{path}[{index}]"
            if not isinstance(item, dict):
                result.add_error(item_path, "Item must be a mapping", "type_error", item)
                continue

            kind = item.get("kind", "field")
            if kind not in ITEM_KINDS:
                result.add_error(item_path, f"Unknown item kind: {kind}", "kind", kind)
                continue

            if kind == "header":
                level = item.get("level", 2)
                if not isinstance(level, int) or not 1 <= level <= 6:
                    result.add_error(item_path, "Header level must be between 1 and 6", "level", level)

            elif kind in ("field", "list"):
                self._validate_named(item, item_path, names, result)
                if kind == "field":
                    self._validate_field(item, item_path, result)

            elif kind == "group":
                self._validate_items(item.get("items", []), f"{item_path}.items", names, result)

    def _validate_named(self, item: dict, path: str, names: Set[str], result: ValidationResult):
        name = item.get("name")
        if not name or not str(name).strip():
            result.add_error(path, "Field name is required", "required")
            return
        if name in names:
            result.add_error(path, f"Duplicate field name: {name}", "duplicate", name)
        names.add(name)

    def _validate_field(self, item: dict, path: str, result: ValidationResult):
        field_type = item.get("type", "text")
        if field_type not in self.FIELD_TYPES:
            result.add_error(path, f"Unknown field type: {field_type}", "field_type", field_type)

        if field_type in ("select", "datalist") and not item.get("options"):
            result.add_warning(path, f"'{item.get('name')}' has no options", "options")

        default = item.get("default")
        if default is not None and default not in DEFAULT_PROVIDERS:
            result.add_error(path, f"Unknown default: {default}", "default", default)

        if not item.get("label"):
            result.add_warning(path, f"Field '{item.get('name')}' has no label", "label")


def validate_layout(layout: LayoutPack) -> ValidationResult:
    """
    Convenience function to validate a layout
    Funcion de conveniencia para validar un diseno
    """
    return LayoutValidator(layout).validate()
