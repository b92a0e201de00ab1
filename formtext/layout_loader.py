"""
Layout Loader - YAML form layouts and page building
Cargador de disenos de formulario YAML y construccion de paginas
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .clock import current_date, current_time_rounded
from .errors import InvalidDescriptor
from .page import Page
from .tree import Node

logger = logging.getLogger(__name__)

LAYOUTS_DIR = Path(__file__).parent.parent / "config" / "layouts"

ITEM_KINDS = frozenset({"header", "separator", "spacer", "text", "field", "list", "group"})

# Dynamic defaults a field may request instead of a literal value
DEFAULT_PROVIDERS = {
    "today": lambda: current_date(),
    "now": lambda: current_time_rounded(False),
    "now_rounded": lambda: current_time_rounded(True),
}


class LayoutPack:
    """Lazy-loading layout container / Contenedor de diseno con carga perezosa"""

    def __init__(self, layout_id: str, base_path: Optional[Path] = None):
        self.layout_id = layout_id
        self.base_path = base_path if base_path else LAYOUTS_DIR / layout_id
        self._cache: Dict[str, dict] = {}

    @property
    def manifest(self) -> dict:
        """Layout metadata"""
        return self._load("manifest.yaml")

    @property
    def form(self) -> dict:
        """Form configuration and item tree"""
        return self._load("form.yaml")

    def _load(self, filename: str) -> dict:
        """Load a YAML file with caching"""
        if filename not in self._cache:
            self._cache[filename] = load_yaml_file(self.base_path / filename)
        return self._cache[filename]

    def get_name(self) -> str:
        return self.manifest.get("name", self.layout_id)

    def get_config(self) -> dict:
        """Page configuration: manifest values overridden by form.yaml"""
        config = dict(self.manifest.get("config", {}))
        config.update(self.form.get("config", {}))
        if "storage_key" not in config:
            config["storage_key"] = self.manifest.get("storage_key", f"formData:{self.layout_id}")
        return config

    def get_items(self) -> List[dict]:
        return self.form.get("items", [])

    def clear_cache(self):
        """Clear the internal cache"""
        self._cache.clear()


@lru_cache(maxsize=32)
def load_yaml_file(path: Path) -> dict:
    """Cached YAML file loading / Carga de archivo YAML con cache"""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML file {path}: {e}")


def load_layout(layout_id: str) -> LayoutPack:
    """Load a layout by ID / Cargar un diseno por ID"""
    return LayoutPack(layout_id)


def list_available_layouts() -> list:
    """List all available layouts / Listar todos los disenos disponibles"""
    if not LAYOUTS_DIR.exists():
        return []
    return sorted(d.name for d in LAYOUTS_DIR.iterdir() if d.is_dir())


def build_page(layout: LayoutPack, page: Optional[Page] = None, **capabilities: Any) -> Page:
    """
    Build a page from a layout
    Construir una pagina a partir de un diseno

    Args:
        layout: LayoutPack to render
        page: Existing page to populate (a new one is created otherwise)
        **capabilities: store / clipboard / notifier passed to a new Page

    Returns:
        The populated page

    Raises:
        InvalidDescriptor: On unknown item kinds or invalid field descriptors
    """
    if page is None:
        page = Page(config=layout.get_config(), **capabilities)

    _build_items(page, layout.get_items(), page.form)
    logger.info("Built layout %r with %d tracked fields", layout.layout_id, len(page.state))
    return page


def _build_items(page: Page, items: List[dict], parent: Node) -> None:
    for index, item in enumerate(items):
        kind = item.get("kind", "field")

        if kind == "header":
            page.add_header(item.get("text", ""), item.get("level", 2), parent)

        elif kind == "separator":
            page.add_separator(parent)

        elif kind == "spacer":
            page.add_spacer(parent)

        elif kind == "text":
            page.create_element(
                item.get("tag", "div"),
                name=item.get("name"),
                text=item.get("text", ""),
                parent=parent,
                class_name=item.get("class_name", ""),
            )

        elif kind == "field":
            page.add_field(field_params(item, parent))

        elif kind == "list":
            page.create_input_list(item.get("name", ""), item.get("values"), parent)

        elif kind == "group":
            group = page.add_div(item.get("class_name", "group"), parent)
            _build_items(page, item.get("items", []), group)

        else:
            raise InvalidDescriptor(f"Unknown layout item kind at position {index}: {kind!r}")


def field_params(item: dict, container: Optional[Node] = None) -> Dict[str, Any]:
    """Field descriptor mapping for a layout item / Descriptor para un elemento"""
    params = {k: v for k, v in item.items() if k not in ("kind", "default")}
    default = item.get("default")
    if default is not None:
        provider = DEFAULT_PROVIDERS.get(default)
        if provider is None:
            raise InvalidDescriptor(f"Unknown default {default!r} for field {item.get('name')!r}")
        params["value"] = provider()
    if container is not None:
        params["container"] = container
    return params
