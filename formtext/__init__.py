# Formtext - Form building and text export engine
# Motor de construccion de formularios y exportacion de texto

from .errors import FormTextError, InvalidDescriptor, PersistenceFailure, ExportFailure
from .tree import Node, Control, OptionNode
from .descriptors import FieldDescriptor, FieldOption, FieldType, parse_descriptor
from .storage import KeyValueStore, MemoryStore, JsonFileStore, DEFAULT_STORAGE_KEY
from .state_store import StateStore
from .container_builder import ContainerBuilder, ContainerType, PageConfig, validate_config
from .field_factory import FieldFactory
from .text_serializer import serialize
from .text_formatter import TextFormatter, format_text, format_line_group, ensure_ends_with_dot
from .export import ExportFacade, ExportResult, MemoryClipboard, LoggingNotifier
from .page import Page
from .layout_loader import LayoutPack, load_layout, list_available_layouts, build_page
from .layout_validator import validate_layout, ValidationResult
from .clock import current_date, current_time_rounded

__all__ = [
    'FormTextError',
    'InvalidDescriptor',
    'PersistenceFailure',
    'ExportFailure',
    'Node',
    'Control',
    'OptionNode',
    'FieldDescriptor',
    'FieldOption',
    'FieldType',
    'parse_descriptor',
    'KeyValueStore',
    'MemoryStore',
    'JsonFileStore',
    'DEFAULT_STORAGE_KEY',
    'StateStore',
    'ContainerBuilder',
    'ContainerType',
    'PageConfig',
    'validate_config',
    'FieldFactory',
    'serialize',
    'TextFormatter',
    'format_text',
    'format_line_group',
    'ensure_ends_with_dot',
    'ExportFacade',
    'ExportResult',
    'MemoryClipboard',
    'LoggingNotifier',
    'Page',
    'LayoutPack',
    'load_layout',
    'list_available_layouts',
    'build_page',
    'validate_layout',
    'ValidationResult',
    'current_date',
    'current_time_rounded',
]
