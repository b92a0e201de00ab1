"""
Errors - Exception taxonomy for the form engine
Taxonomia de excepciones del motor de formularios
"""

from typing import Optional


class FormTextError(Exception):
    """Base exception for the form engine"""
    pass


class InvalidDescriptor(FormTextError, ValueError):
    """Raised when a field, container or header definition cannot be built"""
    pass


class PersistenceFailure(FormTextError):
    """Raised by storage backends when a key cannot be read or written"""
    pass


class ExportFailure(FormTextError):
    """
    Raised when a step of the export pipeline fails
    Lanzada cuando falla un paso del proceso de exportacion
    """

    def __init__(self, step: str, cause: Optional[BaseException] = None):
        self.step = step
        self.cause = cause
        message = f"Export failed at step '{step}'"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
