"""
==============================================================================
Core Package
==============================================================================

Core utilities and infrastructure for the application.

Modules:
--------
- exceptions: AppException class and error factory functions
- security: SecurityManager for password digests and session tokens
- dependencies: FastAPI dependency injection functions

Usage:
------
    from furniture_visualizer.core import AppException, get_security_manager

    # Or use exception factory functions via module
    from furniture_visualizer.core import exceptions
    raise exceptions.not_set_up()

The dependencies module is imported directly by the API layer
(furniture_visualizer.core.dependencies) since it depends on services.

==============================================================================
"""

from .exceptions import (
    AppException,
    StorageError,
    register_exception_handlers,
)
from .security import SecurityManager, get_security_manager

__all__ = [
    "AppException",
    "StorageError",
    "register_exception_handlers",
    "SecurityManager",
    "get_security_manager",
]
