"""
==============================================================================
Services Package - Business Logic Layer
==============================================================================

Service classes implementing the application logic.

This package provides:
- AuthService: Admin password, lockout and session lifecycle
- StorageService: Custom catalog entries, preferences and scan history
- VisualizationService: Material swap descriptions

Architecture Pattern: Service Layer
----------------------------------
Services sit between the API endpoints and the slot store.

    ┌─────────────────┐
    │   API Router    │
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │    Service      │  ← Business Logic
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │  KeyValueStore  │  ← Storage slots (via ORM)
    └─────────────────┘

Usage:
------
    from furniture_visualizer.services import AuthService

    auth_service = AuthService(KeyValueStore(db_session))
    result = auth_service.verify_password("secret1")

==============================================================================
"""

from .auth_service import AuthService
from .storage_service import StorageService
from .visualization_service import VisualizationService, TextGenerator

__all__ = [
    "AuthService",
    "StorageService",
    "VisualizationService",
    "TextGenerator",
]
