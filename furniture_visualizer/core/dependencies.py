"""
==============================================================================
FastAPI Dependencies Module
==============================================================================

Dependency injection for storage, services and admin route protection.

This module implements:
- SessionGuard: Bearer token check against the Auth Gate session
- FastAPI dependencies for services and the shared catalog
- require_admin_session for administrative routes

Dependency Hierarchy:
--------------------
                    ┌─────────────────┐
                    │    get_db()     │
                    └────────┬────────┘
                             │
                    ┌────────▼────────┐
                    │   get_store()   │
                    └────────┬────────┘
                             │
        ┌────────────────────┼────────────────────┐
        │                    │                    │
┌───────▼───────┐   ┌───────▼────────┐   ┌───────▼──────────────┐
│get_auth_svc   │   │get_storage_svc │   │require_admin_session │
└───────────────┘   └────────────────┘   └──────────────────────┘

The catalog and the text generator live on app.state and are owned by
the application; get_catalog() and get_visualization_service() read them
from the request.

Usage Examples:
--------------
    # Require a valid admin session
    @router.put("/barcodes/{barcode}")
    async def assign(barcode: str, token: str = Depends(require_admin_session)):
        ...

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from furniture_visualizer.catalog import BarcodeCatalog
from furniture_visualizer.core import exceptions
from furniture_visualizer.db.database import get_db
from furniture_visualizer.services import AuthService, StorageService, VisualizationService
from furniture_visualizer.storage import KeyValueStore


# Module logger
logger = logging.getLogger(__name__)

# HTTP Bearer security scheme for Swagger UI
security_scheme = HTTPBearer(auto_error=False)


class SessionGuard:
    """
    Checks a presented bearer token against the admin session.

    A valid session is extended on every successful check, so an admin
    who keeps working is not logged out mid-task.

    Example:
        >>> guard = SessionGuard(auth_service)
        >>> token = guard.require_session(credentials)
    """

    def __init__(self, auth_service: AuthService) -> None:
        self._auth = auth_service

    def extract_token(self, credentials: Optional[HTTPAuthorizationCredentials]) -> str:
        """
        Extract the session token from the Authorization header.

        Raises:
            AppException: SESSION_REQUIRED if no credentials are provided
        """
        if not credentials or not credentials.credentials:
            logger.debug("No authorization credentials provided")
            raise exceptions.session_required()
        return credentials.credentials

    def require_session(self, credentials: Optional[HTTPAuthorizationCredentials]) -> str:
        """
        Validate the token and slide the session expiry.

        Returns:
            The accepted token

        Raises:
            AppException: SESSION_REQUIRED if the token is unknown or expired
        """
        token = self.extract_token(credentials)

        if not self._auth.is_token_valid(token):
            logger.warning("Rejected admin request with invalid or expired session")
            raise exceptions.session_required()

        self._auth.extend_session()
        return token


# =============================================================================
# FASTAPI DEPENDENCY FUNCTIONS
# =============================================================================

def get_store(db: Session = Depends(get_db)) -> KeyValueStore:
    """Slot store bound to the request's database session."""
    return KeyValueStore(db)


def get_auth_service(store: KeyValueStore = Depends(get_store)) -> AuthService:
    """Auth Gate for the request."""
    return AuthService(store)


def get_storage_service(store: KeyValueStore = Depends(get_store)) -> StorageService:
    """Application data storage for the request."""
    return StorageService(store)


def get_catalog(request: Request) -> BarcodeCatalog:
    """
    Catalog owned by the application.

    Raises:
        AppException: If the catalog was not loaded at startup
    """
    catalog = getattr(request.app.state, "catalog", None)
    if catalog is None:
        logger.error("Catalog requested before startup completed")
        raise exceptions.internal_error("Catalog not loaded")
    return catalog


def get_visualization_service(request: Request) -> VisualizationService:
    """Swap description service using the application's text generator, if any."""
    generator = getattr(request.app.state, "text_generator", None)
    return VisualizationService(generator)


async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme)
) -> Optional[str]:
    """Bearer token if one was sent, without validating it."""
    if not credentials:
        return None
    return credentials.credentials


async def require_admin_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
    auth_service: AuthService = Depends(get_auth_service)
) -> str:
    """
    FastAPI dependency requiring a valid admin session.

    Returns:
        The session token

    Raises:
        AppException: SESSION_REQUIRED (401)

    Usage:
        @router.post("/auth/logout")
        async def logout(token: str = Depends(require_admin_session)):
            ...
    """
    guard = SessionGuard(auth_service)
    return guard.require_session(credentials)
