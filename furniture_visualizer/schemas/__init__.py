"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Request and response schemas using Pydantic for validation.

This package provides:
- Common: Shared response schemas
- Auth: Admin Auth Gate schemas
- Catalog: Barcode record schemas
- Preferences: User preferences and scan history
- Visualization: Material swap descriptions

==============================================================================
"""

from .common import MessageResponse
from .auth import (
    LockoutStatus,
    VerificationResult,
    SetupRequest,
    LoginRequest,
    ChangePasswordRequest,
    TokenResponse,
    SessionResponse,
    AuthStatusResponse,
)
from .catalog import (
    BarcodeAssignRequest,
    GeneratedIdResponse,
)
from .preferences import UserPreferences, PreferencesResponse, ScanHistoryResponse
from .visualization import VisualizeRequest, SwapDescription, VisualizeResponse

__all__ = [
    # Common
    "MessageResponse",
    # Auth
    "LockoutStatus",
    "VerificationResult",
    "SetupRequest",
    "LoginRequest",
    "ChangePasswordRequest",
    "TokenResponse",
    "SessionResponse",
    "AuthStatusResponse",
    # Catalog
    "BarcodeAssignRequest",
    "GeneratedIdResponse",
    # Preferences
    "UserPreferences",
    "PreferencesResponse",
    "ScanHistoryResponse",
    # Visualization
    "VisualizeRequest",
    "SwapDescription",
    "VisualizeResponse",
]
