"""
==============================================================================
Authentication Endpoints
==============================================================================

Admin password setup, login, session lifetime and lockout status.

==============================================================================
"""

from typing import Optional

from fastapi import APIRouter, Depends

from furniture_visualizer.config import get_settings
from furniture_visualizer.core import exceptions
from furniture_visualizer.core.dependencies import (
    get_auth_service,
    get_bearer_token,
    require_admin_session,
)
from furniture_visualizer.schemas.auth import (
    AuthStatusResponse,
    ChangePasswordRequest,
    LoginRequest,
    SessionResponse,
    SetupRequest,
    TokenResponse,
    VerificationResult,
)
from furniture_visualizer.schemas.common import MessageResponse
from furniture_visualizer.services.auth_service import AuthService


router = APIRouter(prefix="/auth", tags=["Authentication"])


class AuthController:
    """Controller for admin authentication operations."""

    def __init__(self, auth_service: AuthService):
        self._service = auth_service

    def status(self, token: Optional[str]) -> AuthStatusResponse:
        """Setup state, validity of the presented session and lockout."""
        return AuthStatusResponse(
            is_set_up=self._service.is_set_up(),
            session_valid=self._service.is_token_valid(token) if token else False,
            lockout=self._service.get_lockout_status()
        )

    def setup(self, request: SetupRequest, token: Optional[str]) -> TokenResponse:
        """
        Set the admin password and sign in with it.

        Once a password exists, replacing it needs a valid admin session.
        The lockout is checked before anything is written.
        """
        if self._service.is_set_up() and not self._service.is_token_valid(token):
            raise exceptions.already_set_up()

        self._service.require_unlocked()

        self._service.setup_password(request.password)
        return self._token_response(self._service.verify_password(request.password))

    def login(self, request: LoginRequest) -> TokenResponse:
        """Verify the admin password and open a session."""
        return self._token_response(self._service.verify_password(request.password))

    def logout(self) -> MessageResponse:
        """Close the admin session."""
        if not self._service.logout():
            raise exceptions.internal_error("Failed to log out")
        return MessageResponse(message="Logged out")

    def extend(self) -> SessionResponse:
        """Slide the session expiry forward."""
        if not self._service.extend_session():
            raise exceptions.session_required()

        session = self._service.get_session()
        return SessionResponse(expires_at=session.expires_at if session else None)

    def change_password(self, request: ChangePasswordRequest) -> MessageResponse:
        """Change the admin password and end the session."""
        self._service.change_password(request.current_password, request.new_password)
        return MessageResponse(message="Password changed successfully. Please log in again.")

    def lockout(self) -> dict:
        """Current lockout state."""
        return {
            "success": True,
            "lockout": self._service.get_lockout_status().model_dump()
        }

    @staticmethod
    def _token_response(result: VerificationResult) -> TokenResponse:
        return TokenResponse(
            access_token=result.token,
            expires_at=result.expires_at,
            expires_in=int(get_settings().session_timeout.total_seconds())
        )


@router.get("/status", response_model=AuthStatusResponse)
async def auth_status(
    token: Optional[str] = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Whether the admin is set up, the session is valid, and lockout state."""
    controller = AuthController(auth_service)
    return controller.status(token)


@router.post("/setup", response_model=TokenResponse)
async def setup_admin(
    request: SetupRequest,
    token: Optional[str] = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service)
):
    """First-time admin password setup."""
    controller = AuthController(auth_service)
    return controller.setup(request, token)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, auth_service: AuthService = Depends(get_auth_service)):
    """Authenticate with the admin password and get a session token."""
    controller = AuthController(auth_service)
    return controller.login(request)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    token: str = Depends(require_admin_session),
    auth_service: AuthService = Depends(get_auth_service)
):
    """End the admin session."""
    controller = AuthController(auth_service)
    return controller.logout()


@router.post("/extend", response_model=SessionResponse)
async def extend_session(
    token: str = Depends(require_admin_session),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Extend the admin session."""
    controller = AuthController(auth_service)
    return controller.extend()


@router.put("/change-password", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    token: str = Depends(require_admin_session),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Change the admin password."""
    controller = AuthController(auth_service)
    return controller.change_password(request)


@router.get("/lockout")
async def lockout_status(auth_service: AuthService = Depends(get_auth_service)):
    """Get the current lockout state."""
    controller = AuthController(auth_service)
    return controller.lockout()
