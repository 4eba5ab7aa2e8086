"""
==============================================================================
Authentication Schemas Module
==============================================================================

Request and response schemas for the admin Auth Gate.

==============================================================================
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class LockoutStatus(BaseModel):
    """Current lockout state. remaining_time is in milliseconds."""
    is_locked: bool = Field(default=False)
    remaining_time: int = Field(default=0, ge=0)
    attempts: int = Field(default=0, ge=0)


class VerificationResult(BaseModel):
    """Outcome of a successful password verification."""
    success: bool = Field(default=True)
    token: str
    expires_at: datetime


class SetupRequest(BaseModel):
    """First-time admin password setup."""
    password: str = Field(..., max_length=128)
    confirm_password: Optional[str] = Field(default=None, max_length=128)

    @model_validator(mode="after")
    def passwords_match(self) -> "SetupRequest":
        if self.confirm_password is not None and self.confirm_password != self.password:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(BaseModel):
    """Admin password login."""
    password: str = Field(..., min_length=1, max_length=128)


class ChangePasswordRequest(BaseModel):
    """Password change request."""
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., max_length=128)


class TokenResponse(BaseModel):
    """Token response after authentication."""
    success: bool = Field(default=True)
    access_token: str
    token_type: str = Field(default="bearer")
    expires_at: datetime
    expires_in: int


class SessionResponse(BaseModel):
    """Session state after an extend request."""
    success: bool = Field(default=True)
    expires_at: Optional[datetime] = None


class AuthStatusResponse(BaseModel):
    """Setup, session and lockout state in one response."""
    success: bool = Field(default=True)
    is_set_up: bool
    session_valid: bool
    lockout: LockoutStatus
