"""
==============================================================================
Persisted Auth Records
==============================================================================

Pydantic models for the three Auth Gate slots.

    admin_credentials  → AdminCredential
    auth_session       → AuthSession
    failed_attempts    → FailedAttemptRecord

Timestamps are timezone-aware UTC datetimes, serialized as ISO-8601.

==============================================================================
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class AdminCredential(BaseModel):
    """Salted digest of the single admin password."""

    hash: str = Field(..., min_length=1)
    salt: str = Field(..., min_length=1)
    created_at: datetime
    updated_at: datetime


class FailedAttemptRecord(BaseModel):
    """Consecutive failed verifications and the lockout they triggered."""

    attempts: int = Field(default=0, ge=0)
    lockout_until: Optional[datetime] = None


class AuthSession(BaseModel):
    """Time-bounded proof of a successful verification."""

    token: str = Field(..., min_length=1)
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """A session is expired once the clock passes expires_at."""
        return now > self.expires_at
