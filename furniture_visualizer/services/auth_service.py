"""
==============================================================================
Authentication Service Module
==============================================================================

Single-admin Auth Gate: password setup, verification with progressive
lockout, and session lifetime.

State Machine:
-------------

    ┌─────────────┐  setup_password()  ┌──────────────────────────────┐
    │ NOT_SET_UP  │ ─────────────────▶ │            SET_UP            │
    └─────────────┘                    │                              │
                                       │  UNLOCKED ⇄ LOCKED_OUT       │
                                       │  (failed attempts / expiry)  │
                                       │                              │
                                       │  NO_SESSION ⇄ SESSION_ACTIVE │
                                       │  (verify / logout / expiry)  │
                                       └──────────────────────────────┘

Verification Flow:
-----------------
    ┌─────────────┐     ┌─────────────┐
    │   Locked?   │────▶│    yes      │ → LOCKED_OUT (remaining minutes)
    └──────┬──────┘     └─────────────┘
    ┌──────▼──────┐     ┌─────────────┐
    │ Credential? │────▶│    none     │ → NOT_SET_UP
    └──────┬──────┘     └─────────────┘
    ┌──────▼──────┐     ┌─────────────┐
    │   Digest    │────▶│  mismatch   │ → INVALID_PASSWORD (N remaining)
    │   matches?  │     │  count + 1  │ → TOO_MANY_ATTEMPTS at the limit
    └──────┬──────┘     └─────────────┘
    ┌──────▼──────┐
    │ Clear fails │
    │ New session │ → {success, token}
    └─────────────┘

Expiry of both the lockout and the session is evaluated lazily: the
record is removed by the next status check that sees it expired.

==============================================================================
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

from pydantic import ValidationError

from furniture_visualizer.config import Settings, get_settings
from furniture_visualizer.core import exceptions
from furniture_visualizer.core.exceptions import StorageError
from furniture_visualizer.core.security import SecurityManager, get_security_manager
from furniture_visualizer.schemas.auth import LockoutStatus, VerificationResult
from furniture_visualizer.storage import (
    AdminCredential,
    AuthSession,
    FailedAttemptRecord,
    KeyValueStore,
    StorageKeys,
)
from furniture_visualizer.utils.validators import PasswordValidator


# Module logger
logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(timezone.utc)


class AuthService:
    """
    Auth Gate for the single admin identity.

    Attributes:
        _store: Slot store holding credential, session and failed attempts
        _security: SecurityManager for digests and tokens
        _settings: Application settings (limits and timeouts)
        _clock: Callable returning the current aware datetime

    Example:
        >>> auth = AuthService(KeyValueStore(db))
        >>> auth.setup_password("secret1")
        True
        >>> result = auth.verify_password("secret1")
        >>> auth.is_session_valid()
        True
    """

    def __init__(
        self,
        store: KeyValueStore,
        security: Optional[SecurityManager] = None,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], datetime]] = None
    ) -> None:
        self._store = store
        self._security = security or get_security_manager()
        self._settings = settings or get_settings()
        self._clock = clock or utc_now
        self._password_validator = PasswordValidator(self._settings.min_password_length)

    # =========================================================================
    # SETUP
    # =========================================================================

    def is_set_up(self) -> bool:
        """
        Check whether an admin credential exists.

        Fails closed: storage errors report False.
        """
        try:
            return self._store.get_item(StorageKeys.ADMIN_CREDENTIALS) is not None
        except StorageError as e:
            logger.error(f"Error checking admin setup: {e}")
            return False

    def setup_password(self, password: Optional[str]) -> bool:
        """
        Store a new admin credential, replacing any existing one.

        Raises:
            AppException: WEAK_PASSWORD if the password is missing or short
            AppException: SETUP_FAILED if the credential cannot be written
        """
        self._require_strong(password)

        try:
            self._write_credential(password)
        except StorageError as e:
            logger.error(f"Error setting up admin password: {e}")
            raise exceptions.setup_failed() from e

        logger.info("✅ Admin password set up")
        return True

    # =========================================================================
    # VERIFICATION
    # =========================================================================

    def verify_password(self, password: str) -> VerificationResult:
        """
        Verify the admin password and open a session.

        Returns:
            VerificationResult with the new session token

        Raises:
            AppException: LOCKED_OUT while a lockout is active
            AppException: NOT_SET_UP if no credential exists
            AppException: INVALID_PASSWORD with the remaining attempts
            AppException: TOO_MANY_ATTEMPTS when this failure starts a lockout
            AppException: AUTHENTICATION_FAILED on storage errors
        """
        try:
            return self._verify(password)
        except StorageError as e:
            logger.error(f"Error verifying password: {e}")
            raise exceptions.authentication_failed() from e

    def require_unlocked(self) -> None:
        """
        Refuse credential changes while a lockout is active.

        Raises:
            AppException: LOCKED_OUT while a lockout is active
        """
        self._refuse_if_locked(self.get_lockout_status())

    @staticmethod
    def _refuse_if_locked(status: LockoutStatus) -> None:
        if status.is_locked:
            minutes = math.ceil(status.remaining_time / 60000)
            logger.warning(f"Request refused: locked for {minutes} more minute(s)")
            raise exceptions.locked_out(minutes, status.remaining_time)

    def _verify(self, password: str) -> VerificationResult:
        self._refuse_if_locked(self._lockout_status())

        credential = self._read_credential()
        if credential is None:
            raise exceptions.not_set_up()

        if not self._security.verify_password(password, credential.salt, credential.hash):
            attempts, locked = self._record_failed_attempt()
            if locked:
                logger.warning(f"Admin locked out after {attempts} failed attempts")
                raise exceptions.too_many_attempts(self._settings.lockout_duration_minutes)

            remaining = max(0, self._settings.max_failed_attempts - attempts)
            logger.warning(f"Invalid admin password ({remaining} attempts remaining)")
            raise exceptions.invalid_password(remaining)

        self._store.remove_item(StorageKeys.FAILED_ATTEMPTS)
        session = self._create_session()

        logger.info("✅ Admin authenticated")
        return VerificationResult(token=session.token, expires_at=session.expires_at)

    def _record_failed_attempt(self) -> Tuple[int, bool]:
        """
        Count one failed verification.

        Returns:
            Tuple of (attempts, is_now_locked)
        """
        record = self._read_failed_attempts()
        attempts = (record.attempts if record else 0) + 1

        updated = FailedAttemptRecord(attempts=attempts)
        locked = attempts >= self._settings.max_failed_attempts
        if locked:
            updated.lockout_until = self._clock() + self._settings.lockout_duration

        self._store.set_json(StorageKeys.FAILED_ATTEMPTS, updated.model_dump(mode="json"))
        return attempts, locked

    # =========================================================================
    # LOCKOUT
    # =========================================================================

    def get_lockout_status(self) -> LockoutStatus:
        """
        Report the lockout state.

        An expired lockout is cleared as a side effect and reported as
        unlocked with zero attempts. Storage errors report unlocked.
        """
        try:
            return self._lockout_status()
        except StorageError as e:
            logger.error(f"Error getting lockout status: {e}")
            return LockoutStatus()

    def _lockout_status(self) -> LockoutStatus:
        record = self._read_failed_attempts()
        if record is None:
            return LockoutStatus()

        if record.lockout_until is None:
            return LockoutStatus(attempts=record.attempts)

        now = self._clock()
        if now < record.lockout_until:
            remaining = record.lockout_until - now
            return LockoutStatus(
                is_locked=True,
                remaining_time=math.ceil(remaining.total_seconds() * 1000),
                attempts=record.attempts,
            )

        self._store.remove_item(StorageKeys.FAILED_ATTEMPTS)
        logger.info("Lockout expired, failed attempts reset")
        return LockoutStatus()

    # =========================================================================
    # SESSION
    # =========================================================================

    def is_session_valid(self) -> bool:
        """
        Check the admin session.

        An expired session is deleted as a side effect. Storage errors
        report False.
        """
        try:
            session = self._read_session()
        except StorageError as e:
            logger.error(f"Error checking session: {e}")
            return False

        if session is None:
            return False

        if session.is_expired(self._clock()):
            logger.info("Admin session expired")
            self.logout()
            return False

        return True

    def is_token_valid(self, token: Optional[str]) -> bool:
        """Check that a presented token belongs to the current, unexpired session."""
        session = self.get_session()
        if session is None or not SecurityManager.tokens_match(token, session.token):
            return False
        return self.is_session_valid()

    def get_session(self) -> Optional[AuthSession]:
        """Current session record, or None (also on storage errors)."""
        try:
            return self._read_session()
        except StorageError as e:
            logger.error(f"Error reading session: {e}")
            return None

    def extend_session(self) -> bool:
        """
        Push the session expiry to now + session timeout.

        Returns:
            False if there is no session or storage fails
        """
        try:
            session = self._read_session()
            if session is None:
                return False

            session.expires_at = self._clock() + self._settings.session_timeout
            self._write_session(session)
            return True
        except StorageError as e:
            logger.error(f"Error extending session: {e}")
            return False

    def logout(self) -> bool:
        """
        End the admin session.

        Returns:
            False only if the delete fails
        """
        try:
            self._store.remove_item(StorageKeys.AUTH_SESSION)
        except StorageError as e:
            logger.error(f"Error logging out: {e}")
            return False

        logger.info("Admin session closed")
        return True

    def _create_session(self) -> AuthSession:
        now = self._clock()
        session = AuthSession(
            token=self._security.generate_session_token(),
            created_at=now,
            expires_at=now + self._settings.session_timeout,
        )
        self._write_session(session)
        return session

    # =========================================================================
    # PASSWORD MANAGEMENT
    # =========================================================================

    def change_password(self, current_password: str, new_password: Optional[str]) -> bool:
        """
        Replace the admin password after re-verifying the current one.

        The re-verification goes through verify_password, so a wrong
        current password counts as a failed attempt. On success the
        session is closed.

        Raises:
            AppException: WEAK_PASSWORD if the new password is missing or short
            AppException: any verify_password error
            AppException: PASSWORD_CHANGE_FAILED if the credential cannot be written
        """
        if not self._password_validator.is_valid(new_password):
            raise exceptions.weak_password(self._settings.min_password_length, new=True)

        self.verify_password(current_password)

        try:
            existing = self._read_credential()
            self._write_credential(
                new_password,
                created_at=existing.created_at if existing else None
            )
        except StorageError as e:
            logger.error(f"Error changing admin password: {e}")
            raise exceptions.password_change_failed() from e

        self.logout()

        logger.info("✅ Admin password changed")
        return True

    def reset_auth_data(self) -> bool:
        """
        Delete credential, session and failed attempts in one transaction.

        Returns:
            False if the delete fails (nothing is removed)
        """
        try:
            self._store.multi_remove(StorageKeys.AUTH_KEYS)
        except StorageError as e:
            logger.error(f"Error resetting auth data: {e}")
            return False

        logger.warning("All admin auth data reset")
        return True

    # =========================================================================
    # RECORD ACCESS
    # =========================================================================

    def _require_strong(self, password: Optional[str]) -> None:
        if not self._password_validator.is_valid(password):
            raise exceptions.weak_password(self._settings.min_password_length)

    def _write_credential(self, password: str, created_at: Optional[datetime] = None) -> None:
        now = self._clock()
        salt = self._security.generate_salt()
        credential = AdminCredential(
            hash=self._security.hash_password(password, salt),
            salt=salt,
            created_at=created_at or now,
            updated_at=now,
        )
        self._store.set_json(StorageKeys.ADMIN_CREDENTIALS, credential.model_dump(mode="json"))

    def _read_credential(self) -> Optional[AdminCredential]:
        return self._read_record(StorageKeys.ADMIN_CREDENTIALS, AdminCredential)

    def _read_failed_attempts(self) -> Optional[FailedAttemptRecord]:
        return self._read_record(StorageKeys.FAILED_ATTEMPTS, FailedAttemptRecord)

    def _read_session(self) -> Optional[AuthSession]:
        return self._read_record(StorageKeys.AUTH_SESSION, AuthSession)

    def _write_session(self, session: AuthSession) -> None:
        self._store.set_json(StorageKeys.AUTH_SESSION, session.model_dump(mode="json"))

    def _read_record(self, key, model):
        data = self._store.get_json(key)
        if data is None:
            return None
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"Invalid record in slot {key}: {e}")
            raise StorageError("Stored data is corrupt", key) from e
