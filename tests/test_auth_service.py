"""
==============================================================================
Auth Gate Tests
==============================================================================

Tests for admin setup, verification, lockout and session lifetime.

==============================================================================
"""

import json
from datetime import timedelta

import pytest

from furniture_visualizer.core.exceptions import AppException
from furniture_visualizer.services import AuthService
from furniture_visualizer.storage import KeyValueStore, StorageKeys


def fail_verification(auth_service: AuthService, times: int) -> AppException:
    """Submit a wrong password several times, returning the last error."""
    error = None
    for _ in range(times):
        with pytest.raises(AppException) as exc_info:
            auth_service.verify_password("wrong-password")
        error = exc_info.value
    return error


class TestSetup:
    """Tests for first-time password setup."""

    def test_fresh_install(self, auth_service: AuthService):
        """Test nothing is set up initially."""
        assert auth_service.is_set_up() is False

    def test_short_password_rejected(self, auth_service: AuthService):
        """Test passwords shorter than six characters fail."""
        with pytest.raises(AppException) as exc_info:
            auth_service.setup_password("12345")

        assert exc_info.value.code == "WEAK_PASSWORD"
        assert exc_info.value.message == "Password must be at least 6 characters"
        assert auth_service.is_set_up() is False

    def test_missing_password_rejected(self, auth_service: AuthService):
        """Test a missing password fails."""
        with pytest.raises(AppException) as exc_info:
            auth_service.setup_password(None)
        assert exc_info.value.code == "WEAK_PASSWORD"

    def test_setup_success(self, auth_service: AuthService, store: KeyValueStore):
        """Test setup stores a salted digest, never the password."""
        assert auth_service.setup_password("abcdef") is True
        assert auth_service.is_set_up() is True

        credential = store.get_json(StorageKeys.ADMIN_CREDENTIALS)
        assert set(credential) == {"hash", "salt", "created_at", "updated_at"}
        assert "abcdef" not in json.dumps(credential)
        assert len(credential["hash"]) == 64

    def test_salt_changes_per_setup(self, auth_service: AuthService, store: KeyValueStore):
        """Test two setups with the same password give different digests."""
        auth_service.setup_password("abcdef")
        first = store.get_json(StorageKeys.ADMIN_CREDENTIALS)["hash"]

        auth_service.setup_password("abcdef")
        second = store.get_json(StorageKeys.ADMIN_CREDENTIALS)["hash"]

        assert first != second

    def test_setup_storage_failure(self, broken_store: KeyValueStore, security, clock):
        """Test a write failure surfaces as SETUP_FAILED."""
        auth_service = AuthService(broken_store, security=security, clock=clock)
        with pytest.raises(AppException) as exc_info:
            auth_service.setup_password("abcdef")
        assert exc_info.value.code == "SETUP_FAILED"

    def test_is_set_up_fails_closed(self, broken_store: KeyValueStore, security, clock):
        """Test storage errors report not set up."""
        auth_service = AuthService(broken_store, security=security, clock=clock)
        assert auth_service.is_set_up() is False


class TestVerification:
    """Tests for password verification."""

    def test_not_set_up(self, auth_service: AuthService):
        """Test verifying before setup fails."""
        with pytest.raises(AppException) as exc_info:
            auth_service.verify_password("abcdef")
        assert exc_info.value.code == "NOT_SET_UP"

    def test_fresh_install_scenario(self, auth_service: AuthService):
        """Test setup, a good login, then a wrong password."""
        auth_service.setup_password("secret1")

        result = auth_service.verify_password("secret1")
        assert result.success is True
        assert result.token

        with pytest.raises(AppException) as exc_info:
            auth_service.verify_password("wrong")

        error = exc_info.value
        assert error.code == "INVALID_PASSWORD"
        assert error.details["remaining_attempts"] == 4
        assert error.message == "Invalid password. 4 attempts remaining"

    def test_success_opens_session(self, auth_service: AuthService, clock):
        """Test a correct password opens a 30 minute session."""
        auth_service.setup_password("secret1")
        result = auth_service.verify_password("secret1")

        assert auth_service.is_session_valid() is True
        assert auth_service.is_token_valid(result.token) is True
        assert result.expires_at == clock.now + timedelta(minutes=30)

    def test_success_clears_failed_attempts(self, auth_service: AuthService, store: KeyValueStore):
        """Test failures are forgotten after a correct password."""
        auth_service.setup_password("secret1")
        fail_verification(auth_service, 2)
        assert auth_service.get_lockout_status().attempts == 2

        auth_service.verify_password("secret1")

        assert store.get_item(StorageKeys.FAILED_ATTEMPTS) is None
        assert auth_service.get_lockout_status().attempts == 0

    def test_countdown(self, auth_service: AuthService):
        """Test the remaining attempts count down from four."""
        auth_service.setup_password("secret1")
        remaining = [
            fail_verification(auth_service, 1).details["remaining_attempts"]
            for _ in range(4)
        ]
        assert remaining == [4, 3, 2, 1]

    def test_storage_failure(self, broken_store: KeyValueStore, security, clock):
        """Test storage errors surface as AUTHENTICATION_FAILED."""
        auth_service = AuthService(broken_store, security=security, clock=clock)
        with pytest.raises(AppException) as exc_info:
            auth_service.verify_password("secret1")
        assert exc_info.value.code == "AUTHENTICATION_FAILED"


class TestLockout:
    """Tests for progressive lockout."""

    def test_fifth_failure_locks(self, auth_service: AuthService):
        """Test the fifth wrong password starts a lockout."""
        auth_service.setup_password("secret1")
        fail_verification(auth_service, 4)

        error = fail_verification(auth_service, 1)
        assert error.code == "TOO_MANY_ATTEMPTS"
        assert error.status_code == 423
        assert error.message == "Too many failed attempts. Account locked for 15 minutes"

        status = auth_service.get_lockout_status()
        assert status.is_locked is True
        assert status.attempts == 5
        assert status.remaining_time == 15 * 60 * 1000

    def test_locked_refuses_correct_password(self, auth_service: AuthService, clock):
        """Test even the right password is refused while locked."""
        auth_service.setup_password("secret1")
        fail_verification(auth_service, 5)
        clock.advance(minutes=5, seconds=30)

        with pytest.raises(AppException) as exc_info:
            auth_service.verify_password("secret1")

        error = exc_info.value
        assert error.code == "LOCKED_OUT"
        assert error.details["remaining_minutes"] == 10
        assert error.message == "Account locked. Try again in 10 minute(s)"

    def test_sixth_attempt_locked_out(self, auth_service: AuthService):
        """Test a sixth wrong password reports LOCKED_OUT."""
        auth_service.setup_password("secret1")
        fail_verification(auth_service, 5)

        assert fail_verification(auth_service, 1).code == "LOCKED_OUT"

    def test_lockout_expires(self, auth_service: AuthService, store: KeyValueStore, clock):
        """Test an expired lockout is cleared by the next status check."""
        auth_service.setup_password("secret1")
        fail_verification(auth_service, 5)
        clock.advance(minutes=15, seconds=1)

        status = auth_service.get_lockout_status()
        assert status.is_locked is False
        assert status.attempts == 0
        assert store.get_item(StorageKeys.FAILED_ATTEMPTS) is None

        assert auth_service.verify_password("secret1").success is True

    def test_failures_after_lockout_start_over(self, auth_service: AuthService, clock):
        """Test the attempt counter restarts once a lockout has expired."""
        auth_service.setup_password("secret1")
        fail_verification(auth_service, 5)
        clock.advance(minutes=16)

        error = fail_verification(auth_service, 1)
        assert error.details["remaining_attempts"] == 4

    def test_require_unlocked(self, auth_service: AuthService, clock):
        """Test credential changes are refused only while locked."""
        auth_service.setup_password("secret1")
        auth_service.require_unlocked()

        fail_verification(auth_service, 5)
        with pytest.raises(AppException) as exc_info:
            auth_service.require_unlocked()
        assert exc_info.value.code == "LOCKED_OUT"

        clock.advance(minutes=15, seconds=1)
        auth_service.require_unlocked()

    def test_status_storage_failure(self, broken_store: KeyValueStore, security, clock):
        """Test storage errors report unlocked."""
        auth_service = AuthService(broken_store, security=security, clock=clock)
        status = auth_service.get_lockout_status()
        assert status.is_locked is False
        assert status.remaining_time == 0


class TestSession:
    """Tests for session lifetime."""

    def test_no_session(self, auth_service: AuthService):
        """Test there is no session before verification."""
        assert auth_service.is_session_valid() is False
        assert auth_service.extend_session() is False

    def test_expired_session_deleted(self, auth_service: AuthService, store: KeyValueStore):
        """Test an expired session is invalid and removed."""
        auth_service.setup_password("secret1")
        auth_service.verify_password("secret1")

        session = store.get_json(StorageKeys.AUTH_SESSION)
        session["expires_at"] = "2000-01-01T00:00:00+00:00"
        store.set_json(StorageKeys.AUTH_SESSION, session)

        assert auth_service.is_session_valid() is False
        assert store.get_item(StorageKeys.AUTH_SESSION) is None

    def test_session_times_out(self, auth_service: AuthService, clock):
        """Test a session lapses after thirty minutes."""
        auth_service.setup_password("secret1")
        auth_service.verify_password("secret1")

        clock.advance(minutes=30)
        assert auth_service.is_session_valid() is True

        clock.advance(seconds=1)
        assert auth_service.is_session_valid() is False

    def test_extend_session(self, auth_service: AuthService, clock):
        """Test extending slides the expiry forward from now."""
        auth_service.setup_password("secret1")
        auth_service.verify_password("secret1")

        clock.advance(minutes=20)
        assert auth_service.extend_session() is True
        assert auth_service.get_session().expires_at == clock.now + timedelta(minutes=30)

        clock.advance(minutes=20)
        assert auth_service.is_session_valid() is True

    def test_wrong_token(self, auth_service: AuthService):
        """Test a token other than the session's is refused."""
        auth_service.setup_password("secret1")
        auth_service.verify_password("secret1")

        assert auth_service.is_token_valid("not-the-token") is False
        assert auth_service.is_token_valid(None) is False

    def test_new_login_replaces_token(self, auth_service: AuthService):
        """Test a second verification invalidates the first token."""
        auth_service.setup_password("secret1")
        first = auth_service.verify_password("secret1").token
        second = auth_service.verify_password("secret1").token

        assert auth_service.is_token_valid(first) is False
        assert auth_service.is_token_valid(second) is True

    def test_logout(self, auth_service: AuthService):
        """Test logout ends the session and is idempotent."""
        auth_service.setup_password("secret1")
        auth_service.verify_password("secret1")

        assert auth_service.logout() is True
        assert auth_service.is_session_valid() is False
        assert auth_service.logout() is True

    def test_logout_storage_failure(self, broken_store: KeyValueStore, security, clock):
        """Test logout reports a failed delete."""
        auth_service = AuthService(broken_store, security=security, clock=clock)
        assert auth_service.logout() is False


class TestChangePassword:
    """Tests for password changes."""

    def test_change_password(self, auth_service: AuthService, store: KeyValueStore, clock):
        """Test the new password works, the old one does not, session ends."""
        auth_service.setup_password("secret1")
        created_at = store.get_json(StorageKeys.ADMIN_CREDENTIALS)["created_at"]
        clock.advance(minutes=1)

        assert auth_service.change_password("secret1", "secret2") is True
        assert auth_service.is_session_valid() is False

        credential = store.get_json(StorageKeys.ADMIN_CREDENTIALS)
        assert credential["created_at"] == created_at
        assert credential["updated_at"] != created_at

        assert auth_service.verify_password("secret2").success is True
        with pytest.raises(AppException) as exc_info:
            auth_service.verify_password("secret1")
        assert exc_info.value.code == "INVALID_PASSWORD"

    def test_weak_new_password(self, auth_service: AuthService):
        """Test a short new password is refused before verification."""
        auth_service.setup_password("secret1")

        with pytest.raises(AppException) as exc_info:
            auth_service.change_password("wrong-password", "123")

        assert exc_info.value.code == "WEAK_PASSWORD"
        assert exc_info.value.message == "New password must be at least 6 characters"
        assert auth_service.get_lockout_status().attempts == 0

    def test_wrong_current_password_counts(self, auth_service: AuthService):
        """Test a wrong current password consumes an attempt."""
        auth_service.setup_password("secret1")

        with pytest.raises(AppException) as exc_info:
            auth_service.change_password("wrong-password", "secret2")

        assert exc_info.value.code == "INVALID_PASSWORD"
        assert auth_service.get_lockout_status().attempts == 1


class TestReset:
    """Tests for wiping auth data."""

    def test_reset_auth_data(self, auth_service: AuthService, store: KeyValueStore):
        """Test credential, session and failed attempts are removed together."""
        auth_service.setup_password("secret1")
        fail_verification(auth_service, 1)
        auth_service.verify_password("secret1")
        fail_verification(auth_service, 1)
        store.set_json(StorageKeys.USER_PREFERENCES, {"dark_mode": True})

        assert auth_service.reset_auth_data() is True

        assert auth_service.is_set_up() is False
        assert all(store.get_item(key) is None for key in StorageKeys.AUTH_KEYS)
        assert store.get_json(StorageKeys.USER_PREFERENCES) == {"dark_mode": True}

    def test_reset_storage_failure(self, broken_store: KeyValueStore, security, clock):
        """Test reset reports a failed delete."""
        auth_service = AuthService(broken_store, security=security, clock=clock)
        assert auth_service.reset_auth_data() is False
