"""
==============================================================================
Security Module - Password Digests & Session Tokens
==============================================================================

Cryptographic helpers behind the admin Auth Gate.

This module implements:
- SecurityManager: salt generation, password digest, token generation
- Timing-safe digest comparison

Digest Format:
-------------
    hash = hex(PBKDF2-HMAC-SHA256(password, salt, rounds, digest_size))

The salt is stored next to the digest (not embedded in it), so every
credential record carries {hash, salt}. The digest is always
2 * digest_size hex characters long.

==============================================================================
"""

from __future__ import annotations

import logging
import secrets
import string
from functools import lru_cache
from typing import Optional

from passlib.crypto.digest import pbkdf2_hmac
from passlib.utils import consteq

from furniture_visualizer.config import get_settings


# Module logger
logger = logging.getLogger(__name__)


class SecurityManager:
    """
    Centralized security manager for the Auth Gate.

    Handles salt generation, password digests and session token
    generation. Digest parameters come from settings unless given
    explicitly, which keeps tests fast with a low round count.

    Attributes:
        rounds: PBKDF2 iteration count
        digest_size: Digest length in bytes
        salt_length: Generated salt length in characters

    Example:
        >>> security = SecurityManager(rounds=1000)
        >>> salt = security.generate_salt()
        >>> digest = security.hash_password("secret1", salt)
        >>> security.verify_password("secret1", salt, digest)
        True
    """

    # =========================================================================
    # CLASS CONSTANTS
    # =========================================================================

    DIGEST_NAME = "sha256"
    SALT_ALPHABET = string.ascii_letters + string.digits
    TOKEN_BYTES = 32

    def __init__(
        self,
        rounds: Optional[int] = None,
        digest_size: Optional[int] = None,
        salt_length: Optional[int] = None
    ) -> None:
        settings = get_settings()

        self.rounds = rounds or settings.kdf_rounds
        self.digest_size = digest_size or settings.kdf_digest_size
        self.salt_length = salt_length or settings.salt_length

        logger.debug(
            f"SecurityManager initialized (rounds={self.rounds}, "
            f"digest_size={self.digest_size})"
        )

    # =========================================================================
    # SALT & TOKEN GENERATION
    # =========================================================================

    def generate_salt(self) -> str:
        """
        Generate a random alphanumeric salt.

        Returns:
            Salt string of salt_length characters
        """
        return "".join(
            secrets.choice(self.SALT_ALPHABET) for _ in range(self.salt_length)
        )

    def generate_session_token(self) -> str:
        """Generate an opaque, URL-safe session token."""
        return secrets.token_urlsafe(self.TOKEN_BYTES)

    # =========================================================================
    # PASSWORD DIGEST METHODS
    # =========================================================================

    def hash_password(self, password: str, salt: str) -> str:
        """
        Derive the stored digest for a password and salt.

        Args:
            password: Plain text password
            salt: Salt stored with the credential

        Returns:
            Hex digest, 2 * digest_size characters long

        Raises:
            ValueError: If password or salt is empty
        """
        if not password:
            raise ValueError("Password cannot be empty")
        if not salt:
            raise ValueError("Salt cannot be empty")

        raw = pbkdf2_hmac(
            self.DIGEST_NAME,
            password.encode("utf-8"),
            salt.encode("utf-8"),
            self.rounds,
            self.digest_size
        )
        return raw.hex()

    def verify_password(self, password: str, salt: str, expected_hash: str) -> bool:
        """
        Check a password against a stored digest in constant time.

        Args:
            password: Plain text password to check
            salt: Salt stored with the credential
            expected_hash: Stored hex digest

        Returns:
            True if the derived digest matches
        """
        if not password:
            return False

        candidate = self.hash_password(password, salt)
        is_valid = consteq(candidate, expected_hash)

        if is_valid:
            logger.debug("Password verification successful")
        else:
            logger.debug("Password verification failed")

        return is_valid

    @staticmethod
    def tokens_match(presented: Optional[str], stored: Optional[str]) -> bool:
        """Compare two session tokens in constant time."""
        if not presented or not stored:
            return False
        return consteq(presented, stored)


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_security_manager() -> SecurityManager:
    """
    Get the global SecurityManager instance.

    Returns:
        SecurityManager configured from settings
    """
    return SecurityManager()
