"""
==============================================================================
Storage Package - Persistent Slots
==============================================================================

Key/value persistence for the service's small records.

Classes:
--------
- KeyValueStore: JSON slot store bound to a database session
- StorageKeys: well-known slot keys
- AdminCredential, AuthSession, FailedAttemptRecord: Auth Gate records

==============================================================================
"""

from .key_value_store import KeyValueStore, StorageKeys
from .records import AdminCredential, AuthSession, FailedAttemptRecord

__all__ = [
    "KeyValueStore",
    "StorageKeys",
    "AdminCredential",
    "AuthSession",
    "FailedAttemptRecord",
]
