#!/usr/bin/env python3
"""
Reset Admin Script
Deletes the admin credential, session and failed attempts so the
password can be set up again (e.g. after a forgotten password)
"""

import sys

from furniture_visualizer.db import get_database_manager, init_db
from furniture_visualizer.services import AuthService
from furniture_visualizer.storage import KeyValueStore


def reset_admin():
    """Wipe the Auth Gate slots in the configured database"""
    init_db()

    with get_database_manager().session_scope() as session:
        auth_service = AuthService(KeyValueStore(session))

        if not auth_service.is_set_up():
            print("Nothing to reset: no admin password is set up")
            return

        if auth_service.reset_auth_data():
            print("✅ SUCCESS: Admin auth data reset!")
            print("Set up a new password on the next launch.")
        else:
            print("❌ ERROR: Could not reset admin auth data")
            print("Make sure the database is not locked by another process")
            sys.exit(1)


if __name__ == "__main__":
    print("=" * 60)
    print("RESET ADMIN PASSWORD")
    print("=" * 60)
    print()
    reset_admin()
    print()
    print("=" * 60)
