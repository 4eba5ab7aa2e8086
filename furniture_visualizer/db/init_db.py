"""
==============================================================================
Database Initialization Module
==============================================================================

Creates the slot table at startup and reports what is already persisted.

Unlike a multi-user system there is no default admin account: the
administrator chooses a password through the setup flow on first use.

Usage:
------
    from furniture_visualizer.db import init_db

    init_db()

==============================================================================
"""

from __future__ import annotations

import logging
from typing import List, Optional

from furniture_visualizer.db.database import DatabaseManager
from furniture_visualizer.db.models import StorageSlot


# Module logger
logger = logging.getLogger(__name__)


class DatabaseInitializer:
    """
    Database initialization manager.

    Attributes:
        _db_manager: DatabaseManager instance
    """

    def __init__(self, db_manager: Optional[DatabaseManager] = None) -> None:
        self._db_manager = db_manager or DatabaseManager()

    def create_tables(self) -> None:
        """Create the slot table if it does not exist."""
        self._db_manager.create_tables()

    def existing_slots(self) -> List[str]:
        """List the slot keys currently persisted."""
        with self._db_manager.session_scope() as session:
            return [row.key for row in session.query(StorageSlot.key).all()]

    def initialize(self) -> None:
        """Run the full initialization sequence."""
        logger.info("Initializing database...")
        if not self._db_manager.verify_connection():
            raise RuntimeError("Database connection failed")

        self.create_tables()

        slots = self.existing_slots()
        if slots:
            logger.info(f"Found {len(slots)} persisted slot(s): {', '.join(sorted(slots))}")
        else:
            logger.info("No persisted state yet (fresh installation)")

        logger.info("✅ Database initialization complete")


def init_db() -> None:
    """Initialize the database with default settings."""
    DatabaseInitializer().initialize()
