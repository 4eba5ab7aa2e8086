"""
==============================================================================
Database Package
==============================================================================

SQLAlchemy infrastructure for the slot store.

Architecture:
------------
├── database.py   - DatabaseManager class, session factory
├── models.py     - StorageSlot ORM model
└── init_db.py    - DatabaseInitializer for setup

==============================================================================
"""

from .database import DatabaseManager, Base, get_db, get_database_manager
from .models import StorageSlot
from .init_db import DatabaseInitializer, init_db

__all__ = [
    "DatabaseManager",
    "Base",
    "get_db",
    "get_database_manager",
    "StorageSlot",
    "DatabaseInitializer",
    "init_db",
]
