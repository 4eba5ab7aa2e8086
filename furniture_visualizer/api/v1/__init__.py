"""
==============================================================================
API v1 Endpoints
==============================================================================

Version 1 of the REST API.

Routers:
--------
- health: Health check endpoints
- auth: Admin Auth Gate (setup, login, session, lockout)
- barcodes: Catalog lookup and admin record assignment
- preferences: User preferences
- history: Scan history
- visualize: Material swap descriptions

==============================================================================
"""

from . import health, auth, barcodes, preferences, history, visualize

__all__ = ["health", "auth", "barcodes", "preferences", "history", "visualize"]
