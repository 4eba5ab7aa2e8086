"""
==============================================================================
Catalog Package - Barcode Records
==============================================================================

Barcode-keyed catalog of furniture styles and materials.

Classes:
--------
- CatalogRecord: Pydantic model for a catalog record
- RecordType: style / material
- BarcodeCatalog: In-memory catalog with format-gated access

==============================================================================
"""

from .models import CatalogRecord, RecordType
from .catalog import BarcodeCatalog

__all__ = [
    "CatalogRecord",
    "RecordType",
    "BarcodeCatalog",
]
