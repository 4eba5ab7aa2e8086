"""
==============================================================================
Utilities Package
==============================================================================

Modules:
--------
- validators: Barcode and password validation

==============================================================================
"""

from .validators import BarcodeValidator, PasswordValidator

__all__ = [
    "BarcodeValidator",
    "PasswordValidator",
]
