"""
==============================================================================
Validation Utilities Module
==============================================================================

Validation classes for input data.

This module implements:
- BarcodeValidator: Validates catalog barcode identifiers
- PasswordValidator: Validates admin password strength

Barcode Rules:
-------------
- Format: STYLE-### or MAT-### (### is three or more digits)
- Case-sensitive, no surrounding whitespace
- Prefix implies the record type: STYLE → style, MAT → material

==============================================================================
"""

from __future__ import annotations

import re
from typing import Any, Dict, Optional, Tuple


class BarcodeValidator:
    """
    Validator for catalog barcode identifiers.

    Example:
        >>> validator = BarcodeValidator()
        >>> validator.is_valid("STYLE-001")
        True
        >>> validator.is_valid("style-001")
        False
        >>> validator.expected_type("MAT-042")
        'material'
    """

    PATTERN = re.compile(r"^(STYLE|MAT)-\d{3,}$", re.ASCII)

    PREFIX_TO_TYPE: Dict[str, str] = {
        "STYLE": "style",
        "MAT": "material",
    }
    TYPE_TO_PREFIX: Dict[str, str] = {v: k for k, v in PREFIX_TO_TYPE.items()}

    def validate(self, barcode: Any) -> Tuple[bool, Optional[str]]:
        """
        Validate a barcode identifier.

        Args:
            barcode: Candidate identifier (any type)

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not barcode or not isinstance(barcode, str):
            return False, "Barcode is required"

        # fullmatch so a trailing newline cannot slip past "$"
        if not self.PATTERN.fullmatch(barcode):
            return False, "Use STYLE-### or MAT-### where ### is at least 3 digits"

        return True, None

    def is_valid(self, barcode: Any) -> bool:
        """Quick validation check."""
        is_valid, _ = self.validate(barcode)
        return is_valid

    def expected_type(self, barcode: Any) -> Optional[str]:
        """
        Record type implied by the barcode prefix.

        Returns:
            "style", "material", or None for invalid identifiers
        """
        if not self.is_valid(barcode):
            return None
        prefix = barcode.split("-", 1)[0]
        return self.PREFIX_TO_TYPE[prefix]

    def prefix_for(self, record_type: str) -> Optional[str]:
        """Barcode prefix for a record type, or None if unknown."""
        return self.TYPE_TO_PREFIX.get(record_type)


class PasswordValidator:
    """
    Validator for the admin password.

    Only length is enforced; the password is never stored in clear text.
    """

    def __init__(self, min_length: int = 6) -> None:
        self.min_length = min_length

    def validate(self, password: Optional[str]) -> Tuple[bool, Optional[str]]:
        """
        Validate a password.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not password:
            return False, "Password is required"

        if len(password) < self.min_length:
            return False, f"Password must be at least {self.min_length} characters"

        return True, None

    def is_valid(self, password: Optional[str]) -> bool:
        """Quick validation check."""
        is_valid, _ = self.validate(password)
        return is_valid
