# SPDX-License-Identifier: Apache-2.0

"""
Professional certification rules.

Certifications have no catalog entry; they are keyed by their normalized
name so that a renewal supersedes the certificate it replaces.
"""

from datetime import date
from typing import Optional

from .validation import ValidationResult


def certification_key(name: str) -> str:
    """Ledger key of a certification, its name stripped and casefolded."""
    return " ".join(name.split()).casefold()


def validate_certification(name: str, issued_on: date, valid_until: Optional[date]) -> ValidationResult:
    """
    Validate a certification before it is recorded.

    Args:
        name: Certification name
        issued_on: Date the certificate was obtained
        valid_until: Expiry date, or None for lifetime certificates

    Returns:
        ValidationResult with validation status and errors
    """
    errors = []
    if not name or not name.strip():
        errors.append("Certification name is required")
    if valid_until is not None and valid_until < issued_on:
        errors.append("Validity date cannot be earlier than the issue date")
    return ValidationResult.from_errors(errors)
