# SPDX-License-Identifier: Apache-2.0

"""
Validation result shared by the domain rule functions.
"""

from dataclasses import dataclass, field
from typing import List

from ..errors import ValidationException


@dataclass
class ValidationResult:
    """Result of a business-rule validation."""
    is_valid: bool
    errors: List[str]
    warnings: List[str] = field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: List[str], warnings: List[str] = None) -> "ValidationResult":
        return cls(is_valid=len(errors) == 0, errors=errors, warnings=warnings or [])

    def raise_if_invalid(self, message: str) -> None:
        """Raise ValidationException carrying the collected errors."""
        if not self.is_valid:
            raise ValidationException(message, validation_errors=list(self.errors))
