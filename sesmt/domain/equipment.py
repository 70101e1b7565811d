# SPDX-License-Identifier: Apache-2.0

"""
Protective equipment and uniform rules.
"""

from datetime import date
from typing import List, Optional

from ..models.entities import EquipmentItem, UniformItem
from .temporal_status import expiry_after
from .validation import ValidationResult


def validate_equipment(item: EquipmentItem) -> ValidationResult:
    """
    Validate an equipment item definition.

    Args:
        item: Equipment item to validate

    Returns:
        ValidationResult with validation status and errors
    """
    errors = []
    shelf_life = item.shelf_life_months

    if shelf_life is not None:
        if isinstance(shelf_life, bool) or not isinstance(shelf_life, int) or shelf_life <= 0:
            errors.append("Shelf-life must be a positive integer number of months")

    return ValidationResult.from_errors(errors)


def compute_equipment_expiry(item: EquipmentItem, issued_on: date) -> Optional[date]:
    """Expiry date of an item issued on a given date; None without shelf-life."""
    return expiry_after(issued_on, item.shelf_life_months)


def sort_equipment(items: List[EquipmentItem]) -> List[EquipmentItem]:
    """Mandatory items first, then by name."""
    return sorted(items, key=lambda item: (not item.mandatory, item.name.casefold(), item.id))


def sort_uniforms(items: List[UniformItem]) -> List[UniformItem]:
    return sorted(items, key=lambda item: (item.category, item.description.casefold(), item.id))
