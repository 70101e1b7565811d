# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Protective equipment (EPI) and uniform catalog.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from ..domain.equipment import compute_equipment_expiry, sort_equipment, sort_uniforms, validate_equipment
from ..errors import NotFoundException
from ..models.entities import EquipmentItem, UniformItem
from .catalog import CatalogService
from .repository import Repository

logger = logging.getLogger(__name__)


class EquipmentCatalog:
    """Registry of equipment items and uniform pieces."""

    def __init__(self, equipment_repository: Repository[EquipmentItem], uniform_repository: Repository[UniformItem]):
        self.equipment = CatalogService(equipment_repository, "equipment", validate_equipment)
        self.uniforms = CatalogService(uniform_repository, "uniform")

    # Equipment

    def register_equipment(self, item: EquipmentItem) -> EquipmentItem:
        return self.equipment.register(item)

    def update_equipment(self, equipment_id: str, patch: Dict[str, Any]) -> EquipmentItem:
        return self.equipment.update(equipment_id, patch)

    def set_equipment_active(self, equipment_id: str, active: bool) -> EquipmentItem:
        return self.equipment.set_active(equipment_id, active)

    def find_equipment(self, equipment_id: str) -> Optional[EquipmentItem]:
        return self.equipment.find_by_id(equipment_id)

    def find_equipment_including_inactive(self, equipment_id: str) -> Optional[EquipmentItem]:
        return self.equipment.find_by_id_including_inactive(equipment_id)

    def list_equipment(self, include_inactive: bool = False) -> List[EquipmentItem]:
        """Equipment items, mandatory first, then by name."""
        return sort_equipment(self.equipment.list_all(include_inactive))

    def is_mandatory(self, equipment_id: str) -> bool:
        """
        Check the mandatory flag of an equipment item.

        Raises:
            NotFoundException: If the item does not exist
        """
        item = self.equipment.find_by_id_including_inactive(equipment_id)
        if item is None:
            raise NotFoundException(
                f"equipment not found: {equipment_id}",
                entity="equipment",
                entity_id=equipment_id
            )
        return item.mandatory

    def preview_valid_until(self, equipment_id: str, issued_on: date) -> Optional[date]:
        """Expiry an item issued on a date would get; None without shelf-life."""
        item = self.equipment.find_by_id_including_inactive(equipment_id)
        if item is None:
            raise NotFoundException.for_entity("equipment", equipment_id)
        return compute_equipment_expiry(item, issued_on)

    # Uniforms

    def register_uniform(self, item: UniformItem) -> UniformItem:
        return self.uniforms.register(item)

    def update_uniform(self, uniform_id: str, patch: Dict[str, Any]) -> UniformItem:
        return self.uniforms.update(uniform_id, patch)

    def set_uniform_active(self, uniform_id: str, active: bool) -> UniformItem:
        return self.uniforms.set_active(uniform_id, active)

    def find_uniform(self, uniform_id: str) -> Optional[UniformItem]:
        return self.uniforms.find_by_id(uniform_id)

    def find_uniform_including_inactive(self, uniform_id: str) -> Optional[UniformItem]:
        return self.uniforms.find_by_id_including_inactive(uniform_id)

    def list_uniforms(self, include_inactive: bool = False) -> List[UniformItem]:
        return sort_uniforms(self.uniforms.list_all(include_inactive))

    def list_uniforms_by_category(self, category: str) -> List[UniformItem]:
        """Active uniforms tagged with a category (case-insensitive)."""
        tag = category.strip().lower()
        uniforms = [item for item in self.list_uniforms() if item.category == tag]
        logger.debug(f"Found {len(uniforms)} uniforms in category {tag}")
        return uniforms
