# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the protective equipment and uniform catalog.
"""

import pytest
from datetime import date

from sesmt.errors import NotFoundException, ValidationException
from sesmt.models import EquipmentItem, UniformItem


class TestEquipmentCatalog:
    """Test equipment item operations."""

    @pytest.mark.parametrize("shelf_life", [0, -12])
    def test_shelf_life_must_be_positive(self, engine, shelf_life):
        item = EquipmentItem(name="Respirator", certification_number="CA 999", shelf_life_months=shelf_life)

        with pytest.raises(ValidationException):
            engine.equipment.register_equipment(item)

        assert engine.equipment.find_equipment_including_inactive(item.id) is None

    def test_is_mandatory(self, engine, helmet, gloves):
        assert engine.equipment.is_mandatory(helmet.id) is True
        assert engine.equipment.is_mandatory(gloves.id) is False

    def test_is_mandatory_missing_item(self, engine):
        with pytest.raises(NotFoundException):
            engine.equipment.is_mandatory("missing")

    def test_list_equipment_mandatory_first(self, engine, helmet, gloves):
        earplugs = engine.equipment.register_equipment(
            EquipmentItem(name="Earplugs", certification_number="CA 777", mandatory=True)
        )

        names = [item.name for item in engine.equipment.list_equipment()]
        assert names == [earplugs.name, helmet.name, gloves.name]

    def test_deactivated_item_hidden_from_lookups(self, engine, helmet):
        engine.equipment.set_equipment_active(helmet.id, False)

        assert engine.equipment.find_equipment(helmet.id) is None
        assert engine.equipment.find_equipment_including_inactive(helmet.id) is not None
        assert engine.equipment.list_equipment() == []
        assert len(engine.equipment.list_equipment(include_inactive=True)) == 1

    def test_update_equipment_revalidates(self, engine, helmet):
        with pytest.raises(ValidationException):
            engine.equipment.update_equipment(helmet.id, {"shelf_life_months": 0})

        updated = engine.equipment.update_equipment(helmet.id, {"shelf_life_months": 36})
        assert updated.shelf_life_months == 36

    def test_preview_valid_until(self, engine, helmet, gloves):
        assert engine.equipment.preview_valid_until(helmet.id, date(2024, 1, 31)) == date(2026, 1, 31)
        assert engine.equipment.preview_valid_until(gloves.id, date(2024, 1, 31)) is None


class TestUniformCatalog:
    """Test uniform operations."""

    def test_register_and_find(self, engine, shirt):
        assert engine.equipment.find_uniform(shirt.id).description == "Work shirt"

    def test_list_by_category_is_case_insensitive(self, engine, shirt):
        engine.equipment.register_uniform(UniformItem(description="Safety boots", category="boots"))

        assert [u.id for u in engine.equipment.list_uniforms_by_category("SHIRT")] == [shirt.id]

    def test_list_uniforms_ordered_by_category(self, engine, shirt):
        boots = engine.equipment.register_uniform(UniformItem(description="Safety boots", category="boots"))

        assert [u.id for u in engine.equipment.list_uniforms()] == [boots.id, shirt.id]

    def test_deactivate_uniform(self, engine, shirt):
        engine.equipment.set_uniform_active(shirt.id, False)

        assert engine.equipment.find_uniform(shirt.id) is None
        assert engine.equipment.find_uniform_including_inactive(shirt.id).active is False

    def test_update_uniform(self, engine, shirt):
        updated = engine.equipment.update_uniform(shirt.id, {"category": "Camisa"})
        assert updated.category == "camisa"
