# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for Pydantic models.
"""

import pytest
from datetime import datetime
from decimal import Decimal
from pydantic import ValidationError
from bson import ObjectId

from sesmt.models.entities import (
    Address, DocumentTemplate, EquipmentItem, Exam, JobFunction, Sector, UniformItem
)
from sesmt.models.enums import ComplianceStatus, DocumentCategory, TriggerEvent


class TestBaseEntity:
    """Test common entity fields."""

    def test_defaults(self):
        """Test generated id, timestamps and flags."""
        sector = Sector(name="Manutenção")

        assert ObjectId.is_valid(sector.id)
        assert sector.active is True
        assert sector.schema_version == 1
        assert isinstance(sector.created_at, datetime)
        assert sector.created_at.tzinfo is not None

    def test_deactivate_and_activate(self):
        """Test soft delete toggling."""
        sector = Sector(name="Manutenção")
        before = sector.updated_at

        sector.deactivate()
        assert sector.active is False
        assert sector.updated_at >= before

        sector.activate()
        assert sector.active is True

    def test_empty_name_validation(self):
        """Test whitespace-only names are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            Sector(name="   ")

        assert "Sector name cannot be empty" in str(exc_info.value)

    def test_name_is_stripped(self):
        sector = Sector(name="  Oficina  ")
        assert sector.name == "Oficina"


class TestExamModel:
    """Test Exam model behaviour."""

    def test_trigger_events_are_coerced_and_deduplicated(self):
        """Test string trigger-events become enum members once each."""
        exam = Exam(name="Hemograma", trigger_events=["periodic", "hiring", "periodic"], renewal_interval_months=12)

        assert exam.trigger_events == [TriggerEvent.PERIODIC, TriggerEvent.HIRING]
        assert exam.applies_to("hiring")
        assert not exam.applies_to(TriggerEvent.TERMINATION)

    def test_unknown_trigger_event_rejected(self):
        """Test trigger-events form a closed set."""
        with pytest.raises(ValidationError):
            Exam(name="Hemograma", trigger_events=["vacation"])

    def test_default_expiry_policy_follows_periodic_trigger(self):
        periodic = Exam(name="Checkup", trigger_events=[TriggerEvent.PERIODIC], renewal_interval_months=12)
        hiring = Exam(name="Audiometry", trigger_events=[TriggerEvent.HIRING], renewal_interval_months=12)

        assert periodic.expires_on_schedule() is True
        assert hiring.expires_on_schedule() is False

    def test_explicit_expiry_policy_wins(self):
        exam = Exam(
            name="Toxicology",
            trigger_events=[TriggerEvent.HIRING],
            renewal_interval_months=30,
            expires=True
        )
        assert exam.expires_on_schedule() is True

        exam.expires = False
        assert exam.expires_on_schedule() is False

    def test_price_for(self):
        provider_id = str(ObjectId())
        exam = Exam(name="ECG", trigger_events=[TriggerEvent.HIRING], prices={provider_id: "45.50"})

        assert exam.price_for(provider_id) == Decimal("45.50")
        assert exam.price_for(str(ObjectId())) is None


class TestEquipmentModels:
    """Test equipment and uniform models."""

    def test_certification_number_required(self):
        with pytest.raises(ValidationError):
            EquipmentItem(name="Helmet", certification_number=" ")

    def test_uniform_category_is_lowercased(self):
        uniform = UniformItem(description="Botina", category=" BOOTS ")
        assert uniform.category == "boots"


class TestJobFunctionModel:
    """Test JobFunction model."""

    def test_blank_duties_are_dropped(self):
        function = JobFunction(name="Driver", sector_id=str(ObjectId()), duties=["Drive", "  ", "", " Load "])
        assert function.duties == ["Drive", "Load"]

    def test_distinct_exam_ids_keeps_first_occurrence(self):
        """Test exams shared across buckets are listed once."""
        function = JobFunction(
            name="Driver",
            sector_id=str(ObjectId()),
            exams_by_trigger={
                "periodic": ["b", "c"],
                "hiring": ["a", "b"]
            }
        )

        assert function.distinct_exam_ids() == ["a", "b", "c"]
        assert function.exam_ids_for(TriggerEvent.TERMINATION) == []

    def test_exam_ids_for_returns_copy(self):
        function = JobFunction(name="Driver", sector_id=str(ObjectId()), exams_by_trigger={"hiring": ["a"]})

        function.exam_ids_for("hiring").append("b")
        assert function.exam_ids_for("hiring") == ["a"]


class TestAddressModel:
    """Test address formatting."""

    def test_format_with_complement(self, sample_address):
        assert sample_address.format() == (
            "Rua das Flores, 123, Apto 4 - Centro, São Paulo/SP, CEP: 01000-000"
        )

    def test_format_without_complement(self):
        address = Address(
            street="Av. Brasil", number="10", district="Jardim", city="Campinas", state="SP", zip_code="13000-000"
        )
        assert address.format() == "Av. Brasil, 10 - Jardim, Campinas/SP, CEP: 13000-000"

    def test_state_must_be_two_letters(self):
        with pytest.raises(ValidationError):
            Address(street="A", number="1", district="B", city="C", state="SPX", zip_code="0")


class TestDocumentTemplateModel:
    """Test DocumentTemplate model."""

    def test_default_category(self):
        template = DocumentTemplate(title="Termo", content="{NOME}")
        assert template.category == DocumentCategory.OTHER

    def test_validity_must_be_positive(self):
        with pytest.raises(ValidationError):
            DocumentTemplate(title="Termo", content="{NOME}", validity_months=0)


class TestStatusLiterals:
    """Test status values match the stored literals."""

    def test_status_values(self):
        assert [status.value for status in ComplianceStatus] == [
            "NeverExpires", "Expired", "ExpiringSoon", "Valid"
        ]
