# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Core entity models for the SESMT compliance engine.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Dict
from pydantic import BaseModel, Field, field_validator
from .base import BaseEntity
from .enums import (
    TriggerEvent,
    RecordKind,
    OccupationalDocumentType,
    DocumentCategory,
    CertificationCategory
)


def _strip_required(v: str, label: str) -> str:
    if not v.strip():
        raise ValueError(f'{label} cannot be empty')
    return v.strip()


class Sector(BaseEntity):
    """Organizational sector that owns job functions."""

    name: str = Field(..., min_length=1, max_length=100, description="Sector name")
    description: Optional[str] = Field(None, max_length=500, description="Sector description")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate sector name."""
        return _strip_required(v, 'Sector name')


class Provider(BaseEntity):
    """Occupational clinic that performs medical exams."""

    name: str = Field(..., min_length=1, max_length=200, description="Clinic name")
    address: Optional[str] = Field(None, description="Street address")
    phone: Optional[str] = Field(None, description="Phone number")
    email: Optional[str] = Field(None, description="Contact email")
    contact: Optional[str] = Field(None, description="Contact person")
    notes: Optional[str] = Field(None, max_length=1000, description="Free-text observations")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate clinic name."""
        return _strip_required(v, 'Provider name')


class Exam(BaseEntity):
    """Medical exam definition tagged with the events that trigger it."""

    name: str = Field(..., min_length=1, max_length=200, description="Exam name")
    trigger_events: List[TriggerEvent] = Field(default_factory=list, description="Applicable trigger-events")
    renewal_interval_months: Optional[int] = Field(None, description="Renewal interval in months")
    expires: Optional[bool] = Field(
        None,
        description="Explicit expiry policy; unset means 'expires when periodic'"
    )
    description: Optional[str] = Field(None, max_length=1000, description="Exam description")
    preparation_instructions: Optional[str] = Field(None, description="Preparation instructions (fasting, etc.)")
    prices: Dict[str, Decimal] = Field(default_factory=dict, description="Price per provider ID")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate exam name."""
        return _strip_required(v, 'Exam name')

    @field_validator('trigger_events')
    @classmethod
    def deduplicate_trigger_events(cls, v):
        """Keep the first occurrence of each trigger-event."""
        unique = []
        for event in v:
            if event not in unique:
                unique.append(event)
        return unique

    def applies_to(self, event: TriggerEvent) -> bool:
        """Check if the exam may be bound to or performed for an event."""
        return TriggerEvent(event) in self.trigger_events

    def is_periodic(self) -> bool:
        return TriggerEvent.PERIODIC in self.trigger_events

    def expires_on_schedule(self) -> bool:
        """Resolve the expiry policy of this exam."""
        if self.expires is not None:
            return self.expires
        return self.is_periodic()

    def price_for(self, provider_id: str) -> Optional[Decimal]:
        return self.prices.get(provider_id)


class EquipmentItem(BaseEntity):
    """Personal protective equipment (EPI) item."""

    name: str = Field(..., min_length=1, max_length=200, description="Equipment name")
    certification_number: str = Field(..., description="Certificate of approval (CA) number")
    shelf_life_months: Optional[int] = Field(None, description="Validity after issuance, in months")
    mandatory: bool = Field(default=False, description="Whether issuance is mandatory")
    description: Optional[str] = Field(None, max_length=1000, description="Equipment description")
    instructions: Optional[str] = Field(None, description="Usage instructions")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate equipment name."""
        return _strip_required(v, 'Equipment name')

    @field_validator('certification_number')
    @classmethod
    def validate_certification_number(cls, v):
        """Validate CA number."""
        return _strip_required(v, 'Certification number')


class UniformItem(BaseEntity):
    """Uniform piece handed to employees; not time-bounded."""

    description: str = Field(..., min_length=1, max_length=200, description="Uniform description")
    category: str = Field(..., min_length=1, max_length=50, description="Category tag (shirt, trousers, boots)")

    @field_validator('description')
    @classmethod
    def validate_description(cls, v):
        """Validate uniform description."""
        return _strip_required(v, 'Uniform description')

    @field_validator('category')
    @classmethod
    def normalize_category(cls, v):
        """Normalize category tags to lowercase."""
        return _strip_required(v, 'Uniform category').lower()


class JobFunction(BaseEntity):
    """Job function and the requirements bound to whoever holds it."""

    name: str = Field(..., min_length=1, max_length=200, description="Function name")
    description: Optional[str] = Field(None, max_length=1000, description="Function description")
    sector_id: str = Field(..., description="Owning sector ID")
    duties: List[str] = Field(default_factory=list, description="Ordered duty statements")
    equipment_ids: List[str] = Field(default_factory=list, description="Required equipment IDs")
    uniform_ids: List[str] = Field(default_factory=list, description="Required uniform IDs")
    exams_by_trigger: Dict[TriggerEvent, List[str]] = Field(
        default_factory=dict,
        description="Required exam IDs per trigger-event"
    )

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate function name."""
        return _strip_required(v, 'Function name')

    @field_validator('duties')
    @classmethod
    def clean_duties(cls, v):
        """Drop blank duty statements, keeping order."""
        return [duty.strip() for duty in v if duty and duty.strip()]

    def exam_ids_for(self, event: TriggerEvent) -> List[str]:
        return list(self.exams_by_trigger.get(TriggerEvent(event), []))

    def distinct_exam_ids(self) -> List[str]:
        """Exam IDs across all trigger-event buckets, first occurrence wins."""
        seen: List[str] = []
        for event in TriggerEvent:
            for exam_id in self.exams_by_trigger.get(event, []):
                if exam_id not in seen:
                    seen.append(exam_id)
        return seen


class Address(BaseModel):
    """Postal address of an employee."""

    street: str = Field(..., description="Street name")
    number: str = Field(..., description="Street number")
    complement: Optional[str] = Field(None, description="Complement")
    district: str = Field(..., description="District (bairro)")
    city: str = Field(..., description="City")
    state: str = Field(..., min_length=2, max_length=2, description="State abbreviation (UF)")
    zip_code: str = Field(..., description="Postal code (CEP)")

    def format(self) -> str:
        """Single-line address as printed on generated documents."""
        complement = f", {self.complement}" if self.complement else ""
        return (
            f"{self.street}, {self.number}{complement} - {self.district}, "
            f"{self.city}/{self.state}, CEP: {self.zip_code}"
        )


class Employee(BaseEntity):
    """Employee whose compliance ledger is tracked."""

    name: str = Field(..., min_length=1, max_length=200, description="Full name")
    cpf: Optional[str] = Field(None, description="CPF number")
    rg: Optional[str] = Field(None, description="RG number")
    admission_date: Optional[date] = Field(None, description="Admission date")
    position: Optional[str] = Field(None, description="Position title (cargo)")
    salary: Optional[Decimal] = Field(None, ge=0, description="Monthly salary")
    address: Optional[Address] = Field(None, description="Postal address")
    function_id: Optional[str] = Field(None, description="Current job function ID")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate employee name."""
        return _strip_required(v, 'Employee name')


class ComplianceRecord(BaseEntity):
    """Dated, expirable fact about an employee; status is always derived."""

    kind: RecordKind = Field(..., description="Kind of ledger entry")
    employee_id: str = Field(..., description="Owning employee ID")
    catalog_id: str = Field(..., description="Exam, equipment item, document template or certification key")
    trigger_event: Optional[TriggerEvent] = Field(None, description="Trigger-event (exams only)")
    performed_on: date = Field(..., description="Performed, issued or generated date")
    expires_on: Optional[date] = Field(None, description="Computed expiry; None never expires")
    provider_id: Optional[str] = Field(None, description="Provider ID (exams only)")
    result: Optional[str] = Field(None, description="Exam result")
    observations: Optional[str] = Field(None, description="Free-text observations")
    file_ref: Optional[str] = Field(None, description="Opaque attached file reference")
    title: Optional[str] = Field(None, max_length=200, description="Certification name (certifications only)")
    issuer: Optional[str] = Field(None, max_length=200, description="Certifying body")
    certificate_number: Optional[str] = Field(None, max_length=100, description="Certificate number")
    certification_category: Optional[CertificationCategory] = Field(None, description="Certification area")


class DocumentTemplate(BaseEntity):
    """Employee document template with {TOKEN} placeholders."""

    title: str = Field(..., min_length=1, max_length=200, description="Template title")
    description: Optional[str] = Field(None, max_length=1000, description="Template description")
    category: DocumentCategory = Field(default=DocumentCategory.OTHER, description="Template category")
    content: str = Field(..., description="Template body")
    validity_months: Optional[int] = Field(None, gt=0, description="Validity of generated documents")

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        """Validate template title."""
        return _strip_required(v, 'Template title')


class OccupationalDocument(BaseEntity):
    """Company-level programme document such as PCMSO or PGR."""

    doc_type: OccupationalDocumentType = Field(..., description="Programme document type")
    title: str = Field(..., min_length=1, max_length=200, description="Document title")
    description: Optional[str] = Field(None, max_length=1000, description="Document description")
    issued_on: date = Field(..., description="Issue date")
    valid_until: date = Field(..., description="Expiry date")
    file_ref: Optional[str] = Field(None, description="Opaque attached file reference")
    observations: Optional[str] = Field(None, description="Free-text observations")

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        """Validate document title."""
        return _strip_required(v, 'Document title')
