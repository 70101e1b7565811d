# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Read models returned by the compliance services.

These carry derived data (statuses, dereferenced catalog objects) and are
never persisted.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Dict, Union
from pydantic import BaseModel, Field

from .entities import (
    ComplianceRecord,
    EquipmentItem,
    Exam,
    JobFunction,
    OccupationalDocument,
    Sector,
    UniformItem
)
from .enums import ComplianceStatus, RecordKind, TriggerEvent, UrgencyBucket


class TrackedRecord(ComplianceRecord):
    """Compliance record with its status computed at read time."""

    status: ComplianceStatus = Field(..., description="Derived lifecycle status")
    days_until_expiry: Optional[int] = Field(None, description="Days left; negative once expired")


class RequirementsSummary(BaseModel):
    """Everything a function requires, with catalog objects dereferenced."""

    function: JobFunction
    sector: Optional[Sector] = None
    equipment: List[EquipmentItem] = Field(default_factory=list)
    uniforms: List[UniformItem] = Field(default_factory=list)
    exams_by_trigger: Dict[TriggerEvent, List[Exam]] = Field(default_factory=dict)

    def exams_for(self, event: TriggerEvent) -> List[Exam]:
        return self.exams_by_trigger.get(TriggerEvent(event), [])

    def mandatory_equipment(self) -> List[EquipmentItem]:
        return [item for item in self.equipment if item.mandatory]


class PendingRequirement(BaseModel):
    """A required exam or equipment item the employee does not currently hold."""

    kind: RecordKind
    item: Union[Exam, EquipmentItem]
    urgency: UrgencyBucket
    trigger_events: List[TriggerEvent] = Field(
        default_factory=list,
        description="Buckets requiring the exam (empty for equipment)"
    )
    latest_record: Optional[ComplianceRecord] = None
    expires_on: Optional[date] = None
    days_until_expiry: Optional[int] = None

    @property
    def catalog_id(self) -> str:
        return self.item.id


class ExamCostEstimate(BaseModel):
    """Cost of a trigger-event bucket at a given provider."""

    function_id: str
    trigger_event: TriggerEvent
    provider_id: str
    total: Decimal = Decimal("0")
    priced: Dict[str, Decimal] = Field(default_factory=dict, description="Exam ID to price")
    unpriced_exam_ids: List[str] = Field(default_factory=list)


class OccupationalDocumentStatus(BaseModel):
    """Programme document with its derived status."""

    document: OccupationalDocument
    status: ComplianceStatus
    days_until_expiry: Optional[int] = None
