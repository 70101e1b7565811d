# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Models package - Pydantic schemas and data models for the SESMT compliance engine.
"""

# Base models
from .base import BaseEntity, generate_object_id, utc_now

# Enumerations
from .enums import (
    TriggerEvent,
    ComplianceStatus,
    RecordKind,
    UrgencyBucket,
    OccupationalDocumentType,
    DocumentCategory,
    CertificationCategory
)

# Core entities
from .entities import (
    Sector,
    Provider,
    Exam,
    EquipmentItem,
    UniformItem,
    JobFunction,
    Address,
    Employee,
    ComplianceRecord,
    DocumentTemplate,
    OccupationalDocument
)

# Read models
from .responses import (
    TrackedRecord,
    RequirementsSummary,
    PendingRequirement,
    ExamCostEstimate,
    OccupationalDocumentStatus
)

__all__ = [
    # Base models
    "BaseEntity",
    "generate_object_id",
    "utc_now",

    # Enumerations
    "TriggerEvent",
    "ComplianceStatus",
    "RecordKind",
    "UrgencyBucket",
    "OccupationalDocumentType",
    "DocumentCategory",
    "CertificationCategory",

    # Core entities
    "Sector",
    "Provider",
    "Exam",
    "EquipmentItem",
    "UniformItem",
    "JobFunction",
    "Address",
    "Employee",
    "ComplianceRecord",
    "DocumentTemplate",
    "OccupationalDocument",

    # Read models
    "TrackedRecord",
    "RequirementsSummary",
    "PendingRequirement",
    "ExamCostEstimate",
    "OccupationalDocumentStatus"
]
