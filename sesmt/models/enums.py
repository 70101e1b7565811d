# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Enumeration types for the SESMT compliance engine.
"""

from enum import Enum


class TriggerEvent(str, Enum):
    """Workplace event that mandates a medical exam."""
    HIRING = "hiring"
    PERIODIC = "periodic"
    FUNCTION_CHANGE = "function_change"
    RETURN_TO_WORK = "return_to_work"
    TERMINATION = "termination"


class ComplianceStatus(str, Enum):
    """Lifecycle status of a time-bounded compliance artifact."""
    NEVER_EXPIRES = "NeverExpires"
    EXPIRED = "Expired"
    EXPIRING_SOON = "ExpiringSoon"
    VALID = "Valid"


class RecordKind(str, Enum):
    """Kind of fact held in an employee's compliance ledger."""
    EXAM = "exam"
    EQUIPMENT = "equipment"
    DOCUMENT = "document"
    CERTIFICATION = "certification"


class CertificationCategory(str, Enum):
    """Area a professional certification belongs to."""
    TECHNICAL = "technical"
    SAFETY = "safety"
    QUALITY = "quality"
    MANAGEMENT = "management"
    LANGUAGE = "language"
    OTHER = "other"


class UrgencyBucket(str, Enum):
    """Why a requirement shows up as pending for an employee."""
    MISSING = "missing"
    EXPIRED = "expired"
    EXPIRING_SOON = "expiring_soon"


class OccupationalDocumentType(str, Enum):
    """Company-level occupational health and safety programme documents."""
    PCMSO = "PCMSO"
    PGR = "PGR"
    LTCAT = "LTCAT"
    PPP = "PPP"
    AET = "AET"
    OTHER = "OTHER"


class DocumentCategory(str, Enum):
    """Categories of employee document templates."""
    ADMISSION = "Admissional"
    DECLARATIONS = "Declarações"
    HOUSING = "Alojamento"
    LIFE_INSURANCE = "Seguro de Vida"
    BENEFITS = "Benefícios"
    OTHER = "Outros"
